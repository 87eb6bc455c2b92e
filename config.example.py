# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file,
when python-dotenv is installed). See src/tasktrack/config.py.

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKTRACK_APP_NAME": "App display name (default: tasktrack).",
    "TASKTRACK_LOG_LEVEL": "Console logging level name, e.g. DEBUG/INFO (default: INFO).",
    "TASKTRACK_LOG_DIR": "Directory for tasktrack.log (default: .local/tasktrack).",
    "TASKTRACK_LOG_TO_FILE": "Also write full DEBUG logs to <log_dir>/tasktrack.log (true/false).",
    # Payload validation
    "TASKTRACK_TITLE_MAX_LENGTH": "Max title length accepted by TaskValidator (default: 100).",
    "TASKTRACK_DESCRIPTION_MAX_LENGTH": "Max description length accepted by TaskValidator (default: 500).",
}
