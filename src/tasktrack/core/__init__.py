"""
Core building blocks shared by the task subsystem.

Components:
- errors.py: TaskError / ValidationError
- ports.py: Clock protocol and its system/fixed implementations
"""
