"""Custom exceptions for overall"""

from typing import Optional


class OverallError(Exception):
    """Base exception for all overall errors."""
    pass


class InvalidInputError(OverallError):
    """Exception raised when repository signals cannot be constructed."""

    def __init__(self, field: str, message: Optional[str] = None, record: Optional[str] = None):
        self.field = field
        self.message = message
        self.record = record

        error_msg = f"Invalid value for '{field}'"
        if record:
            error_msg += f" in '{record}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class ConfigurationError(OverallError):
    """Exception raised for invalid scoring configuration."""

    def __init__(self, key: str, message: Optional[str] = None):
        self.key = key
        self.message = message

        error_msg = f"Configuration error for '{key}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class LocalGitError(OverallError):
    """Exception raised when a local clone cannot be inspected."""

    def __init__(self, operation: str, path: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.path = path
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if path:
            error_msg += f" for '{path}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)
