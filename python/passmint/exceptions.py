"""
Custom exceptions for Passmint.
"""


class PassmintException(Exception):
    """Base exception for Passmint."""

    pass


class ConfigurationError(PassmintException, ValueError):
    """No usable character categories for generation."""

    pass


class RangeError(PassmintException, ValueError):
    """Length or count outside the allowed bounds."""

    pass


class InvalidRequestError(PassmintException):
    """Malformed or incomplete API request."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code
