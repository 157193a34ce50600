"""
Custom exceptions for the Simple Explain application.
"""

from typing import Any, Dict, Optional


class SimpleExplainException(Exception):
    """Base exception class for all Simple Explain application errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__
        super().__init__(message)


class ValidationError(SimpleExplainException):
    """Raised when request input is missing or blank."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message, status_code=400, details=details, error_code="VALIDATION_ERROR"
        )


class ConfigurationError(SimpleExplainException):
    """Raised when a required setting, such as the upstream credential, is missing."""

    def __init__(
        self, message: str = "Service is not configured", setting: Optional[str] = None
    ):
        details = {"setting": setting} if setting else {}
        super().__init__(
            message,
            status_code=500,
            details=details,
            error_code="CONFIGURATION_ERROR",
        )


class GenerationError(SimpleExplainException):
    """Raised when the language model call fails or its output is rejected.

    The message is the localized, user-facing error text. Upstream failures and
    shape rejections share it.
    """

    def __init__(self, message: str, reason: Optional[str] = None):
        details = {"reason": reason} if reason else {}
        super().__init__(
            message, status_code=500, details=details, error_code="GENERATION_ERROR"
        )


class GenerationRequestError(Exception):
    """Raised by the HTTP client when ``/api/generate`` cannot be used.

    Covers network failures and non-success HTTP statuses.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
