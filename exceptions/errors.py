"""
Custom exception classes for the application.

Missing optional data never raises: the transformer falls back to
defaults or omits the field. These errors cover precondition
violations only.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "MISSING_REQUIRED_FIELD")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


# ===================
# TRANSFORM ERRORS
# ===================

class InvalidTransformInputError(ValidationError):
    """Transform input does not satisfy the shape the transformer relies on."""

    def __init__(
        self,
        message: str,
        code: str = "INVALID_TRANSFORM_INPUT",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            details=details
        )


class MissingRequiredFieldError(InvalidTransformInputError):
    """A field that has no default (e.g. feed.currency) is absent."""

    def __init__(self, field: str):
        super().__init__(
            code="MISSING_REQUIRED_FIELD",
            message=f"Required field is missing: {field}",
            details={"field": field}
        )
        self.field = field


# ===================
# TRACKING ERRORS
# ===================

class InvalidTrackingTokenError(ValidationError):
    """Click-id token could not be decoded."""

    def __init__(self, token: str, reason: str):
        super().__init__(
            code="INVALID_TRACKING_TOKEN",
            message=f"Invalid tracking token: {reason}",
            details={"token": token}
        )
