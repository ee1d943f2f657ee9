"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    ValidationError,

    # Transform
    InvalidTransformInputError,
    MissingRequiredFieldError,

    # Tracking
    InvalidTrackingTokenError,
)

__all__ = [
    # Base
    "AppError",
    "ValidationError",

    # Transform
    "InvalidTransformInputError",
    "MissingRequiredFieldError",

    # Tracking
    "InvalidTrackingTokenError",
]
