"""
Unit tests for application errors.

Run: pytest tests/unit/test_errors.py -v
"""

from exceptions import (
    AppError,
    InvalidTrackingTokenError,
    InvalidTransformInputError,
    MissingRequiredFieldError,
    ValidationError,
)


class TestErrorHierarchy:
    """Tests for error codes and response format."""

    def test_missing_field_is_invalid_input(self):
        """Should be catchable as InvalidTransformInputError."""
        error = MissingRequiredFieldError("feed.currency")

        assert isinstance(error, InvalidTransformInputError)
        assert isinstance(error, ValidationError)
        assert isinstance(error, AppError)
        assert error.field == "feed.currency"

    def test_to_dict(self):
        """Should render the API error envelope."""
        error = MissingRequiredFieldError("feed.market")

        body = error.to_dict()["error"]

        assert body["code"] == "MISSING_REQUIRED_FIELD"
        assert body["message"] == "Required field is missing: feed.market"
        assert body["details"] == {"field": "feed.market"}
        assert body["timestamp"]

    def test_invalid_input_defaults(self):
        error = InvalidTransformInputError("bad shape")

        assert error.code == "INVALID_TRANSFORM_INPUT"
        assert error.status_code == 422
        assert error.details == {}

    def test_tracking_token_error(self):
        error = InvalidTrackingTokenError("abc", "not base64")

        assert error.code == "INVALID_TRACKING_TOKEN"
        assert error.details == {"token": "abc"}
        assert "not base64" in str(error)
