"""
Unit tests for link decoration and click-id tokens.

Run: pytest tests/unit/test_tracking_utils.py -v
"""

import base64
from datetime import datetime, timedelta, timezone

import pytest

from exceptions import InvalidTrackingTokenError
from utils.tracking_utils import (
    append_query_params,
    decode_tracking_token,
    encode_tracking_token,
    format_timestamp,
)


class TestFormatTimestamp:
    """Tests for format_timestamp()"""

    def test_milliseconds_and_z(self):
        moment = datetime(2024, 5, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)
        assert format_timestamp(moment) == "2024-05-01T12:00:00.123Z"

    def test_converts_to_utc(self):
        moment = datetime(2024, 5, 1, 14, 30, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(moment) == "2024-05-01T12:30:00.000Z"

    def test_naive_is_utc(self):
        assert format_timestamp(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05.000Z"


class TestTrackingToken:
    """Tests for encode_tracking_token() / decode_tracking_token()"""

    def test_token_is_url_safe(self, frozen_now):
        """Should need no escaping in a query string."""
        token = encode_tracking_token("feed-1", "shop-1", frozen_now)

        assert "=" not in token
        assert "+" not in token
        assert "/" not in token

    def test_decode_returns_identity(self, frozen_now):
        """Should decode to feed id, shop id and export time."""
        token = encode_tracking_token("feed-1", "shop-1", frozen_now)

        assert decode_tracking_token(token) == {
            "feedId": "feed-1",
            "shopId": "shop-1",
            "createdAt": "2024-05-01T12:00:00.000Z",
        }

    @pytest.mark.parametrize("token", [
        "",
        "!!!",
        "bm90IGpzb24",  # "not json"
        base64.urlsafe_b64encode(b"[1, 2]").decode("ascii"),
        "é",
    ])
    def test_invalid_token_raises(self, token):
        with pytest.raises(InvalidTrackingTokenError) as exc_info:
            decode_tracking_token(token)

        assert exc_info.value.code == "INVALID_TRACKING_TOKEN"


class TestAppendQueryParams:
    """Tests for append_query_params()"""

    def test_first_param_uses_question_mark(self):
        assert append_query_params("https://shop.com/p", [("a", "1"), ("b", "2")]) == "https://shop.com/p?a=1&b=2"

    def test_existing_query_uses_ampersand(self):
        assert append_query_params("https://shop.com/p?variant=1", [("a", "1")]) == "https://shop.com/p?variant=1&a=1"

    def test_empty_values_skipped(self):
        result = append_query_params("https://shop.com/p", [("a", None), ("b", ""), ("c", "3")])
        assert result == "https://shop.com/p?c=3"

    def test_nothing_to_add(self):
        assert append_query_params("https://shop.com/p", [("a", None)]) == "https://shop.com/p"

    def test_values_encoded(self):
        result = append_query_params("https://shop.com/p", [("utm_campaign", "a b&c=d/e")])
        assert result == "https://shop.com/p?utm_campaign=a%20b%26c%3Dd%2Fe"
