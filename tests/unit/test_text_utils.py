"""
Unit tests for text utilities.

Run: pytest tests/unit/test_text_utils.py -v
"""

import pytest

from utils.text_utils import (
    clean_text,
    normalize_currency_code,
    normalize_language_code,
    normalize_market_code,
    strip_url_scheme,
)


class TestCleanText:
    """Tests for clean_text()"""

    def test_strips(self):
        assert clean_text("  Acme ") == "Acme"

    def test_blank_is_none(self):
        assert clean_text("   ") is None
        assert clean_text(None) is None

    def test_non_string(self):
        assert clean_text(1604) == "1604"


class TestNormalizeCodes:
    """Tests for feed code normalization."""

    def test_language_lowercase(self):
        assert normalize_language_code(" EN ") == "en"

    def test_market_uppercase(self):
        assert normalize_market_code("gb") == "GB"

    def test_currency_uppercase(self):
        assert normalize_currency_code("eur") == "EUR"

    def test_none_is_empty(self):
        assert normalize_language_code(None) == ""
        assert normalize_market_code(None) == ""
        assert normalize_currency_code(None) == ""


class TestStripUrlScheme:
    """Tests for strip_url_scheme()"""

    @pytest.mark.parametrize("domain,expected", [
        ("shop.com", "shop.com"),
        ("https://shop.com/", "shop.com"),
        ("HTTP://shop.com", "shop.com"),
        ("//shop.com", "shop.com"),
        ("  shop.com  ", "shop.com"),
    ])
    def test_reduces_to_host(self, domain, expected):
        assert strip_url_scheme(domain) == expected

    @pytest.mark.parametrize("domain", [None, "", "https://", "/"])
    def test_empty_is_none(self, domain):
        assert strip_url_scheme(domain) is None
