"""
Text utilities for feed codes and free-form merchant strings.

Feed language/market/currency arrive as free-form text from the feed
configuration. They are case-normalized here, never validated.
"""

from typing import Any, Optional


def clean_text(value: Any) -> Optional[str]:
    """
    Clean a merchant-supplied value for output.

    - Converts non-strings with str()
    - Strips whitespace
    - Returns None for None and empty/whitespace-only strings

    Args:
        value: Raw value from product, variant or field mapping

    Returns:
        Cleaned string or None
    """
    if value is None:
        return None

    text = value if isinstance(value, str) else str(value)
    text = text.strip()

    if not text:
        return None

    return text


def normalize_language_code(language: Optional[str]) -> str:
    """
    Normalize feed language to contentLanguage form.

    "EN" → "en", " De " → "de"
    """
    return (language or "").strip().lower()


def normalize_market_code(market: Optional[str]) -> str:
    """
    Normalize feed market to feedLabel form.

    "us" → "US", " gb " → "GB"
    """
    return (market or "").strip().upper()


def normalize_currency_code(currency: Optional[str]) -> str:
    """
    Normalize feed currency to currencyCode form.

    "usd" → "USD"
    """
    return (currency or "").strip().upper()


def strip_url_scheme(domain: Optional[str]) -> Optional[str]:
    """
    Reduce a shop domain to host form so a scheme can be prepended once.

    - "https://shop.com/" → "shop.com"
    - "shop.com" → "shop.com"
    - None / "" → None
    """
    domain = clean_text(domain)
    if domain is None:
        return None

    for prefix in ("https://", "http://", "//"):
        if domain.lower().startswith(prefix):
            domain = domain[len(prefix):]
            break

    domain = domain.rstrip("/")
    return domain or None
