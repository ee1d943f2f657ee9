"""
Outbound link decoration.

Every product link carries UTM parameters plus a click-id token that
identifies the feed and shop the click came from. The token is
URL-safe base64 of a compact JSON document. It is a tracking hint,
not a credential: anyone can decode it.
"""

import base64
import binascii
import json
from datetime import datetime, timezone
from typing import Iterable, Optional
from urllib.parse import quote

from exceptions import InvalidTrackingTokenError


def format_timestamp(moment: datetime) -> str:
    """
    ISO-8601 UTC with millisecond precision and a Z suffix.

    Naive datetimes are taken as UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def encode_tracking_token(feed_id: str, shop_id: str, created_at: datetime) -> str:
    """
    Encode feed/shop identity and a timestamp into a click-id token.

    Args:
        feed_id: Feed the link was exported with
        shop_id: Shop that owns the feed
        created_at: Export time

    Returns:
        URL-safe base64 text without padding
    """
    document = {
        "feedId": feed_id,
        "shopId": shop_id,
        "createdAt": format_timestamp(created_at),
    }
    raw = json.dumps(document, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def decode_tracking_token(token: str) -> dict:
    """
    Decode a click-id token back into {feedId, shopId, createdAt}.

    Raises:
        InvalidTrackingTokenError: If the token is not base64 JSON
    """
    if not token:
        raise InvalidTrackingTokenError(token or "", "empty token")

    padded = token + "=" * (-len(token) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded.encode("ascii"))
        document = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeError, ValueError) as e:
        raise InvalidTrackingTokenError(token, str(e)) from e

    if not isinstance(document, dict):
        raise InvalidTrackingTokenError(token, "token payload is not an object")

    return document


def append_query_params(link: str, params: Iterable[tuple[str, Optional[str]]]) -> str:
    """
    Append query parameters to a link.

    The first parameter is joined with "?" when the link has no query
    yet, otherwise with "&"; the rest always use "&". Parameters with
    empty values are skipped. Values are percent-encoded.

    Examples:
        ("shop.com/p", [("a", "1")]) → "shop.com/p?a=1"
        ("shop.com/p?variant=1", [("a", "1"), ("b", "2")]) → "shop.com/p?variant=1&a=1&b=2"
    """
    pairs = [
        f"{name}={quote(str(value), safe='')}"
        for name, value in params
        if value
    ]
    if not pairs:
        return link

    separator = "&" if "?" in link else "?"
    return link + separator + "&".join(pairs)
