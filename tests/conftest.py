"""
Shared test fixtures.

Tests build plain dicts with tests/factories.py and feed them through
the transformer exactly as a caller would.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import pytest
from datetime import datetime, timezone
from typing import Generator

from config.settings import get_settings
from tests.factories import TransformInputFactory


# ===================
# SETTINGS
# ===================

@pytest.fixture(autouse=True)
def fresh_settings() -> Generator:
    """
    Reload settings around every test.

    Usage:
        def test_something(monkeypatch):
            monkeypatch.setenv("LINK_SCHEME", "http")
            # get_settings() now sees the new value
    """
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ===================
# FIXTURES
# ===================

@pytest.fixture
def frozen_now() -> datetime:
    """Fixed export time for click-id tokens."""
    return datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def transform_input() -> dict:
    """
    A complete transform input with stable ids.

    shop-1 / feed-1 / prod-1 / var-1, en-US feed in USD.
    """
    return TransformInputFactory.create(
        shop_id="shop-1",
        feed_id="feed-1",
        product_id="prod-1",
        variant_id="var-1",
    )


@pytest.fixture
def transform_inputs() -> list:
    """Three inputs from the same feed."""
    return TransformInputFactory.create_batch(3, shop_id="shop-1", feed_id="feed-1")
