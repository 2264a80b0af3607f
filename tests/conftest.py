"""shelfprice test configuration — shared fixtures for unit and integration tests."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    """Clear the settings LRU cache between tests."""
    from shelfprice.settings.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def settings(tmp_path: Path, monkeypatch):
    """Settings with output artifacts redirected into ``tmp_path``."""
    monkeypatch.delenv("SHELFPRICE_ENV", raising=False)
    from shelfprice.settings.config import Settings

    s = Settings()
    s.output.screenshot_path = str(tmp_path / "screenshot.jpg")
    s.output.product_path = str(tmp_path / "product.txt")
    return s


# ---------------------------------------------------------------------------
# Mock Playwright page
# ---------------------------------------------------------------------------


RAW_FIELDS = {
    "price_regular": "1 299,90 ₽",
    "price_discount": None,
    "price_old": "1 499,00 ₽",
    "rating": "4.8",
    "reviews": "152 отзыва",
}


@pytest.fixture()
def mock_page():
    """Return a ``MagicMock`` page whose ``evaluate`` mimics the storefront scripts.

    The region lookup finds item #1; the field read returns ``RAW_FIELDS``.
    Override ``page.region_index`` / ``page.raw_fields`` to change that.
    """
    page = MagicMock(name="page")
    page.region_index = 1
    page.raw_fields = dict(RAW_FIELDS)

    def _evaluate(script, arg=None):
        if "findIndex" in script:
            return page.region_index
        return page.raw_fields

    page.evaluate.side_effect = _evaluate
    return page


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests that require a real browser or other I/O")
