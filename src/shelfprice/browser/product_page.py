"""Interaction helper for a single storefront product page."""

from __future__ import annotations

import logging
from pathlib import Path

from playwright.sync_api import Page

from shelfprice.browser.navigation import goto
from shelfprice.extraction import build_snapshot
from shelfprice.models.product import ProductSnapshot
from shelfprice.settings.config import SelectorSettings

logger = logging.getLogger(__name__)

# Index of the first element under selector whose text contains the region, or -1.
_FIND_REGION_JS = """([selector, region]) => {
    const items = Array.from(document.querySelectorAll(selector));
    return items.findIndex((item) => (item.textContent || '').includes(region));
}"""

_READ_FIELDS_JS = """(selectors) => {
    const raw = {};
    for (const [key, selector] of Object.entries(selectors)) {
        const el = document.querySelector(selector);
        raw[key] = el ? el.textContent.trim() : null;
    }
    return raw;
}"""


class ProductPage:
    """Drive region selection, screenshot and field extraction on *page*.

    Args:
        page: An open Playwright page.
        region: Substring matched against the region picker entries.
        selectors: CSS selectors for the region picker and product card.
        timeout_ms: Timeout for navigations triggered by this helper.
    """

    def __init__(
        self,
        page: Page,
        region: str,
        selectors: SelectorSettings | None = None,
        timeout_ms: int = 30_000,
    ) -> None:
        self.page = page
        self.region = region
        self.selectors = selectors or SelectorSettings()
        self.timeout_ms = timeout_ms

    def navigate_to(self, url: str) -> None:
        goto(self.page, url, timeout_ms=self.timeout_ms, wait_until="networkidle")

    def select_region(self) -> bool:
        """Open the region picker and click the entry matching ``self.region``.

        Returns ``True`` when a matching entry was clicked. When no entry
        matches, the page is left as-is and ``False`` is returned.
        """
        page = self.page
        sel = self.selectors

        page.wait_for_load_state("domcontentloaded")
        page.wait_for_selector(sel.region_icon)
        page.click(sel.region_icon)
        page.wait_for_selector(sel.region_item, state="attached")

        index = page.evaluate(_FIND_REGION_JS, [sel.region_item, self.region])
        if index is None or index < 0:
            logger.warning("Region %r not found in region list; keeping current region", self.region)
            return False

        logger.info("Selecting region %r (item #%d)", self.region, index)
        with page.expect_navigation(wait_until="domcontentloaded", timeout=self.timeout_ms):
            page.locator(sel.region_item).nth(index).click()
        return True

    def make_screenshot(self, path: str | Path = "screenshot.jpg") -> Path:
        """Save a viewport screenshot to *path*; format follows the extension."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        self.page.wait_for_load_state("domcontentloaded")
        self.page.screenshot(path=str(target))
        logger.info("Screenshot saved to %s", target)
        return target

    def read_raw_fields(self) -> dict[str, str | None]:
        """Return the trimmed text of each product-card selector, or ``None``."""
        raw = self.page.evaluate(_READ_FIELDS_JS, self.selectors.product_fields())
        return raw or {}

    def get_product_snapshot(self) -> ProductSnapshot:
        snapshot = build_snapshot(self.read_raw_fields())
        logger.debug("Extracted %s", snapshot.to_dict())
        return snapshot
