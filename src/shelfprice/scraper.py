"""End-to-end product scrape: open page, pick region, screenshot, extract, save."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from playwright.sync_api import sync_playwright

from shelfprice.browser.factory import build_browser_profile, launch_browser, new_page
from shelfprice.browser.product_page import ProductPage
from shelfprice.models.product import ProductSnapshot
from shelfprice.output.writer import save_snapshot
from shelfprice.settings.config import Settings

logger = logging.getLogger(__name__)


@dataclass
class ScrapeResult:
    """Outcome of one ``ProductScraper.run()``."""

    url: str = ""
    region: str = ""
    success: bool = False
    region_selected: bool = False
    snapshot: ProductSnapshot | None = None
    screenshot_path: str = ""
    product_path: str = ""
    error: str = ""


class ProductScraper:
    """Scrape one product page for one region.

    Args:
        url: Product page URL.
        region: Substring of the region name to select.
        settings: Resolved settings; defaults to ``get_settings()``.
    """

    def __init__(self, url: str, region: str, settings: Settings | None = None) -> None:
        if settings is None:
            from shelfprice.settings import get_settings

            settings = get_settings()
        self.url = url
        self.region = region
        self.settings = settings

    def run(self) -> ScrapeResult:
        """Run the scrape. Never raises; failures land in ``ScrapeResult.error``.

        The browser is closed whether or not the run succeeds.
        """
        settings = self.settings
        result = ScrapeResult(url=self.url, region=self.region)
        profile = build_browser_profile(settings.browser)

        pw = None
        browser = None
        try:
            pw = sync_playwright().start()
            browser = launch_browser(pw, profile)
            page = new_page(browser, profile)

            product_page = ProductPage(
                page,
                self.region,
                selectors=settings.selectors,
                timeout_ms=settings.browser.timeout_ms,
            )

            logger.info("Opening %s", self.url)
            product_page.navigate_to(self.url)
            result.region_selected = product_page.select_region()
            result.screenshot_path = str(product_page.make_screenshot(Path(settings.output.screenshot_path)))

            snapshot = product_page.get_product_snapshot()
            result.product_path = str(save_snapshot(snapshot, Path(settings.output.product_path)))
            result.snapshot = snapshot
            result.success = True
        except Exception as e:
            logger.exception("Error during scraping of %s", self.url)
            result.error = str(e) or type(e).__name__
        finally:
            _shutdown(browser, pw)

        return result


def _shutdown(browser, pw) -> None:
    """Close the browser, then stop the Playwright driver."""
    if browser is not None:
        try:
            browser.close()
        except Exception as e:
            logger.warning("Failed to close browser: %s", e)
    if pw is not None:
        try:
            pw.stop()
        except Exception as e:
            logger.warning("Failed to stop Playwright: %s", e)
