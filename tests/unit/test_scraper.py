"""Unit tests for the ProductScraper orchestrator with Playwright mocked out."""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from playwright.sync_api import Error as PlaywrightError

from shelfprice.scraper import ProductScraper


@pytest.fixture()
def playwright_stack(mock_page):
    """Patch ``sync_playwright`` so the whole stack resolves to ``mock_page``."""
    with patch("shelfprice.scraper.sync_playwright") as sync_pw:
        pw = sync_pw.return_value.start.return_value
        browser = pw.chromium.launch.return_value
        browser.new_context.return_value.new_page.return_value = mock_page
        yield pw, browser


class TestProductScraperRun:
    def test_successful_run(self, settings, playwright_stack, mock_page):
        pw, browser = playwright_stack

        result = ProductScraper("https://shop.example/p/1", "Санкт", settings=settings).run()

        assert result.success is True
        assert result.error == ""
        assert result.region_selected is True
        assert result.snapshot.price == "1299,90"
        assert result.screenshot_path == settings.output.screenshot_path
        mock_page.screenshot.assert_called_once_with(path=settings.output.screenshot_path)

        content = Path(result.product_path).read_text(encoding="utf-8")
        assert content == "price=1299,90\npriceOld=1499,00\nrating=4.8\nreviewCount=152"

        browser.close.assert_called_once()
        pw.stop.assert_called_once()

    def test_launch_uses_settings(self, settings, playwright_stack):
        pw, browser = playwright_stack
        settings.browser.headless = False

        ProductScraper("https://shop.example/p/1", "Санкт", settings=settings).run()

        pw.chromium.launch.assert_called_once_with(headless=False)
        ctx_kwargs = browser.new_context.call_args.kwargs
        assert ctx_kwargs["viewport"] == {"width": 1920, "height": 1080}
        assert ctx_kwargs["user_agent"] == settings.browser.user_agent

    def test_missing_region_still_writes_snapshot(self, settings, playwright_stack, mock_page):
        mock_page.region_index = -1

        result = ProductScraper("https://shop.example/p/1", "Атлантида", settings=settings).run()

        assert result.success is True
        assert result.region_selected is False
        assert Path(settings.output.product_path).is_file()

    def test_navigation_failure_is_logged_and_browser_closed(self, settings, playwright_stack, mock_page, caplog):
        pw, browser = playwright_stack
        mock_page.goto.side_effect = PlaywrightError("Timeout 30000ms exceeded")

        with caplog.at_level(logging.ERROR):
            result = ProductScraper("https://shop.example/p/1", "Санкт", settings=settings).run()

        assert result.success is False
        assert "Timeout" in result.error
        assert result.snapshot is None
        assert not Path(settings.output.product_path).exists()
        assert any(r.levelno == logging.ERROR for r in caplog.records)
        browser.close.assert_called_once()
        pw.stop.assert_called_once()

    def test_extraction_error_does_not_raise(self, settings, playwright_stack, mock_page):
        pw, browser = playwright_stack
        mock_page.evaluate.side_effect = PlaywrightError("Execution context was destroyed")

        result = ProductScraper("https://shop.example/p/1", "Санкт", settings=settings).run()

        assert result.success is False
        assert "Execution context" in result.error
        browser.close.assert_called_once()

    def test_launch_failure_stops_driver(self, settings, playwright_stack):
        pw, browser = playwright_stack
        pw.chromium.launch.side_effect = PlaywrightError("Executable doesn't exist")

        result = ProductScraper("https://shop.example/p/1", "Санкт", settings=settings).run()

        assert result.success is False
        browser.close.assert_not_called()
        pw.stop.assert_called_once()

    def test_close_failure_does_not_mask_result(self, settings, playwright_stack):
        pw, browser = playwright_stack
        browser.close.side_effect = PlaywrightError("Browser has been closed")

        result = ProductScraper("https://shop.example/p/1", "Санкт", settings=settings).run()

        assert result.success is True
        pw.stop.assert_called_once()

    def test_defaults_to_global_settings(self):
        from shelfprice.settings import get_settings

        scraper = ProductScraper("https://shop.example/p/1", "Санкт")
        assert scraper.settings is get_settings()

