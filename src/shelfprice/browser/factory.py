"""Browser and page factory.

Builds a ``BrowserProfile`` holding the keyword arguments for Playwright's
``launch()`` and ``new_context()`` calls, then uses it to open a browser
and a single page.

Usage::

    from shelfprice.browser.factory import build_browser_profile, launch_browser, new_page

    profile = build_browser_profile(settings.browser)
    browser = launch_browser(pw, profile)
    page = new_page(browser, profile)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from playwright.sync_api import Browser, Page, Playwright

from shelfprice.settings.config import BrowserSettings

logger = logging.getLogger(__name__)


@dataclass
class BrowserProfile:
    """All Playwright launch + context arguments for a single session."""

    # Arguments for pw.chromium.launch()
    launch_args: dict[str, Any] = field(default_factory=dict)

    # Arguments for browser.new_context()
    context_args: dict[str, Any] = field(default_factory=dict)

    timeout_ms: int = 30_000


def build_browser_profile(browser_settings: BrowserSettings) -> BrowserProfile:
    """Build a ``BrowserProfile`` with a fixed user agent and viewport.

    Args:
        browser_settings: The ``browser`` settings section.

    Returns:
        A ``BrowserProfile`` ready for Playwright.
    """
    profile = BrowserProfile(timeout_ms=browser_settings.timeout_ms)

    # --- Launch args ---
    profile.launch_args["headless"] = browser_settings.headless
    if browser_settings.channel:
        profile.launch_args["channel"] = browser_settings.channel

    # --- Context args ---
    ctx = profile.context_args
    if browser_settings.user_agent:
        ctx["user_agent"] = browser_settings.user_agent
    ctx["viewport"] = {
        "width": browser_settings.viewport_width,
        "height": browser_settings.viewport_height,
    }
    ctx["device_scale_factor"] = browser_settings.device_scale_factor

    return profile


def launch_browser(pw: Playwright, profile: BrowserProfile) -> Browser:
    """Launch Chromium with the profile's launch arguments."""
    logger.debug("Launching chromium (%s)", profile.launch_args)
    return pw.chromium.launch(**profile.launch_args)


def new_page(browser: Browser, profile: BrowserProfile) -> Page:
    """Open a fresh context and page configured from *profile*.

    The page's default timeout applies to every wait and click made
    through it.
    """
    context = browser.new_context(**profile.context_args)
    page = context.new_page()
    page.set_default_timeout(profile.timeout_ms)
    page.set_default_navigation_timeout(profile.timeout_ms)
    return page
