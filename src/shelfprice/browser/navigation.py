"""Page navigation with readable failures for unreachable hosts.

Wraps Playwright's ``page.goto`` in a single attempt. Chromium network
errors that mean the page can never load are re-raised as
``NavigationError``; everything else propagates unchanged.
"""

from __future__ import annotations

import logging
from typing import Literal

from playwright.sync_api import Error as PlaywrightError, Page, Response

from shelfprice.exceptions import NavigationError

logger = logging.getLogger(__name__)

# Chromium error substrings for hosts that cannot be reached at all.
_UNREACHABLE_ERRORS: tuple[str, ...] = (
    "ERR_NAME_NOT_RESOLVED",
    "ERR_CONNECTION_REFUSED",
    "ERR_CONNECTION_RESET",
    "ERR_CONNECTION_CLOSED",
    "ERR_INTERNET_DISCONNECTED",
    "ERR_SSL_PROTOCOL_ERROR",
    "ERR_CERT_AUTHORITY_INVALID",
    "ERR_CERT_COMMON_NAME_INVALID",
    "ERR_ADDRESS_UNREACHABLE",
)

WaitUntil = Literal["commit", "domcontentloaded", "load", "networkidle"]


def goto(
    page: Page,
    url: str,
    *,
    timeout_ms: int = 30_000,
    wait_until: WaitUntil = "networkidle",
) -> Response | None:
    """Navigate to *url* and wait for *wait_until*.

    Args:
        page: Playwright page instance.
        url: Target URL to navigate to.
        timeout_ms: Navigation timeout in milliseconds.
        wait_until: Load state to wait for.

    Returns:
        The main-frame ``Response``, or ``None`` if the page did not
        produce one.

    Raises:
        NavigationError: If the host is unreachable.
        PlaywrightError: Any other navigation failure, including timeouts.
    """
    logger.debug("goto %s (wait_until=%s, timeout=%dms)", url, wait_until, timeout_ms)
    try:
        return page.goto(url, wait_until=wait_until, timeout=timeout_ms)
    except PlaywrightError as exc:
        reason = _unreachable_reason(str(exc))
        if reason:
            logger.warning("Navigation to %s failed: %s", url, reason)
            raise NavigationError(url, reason) from exc
        raise


def _unreachable_reason(error_msg: str) -> str | None:
    """Return a short reason if *error_msg* names an unreachable-host error."""
    for pattern in _UNREACHABLE_ERRORS:
        if pattern in error_msg:
            return pattern.replace("ERR_", "").replace("_", " ").lower()
    return None
