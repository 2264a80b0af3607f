"""shelfprice exception hierarchy."""

from __future__ import annotations


class ShelfpriceError(Exception):
    """Base exception for all shelfprice-specific errors."""


class NavigationError(ShelfpriceError):
    """Raised when the browser cannot reach a page at all.

    Attributes:
        url: The URL that failed to load.
        reason: Short human-readable cause (e.g. ``"name not resolved"``).
    """

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Could not load {url}: {reason}")
