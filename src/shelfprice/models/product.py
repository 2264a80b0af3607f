"""Product snapshot captured from a single storefront page.

Every field holds already-formatted text exactly as shown on the page
(after stripping currency symbols and separators), never a parsed number.
Fields that could not be read fall back to a sentinel string.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

PRICE_SENTINEL = "null"
COUNT_SENTINEL = "0"

# Output key -> attribute, in file order.
TEXT_KEYS: tuple[tuple[str, str], ...] = (
    ("price", "price"),
    ("priceOld", "old_price"),
    ("rating", "rating"),
    ("reviewCount", "review_count"),
)


@dataclass
class ProductSnapshot:
    """Price, old price, rating and review count of one product."""

    price: str = PRICE_SENTINEL
    old_price: str = PRICE_SENTINEL
    rating: str = COUNT_SENTINEL
    review_count: str = COUNT_SENTINEL

    def __post_init__(self) -> None:
        # Empty or missing values collapse to their sentinels.
        self.price = self.price or PRICE_SENTINEL
        self.old_price = self.old_price or PRICE_SENTINEL
        self.rating = self.rating or COUNT_SENTINEL
        self.review_count = self.review_count or COUNT_SENTINEL

    def to_text(self) -> str:
        """Serialize to four ``key=value`` lines in fixed order."""
        return "\n".join(f"{key}={getattr(self, attr)}" for key, attr in TEXT_KEYS)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dict keyed like the text output."""
        return {key: getattr(self, attr) for key, attr in TEXT_KEYS}
