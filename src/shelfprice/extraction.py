"""Turn raw product-card text into a ``ProductSnapshot``.

The browser side only reads ``textContent`` of each selector; cleaning
happens here so the rules can be exercised without a page.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from shelfprice.models.product import COUNT_SENTINEL, PRICE_SENTINEL, ProductSnapshot

_NON_PRICE_CHARS = re.compile(r"[^0-9,.-]+")
_NON_DIGITS = re.compile(r"\D")


def clean_price(text: str | None) -> str | None:
    """Strip everything except digits, ``,``, ``.`` and ``-`` from *text*.

    Returns ``None`` when *text* is missing, blank, or contains no such
    characters at all.

    Examples::

        >>> clean_price(" 1 299,90 ₽ ")
        '1299,90'
        >>> clean_price("  ") is None
        True
    """
    if text is None:
        return None
    text = text.strip()
    if not text:
        return None
    return _NON_PRICE_CHARS.sub("", text) or None


def clean_count(text: str | None) -> str:
    """Keep only the digits of *text*, or ``"0"`` when there are none."""
    if not text:
        return COUNT_SENTINEL
    return _NON_DIGITS.sub("", text.strip()) or COUNT_SENTINEL


def build_snapshot(raw: Mapping[str, str | None]) -> ProductSnapshot:
    """Build a snapshot from raw texts keyed by selector name.

    Expected keys are ``price_regular``, ``price_discount``, ``price_old``,
    ``rating`` and ``reviews``; any of them may be absent or ``None``.
    The regular price wins over the discounted one when both are shown.
    """
    price = clean_price(raw.get("price_regular")) or clean_price(raw.get("price_discount"))
    return ProductSnapshot(
        price=price or PRICE_SENTINEL,
        old_price=clean_price(raw.get("price_old")) or PRICE_SENTINEL,
        rating=clean_price(raw.get("rating")) or COUNT_SENTINEL,
        review_count=clean_count(raw.get("reviews")),
    )
