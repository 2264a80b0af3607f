"""Data models."""

from shelfprice.models.product import COUNT_SENTINEL, PRICE_SENTINEL, ProductSnapshot

__all__ = ["COUNT_SENTINEL", "PRICE_SENTINEL", "ProductSnapshot"]
