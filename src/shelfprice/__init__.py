"""shelfprice — regional price snapshots of storefront product pages."""

from __future__ import annotations

try:
    from importlib.metadata import version

    __version__ = version("shelfprice")
except Exception:
    __version__ = "0.0.0"
