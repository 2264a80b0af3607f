"""Write a ``ProductSnapshot`` to its flat text file."""

from __future__ import annotations

import logging
from pathlib import Path

from shelfprice.models.product import ProductSnapshot

logger = logging.getLogger(__name__)


def save_snapshot(snapshot: ProductSnapshot, path: str | Path = "product.txt") -> Path:
    """Overwrite *path* with the snapshot's ``key=value`` lines.

    Parent directories are created as needed.

    Returns:
        The path written.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(snapshot.to_text(), encoding="utf-8")
    logger.info("Product data saved to %s", target)
    return target
