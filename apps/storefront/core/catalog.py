"""Helpers for loading the static jewelry catalog."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from ..errors import CatalogUnavailable
from ..schemas import Product

logger = logging.getLogger(__name__)


def load_catalog(path: Path) -> List[Product]:
    """Read and validate every product record from ``path``.

    The file is re-read on each call so catalog edits show up without a
    restart. Any read, decode or validation problem is raised as
    :class:`CatalogUnavailable`.
    """
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.exception("Error loading products from %s", path)
        raise CatalogUnavailable(f"cannot read catalog {path}: {exc}") from exc

    if not isinstance(data, list):
        logger.error("Catalog %s must contain a JSON list, got %s", path, type(data).__name__)
        raise CatalogUnavailable(f"catalog {path} is not a list")

    try:
        return [Product.model_validate(item) for item in data]
    except ValidationError as exc:
        logger.exception("Invalid product record in %s", path)
        raise CatalogUnavailable(f"invalid product record in {path}") from exc


def missing_images(products: List[Product], public_dir: Optional[Path]) -> List[str]:
    """List site-relative image references that have no file under ``public_dir``.

    Absolute URLs are skipped. Without a public directory every site-relative
    reference is reported, since nothing would serve it.
    """
    missing = []
    for product in products:
        for ref in product.images.values():
            if "://" in ref or not ref.startswith("/"):
                continue
            if public_dir is None or not (Path(public_dir) / ref.lstrip("/")).is_file():
                missing.append(ref)
    return missing
