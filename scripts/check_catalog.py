"""Validate a catalog file and print the prices it yields at a given spot price.

Useful before shipping catalog edits: a file that fails here would make the
API answer every listing request with a 500. Image references that no file
under the public directory backs are reported too; run
scripts/generate_catalog_images.py and set STOREFRONT_PUBLIC_DIR to fix them.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "apps"))

from storefront.core.catalog import load_catalog, missing_images  # noqa: E402
from storefront.core.pricing import calculate_price, popularity_to_stars  # noqa: E402
from storefront.errors import CatalogUnavailable  # noqa: E402


def main() -> None:
    parser = argparse.ArgumentParser(description="Validate the jewelry catalog")
    parser.add_argument("catalog", type=Path, nargs="?", default=ROOT / "data" / "products.json")
    parser.add_argument("--gold-price", type=float, default=65.50, help="Spot price per gram")
    parser.add_argument(
        "--public-dir",
        type=Path,
        default=os.environ.get("STOREFRONT_PUBLIC_DIR"),
        help="Directory the API serves static assets from (default: $STOREFRONT_PUBLIC_DIR)",
    )
    args = parser.parse_args()

    try:
        products = load_catalog(args.catalog)
    except CatalogUnavailable as exc:
        raise SystemExit(f"Catalog check failed: {exc}")

    for index, product in enumerate(products):
        missing = {"yellow", "white", "rose"} - set(product.images)
        note = f"  missing variants: {', '.join(sorted(missing))}" if missing else ""
        print(
            f"{index:>3}  {product.name:<28} {calculate_price(product, args.gold_price):>10.2f}"
            f"  {popularity_to_stars(product.popularity_score):.1f}/5{note}"
        )
    print(f"Loaded {len(products)} products.")

    broken = missing_images(products, args.public_dir)
    if broken:
        where = args.public_dir or "no public dir (STOREFRONT_PUBLIC_DIR unset)"
        print(f"{len(broken)} image references are not served from {where}; "
              "run scripts/generate_catalog_images.py and set STOREFRONT_PUBLIC_DIR=public.")


if __name__ == "__main__":
    main()
