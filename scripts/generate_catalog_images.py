#!/usr/bin/env python3
"""
Generate placeholder images for every product and gold colour variant in the
catalog and point the catalog's image references at them.

- Creates PNGs at public/images/catalog/{slug}-{variant}.png
- Renders the product name and variant on a card tinted with the metal colour
- Updates data/products.json so images.{yellow,white,rose} reference the files

The bundled data/products.json already points at these paths, but the files
do not exist until this script runs, and the API only serves them when
STOREFRONT_PUBLIC_DIR=public is set. Until then every product image is a
broken link. Safe to run multiple times; it overwrites existing generated files.
"""
from __future__ import annotations
import json
import re
from pathlib import Path
from typing import Dict, List

try:
    from PIL import Image, ImageDraw, ImageFont
except ImportError:
    raise SystemExit("Pillow is required. Install it in your env: pip install Pillow")

ROOT = Path(__file__).resolve().parents[1]
CATALOG_PATH = ROOT / "data" / "products.json"
PUBLIC_DIR = ROOT / "public"
OUT_DIR = PUBLIC_DIR / "images" / "catalog"
OUT_DIR.mkdir(parents=True, exist_ok=True)

SIZE = 600
FG = (15, 23, 42)     # slate-900
SUB = (71, 85, 105)   # slate-600
PADDING = 40

VARIANTS = {
    "yellow": ("Yellow Gold", (231, 196, 104)),
    "white": ("White Gold", (217, 217, 217)),
    "rose": ("Rose Gold", (225, 161, 144)),
}

# Try to find a decent font; fall back to default
FONT_PATHS = [
    "/System/Library/Fonts/SFNS.ttf",
    "/Library/Fonts/Arial.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
]

def load_font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    for p in FONT_PATHS:
        fp = Path(p)
        if fp.exists():
            try:
                return ImageFont.truetype(str(fp), size=size)
            except Exception:
                pass
    return ImageFont.load_default()

TITLE_FONT = load_font(44)
META_FONT = load_font(28)


def slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-") or "product"


def text_size(draw: ImageDraw.ImageDraw, text: str, font: ImageFont.ImageFont) -> tuple[int, int]:
    """Return width, height of text for the given font using textbbox (Pillow 10+)."""
    bbox = draw.textbbox((0, 0), text, font=font)
    return bbox[2] - bbox[0], bbox[3] - bbox[1]


def render_variant(name: str, variant: str) -> Image.Image:
    label, metal = VARIANTS[variant]
    img = Image.new("RGB", (SIZE, SIZE), (248, 250, 252))
    d = ImageDraw.Draw(img)

    # Metal swatch as a ring in the middle of the card
    cx, cy, r = SIZE // 2, SIZE // 2 - 30, 150
    d.ellipse([cx - r, cy - r, cx + r, cy + r], outline=metal, width=36)

    tw, _ = text_size(d, name, TITLE_FONT)
    d.text(((SIZE - tw) // 2, SIZE - PADDING - 100), name, fill=FG, font=TITLE_FONT)
    lw, _ = text_size(d, label, META_FONT)
    d.text(((SIZE - lw) // 2, SIZE - PADDING - 40), label, fill=SUB, font=META_FONT)
    return img


def main() -> None:
    data: List[Dict] = json.loads(CATALOG_PATH.read_text())
    count = 0
    for item in data:
        name = item.get("name") or "Product"
        slug = slugify(name)
        images = {}
        for variant in VARIANTS:
            img = render_variant(name, variant)
            out_path = OUT_DIR / f"{slug}-{variant}.png"
            img.save(out_path, format="PNG", optimize=True)
            images[variant] = f"/images/catalog/{slug}-{variant}.png"
            count += 1
        item["images"] = images

    # Write back catalog with updated image references
    CATALOG_PATH.write_text(json.dumps(data, indent=2) + "\n")
    print(f"Generated {count} images into {OUT_DIR} and updated {CATALOG_PATH}")


if __name__ == "__main__":
    main()
