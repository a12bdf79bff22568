"""Environment-driven settings for the storefront API."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

_ROOT = Path(__file__).resolve().parents[2]

_POSSIBLE_CATALOG_PATHS = [
    _ROOT / "data" / "products.json",
    Path(__file__).resolve().parent / "data" / "products.json",
]


def _find_catalog_path() -> Path:
    env_path = os.environ.get("CATALOG_PATH")
    if env_path:
        return Path(env_path)
    for p in _POSSIBLE_CATALOG_PATHS:
        if p.exists():
            return p
    # fall back to the first path which will raise a readable error on access
    return _POSSIBLE_CATALOG_PATHS[0]


def _split_origins(raw: str) -> List[str]:
    return [o.strip() for o in raw.split(",") if o.strip()]


@dataclass(frozen=True)
class Settings:
    catalog_path: Path = field(default_factory=_find_catalog_path)
    gold_price_url: str = "https://api.metals.live/v1/spot/gold"
    gold_price_timeout: float = 5.0
    # seconds a fetched spot price stays fresh
    gold_price_ttl: float = 3600.0
    gold_price_fallback: float = 65.50
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])
    public_dir: Optional[Path] = None
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Build settings from the process environment, keeping defaults for unset keys."""
    public_dir = os.environ.get("STOREFRONT_PUBLIC_DIR")
    return Settings(
        catalog_path=_find_catalog_path(),
        gold_price_url=os.environ.get("GOLD_PRICE_URL", Settings.gold_price_url),
        gold_price_timeout=float(os.environ.get("GOLD_PRICE_TIMEOUT", Settings.gold_price_timeout)),
        gold_price_ttl=float(os.environ.get("GOLD_PRICE_TTL", Settings.gold_price_ttl)),
        gold_price_fallback=float(os.environ.get("GOLD_PRICE_FALLBACK", Settings.gold_price_fallback)),
        cors_allow_origins=_split_origins(os.environ.get("CORS_ALLOW_ORIGINS", "*")),
        public_dir=Path(public_dir) if public_dir else None,
        host=os.environ.get("HOST", Settings.host),
        port=int(os.environ.get("PORT", Settings.port)),
        log_level=os.environ.get("LOG_LEVEL", Settings.log_level).upper(),
    )
