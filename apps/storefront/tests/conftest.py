import json

import pytest

from storefront.config import Settings
from storefront.core.gold_price import GoldPriceOracle

from fakes import FakeClock, FakeSession

CATALOG = [
    {
        "name": "Ring",
        "weight": 2.0,
        "popularityScore": 0.5,
        "images": {"yellow": "ring-y.png", "white": "ring-w.png", "rose": "ring-r.png"},
    },
    {
        "name": "Pendant",
        "weight": 1.0,
        "popularityScore": 0.0,
        "images": {"yellow": "pendant-y.png", "white": "pendant-w.png", "rose": "pendant-r.png"},
    },
    {
        "name": "Bracelet",
        "weight": 5.0,
        "popularityScore": 1.0,
        "images": {"yellow": "bracelet-y.png", "white": "bracelet-w.png", "rose": "bracelet-r.png"},
    },
]


@pytest.fixture
def catalog_path(tmp_path):
    path = tmp_path / "products.json"
    path.write_text(json.dumps(CATALOG))
    return path


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def price_session():
    return FakeSession()


@pytest.fixture
def oracle(price_session, clock):
    return GoldPriceOracle("https://prices.test/gold", session=price_session, clock=clock)


@pytest.fixture
def settings(catalog_path):
    return Settings(catalog_path=catalog_path)
