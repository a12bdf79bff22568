import json
from pathlib import Path

import pytest

from storefront.core.catalog import load_catalog, missing_images
from storefront.core.listing import ListingService
from storefront.errors import CatalogUnavailable, ProductNotFound
from storefront.schemas import FilterCriteria, Product

from fakes import ounce_payload


@pytest.fixture
def service(catalog_path, oracle, price_session):
    price_session.queue(ounce_payload(60.0))
    return ListingService(catalog_path, oracle)


def test_load_catalog_reads_camel_case_records(catalog_path):
    products = load_catalog(catalog_path)
    assert [p.name for p in products] == ["Ring", "Pendant", "Bracelet"]
    assert products[0].popularity_score == 0.5
    assert set(products[0].images) == {"yellow", "white", "rose"}


def test_list_products_prices_every_item(service):
    listing = service.list_products()
    assert listing.gold_price == pytest.approx(60.0)
    assert [p.price for p in listing.products] == [180.0, 60.0, 600.0]
    assert [p.star_rating for p in listing.products] == [2.5, 0.0, 5.0]
    assert [p.id for p in listing.products] == [0, 1, 2]


def test_list_products_applies_criteria(service):
    listing = service.list_products(FilterCriteria(max_price=200.0))
    assert [p.name for p in listing.products] == ["Ring", "Pendant"]


def test_filtered_items_keep_catalog_ids(service):
    listing = service.list_products(FilterCriteria(min_popularity=1.0))
    assert [(p.id, p.name) for p in listing.products] == [(2, "Bracelet")]


def test_get_product_at_both_ends(service):
    assert service.get_product(0).name == "Ring"
    assert service.get_product(2).name == "Bracelet"


@pytest.mark.parametrize("product_id", [-1, 3, 100])
def test_get_product_out_of_range(service, product_id):
    with pytest.raises(ProductNotFound):
        service.get_product(product_id)


def test_get_product_uses_cached_price(service, price_session):
    service.list_products()
    product = service.get_product(0)
    assert product.gold_price == pytest.approx(60.0)
    assert len(price_session.calls) == 1


def test_missing_catalog_raises_catalog_unavailable(tmp_path, oracle):
    service = ListingService(tmp_path / "missing.json", oracle)
    with pytest.raises(CatalogUnavailable):
        service.list_products()


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        json.dumps({"name": "Ring"}),
        json.dumps([{"name": "Ring", "weight": -1, "popularityScore": 0.5}]),
        json.dumps([{"name": "Ring", "weight": 1, "popularityScore": 1.5}]),
    ],
)
def test_bad_catalog_content_raises_catalog_unavailable(tmp_path, content):
    path = tmp_path / "products.json"
    path.write_text(content)
    with pytest.raises(CatalogUnavailable):
        load_catalog(path)


def test_catalog_edits_are_picked_up_per_request(catalog_path, service):
    assert len(service.list_products().products) == 3
    data = json.loads(catalog_path.read_text())
    catalog_path.write_text(json.dumps(data[:1]))
    assert len(service.list_products().products) == 1


def test_missing_images_reports_unserved_references(tmp_path, catalog_path):
    products = [
        Product(name="Ring", weight=1.0, popularity_score=0.5, images={
            "yellow": "/images/catalog/ring-yellow.png",
            "white": "/images/catalog/ring-white.png",
            "rose": "https://cdn.example.com/ring-rose.png",
        })
    ]
    assert missing_images(products, None) == [
        "/images/catalog/ring-yellow.png",
        "/images/catalog/ring-white.png",
    ]
    public = tmp_path / "public"
    (public / "images" / "catalog").mkdir(parents=True)
    (public / "images" / "catalog" / "ring-yellow.png").write_bytes(b"png")
    assert missing_images(products, public) == ["/images/catalog/ring-white.png"]


def test_bundled_catalog_images_need_generated_assets():
    bundled = Path(__file__).resolve().parents[3] / "data" / "products.json"
    products = load_catalog(bundled)
    assert len(missing_images(products, None)) == 3 * len(products)
