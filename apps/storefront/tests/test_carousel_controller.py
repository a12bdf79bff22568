import pytest
import requests

from storefront.carousel import CarouselController, LoadStatus
from storefront.core.pricing import to_display_product
from storefront.schemas import FilterCriteria, Product

from fakes import FakeResponse, FakeSession


def _item_json(i, price=100.0):
    product = to_display_product(i, Product(name=f"Item {i}", weight=1.0, popularity_score=0.5), 60.0)
    body = product.model_dump(by_alias=True)
    body["price"] = price
    return body


def _ok(count):
    return {"success": True, "data": [_item_json(i) for i in range(count)], "goldPrice": 60.0}


def _items(count):
    return [to_display_product(i, Product(name=f"Item {i}", weight=1.0, popularity_score=0.5), 60.0) for i in range(count)]


def test_starts_loading_with_filters_disabled():
    controller = CarouselController("http://shop.test", session=FakeSession())
    assert controller.status is LoadStatus.LOADING
    assert not controller.filters_enabled
    assert controller.next() is False


def test_successful_load_becomes_ready():
    session = FakeSession(_ok(10))
    controller = CarouselController("http://shop.test/", session=session)
    assert controller.load() is LoadStatus.READY
    assert len(controller.state.items) == 10
    assert controller.gold_price == 60.0
    assert controller.filters_enabled
    assert session.calls[0]["url"] == "http://shop.test/products"
    assert session.calls[0]["params"] == {}


def test_filters_are_sent_as_query_parameters():
    session = FakeSession(_ok(2))
    controller = CarouselController("http://shop.test", session=session)
    controller.apply_filters(FilterCriteria(min_price=100.0, max_popularity=0.8))
    assert session.calls[0]["params"] == {"minPrice": 100.0, "maxPopularity": 0.8}


@pytest.mark.parametrize(
    "outcome",
    [
        requests.ConnectionError("offline"),
        FakeResponse({"success": False, "error": "Internal server error"}, status_code=500),
        {"success": False, "error": "Internal server error"},
        {"success": True, "data": [{"name": "broken"}], "goldPrice": 60.0},
        {"success": True, "data": 5, "goldPrice": 60.0},
        {"success": True, "data": [], "goldPrice": "unknown"},
        {"success": True, "data": []},
        ["not", "an", "object"],
        FakeResponse(ValueError("not json")),
    ],
)
def test_failed_load_becomes_error(outcome):
    controller = CarouselController("http://shop.test", session=FakeSession(outcome))
    assert controller.load() is LoadStatus.ERROR
    assert controller.error
    assert controller.render().status == "error"


def test_refetch_from_ready_goes_through_loading():
    controller = CarouselController("http://shop.test", session=FakeSession(_ok(5)))
    controller.load()
    controller.begin_load(FilterCriteria(min_price=1.0))
    assert controller.status is LoadStatus.LOADING
    assert controller.next() is False


def test_new_load_resets_window_and_colours():
    controller = CarouselController("http://shop.test", session=FakeSession(_ok(10), _ok(8)))
    controller.load()
    controller.next()
    controller.select_color(0, "rose")
    controller.clear_filters()
    assert controller.state.window_start == 0
    assert controller.state.selected_colors[0] == "yellow"


def test_stale_response_does_not_overwrite_newer_load():
    controller = CarouselController("http://shop.test", session=FakeSession())
    first = controller.begin_load()
    second = controller.begin_load(FilterCriteria(max_price=50.0))
    assert controller.complete_load(second, _items(2)) is True
    assert controller.complete_load(first, _items(10)) is False
    assert controller.status is LoadStatus.READY
    assert len(controller.state.items) == 2


def test_stale_failure_does_not_flip_ready_to_error():
    controller = CarouselController("http://shop.test", session=FakeSession())
    first = controller.begin_load()
    second = controller.begin_load()
    controller.complete_load(second, _items(3))
    assert controller.fail_load(first, "timeout") is False
    assert controller.status is LoadStatus.READY


def test_navigation_through_controller():
    controller = CarouselController("http://shop.test", viewport_width=1280, session=FakeSession(_ok(10)))
    controller.load()
    moves = [controller.next() for _ in range(7)]
    assert moves == [True] * 6 + [False]
    assert controller.state.window_start == 6
    assert controller.previous() is True
    assert controller.state.window_start == 5


def test_swipe_through_controller():
    controller = CarouselController("http://shop.test", session=FakeSession(_ok(10)))
    controller.load()
    assert controller.swipe(300, 270) is False
    assert controller.swipe(300, 220) is True
    assert controller.state.window_start == 1


def test_resize_through_controller():
    controller = CarouselController("http://shop.test", viewport_width=320, session=FakeSession(_ok(10)))
    controller.load()
    assert controller.state.items_per_view == 1
    for _ in range(9):
        controller.next()
    assert controller.resize(1280) is True
    assert controller.state.items_per_view == 4
    assert controller.state.window_start == 6


def test_load_uses_current_viewport():
    controller = CarouselController("http://shop.test", viewport_width=1280, session=FakeSession(_ok(4)))
    controller.resize(500)
    controller.load()
    assert controller.state.items_per_view == 2
