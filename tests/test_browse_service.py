import pytest

from product_advisor.filters.facets import DEFAULT_PRICE_RANGE
from product_advisor.schemas import FilterOptions, PriceRange, Product, SortOption
from product_advisor.services.browse_service import (
    STATUS_EMPTY,
    STATUS_NO_MATCHES,
    STATUS_RESULTS,
    BrowseSession,
    project,
)


def make_products():
    return [
        Product(brand="A", product_name="a1", price=100, category="X"),
        Product(brand="B", product_name="b1", price=50, category="Y"),
        Product(brand="A", product_name="a2", price=75, category="X"),
    ]


def test_project_filters_then_sorts():
    filters = FilterOptions(price_range=PriceRange(min=60, max=100))
    out = project(make_products(), filters, SortOption.PRICE_LOW_HIGH)
    assert [p.price for p in out] == [75, 100]


def test_new_session_is_empty():
    session = BrowseSession()
    assert session.status == STATUS_EMPTY
    assert session.counts == (0, 0)
    assert session.filters.price_range == DEFAULT_PRICE_RANGE


def test_set_products_recomputes_facets():
    session = BrowseSession()
    session.set_products(make_products())
    assert session.facets.categories == ("X", "Y")
    assert session.facets.brands == ("A", "B")
    assert session.filters.price_range == PriceRange(min=50, max=100)
    assert session.status == STATUS_RESULTS
    assert session.counts == (3, 3)


def test_new_snapshot_resets_price_but_keeps_selections():
    session = BrowseSession(make_products())
    session.toggle_brand("A")
    session.apply_price_range(60, 90)

    session.set_products([
        Product(brand="A", product_name="a3", price=500, category="Z"),
        Product(brand="C", product_name="c1", price=900, category="Z"),
    ])

    assert session.filters.price_range == PriceRange(min=500, max=900)
    assert session.filters.brands == frozenset({"A"})
    assert [p.product_name for p in session.visible] == ["a3"]


def test_no_matches_differs_from_empty():
    session = BrowseSession(make_products())
    session.select(categories=["Missing"])
    assert session.status == STATUS_NO_MATCHES
    assert session.counts == (0, 3)


def test_sort_and_filter_inputs_update_projection():
    session = BrowseSession(make_products())
    assert [p.product_name for p in session.visible] == ["a1", "b1", "a2"]

    session.set_sort(SortOption.PRICE_HIGH_LOW)
    assert [p.price for p in session.visible] == [100, 75, 50]

    session.toggle_category("X")
    assert [p.price for p in session.visible] == [100, 75]

    session.toggle_category("X")
    assert session.counts == (3, 3)


def test_unknown_sort_keeps_recommender_order():
    session = BrowseSession(make_products(), sort_option="newest-arrivals")
    assert session.sort_option is None
    assert [p.product_name for p in session.visible] == ["a1", "b1", "a2"]


def test_visible_returns_copy():
    session = BrowseSession(make_products())
    session.visible.clear()
    assert session.counts == (3, 3)


def test_apply_price_range_clamps_to_available_bounds():
    session = BrowseSession(make_products())
    assert session.apply_price_range(10, 5000) == PriceRange(min=50, max=100)
    assert session.apply_price_range("", "80") == PriceRange(min=50, max=80)
    assert session.apply_price_range("abc", None) == PriceRange(min=50, max=100)


def test_apply_price_range_rejects_crossed_bounds():
    session = BrowseSession(make_products())
    with pytest.raises(ValueError):
        session.apply_price_range(90, 60)


def test_active_filter_count_and_clear():
    session = BrowseSession(make_products())
    assert session.active_filter_count() == 0

    session.toggle_category("X")
    session.toggle_brand("A")
    session.apply_price_range(60, 100)
    assert session.active_filter_count() == 3

    session.clear_filters()
    assert session.active_filter_count() == 0
    assert session.filters == FilterOptions(price_range=PriceRange(min=50, max=100))
