"""Tests for the in-memory search, filter, sort and pagination pipeline."""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from apps.properties.domain.search import (
    MAIN_SEARCH,
    TENANT_BROWSER,
    Listing,
    PaginationWindow,
    SearchFilters,
    SortOption,
    apply,
    matches_query,
)

NOW = datetime(2026, 3, 1, 12, 0)


def make_listing(pk, price, **kwargs) -> Listing:
    defaults = {
        "title": f"Listing {pk}",
        "city": "Dar es Salaam",
        "district": "Kinondoni",
        "bedrooms": 1,
        "bathrooms": 1,
        "property_type": "apartment",
    }
    defaults.update(kwargs)
    return Listing(id=pk, price=Decimal(price), **defaults)


def ids(listings) -> list:
    return [listing.id for listing in listings]


def test_empty_query_matches_everything() -> None:
    listings = [make_listing(1, 1000), make_listing(2, 2000)]
    assert ids(apply(listings, search_query="   ")) == [1, 2]


def test_any_term_is_enough() -> None:
    listing = make_listing(1, 1000, title="Sea view flat", district="Msasani")
    assert matches_query(listing, "msasani nowhere")
    assert not matches_query(listing, "arusha")


def test_search_covers_amenities_and_description() -> None:
    listing = make_listing(1, 1000, description="Quiet street", amenities=("Generator",))
    assert matches_query(listing, "generator")
    assert matches_query(listing, "QUIET")


def test_shorthand_price_matches_within_twenty_percent() -> None:
    listings = [
        make_listing(1, 399000),
        make_listing(2, 400000),
        make_listing(3, 600000),
        make_listing(4, 601000),
    ]
    assert ids(apply(listings, search_query="500k")) == [2, 3]


def test_million_shorthand() -> None:
    listings = [make_listing(1, 1300000), make_listing(2, 2000000)]
    assert ids(apply(listings, search_query="1.2m")) == [1]


def test_plain_number_matches_within_ten_percent() -> None:
    listings = [
        make_listing(1, 449000),
        make_listing(2, 450000),
        make_listing(3, 550000),
        make_listing(4, 551000),
    ]
    assert ids(apply(listings, search_query="500000")) == [2, 3]


@pytest.mark.parametrize("query", ["1e999999999", "1e999999k", "2e999999m"])
def test_out_of_range_price_terms_match_nothing(query) -> None:
    listings = [make_listing(1, 500000)]
    assert apply(listings, search_query=query) == []


def test_filters_are_combined() -> None:
    listings = [
        make_listing(1, 500, bedrooms=1),
        make_listing(2, 700, bedrooms=2, amenities=("Parking", "Security")),
        make_listing(3, 900, bedrooms=3, amenities=("Parking",)),
        make_listing(4, 800, bedrooms=2, city="Arusha", amenities=("Parking", "Security")),
    ]
    filters = SearchFilters(city="dar", bedrooms=2, amenities=("Parking", "Security"))
    assert ids(apply(listings, filters)) == [2]


def test_price_range_filter() -> None:
    listings = [make_listing(1, 500), make_listing(2, 1000), make_listing(3, 2000)]
    filters = SearchFilters(price_min=Decimal("600"), price_max=Decimal("1500"))
    assert ids(apply(listings, filters)) == [2]


def test_property_type_filter_is_exact() -> None:
    listings = [make_listing(1, 500, property_type="house"), make_listing(2, 500, property_type="apartment")]
    assert ids(apply(listings, SearchFilters(property_type="house"))) == [1]


def test_sort_by_price() -> None:
    listings = [make_listing(1, 1000), make_listing(2, 500), make_listing(3, 2000)]
    assert [listing.price for listing in apply(listings, sort_by=SortOption.PRICE_LOW)] == [500, 1000, 2000]
    assert [listing.price for listing in apply(listings, sort_by=SortOption.PRICE_HIGH)] == [2000, 1000, 500]


def test_sort_newest_first() -> None:
    listings = [
        make_listing(1, 500, created_at=NOW - timedelta(days=2)),
        make_listing(2, 500, created_at=NOW),
        make_listing(3, 500, created_at=None),
    ]
    assert ids(apply(listings, sort_by=SortOption.NEWEST)) == [2, 1, 3]


def test_featured_first_keeps_relative_order() -> None:
    listings = [
        make_listing(1, 500),
        make_listing(2, 500, featured=True),
        make_listing(3, 500),
        make_listing(4, 500, featured=True),
    ]
    assert ids(apply(listings, sort_by=SortOption.FEATURED)) == [2, 4, 1, 3]


def test_apply_leaves_input_untouched() -> None:
    listings = [make_listing(1, 1000), make_listing(2, 500)]
    apply(listings, sort_by=SortOption.PRICE_LOW)
    assert ids(listings) == [1, 2]


def test_main_search_window_grows_by_increment() -> None:
    listings = [make_listing(pk, 1000) for pk in range(30)]
    first = MAIN_SEARCH.window(listings, 1)
    assert len(first.items) == 12
    assert first.has_more

    third = MAIN_SEARCH.window(listings, 3)
    assert len(third.items) == 28
    assert third.has_more

    fourth = MAIN_SEARCH.window(listings, 4)
    assert len(fourth.items) == 30
    assert not fourth.has_more


def test_tenant_browser_window() -> None:
    listings = [make_listing(pk, 1000) for pk in range(9)]
    page = TENANT_BROWSER.window(listings, 1)
    assert len(page.items) == 9
    assert not page.has_more
    assert TENANT_BROWSER.end_index(2) == 17


def test_source_reporting_more_rows_keeps_has_more() -> None:
    listings = [make_listing(pk, 1000) for pk in range(3)]
    assert PaginationWindow(page_size=12).window(listings, 1, source_has_more=True).has_more


def test_page_numbers_start_at_one() -> None:
    with pytest.raises(ValueError):
        MAIN_SEARCH.end_index(0)
