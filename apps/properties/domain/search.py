"""
Property Search Pipeline

Pure functions that turn an already loaded list of listings into the
ordered, windowed list shown to a tenant:

    apply(listings, filters, search_query, sort_by) -> ordered list
    PaginationWindow.window(ordered, page) -> visible slice + has_more

Nothing here touches the database; callers fetch the candidate set first.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, List, Optional, Sequence, Tuple

# Tolerance of the fuzzy price match, as a share of the searched price
SHORTHAND_PRICE_TOLERANCE = Decimal('0.2')
NUMERIC_PRICE_TOLERANCE = Decimal('0.1')

_LEADING_NUMBER = re.compile(r'^\s*[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?')
_WHOLE_NUMBER = re.compile(r'^[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?$')


class SortOption(str, Enum):
    PRICE_LOW = 'price-low'
    PRICE_HIGH = 'price-high'
    NEWEST = 'newest'
    FEATURED = 'featured'


@dataclass(frozen=True)
class Listing:
    """Flat, framework-free view of a property used by the pipeline."""
    id: Any
    title: str
    price: Decimal
    city: str = ''
    district: str = ''
    neighborhood: str = ''
    description: str = ''
    property_type: str = ''
    bedrooms: int = 0
    bathrooms: int = 0
    amenities: Tuple[str, ...] = ()
    featured: bool = False
    created_at: Optional[datetime] = None

    def searchable_text(self) -> str:
        parts = [
            self.title,
            self.city,
            self.district,
            self.neighborhood or '',
            self.description,
            self.property_type,
            _format_number(self.price),
            str(self.bedrooms),
            str(self.bathrooms),
            *self.amenities,
        ]
        return ' '.join(parts).lower()


@dataclass(frozen=True)
class SearchFilters:
    """
    Field filters, each applied only when set (falsy values mean "any").

    All set filters must hold at once; `amenities` requires every listed
    amenity to be present.
    """
    city: str = ''
    price_min: Optional[Decimal] = None
    price_max: Optional[Decimal] = None
    property_type: str = ''
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    amenities: Tuple[str, ...] = field(default_factory=tuple)


def _format_number(value: Any) -> str:
    if isinstance(value, Decimal) and value == value.to_integral_value():
        return str(int(value))
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _parse_leading_number(text: str) -> Optional[Decimal]:
    """Read the numeric prefix of `text`, the way "1.5" is read from "1.5x"."""
    match = _LEADING_NUMBER.match(text)
    if not match:
        return None
    return Decimal(match.group(0).strip())


def _price_matches(term: str, price: Decimal) -> bool:
    try:
        if 'k' in term or 'm' in term:
            value = _parse_leading_number(term.replace('k', '').replace('m', ''))
            if value is None:
                return False
            multiplier = Decimal(1_000_000) if 'm' in term else Decimal(1_000)
            search_price = value * multiplier
            return abs(price - search_price) <= search_price * SHORTHAND_PRICE_TOLERANCE

        if _WHOLE_NUMBER.match(term):
            search_price = Decimal(term)
            return abs(price - search_price) <= search_price * NUMERIC_PRICE_TOLERANCE
    except ArithmeticError:
        # Prices beyond the decimal context ("1e999999999") match nothing
        return False

    return False


def matches_query(listing: Listing, search_query: str) -> bool:
    """
    True when any whitespace-separated term of the query hits the listing.

    A term hits when it is a substring of the listing's searchable text or,
    failing that, when it reads as a price close to the listing's rent:
    "500k"/"1.2m" shorthand within 20%, a plain number within 10%.
    """
    terms = search_query.lower().split()
    if not terms:
        return True

    text = listing.searchable_text()
    price = Decimal(listing.price)
    for term in terms:
        if term in text:
            return True
        if _price_matches(term, price):
            return True
    return False


def matches_filters(listing: Listing, filters: SearchFilters) -> bool:
    if filters.city and filters.city.lower() not in listing.city.lower():
        return False
    if filters.price_min and listing.price < filters.price_min:
        return False
    if filters.price_max and listing.price > filters.price_max:
        return False
    if filters.property_type and listing.property_type != filters.property_type:
        return False
    if filters.bedrooms and listing.bedrooms < filters.bedrooms:
        return False
    if filters.bathrooms and listing.bathrooms < filters.bathrooms:
        return False
    if filters.amenities and not all(a in listing.amenities for a in filters.amenities):
        return False
    return True


def sort_listings(listings: Sequence[Listing], sort_by: SortOption) -> List[Listing]:
    sort_by = SortOption(sort_by)
    if sort_by == SortOption.PRICE_LOW:
        return sorted(listings, key=lambda listing: listing.price)
    if sort_by == SortOption.PRICE_HIGH:
        return sorted(listings, key=lambda listing: listing.price, reverse=True)
    if sort_by == SortOption.NEWEST:
        # Listings without a creation time sort last
        return sorted(
            listings,
            key=lambda listing: (listing.created_at is not None, listing.created_at or datetime.min),
            reverse=True,
        )
    # FEATURED: featured first, original order kept within each group
    return sorted(listings, key=lambda listing: not listing.featured)


def apply(
    listings: Sequence[Listing],
    filters: Optional[SearchFilters] = None,
    search_query: str = '',
    sort_by: SortOption = SortOption.FEATURED,
) -> List[Listing]:
    """Search, filter and sort `listings`; the input is left untouched."""
    filters = filters or SearchFilters()
    result = [
        listing for listing in listings
        if matches_query(listing, search_query or '') and matches_filters(listing, filters)
    ]
    return sort_listings(result, sort_by)


@dataclass(frozen=True)
class Page:
    items: List[Listing]
    page: int
    end_index: int
    total: int
    has_more: bool


@dataclass(frozen=True)
class PaginationWindow:
    """
    Growing "load more" window over an ordered list

    Page 1 shows `page_size` items; each further page adds `increment`
    items rather than a full page.
    """
    page_size: int
    increment: int = 8

    def end_index(self, page: int) -> int:
        if page < 1:
            raise ValueError("Page numbers start at 1")
        return self.page_size + (page - 1) * self.increment

    def window(self, items: Sequence[Listing], page: int = 1, source_has_more: bool = False) -> Page:
        """
        Visible slice for `page`.

        `has_more` is true while items remain past the window, or when the
        source reports rows that were not materialised into `items` yet.
        """
        end = self.end_index(page)
        return Page(
            items=list(items[:end]),
            page=page,
            end_index=end,
            total=len(items),
            has_more=end < len(items) or source_has_more,
        )


MAIN_SEARCH = PaginationWindow(page_size=12)
TENANT_BROWSER = PaginationWindow(page_size=9)
