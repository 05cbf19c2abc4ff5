from __future__ import annotations

from typing import Iterable, Optional, Sequence, TypeVar

from product_advisor.filters.facets import default_filter_options, extract_facets
from product_advisor.filters.predicates import filter_products
from product_advisor.filters.sorting import sort_products
from product_advisor.schemas import Facets, FilterOptions, PriceRange, Product, SortOption

P = TypeVar("P", bound=Product)

STATUS_EMPTY = "empty"
STATUS_NO_MATCHES = "no_matches"
STATUS_RESULTS = "results"


def project(products: Sequence[P], filters: FilterOptions, sort_option: SortOption | str | None) -> list[P]:
    return sort_products(filter_products(products, filters), sort_option)


class BrowseSession:
    """
    Holds the current product snapshot plus the user's filter and sort choices.

    A new snapshot recomputes facets from scratch and resets the price range to
    the snapshot's full bounds. Category and brand selections carry over.
    """

    def __init__(
        self,
        products: Iterable[Product] = (),
        sort_option: SortOption | str | None = None,
    ) -> None:
        self._products: tuple[Product, ...] = tuple(products)
        self._facets: Facets = extract_facets(self._products)
        self._filters: FilterOptions = default_filter_options(self._products)
        self._sort_option: Optional[SortOption] = SortOption.parse(sort_option) if sort_option else None
        self._visible: Optional[list[Product]] = None

    @property
    def products(self) -> tuple[Product, ...]:
        return self._products

    @property
    def facets(self) -> Facets:
        return self._facets

    @property
    def filters(self) -> FilterOptions:
        return self._filters

    @property
    def sort_option(self) -> Optional[SortOption]:
        return self._sort_option

    def set_products(self, products: Iterable[Product]) -> None:
        self._products = tuple(products)
        self._facets = extract_facets(self._products)
        self._filters = self._filters.model_copy(update={"price_range": self._facets.price_range})
        self._visible = None

    def set_filters(self, filters: FilterOptions) -> None:
        self._filters = filters
        self._visible = None

    def set_sort(self, sort_option: SortOption | str | None) -> None:
        # Unknown keys are kept as "no ordering" rather than rejected.
        self._sort_option = SortOption.parse(sort_option) if sort_option else None
        self._visible = None

    @property
    def visible(self) -> list[Product]:
        if self._visible is None:
            self._visible = project(self._products, self._filters, self._sort_option)
        return list(self._visible)

    @property
    def counts(self) -> tuple[int, int]:
        return len(self.visible), len(self._products)

    @property
    def status(self) -> str:
        if not self._products:
            return STATUS_EMPTY
        if not self.visible:
            return STATUS_NO_MATCHES
        return STATUS_RESULTS

    def toggle_category(self, category: str) -> None:
        self.set_filters(self._filters.model_copy(update={"categories": _toggle(self._filters.categories, category)}))

    def toggle_brand(self, brand: str) -> None:
        self.set_filters(self._filters.model_copy(update={"brands": _toggle(self._filters.brands, brand)}))

    def select(self, categories: Iterable[str] = (), brands: Iterable[str] = ()) -> None:
        self.set_filters(
            self._filters.model_copy(update={"categories": frozenset(categories), "brands": frozenset(brands)})
        )

    def apply_price_range(self, min_value: object = None, max_value: object = None) -> PriceRange:
        """
        Narrow the price filter, clamped into the snapshot's available bounds.

        Blank or non-numeric input falls back to the available bound. Bounds
        that cross after clamping raise ``ValueError``.
        """
        available = self._facets.price_range
        low = _to_float(min_value)
        high = _to_float(max_value)
        price_range = PriceRange(
            min=max(available.min if low is None else low, available.min),
            max=min(available.max if high is None else high, available.max),
        )
        self.set_filters(self._filters.model_copy(update={"price_range": price_range}))
        return price_range

    def clear_filters(self) -> None:
        self.set_filters(FilterOptions(price_range=self._facets.price_range))

    def active_filter_count(self) -> int:
        count = 0
        if self._filters.categories:
            count += 1
        if self._filters.brands:
            count += 1
        if self._filters.price_range != self._facets.price_range:
            count += 1
        return count


def _toggle(selected: frozenset[str], value: str) -> frozenset[str]:
    if value in selected:
        return selected - {value}
    return selected | {value}


def _to_float(value: object) -> float | None:
    try:
        if value is None or value == "":
            return None
        return float(value)
    except (TypeError, ValueError):
        return None
