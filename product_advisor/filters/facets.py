from __future__ import annotations

from typing import Sequence

from product_advisor.schemas import Facets, FilterOptions, PriceRange, Product

# Returned for an empty snapshot so price inputs still have finite bounds.
# Callers treat it as "no data", not as a real bound.
DEFAULT_PRICE_RANGE = PriceRange(min=0, max=1000)


def extract_categories(products: Sequence[Product]) -> list[str]:
    if not products:
        return []
    return sorted({product.category for product in products})


def extract_brands(products: Sequence[Product]) -> list[str]:
    if not products:
        return []
    return sorted({product.brand for product in products})


def extract_price_range(products: Sequence[Product]) -> PriceRange:
    if not products:
        return DEFAULT_PRICE_RANGE
    prices = [product.price for product in products]
    return PriceRange(min=min(prices), max=max(prices))


def extract_facets(products: Sequence[Product]) -> Facets:
    return Facets(
        categories=tuple(extract_categories(products)),
        brands=tuple(extract_brands(products)),
        price_range=extract_price_range(products),
    )


def default_filter_options(products: Sequence[Product]) -> FilterOptions:
    return FilterOptions(price_range=extract_price_range(products))
