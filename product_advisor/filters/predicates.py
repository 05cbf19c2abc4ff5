from __future__ import annotations

from typing import Sequence, TypeVar

from product_advisor.schemas import FilterOptions, Product

P = TypeVar("P", bound=Product)


def matches(product: Product, filters: FilterOptions) -> bool:
    """
    True when the product passes every facet constraint.

    The price range is always enforced. Category and brand only constrain
    when their selection is non-empty, and membership is an exact match.
    """
    if not filters.price_range.contains(product.price):
        return False
    if filters.categories and product.category not in filters.categories:
        return False
    if filters.brands and product.brand not in filters.brands:
        return False
    return True


def filter_products(products: Sequence[P], filters: FilterOptions) -> list[P]:
    if not products:
        return []
    return [product for product in products if matches(product, filters)]
