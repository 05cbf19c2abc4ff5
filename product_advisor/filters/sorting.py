from __future__ import annotations

from typing import Sequence, TypeVar

from product_advisor.schemas import Product, SortOption

P = TypeVar("P", bound=Product)


def sort_products(products: Sequence[P], sort_option: SortOption | str | None) -> list[P]:
    """
    Return a new list ordered by ``sort_option``.

    ``sorted`` is stable (also with ``reverse=True``), so price ties keep the
    recommender's original rank. Date options have no date field to order by
    and, like unknown keys, leave the input order untouched.
    """
    ordered = list(products)
    option = SortOption.parse(sort_option)
    if option is SortOption.PRICE_LOW_HIGH:
        return sorted(ordered, key=lambda product: product.price)
    if option is SortOption.PRICE_HIGH_LOW:
        return sorted(ordered, key=lambda product: product.price, reverse=True)
    return ordered
