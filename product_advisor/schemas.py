from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Product(BaseModel):
    model_config = ConfigDict(frozen=True)

    brand: str
    product_name: str
    price: float = Field(ge=0, allow_inf_nan=False)
    category: str
    description: str = ""


class Recommendation(Product):
    why: str = ""


class PriceRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: float = Field(allow_inf_nan=False)
    max: float = Field(allow_inf_nan=False)

    @model_validator(mode="after")
    def _check_bounds(self) -> "PriceRange":
        if self.min > self.max:
            raise ValueError(f"price range min ({self.min:g}) is greater than max ({self.max:g})")
        return self

    def contains(self, price: float) -> bool:
        return self.min <= price <= self.max


class FilterOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    price_range: PriceRange
    # Empty set means no constraint on that facet.
    categories: frozenset[str] = frozenset()
    brands: frozenset[str] = frozenset()


class SortOption(str, Enum):
    PRICE_LOW_HIGH = "price-low-high"
    PRICE_HIGH_LOW = "price-high-low"
    DATE_NEWEST = "date-newest"
    DATE_OLDEST = "date-oldest"

    @property
    def label(self) -> str:
        return SORT_LABELS[self]

    @classmethod
    def parse(cls, value: object) -> Optional["SortOption"]:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


SORT_LABELS = {
    SortOption.PRICE_LOW_HIGH: "Price: Low to High",
    SortOption.PRICE_HIGH_LOW: "Price: High to Low",
    SortOption.DATE_NEWEST: "Date: Newest First",
    SortOption.DATE_OLDEST: "Date: Oldest First",
}


class Facets(BaseModel):
    model_config = ConfigDict(frozen=True)

    categories: tuple[str, ...] = ()
    brands: tuple[str, ...] = ()
    price_range: PriceRange
