from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable
from urllib.parse import urlparse

import httpx
from pydantic import ValidationError

from product_advisor.config import settings
from product_advisor.schemas import Product


class Catalog:
    """Immutable product snapshot the recommender draws candidates from."""

    def __init__(self, products: Iterable[Product]) -> None:
        self._products: tuple[Product, ...] = tuple(products)

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self):
        return iter(self._products)

    @property
    def products(self) -> tuple[Product, ...]:
        return self._products

    def categories(self) -> list[str]:
        # First-seen order, the way the catalog file lists them.
        return list(dict.fromkeys(p.category for p in self._products))

    def candidates_for(self, categories: Iterable[str]) -> list[Product]:
        wanted = [c.strip().lower() for c in categories if c and c.strip()]
        if not wanted:
            return []
        return [p for p in self._products if any(w in p.category.lower() for w in wanted)]


class CatalogLoader:
    def __init__(self) -> None:
        self.timeout = settings.request_timeout_seconds
        self.debug = settings.debug_log
        self.last_error: str = ""
        self.skipped_rows: int = 0

    def load(self, source: str | Path | None = None) -> Catalog:
        self.last_error = ""
        self.skipped_rows = 0
        source = str(source or settings.catalog_source)

        if _is_http_url(source):
            rows = self._fetch_rows(source)
        else:
            path = Path(source)
            if not path.is_file():
                raise FileNotFoundError(source)
            try:
                rows = json.loads(path.read_text(encoding="utf-8"))
            except ValueError:
                self.last_error = "Catalog file is not valid JSON."
                rows = []

        if not isinstance(rows, list):
            self.last_error = "Catalog payload is not a JSON array."
            return Catalog([])

        catalog = Catalog(self._to_products(rows))
        if self.skipped_rows:
            self.last_error = f"Skipped {self.skipped_rows} malformed catalog row(s)."
        if self.debug:
            print(f"[DEBUG][CATALOG] source='{source}' products={len(catalog)} skipped={self.skipped_rows}")
        return catalog

    def _fetch_rows(self, url: str) -> Any:
        headers = {"User-Agent": "product-advisor/0.1", "Accept": "application/json"}
        try:
            with httpx.Client(timeout=self.timeout, headers=headers) as client:
                response = client.get(url)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as exc:
            self.last_error = f"Catalog HTTP {exc.response.status_code}"
        except httpx.HTTPError as exc:
            self.last_error = f"Catalog network error: {exc.__class__.__name__}"
        except ValueError:
            self.last_error = "Catalog response is not valid JSON."
        if self.debug:
            print(f"[DEBUG][CATALOG] fetch failed url='{url}' error='{self.last_error}'")
        return []

    def _to_products(self, rows: list[Any]) -> list[Product]:
        products: list[Product] = []
        for row in rows:
            try:
                products.append(Product.model_validate(row))
            except ValidationError:
                self.skipped_rows += 1
        return products


def _is_http_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)
