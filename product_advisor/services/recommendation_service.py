from __future__ import annotations

import asyncio
from typing import Callable

from product_advisor.config import settings
from product_advisor.data_providers.catalog import Catalog
from product_advisor.llm.client import RecommendationClient
from product_advisor.schemas import Recommendation
from product_advisor.services.browse_service import BrowseSession


class RecommendationService:
    def __init__(
        self,
        catalog: Catalog,
        session: BrowseSession | None = None,
        client_factory: Callable[[], RecommendationClient] = RecommendationClient,
    ) -> None:
        self.catalog = catalog
        self.session = session or BrowseSession()
        self.client_factory = client_factory
        self.debug = settings.debug_log
        self.is_searching = False
        self.last_error = ""
        self.last_source = ""
        self._request_id = 0

    async def search(self, query: str) -> bool:
        """
        Fetch recommendations for ``query`` and replace the session snapshot.

        Only the most recent request is applied; a request superseded by a
        newer ``search`` or ``reset`` returns False and leaves the session alone.
        """
        text = (query or "").strip()
        if not text:
            return False

        self._request_id += 1
        request_id = self._request_id
        self.is_searching = True
        try:
            recommendations, source, error = await asyncio.to_thread(self._fetch, text)
        finally:
            if request_id == self._request_id:
                self.is_searching = False

        if request_id != self._request_id:
            if self.debug:
                print(f"[DEBUG][SERVICE] dropped stale request={request_id} query='{text}'")
            return False

        self.last_source = source
        self.last_error = error
        self.session.set_products(recommendations)
        if self.debug:
            shown, total = self.session.counts
            print(
                f"[DEBUG][SERVICE] request={request_id} query='{text}' shown={shown} total={total} "
                f"source='{source}' error='{error}'"
            )
        return True

    def reset(self) -> None:
        self._request_id += 1
        self.is_searching = False
        self.last_error = ""
        self.last_source = ""
        self.session.set_products([])

    def _fetch(self, query: str) -> tuple[list[Recommendation], str, str]:
        # One client per request, so concurrent requests never share error state.
        client = self.client_factory()
        categories = client.extract_categories(query, self.catalog.categories())
        if client.last_error:
            return [], client.last_source, client.last_error

        candidates = self.catalog.candidates_for(categories)
        if self.debug:
            print(f"[DEBUG][SERVICE] categories={categories} candidates={len(candidates)}")
        if not candidates:
            return [], client.last_source, ""

        recommendations = client.recommend(query, candidates)
        return recommendations, client.last_source, client.last_error
