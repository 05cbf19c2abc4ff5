from __future__ import annotations

import json
import os
from typing import Sequence
from urllib.parse import urlparse

from openai import OpenAI

from product_advisor.config import settings
from product_advisor.llm.parser import parse_categories_output, parse_recommendations_output
from product_advisor.llm.prompts import (
    ADVISOR_SYSTEM_PROMPT,
    CATEGORY_EXTRACTION_PROMPT,
    RECOMMENDATION_PROMPT,
)
from product_advisor.schemas import Product, Recommendation


class RecommendationClient:
    def __init__(self) -> None:
        self.model = settings.openai_model
        self.max_recommendations = max(1, settings.max_recommendations)
        self.debug = settings.debug_log
        self.client = None
        self.last_source = "fallback"
        self.last_error = ""
        if settings.openai_api_key:
            kwargs = {"api_key": settings.openai_api_key, "timeout": float(settings.request_timeout_seconds)}
            if self._is_valid_http_url(settings.openai_base_url):
                kwargs["base_url"] = settings.openai_base_url
            else:
                # Let OpenAI SDK use its default URL when direct API is intended.
                os.environ.pop("OPENAI_BASE_URL", None)
            self.client = OpenAI(**kwargs)

    def extract_categories(self, query: str, available: Sequence[str]) -> list[str]:
        messages = [
            {"role": "system", "content": CATEGORY_EXTRACTION_PROMPT.format(categories=json.dumps(list(available)))},
            {"role": "user", "content": query},
        ]
        raw = self._complete(messages, max_tokens=120)
        categories = parse_categories_output(raw)
        if self.debug:
            print(f"[DEBUG][LLM] query='{query}' categories={categories} source='{self.last_source}'")
        return categories

    def recommend(self, query: str, candidates: Sequence[Product]) -> list[Recommendation]:
        if not candidates:
            return []
        catalog = json.dumps([p.model_dump() for p in candidates], ensure_ascii=False)
        messages = [
            {"role": "system", "content": ADVISOR_SYSTEM_PROMPT},
            {
                "role": "user",
                "content": RECOMMENDATION_PROMPT.format(
                    query=query,
                    catalog=catalog,
                    limit=self.max_recommendations,
                ),
            },
        ]
        raw = self._complete(messages, max_tokens=1200)
        recommendations = parse_recommendations_output(raw)[: self.max_recommendations]
        if raw and not recommendations and not self.last_error:
            self.last_error = "MalformedResponse: no usable recommendations in model output."
        if self.debug:
            print(
                f"[DEBUG][LLM] query='{query}' candidates={len(candidates)} "
                f"recommendations={len(recommendations)} error='{self.last_error}'"
            )
        return recommendations

    def _complete(self, messages: list[dict], max_tokens: int) -> str:
        self.last_error = ""
        if not self.client:
            self.last_source = "fallback"
            self.last_error = "OPENAI_API_KEY is not configured."
            return ""

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                temperature=0.0,
                max_tokens=max_tokens,
                messages=messages,
            )
            text = (response.choices[0].message.content or "").strip()
        except Exception as exc:
            # Keep the app available even if provider config/network fails.
            self.last_source = "fallback"
            self.last_error = f"{exc.__class__.__name__}: {exc}"
            return ""

        if not text:
            self.last_source = "fallback"
            self.last_error = "EmptyResponse: model returned no text."
            return ""
        self.last_source = "llm"
        return text

    @staticmethod
    def _is_valid_http_url(value: str) -> bool:
        if not value:
            return False
        parsed = urlparse(value)
        return parsed.scheme in {"http", "https"} and bool(parsed.netloc)
