import json
import re

from pydantic import ValidationError

from product_advisor.schemas import Recommendation

_FENCED_JSON = re.compile(r"```(?:json)?\s*\n([\s\S]*?)\n\s*```")
_BRACKETED = re.compile(r"\[([^\]]+)\]")


def parse_categories_output(raw_text: str) -> list[str]:
    text = (raw_text or "").strip()
    if not text:
        return []

    try:
        payload = json.loads(text)
        if isinstance(payload, list):
            return _clean_strings(payload)
        return []
    except ValueError:
        pass

    match = _BRACKETED.search(text)
    if not match:
        return []
    return _clean_strings(part.replace('"', "") for part in match.group(1).split(","))


def parse_recommendations_output(raw_text: str) -> list[Recommendation]:
    text = (raw_text or "").strip()
    if not text:
        return []

    payload = _load_json(text)
    if payload is None:
        match = _FENCED_JSON.search(text)
        if match:
            payload = _load_json(match.group(1))
    if not isinstance(payload, dict):
        return []

    rows = payload.get("recommendations") or []
    if not isinstance(rows, list):
        return []

    recommendations: list[Recommendation] = []
    for row in rows:
        try:
            recommendations.append(Recommendation.model_validate(row))
        except ValidationError:
            continue
    return recommendations


def _load_json(text: str):
    try:
        return json.loads(text)
    except ValueError:
        return None


def _clean_strings(values) -> list[str]:
    out: list[str] = []
    for value in values:
        item = str(value).strip()
        if item and item not in out:
            out.append(item)
    return out
