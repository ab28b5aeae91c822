# src/services/response_parser.py

"""Parsers turning raw generated text into validated recommendations."""

import json
import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, cast

from src.config.settings import Settings
from src.models.product import Product
from src.models.recommendation import Recommendation
from src.services.errors import ParseError

logger = logging.getLogger("product_advisor.remote")

_DECODER = json.JSONDecoder()


def extract_json_array(raw_text: str) -> list[dict[str, Any]]:
    """Return the first JSON array of objects embedded in *raw_text*.

    Models often wrap the payload in prose or markdown fences, so every
    ``[`` is tried as a start position until one decodes to a list whose
    items are all objects. Raises ``ParseError`` if none does.
    """
    if not raw_text:
        raise ParseError("Empty response text")

    start = raw_text.find("[")
    while start != -1:
        try:
            candidate, _end = _DECODER.raw_decode(raw_text, start)
        except json.JSONDecodeError:
            candidate = None
        except RecursionError:
            # Too deeply nested to decode: skip the whole bracket run
            candidate = None
            while raw_text.startswith("[", start + 1):
                start += 1
        if isinstance(candidate, list):
            items = cast(list[object], candidate)
            if all(isinstance(item, dict) for item in items):
                return cast(list[dict[str, Any]], items)
        start = raw_text.find("[", start + 1)

    raise ParseError("No JSON array found in response")


def _as_id(value: Any) -> int | None:
    """Accept ints, integral floats and digit strings; else ``None``."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _as_int(value: Any) -> int | None:
    """Coerce numbers and numeric strings, rounding; else ``None``."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, float):
        return int(round(value)) if math.isfinite(value) else None
    return None


def _as_str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in cast(list[object], value) if v is not None]


class BaseResponseParser(ABC):
    """Contract: raw text in, recommendations resolved against a catalog out."""

    @abstractmethod
    def parse(
        self,
        raw_text: str,
        catalog: Sequence[Product],
    ) -> list[Recommendation]:
        """Parse *raw_text*. Raises ``ParseError`` on an unusable payload."""
        ...


class JsonArrayParser(BaseResponseParser):
    """Strict JSON-array parser for ``{productId, matchScore, ...}`` items."""

    def parse(
        self,
        raw_text: str,
        catalog: Sequence[Product],
    ) -> list[Recommendation]:
        items = extract_json_array(raw_text)
        by_id = {p.id: p for p in catalog}

        recommendations: list[Recommendation] = []
        dropped = 0
        for item in items:
            product_id = _as_id(item.get("productId"))
            product = by_id.get(product_id) if product_id is not None else None
            if product is None:
                logger.debug(
                    "Dropping item with unknown productId %r",
                    item.get("productId"),
                )
                dropped += 1
                continue

            score = _as_int(item.get("matchScore"))
            if score is None:
                logger.debug(
                    "Dropping product %d with bad matchScore %r",
                    product.id,
                    item.get("matchScore"),
                )
                dropped += 1
                continue

            reasoning = item.get("reasoning")
            recommendations.append(
                Recommendation(
                    product=product,
                    match_score=max(
                        0, min(score, Settings.REMOTE_SCORE_MAX)
                    ),
                    reasoning=reasoning if isinstance(reasoning, str) else "",
                    pros=_as_str_list(item.get("pros")),
                    cons=_as_str_list(item.get("cons")),
                )
            )

        if dropped:
            logger.info(
                "Parser dropped %d of %d remote items", dropped, len(items),
            )
        return recommendations
