# src/services/ranking_engine.py

"""Ranks catalog products for a natural-language query."""

import asyncio
import logging
from collections.abc import Sequence

from src.config.settings import Settings
from src.filters.heuristic_scorer import HeuristicScorer
from src.models.product import Product
from src.models.recommendation import Recommendation
from src.services.errors import (
    InvalidQuery,
    RemoteFailure,
    RemoteUnavailable,
)
from src.services.recommendation_client import RemoteRecommendationClient

logger = logging.getLogger("product_advisor.ranking")


class RankingEngine:
    """Remote-first ranking with a deterministic local fallback."""

    def __init__(
        self,
        client: RemoteRecommendationClient | None = None,
        scorer: HeuristicScorer | None = None,
        limit: int | None = None,
    ) -> None:
        self.client = client or RemoteRecommendationClient()
        self.limit = limit or Settings.MAX_RECOMMENDATIONS
        self.scorer = scorer or HeuristicScorer(limit=self.limit)

    def _order(
        self,
        recommendations: list[Recommendation],
        catalog: Sequence[Product],
    ) -> list[Recommendation]:
        """Sort by score desc, then catalog position; dedupe and cap."""
        position = {p.id: idx for idx, p in enumerate(catalog)}
        seen: set[int] = set()
        unique: list[Recommendation] = []
        for rec in recommendations:
            if rec.product.id in seen:
                continue
            seen.add(rec.product.id)
            unique.append(rec)

        ranked = sorted(
            unique,
            key=lambda r: (
                -r.match_score,
                position.get(r.product.id, len(position)),
            ),
        )
        return ranked[: self.limit]

    async def recommend(
        self,
        query: str,
        catalog: Sequence[Product],
    ) -> list[Recommendation]:
        """Return at most ``limit`` recommendations, best first.

        Raises ``InvalidQuery`` for a blank query. Every remote failure
        degrades to the heuristic scorer instead of propagating.
        """
        if not query or not query.strip():
            raise InvalidQuery("Please enter a search query")

        try:
            remote = await asyncio.to_thread(
                self.client.fetch_recommendations, query, catalog,
            )
        except RemoteUnavailable:
            logger.info(
                "No remote backend configured, ranking '%s' locally",
                query,
            )
            return self.scorer.rank(query, catalog)
        except RemoteFailure as exc:
            logger.warning(
                "Remote ranking failed for '%s' (%s: %s), "
                "using heuristic fallback",
                query,
                type(exc).__name__,
                exc,
            )
            return self.scorer.rank(query, catalog)

        ranked = self._order(remote, catalog)
        if not ranked:
            logger.info(
                "Remote gave no usable matches for '%s', "
                "using heuristic fallback",
                query,
            )
            return self.scorer.rank(query, catalog)
        return ranked
