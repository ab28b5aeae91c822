# src/filters/heuristic_scorer.py

"""Deterministic keyword scorer used when no remote backend answers."""

import logging
from collections.abc import Sequence

from src.config.settings import Settings
from src.models.product import Product
from src.models.recommendation import Recommendation

logger = logging.getLogger("product_advisor.ranking")

GENERIC_PROS: tuple[str, ...] = (
    "High-quality construction",
    "Good value for money",
    "Positive user reviews",
)
GENERIC_CONS: tuple[str, ...] = (
    "May require setup time",
    "Consider warranty terms",
)


class HeuristicScorer:
    """Keyword-overlap ranking; a pure function of query and catalog."""

    def __init__(self, limit: int | None = None) -> None:
        self.limit = limit or Settings.MAX_RECOMMENDATIONS

    @staticmethod
    def score(tokens: Sequence[str], product: Product) -> int:
        """Score one product against lower-cased query tokens."""
        blob = (
            f"{product.product_name} {product.description} "
            f"{product.category}"
        ).lower()
        category = product.category.lower()
        brand = product.brand.lower()

        total = sum(
            Settings.TOKEN_MATCH_POINTS for t in tokens if t in blob
        )
        if any(t in category for t in tokens):
            total += Settings.CATEGORY_BONUS
        if any(t in brand for t in tokens):
            total += Settings.BRAND_BONUS
        return min(total, Settings.HEURISTIC_SCORE_CAP)

    def rank(
        self,
        query: str,
        catalog: Sequence[Product],
    ) -> list[Recommendation]:
        """Return the top matches, highest score first.

        Products scoring zero are dropped; ties keep catalog order.
        """
        tokens = query.lower().split()
        reasoning = (
            f'This product matches your search for "{query}" '
            "based on its features and category."
        )

        scored: list[Recommendation] = []
        for product in catalog:
            value = self.score(tokens, product)
            if value <= 0:
                continue
            scored.append(
                Recommendation(
                    product=product,
                    match_score=value,
                    reasoning=reasoning,
                    pros=list(GENERIC_PROS),
                    cons=list(GENERIC_CONS),
                )
            )

        # sorted() is stable, so equal scores stay in catalog order
        ranked = sorted(scored, key=lambda r: r.match_score, reverse=True)
        top = ranked[: self.limit]
        logger.debug(
            "Heuristic ranked %d of %d products for '%s'",
            len(top),
            len(catalog),
            query,
        )
        return top
