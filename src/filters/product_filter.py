# src/filters/product_filter.py

"""Deterministic filtering, text search and sorting over the catalog."""

import logging
from collections.abc import Sequence

from src.config.settings import Settings
from src.models.product import Product
from src.models.recommendation import SearchFilters

logger = logging.getLogger("product_advisor.filters")


def _searchable_text(product: Product) -> str:
    return (
        f"{product.product_name} {product.description} "
        f"{product.brand} {product.category}"
    ).lower()


class ProductFilter:
    """Stateless browse helpers used by the catalog views."""

    @staticmethod
    def filter_products(
        products: Sequence[Product],
        filters: SearchFilters,
    ) -> list[Product]:
        """Keep products satisfying every set constraint (AND logic).

        Category matches exactly; ``"All"``, ``""`` or ``None`` disables
        it. Brand matches case-insensitively and ``""`` means any brand.
        Price bounds are inclusive.
        """
        category = filters.category or None
        if category == Settings.ALL_CATEGORIES:
            category = None
        brand = filters.brand.lower() if filters.brand else None

        kept: list[Product] = []
        for product in products:
            if category is not None and product.category != category:
                continue
            if (
                filters.min_price is not None
                and product.price < filters.min_price
            ):
                continue
            if (
                filters.max_price is not None
                and product.price > filters.max_price
            ):
                continue
            if brand is not None and product.brand.lower() != brand:
                continue
            kept.append(product)

        logger.debug(
            "Filter %s kept %d of %d products",
            filters,
            len(kept),
            len(products),
        )
        return kept

    @staticmethod
    def search_products(
        products: Sequence[Product],
        query: str,
    ) -> list[Product]:
        """Return products where any query token appears (OR logic).

        Tokens are matched as substrings of name, description, brand
        and category. A blank query returns the input unchanged.
        """
        terms = query.lower().split()
        if not terms:
            return list(products)

        return [
            p
            for p in products
            if any(term in _searchable_text(p) for term in terms)
        ]

    @staticmethod
    def sort_products(
        products: Sequence[Product],
        sort_by: str,
    ) -> list[Product]:
        """Sort by ``price-asc``, ``price-desc``, ``name`` or ``relevance``.

        ``relevance`` keeps the incoming order. Raises ``ValueError``
        for any other key.
        """
        if sort_by == "price-asc":
            return sorted(products, key=lambda p: p.price)
        if sort_by == "price-desc":
            return sorted(products, key=lambda p: p.price, reverse=True)
        if sort_by == "name":
            return sorted(products, key=lambda p: p.product_name)
        if sort_by == "relevance":
            return list(products)
        raise ValueError(
            f"Unknown sort key '{sort_by}' "
            f"(expected one of {', '.join(Settings.SORT_KEYS)})"
        )

    @staticmethod
    def unique_categories(products: Sequence[Product]) -> list[str]:
        """Distinct categories, alphabetically sorted."""
        return sorted({p.category for p in products})

    @staticmethod
    def unique_brands(products: Sequence[Product]) -> list[str]:
        """Distinct brands, alphabetically sorted."""
        return sorted({p.brand for p in products})

    @staticmethod
    def price_range(
        products: Sequence[Product],
    ) -> tuple[float, float]:
        """Return ``(min, max)`` price. Raises ``ValueError`` when empty."""
        if not products:
            raise ValueError("price_range() needs at least one product")
        prices = [p.price for p in products]
        return min(prices), max(prices)
