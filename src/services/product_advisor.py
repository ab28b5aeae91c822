# src/services/product_advisor.py

"""UI-facing entry points wiring catalog, favorites and ranking."""

import logging

from src.config.settings import Settings
from src.filters.product_filter import ProductFilter
from src.models.product import Product
from src.models.recommendation import Recommendation, SearchFilters
from src.services.ranking_engine import RankingEngine
from src.storage.catalog_store import CatalogStore
from src.storage.favorites_store import FavoritesStore

logger = logging.getLogger("product_advisor.advisor")


class ProductAdvisor:
    """Coordinates browse, recommendation and favorite actions.

    All collaborators are injected; the advisor keeps no mutable state
    of its own, so favorites are always read through the store.
    """

    def __init__(
        self,
        catalog: CatalogStore,
        favorites: FavoritesStore,
        engine: RankingEngine | None = None,
    ) -> None:
        self.catalog = catalog
        self.favorites_store = favorites
        self.engine = engine or RankingEngine()

    # ── Recommendations ──────────────────────────────────

    async def search(self, query: str) -> list[Recommendation]:
        """Rank the catalog for *query*. Raises ``InvalidQuery`` if blank."""
        results = await self.engine.recommend(query, self.catalog.products)
        logger.info(
            "Query '%s' produced %d recommendations", query, len(results),
        )
        return results

    # ── Browsing ─────────────────────────────────────────

    def filter_products(self, filters: SearchFilters) -> list[Product]:
        """Apply *filters* to the whole catalog."""
        return ProductFilter.filter_products(self.catalog.products, filters)

    def browse(
        self,
        query: str = "",
        filters: SearchFilters | None = None,
        sort_by: str = "relevance",
    ) -> list[Product]:
        """Text search, then filter, then sort the catalog."""
        products = ProductFilter.search_products(self.catalog.products, query)
        if filters is not None:
            products = ProductFilter.filter_products(products, filters)
        return ProductFilter.sort_products(products, sort_by)

    def categories(self) -> list[str]:
        """Category choices for the browse view, ``"All"`` first."""
        return [
            Settings.ALL_CATEGORIES,
            *ProductFilter.unique_categories(self.catalog.products),
        ]

    def get_product(self, product_id: int) -> Product | None:
        return self.catalog.get(product_id)

    def related_products(self, product_id: int) -> list[Product]:
        """Same-category suggestions for a product detail view."""
        product = self.catalog.get(product_id)
        if product is None:
            return []
        return self.catalog.related(product)

    # ── Favorites ────────────────────────────────────────

    def favorites(self) -> list[Product]:
        return self.favorites_store.get_all()

    def add_favorite(self, product: Product) -> bool:
        return self.favorites_store.add(product)

    def remove_favorite(self, product_id: int) -> bool:
        return self.favorites_store.remove(product_id)

    def is_favorite(self, product_id: int) -> bool:
        return self.favorites_store.contains(product_id)

    def toggle_favorite(self, product: Product) -> bool:
        """Flip favorite state; returns the new state."""
        return self.favorites_store.toggle(product)

    def clear_favorites(self) -> int:
        return self.favorites_store.clear()
