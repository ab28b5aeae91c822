# src/storage/catalog_store.py

"""Read-only product catalog loaded once from the bundled JSON file."""

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import cast

from src.config.settings import Settings
from src.filters.product_validator import ProductValidator
from src.models.product import Product
from src.services.errors import CatalogError

logger = logging.getLogger("product_advisor.catalog")


class CatalogStore:
    """Immutable, ordered product catalog."""

    def __init__(self, products: Iterable[Product]) -> None:
        valid, _dropped = ProductValidator.validate(list(products))
        self._products: tuple[Product, ...] = tuple(valid)
        self._by_id: dict[int, Product] = {
            p.id: p for p in self._products
        }

    @classmethod
    def from_json(cls, path: Path | None = None) -> "CatalogStore":
        """Load the catalog file. Raises ``CatalogError`` on failure."""
        catalog_path = path or Settings.CATALOG_PATH
        try:
            with open(catalog_path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise CatalogError(
                f"Cannot load catalog from {catalog_path}: {exc}"
            ) from exc

        if not isinstance(data, list):
            raise CatalogError(
                f"Catalog {catalog_path} must hold a JSON array"
            )

        products: list[Product] = []
        for row in cast(list[object], data):
            try:
                products.append(
                    Product.from_dict(cast(dict[str, object], row))
                )
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning(
                    "Skipping malformed catalog row %r: %s", row, exc,
                )

        store = cls(products)
        logger.info(
            "Loaded %d products from %s", len(store), catalog_path,
        )
        return store

    def __len__(self) -> int:
        return len(self._products)

    @property
    def products(self) -> tuple[Product, ...]:
        """All products in catalog order."""
        return self._products

    def get(self, product_id: int) -> Product | None:
        """Look up a product by id."""
        return self._by_id.get(product_id)

    def related(
        self, product: Product, limit: int | None = None,
    ) -> list[Product]:
        """Other products in the same category, in catalog order."""
        cap = limit or Settings.RELATED_PRODUCTS_LIMIT
        related = [
            p
            for p in self._products
            if p.category == product.category and p.id != product.id
        ]
        return related[:cap]

    def featured(self, limit: int | None = None) -> list[Product]:
        """Most expensive product of each of the first *limit* categories.

        Categories are taken in order of first appearance; on equal
        prices the earlier product wins.
        """
        cap = limit or Settings.FEATURED_CATEGORIES_LIMIT
        best: dict[str, Product] = {}
        for product in self._products:
            current = best.get(product.category)
            if current is None or product.price > current.price:
                best[product.category] = product
        return list(best.values())[:cap]

    def category_counts(self) -> dict[str, int]:
        """Number of products per category, in order of first appearance."""
        counts: dict[str, int] = {}
        for product in self._products:
            counts[product.category] = counts.get(product.category, 0) + 1
        return counts
