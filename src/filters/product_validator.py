# src/filters/product_validator.py

"""Catalog validation: drop entries that break the product invariants."""

import logging

from src.models.product import Product

logger = logging.getLogger("product_advisor.filters")


class ProductValidator:
    """Validate catalog products and drop the unusable ones."""

    @staticmethod
    def validate(
        products: list[Product],
    ) -> tuple[list[Product], int]:
        """Drop products with blank names, bad ids/prices or repeated ids.

        The first occurrence of an id wins. Returns the valid products
        in their original order and the count of dropped items.
        """
        valid: list[Product] = []
        seen_ids: set[int] = set()
        dropped = 0

        for product in products:
            if product.id <= 0:
                logger.debug(
                    "Dropped product with non-positive id %d (%s)",
                    product.id,
                    product.product_name,
                )
                dropped += 1
                continue
            if not product.product_name.strip():
                logger.debug(
                    "Dropped product %d with empty name",
                    product.id,
                )
                dropped += 1
                continue
            if product.price < 0:
                logger.debug(
                    "Dropped product %d with negative price %.2f",
                    product.id,
                    product.price,
                )
                dropped += 1
                continue
            if product.id in seen_ids:
                logger.warning(
                    "Dropped duplicate product id %d (%s)",
                    product.id,
                    product.product_name,
                )
                dropped += 1
                continue
            seen_ids.add(product.id)
            valid.append(product)

        if dropped:
            logger.info(
                "Validation dropped %d invalid catalog entries",
                dropped,
            )

        return valid, dropped
