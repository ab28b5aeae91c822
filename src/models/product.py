# src/models/product.py

"""Catalog product model shared by every layer."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class Product:
    """An immutable catalog entry. ``id`` is the stable key."""

    id: int
    product_name: str
    brand: str
    category: str
    price: float
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the JSON snapshot form."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Product":
        """Build a Product from a JSON snapshot.

        Raises ``KeyError`` for a missing required field and
        ``TypeError``/``ValueError`` for values that cannot be coerced.
        """
        if not isinstance(data, dict):
            raise TypeError(
                f"Product snapshot must be an object, got {type(data).__name__}"
            )
        raw_id = data["id"]
        if isinstance(raw_id, bool):
            raise TypeError("Product id must be an integer")
        return cls(
            id=int(raw_id),
            product_name=str(data["product_name"]),
            brand=str(data.get("brand", "")),
            category=str(data.get("category", "")),
            price=float(data["price"]),
            description=str(data.get("description", "")),
        )
