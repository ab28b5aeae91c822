# src/models/recommendation.py

"""Ranking output and browse-filter models."""

from dataclasses import dataclass, field

from src.models.product import Product


@dataclass
class Recommendation:
    """A scored, explained match between a query and a catalog product."""

    product: Product
    match_score: int
    reasoning: str = ""
    pros: list[str] = field(default_factory=lambda: list[str]())
    cons: list[str] = field(default_factory=lambda: list[str]())


@dataclass
class SearchFilters:
    """Optional browse constraints. ``None`` means unconstrained."""

    category: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    brand: str | None = None
