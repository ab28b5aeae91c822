# src/config/settings.py

"""Central configuration for the product_advisor core."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the product_advisor core."""

    # --- Remote recommendation backend ---
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-pro")
    GEMINI_BASE_URL: str = os.getenv(
        "GEMINI_BASE_URL",
        "https://generativelanguage.googleapis.com/v1beta/models",
    )
    REMOTE_TIMEOUT: int = 20            # Seconds before the remote call expires
    REMOTE_HEADERS: dict[str, str] = {
        "Content-Type": "application/json",
        "Accept": "application/json",
    }

    # --- Ranking ---
    MAX_RECOMMENDATIONS: int = 5
    TOKEN_MATCH_POINTS: int = 20        # Per query token found in the text blob
    CATEGORY_BONUS: int = 30            # Once, if any token hits the category
    BRAND_BONUS: int = 15               # Once, if any token hits the brand
    HEURISTIC_SCORE_CAP: int = 95       # 96-100 left to the remote backend
    REMOTE_SCORE_MAX: int = 100

    # --- Catalog ---
    CURRENCY: str = "INR"
    ALL_CATEGORIES: str = "All"
    RELATED_PRODUCTS_LIMIT: int = 3
    FEATURED_CATEGORIES_LIMIT: int = 4
    SORT_KEYS: list[str] = ["relevance", "price-asc", "price-desc", "name"]
    EXAMPLE_QUERIES: list[str] = [
        "I need a device to help with chronic back pain",
        "Looking for smart security for my apartment",
        "Want entertainment gadgets for my 8-year-old",
        "Need kitchen appliances for healthy meal prep",
        "Looking for mobility aids for elderly parent",
    ]

    # --- Favorites ---
    FAVORITES_KEY: str = "favorites"

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    CATALOG_PATH: Path = BASE_DIR / "src" / "config" / "catalog.json"
    FAVORITES_DB_PATH: Path = BASE_DIR / "data" / "favorites.db"
    LOGS_DIR: Path = BASE_DIR / "logs"
