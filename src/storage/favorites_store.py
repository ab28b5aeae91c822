# src/storage/favorites_store.py

"""SQLite-backed favorites: one JSON snapshot list under a single key."""

import json
import logging
import sqlite3
from pathlib import Path
from typing import cast

from src.config.settings import Settings
from src.models.product import Product

logger = logging.getLogger("product_advisor.favorites")

_SCHEMA = """\
CREATE TABLE IF NOT EXISTS kv_store (
    key   TEXT PRIMARY KEY,
    value TEXT NOT NULL
);
"""


class FavoritesStore:
    """Durable set of favorite product snapshots keyed by product id.

    The whole list is rewritten on each mutation inside a single
    transaction, so a failed write leaves the previous value intact.
    Storage errors are logged and swallowed: reads fall back to an
    empty list and mutations become no-ops.
    """

    def __init__(
        self,
        db_path: Path | None = None,
        key: str | None = None,
    ) -> None:
        path = db_path or Settings.FAVORITES_DB_PATH
        self._key = key or Settings.FAVORITES_KEY
        self._conn: sqlite3.Connection | None = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(path), check_same_thread=False)
        except (OSError, sqlite3.Error) as exc:
            logger.error(
                "Cannot open favorites database %s: %s",
                path,
                exc,
                exc_info=True,
            )
            return
        try:
            conn.execute("PRAGMA journal_mode=WAL")
            conn.executescript(_SCHEMA)
        except sqlite3.Error as exc:
            # Unreadable file: stay degraded, every operation falls back
            logger.error(
                "Favorites database %s is unusable: %s",
                path,
                exc,
                exc_info=True,
            )
            conn.close()
            return
        self._conn = conn
        logger.debug("FavoritesStore opened at %s", path)

    @property
    def available(self) -> bool:
        """Whether the backing database opened successfully."""
        return self._conn is not None

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise sqlite3.OperationalError("Favorites database is not open")
        return self._conn

    # ── Raw slot access ──────────────────────────────────

    def _read(self) -> list[Product]:
        """Decode the stored list. Raises on storage or decode errors."""
        row = self._connection().execute(
            "SELECT value FROM kv_store WHERE key = ?",
            (self._key,),
        ).fetchone()
        if row is None:
            return []
        data = json.loads(row[0])
        if not isinstance(data, list):
            raise ValueError(
                f"Favorites slot holds {type(data).__name__}, not a list"
            )
        return [
            Product.from_dict(cast(dict[str, object], item))
            for item in cast(list[object], data)
        ]

    def _write(self, products: list[Product]) -> None:
        """Replace the stored list atomically."""
        payload = json.dumps(
            [p.to_dict() for p in products], ensure_ascii=False,
        )
        conn = self._connection()
        with conn:
            conn.execute(
                "INSERT INTO kv_store (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                (self._key, payload),
            )

    # ── Public operations ────────────────────────────────

    def get_all(self) -> list[Product]:
        """Return favorites in insertion order, or ``[]`` on failure."""
        try:
            return self._read()
        except (sqlite3.Error, KeyError, TypeError, ValueError) as exc:
            logger.error(
                "Error loading favorites: %s", exc, exc_info=True,
            )
            return []

    def add(self, product: Product) -> bool:
        """Save *product*. Returns ``True`` only if it was newly added."""
        try:
            favorites = self._read()
            if any(f.id == product.id for f in favorites):
                return False
            favorites.append(product)
            self._write(favorites)
        except (sqlite3.Error, KeyError, TypeError, ValueError) as exc:
            logger.error(
                "Error adding favorite %d: %s",
                product.id,
                exc,
                exc_info=True,
            )
            return False
        logger.info(
            "Added favorite %d (%s)", product.id, product.product_name,
        )
        return True

    def remove(self, product_id: int) -> bool:
        """Drop the entry with *product_id*. Returns ``True`` if one existed."""
        try:
            favorites = self._read()
            kept = [f for f in favorites if f.id != product_id]
            if len(kept) == len(favorites):
                return False
            self._write(kept)
        except (sqlite3.Error, KeyError, TypeError, ValueError) as exc:
            logger.error(
                "Error removing favorite %d: %s",
                product_id,
                exc,
                exc_info=True,
            )
            return False
        logger.info("Removed favorite %d", product_id)
        return True

    def contains(self, product_id: int) -> bool:
        """Check whether *product_id* is a favorite."""
        return any(f.id == product_id for f in self.get_all())

    def toggle(self, product: Product) -> bool:
        """Flip the favorite state of *product*. Returns the new state."""
        if self.contains(product.id):
            self.remove(product.id)
        else:
            self.add(product)
        return self.contains(product.id)

    def count(self) -> int:
        """Number of stored favorites."""
        return len(self.get_all())

    def clear(self) -> int:
        """Persist an empty favorites list.

        Returns the number of entries that were removed.
        """
        try:
            try:
                count = len(self._read())
            except (KeyError, TypeError, ValueError):
                # Corrupt slot: clearing it is still the right outcome
                count = 0
            self._write([])
        except sqlite3.Error as exc:
            logger.error(
                "Error clearing favorites: %s", exc, exc_info=True,
            )
            return 0
        logger.info("Favorites cleared (%d entries removed)", count)
        return count
