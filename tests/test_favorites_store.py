# tests/test_favorites_store.py

"""Tests for the SQLite-backed FavoritesStore."""

import sqlite3
import tempfile
import unittest
from pathlib import Path

from src.config.settings import Settings
from src.models.product import Product
from src.storage.favorites_store import FavoritesStore


def _p(product_id: int, name: str = "Widget") -> Product:
    """Create a minimal Product for testing."""
    return Product(
        id=product_id,
        product_name=name,
        brand="Acme",
        category="Tools",
        price=10.0 * product_id,
        description=f"{name} description",
    )


class TestFavoritesStore(unittest.TestCase):
    """Core favorites operations."""

    def setUp(self) -> None:
        self.tmp_dir = tempfile.mkdtemp()
        self.db_path = Path(self.tmp_dir) / "favorites.db"
        self.store = FavoritesStore(db_path=self.db_path)

    def tearDown(self) -> None:
        self.store.close()

    def _raw_value(self) -> str | None:
        conn = sqlite3.connect(str(self.db_path))
        try:
            row = conn.execute(
                "SELECT value FROM kv_store WHERE key = ?",
                (Settings.FAVORITES_KEY,),
            ).fetchone()
        finally:
            conn.close()
        return row[0] if row else None

    # ── Basic lifecycle ──────────────────────────────────

    def test_empty_store(self) -> None:
        self.assertEqual(self.store.get_all(), [])
        self.assertFalse(self.store.contains(1))
        self.assertEqual(self.store.count(), 0)

    def test_store_is_available(self) -> None:
        self.assertTrue(self.store.available)

    def test_add_then_get_all(self) -> None:
        """add(p) then get_all() holds exactly one entry with p.id."""
        product = _p(1)
        self.assertTrue(self.store.add(product))
        favorites = self.store.get_all()
        self.assertEqual([f.id for f in favorites], [1])
        self.assertEqual(favorites[0], product)

    def test_add_is_idempotent(self) -> None:
        """Adding the same id twice keeps a single entry."""
        self.store.add(_p(1))
        self.assertFalse(self.store.add(_p(1, name="Renamed")))
        favorites = self.store.get_all()
        self.assertEqual(len(favorites), 1)
        self.assertEqual(favorites[0].product_name, "Widget")

    def test_insertion_order(self) -> None:
        for product_id in (3, 1, 2):
            self.store.add(_p(product_id))
        self.assertEqual([f.id for f in self.store.get_all()], [3, 1, 2])

    def test_remove(self) -> None:
        self.store.add(_p(1))
        self.store.add(_p(2))
        self.assertTrue(self.store.remove(1))
        self.assertEqual([f.id for f in self.store.get_all()], [2])
        self.assertFalse(self.store.contains(1))

    def test_remove_absent_is_noop(self) -> None:
        self.store.add(_p(1))
        self.assertFalse(self.store.remove(99))
        self.assertEqual([f.id for f in self.store.get_all()], [1])

    def test_contains(self) -> None:
        self.store.add(_p(5))
        self.assertTrue(self.store.contains(5))
        self.assertFalse(self.store.contains(6))

    def test_toggle(self) -> None:
        product = _p(4)
        self.assertTrue(self.store.toggle(product))
        self.assertTrue(self.store.contains(4))
        self.assertFalse(self.store.toggle(product))
        self.assertFalse(self.store.contains(4))

    def test_clear(self) -> None:
        """clear() then get_all() is empty, for any prior state."""
        for product_id in (1, 2, 3):
            self.store.add(_p(product_id))
        self.assertEqual(self.store.clear(), 3)
        self.assertEqual(self.store.get_all(), [])
        self.assertEqual(self._raw_value(), "[]")

    def test_clear_empty_store(self) -> None:
        self.assertEqual(self.store.clear(), 0)
        self.assertEqual(self.store.get_all(), [])

    # ── Persistence ──────────────────────────────────────

    def test_survives_reopen(self) -> None:
        """Favorites persist across store instances (process restart)."""
        self.store.add(_p(1))
        self.store.add(_p(2))
        self.store.close()

        self.store = FavoritesStore(db_path=self.db_path)
        self.assertEqual([f.id for f in self.store.get_all()], [1, 2])

    def test_stores_full_snapshot(self) -> None:
        """The whole product is stored, not just its id."""
        self.store.add(_p(7, name="Lamp"))
        raw = self._raw_value()
        assert raw is not None
        self.assertIn('"product_name": "Lamp"', raw)
        self.assertIn('"description": "Lamp description"', raw)

    def test_default_path_from_settings(self) -> None:
        """Without db_path the (test-isolated) settings path is used."""
        store = FavoritesStore()
        try:
            store.add(_p(1))
            self.assertTrue(Settings.FAVORITES_DB_PATH.exists())
        finally:
            store.close()


class TestFavoritesStoreFailures(unittest.TestCase):
    """Storage failures are logged and swallowed."""

    def setUp(self) -> None:
        self.tmp_dir = tempfile.mkdtemp()
        self.db_path = Path(self.tmp_dir) / "favorites.db"
        self.store = FavoritesStore(db_path=self.db_path)

    def tearDown(self) -> None:
        # Closing twice is a no-op for sqlite3 connections
        self.store.close()

    def _corrupt(self, value: str) -> None:
        conn = sqlite3.connect(str(self.db_path))
        with conn:
            conn.execute(
                "INSERT OR REPLACE INTO kv_store (key, value) VALUES (?, ?)",
                (Settings.FAVORITES_KEY, value),
            )
        conn.close()

    def test_closed_connection_reads_empty(self) -> None:
        self.store.close()
        with self.assertLogs("product_advisor.favorites", level="ERROR"):
            self.assertEqual(self.store.get_all(), [])

    def test_closed_connection_mutations_are_noops(self) -> None:
        self.store.close()
        with self.assertLogs("product_advisor.favorites", level="ERROR"):
            self.assertFalse(self.store.add(_p(1)))
            self.assertFalse(self.store.remove(1))
            self.assertFalse(self.store.contains(1))
            self.assertEqual(self.store.clear(), 0)

    def test_corrupt_value_reads_empty(self) -> None:
        self._corrupt("{not json")
        with self.assertLogs("product_advisor.favorites", level="ERROR"):
            self.assertEqual(self.store.get_all(), [])

    def test_corrupt_value_not_overwritten_by_add(self) -> None:
        """A failed read never turns into a destructive write."""
        self._corrupt('{"unexpected": "object"}')
        with self.assertLogs("product_advisor.favorites", level="ERROR"):
            self.assertFalse(self.store.add(_p(1)))
        conn = sqlite3.connect(str(self.db_path))
        raw = conn.execute("SELECT value FROM kv_store").fetchone()[0]
        conn.close()
        self.assertEqual(raw, '{"unexpected": "object"}')

    def test_clear_recovers_corrupt_value(self) -> None:
        self._corrupt("garbage")
        self.assertEqual(self.store.clear(), 0)
        self.assertEqual(self.store.get_all(), [])


class TestFavoritesStoreUnreadableFile(unittest.TestCase):
    """A database file that is not SQLite leaves the store degraded."""

    def setUp(self) -> None:
        self.tmp_dir = tempfile.mkdtemp()
        self.db_path = Path(self.tmp_dir) / "favorites.db"
        self.db_path.write_bytes(b"this is not a sqlite database at all" * 10)
        with self.assertLogs("product_advisor.favorites", level="ERROR"):
            self.store = FavoritesStore(db_path=self.db_path)

    def tearDown(self) -> None:
        self.store.close()

    def test_store_is_not_available(self) -> None:
        self.assertFalse(self.store.available)

    def test_reads_fall_back_to_empty(self) -> None:
        with self.assertLogs("product_advisor.favorites", level="ERROR"):
            self.assertEqual(self.store.get_all(), [])
            self.assertEqual(self.store.count(), 0)
            self.assertFalse(self.store.contains(1))

    def test_mutations_are_noops(self) -> None:
        with self.assertLogs("product_advisor.favorites", level="ERROR"):
            self.assertFalse(self.store.add(_p(1)))
            self.assertFalse(self.store.remove(1))
            self.assertFalse(self.store.toggle(_p(1)))
            self.assertEqual(self.store.clear(), 0)

    def test_file_left_untouched(self) -> None:
        self.store.add(_p(1))
        self.assertEqual(
            self.db_path.read_bytes(),
            b"this is not a sqlite database at all" * 10,
        )


if __name__ == "__main__":
    unittest.main()
