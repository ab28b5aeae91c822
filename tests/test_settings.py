# tests/test_settings.py

"""Tests for the Settings configuration class."""

import unittest
from pathlib import Path

from src.config.settings import Settings


class TestSettings(unittest.TestCase):
    """Verify Settings constants."""

    def test_remote_timeout_is_positive_int(self) -> None:
        """REMOTE_TIMEOUT must be a positive integer."""
        self.assertIsInstance(Settings.REMOTE_TIMEOUT, int)
        self.assertGreater(Settings.REMOTE_TIMEOUT, 0)

    def test_max_recommendations_is_five(self) -> None:
        """At most five recommendations are returned."""
        self.assertEqual(Settings.MAX_RECOMMENDATIONS, 5)

    def test_scoring_weights(self) -> None:
        """Heuristic weights match the documented scorer."""
        self.assertEqual(Settings.TOKEN_MATCH_POINTS, 20)
        self.assertEqual(Settings.CATEGORY_BONUS, 30)
        self.assertEqual(Settings.BRAND_BONUS, 15)

    def test_heuristic_cap_below_remote_max(self) -> None:
        """The local cap leaves headroom for remote confidence."""
        self.assertLess(
            Settings.HEURISTIC_SCORE_CAP, Settings.REMOTE_SCORE_MAX
        )

    def test_sort_keys_include_relevance(self) -> None:
        """relevance is the default browse order."""
        self.assertIn("relevance", Settings.SORT_KEYS)
        self.assertEqual(len(Settings.SORT_KEYS), 4)

    def test_example_queries_non_empty(self) -> None:
        """Every example query has text."""
        self.assertTrue(Settings.EXAMPLE_QUERIES)
        for example in Settings.EXAMPLE_QUERIES:
            with self.subTest(example=example):
                self.assertTrue(example.strip())

    def test_path_constants_are_paths(self) -> None:
        """Path-typed settings are Path instances."""
        self.assertIsInstance(Settings.BASE_DIR, Path)
        self.assertIsInstance(Settings.CATALOG_PATH, Path)
        self.assertIsInstance(Settings.FAVORITES_DB_PATH, Path)
        self.assertIsInstance(Settings.LOGS_DIR, Path)

    def test_catalog_path_exists(self) -> None:
        """The bundled catalog.json must exist on disk."""
        self.assertTrue(Settings.CATALOG_PATH.exists())

    def test_base_url_has_no_trailing_model(self) -> None:
        """The model is appended by the backend, not baked in the URL."""
        self.assertNotIn(":generateContent", Settings.GEMINI_BASE_URL)


if __name__ == "__main__":
    unittest.main()
