# tests/conftest.py

"""Shared pytest fixtures for all product_advisor tests."""

from collections.abc import Generator
from pathlib import Path

import pytest

from src.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_settings(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
) -> Generator[None, None, None]:
    """Keep tests off the network and away from real user data."""
    monkeypatch.setattr(Settings, "GEMINI_API_KEY", "")
    monkeypatch.setattr(
        Settings, "FAVORITES_DB_PATH", tmp_path / "data" / "favorites.db",
    )
    monkeypatch.setattr(Settings, "LOGS_DIR", tmp_path / "logs")
    yield
