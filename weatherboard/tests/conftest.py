"""Shared test fixtures."""

import json
import sqlite3
from pathlib import Path

import pytest

from weatherboard.storage.database import connect, run_migrations
from weatherboard.tests.helpers import FakeStore

FIXTURE_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def db(tmp_path: Path) -> sqlite3.Connection:
    conn = connect(tmp_path / "test.db")
    run_migrations(conn)
    yield conn
    conn.close()


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def london_current() -> dict:
    with open(FIXTURE_DIR / "openweather_current_london.json") as f:
        return json.load(f)


@pytest.fixture
def london_forecast() -> dict:
    with open(FIXTURE_DIR / "openweather_forecast_london.json") as f:
        return json.load(f)
