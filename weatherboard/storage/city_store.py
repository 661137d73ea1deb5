"""Repository for the persisted list of tracked locations."""

import json
import logging
import sqlite3
from collections.abc import Sequence

from weatherboard.models.weather import LocationRecord, record_from_dict, record_to_dict

logger = logging.getLogger(__name__)

DEFAULT_KEY = "weatherCities"


class PersistenceError(Exception):
    """Raised when the store rejects a save."""


def get_value(conn: sqlite3.Connection, key: str) -> str | None:
    row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
    if row is None:
        return None
    return row[0]


def set_value(conn: sqlite3.Connection, key: str, value: str) -> None:
    conn.execute(
        "INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP) "
        "ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = CURRENT_TIMESTAMP",
        (key, value),
    )
    conn.commit()


class SqliteCityStore:
    """Stores the whole location list as one JSON document under a single key."""

    def __init__(self, conn: sqlite3.Connection, key: str = DEFAULT_KEY):
        self.conn = conn
        self.key = key

    def load_cities(self) -> list[LocationRecord]:
        """Load stored records. Missing or malformed data yields an empty list."""
        try:
            raw = get_value(self.conn, self.key)
        except sqlite3.Error:
            logger.exception("Failed to read %r from store", self.key)
            return []
        if raw is None:
            return []
        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"expected a list, got {type(data).__name__}")
            return [record_from_dict(item) for item in data]
        except ValueError as e:
            logger.warning("Ignoring malformed stored state under %r: %s", self.key, e)
            return []

    def save_cities(self, records: Sequence[LocationRecord]) -> None:
        """Overwrite the stored list with the given records."""
        payload = json.dumps([record_to_dict(r) for r in records])
        try:
            set_value(self.conn, self.key, payload)
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to save {len(records)} location(s): {e}") from e
        logger.debug("Saved %d location(s) under %r", len(records), self.key)
