"""Ordered, deduplicated collection of tracked locations backed by a store."""

import logging
import threading
from collections.abc import Iterable, Iterator, Sequence
from typing import Protocol

from weatherboard.models.weather import LocationRecord

logger = logging.getLogger(__name__)


class CityStore(Protocol):
    def load_cities(self) -> list[LocationRecord]: ...

    def save_cities(self, records: Sequence[LocationRecord]) -> None: ...


class PresentationSink(Protocol):
    def render(self, records: Sequence[LocationRecord]) -> None: ...


class LocationRegistry:
    """Tracked locations keyed by ``current.id``, in insertion order.

    Every mutation writes the full list to the store and then notifies the
    sink. A failed write propagates to the caller but the in-memory change
    stays in place; the next successful save brings the store back in line.
    Sink errors are logged and never mask the outcome of the write.
    """

    def __init__(self, store: CityStore, sink: PresentationSink | None = None):
        self.store = store
        self.sink = sink
        self._records: list[LocationRecord] = []
        self._lock = threading.RLock()

    @property
    def records(self) -> tuple[LocationRecord, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[LocationRecord]:
        return iter(self.records)

    def __contains__(self, location_id: object) -> bool:
        return any(r.id == location_id for r in self._records)

    def get(self, location_id: int) -> LocationRecord | None:
        for r in self._records:
            if r.id == location_id:
                return r
        return None

    def load(self) -> None:
        """Replace in-memory state with the stored list."""
        with self._lock:
            self._records = _dedupe(self.store.load_cities())
        logger.info("Loaded %d tracked location(s)", len(self._records))

    def save(self) -> None:
        with self._lock:
            self.store.save_cities(self.records)

    def upsert(self, record: LocationRecord) -> None:
        """Replace the record with the same id in place, or append it."""
        with self._lock:
            for i, existing in enumerate(self._records):
                if existing.id == record.id:
                    self._records[i] = record
                    logger.info("Updated %s (id=%d)", record.name, record.id)
                    break
            else:
                self._records.append(record)
                logger.info("Added %s (id=%d)", record.name, record.id)
            self._commit()

    def remove(self, location_id: int) -> None:
        """Remove the record with that id. Absent ids are not an error."""
        with self._lock:
            before = len(self._records)
            self._records = [r for r in self._records if r.id != location_id]
            if len(self._records) < before:
                logger.info("Removed location id=%d", location_id)
            self._commit()

    def replace_all(self, records: Iterable[LocationRecord]) -> None:
        """Swap the entire contents in one step."""
        with self._lock:
            self._records = _dedupe(records)
            self._commit()

    def _commit(self) -> None:
        try:
            self.store.save_cities(self.records)
        finally:
            self._emit()

    def _emit(self) -> None:
        if self.sink is None:
            return
        try:
            self.sink.render(self.records)
        except Exception:
            logger.exception(
                "Presentation sink failed to render %d location(s)", len(self._records)
            )


def _dedupe(records: Iterable[LocationRecord]) -> list[LocationRecord]:
    """Collapse duplicate ids: first position wins, last value wins."""
    by_id: dict[int, LocationRecord] = {}
    for r in records:
        by_id[r.id] = r
    return list(by_id.values())
