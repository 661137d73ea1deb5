"""Test helpers: record builders and an in-memory store."""

from collections.abc import Sequence

from weatherboard.models.weather import CurrentConditions, LocationRecord, Sample
from weatherboard.storage.city_store import PersistenceError


def make_record(
    location_id: int,
    name: str = "City",
    temperature: float = 20.0,
    forecast: Sequence[Sample] = (),
) -> LocationRecord:
    return LocationRecord(
        current=CurrentConditions(
            id=location_id,
            name=name,
            country="GB",
            timestamp=1760882400,
            temperature=temperature,
            feels_like=temperature - 1,
            humidity=70,
            wind_speed=3.5,
            pressure=1012,
            condition_code=800,
            description="clear sky",
        ),
        forecast=tuple(forecast),
    )


class FakeStore:
    """In-memory CityStore that records every save."""

    def __init__(self, initial: list[LocationRecord] | None = None, fail_saves: bool = False):
        self.initial = list(initial or [])
        self.fail_saves = fail_saves
        self.saves: list[list[LocationRecord]] = []

    def load_cities(self) -> list[LocationRecord]:
        return list(self.initial)

    def save_cities(self, records: Sequence[LocationRecord]) -> None:
        if self.fail_saves:
            raise PersistenceError("disk full")
        self.saves.append(list(records))
