"""Weather data models: current conditions, forecast samples, tracked locations."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Sample:
    """One forecast data point (3-hourly from the provider)."""

    timestamp: int  # seconds since epoch
    temperature: float
    condition_code: int


@dataclass(frozen=True)
class CurrentConditions:
    id: int
    name: str
    country: str
    timestamp: int
    temperature: float
    feels_like: float
    humidity: int
    wind_speed: float
    pressure: int
    condition_code: int
    description: str


@dataclass(frozen=True)
class LocationRecord:
    current: CurrentConditions
    forecast: tuple[Sample, ...] = ()

    @property
    def id(self) -> int:
        return self.current.id

    @property
    def name(self) -> str:
        return self.current.name


@dataclass(frozen=True)
class DailySummary:
    day_label: str
    average_temp: float
    condition_code: int


def record_to_dict(record: LocationRecord) -> dict[str, Any]:
    """Serialize a record to the JSON-compatible shape used for persistence."""
    c = record.current
    return {
        "current": {
            "id": c.id,
            "name": c.name,
            "country": c.country,
            "timestamp": c.timestamp,
            "temperature": c.temperature,
            "feels_like": c.feels_like,
            "humidity": c.humidity,
            "wind_speed": c.wind_speed,
            "pressure": c.pressure,
            "condition_code": c.condition_code,
            "description": c.description,
        },
        "forecast": [
            [s.timestamp, s.temperature, s.condition_code] for s in record.forecast
        ],
    }


def record_from_dict(data: Any) -> LocationRecord:
    """Inverse of record_to_dict.

    Raises ValueError if the data does not have the persisted shape.
    """
    try:
        c = data["current"]
        current = CurrentConditions(
            id=int(c["id"]),
            name=str(c["name"]),
            country=str(c["country"]),
            timestamp=int(c["timestamp"]),
            temperature=float(c["temperature"]),
            feels_like=float(c["feels_like"]),
            humidity=int(c["humidity"]),
            wind_speed=float(c["wind_speed"]),
            pressure=int(c["pressure"]),
            condition_code=int(c["condition_code"]),
            description=str(c["description"]),
        )
        forecast = tuple(
            Sample(timestamp=int(ts), temperature=float(temp), condition_code=int(code))
            for ts, temp, code in data["forecast"]
        )
    except (KeyError, TypeError, ValueError, OverflowError) as e:
        raise ValueError(f"Invalid location record: {e}") from e
    return LocationRecord(current=current, forecast=forecast)
