"""Location fetcher: retrieves current conditions and forecast for one location."""

import logging

from weatherboard.ingest.openweather_client import (
    LocationQuery,
    OpenWeatherClient,
    ProviderUnavailableError,
)
from weatherboard.models.weather import (
    Coordinates,
    CurrentConditions,
    LocationRecord,
    Sample,
)

logger = logging.getLogger(__name__)


class LocationFetcher:
    def __init__(self, client: OpenWeatherClient):
        self.client = client

    async def fetch(self, query: LocationQuery) -> LocationRecord:
        """Fetch and decode current conditions plus forecast.

        Provider errors propagate unchanged; a malformed payload raises
        ProviderUnavailableError.
        """
        raw_current = await self.client.get_current(query)
        raw_forecast = await self.client.get_forecast(query)
        try:
            record = LocationRecord(
                current=parse_current(raw_current),
                forecast=tuple(parse_forecast(raw_forecast)),
            )
        except (
            AttributeError, KeyError, IndexError, TypeError, ValueError, OverflowError,
        ) as e:
            raise ProviderUnavailableError(f"Unexpected payload for {query}: {e!r}") from e
        logger.debug(
            "Fetched %s (id=%d) with %d forecast samples",
            record.name, record.id, len(record.forecast),
        )
        return record

    async def fetch_by_name(self, name: str) -> LocationRecord:
        return await self.fetch(name)

    async def fetch_by_coords(self, coords: Coordinates) -> LocationRecord:
        return await self.fetch(coords)


def parse_current(raw: dict) -> CurrentConditions:
    """Decode an OpenWeather /weather response."""
    main = raw["main"]
    weather = raw["weather"][0]
    return CurrentConditions(
        id=int(raw["id"]),
        name=raw["name"],
        country=(raw.get("sys") or {}).get("country", ""),
        timestamp=int(raw["dt"]),
        temperature=float(main["temp"]),
        feels_like=float(main["feels_like"]),
        humidity=int(main["humidity"]),
        wind_speed=float((raw.get("wind") or {}).get("speed", 0.0)),
        pressure=int(main["pressure"]),
        condition_code=int(weather["id"]),
        description=weather.get("description", ""),
    )


def parse_forecast(raw: dict) -> list[Sample]:
    """Decode an OpenWeather /forecast response into samples, in provider order."""
    return [
        Sample(
            timestamp=int(item["dt"]),
            temperature=float(item["main"]["temp"]),
            condition_code=int(item["weather"][0]["id"]),
        )
        for item in raw["list"]
    ]
