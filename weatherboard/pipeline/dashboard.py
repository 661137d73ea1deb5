"""Dashboard service: search, geolocate, remove and refresh tracked locations."""

import logging

from weatherboard.config.schema import DashboardConfig
from weatherboard.ingest.geolocation import GeolocationError, Geolocator
from weatherboard.ingest.location_fetcher import LocationFetcher
from weatherboard.ingest.openweather_client import LocationNotFoundError, ProviderError
from weatherboard.models.reporting import RefreshSummary
from weatherboard.models.weather import LocationRecord
from weatherboard.pipeline.refresh import refresh_all
from weatherboard.registry.location_registry import LocationRegistry

logger = logging.getLogger(__name__)


class DashboardError(Exception):
    """User-facing failure of a single-location operation."""


class WeatherDashboard:
    def __init__(
        self,
        registry: LocationRegistry,
        fetcher: LocationFetcher,
        geolocator: Geolocator,
        config: DashboardConfig | None = None,
    ):
        self.registry = registry
        self.fetcher = fetcher
        self.geolocator = geolocator
        self.config = config or DashboardConfig()

    async def start(self) -> RefreshSummary | None:
        """Load stored locations, then refresh them, or locate the user if there are none."""
        self.registry.load()
        if len(self.registry) > 0:
            return await self.refresh()
        try:
            await self.locate_me()
        except DashboardError as e:
            logger.warning("Startup geolocation skipped: %s", e)
        return None

    async def search_city(self, name: str) -> LocationRecord | None:
        """Fetch a city by name and track it. Blank names are ignored."""
        name = name.strip()
        if not name:
            return None
        try:
            record = await self.fetcher.fetch_by_name(name)
        except LocationNotFoundError as e:
            logger.info("No match for %r: %s", name, e)
            raise DashboardError(f'Could not find weather data for "{name}"') from e
        except ProviderError as e:
            logger.warning("Search for %r failed: %s", name, e)
            raise DashboardError(f'Could not find weather data for "{name}"') from e
        self.registry.upsert(record)
        return record

    async def locate_me(self) -> LocationRecord:
        """Track the location reported by the geolocator."""
        try:
            coords = await self.geolocator.locate()
        except GeolocationError as e:
            raise DashboardError("Unable to retrieve your location") from e
        try:
            record = await self.fetcher.fetch_by_coords(coords)
        except ProviderError as e:
            logger.warning("Fetch for %s failed: %s", coords, e)
            raise DashboardError("Could not fetch weather for your location") from e
        self.registry.upsert(record)
        return record

    def remove_city(self, location_id: int) -> None:
        self.registry.remove(location_id)

    async def refresh(self) -> RefreshSummary:
        return await refresh_all(
            self.registry,
            self.fetcher.fetch_by_name,
            timeout=self.config.fetch_timeout_seconds,
            drop_failed=self.config.drop_failed_on_refresh,
        )
