"""Geolocation capability: resolves the user's current position."""

from typing import Protocol

from weatherboard.models.weather import Coordinates


class GeolocationError(Exception):
    """Raised when no position is available."""


class Geolocator(Protocol):
    async def locate(self) -> Coordinates: ...


class ConfiguredGeolocator:
    """Returns fixed home coordinates from config."""

    def __init__(self, coords: Coordinates | None):
        self.coords = coords

    async def locate(self) -> Coordinates:
        if self.coords is None:
            raise GeolocationError("No home location configured")
        return self.coords
