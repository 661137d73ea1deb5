"""OpenWeatherMap 2.5 API client with retry and rate limit handling."""

import asyncio
import logging
import os

import httpx

from weatherboard.models.weather import Coordinates

logger = logging.getLogger(__name__)

OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"
DEFAULT_USER_AGENT = "weatherboard/0.1.0"

LocationQuery = str | Coordinates


class ProviderError(Exception):
    """Raised when the weather provider cannot satisfy a request."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class LocationNotFoundError(ProviderError):
    """The query matched no known location."""


class ProviderUnavailableError(ProviderError):
    """Transport or service level failure."""


class OpenWeatherClient:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = OPENWEATHER_BASE_URL,
        units: str = "metric",
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 10.0,
        max_retries: int = 2,
        retry_base_delay: float = 1.0,
        http: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key or os.environ.get("OPENWEATHER_API_KEY", "")
        if not self.api_key:
            raise ProviderError("OPENWEATHER_API_KEY not set")
        self.base_url = base_url.rstrip("/")
        self.units = units
        self.user_agent = user_agent
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay
        self._http = http

    async def get_current(self, query: LocationQuery) -> dict:
        """Fetch current conditions for a city name or coordinate pair."""
        return await self._get("/weather", query)

    async def get_forecast(self, query: LocationQuery) -> dict:
        """Fetch the 5-day / 3-hour forecast for a city name or coordinate pair."""
        return await self._get("/forecast", query)

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
            )
        return self._http

    def _params(self, query: LocationQuery) -> dict[str, str]:
        params = {"appid": self.api_key, "units": self.units}
        if isinstance(query, Coordinates):
            params["lat"] = str(query.latitude)
            params["lon"] = str(query.longitude)
        else:
            params["q"] = query
        return params

    async def _get(self, endpoint: str, query: LocationQuery) -> dict:
        """GET an endpoint. Retries on 503/429 and transport errors with exponential backoff."""
        url = f"{self.base_url}{endpoint}"
        params = self._params(query)

        for attempt in range(self.max_retries + 1):
            try:
                resp = await self._client().get(url, params=params)
            except httpx.RequestError as e:
                if attempt < self.max_retries:
                    delay = self.retry_base_delay * (2**attempt)
                    logger.warning(
                        "OpenWeather request error, retrying in %.1fs: %s", delay, e
                    )
                    await asyncio.sleep(delay)
                    continue
                raise ProviderUnavailableError(f"Request failed: {e}") from e

            if resp.status_code in (503, 429) and attempt < self.max_retries:
                delay = self.retry_base_delay * (2**attempt)
                logger.warning(
                    "OpenWeather %s returned %d, retrying in %.1fs (attempt %d/%d)",
                    endpoint, resp.status_code, delay, attempt + 1, self.max_retries,
                )
                await asyncio.sleep(delay)
                continue
            if resp.status_code == 404:
                raise LocationNotFoundError(f"Location not found: {query}", 404)
            if resp.status_code >= 400:
                body = resp.text[:300]
                logger.error("OpenWeather %d: %s -> %s", resp.status_code, endpoint, body)
                raise ProviderUnavailableError(
                    f"HTTP {resp.status_code}: {body}", resp.status_code
                )
            try:
                return resp.json()
            except ValueError as e:
                raise ProviderUnavailableError(f"Invalid JSON from {endpoint}: {e}") from e

        raise ProviderUnavailableError(f"Retries exhausted for {endpoint}")
