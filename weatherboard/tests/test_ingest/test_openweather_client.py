"""Tests for the OpenWeather API client with mocked httpx."""

import httpx
import pytest
import respx

from weatherboard.ingest.openweather_client import (
    LocationNotFoundError,
    OpenWeatherClient,
    ProviderError,
    ProviderUnavailableError,
)
from weatherboard.models.weather import Coordinates

BASE = "https://test-owm.example.com/data/2.5"


@pytest.fixture
def client() -> OpenWeatherClient:
    return OpenWeatherClient(
        api_key="test-key",
        base_url=BASE,
        max_retries=1,
        retry_base_delay=0.0,  # Fast retries in tests
    )


class TestInit:
    def test_missing_key(self, monkeypatch):
        monkeypatch.delenv("OPENWEATHER_API_KEY", raising=False)
        with pytest.raises(ProviderError, match="OPENWEATHER_API_KEY"):
            OpenWeatherClient()

    def test_key_from_env(self, monkeypatch):
        monkeypatch.setenv("OPENWEATHER_API_KEY", "env-key")
        assert OpenWeatherClient().api_key == "env-key"


class TestGetCurrent:
    @pytest.mark.asyncio
    @respx.mock
    async def test_by_name(self, client: OpenWeatherClient, london_current: dict):
        route = respx.get(f"{BASE}/weather").mock(
            return_value=httpx.Response(200, json=london_current)
        )
        result = await client.get_current("London")
        await client.aclose()

        assert result["id"] == 2643743
        params = route.calls[0].request.url.params
        assert params["q"] == "London"
        assert params["appid"] == "test-key"
        assert params["units"] == "metric"

    @pytest.mark.asyncio
    @respx.mock
    async def test_by_coords(self, client: OpenWeatherClient, london_forecast: dict):
        route = respx.get(f"{BASE}/forecast").mock(
            return_value=httpx.Response(200, json=london_forecast)
        )
        result = await client.get_forecast(Coordinates(51.5, -0.12))
        await client.aclose()

        assert len(result["list"]) == 6
        params = route.calls[0].request.url.params
        assert params["lat"] == "51.5"
        assert params["lon"] == "-0.12"
        assert "q" not in params

    @pytest.mark.asyncio
    @respx.mock
    async def test_user_agent_header(self, client: OpenWeatherClient, london_current: dict):
        route = respx.get(f"{BASE}/weather").mock(
            return_value=httpx.Response(200, json=london_current)
        )
        await client.get_current("London")
        await client.aclose()
        assert "weatherboard" in route.calls[0].request.headers["user-agent"]


class TestErrors:
    @pytest.mark.asyncio
    @respx.mock
    async def test_404_is_not_found(self, client: OpenWeatherClient):
        respx.get(f"{BASE}/weather").mock(
            return_value=httpx.Response(404, json={"cod": "404", "message": "city not found"})
        )
        with pytest.raises(LocationNotFoundError) as exc:
            await client.get_current("Atlantis")
        assert exc.value.status_code == 404

    @pytest.mark.asyncio
    @respx.mock
    async def test_retry_on_503(self, client: OpenWeatherClient, london_current: dict):
        route = respx.get(f"{BASE}/weather").mock(
            side_effect=[
                httpx.Response(503),
                httpx.Response(200, json=london_current),
            ]
        )
        result = await client.get_current("London")
        assert result["name"] == "London"
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_exhausted_retries(self, client: OpenWeatherClient):
        route = respx.get(f"{BASE}/weather").mock(return_value=httpx.Response(503))
        with pytest.raises(ProviderUnavailableError) as exc:
            await client.get_current("London")
        assert exc.value.status_code == 503
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_server_error_not_retried(self, client: OpenWeatherClient):
        route = respx.get(f"{BASE}/weather").mock(return_value=httpx.Response(500))
        with pytest.raises(ProviderUnavailableError):
            await client.get_current("London")
        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_error(self, client: OpenWeatherClient):
        route = respx.get(f"{BASE}/weather").mock(
            side_effect=httpx.ConnectError("refused")
        )
        with pytest.raises(ProviderUnavailableError, match="Request failed"):
            await client.get_current("London")
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_invalid_json(self, client: OpenWeatherClient):
        respx.get(f"{BASE}/weather").mock(
            return_value=httpx.Response(200, content=b"<html>oops</html>")
        )
        with pytest.raises(ProviderUnavailableError, match="Invalid JSON"):
            await client.get_current("London")
