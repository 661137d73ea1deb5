"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field

from weatherboard.models.weather import Coordinates


class Units(StrEnum):
    METRIC = "metric"


class ProviderConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = "https://api.openweathermap.org/data/2.5"
    units: Units = Units.METRIC
    timeout: float = Field(default=10.0, gt=0.0)
    max_retries: int = Field(default=2, ge=0)
    retry_base_delay: float = Field(default=1.0, ge=0.0)


class DashboardConfig(BaseModel):
    model_config = {"extra": "forbid"}

    forecast_days: int = Field(default=3, ge=1, le=5)
    fetch_timeout_seconds: float = Field(default=10.0, gt=0.0)
    drop_failed_on_refresh: bool = True
    storage_key: str = "weatherCities"
    home_latitude: float | None = Field(default=None, ge=-90.0, le=90.0)
    home_longitude: float | None = Field(default=None, ge=-180.0, le=180.0)

    @property
    def home(self) -> Coordinates | None:
        if self.home_latitude is None or self.home_longitude is None:
            return None
        return Coordinates(self.home_latitude, self.home_longitude)


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    provider: ProviderConfig = ProviderConfig()
    dashboard: DashboardConfig = DashboardConfig()
