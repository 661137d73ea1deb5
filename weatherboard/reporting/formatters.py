"""Output formatters for the weather dashboard."""

import json
from collections.abc import Sequence
from datetime import date, datetime
from enum import StrEnum

from weatherboard.forecast.aggregator import summarize
from weatherboard.models.reporting import RefreshSummary
from weatherboard.models.weather import DailySummary, LocationRecord, record_to_dict

EMPTY_MESSAGE = "No cities added yet. Search for a city or use your current location."


class ConditionCategory(StrEnum):
    THUNDERSTORM = "thunderstorm"
    DRIZZLE = "drizzle"
    RAIN = "rain"
    SNOW = "snow"
    ATMOSPHERE = "atmosphere"
    CLEAR = "clear"
    CLOUDS = "clouds"


def condition_category(code: int) -> ConditionCategory:
    """Map an OpenWeather condition code to its icon category."""
    if 200 <= code < 300:
        return ConditionCategory.THUNDERSTORM
    if 300 <= code < 400:
        return ConditionCategory.DRIZZLE
    if 500 <= code < 600:
        return ConditionCategory.RAIN
    if 600 <= code < 700:
        return ConditionCategory.SNOW
    if 700 <= code < 800:
        return ConditionCategory.ATMOSPHERE
    if code == 800:
        return ConditionCategory.CLEAR
    return ConditionCategory.CLOUDS


def format_card(record: LocationRecord, daily: Sequence[DailySummary]) -> str:
    """Plain text card for one location."""
    c = record.current
    observed = datetime.fromtimestamp(c.timestamp).strftime("%A, %B %d, %Y")
    lines = [
        f"{c.name}, {c.country} [id {c.id}]",
        observed,
        f"{round(c.temperature)}°C  {c.description} ({condition_category(c.condition_code)})",
        f"Feels like: {round(c.feels_like)}°C | Humidity: {c.humidity}% | "
        f"Wind: {c.wind_speed} m/s | Pressure: {c.pressure} hPa",
    ]
    if daily:
        lines.append(f"{len(daily)}-Day Forecast:")
        for d in daily:
            lines.append(
                f"  {d.day_label}  {round(d.average_temp)}°C  "
                f"{condition_category(d.condition_code)}"
            )
    return "\n".join(lines)


def format_dashboard(
    records: Sequence[LocationRecord],
    reference_date: date | None = None,
    horizon_days: int = 3,
) -> str:
    """All cards separated by blank lines, or the empty-state message."""
    if not records:
        return EMPTY_MESSAGE
    ref = reference_date or date.today()
    return "\n\n".join(
        format_card(r, summarize(r.forecast, ref, horizon_days)) for r in records
    )


def format_records_json(records: Sequence[LocationRecord]) -> str:
    """JSON list of records for programmatic consumption."""
    return json.dumps([record_to_dict(r) for r in records], indent=2)


def format_refresh_text(s: RefreshSummary) -> str:
    line = f"Refreshed {s.refreshed}/{s.requested} location(s) in {s.duration_seconds:.1f}s"
    if s.failed:
        line += f" | dropped or stale: {', '.join(s.failed)}"
    return line
