"""Forecast fetcher: retrieves Open-Meteo hourly/daily/current forecasts."""

import logging
from typing import Any

from roadwx.config.schema import FORECAST_URL
from roadwx.ingest.http_client import HttpClient
from roadwx.ingest.series import (
    first_array,
    safe_float,
    safe_index,
    safe_int,
    series_times,
)
from roadwx.models.forecast import (
    CurrentConditions,
    DailyPoint,
    ForecastResult,
    HourlyPoint,
)

logger = logging.getLogger(__name__)

# HourlyPoint field -> Open-Meteo variable names, first present wins
HOURLY_VARIABLES: dict[str, tuple[str, ...]] = {
    "temperature": ("temperature_2m",),
    "apparent_temperature": ("apparent_temperature",),
    "precipitation": ("precipitation",),
    "humidity": ("relative_humidity_2m", "relativehumidity_2m"),
    "wind_speed": ("wind_speed_10m", "windspeed_10m"),
    "wind_direction": ("wind_direction_10m", "winddirection_10m"),
    "wind_gusts": ("wind_gusts_10m", "windgusts_10m"),
    "cloud_cover": ("cloud_cover", "cloudcover"),
    "visibility": ("visibility",),
    "uv_index": ("uv_index",),
    "weather_code": ("weather_code", "weathercode"),
}

DAILY_VARIABLES: dict[str, tuple[str, ...]] = {
    "temp_max": ("temperature_2m_max",),
    "temp_min": ("temperature_2m_min",),
    "weather_code": ("weather_code", "weathercode"),
    "sunrise": ("sunrise",),
    "sunset": ("sunset",),
    "uv_index_max": ("uv_index_max",),
}

_INT_FIELDS = {"weather_code"}
_STR_FIELDS = {"sunrise", "sunset"}


class ForecastFetcher:
    def __init__(self, http: HttpClient, base_url: str = FORECAST_URL):
        self.http = http
        self.base_url = base_url

    def fetch(self, lat: float, lon: float) -> ForecastResult:
        """Fetch and parse the forecast for coordinates.

        Raises UpstreamError if the request fails. Variables missing from
        the payload become None rather than failing the parse.
        """
        params = {
            "latitude": lat,
            "longitude": lon,
            "hourly": ",".join(names[0] for names in HOURLY_VARIABLES.values()),
            "daily": ",".join(names[0] for names in DAILY_VARIABLES.values()),
            "current_weather": "true",
            "timezone": "auto",
        }
        raw = self.http.get_json(self.base_url, params=params)
        result = parse_forecast(raw if isinstance(raw, dict) else {})
        logger.info(
            "Fetched forecast for %.4f,%.4f: %d hours, %d days (tz=%s)",
            lat, lon, len(result.hourly), len(result.daily), result.timezone,
        )
        return result


def parse_forecast(raw: dict) -> ForecastResult:
    hourly = [
        HourlyPoint(time=t, **fields)
        for t, fields in _zip_series(raw.get("hourly"), HOURLY_VARIABLES)
    ]
    daily = [
        DailyPoint(date=d, **fields)
        for d, fields in _zip_series(raw.get("daily"), DAILY_VARIABLES)
    ]
    return ForecastResult(
        timezone=raw.get("timezone"),
        current=_parse_current(raw.get("current_weather")),
        hourly=hourly,
        daily=daily,
    )


def _parse_current(block: Any) -> CurrentConditions | None:
    if not isinstance(block, dict) or not block.get("time"):
        return None
    return CurrentConditions(
        time=block["time"],
        temperature=safe_float(block.get("temperature")),
        weather_code=safe_int(block.get("weathercode", block.get("weather_code"))),
    )


def _zip_series(
    block: Any, variables: dict[str, tuple[str, ...]]
) -> list[tuple[str, dict[str, Any]]]:
    """Zip Open-Meteo parallel arrays into (time key, field values) rows.

    Rows keep the order of the time array; a repeated time key is dropped.
    """
    times = series_times(block)
    if not times:
        return []

    arrays = {field: first_array(block, names) for field, names in variables.items()}
    rows: list[tuple[str, dict[str, Any]]] = []
    seen: set[str] = set()
    for idx, t in enumerate(times):
        if not isinstance(t, str) or t in seen:
            continue
        seen.add(t)
        fields: dict[str, Any] = {}
        for field, values in arrays.items():
            value = safe_index(values, idx)
            if field in _INT_FIELDS:
                fields[field] = safe_int(value)
            elif field in _STR_FIELDS:
                fields[field] = value if isinstance(value, str) else None
            else:
                fields[field] = safe_float(value)
        rows.append((t, fields))
    return rows
