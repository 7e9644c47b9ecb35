"""Forecast data models and their plain-dict codec for persistence."""

from dataclasses import asdict, dataclass, field, replace
from typing import Any

from roadwx.models.air_quality import AirQualitySample, AqiCategory


@dataclass(frozen=True)
class CurrentConditions:
    time: str
    temperature: float | None
    weather_code: int | None


@dataclass(frozen=True)
class HourlyPoint:
    time: str  # YYYY-MM-DDTHH:MM, local civil time of the location
    temperature: float | None = None
    apparent_temperature: float | None = None
    precipitation: float | None = None
    weather_code: int | None = None
    humidity: float | None = None
    wind_speed: float | None = None
    wind_direction: float | None = None
    wind_gusts: float | None = None
    cloud_cover: float | None = None
    visibility: float | None = None
    uv_index: float | None = None
    air_quality: AirQualitySample | None = None
    air_quality_summary: str | None = None

    def with_air_quality(self, sample: AirQualitySample) -> "HourlyPoint":
        return replace(self, air_quality=sample, air_quality_summary=sample.summary)


@dataclass(frozen=True)
class DailyPoint:
    date: str  # YYYY-MM-DD
    temp_max: float | None = None
    temp_min: float | None = None
    weather_code: int | None = None
    sunrise: str | None = None
    sunset: str | None = None
    uv_index_max: float | None = None


@dataclass(frozen=True)
class ForecastResult:
    """Parsed forecast response, before location and air quality are joined."""

    timezone: str | None
    current: CurrentConditions | None
    hourly: list[HourlyPoint]
    daily: list[DailyPoint]


@dataclass(frozen=True)
class WeatherSnapshot:
    lat: float
    lon: float
    label: str
    timezone: str | None
    fetched_at: str
    current: CurrentConditions | None = None
    hourly: list[HourlyPoint] = field(default_factory=list)
    daily: list[DailyPoint] = field(default_factory=list)


def snapshot_to_dict(snapshot: WeatherSnapshot) -> dict[str, Any]:
    return asdict(snapshot)


def snapshot_from_dict(data: dict[str, Any]) -> WeatherSnapshot:
    """Rebuild a snapshot from the output of snapshot_to_dict (or its JSON)."""
    current_raw = data.get("current")
    current = CurrentConditions(**current_raw) if current_raw else None
    return WeatherSnapshot(
        lat=data["lat"],
        lon=data["lon"],
        label=data["label"],
        timezone=data.get("timezone"),
        fetched_at=data["fetched_at"],
        current=current,
        hourly=[_hourly_from_dict(h) for h in data.get("hourly") or []],
        daily=[DailyPoint(**d) for d in data.get("daily") or []],
    )


def _hourly_from_dict(data: dict[str, Any]) -> HourlyPoint:
    fields = dict(data)
    aq_raw = fields.pop("air_quality", None)
    if aq_raw:
        aq_fields = dict(aq_raw)
        aq_fields["category"] = AqiCategory(aq_fields["category"])
        fields["air_quality"] = AirQualitySample(**aq_fields)
    return HourlyPoint(**fields)
