"""Air-quality sample models."""

from dataclasses import dataclass
from enum import StrEnum


class AqiCategory(StrEnum):
    GOOD = "good"
    MODERATE = "moderate"
    UNHEALTHY = "unhealthy"
    VERY_UNHEALTHY = "very_unhealthy"
    HAZARDOUS = "hazardous"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class AirQualitySample:
    pm10: float | None
    pm2_5: float | None
    dust: float | None
    uv_index: float | None
    us_aqi: float | None
    category: AqiCategory
    summary: str
