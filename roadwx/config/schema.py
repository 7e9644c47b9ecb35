"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

from roadwx.models.common import UnitSystem

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
AIR_QUALITY_URL = "https://air-quality-api.open-meteo.com/v1/air-quality"
REVERSE_GEOCODING_URL = "https://nominatim.openstreetmap.org/reverse"

MAX_OUTLOOK_HOURS = 48


class EndpointsConfig(BaseModel):
    model_config = {"extra": "forbid"}

    geocoding_url: str = GEOCODING_URL
    forecast_url: str = FORECAST_URL
    air_quality_url: str = AIR_QUALITY_URL
    reverse_geocoding_url: str = REVERSE_GEOCODING_URL


class HttpConfig(BaseModel):
    model_config = {"extra": "forbid"}

    timeout_seconds: float = Field(default=10.0, gt=0.0)
    # Nominatim rejects requests without an identifying User-Agent
    user_agent: str = Field(default="roadwx/0.1.0", min_length=1)


class CacheConfig(BaseModel):
    model_config = {"extra": "forbid"}

    enabled: bool = True
    ttl_minutes: int = Field(default=15, ge=1)
    capacity: int = Field(default=5, ge=1)
    db_path: str = "data/roadwx.db"
    storage_key: str = Field(default="roadwx.weatherCache.v1", min_length=1)


class DisplayConfig(BaseModel):
    model_config = {"extra": "forbid"}

    unit_system: UnitSystem = UnitSystem.IMPERIAL
    outlook_hours: int = Field(default=6, ge=1, le=MAX_OUTLOOK_HOURS)


class RoadwxConfig(BaseModel):
    model_config = {"extra": "forbid"}

    endpoints: EndpointsConfig = EndpointsConfig()
    http: HttpConfig = HttpConfig()
    cache: CacheConfig = CacheConfig()
    display: DisplayConfig = DisplayConfig()
