"""Cache entry model."""

from dataclasses import dataclass

from roadwx.models.forecast import WeatherSnapshot


@dataclass(frozen=True)
class CacheEntry:
    key: str
    fetched_at: float  # epoch seconds
    expires_at: float  # epoch seconds
    snapshot: WeatherSnapshot
