"""Join air-quality samples onto forecast hours by exact timestamp key."""

import logging

from roadwx.ingest.air_quality_fetcher import AirQualityFetcher
from roadwx.models.air_quality import AirQualitySample
from roadwx.models.forecast import HourlyPoint

logger = logging.getLogger(__name__)


def fetch_air_quality_or_none(
    fetcher: AirQualityFetcher, lat: float, lon: float, timezone: str | None
) -> dict[str, AirQualitySample] | None:
    """Fetch air quality, returning None instead of raising on any failure."""
    try:
        return fetcher.fetch(lat, lon, timezone)
    except Exception:
        logger.warning(
            "Air quality unavailable for %.4f,%.4f; continuing without it",
            lat, lon, exc_info=True,
        )
        return None


def attach_air_quality(
    hourly: list[HourlyPoint], samples: dict[str, AirQualitySample] | None
) -> list[HourlyPoint]:
    """Attach the sample whose key equals each hour's time string.

    Keys must match byte for byte; hours without a sample (or every hour,
    when samples is None) are returned unchanged.
    """
    if not samples:
        return list(hourly)

    merged: list[HourlyPoint] = []
    matched = 0
    for point in hourly:
        sample = samples.get(point.time)
        if sample is None:
            merged.append(point)
        else:
            merged.append(point.with_air_quality(sample))
            matched += 1
    if matched == 0 and hourly:
        logger.warning(
            "No air-quality keys matched %d forecast hours (first key %s)",
            len(hourly), hourly[0].time,
        )
    return merged
