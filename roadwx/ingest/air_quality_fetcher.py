"""Air-quality fetcher: hourly pollutant series keyed by timestamp."""

import logging

from roadwx.config.schema import AIR_QUALITY_URL
from roadwx.ingest.http_client import HttpClient
from roadwx.ingest.series import first_array, safe_float, safe_index, series_times
from roadwx.models.air_quality import AirQualitySample
from roadwx.signal.air_quality import classify_us_aqi

logger = logging.getLogger(__name__)

AIR_QUALITY_VARIABLES = ("pm10", "pm2_5", "dust", "uv_index", "us_aqi")


class AirQualityFetcher:
    def __init__(self, http: HttpClient, base_url: str = AIR_QUALITY_URL):
        self.http = http
        self.base_url = base_url

    def fetch(
        self, lat: float, lon: float, timezone: str | None
    ) -> dict[str, AirQualitySample]:
        """Fetch hourly air quality, keyed by the provider's time strings.

        Pass the timezone the forecast resolved to so both series share the
        same hour keys. Raises UpstreamError if the request fails.
        """
        params = {
            "latitude": lat,
            "longitude": lon,
            "hourly": ",".join(AIR_QUALITY_VARIABLES),
            "timezone": timezone or "auto",
        }
        raw = self.http.get_json(self.base_url, params=params)
        samples = parse_air_quality(raw if isinstance(raw, dict) else {})
        logger.info("Fetched %d air-quality hours for %.4f,%.4f", len(samples), lat, lon)
        return samples


def parse_air_quality(raw: dict) -> dict[str, AirQualitySample]:
    hourly = raw.get("hourly")
    times = series_times(hourly)
    if not times:
        return {}

    arrays = {name: first_array(hourly, (name,)) for name in AIR_QUALITY_VARIABLES}
    by_time: dict[str, AirQualitySample] = {}
    for idx, t in enumerate(times):
        if not isinstance(t, str):
            continue
        values = {name: safe_float(safe_index(arr, idx)) for name, arr in arrays.items()}
        category, summary = classify_us_aqi(values["us_aqi"])
        by_time[t] = AirQualitySample(
            pm10=values["pm10"],
            pm2_5=values["pm2_5"],
            dust=values["dust"],
            uv_index=values["uv_index"],
            us_aqi=values["us_aqi"],
            category=category,
            summary=summary,
        )
    return by_time
