"""Snapshot pipeline: resolve, fetch, merge and cache one location's weather."""

import logging
from collections.abc import Callable

from roadwx.config.schema import RoadwxConfig
from roadwx.ingest.air_quality_fetcher import AirQualityFetcher
from roadwx.ingest.forecast_fetcher import ForecastFetcher
from roadwx.ingest.geocoder import LocationResolver
from roadwx.ingest.http_client import HttpClient
from roadwx.ingest.merger import attach_air_quality, fetch_air_quality_or_none
from roadwx.models.common import utc_now_iso
from roadwx.models.forecast import WeatherSnapshot
from roadwx.storage.kv_store import MemoryStore, SqliteStore
from roadwx.storage.snapshot_cache import SnapshotCache, coords_key, query_key

logger = logging.getLogger(__name__)


class SnapshotPipeline:
    def __init__(
        self,
        resolver: LocationResolver,
        forecast: ForecastFetcher,
        air_quality: AirQualityFetcher,
        cache: SnapshotCache,
        now_iso: Callable[[], str] = utc_now_iso,
    ):
        self.resolver = resolver
        self.forecast = forecast
        self.air_quality = air_quality
        self.cache = cache
        self._now_iso = now_iso

    @classmethod
    def from_config(
        cls, config: RoadwxConfig, http: HttpClient, use_cache: bool = True
    ) -> "SnapshotPipeline":
        endpoints = config.endpoints
        if use_cache and config.cache.enabled:
            store = SqliteStore(config.cache.db_path)
        else:
            store = MemoryStore()
        return cls(
            resolver=LocationResolver(
                http,
                geocoding_url=endpoints.geocoding_url,
                reverse_url=endpoints.reverse_geocoding_url,
            ),
            forecast=ForecastFetcher(http, base_url=endpoints.forecast_url),
            air_quality=AirQualityFetcher(http, base_url=endpoints.air_quality_url),
            cache=SnapshotCache(
                store,
                ttl_seconds=config.cache.ttl_minutes * 60,
                capacity=config.cache.capacity,
                storage_key=config.cache.storage_key,
            ),
        )

    def close(self) -> None:
        """Release the cache's storage; the HTTP client belongs to the caller."""
        self.cache.close()

    def for_query(self, text: str) -> WeatherSnapshot:
        """Snapshot for free-text input ("80202", "Denver, CO", "Berlin").

        The snapshot is cached under the query key and the coordinate key.

        Raises ValueError for blank input, NotFoundError when geocoding finds
        nothing and UpstreamError when geocoding or the forecast fails.
        """
        if not text.strip():
            raise ValueError("Location query must not be empty")

        key = query_key(text)
        cached = self.cache.get(key)
        if cached is not None:
            logger.info("Serving cached snapshot for %r", text.strip())
            return cached

        location = self.resolver.resolve_text(text)
        logger.info("Resolved %r to %s (%.4f, %.4f)", text.strip(), location.label,
                    location.lat, location.lon)
        snapshot = self._build(location.lat, location.lon, location.label)
        self.cache.put(key, snapshot)
        self.cache.put(coords_key(location.lat, location.lon), snapshot)
        return snapshot

    def for_coords(
        self, lat: float, lon: float, label: str | None = None
    ) -> WeatherSnapshot:
        """Snapshot for coordinates, labelled by reverse geocoding if no label given."""
        key = coords_key(lat, lon)
        cached = self.cache.get(key)
        if cached is not None:
            logger.info("Serving cached snapshot for %s", key)
            return cached

        if label is None:
            label = self.resolver.reverse(lat, lon) or f"{lat:.2f}, {lon:.2f}"
        snapshot = self._build(lat, lon, label)
        self.cache.put(key, snapshot)
        return snapshot

    def _build(self, lat: float, lon: float, label: str) -> WeatherSnapshot:
        fetched_at = self._now_iso()
        forecast = self.forecast.fetch(lat, lon)
        samples = fetch_air_quality_or_none(self.air_quality, lat, lon, forecast.timezone)
        hourly = attach_air_quality(forecast.hourly, samples)
        return WeatherSnapshot(
            lat=lat,
            lon=lon,
            label=label,
            timezone=forecast.timezone,
            fetched_at=fetched_at,
            current=forecast.current,
            hourly=hourly,
            daily=forecast.daily,
        )
