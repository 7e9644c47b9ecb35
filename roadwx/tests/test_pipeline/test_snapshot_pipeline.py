"""Tests for the snapshot pipeline: mocked collaborators and end-to-end over respx."""

from pathlib import Path
from unittest.mock import MagicMock

import httpx
import pytest
import respx
from conftest import (
    AIR_URL,
    FORECAST_URL,
    GEO_URL,
    REVERSE_URL,
    FakeClock,
    load_fixture,
    make_snapshot,
)

from roadwx.config.schema import RoadwxConfig
from roadwx.ingest.air_quality_fetcher import AirQualityFetcher
from roadwx.ingest.errors import NotFoundError, UpstreamError
from roadwx.ingest.forecast_fetcher import ForecastFetcher, parse_forecast
from roadwx.ingest.geocoder import LocationResolver
from roadwx.ingest.http_client import HttpClient
from roadwx.models.location import ResolvedLocation
from roadwx.pipeline.snapshot_pipeline import SnapshotPipeline
from roadwx.storage.kv_store import MemoryStore, SqliteStore
from roadwx.storage.snapshot_cache import SnapshotCache, coords_key, query_key

FETCHED_AT = "2025-12-05T23:00:00+00:00"


def _now() -> str:
    return FETCHED_AT


@pytest.fixture
def cache(clock: FakeClock) -> SnapshotCache:
    return SnapshotCache(MemoryStore(), clock=clock)


@pytest.fixture
def pipeline(http: HttpClient, cache: SnapshotCache) -> SnapshotPipeline:
    return SnapshotPipeline(
        resolver=LocationResolver(http, geocoding_url=GEO_URL, reverse_url=REVERSE_URL),
        forecast=ForecastFetcher(http, base_url=FORECAST_URL),
        air_quality=AirQualityFetcher(http, base_url=AIR_URL),
        cache=cache,
        now_iso=_now,
    )


def _mock_upstreams(air_status: int = 200) -> dict[str, respx.Route]:
    routes = {
        "geo": respx.get(GEO_URL).mock(
            return_value=httpx.Response(200, json=load_fixture("geocode_denver.json"))
        ),
        "forecast": respx.get(FORECAST_URL).mock(
            return_value=httpx.Response(200, json=load_fixture("forecast_denver.json"))
        ),
        "reverse": respx.get(REVERSE_URL).mock(
            return_value=httpx.Response(200, json=load_fixture("reverse_denver.json"))
        ),
    }
    if air_status == 200:
        routes["air"] = respx.get(AIR_URL).mock(
            return_value=httpx.Response(200, json=load_fixture("air_quality_denver.json"))
        )
    else:
        routes["air"] = respx.get(AIR_URL).mock(return_value=httpx.Response(air_status))
    return routes


class TestForQuery:
    @respx.mock
    def test_builds_merged_snapshot(self, pipeline: SnapshotPipeline):
        _mock_upstreams()
        snap = pipeline.for_query("80202")

        assert snap.label == "Denver, Colorado, US"
        assert snap.timezone == "America/Denver"
        assert snap.fetched_at == FETCHED_AT
        assert len(snap.hourly) == 4
        assert snap.hourly[0].air_quality_summary == "Good (US AQI 42)"
        assert snap.hourly[2].air_quality.us_aqi == 150
        assert snap.hourly[3].air_quality is None
        assert len(snap.daily) == 2

    @respx.mock
    def test_air_quality_uses_forecast_timezone(self, pipeline: SnapshotPipeline):
        routes = _mock_upstreams()
        pipeline.for_query("80202")
        assert routes["air"].calls.last.request.url.params["timezone"] == "America/Denver"

    @respx.mock
    def test_second_call_served_from_cache(self, pipeline: SnapshotPipeline):
        routes = _mock_upstreams()
        first = pipeline.for_query("Denver, CO")
        second = pipeline.for_query("  denver, co ")

        assert second == first
        assert routes["geo"].call_count == 1
        assert routes["forecast"].call_count == 1

    @respx.mock
    def test_cached_under_query_and_coords(
        self, pipeline: SnapshotPipeline, cache: SnapshotCache
    ):
        _mock_upstreams()
        snap = pipeline.for_query("80202")
        assert cache.get(query_key("80202")) == snap
        assert cache.get(coords_key(snap.lat, snap.lon)) == snap

    @respx.mock
    def test_air_quality_failure_still_returns_snapshot(self, pipeline: SnapshotPipeline):
        _mock_upstreams(air_status=503)
        snap = pipeline.for_query("80202")

        assert len(snap.hourly) == 4
        assert all(h.air_quality is None for h in snap.hourly)
        assert all(h.air_quality_summary is None for h in snap.hourly)

    @respx.mock
    def test_forecast_failure_raises_and_caches_nothing(
        self, pipeline: SnapshotPipeline, cache: SnapshotCache
    ):
        routes = _mock_upstreams()
        routes["forecast"].mock(return_value=httpx.Response(500))

        with pytest.raises(UpstreamError):
            pipeline.for_query("80202")
        assert cache.entries() == []

    @respx.mock
    def test_not_found(self, pipeline: SnapshotPipeline):
        respx.get(GEO_URL).mock(return_value=httpx.Response(200, json={}))
        with pytest.raises(NotFoundError):
            pipeline.for_query("Atlantis")

    def test_blank_query_rejected(self, pipeline: SnapshotPipeline):
        with pytest.raises(ValueError):
            pipeline.for_query("   ")


class TestForCoords:
    @respx.mock
    def test_reverse_label(self, pipeline: SnapshotPipeline):
        routes = _mock_upstreams()
        snap = pipeline.for_coords(39.7392, -104.9848)

        assert snap.label == "Denver, Colorado, US"
        assert routes["reverse"].call_count == 1
        assert routes["geo"].call_count == 0

    @respx.mock
    def test_reverse_failure_uses_coordinates(self, pipeline: SnapshotPipeline):
        routes = _mock_upstreams()
        routes["reverse"].mock(return_value=httpx.Response(503))
        snap = pipeline.for_coords(39.7392, -104.9848)
        assert snap.label == "39.74, -104.98"

    @respx.mock
    def test_explicit_label_skips_reverse(self, pipeline: SnapshotPipeline):
        routes = _mock_upstreams()
        snap = pipeline.for_coords(39.7392, -104.9848, label="Home")
        assert snap.label == "Home"
        assert routes["reverse"].call_count == 0

    @respx.mock
    def test_near_duplicate_coords_hit_cache(self, pipeline: SnapshotPipeline):
        routes = _mock_upstreams()
        pipeline.for_coords(39.73921, -104.98489)
        pipeline.for_coords(39.73919, -104.98491)
        assert routes["forecast"].call_count == 1

    @respx.mock
    def test_expired_entry_refetched(self, pipeline: SnapshotPipeline, clock: FakeClock):
        routes = _mock_upstreams()
        pipeline.for_coords(39.7392, -104.9848, label="Home")
        clock.advance(15 * 60)
        pipeline.for_coords(39.7392, -104.9848, label="Home")
        assert routes["forecast"].call_count == 2


class TestWithMockCollaborators:
    def _pipeline(self, cache: SnapshotCache):
        resolver = MagicMock(spec=LocationResolver)
        forecast = MagicMock(spec=ForecastFetcher)
        air = MagicMock(spec=AirQualityFetcher)
        resolver.resolve_text.return_value = ResolvedLocation(
            lat=39.7392, lon=-104.9847, label="Denver, Colorado, US"
        )
        forecast.fetch.return_value = parse_forecast(load_fixture("forecast_denver.json"))
        air.fetch.return_value = {}
        return SnapshotPipeline(resolver, forecast, air, cache, now_iso=_now), resolver, forecast, air

    def test_calls_in_order(self, cache: SnapshotCache):
        pipeline, resolver, forecast, air = self._pipeline(cache)
        pipeline.for_query("Denver, CO")

        resolver.resolve_text.assert_called_once_with("Denver, CO")
        forecast.fetch.assert_called_once_with(39.7392, -104.9847)
        air.fetch.assert_called_once_with(39.7392, -104.9847, "America/Denver")

    def test_air_quality_exception_swallowed(self, cache: SnapshotCache):
        pipeline, _, _, air = self._pipeline(cache)
        air.fetch.side_effect = RuntimeError("parse blew up")

        snap = pipeline.for_query("Denver, CO")
        assert all(h.air_quality is None for h in snap.hourly)

    def test_cache_hit_skips_collaborators(self, cache: SnapshotCache):
        cache.put(query_key("Denver, CO"), make_snapshot())
        pipeline, resolver, forecast, _ = self._pipeline(cache)

        assert pipeline.for_query("Denver, CO") == make_snapshot()
        resolver.resolve_text.assert_not_called()
        forecast.fetch.assert_not_called()


class TestFromConfig:
    def test_persistent_store(self, http: HttpClient, tmp_path: Path):
        config = RoadwxConfig(cache={"db_path": str(tmp_path / "c.db"), "ttl_minutes": 30})
        pipeline = SnapshotPipeline.from_config(config, http)

        assert isinstance(pipeline.cache.store, SqliteStore)
        assert pipeline.cache.ttl_seconds == 1800
        assert pipeline.forecast.base_url == config.endpoints.forecast_url

    def test_no_cache_uses_memory(self, http: HttpClient, tmp_path: Path):
        config = RoadwxConfig(cache={"db_path": str(tmp_path / "c.db")})
        pipeline = SnapshotPipeline.from_config(config, http, use_cache=False)
        assert isinstance(pipeline.cache.store, MemoryStore)

    def test_disabled_in_config(self, http: HttpClient):
        config = RoadwxConfig(cache={"enabled": False})
        pipeline = SnapshotPipeline.from_config(config, http)
        assert isinstance(pipeline.cache.store, MemoryStore)


class TestCacheFootprint:
    def test_each_query_takes_two_slots(self, clock: FakeClock):
        cache = SnapshotCache(MemoryStore(), capacity=5, clock=clock)
        resolver = MagicMock(spec=LocationResolver)
        forecast = MagicMock(spec=ForecastFetcher)
        air = MagicMock(spec=AirQualityFetcher)
        resolver.resolve_text.side_effect = [
            ResolvedLocation(lat=float(i), lon=float(i), label=f"place {i}") for i in range(3)
        ]
        forecast.fetch.return_value = parse_forecast(load_fixture("forecast_denver.json"))
        air.fetch.return_value = {}
        pipeline = SnapshotPipeline(resolver, forecast, air, cache, now_iso=_now)

        for text in ("first", "second", "third"):
            pipeline.for_query(text)
            clock.advance(1)

        assert len(cache.entries()) == 5
        assert cache.get(query_key("first")) is None
        assert cache.get(coords_key(0.0, 0.0)) is not None
        assert cache.get(query_key("third")) is not None


class TestClose:
    def test_close_releases_sqlite_store(self, http: HttpClient, tmp_path: Path):
        config = RoadwxConfig(cache={"db_path": str(tmp_path / "c.db")})
        pipeline = SnapshotPipeline.from_config(config, http)
        pipeline.cache.get("k")
        assert pipeline.cache.store._conn is not None

        pipeline.close()
        assert pipeline.cache.store._conn is None

    def test_close_memory_store(self, http: HttpClient):
        pipeline = SnapshotPipeline.from_config(RoadwxConfig(), http, use_cache=False)
        pipeline.close()
