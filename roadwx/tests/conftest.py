"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from roadwx.config.schema import RoadwxConfig
from roadwx.ingest.http_client import HttpClient
from roadwx.models.air_quality import AirQualitySample, AqiCategory
from roadwx.models.forecast import (
    CurrentConditions,
    DailyPoint,
    HourlyPoint,
    WeatherSnapshot,
)

FIXTURE_DIR = Path(__file__).parent / "fixtures"

GEO_URL = "https://test-geo.example.com/v1/search"
FORECAST_URL = "https://test-forecast.example.com/v1/forecast"
AIR_URL = "https://test-air.example.com/v1/air-quality"
REVERSE_URL = "https://test-reverse.example.com/reverse"


class FakeClock:
    """Settable epoch-seconds clock for cache tests."""

    def __init__(self, now: float = 1_765_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def load_fixture(name: str) -> dict:
    with open(FIXTURE_DIR / name) as f:
        return json.load(f)


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def http() -> HttpClient:
    client = HttpClient(user_agent="roadwx-tests/0.1", timeout=1.0)
    yield client
    client.close()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def default_config() -> RoadwxConfig:
    return RoadwxConfig()


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "cache": {"ttl_minutes": 30, "db_path": str(tmp_path / "cache.db")},
        "display": {"unit_system": "metric"},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


def make_snapshot(label: str = "Denver, Colorado, US", lat: float = 39.7392) -> WeatherSnapshot:
    sample = AirQualitySample(
        pm10=12.1,
        pm2_5=6.4,
        dust=0.0,
        uv_index=0.2,
        us_aqi=42.0,
        category=AqiCategory.GOOD,
        summary="Good (US AQI 42)",
    )
    return WeatherSnapshot(
        lat=lat,
        lon=-104.9847,
        label=label,
        timezone="America/Denver",
        fetched_at="2025-12-05T23:00:00+00:00",
        current=CurrentConditions(time="2025-12-05T16:00", temperature=-1.4, weather_code=71),
        hourly=[
            HourlyPoint(
                time="2025-12-05T16:00",
                temperature=-1.4,
                precipitation=0.4,
                weather_code=71,
                wind_speed=12.2,
                wind_direction=250.0,
                visibility=4000.0,
                air_quality=sample,
                air_quality_summary=sample.summary,
            ),
            HourlyPoint(time="2025-12-05T17:00", temperature=2.5, precipitation=None),
        ],
        daily=[
            DailyPoint(
                date="2025-12-05",
                temp_max=3.2,
                temp_min=-6.1,
                weather_code=73,
                sunrise="2025-12-05T07:04",
                sunset="2025-12-05T16:36",
                uv_index_max=1.9,
            )
        ],
    )


@pytest.fixture
def snapshot() -> WeatherSnapshot:
    return make_snapshot()
