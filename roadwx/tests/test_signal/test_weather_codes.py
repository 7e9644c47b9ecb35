"""Tests for WMO weather code tables."""

import pytest

from roadwx.signal.weather_codes import (
    WEATHER_CODE_DESCRIPTIONS,
    WINTRY_CODES,
    describe_weather_code,
    icon_group,
    is_wintry,
)


class TestDescribe:
    def test_known(self):
        assert describe_weather_code(71) == "Slight snowfall"

    def test_unknown_code(self):
        assert describe_weather_code(42) == "Code 42"

    def test_missing(self):
        assert describe_weather_code(None) == "Unknown conditions"


class TestWintry:
    def test_set(self):
        assert WINTRY_CODES == {56, 57, 66, 67, 71, 73, 75, 77, 85, 86, 96, 99}

    def test_plain_rain_not_wintry(self):
        assert not is_wintry(61)
        assert not is_wintry(95)

    def test_none(self):
        assert not is_wintry(None)

    def test_every_wintry_code_is_described(self):
        assert WINTRY_CODES <= set(WEATHER_CODE_DESCRIPTIONS)


class TestIconGroup:
    @pytest.mark.parametrize(
        "code,group",
        [
            (2, "partly_cloudy"),
            (3, "overcast"),
            (48, "fog"),
            (53, "drizzle"),
            (81, "rain"),
            (66, "sleet"),
            (77, "sleet"),
            (86, "snow"),
            (99, "thunderstorm"),
        ],
    )
    def test_groups(self, code, group):
        assert icon_group(code) == group

    def test_clear_by_time_of_day(self):
        assert icon_group(0, "day") == "clear_day"
        assert icon_group(1, "night") == "clear_night"

    def test_missing_code_is_clear(self):
        assert icon_group(None, "night") == "clear_night"

    def test_every_described_code_has_group(self):
        for code in WEATHER_CODE_DESCRIPTIONS:
            assert icon_group(code)
