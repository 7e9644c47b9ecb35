"""Output formatters for weather snapshots."""

import json
from datetime import UTC, datetime

from roadwx.models.cache import CacheEntry
from roadwx.models.common import UnitSystem
from roadwx.models.forecast import HourlyPoint, WeatherSnapshot, snapshot_to_dict
from roadwx.signal.road_conditions import (
    classify_current,
    road_condition_info,
    road_outlook,
)
from roadwx.signal.time_labels import (
    format_date_label,
    format_hour_label,
    time_of_day,
    wind_compass,
)
from roadwx.signal.units import (
    format_precipitation,
    format_temperature,
    format_visibility,
    format_wind_speed,
)
from roadwx.signal.weather_codes import describe_weather_code, icon_group


def format_snapshot_text(
    s: WeatherSnapshot, unit_system: UnitSystem, outlook_hours: int = 6
) -> str:
    """Plain text report: current conditions, road outlook, hours, days."""
    lines = [f"=== {s.label} ({s.timezone or 'unknown timezone'}) ==="]

    if s.current is not None:
        lines.append(
            f"Now ({format_hour_label(s.current.time)}): "
            f"{format_temperature(s.current.temperature, unit_system)}, "
            f"{describe_weather_code(s.current.weather_code)}"
        )
    else:
        lines.append("Now: no current conditions reported")

    info = road_condition_info(classify_current(s))
    lines.append(f"Roads: {info.label}. {info.detail}")

    outlook = road_outlook(s, outlook_hours)
    if outlook:
        lines.append("Road outlook:")
        for entry in outlook:
            lines.append(
                f"  {format_hour_label(entry.time):>8}  "
                f"{road_condition_info(entry.condition).label:<20}  "
                f"{format_temperature(entry.temperature, unit_system)} / "
                f"{format_precipitation(entry.precipitation, unit_system)}"
            )
    else:
        lines.append("Road outlook: not enough hourly data")

    if s.hourly:
        lines.append("Hourly:")
        for h in s.hourly[:outlook_hours]:
            lines.append("  " + _hour_line(h, unit_system))

    if s.daily:
        lines.append("Daily:")
        for d in s.daily:
            lines.append(
                f"  {format_date_label(d.date):<12} "
                f"{format_temperature(d.temp_max, unit_system)} / "
                f"{format_temperature(d.temp_min, unit_system)}  "
                f"{describe_weather_code(d.weather_code)}"
            )

    lines.append(f"Fetched: {s.fetched_at}")
    return "\n".join(lines)


def _hour_line(h: HourlyPoint, unit_system: UnitSystem) -> str:
    parts = [
        f"{format_hour_label(h.time):>8}",
        format_temperature(h.temperature, unit_system),
        f"feels {format_temperature(h.apparent_temperature, unit_system)}",
        describe_weather_code(h.weather_code),
        format_precipitation(h.precipitation, unit_system),
    ]
    wind = f"wind {format_wind_speed(h.wind_speed, unit_system)}"
    compass = wind_compass(h.wind_direction)
    if compass:
        wind += f" {compass}"
    parts.append(wind)
    if h.wind_gusts is not None:
        parts.append(f"gusts {format_wind_speed(h.wind_gusts, unit_system)}")
    if h.visibility is not None:
        parts.append(f"vis {format_visibility(h.visibility, unit_system)}")
    if h.air_quality_summary:
        parts.append(h.air_quality_summary)
    return " | ".join(parts)


def format_snapshot_json(s: WeatherSnapshot, outlook_hours: int = 6) -> str:
    """JSON for programmatic consumption, with derived road conditions added."""
    data = snapshot_to_dict(s)
    data["road_condition"] = classify_current(s).value
    data["road_outlook"] = [
        {"time": e.time, "condition": e.condition.value}
        for e in road_outlook(s, outlook_hours)
    ]
    for hour, raw in zip(s.hourly, data["hourly"]):
        raw["icon"] = icon_group(hour.weather_code, time_of_day(hour.time))
    return json.dumps(data, indent=2)


def format_cache_entries(entries: list[CacheEntry]) -> str:
    if not entries:
        return "Cache is empty"
    lines = [f"{len(entries)} cached snapshot(s):"]
    for e in entries:
        expires = datetime.fromtimestamp(e.expires_at, UTC).isoformat(timespec="seconds")
        lines.append(f"  {e.key:<40} {e.snapshot.label}  (expires {expires})")
    return "\n".join(lines)
