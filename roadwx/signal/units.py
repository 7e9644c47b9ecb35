"""Metric-to-display unit formatting.

Inputs are always metric (°C, mm, km/h, m). Missing values format as a
placeholder dash instead of raising.
"""

from roadwx.models.common import UnitSystem, is_missing, round_half_up

PLACEHOLDER = "–"

MM_PER_INCH = 25.4
KM_PER_MILE = 1.609344
MILES_PER_METER = 6.27137e-4


def format_temperature(temp_c: float | None, unit_system: UnitSystem | str) -> str:
    if is_missing(temp_c):
        return PLACEHOLDER
    if unit_system == UnitSystem.METRIC:
        return f"{round_half_up(temp_c)}°C"
    return f"{round_half_up(temp_c * 9 / 5 + 32)}°F"


def format_precipitation(precip_mm: float | None, unit_system: UnitSystem | str) -> str:
    if is_missing(precip_mm):
        return PLACEHOLDER
    if unit_system == UnitSystem.METRIC:
        return f"{precip_mm:.1f} mm"
    return f"{precip_mm / MM_PER_INCH:.2f} in"


def format_wind_speed(speed_kmh: float | None, unit_system: UnitSystem | str) -> str:
    if is_missing(speed_kmh):
        return PLACEHOLDER
    if unit_system == UnitSystem.METRIC:
        return f"{round_half_up(speed_kmh)} km/h"
    return f"{round_half_up(speed_kmh / KM_PER_MILE)} mph"


def format_visibility(meters: float | None, unit_system: UnitSystem | str) -> str:
    if is_missing(meters):
        return PLACEHOLDER
    if unit_system == UnitSystem.METRIC:
        return f"{meters / 1000:.1f} km"
    return f"{meters * MILES_PER_METER:.1f} mi"
