"""Labels derived from Open-Meteo local time strings.

Open-Meteo already returns wall-clock times for the forecast timezone, so
these helpers read the clock fields straight from the string and never
convert between zones.
"""

from datetime import date

from roadwx.models.common import is_missing, round_half_up

_DAY_START_HOUR = 6
_NIGHT_START_HOUR = 18
_COMPASS = ("N", "NE", "E", "SE", "S", "SW", "W", "NW")
_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def _clock(ts: str) -> tuple[int, int] | None:
    """(hour, minute) from 'YYYY-MM-DDTHH:MM', or None if unparseable."""
    _, sep, time_part = ts.partition("T")
    if not sep or not time_part:
        return None
    hour_str, _, minute_str = time_part.partition(":")
    try:
        hour = int(hour_str)
        minute = int(minute_str[:2] or "0")
    except ValueError:
        return None
    if not (0 <= hour <= 23 and 0 <= minute <= 59):
        return None
    return hour, minute


def format_hour_label(ts: str) -> str:
    """'2025-12-05T16:00' -> '4:00 PM'. Unparseable input is returned as-is."""
    clock = _clock(ts)
    if clock is None:
        return ts
    hour, minute = clock
    suffix = "PM" if hour >= 12 else "AM"
    display_hour = hour % 12 or 12
    return f"{display_hour}:{minute:02d} {suffix}"


def time_of_day(ts: str) -> str:
    clock = _clock(ts)
    if clock is None:
        return "day"
    return "day" if _DAY_START_HOUR <= clock[0] < _NIGHT_START_HOUR else "night"


def format_date_label(date_str: str) -> str:
    """'2025-12-05' -> 'Fri, Dec 5'. Unparseable input is returned as-is."""
    try:
        d = date.fromisoformat(date_str[:10])
    except (ValueError, TypeError):
        return date_str
    return f"{_WEEKDAYS[d.weekday()]}, {_MONTHS[d.month - 1]} {d.day}"


def wind_compass(degrees: float | None) -> str | None:
    if is_missing(degrees):
        return None
    return _COMPASS[round_half_up((degrees % 360) / 45) % 8]
