"""WMO weather code tables (as used by Open-Meteo)."""

WEATHER_CODE_DESCRIPTIONS: dict[int, str] = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snowfall",
    73: "Moderate snowfall",
    75: "Heavy snowfall",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}

FREEZING_DRIZZLE = frozenset({56, 57})
FREEZING_RAIN = frozenset({66, 67})
SNOW = frozenset({71, 73, 75, 77})
SNOW_SHOWERS = frozenset({85, 86})
HAIL_THUNDERSTORMS = frozenset({96, 99})

# Codes that put snow or ice on the road even above 0 °C air temperature
WINTRY_CODES = FREEZING_DRIZZLE | FREEZING_RAIN | SNOW | SNOW_SHOWERS | HAIL_THUNDERSTORMS

# Icon groups; clear codes split by time of day
_ICON_GROUPS: list[tuple[frozenset[int], str]] = [
    (frozenset({2}), "partly_cloudy"),
    (frozenset({3}), "overcast"),
    (frozenset({45, 48}), "fog"),
    (frozenset({51, 53, 55}), "drizzle"),
    (frozenset({61, 63, 65, 80, 81, 82}), "rain"),
    (FREEZING_DRIZZLE | FREEZING_RAIN | frozenset({77}), "sleet"),
    (frozenset({71, 73, 75, 85, 86}), "snow"),
    (frozenset({95, 96, 99}), "thunderstorm"),
]


def describe_weather_code(code: int | None) -> str:
    if code is None:
        return "Unknown conditions"
    return WEATHER_CODE_DESCRIPTIONS.get(code, f"Code {code}")


def is_wintry(code: int | None) -> bool:
    return code is not None and code in WINTRY_CODES


def icon_group(code: int | None, time_of_day: str = "day") -> str:
    """Map a code to an icon family name, e.g. 'rain' or 'clear_night'."""
    clear = "clear_night" if time_of_day == "night" else "clear_day"
    if code is None:
        return clear
    for codes, group in _ICON_GROUPS:
        if code in codes:
            return group
    return clear
