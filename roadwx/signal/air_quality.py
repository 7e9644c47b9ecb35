"""US AQI severity buckets."""

from roadwx.models.air_quality import AqiCategory
from roadwx.models.common import is_missing, round_half_up

# (inclusive upper bound, category, summary prefix), checked in order
AQI_BUCKETS: list[tuple[int, AqiCategory, str]] = [
    (50, AqiCategory.GOOD, "Good"),
    (100, AqiCategory.MODERATE, "Moderate"),
    (150, AqiCategory.UNHEALTHY, "Unhealthy for sensitive groups"),
    (200, AqiCategory.UNHEALTHY, "Unhealthy"),
    (300, AqiCategory.VERY_UNHEALTHY, "Very unhealthy"),
]
HAZARDOUS_PREFIX = "Hazardous"
UNKNOWN_SUMMARY = "Air quality unknown"


def classify_us_aqi(us_aqi: float | None) -> tuple[AqiCategory, str]:
    """Bucket a US AQI value into (category, summary).

    The summary carries the rounded AQI, e.g. "Moderate (US AQI 73)".
    """
    if is_missing(us_aqi):
        return AqiCategory.UNKNOWN, UNKNOWN_SUMMARY

    aqi = round_half_up(us_aqi)
    for upper, category, prefix in AQI_BUCKETS:
        if aqi <= upper:
            return category, f"{prefix} (US AQI {aqi})"
    return AqiCategory.HAZARDOUS, f"{HAZARDOUS_PREFIX} (US AQI {aqi})"
