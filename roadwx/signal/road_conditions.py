"""Road-surface condition classification from temperature and precipitation."""

from roadwx.models.common import is_missing
from roadwx.models.forecast import WeatherSnapshot
from roadwx.models.road import RoadCondition, RoadConditionInfo, RoadOutlookEntry
from roadwx.signal.weather_codes import is_wintry

# Below this many mm in the hour, pavement is treated as dry
WET_THRESHOLD_MM = 0.1
FREEZING_C = 0.0

ROAD_CONDITION_INFO: dict[RoadCondition, RoadConditionInfo] = {
    RoadCondition.DRY: RoadConditionInfo(
        label="Likely dry pavement",
        detail=(
            "Precipitation appears minimal and temperatures are above freezing, "
            "so roads are likely dry or just slightly damp."
        ),
    ),
    RoadCondition.WET: RoadConditionInfo(
        label="Wet roads",
        detail=(
            "There is measurable precipitation and temperatures are above freezing, "
            "so roads are likely wet but not icy."
        ),
    ),
    RoadCondition.SNOW_ICE_RISK: RoadConditionInfo(
        label="Snow / ice risk",
        detail=(
            "Below-freezing temperatures or wintry precipitation increase the risk "
            "of snow and ice on road surfaces."
        ),
    ),
    RoadCondition.UNKNOWN: RoadConditionInfo(
        label="Conditions unknown",
        detail=(
            "Insufficient data to classify road surface conditions. "
            "Check local advisories for more detail."
        ),
    ),
}


def classify_road_condition(
    temperature_c: float | None,
    precipitation_mm: float | None,
    weather_code: int | None,
) -> RoadCondition:
    """Classify the road surface for one hour (or current conditions).

    Checks run in order: missing temperature, negligible precipitation,
    freezing temperature, wintry weather code, then wet.
    """
    if is_missing(temperature_c):
        return RoadCondition.UNKNOWN

    precip = 0.0 if is_missing(precipitation_mm) else precipitation_mm
    if precip < WET_THRESHOLD_MM:
        return RoadCondition.DRY
    if temperature_c <= FREEZING_C:
        return RoadCondition.SNOW_ICE_RISK
    if is_wintry(weather_code):
        return RoadCondition.SNOW_ICE_RISK
    return RoadCondition.WET


def road_condition_info(category: RoadCondition | str) -> RoadConditionInfo:
    try:
        return ROAD_CONDITION_INFO[RoadCondition(category)]
    except ValueError:
        return ROAD_CONDITION_INFO[RoadCondition.UNKNOWN]


def classify_current(snapshot: WeatherSnapshot) -> RoadCondition:
    """Current conditions, using the first forecast hour's precipitation."""
    current = snapshot.current
    precip = snapshot.hourly[0].precipitation if snapshot.hourly else None
    return classify_road_condition(
        current.temperature if current else None,
        precip,
        current.weather_code if current else None,
    )


def road_outlook(snapshot: WeatherSnapshot, hours: int = 6) -> list[RoadOutlookEntry]:
    return [
        RoadOutlookEntry(
            time=h.time,
            temperature=h.temperature,
            precipitation=h.precipitation,
            condition=classify_road_condition(h.temperature, h.precipitation, h.weather_code),
        )
        for h in snapshot.hourly[:hours]
    ]
