"""Road-surface condition models."""

from dataclasses import dataclass
from enum import StrEnum


class RoadCondition(StrEnum):
    DRY = "dry"
    WET = "wet"
    SNOW_ICE_RISK = "snow_ice_risk"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class RoadConditionInfo:
    label: str
    detail: str


@dataclass(frozen=True)
class RoadOutlookEntry:
    time: str
    temperature: float | None
    precipitation: float | None
    condition: RoadCondition
