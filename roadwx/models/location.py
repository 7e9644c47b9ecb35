"""Location query and geocoding result models."""

from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias


class QueryKind(StrEnum):
    ZIP = "zip"
    CITY_REGION = "city_region"
    GENERIC = "generic"


@dataclass(frozen=True)
class ZipQuery:
    code: str
    kind: QueryKind = QueryKind.ZIP


@dataclass(frozen=True)
class CityRegionQuery:
    city: str
    region_code: str  # two letters, upper case
    kind: QueryKind = QueryKind.CITY_REGION


@dataclass(frozen=True)
class GenericQuery:
    raw: str
    kind: QueryKind = QueryKind.GENERIC


LocationQuery: TypeAlias = ZipQuery | CityRegionQuery | GenericQuery


@dataclass(frozen=True)
class ResolvedLocation:
    lat: float
    lon: float
    label: str
