"""Classify free-text location input into a structured query."""

import re

from roadwx.models.location import (
    CityRegionQuery,
    GenericQuery,
    LocationQuery,
    ZipQuery,
)

# Order matters: ZIP is checked before "City, ST"
_ZIP_RE = re.compile(r"^[0-9]{5}$")
_CITY_REGION_RE = re.compile(r"^([^,]+),\s*([A-Za-z]{2})$")


def parse_location_query(text: str) -> LocationQuery:
    """Parse user input into a ZipQuery, CityRegionQuery or GenericQuery.

    Never raises; anything unrecognised (including "") becomes GenericQuery.

    >>> parse_location_query("80202")
    ZipQuery(code='80202', kind=<QueryKind.ZIP: 'zip'>)
    """
    trimmed = text.strip()
    if not trimmed:
        return GenericQuery(raw="")

    if _ZIP_RE.match(trimmed):
        return ZipQuery(code=trimmed)

    m = _CITY_REGION_RE.match(trimmed)
    if m is not None:
        return CityRegionQuery(city=m.group(1).strip(), region_code=m.group(2).upper())

    return GenericQuery(raw=trimmed)
