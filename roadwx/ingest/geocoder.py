"""Forward and reverse geocoding.

Forward lookups go to the Open-Meteo geocoding API and raise on failure.
Reverse lookups go to Nominatim and are best-effort: they return None
instead of raising.
"""

import logging
from typing import Any

from roadwx.config.schema import GEOCODING_URL, REVERSE_GEOCODING_URL
from roadwx.ingest.errors import NotFoundError, RoadwxError, UpstreamError
from roadwx.ingest.http_client import HttpClient
from roadwx.ingest.query_parser import parse_location_query
from roadwx.ingest.regions import POSTAL_CODE_COUNTRY, region_name
from roadwx.models.location import (
    CityRegionQuery,
    GenericQuery,
    LocationQuery,
    ResolvedLocation,
    ZipQuery,
)

logger = logging.getLogger(__name__)

CITY_REGION_CANDIDATES = 10
_CITY_LIKE_FIELDS = ("city", "town", "village", "hamlet", "suburb")


class LocationResolver:
    def __init__(
        self,
        http: HttpClient,
        geocoding_url: str = GEOCODING_URL,
        reverse_url: str = REVERSE_GEOCODING_URL,
    ):
        self.http = http
        self.geocoding_url = geocoding_url
        self.reverse_url = reverse_url

    def resolve(self, query: LocationQuery) -> ResolvedLocation:
        """Geocode a parsed query to coordinates and a display label.

        Raises NotFoundError when the geocoder has no candidates and
        UpstreamError when the request itself fails.
        """
        params, desired_region = _search_params(query)
        data = self.http.get_json(self.geocoding_url, params=params)
        results = data.get("results") if isinstance(data, dict) else None
        if not results:
            raise NotFoundError(f'No results found for "{_query_text(query)}".')
        if not isinstance(results, list) or not all(isinstance(r, dict) for r in results):
            logger.error("Geocoding results are not a list of objects: %r", results)
            raise UpstreamError("Malformed geocoding result", url=self.geocoding_url)

        result = results[0]
        if desired_region is not None:
            result = _prefer_region(results, desired_region) or result

        label = ", ".join(
            str(part)
            for part in (result.get("name"), result.get("admin1"), result.get("country_code"))
            if part
        )
        try:
            return ResolvedLocation(
                lat=float(result["latitude"]),
                lon=float(result["longitude"]),
                label=label,
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.error("Geocoding result without usable coordinates: %s", result)
            raise UpstreamError(
                "Malformed geocoding result", url=self.geocoding_url
            ) from e

    def resolve_text(self, text: str) -> ResolvedLocation:
        return self.resolve(parse_location_query(text))

    def reverse(self, lat: float, lon: float) -> str | None:
        """Best-effort label for coordinates, e.g. "Denver, Colorado, US"."""
        params = {
            "lat": lat,
            "lon": lon,
            "format": "json",
            "zoom": 10,
            "addressdetails": 1,
        }
        try:
            data = self.http.get_json(self.reverse_url, params=params)
            return _reverse_label(data)
        except (RoadwxError, AttributeError, TypeError, ValueError) as e:
            logger.warning("Reverse geocoding failed for %s,%s: %s", lat, lon, e)
            return None


def _search_params(query: LocationQuery) -> tuple[dict[str, Any], str | None]:
    """Build geocoding params and the region name a result should match, if any."""
    params: dict[str, Any] = {"language": "en", "format": "json"}
    desired_region: str | None = None

    if isinstance(query, ZipQuery):
        params.update(name=query.code, count=1, countryCode=POSTAL_CODE_COUNTRY)
    elif isinstance(query, CityRegionQuery):
        params.update(
            name=query.city,
            count=CITY_REGION_CANDIDATES,
            countryCode=POSTAL_CODE_COUNTRY,
        )
        desired_region = region_name(query.region_code)
    else:
        params.update(name=query.raw, count=1)
    return params, desired_region


def _prefer_region(results: list[dict], region: str) -> dict | None:
    wanted = region.lower()
    for r in results:
        admin1 = r.get("admin1")
        if isinstance(admin1, str) and admin1.lower() == wanted:
            return r
    return None


def _query_text(query: LocationQuery) -> str:
    if isinstance(query, ZipQuery):
        return query.code
    if isinstance(query, CityRegionQuery):
        return f"{query.city}, {query.region_code}"
    assert isinstance(query, GenericQuery)
    return query.raw


def _reverse_label(data: Any) -> str | None:
    address = data.get("address") if isinstance(data, dict) else None
    if not isinstance(address, dict):
        return None

    city_like = next((address[f] for f in _CITY_LIKE_FIELDS if address.get(f)), None)
    if not city_like:
        postcode = address.get("postcode")
        return f"Near {postcode}" if postcode else None

    region = address.get("state") or address.get("region")
    country_code = address.get("country_code")
    parts = [city_like, region, country_code.upper() if country_code else None]
    return ", ".join(p for p in parts if p)
