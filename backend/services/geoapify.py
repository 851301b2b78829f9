"""Read-only Geoapify geocoding and places lookups.

Both calls go through ``services.http_client`` and never raise: a missing
API key or any transport problem yields ``None`` plus a log record.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from services.http_client import fetch_json
from settings import settings

GEOAPIFY_GEOCODE_URL = "https://api.geoapify.com/v1/geocode/search"
GEOAPIFY_PLACES_URL = "https://api.geoapify.com/v2/places"
PLACES_LIMIT = 100
logger = logging.getLogger(__name__)

PLACE_CATEGORIES = (
    "accommodation",
    "activity",
    "adult",
    "administrative",
    "amenity",
    "airport",
    "beach",
    "building",
    "camping",
    "catering",
    "childcare",
    "commercial",
    "education",
    "entertainment",
    "healthcare",
    "heritage",
    "highway",
    "leisure",
    "low_emission_zone",
    "man_made",
    "national_park",
    "natural",
    "office",
    "parking",
    "pet",
    "political",
    "populated_place",
    "postal_code",
    "power",
    "production",
    "public_transport",
    "railway",
    "religion",
    "rental",
    "service",
    "ski",
    "sport",
    "tourism",
)
ALL_CATEGORIES = ",".join(PLACE_CATEGORIES)


def _api_key(api_key: Optional[str]) -> str:
    return api_key if api_key is not None else settings.GEOAPIFY_API_KEY


def geocode(query: str, api_key: Optional[str] = None) -> Any:
    """Free-text geocode. Returns the provider payload (``{"features": [...]}``)."""
    if not query:
        return {"features": []}
    key = _api_key(api_key)
    if not key:
        logger.error("Geoapify geocode skipped for %r: GEOAPIFY_API_KEY is not set", query)
        return None
    return fetch_json(GEOAPIFY_GEOCODE_URL, "GET", params={"text": query, "apiKey": key})


def places_near(place_id: str, api_key: Optional[str] = None) -> Any:
    """Places inside the area of a resolved geocoding result."""
    if not place_id:
        return []
    key = _api_key(api_key)
    if not key:
        logger.error("Geoapify places skipped for %s: GEOAPIFY_API_KEY is not set", place_id)
        return None
    params = {
        "categories": ALL_CATEGORIES,
        "filter": f"place:{place_id}",
        "limit": PLACES_LIMIT,
        "apiKey": key,
    }
    data = fetch_json(GEOAPIFY_PLACES_URL, "GET", params=params)
    if data is None:
        logger.warning("Geoapify places lookup for %s returned no data", place_id)
    return data
