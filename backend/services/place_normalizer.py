"""
Turn provider and storage payloads into canonical `Place` records.

Everything here is pure: no I/O. Unreadable stored records are skipped with a
warning.
"""
from __future__ import annotations

import json
import logging
from typing import Any, List, Mapping

from domain.models import UNKNOWN_CATEGORY, Category, Coordinates, Place, Points

logger = logging.getLogger(__name__)

FALLBACK_MARKER_COLOR = "gray"

CATEGORY_COLORS = {
    "accommodation": "cornflowerblue",
    "activity": "tomato",
    "adult": "hotpink",
    "administrative": "red",
    "amenity": "mediumpurple",
    "airport": "darkkhaki",
    "beach": "lightseagreen",
    "building": "sienna",
    "camping": "olivedrab",
    "catering": "slategray",
    "childcare": "palevioletred",
    "commercial": "chocolate",
    "education": "goldenrod",
    "entertainment": "rebeccapurple",
    "healthcare": "crimson",
    "heritage": "mediumseagreen",
    "highway": "lightskyblue",
    "leisure": "darkorange",
    "low_emission_zone": "teal",
    "man_made": "maroon",
    "national_park": "forestgreen",
    "natural": "springgreen",
    "office": "teal",
    "parking": "silver",
    "pet": "deeppink",
    "political": "darkolivegreen",
    "populated_place": "royalblue",
    "postal_code": "indianred",
    "power": "blueviolet",
    "production": "saddlebrown",
    "public_transport": "mediumslateblue",
    "railway": "lightpink",
    "religion": "darkmagenta",
    "rental": "darkblue",
    "service": "darkslategray",
    "ski": "cornsilk",
    "sport": "mediumorchid",
    "tourism": "cadetblue",
}


def _points(props: Mapping[str, Any]) -> Points:
    return Points(
        coordinates=Coordinates(lat=props.get("lat"), lon=props.get("lon")),
        place_id=props.get("place_id"),
    )


def _properties(feature: Any) -> Mapping[str, Any]:
    if not isinstance(feature, Mapping):
        return {}
    props = feature.get("properties")
    return props if isinstance(props, Mapping) else {}


def _features(payload: Any) -> List[Any]:
    if not isinstance(payload, Mapping):
        return []
    features = payload.get("features")
    return list(features) if isinstance(features, (list, tuple)) else []


def from_geocoding_feature(feature: Mapping[str, Any]) -> Place:
    """Geocoding results carry no separate name: both labels get `formatted`."""
    props = _properties(feature)
    formatted = props.get("formatted")
    return Place(
        name=formatted,
        location_name=formatted,
        category=Category.parse(props.get("category") or UNKNOWN_CATEGORY),
        points=_points(props),
    )


def from_places_feature(feature: Mapping[str, Any]) -> Place:
    props = _properties(feature)
    categories = props.get("categories")
    return Place(
        name=props.get("name"),
        location_name=props.get("formatted"),
        category=Category.parse(list(categories) if isinstance(categories, (list, tuple)) else categories),
        points=_points(props),
    )


def from_storage_record(record: Mapping[str, Any]) -> Place:
    points = record.get("points") or {}
    if isinstance(points, str):
        points = json.loads(points)
    coords = points.get("coordinates") or {}
    return Place(
        name=record.get("name"),
        location_name=record.get("location_name"),
        category=Category.parse(record.get("category")),
        points=Points(
            type=points.get("type", "Point"),
            coordinates=Coordinates(lat=coords.get("lat"), lon=coords.get("lon")),
            place_id=points.get("place_id"),
        ),
    )


def normalize_geocoding(payload: Any) -> List[Place]:
    return [from_geocoding_feature(f) for f in _features(payload)]


def normalize_places(payload: Any) -> List[Place]:
    return [from_places_feature(f) for f in _features(payload)]


def normalize_storage(records: Any) -> List[Place]:
    """Storage list response -> Places. Anything but a list yields [].

    A record that cannot be read is skipped; the rest are kept.
    """
    if not isinstance(records, (list, tuple)):
        return []
    places: List[Place] = []
    for record in records:
        if not isinstance(record, Mapping):
            logger.warning("Skipping stored place that is not an object: %r", record)
            continue
        try:
            places.append(from_storage_record(record))
        except (ValueError, TypeError, AttributeError) as exc:
            logger.warning("Skipping unreadable stored place %s: %s", record.get("id"), exc)
    return places


def category_segment(category: Category) -> str:
    """
    Display segment of a category: the first tag up to its first '.'.

    ``tourism.sights.city_hall`` -> ``tourism``. The ``unknown`` sentinel and
    empty tags give an empty string.
    """
    primary = category.primary
    if not isinstance(primary, str) or primary == UNKNOWN_CATEGORY:
        return ""
    return primary.split(".", 1)[0]


def category_color(category: Category) -> str:
    return CATEGORY_COLORS.get(category_segment(category), FALLBACK_MARKER_COLOR)
