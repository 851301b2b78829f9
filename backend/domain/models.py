"""
Core domain models for the places explorer.
These are framework-agnostic and shared by the gateway, the search pipeline,
the map engine and the storage API.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence, Tuple, Union


UNKNOWN_CATEGORY = "unknown"

# Wire shape of a category: Geoapify geocoding returns a single string, the
# places endpoint returns a list of strings.
CategoryValue = Union[str, Sequence[str]]


@dataclass(frozen=True)
class Category:
    """
    Ordered category tags of a place.

    `values` is always a tuple; `multi` remembers whether the provider sent a
    list so the record serializes back to the shape it arrived in.
    """
    values: Tuple[str, ...] = (UNKNOWN_CATEGORY,)
    multi: bool = False

    @classmethod
    def parse(cls, raw: Optional[CategoryValue]) -> "Category":
        if raw is None or raw == "":
            return cls((UNKNOWN_CATEGORY,), multi=False)
        if isinstance(raw, str):
            return cls((raw,), multi=False)
        return cls(tuple(str(v) for v in raw), multi=True)

    @property
    def primary(self) -> Optional[str]:
        """First category tag, or None for an empty list."""
        return self.values[0] if self.values else None

    def to_json(self) -> CategoryValue:
        if self.multi:
            return list(self.values)
        return self.primary or UNKNOWN_CATEGORY


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lon: float


@dataclass(frozen=True)
class Points:
    """GeoJSON-like point envelope carrying the provider or storage place id."""
    coordinates: Coordinates
    place_id: str
    type: str = "Point"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "coordinates": {
                "lat": self.coordinates.lat,
                "lon": self.coordinates.lon,
            },
            "place_id": self.place_id,
        }


@dataclass(frozen=True)
class Place:
    """Canonical place record used across storage, search results and the map."""
    name: Optional[str]
    location_name: Optional[str]
    points: Points
    category: Category = field(default_factory=Category)

    @property
    def place_id(self) -> str:
        return self.points.place_id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "location_name": self.location_name,
            "category": self.category.to_json(),
            "points": self.points.to_dict(),
        }
