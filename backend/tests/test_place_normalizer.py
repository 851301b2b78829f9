import logging

import pytest

from domain.models import Category
from services.place_normalizer import (
    FALLBACK_MARKER_COLOR,
    category_color,
    category_segment,
    from_geocoding_feature,
    from_places_feature,
    from_storage_record,
    normalize_geocoding,
    normalize_places,
    normalize_storage,
)

AMSTERDAM_FEATURE = {
    "properties": {
        "formatted": "Amsterdam, Netherlands",
        "category": "city",
        "lat": 52.3676,
        "lon": 4.9041,
        "place_id": "amsterdam-123",
    }
}


def test_geocoding_feature_uses_formatted_for_both_labels():
    place = from_geocoding_feature(AMSTERDAM_FEATURE)

    assert place.to_dict() == {
        "name": "Amsterdam, Netherlands",
        "location_name": "Amsterdam, Netherlands",
        "category": "city",
        "points": {
            "type": "Point",
            "coordinates": {"lat": 52.3676, "lon": 4.9041},
            "place_id": "amsterdam-123",
        },
    }


def test_geocoding_feature_missing_fields_stay_none_and_category_unknown():
    place = from_geocoding_feature(
        {"properties": {"lat": 52.3676, "lon": 4.9041, "place_id": "incomplete-123"}}
    )

    assert place.name is None
    assert place.location_name is None
    assert place.to_dict()["category"] == "unknown"
    assert place.place_id == "incomplete-123"


def test_places_feature_keeps_category_list():
    place = from_places_feature(
        {
            "properties": {
                "name": "Anne Frank House",
                "formatted": "Anne Frank House, Amsterdam",
                "categories": ["museum"],
                "lat": 52.3752,
                "lon": 4.8840,
                "place_id": "anne-frank-house-123",
            }
        }
    )

    assert place.name == "Anne Frank House"
    assert place.location_name == "Anne Frank House, Amsterdam"
    assert place.to_dict()["category"] == ["museum"]
    assert place.category.values == ("museum",)


def test_storage_record_maps_one_to_one_and_accepts_json_points():
    record = {
        "id": 3,
        "name": "Breda",
        "location_name": "Breda, NB, Netherlands",
        "category": "administrative",
        "points": '{"type": "Point", "coordinates": {"lat": 51.58, "lon": 4.77}, "place_id": "breda-1"}',
    }

    place = from_storage_record(record)

    assert place.name == "Breda"
    assert place.category == Category.parse("administrative")
    assert place.points.coordinates.lat == 51.58
    assert place.place_id == "breda-1"


def test_collection_helpers_tolerate_bad_payloads():
    assert normalize_geocoding(None) == []
    assert normalize_geocoding({"features": None}) == []
    assert normalize_places([]) == []
    assert normalize_storage({"error": "boom"}) == []
    assert normalize_storage(None) == []
    assert len(normalize_geocoding({"features": [AMSTERDAM_FEATURE]})) == 1


@pytest.mark.parametrize(
    "raw, segment",
    [
        ("tourism.sights.city_hall", "tourism"),
        (["catering.restaurant", "building"], "catering"),
        ("city", "city"),
        ("unknown", ""),
        (None, ""),
        ([], ""),
    ],
)
def test_category_segment(raw, segment):
    assert category_segment(Category.parse(raw)) == segment


def test_category_color_known_and_fallback():
    assert category_color(Category.parse("tourism.sights")) == "cadetblue"
    assert category_color(Category.parse(["administrative"])) == "red"
    assert category_color(Category.parse("city")) == FALLBACK_MARKER_COLOR
    assert category_color(Category.parse(None)) == FALLBACK_MARKER_COLOR


def test_normalize_storage_skips_unreadable_records(caplog):
    good = {
        "id": 1,
        "name": "Copenhagen",
        "location_name": "1357 Copenhagen, Denmark",
        "category": "populated_place",
        "points": {"type": "Point", "coordinates": {"lat": 55.68, "lon": 12.57}, "place_id": "cph"},
    }
    broken = dict(good, id=2, name="Broken", points="not-json")

    with caplog.at_level(logging.WARNING, logger="services.place_normalizer"):
        places = normalize_storage([good, broken, "junk"])

    assert [p.place_id for p in places] == ["cph"]
    assert "unreadable stored place 2" in caplog.text
