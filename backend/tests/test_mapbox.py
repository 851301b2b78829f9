import json

from domain.models import Category, Coordinates, Place, Points
from services.map_engine import MapEngine
from services.mapbox import MapboxConfig, create_marker, create_popup, map_scene, render_map_html


def _place(**overrides) -> Place:
    data = dict(
        name="Reykjavik City Hall",
        location_name="Tjarnargata 11, 101 Reykjavik, Iceland",
        category=Category.parse("tourism.sights.city_hall"),
        points=Points(coordinates=Coordinates(lat=64.145981, lon=-21.9422367), place_id="rvk-1"),
    )
    data.update(overrides)
    return Place(**data)


def test_popup_shows_name_location_segment_and_coordinates():
    popup = create_popup(_place())

    assert "<h3>Reykjavik City Hall</h3>" in popup.html
    assert "<p>Tjarnargata 11, 101 Reykjavik, Iceland</p>" in popup.html
    assert "<p>tourism</p>" in popup.html
    assert "<p>64.145981, -21.9422367</p>" in popup.html
    assert popup.options["closeButton"] is False


def test_popup_escapes_markup_and_hides_unknown_category():
    popup = create_popup(_place(name="<b>x</b>", category=Category.parse(None)))

    assert "&lt;b&gt;x&lt;/b&gt;" in popup.html
    assert "<p></p>" in popup.html


def test_marker_color_falls_back_to_gray():
    marker = create_marker(_place(category=Category.parse(["museum"])))
    assert marker.color == "gray"
    assert marker.options["rotation"] == 45


def test_rendered_page_contains_scene_and_token():
    engine = MapEngine(MapboxConfig(access_token="pk.test-token"))
    engine.mount()
    engine.update([_place()])

    scene = map_scene(engine.map)
    page = render_map_html(engine.map)

    assert len(scene["markers"]) == 1
    assert scene["markers"][0]["lngLat"] == [-21.9422367, 64.145981]
    assert scene["markers"][0]["hook"] == "marker-Reykjavik City Hall"
    assert "tourism" in scene["markers"][0]["popup"]
    assert '"pk.test-token"' in page
    assert "mapbox-gl-js/v3.9.0" in page
    assert json.dumps(scene["center"]) in page
