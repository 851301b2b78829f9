"""
Mapbox GL object model and factories.

The map, markers, popups and controls are retained-mode handles mirroring the
Mapbox GL JS API (`addTo`, `remove`, `setLngLat`, ...). The map engine owns
them; `render_map_html` turns a mounted map into a standalone page that draws
the same scene with Mapbox GL JS in the browser.
"""
from __future__ import annotations

import html
import json
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from domain.models import Place
from services.place_normalizer import category_color, category_segment

MAPBOX_GL_VERSION = "v3.9.0"
DEFAULT_STYLE = "mapbox://styles/mapbox/streets-v12"
DEFAULT_CENTER: Tuple[float, float] = (4.8924534, 52.3730796)  # lng, lat (Amsterdam)
DEFAULT_ZOOM = 10

LngLat = Tuple[float, float]


@dataclass(frozen=True)
class MapboxConfig:
    """Explicit map configuration; the access token is never a module global."""
    access_token: str = ""
    style: str = DEFAULT_STYLE
    center: LngLat = DEFAULT_CENTER
    zoom: float = DEFAULT_ZOOM
    container: str = "map"
    projection: str = "mercator"
    attribution_control: bool = True


GEOLOCATE_CONTROL_OPTIONS = {
    "positionOptions": {"enableHighAccuracy": True},
    "trackUserLocation": True,
    "showAccuracyCircle": True,
    "showUserHeading": True,
}
NAVIGATION_CONTROL_OPTIONS = {
    "showCompass": True,
    "showZoom": True,
    "visualizePitch": True,
}
SCALE_CONTROL_OPTIONS = {
    "maxWidth": 80,
    "unit": "metric",
}
POPUP_OPTIONS = {
    "closeButton": False,
    "closeOnClick": False,
    "className": "mapboxgl-popup",
}
MARKER_OPTIONS = {
    "color": "teal",
    "rotation": 45,
    "anchor": "center",
    "pitchAlignment": "map",
    "rotationAlignment": "map",
    "className": "marker-enlarged",
}


class Element:
    """Minimal DOM element: attributes plus event listeners."""

    def __init__(self) -> None:
        self.attributes: Dict[str, str] = {}
        self._listeners: Dict[str, List[Callable[[], None]]] = {}

    def set_attribute(self, name: str, value: str) -> None:
        self.attributes[name] = value

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def add_event_listener(self, event: str, listener: Callable[[], None]) -> None:
        self._listeners.setdefault(event, []).append(listener)

    def remove_event_listeners(self) -> None:
        self._listeners.clear()

    def dispatch_event(self, event: str) -> None:
        for listener in list(self._listeners.get(event, [])):
            listener()


@dataclass
class Control:
    kind: str
    options: Dict[str, Any] = field(default_factory=dict)


class Map:
    def __init__(self, config: MapboxConfig):
        self.config = config
        self.controls: List[Control] = []
        self.markers: List["Marker"] = []
        self.popups: List["Popup"] = []
        self.removed = False

    def add_control(self, control: Control) -> "Map":
        self.controls.append(control)
        return self

    def remove(self) -> None:
        for marker in list(self.markers):
            marker.remove()
        for popup in list(self.popups):
            popup.remove()
        self.controls.clear()
        self.removed = True


class Marker:
    def __init__(self, options: Optional[Dict[str, Any]] = None):
        self.options = {**MARKER_OPTIONS, **(options or {})}
        self._element = Element()
        self._lng_lat: Optional[LngLat] = None
        self._map: Optional[Map] = None
        self._popup: Optional["Popup"] = None

    @property
    def color(self) -> str:
        return self.options["color"]

    def set_popup(self, popup: Optional["Popup"]) -> "Marker":
        self._popup = popup
        return self

    def get_popup(self) -> Optional["Popup"]:
        return self._popup

    def set_lng_lat(self, lng_lat: LngLat) -> "Marker":
        self._lng_lat = lng_lat
        return self

    def get_lng_lat(self) -> Optional[LngLat]:
        return self._lng_lat

    def get_element(self) -> Element:
        return self._element

    def add_to(self, map_: Map) -> "Marker":
        if self._map is not map_:
            self.remove()
            map_.markers.append(self)
            self._map = map_
        return self

    def remove(self) -> "Marker":
        if self._map is not None:
            if self in self._map.markers:
                self._map.markers.remove(self)
            self._map = None
        return self


class Popup:
    def __init__(self, options: Optional[Dict[str, Any]] = None):
        self.options = {**POPUP_OPTIONS, **(options or {})}
        self._element = Element()
        self._html = ""
        self._lng_lat: Optional[LngLat] = None
        self._map: Optional[Map] = None

    @property
    def html(self) -> str:
        return self._html

    def set_html(self, markup: str) -> "Popup":
        self._html = markup
        return self

    def set_lng_lat(self, lng_lat: Optional[LngLat]) -> "Popup":
        self._lng_lat = lng_lat
        return self

    def get_element(self) -> Element:
        return self._element

    def is_open(self) -> bool:
        return self._map is not None

    def add_to(self, map_: Map) -> "Popup":
        if self._map is not map_:
            self.remove()
            map_.popups.append(self)
            self._map = map_
        return self

    def remove(self) -> "Popup":
        if self._map is not None:
            if self in self._map.popups:
                self._map.popups.remove(self)
            self._map = None
        return self


def create_map(config: MapboxConfig) -> Map:
    return Map(config)


def create_geolocate_control() -> Control:
    return Control("geolocate", dict(GEOLOCATE_CONTROL_OPTIONS))


def create_navigation_control() -> Control:
    return Control("navigation", dict(NAVIGATION_CONTROL_OPTIONS))


def create_scale_control() -> Control:
    return Control("scale", dict(SCALE_CONTROL_OPTIONS))


def _text(value: Any) -> str:
    return html.escape("" if value is None else str(value))


def popup_html(place: Place) -> str:
    coords = place.points.coordinates
    return (
        f"<h3>{_text(place.name)}</h3>"
        f"<p>{_text(place.location_name)}</p>"
        f"<p>{_text(category_segment(place.category))}</p>"
        f"<p>{_text(coords.lat)}, {_text(coords.lon)}</p>"
    )


def create_popup(place: Place) -> Popup:
    return Popup().set_html(popup_html(place))


def create_marker(place: Place) -> Marker:
    coords = place.points.coordinates
    return Marker({"color": category_color(place.category)}).set_lng_lat((coords.lon, coords.lat))


def map_scene(map_: Map) -> Dict[str, Any]:
    """JSON-ready description of everything currently on the map."""
    cfg = map_.config
    markers = []
    for marker in map_.markers:
        lng_lat = marker.get_lng_lat()
        popup = marker.get_popup()
        markers.append(
            {
                "lngLat": list(lng_lat) if lng_lat else None,
                "options": marker.options,
                "hook": marker.get_element().get_attribute("dusk"),
                "popup": popup.html if popup else "",
            }
        )
    return {
        "style": cfg.style,
        "center": list(cfg.center),
        "zoom": cfg.zoom,
        "projection": cfg.projection,
        "attributionControl": cfg.attribution_control,
        "controls": [{"kind": c.kind, "options": c.options} for c in map_.controls],
        "popupOptions": POPUP_OPTIONS,
        "markers": markers,
    }


def render_map_html(map_: Map, title: str = "Places Explorer") -> str:
    """Standalone HTML page drawing the map scene with Mapbox GL JS."""
    scene_json = json.dumps(map_scene(map_)).replace("</", "<\\/")
    token_json = json.dumps(map_.config.access_token)
    base = f"https://api.mapbox.com/mapbox-gl-js/{MAPBOX_GL_VERSION}"
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>{_text(title)}</title>
    <link href="{base}/mapbox-gl.css" rel="stylesheet">
    <script src="{base}/mapbox-gl.js"></script>
    <style>
        body {{ margin: 0; }}
        #{map_.config.container} {{ width: 100%; height: 100vh; }}
        .marker-enlarged {{ cursor: pointer; }}
    </style>
</head>
<body>
    <div id="{_text(map_.config.container)}"></div>
    <script>
        const scene = {scene_json};
        mapboxgl.accessToken = {token_json};
        const map = new mapboxgl.Map({{
            container: {json.dumps(map_.config.container)},
            style: scene.style,
            center: scene.center,
            zoom: scene.zoom,
            projection: scene.projection,
            attributionControl: scene.attributionControl,
        }});
        const controls = {{
            geolocate: (o) => new mapboxgl.GeolocateControl(o),
            navigation: (o) => new mapboxgl.NavigationControl(o),
            scale: (o) => new mapboxgl.ScaleControl(o),
        }};
        scene.controls.forEach((c) => map.addControl(controls[c.kind](c.options)));
        scene.markers.forEach((m) => {{
            const marker = new mapboxgl.Marker(m.options).setLngLat(m.lngLat).addTo(map);
            const popup = new mapboxgl.Popup(scene.popupOptions).setHTML(m.popup);
            const el = marker.getElement();
            if (m.hook) el.setAttribute("dusk", m.hook);
            el.addEventListener("mouseenter", () => popup.setLngLat(marker.getLngLat()).addTo(map));
            el.addEventListener("mouseleave", () => popup.remove());
        }});
    </script>
</body>
</html>
"""
