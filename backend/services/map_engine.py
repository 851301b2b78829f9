"""
Keep a live map's markers and popups in sync with a list of places.

The engine owns every marker/popup handle it creates. Each call to `update`
diffs the incoming list against the live table (keyed by `place_id`) and only
creates or removes what changed; untouched places keep their handles.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from domain.models import Place
from services import mapbox
from services.mapbox import MapboxConfig

logger = logging.getLogger(__name__)


@dataclass
class LiveMarker:
    place: Place
    marker: Any
    popup: Any
    attached: bool = False


class MapEngine:
    def __init__(self, config: Optional[MapboxConfig] = None, factory: Any = mapbox):
        self.config = config or MapboxConfig()
        self.factory = factory
        self.map: Any = None
        self._live: Dict[str, LiveMarker] = {}

    @property
    def mounted(self) -> bool:
        return self.map is not None

    @property
    def live(self) -> Dict[str, LiveMarker]:
        return dict(self._live)

    def mount(self) -> None:
        if self.map is not None:
            return
        if not self.config.access_token:
            logger.warning("MAPBOX_ACCESS_TOKEN not set; map tiles will not load")
        self.map = self.factory.create_map(self.config)
        self.map.add_control(self.factory.create_geolocate_control())
        self.map.add_control(self.factory.create_navigation_control())
        self.map.add_control(self.factory.create_scale_control())

    def update(self, places: Sequence[Place]) -> None:
        """Reconcile live markers against `places`."""
        if self.map is None:
            raise RuntimeError("MapEngine.update called before mount()")

        incoming: Dict[str, Place] = {}
        for place in places:
            key = place.place_id
            if key in incoming:
                logger.debug("Duplicate place_id %s ignored", key)
                continue
            incoming[key] = place

        for key in [k for k, entry in self._live.items() if incoming.get(k) != entry.place]:
            self._drop(key)

        created = 0
        for key, place in incoming.items():
            if key not in self._live:
                self._live[key] = self._create(place)
                created += 1

        logger.debug("Map reconciled: %d live, %d created", len(self._live), created)

    def unmount(self) -> None:
        for key in list(self._live):
            self._drop(key)
        if self.map is not None:
            self.map.remove()
            self.map = None

    def _create(self, place: Place) -> LiveMarker:
        marker = self.factory.create_marker(place)
        popup = self.factory.create_popup(place)
        entry = LiveMarker(place=place, marker=marker, popup=popup)

        marker_el = marker.get_element()
        marker_el.set_attribute("dusk", f"marker-{place.name}")
        popup.get_element().set_attribute("dusk", f"popup-{place.name}")
        marker_el.add_event_listener("mouseenter", lambda: self._show_popup(entry))
        marker_el.add_event_listener("mouseleave", lambda: self._hide_popup(entry))

        marker.set_popup(popup)
        marker.add_to(self.map)
        return entry

    def _drop(self, key: str) -> None:
        entry = self._live.pop(key)
        if entry.attached:
            self._hide_popup(entry)
        entry.marker.get_element().remove_event_listeners()
        entry.marker.remove()

    def _show_popup(self, entry: LiveMarker) -> None:
        entry.popup.set_lng_lat(entry.marker.get_lng_lat()).add_to(self.map)
        entry.attached = True

    def _hide_popup(self, entry: LiveMarker) -> None:
        entry.popup.remove()
        entry.attached = False
