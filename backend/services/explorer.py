"""
Root composition of the explorer: persisted places + latest search results
feed one map.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from domain.models import Place
from services.http_client import fetch_json
from services.map_engine import MapEngine
from services.place_normalizer import normalize_storage
from services.search_pipeline import DropdownSearch

logger = logging.getLogger(__name__)

PLACES_PATH = "/places"


class PlacesExplorer:
    def __init__(
        self,
        search: DropdownSearch,
        map_engine: MapEngine,
        api_base_url: Optional[str] = None,
    ):
        self.search = search
        self.map_engine = map_engine
        self.api_base_url = api_base_url
        self.persisted: List[Place] = []
        self.search_results: List[Place] = []
        self.search.subscribe(self.on_search)

    @property
    def places(self) -> List[Place]:
        """Merged list: persisted base first, then the latest search emission."""
        return self.persisted + self.search_results

    def mount(self) -> None:
        self.map_engine.mount()
        self.persisted = self.load_persisted()
        self._push()

    def load_persisted(self) -> List[Place]:
        data = fetch_json(PLACES_PATH, "GET", base_url=self.api_base_url)
        if not isinstance(data, list):
            logger.warning("Stored places unavailable (got %s); starting empty", type(data).__name__)
            return []
        return normalize_storage(data)

    def on_search(self, places: List[Place]) -> None:
        self.search_results = list(places)
        self._push()

    def unmount(self) -> None:
        self.map_engine.unmount()

    def _push(self) -> None:
        if self.map_engine.mounted:
            self.map_engine.update(self.places)
