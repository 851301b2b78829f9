"""
Search-as-you-type pipeline behind the places dropdown.

Input is debounced, then resolved with two sequential Geoapify calls
(geocode, then places near the first hit). Results are normalized and
emitted to subscribers as one list: geocoding results first, nearby places
after, in provider order.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, List, Optional

from domain.models import Place
from services import geoapify
from services.debouncer import Debouncer
from services.place_normalizer import normalize_geocoding, normalize_places
from settings import settings

logger = logging.getLogger(__name__)

SearchListener = Callable[[List[Place]], None]


class DropdownSearch:
    """
    Idle: ``is_loading`` False. Searching: ``is_loading`` True until both
    gateway calls settle. Only the latest trigger may emit; results of a
    superseded search are dropped when they arrive.
    """

    def __init__(
        self,
        delay_ms: Any = None,
        geocode: Callable[[str], Any] = geoapify.geocode,
        places_near: Callable[[str], Any] = geoapify.places_near,
    ):
        self.text = ""
        self.places: List[Place] = []
        self.is_loading = False
        self._geocode = geocode
        self._places_near = places_near
        self._listeners: List[SearchListener] = []
        self._token = 0
        delay = settings.SEARCH_DEBOUNCE_MS if delay_ms is None else delay_ms
        self._debounced = Debouncer(self.search, delay)

    def subscribe(self, listener: SearchListener) -> None:
        self._listeners.append(listener)

    def on_input(self, text: Optional[str]) -> None:
        self.text = text or ""
        if not self.text:
            self._debounced.cancel()
            self._token += 1
            self.is_loading = False
            self.places = []
            self._emit([])
            return
        self._debounced(self.text)

    def on_focus(self) -> None:
        self.text = ""
        self.places = []
        self.is_loading = False

    async def search(self, query: str) -> Optional[List[Place]]:
        """Run one search now. Returns the emitted list, or None if superseded."""
        self._token += 1
        token = self._token
        self.is_loading = True
        try:
            found = await self._call(self._geocode, query, normalize_geocoding)
            nearby: List[Place] = []
            if found:
                nearby = await self._call(self._places_near, found[0].place_id, normalize_places)
        finally:
            if token == self._token:
                self.is_loading = False

        if token != self._token:
            logger.debug("Dropping stale results for %r", query)
            return None
        self.places = found + nearby
        self._emit(self.places)
        return self.places

    async def _call(self, fn: Callable[[str], Any], arg: str, normalize: Callable[[Any], List[Place]]) -> List[Place]:
        try:
            payload = await asyncio.to_thread(fn, arg)
            return normalize(payload)
        except Exception as exc:
            logger.error("Search call %s(%r) failed: %s", getattr(fn, "__name__", fn), arg, exc)
            return []

    def _emit(self, places: List[Place]) -> None:
        for listener in list(self._listeners):
            listener(list(places))
