"""Render the explorer map (stored places plus an optional search) to HTML.

Usage:
    python -m scripts.render_explorer_map [--query Amsterdam] [--out explorer.html]

Stored places are read from the running places API (PLACES_API_BASE_URL);
the search goes to Geoapify (GEOAPIFY_API_KEY). The page draws the
reconciled markers with Mapbox GL JS (MAPBOX_ACCESS_TOKEN).
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ROOT = Path(__file__).resolve().parents[1]
load_dotenv(ROOT / ".env")

from services.explorer import PlacesExplorer
from services.map_engine import MapEngine
from services.mapbox import MapboxConfig, render_map_html
from services.search_pipeline import DropdownSearch
from settings import settings

LOG = logging.getLogger("render_explorer_map")


async def build_page(query: Optional[str], api_base_url: Optional[str] = None) -> str:
    engine = MapEngine(MapboxConfig(access_token=settings.MAPBOX_ACCESS_TOKEN))
    explorer = PlacesExplorer(DropdownSearch(), engine, api_base_url=api_base_url)
    explorer.mount()
    try:
        if query:
            results = await explorer.search.search(query)
            LOG.info("Search %r returned %d places", query, len(results or []))
        LOG.info("Rendering %d places", len(engine.live))
        return render_map_html(engine.map)
    finally:
        explorer.unmount()


def main() -> None:
    parser = argparse.ArgumentParser(description="Render the places explorer map to HTML")
    parser.add_argument("--query", default="", help="free-text location to search")
    parser.add_argument("--api", default=None, help="places API base URL")
    parser.add_argument("--out", default=str(ROOT / "data" / "explorer.html"))
    args = parser.parse_args()
    logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))

    page = asyncio.run(build_page(args.query, api_base_url=args.api))
    out = Path(args.out)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(page, encoding="utf-8")
    print(f"Wrote {out}")


if __name__ == "__main__":
    main()
