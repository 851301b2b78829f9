"""Seed the places table with a handful of demo places.

Usage:
    python -m scripts.seed_places [--reset]
"""

from __future__ import annotations

import argparse
import logging

from db import SessionLocal, init_db
from repositories import PlacesRepository
from repositories.models import PlaceORM

LOG = logging.getLogger("seed_places")

SEED_PLACES = [
    {
        "name": "Copenhagen",
        "location_name": "1357 Copenhagen, Denmark",
        "category": "populated_place",
        "points": {
            "type": "Point",
            "coordinates": {"lat": 55.6867243, "lon": 12.5700724},
            "place_id": "5158b49487e0232940592beff494e6d74b40f00103f901662ad10000000000c00207920307313335372b646b",
        },
    },
    {
        "name": "Mexico",
        "location_name": "Mexico City, Mexico",
        "category": "administrative",
        "points": {
            "type": "Point",
            "coordinates": {"lat": 19.4326296, "lon": -99.1331785},
            "place_id": "51f1811dff85c858c05914483fd0c06e3340f00101f9014a00150000000000c00208",
        },
    },
    {
        "name": "Breda",
        "location_name": "Breda, NB, Netherlands",
        "category": "administrative",
        "points": {
            "type": "Point",
            "coordinates": {"lat": 51.5887845, "lon": 4.7760237},
            "place_id": "5104aff1f4a51a13405924f25d4a5dcb4940f00101f9017c64290000000000c00208",
        },
    },
    {
        "name": "Japan",
        "location_name": "Tokyo, Japan",
        "category": "administrative",
        "points": {
            "type": "Point",
            "coordinates": {"lat": 35.6821936, "lon": 139.762221},
            "place_id": "51626a4b1d64786140592fc5b01e52d74140f00101f901d58b170000000000c00208",
        },
    },
    {
        "name": "Reykjavik City Hall",
        "location_name": "Reykjavik City Hall, Tjarnargata 11, 101 Reykjavik, Iceland",
        "category": "tourism.sights.city_hall",
        "points": {
            "type": "Point",
            "coordinates": {"lat": 64.145981, "lon": -21.9422367},
            "place_id": "514997a36c36f135c0599835b1c057095040f00101f9017d60270000000000c00208",
        },
    },
]


def seed(reset: bool = False) -> int:
    init_db()
    repo = PlacesRepository()
    with SessionLocal() as session:
        if reset:
            deleted = session.query(PlaceORM).delete()
            session.commit()
            LOG.info("Removed %d existing places", deleted)
        for data in SEED_PLACES:
            saved = repo.create_place(session, data)
            LOG.info("Seeded place %s (%s)", saved["id"], saved["name"])
    return len(SEED_PLACES)


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed demo places")
    parser.add_argument("--reset", action="store_true", help="delete existing places first")
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)
    count = seed(reset=args.reset)
    print(f"Seeded {count} places")


if __name__ == "__main__":
    main()
