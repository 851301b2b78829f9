from repositories import PlacesRepository
from scripts import seed_places


def test_seed_inserts_demo_places(monkeypatch, session_factory):
    monkeypatch.setattr(seed_places, "init_db", lambda: None)
    monkeypatch.setattr(seed_places, "SessionLocal", session_factory)

    assert seed_places.seed() == 5
    assert seed_places.seed(reset=True) == 5

    with session_factory() as session:
        places = PlacesRepository().list_places(session)
    assert [p["name"] for p in places] == ["Copenhagen", "Mexico", "Breda", "Japan", "Reykjavik City Hall"]
    assert places[-1]["category"] == "tourism.sights.city_hall"
