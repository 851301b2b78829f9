from unittest.mock import patch

import pytest

from services import geoapify


@pytest.fixture(autouse=True)
def api_key(monkeypatch):
    monkeypatch.setattr(geoapify.settings, "GEOAPIFY_API_KEY", "test-key")


@patch("services.geoapify.fetch_json")
def test_geocode_empty_query_skips_network(mock_fetch):
    assert geoapify.geocode("") == {"features": []}
    mock_fetch.assert_not_called()


@patch("services.geoapify.fetch_json")
def test_geocode_sends_text_and_key(mock_fetch):
    mock_fetch.return_value = {"features": [{"properties": {"place_id": "p1"}}]}

    data = geoapify.geocode("Amsterdam")

    assert data["features"][0]["properties"]["place_id"] == "p1"
    args, kwargs = mock_fetch.call_args
    assert args[0] == geoapify.GEOAPIFY_GEOCODE_URL
    assert kwargs["params"] == {"text": "Amsterdam", "apiKey": "test-key"}


@patch("services.geoapify.fetch_json")
def test_geocode_without_api_key_returns_none(mock_fetch, monkeypatch, caplog):
    monkeypatch.setattr(geoapify.settings, "GEOAPIFY_API_KEY", "")

    assert geoapify.geocode("Amsterdam") is None
    mock_fetch.assert_not_called()
    assert "GEOAPIFY_API_KEY" in caplog.text


@patch("services.geoapify.fetch_json")
def test_geocode_failure_is_none(mock_fetch):
    mock_fetch.return_value = None
    assert geoapify.geocode("Amsterdam") is None


@patch("services.geoapify.fetch_json")
def test_places_near_empty_id_skips_network(mock_fetch):
    assert geoapify.places_near("") == []
    mock_fetch.assert_not_called()


@patch("services.geoapify.fetch_json")
def test_places_near_filters_by_place_and_categories(mock_fetch):
    mock_fetch.return_value = {"features": []}

    geoapify.places_near("amsterdam-123")

    args, kwargs = mock_fetch.call_args
    assert args[0] == geoapify.GEOAPIFY_PLACES_URL
    params = kwargs["params"]
    assert params["filter"] == "place:amsterdam-123"
    assert params["limit"] == 100
    assert params["apiKey"] == "test-key"
    categories = params["categories"].split(",")
    assert len(categories) == 38
    assert categories[0] == "accommodation"
    assert categories[-1] == "tourism"
    assert "low_emission_zone" in categories


@patch("services.geoapify.fetch_json")
def test_places_near_failure_is_none(mock_fetch):
    mock_fetch.return_value = None
    assert geoapify.places_near("amsterdam-123") is None
