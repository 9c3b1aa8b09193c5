import asyncio

import httpx
import pytest

from shiptrack.errors import PlacesServiceError, QuotaExceededError
from shiptrack.services.api_counter import APICounter
from shiptrack.services.places.google_places_service import GooglePlacesService


def make_service(handler):
    return GooglePlacesService(
        api_key="test-key",
        counter=APICounter(max_calls_per_day=100),
        transport=httpx.MockTransport(handler),
    )


def test_autocomplete_sends_language_and_key():
    seen = {}

    def handler(request):
        seen.update(request.url.params)
        return httpx.Response(
            200,
            json={
                "status": "OK",
                "predictions": [
                    {"place_id": "abc", "description": "Yaba, Lagos, Nigeria"},
                    {"description": "no id"},
                ],
            },
        )

    predictions = asyncio.run(make_service(handler).autocomplete("Yaba"))

    assert [p.place_id for p in predictions] == ["abc"]
    assert seen["input"] == "Yaba"
    assert seen["language"] == "pt-BR"
    assert seen["key"] == "test-key"


def test_blank_input_skips_the_call():
    def handler(request):
        raise AssertionError("no request expected")

    assert asyncio.run(make_service(handler).autocomplete("   ")) == []


def test_place_details_returns_result_with_geometry():
    def handler(request):
        assert request.url.params["fields"] == "geometry,name,formatted_address"
        return httpx.Response(
            200,
            json={
                "status": "OK",
                "result": {"name": "Yaba", "geometry": {"location": {"lat": 6.5, "lng": 3.38}}},
            },
        )

    details = asyncio.run(make_service(handler).get_place_details("abc"))

    assert details["geometry"]["location"] == {"lat": 6.5, "lng": 3.38}


@pytest.mark.parametrize(
    "payload_status, error",
    [
        ("OVER_QUERY_LIMIT", QuotaExceededError),
        ("REQUEST_DENIED", PlacesServiceError),
        ("INVALID_REQUEST", PlacesServiceError),
        ("UNKNOWN_ERROR", PlacesServiceError),
    ],
)
def test_api_status_errors(payload_status, error):
    def handler(request):
        return httpx.Response(200, json={"status": payload_status})

    with pytest.raises(error):
        asyncio.run(make_service(handler).get_place_details("abc"))


def test_http_403_is_a_places_error():
    def handler(request):
        return httpx.Response(403)

    with pytest.raises(PlacesServiceError, match="not enabled"):
        asyncio.run(make_service(handler).autocomplete("Yaba"))


def test_non_json_body_is_a_places_error():
    def handler(request):
        return httpx.Response(200, text="<html>bad gateway</html>")

    with pytest.raises(PlacesServiceError, match="Malformed"):
        asyncio.run(make_service(handler).get_place_details("abc"))


def test_non_object_body_is_a_places_error():
    def handler(request):
        return httpx.Response(200, json=["OK"])

    with pytest.raises(PlacesServiceError, match="Malformed"):
        asyncio.run(make_service(handler).autocomplete("Yaba"))


def test_malformed_prediction_is_a_places_error():
    def handler(request):
        return httpx.Response(200, json={"status": "OK", "predictions": ["Yaba"]})

    with pytest.raises(PlacesServiceError, match="Malformed"):
        asyncio.run(make_service(handler).autocomplete("Yaba"))
