"""
Shared fakes for the external Places and Directions services
"""
import asyncio
from typing import Any, Dict, List, Optional, Tuple

import pytest

from shiptrack.models.geo import Coordinate, Route, RouteMetrics
from shiptrack.models.response import Prediction
from shiptrack.services.directions.directions_service import DirectionsService
from shiptrack.services.places.places_service import PlacesService

LAGOS_ORIGIN = Coordinate(latitude=6.50, longitude=3.38)
LAGOS_DESTINATION = Coordinate(latitude=6.45, longitude=3.40)


def place_details(lat: float, lng: float, name: str = "Somewhere") -> Dict[str, Any]:
    return {"name": name, "geometry": {"location": {"lat": lat, "lng": lng}}}


def make_route(distance_km: float = 12.3, duration_min: float = 18) -> Route:
    return Route(
        path=(LAGOS_ORIGIN, LAGOS_DESTINATION),
        metrics=RouteMetrics(distance_km=distance_km, duration_min=duration_min),
    )


class FakeDirectionsService(DirectionsService):
    """Returns queued (delay, route-or-error) responses in call order"""

    def __init__(self, *responses: Tuple[float, Any]):
        self.responses = list(responses) or [(0.0, make_route())]
        self.calls: List[Tuple[Coordinate, Coordinate]] = []

    async def get_route(self, origin: Coordinate, destination: Coordinate) -> Route:
        index = min(len(self.calls), len(self.responses) - 1)
        self.calls.append((origin, destination))
        delay, outcome = self.responses[index]
        await asyncio.sleep(delay)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakePlacesService(PlacesService):
    def __init__(self, places: Optional[Dict[str, Dict[str, Any]]] = None):
        self.places = places or {}

    async def autocomplete(self, text: str) -> List[Prediction]:
        return [
            Prediction(place_id=place_id, description=details.get("name", place_id))
            for place_id, details in self.places.items()
            if text.lower() in details.get("name", "").lower()
        ]

    async def get_place_details(self, place_id: str) -> Dict[str, Any]:
        return self.places.get(place_id, {})


@pytest.fixture
def directions_service() -> FakeDirectionsService:
    return FakeDirectionsService()


@pytest.fixture
def places_service() -> FakePlacesService:
    return FakePlacesService(
        {
            "yaba": place_details(6.50, 3.38, "Yaba, Lagos"),
            "surulere": place_details(6.45, 3.40, "Surulere, Lagos"),
            "nowhere": {"name": "Nowhere"},
        }
    )


@pytest.fixture
def fake_directions():
    """Factory for directions fakes with scripted responses"""
    return FakeDirectionsService


@pytest.fixture
def route_factory():
    return make_route


@pytest.fixture
def origin() -> Coordinate:
    return LAGOS_ORIGIN


@pytest.fixture
def destination() -> Coordinate:
    return LAGOS_DESTINATION


@pytest.fixture
def details_factory():
    return place_details
