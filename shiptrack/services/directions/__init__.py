from .directions_service import DirectionsService
from .google_directions_service import GoogleDirectionsService
from .route_requester import RoutePolicy, RouteRequest, RouteRequester

__all__ = [
    "DirectionsService",
    "GoogleDirectionsService",
    "RoutePolicy",
    "RouteRequest",
    "RouteRequester",
]
