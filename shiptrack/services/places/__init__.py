from .google_places_service import GooglePlacesService
from .place_resolver import MissingGeometryPolicy, PlaceResolver
from .places_service import PlacesService

__all__ = [
    "GooglePlacesService",
    "MissingGeometryPolicy",
    "PlaceResolver",
    "PlacesService",
]
