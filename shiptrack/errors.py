"""
Error taxonomy for the tracking screen.

Recoverable errors are shown to the user and the session keeps working.
Fatal errors mean the service is misconfigured and cannot serve requests.
"""
from typing import Optional


class ShipTrackError(Exception):
    """Base error"""

    recoverable = True


class ConfigurationError(ShipTrackError):
    """Missing or invalid configuration, e.g. no API key"""

    recoverable = False


class PlaceResolutionError(ShipTrackError):
    """A selected place could not be turned into a coordinate"""


class ExternalServiceError(ShipTrackError):
    """An external map service failed (network, quota, bad response)"""

    service = "external"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class PlacesServiceError(ExternalServiceError):
    service = "places"


class RouteRequestError(ExternalServiceError):
    service = "directions"


class RouteNotFoundError(RouteRequestError):
    """The directions service found no route between the two points"""


class QuotaExceededError(ExternalServiceError):
    """Daily call limit reached or the provider reported quota exhaustion"""
