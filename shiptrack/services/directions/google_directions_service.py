import logging
from typing import Any, Dict, List, Optional

import httpx
import polyline

from shiptrack.config import settings
from shiptrack.errors import (
    ConfigurationError,
    QuotaExceededError,
    RouteNotFoundError,
    RouteRequestError,
)
from shiptrack.models.geo import Coordinate, Route, RouteMetrics
from shiptrack.services.api_counter import APICounter, api_counter
from shiptrack.services.directions.directions_service import DirectionsService

logger = logging.getLogger(__name__)


class GoogleDirectionsService(DirectionsService):
    """Google Directions API service implementation"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        mode: Optional[str] = None,
        counter: Optional[APICounter] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.google_api_key
        self.mode = mode or settings.travel_mode
        self.directions_url = settings.directions_url
        self.counter = counter or api_counter
        self._transport = transport

        if not self.api_key:
            raise ConfigurationError("Google API key is required")

    async def get_route(self, origin: Coordinate, destination: Coordinate) -> Route:
        self.counter.ensure_available("directions")

        params = {
            "origin": _format_point(origin),
            "destination": _format_point(destination),
            "mode": self.mode,
            "key": self.api_key,
        }
        logger.info(
            "Requesting %s route %s -> %s",
            self.mode,
            params["origin"],
            params["destination"],
        )

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(
                    self.directions_url, params=params, timeout=settings.request_timeout_s
                )
                response.raise_for_status()
                self.counter.record_call("directions")
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 429:
                raise QuotaExceededError("Directions API quota exceeded", status) from e
            elif status == 403:
                raise RouteRequestError(
                    "API key invalid or Directions API not enabled", status
                ) from e
            elif status == 400:
                raise RouteRequestError(
                    "Bad request (400): Invalid request parameters", status
                ) from e
            raise RouteRequestError(f"Directions API error: {status}", status) from e
        except httpx.HTTPError as e:
            raise RouteRequestError(f"Failed to get directions: {e}") from e

        try:
            return self._convert_directions_response(response.json())
        except (ValueError, TypeError, KeyError, IndexError, AttributeError) as e:
            raise RouteRequestError(f"Malformed Directions API response: {e}") from e

    def _convert_directions_response(self, data: Dict[str, Any]) -> Route:
        """Convert a Directions API response to a Route"""
        status = data.get("status", "OK")
        if status in ("ZERO_RESULTS", "NOT_FOUND"):
            raise RouteNotFoundError(f"No route found ({status})", 404)
        elif status == "OVER_QUERY_LIMIT":
            raise QuotaExceededError("Directions API quota exceeded", 429)
        elif status == "REQUEST_DENIED":
            raise RouteRequestError(
                f"Directions request denied: {data.get('error_message', '')}", 403
            )
        elif status != "OK":
            raise RouteRequestError(f"Directions API error: {status}")

        routes = data.get("routes") or []
        if not routes:
            raise RouteNotFoundError("No route found", 404)

        route = routes[0]
        legs: List[Dict[str, Any]] = route.get("legs", [])

        # distance and duration are independent fields of every leg
        distance_m = sum(leg.get("distance", {}).get("value", 0) for leg in legs)
        duration_s = sum(leg.get("duration", {}).get("value", 0) for leg in legs)

        encoded = route.get("overview_polyline", {}).get("points", "")
        path = tuple(
            Coordinate(latitude=lat, longitude=lng)
            for lat, lng in (polyline.decode(encoded) if encoded else [])
        )

        return Route(
            path=path,
            metrics=RouteMetrics(
                distance_km=distance_m / 1000, duration_min=duration_s / 60
            ),
        )


def _format_point(point: Coordinate) -> str:
    return f"{point.latitude},{point.longitude}"
