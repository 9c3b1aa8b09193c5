import logging
from typing import Any, Dict, List, Optional

import httpx

from shiptrack.config import settings
from shiptrack.errors import ConfigurationError, PlacesServiceError, QuotaExceededError
from shiptrack.models.response import Prediction
from shiptrack.services.api_counter import APICounter, api_counter
from shiptrack.services.places.places_service import PlacesService

logger = logging.getLogger(__name__)

DETAILS_FIELDS = "geometry,name,formatted_address"


class GooglePlacesService(PlacesService):
    """Google Places Autocomplete / Place Details client"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        language: Optional[str] = None,
        counter: Optional[APICounter] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.google_api_key
        self.language = language or settings.places_language
        self.autocomplete_url = settings.places_autocomplete_url
        self.details_url = settings.places_details_url
        self.counter = counter or api_counter
        self._transport = transport

        if not self.api_key:
            raise ConfigurationError("Google API key is required")

    async def autocomplete(self, text: str) -> List[Prediction]:
        if not text.strip():
            return []

        data = await self._get(
            self.autocomplete_url,
            {"input": text, "key": self.api_key, "language": self.language},
        )
        try:
            return [
                Prediction(place_id=p["place_id"], description=p.get("description", ""))
                for p in data.get("predictions", [])
                if p.get("place_id")
            ]
        except (ValueError, TypeError, AttributeError) as e:
            raise PlacesServiceError(f"Malformed autocomplete prediction: {e}") from e

    async def get_place_details(self, place_id: str) -> Dict[str, Any]:
        data = await self._get(
            self.details_url,
            {
                "place_id": place_id,
                "key": self.api_key,
                "language": self.language,
                "fields": DETAILS_FIELDS,
            },
        )
        return data.get("result", {})

    async def _get(self, url: str, params: Dict[str, str]) -> Dict[str, Any]:
        self.counter.ensure_available("places")

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.get(
                    url, params=params, timeout=settings.request_timeout_s
                )
                response.raise_for_status()
                self.counter.record_call("places")
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 429:
                raise QuotaExceededError("Places API quota exceeded", status) from e
            elif status == 403:
                raise PlacesServiceError(
                    "API key invalid or Places API not enabled", status
                ) from e
            raise PlacesServiceError(f"Places API error: {status}", status) from e
        except httpx.HTTPError as e:
            raise PlacesServiceError(f"Failed to reach Places API: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise PlacesServiceError(f"Malformed Places API response: {e}") from e
        if not isinstance(data, dict):
            raise PlacesServiceError("Malformed Places API response: expected an object")

        self._check_status(data)
        return data

    @staticmethod
    def _check_status(data: Dict[str, Any]) -> None:
        status = data.get("status", "OK")
        if status in ("OK", "ZERO_RESULTS"):
            return

        message = data.get("error_message", "")
        logger.warning("Places API returned %s %s", status, message)
        if status == "OVER_QUERY_LIMIT":
            raise QuotaExceededError("Places API quota exceeded", 429)
        elif status == "REQUEST_DENIED":
            raise PlacesServiceError(f"Places request denied: {message}", 403)
        elif status in ("INVALID_REQUEST", "NOT_FOUND"):
            raise PlacesServiceError(f"Invalid place request: {status}", 400)
        raise PlacesServiceError(f"Places API error: {status}")
