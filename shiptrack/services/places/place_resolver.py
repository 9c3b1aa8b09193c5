"""
Turns a picked autocomplete suggestion into a coordinate
"""
import logging
from enum import Enum
from typing import Any, Mapping, Optional

from shiptrack.config import settings
from shiptrack.errors import PlaceResolutionError
from shiptrack.models.geo import Coordinate

logger = logging.getLogger(__name__)

NULL_ISLAND = Coordinate(latitude=0.0, longitude=0.0)


class MissingGeometryPolicy(str, Enum):
    ZERO = "zero"
    RAISE = "raise"


class PlaceResolver:
    def __init__(self, policy: Optional[MissingGeometryPolicy] = None):
        # TODO: switch the default to RAISE once clients handle the selection error
        self.policy = MissingGeometryPolicy(policy or settings.missing_geometry_policy)

    def resolve(self, details: Optional[Mapping[str, Any]]) -> Coordinate:
        """Read ``geometry.location.{lat,lng}`` from place details.

        With the ZERO policy a missing location resolves to (0, 0); with RAISE
        it is a PlaceResolutionError.
        """
        location = _child(_child(details, "geometry"), "location")
        lat = _child(location, "lat")
        lng = _child(location, "lng")

        if lat is None or lng is None:
            name = _child(details, "name") or "<unknown>"
            if self.policy is MissingGeometryPolicy.RAISE:
                raise PlaceResolutionError(f"Place {name!r} has no location")
            logger.warning("Place %r has no location, falling back to (0, 0)", name)
            return NULL_ISLAND

        try:
            return Coordinate(latitude=float(lat), longitude=float(lng))
        except (TypeError, ValueError) as e:
            raise PlaceResolutionError(f"Invalid location {lat!r}, {lng!r}") from e


def _child(node: Any, key: str) -> Any:
    # client supplied details may have any shape; non-mappings count as missing
    if isinstance(node, Mapping):
        return node.get(key)
    return None
