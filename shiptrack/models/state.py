"""
Session selection state and the events that move it forward.

State values are immutable; the reducer in services.tracker.reducer builds a
new value for every event.
"""
from enum import Enum
from typing import Literal, Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict, model_validator

from shiptrack.models.geo import Coordinate, Route, RouteMetrics

PointField = Literal["origin", "destination"]


class TrackerPhase(str, Enum):
    IDLE = "idle"
    ORIGIN_SET = "origin_set"
    DESTINATION_SET = "destination_set"
    BOTH_SET = "both_set"
    ROUTE_SHOWN = "route_shown"


class SelectionState(BaseModel):
    model_config = ConfigDict(frozen=True)

    origin: Optional[Coordinate] = None
    destination: Optional[Coordinate] = None
    route_requested: bool = False
    # route drawn but one of its endpoints has changed since
    route_stale: bool = False
    request_id: Optional[int] = None
    metrics: Optional[RouteMetrics] = None
    path: Tuple[Coordinate, ...] = ()
    error: Optional[str] = None

    @model_validator(mode="after")
    def _route_needs_both_points(self) -> "SelectionState":
        if self.route_requested and not self.has_both_points:
            raise ValueError("route_requested requires both origin and destination")
        return self

    @property
    def has_both_points(self) -> bool:
        return self.origin is not None and self.destination is not None

    @property
    def phase(self) -> TrackerPhase:
        route_failed = self.error is not None and not self.path
        if self.route_requested and not self.route_stale and not route_failed:
            return TrackerPhase.ROUTE_SHOWN
        if self.has_both_points:
            return TrackerPhase.BOTH_SET
        if self.origin is not None:
            return TrackerPhase.ORIGIN_SET
        if self.destination is not None:
            return TrackerPhase.DESTINATION_SET
        return TrackerPhase.IDLE


class PointSelected(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: PointField
    coordinate: Coordinate


class SelectionFailed(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: PointField
    message: str


class TrackRequested(BaseModel):
    model_config = ConfigDict(frozen=True)

    request_id: int


class RouteCompleted(BaseModel):
    model_config = ConfigDict(frozen=True)

    request_id: int
    route: Route


class RouteFailed(BaseModel):
    model_config = ConfigDict(frozen=True)

    request_id: int
    message: str


TrackerEvent = Union[
    PointSelected, SelectionFailed, TrackRequested, RouteCompleted, RouteFailed
]
