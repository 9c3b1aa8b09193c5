"""
Response models for the tracking screen API
"""
from typing import List, Optional
from pydantic import BaseModel

from shiptrack.models.geo import Coordinate, Region
from shiptrack.models.state import PointField, TrackerPhase


class Prediction(BaseModel):
    """Autocomplete suggestion"""
    place_id: str
    description: str


class AutocompleteResponse(BaseModel):
    predictions: List[Prediction] = []


class Marker(BaseModel):
    field: PointField
    coordinate: Coordinate


class RouteLine(BaseModel):
    path: List[Coordinate]
    stroke_width: int = 5
    stroke_color: str = "#260ba9"
    stale: bool = False


class TrackerView(BaseModel):
    """Everything the screen draws for the current state"""
    phase: TrackerPhase
    markers: List[Marker] = []
    route: Optional[RouteLine] = None
    distance_text: Optional[str] = None
    duration_text: Optional[str] = None
    error: Optional[str] = None
    region: Optional[Region] = None


class SessionResponse(BaseModel):
    session_id: str
    view: TrackerView
