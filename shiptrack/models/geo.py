"""
Geographic value types shared by the map, places and directions layers
"""
from typing import List, Tuple
from pydantic import BaseModel, ConfigDict, Field


class Coordinate(BaseModel):
    """A latitude/longitude pair"""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.latitude, self.longitude)


class RouteMetrics(BaseModel):
    """Distance and duration of a computed route"""

    model_config = ConfigDict(frozen=True)

    distance_km: float
    duration_min: float


class Route(BaseModel):
    """Decoded route path plus its metrics"""

    model_config = ConfigDict(frozen=True)

    path: Tuple[Coordinate, ...] = ()
    metrics: RouteMetrics


class EdgePadding(BaseModel):
    model_config = ConfigDict(frozen=True)

    top: float = 100
    right: float = 100
    bottom: float = 100
    left: float = 100

    @classmethod
    def uniform(cls, value: float) -> "EdgePadding":
        return cls(top=value, right=value, bottom=value, left=value)


class Region(BaseModel):
    """Visible map area: center plus latitude/longitude extent"""

    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float
    latitude_delta: float
    longitude_delta: float

    @property
    def center(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)

    def contains(self, point: Coordinate) -> bool:
        return (
            abs(point.latitude - self.latitude) <= self.latitude_delta / 2
            and abs(point.longitude - self.longitude) <= self.longitude_delta / 2
        )


class Camera(BaseModel):
    """Map camera: center point and zoom level"""

    model_config = ConfigDict(frozen=True)

    center: Coordinate
    zoom: float
    heading: float = 0.0
    pitch: float = 0.0


def bounding_box(points: List[Coordinate]) -> Tuple[float, float, float, float]:
    """Return (min_lat, min_lng, max_lat, max_lng) of the given points"""
    latitudes = [p.latitude for p in points]
    longitudes = [p.longitude for p in points]
    return min(latitudes), min(longitudes), max(latitudes), max(longitudes)
