"""
Headless map surface.

Keeps the visible region in memory and computes camera moves the way a
mercator-style map view does, without drawing anything. Every animation is
recorded so API clients (and tests) can replay camera moves.
"""
import logging
import math
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional

from shiptrack.config import settings
from shiptrack.models.geo import Camera, Coordinate, EdgePadding, Region, bounding_box
from shiptrack.services.map.map_surface import MapSurface

logger = logging.getLogger(__name__)

TILE_SIZE = 256
# camera moves kept for replay per surface
MAX_RECORDED_ANIMATIONS = 50
# keeps a fit on a single point (or identical points) from zooming in forever
MIN_SPAN_DEG = 0.002


@dataclass(frozen=True)
class Animation:
    region: Region
    duration_ms: int
    edge_padding: Optional[EdgePadding] = None


class ViewportMapSurface(MapSurface):
    def __init__(
        self,
        width: Optional[float] = None,
        height: Optional[float] = None,
        initial_region: Optional[Region] = None,
        mounted: bool = True,
    ):
        self.width = width or settings.screen_width
        self.height = height or settings.screen_height
        self.region = initial_region or self.default_region(self.width, self.height)
        self.mounted = mounted
        self.animations: Deque[Animation] = deque(maxlen=MAX_RECORDED_ANIMATIONS)

    @staticmethod
    def default_region(width: float, height: float) -> Region:
        return Region(
            latitude=settings.initial_latitude,
            longitude=settings.initial_longitude,
            latitude_delta=settings.latitude_delta,
            longitude_delta=settings.latitude_delta * (width / height),
        )

    def mount(self) -> None:
        self.mounted = True

    def unmount(self) -> None:
        self.mounted = False

    async def get_camera(self) -> Optional[Camera]:
        if not self.mounted:
            return None
        return Camera(center=self.region.center, zoom=self._zoom_for(self.region))

    async def animate_camera(self, camera: Camera, duration_ms: int) -> None:
        if not self.mounted:
            return
        longitude_delta = self._longitude_delta_for(camera.zoom)
        self.region = Region(
            latitude=camera.center.latitude,
            longitude=camera.center.longitude,
            latitude_delta=longitude_delta * (self.height / self.width),
            longitude_delta=longitude_delta,
        )
        self.animations.append(Animation(region=self.region, duration_ms=duration_ms))

    async def fit_to_coordinates(
        self, points: List[Coordinate], edge_padding: EdgePadding
    ) -> None:
        if not self.mounted or not points:
            return
        self.region = self.fit_region(points, edge_padding)
        self.animations.append(
            Animation(region=self.region, duration_ms=0, edge_padding=edge_padding)
        )
        logger.debug("Fitted %d points into %s", len(points), self.region)

    def fit_region(self, points: List[Coordinate], edge_padding: EdgePadding) -> Region:
        """Smallest region showing every point inside the padded screen area"""
        usable_width = self.width - edge_padding.left - edge_padding.right
        usable_height = self.height - edge_padding.top - edge_padding.bottom
        if usable_width <= 0 or usable_height <= 0:
            raise ValueError("Edge padding leaves no room on screen")

        min_lat, min_lng, max_lat, max_lng = bounding_box(points)
        lat_span = max(max_lat - min_lat, MIN_SPAN_DEG)
        lng_span = max(max_lng - min_lng, MIN_SPAN_DEG)

        # degrees per screen unit, same scale on both axes
        scale = max(lat_span / usable_height, lng_span / usable_width)
        latitude_delta = scale * self.height
        longitude_delta = scale * self.width

        # shift the center so the points sit in the middle of the padded area
        latitude = (min_lat + max_lat) / 2 + (edge_padding.top - edge_padding.bottom) / 2 * scale
        longitude = (min_lng + max_lng) / 2 - (edge_padding.left - edge_padding.right) / 2 * scale

        return Region(
            latitude=latitude,
            longitude=longitude,
            latitude_delta=latitude_delta,
            longitude_delta=longitude_delta,
        )

    def _zoom_for(self, region: Region) -> float:
        return math.log2(360 * (self.width / TILE_SIZE) / region.longitude_delta)

    def _longitude_delta_for(self, zoom: float) -> float:
        return 360 * (self.width / TILE_SIZE) / (2 ** zoom)
