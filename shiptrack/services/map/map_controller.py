import logging
from typing import List, Optional

from shiptrack.config import settings
from shiptrack.models.geo import Coordinate, EdgePadding
from shiptrack.services.map.map_surface import MapSurface

logger = logging.getLogger(__name__)


class MapController:
    """Owns camera moves on a map surface.

    Both moves are best effort: while no surface is attached, or the surface
    has no camera yet, they do nothing.
    """

    def __init__(
        self,
        surface: Optional[MapSurface] = None,
        animation_ms: Optional[int] = None,
        edge_padding: Optional[float] = None,
    ):
        self.surface = surface
        self.animation_ms = (
            animation_ms if animation_ms is not None else settings.camera_animation_ms
        )
        self.default_padding = EdgePadding.uniform(
            edge_padding if edge_padding is not None else settings.edge_padding
        )

    def attach(self, surface: MapSurface) -> None:
        self.surface = surface

    async def center_on(self, point: Coordinate) -> None:
        if self.surface is None:
            return
        camera = await self.surface.get_camera()
        if camera is None:
            logger.debug("Map not ready, skipping center on %s", point)
            return
        await self.surface.animate_camera(
            camera.model_copy(update={"center": point}), self.animation_ms
        )

    async def fit_to_points(
        self, points: List[Coordinate], padding: Optional[EdgePadding] = None
    ) -> None:
        if len(points) < 2:
            raise ValueError("fit_to_points needs at least two points")
        if self.surface is None:
            return
        await self.surface.fit_to_coordinates(points, padding or self.default_padding)
