from abc import ABC, abstractmethod
from typing import List, Optional

from shiptrack.models.geo import Camera, Coordinate, EdgePadding


class MapSurface(ABC):
    """Map rendering surface abstract interface"""

    @abstractmethod
    async def get_camera(self) -> Optional[Camera]:
        """Current camera, or None while the map is not mounted"""
        pass

    @abstractmethod
    async def animate_camera(self, camera: Camera, duration_ms: int) -> None:
        pass

    @abstractmethod
    async def fit_to_coordinates(
        self, points: List[Coordinate], edge_padding: EdgePadding
    ) -> None:
        """Move the camera so that all points are visible inside the padding"""
        pass
