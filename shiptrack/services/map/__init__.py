from .map_controller import MapController
from .map_surface import MapSurface
from .viewport_surface import ViewportMapSurface

__all__ = ["MapController", "MapSurface", "ViewportMapSurface"]
