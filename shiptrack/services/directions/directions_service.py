from abc import ABC, abstractmethod

from shiptrack.models.geo import Coordinate, Route


class DirectionsService(ABC):
    """Directions service abstract interface"""

    @abstractmethod
    async def get_route(self, origin: Coordinate, destination: Coordinate) -> Route:
        """Compute a route between two points

        Raises RouteRequestError (or a subclass) when no route can be produced.
        """
        pass
