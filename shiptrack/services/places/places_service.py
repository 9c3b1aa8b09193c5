from abc import ABC, abstractmethod
from typing import Any, Dict, List

from shiptrack.models.response import Prediction


class PlacesService(ABC):
    """Places service abstract interface"""

    @abstractmethod
    async def autocomplete(self, text: str) -> List[Prediction]:
        """Return suggestions for a partially typed address"""
        pass

    @abstractmethod
    async def get_place_details(self, place_id: str) -> Dict[str, Any]:
        """Return the details object of a picked suggestion

        The object carries ``geometry.location.{lat,lng}`` when the provider
        knows where the place is.
        """
        pass
