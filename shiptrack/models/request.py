from typing import Any, Dict, Optional
from pydantic import BaseModel, model_validator

from shiptrack.models.state import PointField


class PlaceSelectionRequest(BaseModel):
    """A suggestion picked from autocomplete, for the origin or destination field.

    Either a Google place id (details are fetched server side) or the place
    details object the client already holds.
    """

    field: PointField
    place_id: Optional[str] = None
    details: Optional[Dict[str, Any]] = None

    @model_validator(mode="after")
    def _needs_place(self) -> "PlaceSelectionRequest":
        if self.place_id is None and self.details is None:
            raise ValueError("either place_id or details is required")
        return self
