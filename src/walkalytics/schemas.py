"""
Domain models for the walkalytics client.

Pydantic models for request inputs and decoded API results.
These define the canonical schema - decoders normalize API responses to these.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from walkalytics.exceptions import MissingRequiredField

# =============================================================================
# Points-of-interest
# =============================================================================


class Poi(BaseModel):
    """A point-of-interest to compute the walking time to (EPSG:3857)."""

    model_config = {"str_strip_whitespace": True, "frozen": True, "allow_inf_nan": False}

    x: float
    y: float
    id: str = Field(default="", description="Caller-supplied name, may be empty")

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Poi:
        """Build a POI from a mapping with case-insensitive ``x``/``y``/``id`` keys.

        Raises:
            MissingRequiredField: If ``x`` or ``y`` is absent, blank or not a number.
        """
        lowered = {str(k).lower(): v for k, v in data.items()}
        for axis in ("x", "y"):
            value = lowered.get(axis)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise MissingRequiredField(f"{axis} of points-of-interest are missing.")
        try:
            return cls(x=lowered["x"], y=lowered["y"], id=lowered.get("id"))
        except ValidationError as exc:
            raise MissingRequiredField(
                f"invalid coordinates of point-of-interest: {dict(data)!r}"
            ) from exc

    def to_feature(self) -> dict[str, Any]:
        """GeoJSON point feature sent in the isochrone request body."""
        return {
            "type": "Feature",
            "geometry": {"type": "Point", "coordinates": [self.x, self.y]},
            "properties": {"id": self.id},
        }


class PoiWalktime(BaseModel):
    """Walking time from the source location to one point-of-interest (seconds)."""

    model_config = {"allow_inf_nan": False}

    id: str = ""
    walktime: float
    x: float
    y: float

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, value: Any) -> str:
        return "" if value is None else str(value)


# =============================================================================
# Public transport
# =============================================================================


class Stop(BaseModel):
    """A nearby public transport stop (Switzerland)."""

    model_config = {"allow_inf_nan": False}

    name: str
    walktime: float = Field(..., description="Walking time in minutes")
    station_category: str = Field(
        ..., description="Service frequency, 1 (high) to 5 (low); >= 90 unassigned"
    )
    latitude: float
    longitude: float
    coordinates_type: str
    transport_category: str
    id: str

    @field_validator("station_category", "transport_category", "id", mode="before")
    @classmethod
    def _code_to_str(cls, value: Any) -> Any:
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value
