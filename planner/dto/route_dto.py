"""DTOs for validating route features supplied by the editor or a savefile."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.types import InfraType, Tier


class LineStringDTO(BaseModel):
    """GeoJSON LineString geometry.

    Attributes:
        type: Always "LineString"
        coordinates: At least two positions; extra ordinates (elevation) are dropped
    """

    type: Literal["LineString"]
    coordinates: list[list[float]] = Field(min_length=2)

    @field_validator("coordinates")
    @classmethod
    def validate_positions(cls, v: list[list[float]]) -> list[list[float]]:
        """Ensure each position has at least x and y."""
        for pos in v:
            if len(pos) < 2:
                raise ValueError("each position needs at least 2 values")
        return v


class RoutePropertiesDTO(BaseModel):
    """Properties the planner reads from a route feature.

    Any other properties (waypoints, full_path, styling) are kept untouched.
    """

    model_config = ConfigDict(extra="allow")

    roads: list[int] = Field(min_length=1, description="Claimed roads in path order")
    name: str = Field(default="", description="Display name")
    notes: str = Field(default="", description="Free-text notes")
    infra_type: InfraType = Field(description="Infrastructure type for every claimed road")
    tier: Tier = Field(description="Network tier")

    @field_validator("roads")
    @classmethod
    def validate_roads(cls, v: list[int]) -> list[int]:
        if any(r < 0 for r in v):
            raise ValueError("road ids must be non-negative")
        return v


class RouteFeatureDTO(BaseModel):
    """A single route as a GeoJSON Feature."""

    model_config = ConfigDict(extra="allow")

    type: Literal["Feature"]
    id: int | None = None
    geometry: LineStringDTO
    properties: RoutePropertiesDTO


class RouteCollectionDTO(BaseModel):
    """A FeatureCollection of routes, as produced by the route listing."""

    model_config = ConfigDict(extra="allow")

    type: Literal["FeatureCollection"]
    features: list[RouteFeatureDTO] = Field(default_factory=list)
