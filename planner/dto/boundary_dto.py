"""DTO for the study-area boundary."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Ring = list[list[float]]


class PolygonDTO(BaseModel):
    type: Literal["Polygon"]
    coordinates: list[Ring] = Field(min_length=1)


class MultiPolygonDTO(BaseModel):
    type: Literal["MultiPolygon"]
    coordinates: list[list[Ring]] = Field(min_length=1)


class BoundaryFeatureDTO(BaseModel):
    """Boundary supplied as a GeoJSON Feature with a Polygon or MultiPolygon geometry."""

    model_config = ConfigDict(extra="allow")

    type: Literal["Feature"]
    geometry: PolygonDTO | MultiPolygonDTO = Field(discriminator="type")

    @field_validator("geometry")
    @classmethod
    def validate_rings(cls, v: PolygonDTO | MultiPolygonDTO) -> PolygonDTO | MultiPolygonDTO:
        """Ensure every ring is closed and has at least four positions."""
        polygons = [v.coordinates] if isinstance(v, PolygonDTO) else v.coordinates
        for polygon in polygons:
            for ring in polygon:
                if len(ring) < 4:
                    raise ValueError("rings need at least 4 positions")
                if ring[0][:2] != ring[-1][:2]:
                    raise ValueError("rings must be closed")
        return v

    def to_multipolygon(self) -> list[list[Ring]]:
        """Normalize to MultiPolygon coordinates."""
        if isinstance(self.geometry, PolygonDTO):
            return [self.geometry.coordinates]
        return self.geometry.coordinates
