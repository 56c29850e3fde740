"""DTOs for the schools layer."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class PointDTO(BaseModel):
    type: Literal["Point"]
    coordinates: list[float] = Field(min_length=2)


class SchoolPropertiesDTO(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: str = Field(description="Kind of school, e.g. primary or secondary")
    name: str
    pupils: float = Field(ge=0)


class SchoolFeatureDTO(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: Literal["Feature"]
    geometry: PointDTO
    properties: SchoolPropertiesDTO


class SchoolCollectionDTO(BaseModel):
    """Schools supplied as a FeatureCollection of Point features."""

    model_config = ConfigDict(extra="allow")

    type: Literal["FeatureCollection"]
    features: list[SchoolFeatureDTO]
