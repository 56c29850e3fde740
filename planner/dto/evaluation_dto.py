"""DTOs for route evaluation output."""

from pydantic import BaseModel, Field

from core.types import InfraType, LevelOfService


class StepDTO(BaseModel):
    """One road along an evaluated route.

    Attributes:
        name: Road name, if tagged
        length: Road length in metres
        way: Originating OSM way as a string (empty if unknown)
        infra_type: Current infrastructure type
        los: Current level of service
    """

    name: str | None = None
    length: float = Field(ge=0.0)
    way: str = ""
    infra_type: InfraType
    los: LevelOfService
