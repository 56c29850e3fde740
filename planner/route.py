"""Route entity: a named chain of roads sharing one infrastructure type."""

import copy
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from core.types import InfraType, RoadID, RouteID, Tier
from planner.dto.route_dto import RouteFeatureDTO
from planner.errors import InvalidInputError


@dataclass(frozen=True)
class Route:
    """A user-authored route.

    ``feature`` is the GeoJSON Feature the editor produced, kept verbatim so the
    route can be opened for editing again. Routes are immutable and replaced
    wholesale; ``roads`` is stored as a tuple whatever sequence it is built from.
    """

    feature: dict[str, Any]
    name: str
    notes: str
    roads: tuple[RoadID, ...]
    infra_type: InfraType
    tier: Tier

    def __post_init__(self) -> None:
        object.__setattr__(self, "roads", tuple(self.roads))

    def to_feature(self, route_id: RouteID) -> dict[str, Any]:
        """Re-emit the stored feature with the route's id and attributes injected."""
        f = copy.deepcopy(self.feature)
        f["id"] = route_id
        properties = f.get("properties") or {}
        properties["name"] = self.name
        properties["notes"] = self.notes
        properties["infra_type"] = self.infra_type.value
        properties["tier"] = self.tier.value
        f["properties"] = properties
        return f

    @classmethod
    def from_feature(cls, feature: dict[str, Any]) -> "Route":
        """Validate an editor-supplied feature and build a route from it.

        Raises:
            InvalidInputError: If the feature is malformed
        """
        try:
            dto = RouteFeatureDTO.model_validate(feature)
        except ValidationError as e:
            raise InvalidInputError.from_validation_error("route feature", e) from e

        props = dto.properties
        return cls(
            feature=copy.deepcopy(feature),
            name=props.name,
            notes=props.notes,
            roads=tuple(RoadID(r) for r in props.roads),
            infra_type=props.infra_type,
            tier=props.tier,
        )
