"""Schools shown alongside the network, each snapped to its nearest road."""

import logging
from dataclasses import dataclass
from typing import Any

import orjson
from pydantic import ValidationError
from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import shape

from core.types import RoadID
from network.graph.road import Point
from network.graph.road_network import RoadNetwork
from planner.dto.school_dto import SchoolCollectionDTO
from planner.errors import InvalidInputError
from planner.geojson import feature_collection

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class School:
    point: Point
    kind: str
    name: str
    pupils: int
    road: RoadID

    def to_feature(self, reachable: bool) -> dict[str, Any]:
        """Point feature for the schools layer."""
        return {
            "type": "Feature",
            "geometry": {"type": "Point", "coordinates": list(self.point)},
            "properties": {
                "kind": self.kind,
                "name": self.name,
                "pupils": self.pupils,
                "reachable": reachable,
            },
        }


def load_schools(
    data: str | bytes | dict[str, Any],
    boundary: list[list[list[list[float]]]] | None,
    network: RoadNetwork,
) -> list[School]:
    """Parse a FeatureCollection of schools and match them to the network.

    Schools outside the boundary are dropped; with no boundary every school is
    kept. Fractional pupil counts are truncated.

    Args:
        data: FeatureCollection of Point features with ``type``, ``name`` and ``pupils``
        boundary: Study area as MultiPolygon coordinates
        network: Network whose roads the schools snap to

    Raises:
        InvalidInputError: If the data is not a valid school collection
    """
    try:
        raw = orjson.loads(data) if isinstance(data, (str, bytes)) else data
        dto = SchoolCollectionDTO.model_validate(raw)
    except orjson.JSONDecodeError as e:
        raise InvalidInputError(f"Invalid schools: {e}") from e
    except ValidationError as e:
        raise InvalidInputError.from_validation_error("schools", e) from e

    area = None
    if boundary is not None:
        area = shape({"type": "MultiPolygon", "coordinates": boundary})

    schools = []
    for feature in dto.features:
        x, y = feature.geometry.coordinates[:2]
        if area is not None and not area.contains(ShapelyPoint(x, y)):
            continue
        schools.append(
            School(
                point=(x, y),
                kind=feature.properties.type,
                name=feature.properties.name,
                pupils=int(feature.properties.pupils),
                road=network.snap_to_road(x, y),
            )
        )

    logger.info(f"Matched {len(schools)} schools")
    return schools


def schools_geojson(schools: list[School], reachable_roads: set[RoadID]) -> dict[str, Any]:
    """One Point feature per school; reachable when its road is in ``reachable_roads``."""
    return feature_collection([s.to_feature(s.road in reachable_roads) for s in schools])
