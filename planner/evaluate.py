"""Evaluate a single A to B cycling route against the current network."""

import math
from enum import Enum
from typing import Any

from network.graph.road import Point
from network.graph.road_network import RoadNetwork
from network.routing.navigator import Navigator
from planner.classifier import RoadClassifier
from planner.dto.evaluation_dto import StepDTO
from planner.errors import NoRouteError
from planner.geojson import feature_collection, line_feature


class Breakdown(str, Enum):
    """How the evaluated route is split into features."""

    NONE = "none"
    LEVEL_OF_SERVICE = "los"
    INFRA_TYPE = "infra_type"


def evaluate_route(
    network: RoadNetwork,
    classifier: RoadClassifier,
    pt1: Point,
    pt2: Point,
    breakdown: Breakdown = Breakdown.NONE,
    router: Navigator | None = None,
) -> dict[str, Any]:
    """Route between two points and describe every road on the way.

    Args:
        network: Road network to route over
        classifier: Source of infrastructure types and levels of service
        pt1: Start point, snapped to the nearest intersection
        pt2: End point, snapped to the nearest intersection
        breakdown: Whether to emit one feature, or one per road with a property
        router: Navigator whose costs pick the path; plain lengths when omitted

    Returns:
        FeatureCollection with ``direct_length``, ``route_length`` and ``directions``

    Raises:
        NoRouteError: If the snapped points are not connected
    """
    start = network.snap_to_intersection(*pt1)
    end = network.snap_to_intersection(*pt2)
    path = (router or Navigator()).find_route(start, end, network)
    if path is None:
        raise NoRouteError(f"No route between {pt1} and {pt2}")

    features = []
    directions = []
    for road_id, direction in path:
        road = network.get_road(road_id)
        infra_type = classifier.get_infra_type(road_id)
        los = classifier.calculate_level_of_service(road_id)
        directions.append(
            StepDTO(
                name=road.name(),
                length=road.length_m,
                way="" if road.way is None else str(road.way),
                infra_type=infra_type,
                los=los,
            ).model_dump(mode="json")
        )

        if breakdown == Breakdown.LEVEL_OF_SERVICE:
            features.append(
                line_feature(road.oriented_linestring(direction), {"los": los.value})
            )
        elif breakdown == Breakdown.INFRA_TYPE:
            features.append(
                line_feature(road.oriented_linestring(direction), {"infra_type": infra_type.value})
            )

    if breakdown == Breakdown.NONE:
        features.append(line_feature(network.join_steps(path)))

    return feature_collection(
        features,
        direct_length=math.dist(
            network.get_intersection(start).point, network.get_intersection(end).point
        ),
        route_length=sum(network.get_road(road_id).length_m for road_id, _ in path),
        directions=directions,
    )
