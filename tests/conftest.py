"""Shared fixtures for building small road networks."""

from collections.abc import Callable
from typing import Any

import pytest

from core.types import IntersectionID, RoadID
from network.graph.intersection import Intersection
from network.graph.road import Road
from network.graph.road_network import RoadNetwork

NetworkFactory = Callable[..., RoadNetwork]


def _build_network(
    points: dict[int, tuple[float, float]],
    roads: list[tuple[int, int, dict[str, Any]]],
) -> RoadNetwork:
    """Build a network from intersection points and (src, dst, attrs) road specs.

    Road IDs follow list order. ``attrs`` may hold ``tags``, ``traffic`` and ``way``.
    Geometry is the straight line between the endpoints; length is its length in metres.
    """
    network = RoadNetwork()
    for i, (x, y) in points.items():
        network.add_intersection(Intersection(id=IntersectionID(i), x=x, y=y))

    for road_id, (src, dst, attrs) in enumerate(roads):
        p1, p2 = points[src], points[dst]
        length = ((p1[0] - p2[0]) ** 2 + (p1[1] - p2[1]) ** 2) ** 0.5
        network.add_road(
            Road(
                id=RoadID(road_id),
                src_i=IntersectionID(src),
                dst_i=IntersectionID(dst),
                linestring=[p1, p2],
                length_m=attrs.get("length", length),
                tags=attrs.get("tags", {"highway": "residential"}),
                traffic_volume=attrs.get("traffic", 0),
                way=attrs.get("way"),
            )
        )
    return network


@pytest.fixture
def network_factory() -> NetworkFactory:
    """Factory taking (points, roads), see ``_build_network``."""
    return _build_network


@pytest.fixture
def line_network() -> RoadNetwork:
    """Intersections 0..5 along the x axis, 100m apart; road i joins i and i+1.

    All roads are quiet residential streets (High level of service when unclaimed).
    """
    points = {i: (i * 100.0, 0.0) for i in range(6)}
    roads = [
        (i, i + 1, {"tags": {"highway": "residential", "name": f"Street {i}"}}) for i in range(5)
    ]
    return _build_network(points, roads)
