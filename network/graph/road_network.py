from collections.abc import Iterator, Sequence
from typing import Any

import numpy as np
from scipy.spatial import cKDTree
from shapely.geometry import LineString, Point as ShapelyPoint
from shapely.strtree import STRtree

from core.types import Direction, IntersectionID, RoadID
from network.graph.intersection import Intersection
from network.graph.road import Point, Road


class RoadNetwork:
    """Road graph the planner works over: intersections joined by undirected roads."""

    def __init__(self) -> None:
        self.intersections: dict[IntersectionID, Intersection] = {}
        self.roads: dict[RoadID, Road] = {}
        # Lazily built for snapping; dropped whenever the network changes
        self._tree: cKDTree | None = None
        self._tree_ids: list[IntersectionID] = []
        self._road_tree: STRtree | None = None
        self._road_tree_ids: list[RoadID] = []

    def add_intersection(self, intersection: Intersection) -> None:
        """Add an intersection to the network."""
        if intersection.id in self.intersections:
            raise ValueError(f"Intersection {intersection.id} already exists")

        self.intersections[intersection.id] = intersection
        self._tree = None

    def add_road(self, road: Road) -> None:
        """Add a road to the network."""
        if road.id in self.roads:
            raise ValueError(f"Road {road.id} already exists")

        # Validate that both intersections exist
        if road.src_i not in self.intersections:
            raise ValueError(f"Intersection {road.src_i} does not exist")
        if road.dst_i not in self.intersections:
            raise ValueError(f"Intersection {road.dst_i} does not exist")
        if len(road.linestring) < 2:
            raise ValueError(f"Road {road.id} needs at least two points")

        self.roads[road.id] = road
        self.intersections[road.src_i].add_road(road.id)
        self.intersections[road.dst_i].add_road(road.id)
        self._road_tree = None

    def get_road(self, road_id: RoadID) -> Road:
        """Get a road by ID."""
        if road_id not in self.roads:
            raise ValueError(f"Road {road_id} does not exist")
        return self.roads[road_id]

    def get_intersection(self, intersection_id: IntersectionID) -> Intersection:
        """Get an intersection by ID."""
        if intersection_id not in self.intersections:
            raise ValueError(f"Intersection {intersection_id} does not exist")
        return self.intersections[intersection_id]

    def iter_roads(self) -> Iterator[Road]:
        """Iterate roads in ID order."""
        for road_id in sorted(self.roads):
            yield self.roads[road_id]

    def roads_at(self, intersection_id: IntersectionID) -> list[Road]:
        """Get all roads touching an intersection."""
        intersection = self.get_intersection(intersection_id)
        return [self.roads[r] for r in intersection.roads]

    def get_road_count(self) -> int:
        return len(self.roads)

    def get_intersection_count(self) -> int:
        return len(self.intersections)

    def join_steps(self, steps: Sequence[tuple[RoadID, Direction]]) -> list[Point]:
        """Glue the geometry of consecutive road traversals into one polyline.

        Shared joint vertices are emitted once.
        """
        points: list[Point] = []
        for road_id, direction in steps:
            line = self.get_road(road_id).oriented_linestring(direction)
            if points and points[-1] == line[0]:
                line = line[1:]
            points.extend(line)
        return points

    def snap_to_intersection(self, x: float, y: float) -> IntersectionID:
        """Find the intersection closest to a point.

        Raises:
            ValueError: If the network has no intersections
        """
        if not self.intersections:
            raise ValueError("Cannot snap to an empty network")

        if self._tree is None:
            self._tree_ids = sorted(self.intersections)
            coords = np.array(
                [self.intersections[i].point for i in self._tree_ids], dtype=float
            )
            self._tree = cKDTree(coords)

        _, idx = self._tree.query([x, y])
        return self._tree_ids[int(idx)]

    def snap_to_road(self, x: float, y: float) -> RoadID:
        """Find the road closest to a point; ties go to the lowest road ID.

        Raises:
            ValueError: If the network has no roads
        """
        if not self.roads:
            raise ValueError("Cannot snap to a network without roads")

        if self._road_tree is None:
            self._road_tree_ids = sorted(self.roads)
            self._road_tree = STRtree(
                [LineString(self.roads[r].linestring) for r in self._road_tree_ids]
            )

        nearest = self._road_tree.query_nearest(ShapelyPoint(x, y), all_matches=True)
        return min(self._road_tree_ids[int(idx)] for idx in nearest)

    def __str__(self) -> str:
        return f"RoadNetwork(intersections={len(self.intersections)}, roads={len(self.roads)})"

    def to_dict(self) -> dict[str, Any]:
        """Serialize the network to a plain dictionary."""
        return {
            "intersections": [
                {"id": i.id, "x": i.x, "y": i.y}
                for i in sorted(self.intersections.values(), key=lambda i: i.id)
            ],
            "roads": [road.to_dict() for road in self.iter_roads()],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RoadNetwork":
        """Build a network from ``to_dict`` output.

        Raises:
            ValueError: If the data references missing intersections or is incomplete
        """
        network = cls()
        try:
            for raw in data["intersections"]:
                network.add_intersection(
                    Intersection(
                        id=IntersectionID(int(raw["id"])), x=float(raw["x"]), y=float(raw["y"])
                    )
                )
            for raw in data["roads"]:
                network.add_road(Road.from_dict(raw))
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed road network data: {e}") from e
        return network
