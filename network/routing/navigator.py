"""Shortest-path service over the road network."""

import heapq
from collections.abc import Mapping

from core.types import Direction, IntersectionID, RoadID
from network.graph.road import Road
from network.graph.road_network import RoadNetwork

PathStep = tuple[RoadID, Direction]


class Navigator:
    """Provides Dijkstra pathfinding over roads with a pluggable per-road cost."""

    def __init__(self, costs: Mapping[RoadID, float] | None = None) -> None:
        """Initialize navigator.

        Args:
            costs: Optional cost per road. Roads without an entry cost their length.
        """
        self.costs: dict[RoadID, float] = dict(costs or {})

    def set_costs(self, costs: Mapping[RoadID, float]) -> None:
        """Replace the per-road costs, e.g. after the network's classification changed."""
        self.costs = dict(costs)

    def find_route(
        self, start: IntersectionID, goal: IntersectionID, network: RoadNetwork
    ) -> list[PathStep] | None:
        """Find the cheapest route from start to goal.

        Args:
            start: Starting intersection ID
            goal: Destination intersection ID
            network: Network to navigate

        Returns:
            Road traversals from start to goal. Empty list if start equals goal,
            None if no path exists.
        """
        if start not in network.intersections or goal not in network.intersections:
            return None

        # Edge case: start equals goal
        if start == goal:
            return []

        # Priority queue: (cost_from_start, counter, intersection_id)
        counter = 0
        open_set: list[tuple[float, int, IntersectionID]] = [(0.0, counter, start)]
        counter += 1

        cost_from_start: dict[IntersectionID, float] = {start: 0.0}
        prev: dict[IntersectionID, tuple[IntersectionID, PathStep]] = {}
        visited: set[IntersectionID] = set()

        while open_set:
            current_cost, _, current = heapq.heappop(open_set)

            if current in visited:
                continue
            visited.add(current)

            if current == goal:
                path: list[PathStep] = []
                node = current
                while node in prev:
                    node, step = prev[node]
                    path.append(step)
                path.reverse()
                return path

            for road in network.roads_at(current):
                direction = Direction.FORWARDS if road.src_i == current else Direction.BACKWARDS
                _, neighbor = road.endpoints(direction)

                if neighbor in visited:
                    continue

                tentative_cost = current_cost + self.edge_cost(road)
                if neighbor not in cost_from_start or tentative_cost < cost_from_start[neighbor]:
                    cost_from_start[neighbor] = tentative_cost
                    prev[neighbor] = (current, (road.id, direction))
                    heapq.heappush(open_set, (tentative_cost, counter, neighbor))
                    counter += 1

        # No path found
        return None

    def route_length_m(self, path: list[PathStep], network: RoadNetwork) -> float:
        """Physical length of a path in metres, independent of routing costs."""
        return sum(network.get_road(road_id).length_m for road_id, _ in path)

    def edge_cost(self, road: Road) -> float:
        return self.costs.get(road.id, road.length_m)
