"""Origin-destination flow analysis."""

import logging
import math
from collections import defaultdict
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol

import numpy as np

from core.types import RoadID
from network.graph.road import Point
from network.graph.road_network import RoadNetwork
from network.routing.navigator import Navigator

logger = logging.getLogger(__name__)


@dataclass
class ODCounts:
    """Result of an OD analysis.

    Attributes:
        counts: Trips routed over each road
        average_weighted_directness: Trip-weighted routed/straight-line length ratio
    """

    counts: dict[RoadID, int] = field(default_factory=dict)
    average_weighted_directness: float = 0.0


class ODAnalyzer(Protocol):
    """Routes origin-destination demand over the network."""

    def analyze(self, network: RoadNetwork, costs: Mapping[RoadID, float]) -> ODCounts:
        """Route all demand with the given per-road costs."""
        ...


@dataclass
class ODPair:
    origin: Point
    destination: Point
    trips: int


class ShortestPathODAnalyzer:
    """Assigns every OD pair's trips to its cheapest path."""

    def __init__(self, pairs: list[ODPair] | None = None) -> None:
        self.pairs = list(pairs or [])

    def analyze(self, network: RoadNetwork, costs: Mapping[RoadID, float]) -> ODCounts:
        navigator = Navigator(costs)
        counts: dict[RoadID, int] = defaultdict(int)
        directness: list[float] = []
        weights: list[int] = []

        for pair in self.pairs:
            if pair.trips <= 0:
                continue
            start = network.snap_to_intersection(*pair.origin)
            end = network.snap_to_intersection(*pair.destination)
            path = navigator.find_route(start, end, network)
            if not path:
                logger.warning(
                    f"Skipping OD pair {pair.origin} -> {pair.destination}: no route"
                )
                continue

            for road_id, _ in path:
                counts[road_id] += pair.trips

            start_pt = network.get_intersection(start).point
            end_pt = network.get_intersection(end).point
            straight = math.dist(start_pt, end_pt)
            if straight > 0:
                directness.append(navigator.route_length_m(path, network) / straight)
                weights.append(pair.trips)

        average = float(np.average(directness, weights=weights)) if directness else 0.0
        return ODCounts(counts=dict(counts), average_weighted_directness=average)
