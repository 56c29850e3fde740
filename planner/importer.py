"""Bulk import of existing infrastructure and the precomputed core network."""

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from core.types import InfraType, IntersectionID, RoadID, Tier
from network.graph.road_network import RoadNetwork
from planner.chain_collapser import KeyedLineString, collapse_degree_2
from planner.config import PlannerConfig
from planner.geojson import line_feature, trim_coordinate
from planner.route import Route
from planner.route_store import RouteStore

logger = logging.getLogger(__name__)


class TagClassifier(Protocol):
    """Guesses the infrastructure type of a road from its raw tags."""

    def classify(self, tags: Mapping[str, str]) -> InfraType | None:
        """Return the guessed infrastructure type, or None if the road has none."""
        ...


class ImportPipeline:
    """Turns unclaimed roads into routes, merged into continuous chains."""

    def __init__(
        self,
        network: RoadNetwork,
        store: RouteStore,
        tag_classifier: TagClassifier | None = None,
        core_network: Mapping[RoadID, Tier] | None = None,
        config: PlannerConfig | None = None,
    ) -> None:
        self.network = network
        self.store = store
        self.tag_classifier = tag_classifier
        self.core_network: dict[RoadID, Tier] = dict(core_network or {})
        self.config = config or PlannerConfig()

    def import_existing_routes(self) -> int:
        """Import already-built protected infrastructure on unclaimed roads.

        Returns:
            Number of routes created

        Raises:
            ValueError: If no tag classifier was configured
        """
        if self.tag_classifier is None:
            raise ValueError("Importing existing routes needs a tag classifier")

        used_roads = self.store.used_roads()
        imports: list[tuple[RoadID, InfraType]] = []
        for road in self.network.iter_roads():
            if road.id in used_roads:
                continue
            infra_type = self.tag_classifier.classify(road.tags)
            if infra_type is None or infra_type not in self.config.existing_infra_types:
                continue
            imports.append((road.id, infra_type))

        return self.import_roads(imports, self.config.existing_infra_tier)

    def import_core_network(self) -> int:
        """Import every unclaimed road of the core network overlay, one batch per tier.

        Returns:
            Number of routes created across all tiers
        """
        used_roads = self.store.used_roads()
        imports: dict[Tier, list[tuple[RoadID, InfraType]]] = {tier: [] for tier in Tier}
        for road_id in sorted(self.core_network):
            if road_id in used_roads:
                continue
            imports[self.core_network[road_id]].append(
                (road_id, self.config.core_network_infra_type)
            )

        edits = 0
        for tier, roads in imports.items():
            edits += self.import_roads(roads, tier)
        return edits

    def import_roads(self, imports: list[tuple[RoadID, InfraType]], tier: Tier) -> int:
        """Create routes for a batch of unclaimed roads.

        Roads are grouped into chains first, so the result has one route per
        chain rather than one per road.

        Args:
            imports: Roads to import with their infrastructure types
            tier: Tier given to every created route

        Returns:
            Number of routes created
        """
        if not imports:
            return 0

        pieces = [
            KeyedLineString.from_road(self.network.get_road(road_id), infra_type)
            for road_id, infra_type in imports
        ]
        chains = collapse_degree_2(pieces)

        routes = []
        for chain in chains:
            routes.append(
                Route(
                    feature=self._make_route_feature(chain),
                    name=self._first_name(chain),
                    notes=self.config.import_notes,
                    roads=tuple(chain.road_ids()),
                    infra_type=chain.key,
                    tier=tier,
                )
            )
        self.store.insert_routes(routes)

        logger.info(
            f"Imported {len(imports)} roads as {len(chains)} routes in tier {tier.value}"
        )
        return len(chains)

    def _first_name(self, chain: KeyedLineString) -> str:
        for road_id, _ in chain.ids:
            name = self.network.get_road(road_id).name()
            if name:
                return name
        return ""

    def _make_route_feature(self, chain: KeyedLineString) -> dict[str, Any]:
        """Mimic the feature an interactive route editor produces, so the route stays editable.

        Every intersection along the chain becomes a snapped waypoint.
        """
        intersections: list[IntersectionID] = []
        for road_id, direction in chain.ids:
            for i in self.network.get_road(road_id).endpoints(direction):
                if not intersections or intersections[-1] != i:
                    intersections.append(i)

        waypoints = []
        for i in intersections:
            x, y = self.network.get_intersection(i).point
            waypoints.append(
                {"lon": trim_coordinate(x), "lat": trim_coordinate(y), "snapped": True}
            )

        return line_feature(
            chain.linestring,
            {
                "waypoints": waypoints,
                "full_path": [{"snapped": i} for i in intersections],
                "roads": chain.road_ids(),
            },
        )
