"""Planning session: one road network, its routes, and everything derived from them."""

import logging
import sys
from collections.abc import Mapping
from typing import Any

import orjson
from pydantic import ValidationError

from core.types import Direction, RoadID, RouteID, Tier
from network.graph.road import Point
from network.graph.road_network import RoadNetwork
from network.routing.navigator import Navigator
from planner import places, savefile
from planner.autosplit import Autosplitter
from planner.classifier import RoadClassifier
from planner.config import PlannerConfig
from planner.dto.boundary_dto import BoundaryFeatureDTO
from planner.dto.stats_dto import NetworkStatsDTO
from planner.errors import InvalidInputError
from planner.evaluate import Breakdown, evaluate_route
from planner.geojson import feature_collection
from planner.importer import ImportPipeline, TagClassifier
from planner.od import ODAnalyzer, ShortestPathODAnalyzer
from planner.route import Route
from planner.route_store import RouteStore
from planner.stats import StatsAggregator

logger = logging.getLogger(__name__)


def configure_logging(log_level: str = "INFO") -> None:
    """Send planner logs to stdout."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )


def parse_boundary(boundary: str | bytes | dict[str, Any]) -> list[list[list[list[float]]]]:
    """Validate a boundary Feature and normalize it to MultiPolygon coordinates.

    Raises:
        InvalidInputError: If the boundary is not a Polygon or MultiPolygon Feature
    """
    try:
        raw = orjson.loads(boundary) if isinstance(boundary, (str, bytes)) else boundary
        dto = BoundaryFeatureDTO.model_validate(raw)
    except orjson.JSONDecodeError as e:
        raise InvalidInputError(f"Invalid boundary: {e}") from e
    except ValidationError as e:
        raise InvalidInputError.from_validation_error("boundary", e) from e
    return dto.to_multipolygon()


class NetworkPlanner:
    """Single-user planning session over one road network.

    Every route mutation synchronously reclassifies the network and recomputes
    the statistics before returning.
    """

    def __init__(
        self,
        network: RoadNetwork,
        boundary: str | bytes | dict[str, Any] | None = None,
        tag_classifier: TagClassifier | None = None,
        core_network: Mapping[RoadID, Tier] | None = None,
        od_analyzer: ODAnalyzer | None = None,
        config: PlannerConfig | None = None,
        schools: str | bytes | dict[str, Any] | None = None,
    ) -> None:
        self.config = config or PlannerConfig()
        self.boundary = parse_boundary(boundary) if boundary is not None else None
        self.network = network
        self.schools: list[places.School] = []
        if schools is not None:
            self.schools = places.load_schools(schools, self.boundary, network)
        self.store = RouteStore()
        self.classifier = RoadClassifier(network, self.store, self.config.default_speed_mph)
        self.router = Navigator()
        self.importer = ImportPipeline(
            network, self.store, tag_classifier, core_network, self.config
        )
        self.autosplitter = Autosplitter(network, self.classifier)
        self.stats = StatsAggregator(
            network,
            self.classifier,
            od_analyzer or ShortestPathODAnalyzer(),
            router=self.router,
            config=self.config,
        )

        # Order matters: stats read the classifier's cache
        self.store.add_listener(self.classifier.refresh)
        self.store.add_listener(self._recalculate_stats_after_edits)
        self.stats.recalculate_stats()

    def _recalculate_stats_after_edits(self) -> None:
        self.stats.recalculate_stats()

    # Route editing

    def set_route(self, edit_id: RouteID | None, feature: str | bytes | dict[str, Any]) -> RouteID:
        """Create or replace a route from an editor feature.

        Raises:
            InvalidInputError: If the feature is malformed or references unknown roads
            UnknownRouteError: If ``edit_id`` is not stored
            RoadConflictError: If the route overlaps another route
        """
        route = self._parse_route(feature)
        route_id = self.store.set_route(edit_id, route)
        logger.info(f"Saved route {route_id} ({route.infra_type.value}, {len(route.roads)} roads)")
        return route_id

    def delete_route(self, route_id: RouteID) -> None:
        self.store.delete_route(route_id)
        logger.info(f"Deleted route {route_id}")

    def clear_all_routes(self) -> None:
        self.store.clear_all_routes()

    def get_route(self, route_id: RouteID) -> Route:
        return self.store.get_route(route_id)

    def to_routes_geojson(self) -> dict[str, Any]:
        """One feature per route: the stored feature with id and attributes injected."""
        return feature_collection(
            [route.to_feature(route_id) for route_id, route in self.store.routes()]
        )

    # Imports

    def import_existing_routes(self) -> int:
        return self.importer.import_existing_routes()

    def import_core_network(self) -> int:
        return self.importer.import_core_network()

    # Analysis

    def autosplit_route(self, path: list[tuple[RoadID, Direction]]) -> dict[str, Any]:
        for road_id, _ in path:
            self._require_road(road_id)
        return self.autosplitter.autosplit_route(path)

    def recalculate_stats(self) -> NetworkStatsDTO:
        return self.stats.recalculate_stats()

    def evaluate_route(
        self, pt1: Point, pt2: Point, breakdown: Breakdown = Breakdown.NONE
    ) -> dict[str, Any]:
        return evaluate_route(
            self.network, self.classifier, pt1, pt2, breakdown, router=self.router
        )

    def render_level_of_service(self) -> dict[str, Any]:
        return self.classifier.render_level_of_service()

    def boundary_geojson(self) -> dict[str, Any] | None:
        if self.boundary is None:
            return None
        return {
            "type": "Feature",
            "geometry": {"type": "MultiPolygon", "coordinates": self.boundary},
            "properties": {},
        }

    def schools_geojson(self) -> dict[str, Any]:
        """Schools in the study area; reachable when a route claims their road."""
        return places.schools_geojson(self.schools, self.store.used_roads())

    # Savefiles

    def to_savefile(self) -> bytes:
        return savefile.dump_routes(self.store)

    def load_savefile(self, data: bytes | str) -> int:
        return savefile.load_routes(self.store, data, self.network)

    def _parse_route(self, feature: str | bytes | dict[str, Any]) -> Route:
        if isinstance(feature, (str, bytes)):
            try:
                feature = orjson.loads(feature)
            except orjson.JSONDecodeError as e:
                raise InvalidInputError(f"Invalid route feature: {e}") from e
        if not isinstance(feature, dict):
            raise InvalidInputError("Invalid route feature: expected a JSON object")

        route = Route.from_feature(feature)
        for road_id in route.roads:
            self._require_road(road_id)
        return route

    def _require_road(self, road_id: RoadID) -> None:
        if road_id not in self.network.roads:
            raise InvalidInputError(f"Unknown road {road_id}")
