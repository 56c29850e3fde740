"""Savefile export and import of the route set."""

import logging
import os
from pathlib import Path

import orjson
from pydantic import ValidationError

from core.types import RoadID
from network.graph.road_network import RoadNetwork
from planner.dto.route_dto import RouteCollectionDTO
from planner.errors import InvalidInputError, RoadConflictError
from planner.geojson import feature_collection
from planner.route import Route
from planner.route_store import RouteStore

logger = logging.getLogger(__name__)


def dump_routes(store: RouteStore) -> bytes:
    """Serialize every route as a FeatureCollection.

    Each feature carries its ``roads`` so the savefile can be loaded again.
    """
    features = []
    for route_id, route in store.routes():
        f = route.to_feature(route_id)
        f["properties"]["roads"] = list(route.roads)
        features.append(f)
    return orjson.dumps(feature_collection(features))


def parse_routes(data: bytes | str, network: RoadNetwork) -> list[Route]:
    """Validate a savefile completely without touching any store.

    Raises:
        InvalidInputError: If the data is not valid JSON, not a route collection,
            references roads missing from the network, or claims a road twice
    """
    try:
        raw = orjson.loads(data)
    except orjson.JSONDecodeError as e:
        raise InvalidInputError(f"Invalid savefile: {e}") from e

    try:
        RouteCollectionDTO.model_validate(raw)
    except ValidationError as e:
        raise InvalidInputError.from_validation_error("savefile", e) from e

    routes = [Route.from_feature(f) for f in raw["features"]]

    claimed: set[RoadID] = set()
    for route in routes:
        for road_id in route.roads:
            if road_id not in network.roads:
                raise InvalidInputError(f"Invalid savefile: unknown road {road_id}")
            if road_id in claimed:
                raise InvalidInputError(
                    f"Invalid savefile: {RoadConflictError(road_id)}"
                )
            claimed.add(road_id)
    return routes


def load_routes(store: RouteStore, data: bytes | str, network: RoadNetwork) -> int:
    """Replace every route in the store with the savefile's routes.

    The savefile is fully validated first; on any error the store is untouched.
    Route IDs are reassigned from zero in savefile order.

    Returns:
        Number of routes loaded
    """
    routes = parse_routes(data, network)
    store.clear_all_routes()
    store.insert_routes(routes)
    logger.info(f"Loaded {len(routes)} routes from savefile")
    return len(routes)


def save_to_file(store: RouteStore, filepath: str | Path) -> None:
    """Write the savefile to disk.

    Raises:
        ValueError: If the file already exists
        OSError: If there's an error writing the file
    """
    path = Path(filepath)
    if path.exists():
        raise ValueError(f"Savefile already exists: {path}")
    os.makedirs(path.parent, exist_ok=True)
    path.write_bytes(dump_routes(store))


def load_from_file(store: RouteStore, filepath: str | Path, network: RoadNetwork) -> int:
    """Load a savefile from disk.

    Raises:
        FileNotFoundError: If the file doesn't exist
        InvalidInputError: If the file is malformed
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Savefile not found: {path}")
    return load_routes(store, path.read_bytes(), network)
