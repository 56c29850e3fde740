"""Level-of-service classification and infrastructure recommendations."""

import logging
from typing import Any

from core.types import InfraType, LevelOfService, RoadID
from network.graph.road import Road
from network.graph.road_network import RoadNetwork
from planner.geojson import feature_collection, line_feature
from planner.route_store import RouteStore

logger = logging.getLogger(__name__)

DEFAULT_SPEED_MPH = 30


def level_of_service(infra_type: InfraType, speed_mph: int, traffic: int) -> LevelOfService:
    """Grade a road from its infrastructure, posted speed and daily traffic.

    Args:
        infra_type: Current infrastructure on the road
        speed_mph: Posted speed limit
        traffic: Motor traffic volume in trips per day

    Returns:
        The level of service. Mixed traffic (and unknown infrastructure) is
        graded by the first matching speed/traffic threshold.
    """
    if infra_type in (InfraType.SEGREGATED_WIDE, InfraType.OFF_ROAD):
        return LevelOfService.HIGH
    elif infra_type in (InfraType.SEGREGATED_NARROW, InfraType.SHARED_FOOTWAY):
        return LevelOfService.MEDIUM
    elif infra_type == InfraType.CYCLE_LANE:
        return LevelOfService.LOW
    elif infra_type in (InfraType.MIXED_TRAFFIC, InfraType.UNKNOWN):
        return _mixed_traffic_level_of_service(speed_mph, traffic)
    raise ValueError(f"Unhandled infrastructure type: {infra_type}")


def _mixed_traffic_level_of_service(speed: int, traffic: int) -> LevelOfService:
    if speed <= 20 and traffic < 2000:
        return LevelOfService.HIGH
    elif speed == 30 and traffic < 1000:
        return LevelOfService.HIGH
    elif speed <= 20 and traffic < 4000:
        return LevelOfService.MEDIUM
    elif speed == 30 and traffic < 2000:
        return LevelOfService.MEDIUM
    elif speed == 40 and traffic < 1000:
        return LevelOfService.MEDIUM
    elif speed <= 30:
        return LevelOfService.LOW
    elif speed == 40 and traffic < 2000:
        return LevelOfService.LOW
    elif speed == 60 and traffic < 1000:
        return LevelOfService.LOW
    else:
        return LevelOfService.SHOULD_NOT_BE_USED


def get_speed_mph(road: Road, default: int = DEFAULT_SPEED_MPH) -> int:
    """Derive a road's speed limit from its tags. Never fails.

    Args:
        road: Road to inspect
        default: Speed returned for roads of unrecognized class

    Returns:
        Speed limit in mph
    """
    tags = road.tags
    highway = tags.get("highway")

    if tags.get("maxspeed") == "national":
        return 70 if highway in ("motorway", "motorway_link") else 60

    maxspeed = tags.get("maxspeed")
    if maxspeed is not None and maxspeed.endswith(" mph"):
        value = maxspeed[: -len(" mph")]
        if value.isascii() and value.isdigit():
            return int(value)

    if highway in ("residential", "service", "unclassified"):
        return 20
    elif highway in ("tertiary", "tertiary_link", "secondary", "secondary_link"):
        return 30
    elif highway in ("primary", "primary_link"):
        return 40
    elif highway in ("trunk", "trunk_link"):
        return 60

    logger.warning(f"get_speed_mph hit unknown highway {highway!r} on road {road.id}")
    return default


class RoadClassifier:
    """Derives per-road infrastructure type and level of service from the route store.

    The cache is rebuilt in full by ``refresh``, which runs after every store
    mutation, so reads never observe stale classifications.
    """

    def __init__(
        self, network: RoadNetwork, store: RouteStore, default_speed_mph: int = DEFAULT_SPEED_MPH
    ) -> None:
        self.network = network
        self.store = store
        # Speeds depend only on tags, which never change
        self.speeds: dict[RoadID, int] = {
            road.id: get_speed_mph(road, default_speed_mph) for road in network.iter_roads()
        }
        self._infra_types: dict[RoadID, InfraType] = {}
        self._los: dict[RoadID, LevelOfService] = {}
        self.refresh()

    def refresh(self) -> None:
        """Recompute infrastructure types and levels of service for every road."""
        self._infra_types = self.store.infra_types()
        self._los = {
            road.id: level_of_service(
                self.get_infra_type(road.id), self.speeds[road.id], road.traffic_volume
            )
            for road in self.network.iter_roads()
        }
        logger.debug(f"Reclassified {len(self._los)} roads, {len(self._infra_types)} claimed")

    def get_infra_type(self, road_id: RoadID) -> InfraType:
        """Infrastructure type of the route claiming the road, or Unknown."""
        return self._infra_types.get(road_id, InfraType.UNKNOWN)

    def is_claimed(self, road_id: RoadID) -> bool:
        return road_id in self._infra_types

    def calculate_level_of_service(self, road_id: RoadID) -> LevelOfService:
        return self._los[road_id]

    def levels_of_service(self) -> dict[RoadID, LevelOfService]:
        return dict(self._los)

    def best_infra_type(self, road_id: RoadID) -> InfraType | None:
        """Recommend infrastructure for a road nothing claims yet.

        A fixed one-level upgrade from the current level of service; None when
        the road is already fine.
        """
        los = self._los[road_id]
        if los == LevelOfService.HIGH:
            return None
        elif los == LevelOfService.MEDIUM:
            return InfraType.SEGREGATED_NARROW
        elif los == LevelOfService.LOW:
            return InfraType.SEGREGATED_WIDE
        elif los == LevelOfService.SHOULD_NOT_BE_USED:
            return InfraType.SEGREGATED_WIDE
        raise ValueError(f"Unhandled level of service: {los}")

    def render_level_of_service(self) -> dict[str, Any]:
        """One feature per road with its grade, infrastructure, traffic and speed."""
        features = []
        for road in self.network.iter_roads():
            features.append(
                line_feature(
                    road.linestring,
                    {
                        "id": road.id,
                        "los": self._los[road.id].value,
                        "infra_type": self.get_infra_type(road.id).value,
                        "traffic": road.traffic_volume,
                        "speed": self.speeds[road.id],
                    },
                )
            )
        return feature_collection(features)
