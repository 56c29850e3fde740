from enum import Enum
from typing import NewType

# IDs
IntersectionID = NewType("IntersectionID", int)
RoadID = NewType("RoadID", int)
RouteID = NewType("RouteID", int)


class InfraType(str, Enum):
    """Kind of cycling infrastructure present (or planned) on a road.

    Not ordered; quality is only implied through LevelOfService.
    """

    SEGREGATED_WIDE = "SegregatedWide"
    OFF_ROAD = "OffRoad"
    SEGREGATED_NARROW = "SegregatedNarrow"
    SHARED_FOOTWAY = "SharedFootway"
    CYCLE_LANE = "CycleLane"
    MIXED_TRAFFIC = "MixedTraffic"
    UNKNOWN = "Unknown"


class LevelOfService(str, Enum):
    """Service grade derived from infrastructure, speed and traffic."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    SHOULD_NOT_BE_USED = "ShouldNotBeUsed"


class Tier(str, Enum):
    """Provenance / priority label attached to routes."""

    PRIMARY = "Primary"
    SECONDARY = "Secondary"
    LOCAL_ACCESS = "LocalAccess"
    LONG_DISTANCE = "LongDistance"


class Direction(str, Enum):
    """Traversal direction of a road relative to its own geometry."""

    FORWARDS = "Forwards"
    BACKWARDS = "Backwards"

    def reversed(self) -> "Direction":
        if self is Direction.FORWARDS:
            return Direction.BACKWARDS
        return Direction.FORWARDS
