"""Errors raised by planner operations."""

from pydantic import ValidationError

from core.types import RoadID, RouteID


class PlannerError(ValueError):
    """Base class for rejected planner operations."""


class UnknownRouteError(PlannerError):
    def __init__(self, route_id: RouteID) -> None:
        super().__init__(f"Unknown route {route_id}")
        self.route_id = route_id


class RoadConflictError(PlannerError):
    """A route tried to claim a road that is already claimed."""

    def __init__(self, road_id: RoadID) -> None:
        super().__init__(f"Another route already crosses the same road {road_id}")
        self.road_id = road_id


class InvalidInputError(PlannerError):
    """Malformed external input, rejected before any state change."""

    @classmethod
    def from_validation_error(cls, what: str, error: ValidationError) -> "InvalidInputError":
        """Convert Pydantic validation errors to a user-friendly message."""
        error_messages = []
        for err in error.errors():
            field = ".".join(str(x) for x in err["loc"])
            error_messages.append(f"{field}: {err['msg']}")
        return cls(f"Invalid {what}: {'; '.join(error_messages)}")


class NoRouteError(PlannerError):
    """No path exists between two points."""
