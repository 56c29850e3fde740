"""Cycling network planning engine."""

from .config import PlannerConfig
from .errors import (
    InvalidInputError,
    NoRouteError,
    PlannerError,
    RoadConflictError,
    UnknownRouteError,
)
from .model import NetworkPlanner, configure_logging
from .route import Route
from .route_store import RouteStore

__all__ = [
    "PlannerConfig",
    "InvalidInputError",
    "NoRouteError",
    "PlannerError",
    "RoadConflictError",
    "UnknownRouteError",
    "NetworkPlanner",
    "configure_logging",
    "Route",
    "RouteStore",
]
