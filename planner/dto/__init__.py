"""DTOs for planner input validation and output."""

from .boundary_dto import BoundaryFeatureDTO, MultiPolygonDTO, PolygonDTO
from .evaluation_dto import StepDTO
from .route_dto import LineStringDTO, RouteCollectionDTO, RouteFeatureDTO, RoutePropertiesDTO
from .school_dto import PointDTO, SchoolCollectionDTO, SchoolFeatureDTO, SchoolPropertiesDTO
from .stats_dto import OFF_NETWORK, NetworkStatsDTO

__all__ = [
    "BoundaryFeatureDTO",
    "MultiPolygonDTO",
    "PolygonDTO",
    "StepDTO",
    "LineStringDTO",
    "RouteCollectionDTO",
    "RouteFeatureDTO",
    "RoutePropertiesDTO",
    "PointDTO",
    "SchoolCollectionDTO",
    "SchoolFeatureDTO",
    "SchoolPropertiesDTO",
    "OFF_NETWORK",
    "NetworkStatsDTO",
]
