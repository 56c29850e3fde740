"""Road network model."""

from .intersection import Intersection
from .road import Point, Road
from .road_network import RoadNetwork

__all__ = ["Intersection", "Point", "Road", "RoadNetwork"]
