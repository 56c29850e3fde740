from dataclasses import dataclass, field

from core.types import IntersectionID, RoadID


@dataclass
class Intersection:
    id: IntersectionID
    x: float
    y: float
    roads: list[RoadID] = field(default_factory=list)

    def add_road(self, road_id: RoadID) -> None:
        """Register a road touching this intersection.

        A road that starts and ends here is registered once.
        """
        if road_id not in self.roads:
            self.roads.append(road_id)

    @property
    def point(self) -> tuple[float, float]:
        return (self.x, self.y)
