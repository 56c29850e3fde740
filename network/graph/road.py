from dataclasses import dataclass, field
from typing import Any

from core.types import Direction, IntersectionID, RoadID

Point = tuple[float, float]


@dataclass
class Road:
    """A road segment between two intersections.

    Read-only from the planner's point of view; tags follow OSM conventions
    (``highway``, ``maxspeed``, ``name``...).
    """

    id: RoadID
    src_i: IntersectionID
    dst_i: IntersectionID
    linestring: list[Point]
    length_m: float
    tags: dict[str, str] = field(default_factory=dict)
    traffic_volume: int = 0  # trips per day
    way: int | None = None  # originating OSM way

    def name(self) -> str | None:
        return self.tags.get("name") or None

    def endpoints(self, direction: Direction) -> tuple[IntersectionID, IntersectionID]:
        """Return (start, end) intersections when traversed in ``direction``."""
        if direction is Direction.FORWARDS:
            return self.src_i, self.dst_i
        return self.dst_i, self.src_i

    def oriented_linestring(self, direction: Direction) -> list[Point]:
        if direction is Direction.FORWARDS:
            return list(self.linestring)
        return list(reversed(self.linestring))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "src_i": self.src_i,
            "dst_i": self.dst_i,
            "linestring": [list(pt) for pt in self.linestring],
            "length_m": self.length_m,
            "tags": dict(self.tags),
            "traffic_volume": self.traffic_volume,
            "way": self.way,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Road":
        return cls(
            id=RoadID(int(data["id"])),
            src_i=IntersectionID(int(data["src_i"])),
            dst_i=IntersectionID(int(data["dst_i"])),
            linestring=[(float(x), float(y)) for x, y in data["linestring"]],
            length_m=float(data["length_m"]),
            tags={str(k): str(v) for k, v in data.get("tags", {}).items()},
            traffic_volume=int(data.get("traffic_volume", 0)),
            way=data.get("way"),
        )
