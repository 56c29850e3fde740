"""Merge adjacent same-key road pieces into continuous chains."""

from collections import defaultdict
from dataclasses import dataclass

from core.types import Direction, InfraType, IntersectionID, RoadID
from network.graph.road import Point, Road


@dataclass
class KeyedLineString:
    """A chain of road traversals sharing one key, with its merged geometry.

    Attributes:
        ids: Road traversals in head-to-tail order
        key: Grouping key; only pieces with equal keys merge
        linestring: Concatenated geometry of every traversal
        start: Intersection where the chain begins
        end: Intersection where the chain ends
    """

    ids: list[tuple[RoadID, Direction]]
    key: InfraType
    linestring: list[Point]
    start: IntersectionID
    end: IntersectionID

    @classmethod
    def from_road(
        cls, road: Road, key: InfraType, direction: Direction = Direction.FORWARDS
    ) -> "KeyedLineString":
        start, end = road.endpoints(direction)
        return cls(
            ids=[(road.id, direction)],
            key=key,
            linestring=road.oriented_linestring(direction),
            start=start,
            end=end,
        )

    def reversed(self) -> "KeyedLineString":
        return KeyedLineString(
            ids=[(road, direction.reversed()) for road, direction in reversed(self.ids)],
            key=self.key,
            linestring=list(reversed(self.linestring)),
            start=self.end,
            end=self.start,
        )

    def road_ids(self) -> list[RoadID]:
        return [road for road, _ in self.ids]


def _join(first: KeyedLineString, second: KeyedLineString) -> KeyedLineString:
    """Append ``second`` to ``first``; ``first.end`` must equal ``second.start``."""
    tail = second.linestring
    if first.linestring and tail and first.linestring[-1] == tail[0]:
        tail = tail[1:]
    return KeyedLineString(
        ids=first.ids + second.ids,
        key=first.key,
        linestring=first.linestring + tail,
        start=first.start,
        end=second.end,
    )


def _merge_at(
    a: KeyedLineString, b: KeyedLineString, joint: IntersectionID
) -> KeyedLineString:
    """Merge two pieces that meet at ``joint``, orienting them head to tail."""
    if a.end != joint:
        a = a.reversed()
    if b.start != joint:
        b = b.reversed()
    return _join(a, b)


def collapse_degree_2(pieces: list[KeyedLineString]) -> list[KeyedLineString]:
    """Merge pieces meeting at intersections of degree 2 within the input set.

    Two pieces merge (transitively) when they share an intersection, their keys
    are equal, and exactly two piece endpoints touch that intersection. Merging
    never crosses a key change or a junction of degree 3 or more. Only the input
    pieces are considered, not the rest of the network.

    Args:
        pieces: Independent pieces; consumed

    Returns:
        Merged chains, ordered by the first input index each chain absorbed
    """
    chains: dict[int, KeyedLineString] = dict(enumerate(pieces))

    # intersection -> indices of pieces with an endpoint there (a loop appears twice)
    adjacency: dict[IntersectionID, list[int]] = defaultdict(list)
    for idx, piece in chains.items():
        adjacency[piece.start].append(idx)
        adjacency[piece.end].append(idx)

    # Merging at one intersection never changes the degree of another, so one pass suffices
    for joint in sorted(adjacency):
        incident = adjacency[joint]
        if len(incident) != 2:
            continue
        idx1, idx2 = incident
        if idx1 == idx2:
            continue
        a, b = chains[idx1], chains[idx2]
        if a.key != b.key:
            continue

        keep, drop = min(idx1, idx2), max(idx1, idx2)
        merged = _merge_at(chains[keep], chains[drop], joint)
        chains[keep] = merged
        del chains[drop]

        # The dropped piece's far end now belongs to the kept chain
        for other in (merged.start, merged.end):
            adjacency[other] = [keep if i == drop else i for i in adjacency[other]]
        adjacency[joint] = []

    return [chains[idx] for idx in sorted(chains)]
