"""Split a drawn path into homogeneous sections for planning feedback."""

from dataclasses import dataclass
from itertools import groupby
from typing import Any

from core.types import Direction, InfraType, RoadID
from network.graph.road_network import RoadNetwork
from planner.classifier import RoadClassifier
from planner.geojson import feature_collection, line_feature


@dataclass(frozen=True)
class SectionCase:
    """What a path step would mean if committed.

    ``overlap`` steps are already claimed by a route; otherwise ``infra_type``
    holds the recommendation (None when the road is already fine).
    """

    overlap: bool
    infra_type: InfraType | None = None


class Autosplitter:
    """Advisory only: never touches the route store."""

    def __init__(self, network: RoadNetwork, classifier: RoadClassifier) -> None:
        self.network = network
        self.classifier = classifier

    def case_for(self, road_id: RoadID) -> SectionCase:
        if self.classifier.is_claimed(road_id):
            return SectionCase(overlap=True)
        return SectionCase(overlap=False, infra_type=self.classifier.best_infra_type(road_id))

    def autosplit_route(self, path: list[tuple[RoadID, Direction]]) -> dict[str, Any]:
        """Split a path wherever the recommendation changes or it crosses an existing route.

        Args:
            path: Uncommitted road traversals in drawing order

        Returns:
            FeatureCollection with one feature per maximal run of equal case
        """
        sections = []
        for case, run in groupby(path, key=lambda step: self.case_for(step[0])):
            steps = list(run)
            if case.overlap:
                properties: dict[str, Any] = {"kind": "overlap"}
            else:
                properties = {
                    "kind": "new",
                    "infra_type": case.infra_type.value if case.infra_type else None,
                }
            sections.append(line_feature(self.network.join_steps(steps), properties))
        return feature_collection(sections)
