"""Network quality scorecard from OD flows and current classifications."""

import logging

from core.types import InfraType, RoadID
from network.graph.road_network import RoadNetwork
from network.routing.navigator import Navigator
from planner.classifier import RoadClassifier
from planner.config import PlannerConfig
from planner.dto.stats_dto import OFF_NETWORK, NetworkStatsDTO
from planner.od import ODAnalyzer

logger = logging.getLogger(__name__)


def percent(count: int, total: int) -> float:
    """Fraction of ``total``; 0.0 when there is nothing to divide."""
    if total == 0:
        return 0.0
    return count / total


class StatsAggregator:
    """Combines OD flows with road classifications into the network scorecard."""

    def __init__(
        self,
        network: RoadNetwork,
        classifier: RoadClassifier,
        od_analyzer: ODAnalyzer,
        router: Navigator | None = None,
        config: PlannerConfig | None = None,
    ) -> None:
        self.network = network
        self.classifier = classifier
        self.od_analyzer = od_analyzer
        self.router = router or Navigator()
        self.config = config or PlannerConfig()
        self.latest: NetworkStatsDTO | None = None

    def recalculate_router(self) -> None:
        """Rebuild routing costs so cyclists prefer roads with a better level of service."""
        multipliers = self.config.los_cost_multipliers
        costs: dict[RoadID, float] = {}
        for road_id, los in self.classifier.levels_of_service().items():
            costs[road_id] = self.network.get_road(road_id).length_m * multipliers[los]
        self.router.set_costs(costs)

    def recalculate_stats(self) -> NetworkStatsDTO:
        """Recompute the scorecard after an edit.

        Returns:
            Share of OD flow per infrastructure type and off network, plus the
            average weighted directness
        """
        self.recalculate_router()

        od = self.od_analyzer.analyze(self.network, self.router.costs)

        count_by_infra: dict[InfraType, int] = {infra_type: 0 for infra_type in InfraType}
        count_off_network = 0
        total_count = 0
        for road_id, count in od.counts.items():
            total_count += count
            if self.classifier.is_claimed(road_id):
                count_by_infra[self.classifier.get_infra_type(road_id)] += count
            else:
                count_off_network += count

        od_percents = {OFF_NETWORK: percent(count_off_network, total_count)}
        for infra_type, count in count_by_infra.items():
            od_percents[infra_type.value] = percent(count, total_count)

        self.latest = NetworkStatsDTO(
            od_percents=od_percents,
            average_weighted_directness=od.average_weighted_directness,
        )
        logger.info(
            f"Recalculated stats over {total_count} trips, "
            f"{od_percents[OFF_NETWORK]:.1%} off network"
        )
        return self.latest
