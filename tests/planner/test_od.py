"""Tests for origin-destination flow analysis."""

import logging
from collections.abc import Callable

import pytest

from core.types import RoadID
from network.graph.road_network import RoadNetwork
from planner.od import ODPair, ShortestPathODAnalyzer

NetworkFactory = Callable[..., RoadNetwork]


def test_counts_trips_per_road(line_network: RoadNetwork) -> None:
    """Test that every road on a pair's path gets its trips."""
    analyzer = ShortestPathODAnalyzer(
        [
            ODPair(origin=(0.0, 5.0), destination=(290.0, 0.0), trips=10),
            ODPair(origin=(200.0, 0.0), destination=(400.0, 0.0), trips=4),
        ]
    )

    result = analyzer.analyze(line_network, {})

    assert result.counts == {RoadID(0): 10, RoadID(1): 10, RoadID(2): 14, RoadID(3): 4}
    assert result.average_weighted_directness == pytest.approx(1.0)


def test_directness_weighted_by_trips(network_factory: NetworkFactory) -> None:
    """Test that directness averages routed/straight ratios weighted by trips."""
    points = {0: (0.0, 0.0), 1: (300.0, 0.0), 2: (300.0, 400.0)}
    network = network_factory(points, [(0, 1, {}), (1, 2, {})])
    analyzer = ShortestPathODAnalyzer(
        [
            # 700m routed over 500m straight
            ODPair(origin=(0.0, 0.0), destination=(300.0, 400.0), trips=1),
            ODPair(origin=(0.0, 0.0), destination=(300.0, 0.0), trips=3),
        ]
    )

    result = analyzer.analyze(network, {})

    assert result.average_weighted_directness == pytest.approx((1.4 * 1 + 1.0 * 3) / 4)


def test_costs_change_assignment(network_factory: NetworkFactory) -> None:
    """Test that trips avoid roads made expensive by the costs."""
    points = {1: (0.0, 0.0), 2: (100.0, 100.0), 3: (100.0, -100.0), 4: (200.0, 0.0)}
    network = network_factory(points, [(1, 2, {}), (2, 4, {}), (1, 3, {}), (3, 4, {})])
    analyzer = ShortestPathODAnalyzer([ODPair((0.0, 0.0), (200.0, 0.0), 5)])

    result = analyzer.analyze(network, {RoadID(0): 1e6})

    assert result.counts == {RoadID(2): 5, RoadID(3): 5}


def test_skips_unroutable_and_empty_pairs(
    network_factory: NetworkFactory, caplog: pytest.LogCaptureFixture
) -> None:
    """Test that disconnected and zero-trip pairs contribute nothing."""
    points = {0: (0.0, 0.0), 1: (100.0, 0.0), 2: (1000.0, 0.0), 3: (1100.0, 0.0)}
    network = network_factory(points, [(0, 1, {}), (2, 3, {})])
    analyzer = ShortestPathODAnalyzer(
        [
            ODPair((0.0, 0.0), (1100.0, 0.0), 7),
            ODPair((0.0, 0.0), (100.0, 0.0), 0),
        ]
    )

    with caplog.at_level(logging.WARNING, logger="planner.od"):
        result = analyzer.analyze(network, {})

    assert result.counts == {}
    assert result.average_weighted_directness == 0.0
    assert "no route" in caplog.text


def test_no_pairs(line_network: RoadNetwork) -> None:
    """Test that an analyzer without demand returns empty counts."""
    result = ShortestPathODAnalyzer().analyze(line_network, {})

    assert result.counts == {}
    assert result.average_weighted_directness == 0.0
