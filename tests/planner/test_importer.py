"""Tests for importing existing infrastructure and the core network."""

from collections.abc import Callable, Mapping

import pytest

from core.types import InfraType, RoadID, RouteID, Tier
from network.graph.road_network import RoadNetwork
from planner.config import PlannerConfig
from planner.importer import ImportPipeline
from planner.route import Route
from planner.route_store import RouteStore

NetworkFactory = Callable[..., RoadNetwork]


class FakeTagClassifier:
    """Reads the guess straight from a test-only ``cycle`` tag."""

    def classify(self, tags: Mapping[str, str]) -> InfraType | None:
        value = tags.get("cycle")
        return InfraType(value) if value else None


@pytest.fixture
def tagged_network(network_factory: NetworkFactory) -> RoadNetwork:
    """Six intersections in a line; roads 0-1 segregated, 2 a lane, 3-4 off road."""
    points = {i: (i * 100.0, 0.0) for i in range(6)}
    cycle = ["SegregatedWide", "SegregatedWide", "CycleLane", "OffRoad", "OffRoad"]
    names = ["", "Canal Path", "Main Street", "Park Way", ""]
    roads = []
    for i in range(5):
        tags = {"highway": "cycleway", "cycle": cycle[i]}
        if names[i]:
            tags["name"] = names[i]
        roads.append((i, i + 1, {"tags": tags}))
    return network_factory(points, roads)


def _claim(store: RouteStore, *roads: int) -> RouteID:
    return store.set_route(
        None,
        Route(
            feature={"type": "Feature", "properties": {}},
            name="drawn",
            notes="",
            roads=tuple(RoadID(r) for r in roads),
            infra_type=InfraType.CYCLE_LANE,
            tier=Tier.PRIMARY,
        ),
    )


class TestImportExistingRoutes:
    """Test importing already-built infrastructure."""

    def test_imports_chains_of_accepted_types(self, tagged_network: RoadNetwork) -> None:
        """Test that accepted guesses become one route per chain with default attributes."""
        store = RouteStore()
        pipeline = ImportPipeline(tagged_network, store, FakeTagClassifier())

        assert pipeline.import_existing_routes() == 2

        routes = [route for _, route in store.routes()]
        assert [route.roads for route in routes] == [
            (RoadID(0), RoadID(1)),
            (RoadID(3), RoadID(4)),
        ]
        assert [route.infra_type for route in routes] == [
            InfraType.SEGREGATED_WIDE,
            InfraType.OFF_ROAD,
        ]
        assert all(route.tier == Tier.LOCAL_ACCESS for route in routes)
        assert all(route.notes == "imported from existing network" for route in routes)

    def test_route_named_after_first_named_road(self, tagged_network: RoadNetwork) -> None:
        """Test that the first non-empty road name along the chain names the route."""
        store = RouteStore()
        ImportPipeline(tagged_network, store, FakeTagClassifier()).import_existing_routes()

        assert [route.name for _, route in store.routes()] == ["Canal Path", "Park Way"]

    def test_feature_is_editable(self, tagged_network: RoadNetwork) -> None:
        """Test that imported routes carry snapped waypoints and their full path."""
        store = RouteStore()
        ImportPipeline(tagged_network, store, FakeTagClassifier()).import_existing_routes()

        feature = store.get_route(RouteID(0)).feature
        assert feature["geometry"]["coordinates"] == [[0.0, 0.0], [100.0, 0.0], [200.0, 0.0]]
        props = feature["properties"]
        assert props["waypoints"] == [
            {"lon": 0.0, "lat": 0.0, "snapped": True},
            {"lon": 100.0, "lat": 0.0, "snapped": True},
            {"lon": 200.0, "lat": 0.0, "snapped": True},
        ]
        assert props["full_path"] == [{"snapped": 0}, {"snapped": 1}, {"snapped": 2}]
        assert props["roads"] == [0, 1]

    def test_skips_claimed_roads(self, tagged_network: RoadNetwork) -> None:
        """Test that roads already in a route are left alone."""
        store = RouteStore()
        _claim(store, 1)
        ImportPipeline(tagged_network, store, FakeTagClassifier()).import_existing_routes()

        assert [route.roads for _, route in store.routes()] == [
            (RoadID(1),),
            (RoadID(0),),
            (RoadID(3), RoadID(4)),
        ]

    def test_configured_types(self, tagged_network: RoadNetwork) -> None:
        """Test that the accepted types come from the configuration."""
        store = RouteStore()
        config = PlannerConfig(existing_infra_types=frozenset({InfraType.OFF_ROAD}))
        pipeline = ImportPipeline(tagged_network, store, FakeTagClassifier(), config=config)

        assert pipeline.import_existing_routes() == 1
        assert store.get_route(RouteID(0)).roads == (RoadID(3), RoadID(4))

    def test_requires_tag_classifier(self, tagged_network: RoadNetwork) -> None:
        """Test that importing without a classifier fails."""
        with pytest.raises(ValueError, match="tag classifier"):
            ImportPipeline(tagged_network, RouteStore()).import_existing_routes()

    def test_second_import_is_noop(self, tagged_network: RoadNetwork) -> None:
        """Test that everything importable is claimed after the first import."""
        store = RouteStore()
        pipeline = ImportPipeline(tagged_network, store, FakeTagClassifier())
        pipeline.import_existing_routes()

        assert pipeline.import_existing_routes() == 0
        assert len(store) == 2


class TestImportCoreNetwork:
    """Test importing the precomputed core network."""

    def test_one_batch_per_tier(self, line_network: RoadNetwork) -> None:
        """Test that roads are grouped per tier and given the placeholder type."""
        store = RouteStore()
        core = {
            RoadID(0): Tier.SECONDARY,
            RoadID(1): Tier.PRIMARY,
            RoadID(2): Tier.PRIMARY,
            RoadID(4): Tier.LONG_DISTANCE,
        }
        pipeline = ImportPipeline(line_network, store, core_network=core)

        assert pipeline.import_core_network() == 3

        routes = [route for _, route in store.routes()]
        assert [(route.roads, route.tier) for route in routes] == [
            ((RoadID(1), RoadID(2)), Tier.PRIMARY),
            ((RoadID(0),), Tier.SECONDARY),
            ((RoadID(4),), Tier.LONG_DISTANCE),
        ]
        assert all(route.infra_type == InfraType.SEGREGATED_NARROW for route in routes)

    def test_skips_claimed_roads(self, line_network: RoadNetwork) -> None:
        """Test that core network roads already claimed are not imported again."""
        store = RouteStore()
        _claim(store, 1)
        core = {RoadID(0): Tier.PRIMARY, RoadID(1): Tier.PRIMARY, RoadID(2): Tier.PRIMARY}

        assert ImportPipeline(line_network, store, core_network=core).import_core_network() == 2
        assert store.used_roads() == {RoadID(0), RoadID(1), RoadID(2)}

    def test_empty_overlay(self, line_network: RoadNetwork) -> None:
        """Test that no overlay means no routes."""
        store = RouteStore()

        assert ImportPipeline(line_network, store).import_core_network() == 0
        assert len(store) == 0


def test_import_roads_empty_batch(line_network: RoadNetwork) -> None:
    """Test that an empty batch creates nothing and notifies nobody."""
    store = RouteStore()
    calls: list[int] = []
    store.add_listener(lambda: calls.append(1))

    assert ImportPipeline(line_network, store).import_roads([], Tier.PRIMARY) == 0
    assert calls == []
