"""Route storage enforcing that no road is claimed by more than one route."""

import logging
from collections.abc import Callable, Iterable, Sequence

from core.types import InfraType, RoadID, RouteID
from planner.errors import RoadConflictError, UnknownRouteError
from planner.route import Route

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class RouteStore:
    """Owns every route in a planning session.

    Invariant: after any successful write, the road lists of all routes are
    pairwise disjoint. Every successful write notifies the registered listeners
    synchronously so derived state can be recomputed.
    """

    def __init__(self) -> None:
        self._routes: dict[RouteID, Route] = {}
        self._id_counter = 0
        self._listeners: list[Listener] = []

    @property
    def id_counter(self) -> int:
        return self._id_counter

    def add_listener(self, listener: Listener) -> None:
        """Register a callback run after every successful mutation."""
        self._listeners.append(listener)

    def get_route(self, route_id: RouteID) -> Route:
        """Get a route by ID.

        Raises:
            UnknownRouteError: If no route has this ID
        """
        if route_id not in self._routes:
            raise UnknownRouteError(route_id)
        return self._routes[route_id]

    def routes(self) -> list[tuple[RouteID, Route]]:
        """All routes in ID order."""
        return sorted(self._routes.items())

    def __len__(self) -> int:
        return len(self._routes)

    def __contains__(self, route_id: object) -> bool:
        return route_id in self._routes

    def set_route(self, edit_id: RouteID | None, route: Route) -> RouteID:
        """Create a route, or replace the route under ``edit_id``.

        Nothing in the store changes unless the whole write succeeds.

        Args:
            edit_id: ID of the route being replaced, or None to create a new one
            route: The new route

        Returns:
            ID the route is stored under (``edit_id`` when replacing)

        Raises:
            UnknownRouteError: If ``edit_id`` is given but not stored
            RoadConflictError: If the route claims a road another route already claims
        """
        if edit_id is not None and edit_id not in self._routes:
            raise UnknownRouteError(edit_id)

        # The route being replaced no longer counts as claiming its roads
        claimed = self._claimed_roads(exclude=edit_id)
        self._check_disjoint(route.roads, claimed)

        if edit_id is None:
            route_id = self._next_id()
        else:
            route_id = edit_id
        self._routes[route_id] = route
        logger.debug(f"Stored route {route_id} claiming {len(route.roads)} roads")
        self._recalculate_after_edits()
        return route_id

    def insert_routes(self, routes: Iterable[Route]) -> list[RouteID]:
        """Insert a batch of new routes, notifying listeners once.

        The whole batch is validated before anything is inserted.

        Raises:
            RoadConflictError: If any route overlaps the store or another route in the batch
        """
        batch = list(routes)
        if not batch:
            return []

        claimed = self._claimed_roads()
        for route in batch:
            self._check_disjoint(route.roads, claimed)

        ids = []
        for route in batch:
            route_id = self._next_id()
            self._routes[route_id] = route
            ids.append(route_id)
        self._recalculate_after_edits()
        return ids

    def delete_route(self, route_id: RouteID) -> None:
        """Delete a route.

        Raises:
            UnknownRouteError: If no route has this ID
        """
        if route_id not in self._routes:
            raise UnknownRouteError(route_id)
        del self._routes[route_id]
        self._recalculate_after_edits()

    def clear_all_routes(self) -> None:
        """Remove every route and reset the ID counter."""
        self._routes.clear()
        self._id_counter = 0
        self._recalculate_after_edits()

    def used_roads(self) -> set[RoadID]:
        """Roads claimed by any route, computed fresh on every call."""
        return self._claimed_roads()

    def infra_types(self) -> dict[RoadID, InfraType]:
        """Infrastructure type of every claimed road."""
        infra_types: dict[RoadID, InfraType] = {}
        for route in self._routes.values():
            for road in route.roads:
                infra_types[road] = route.infra_type
        return infra_types

    def _claimed_roads(self, exclude: RouteID | None = None) -> set[RoadID]:
        return {
            road
            for route_id, route in self._routes.items()
            if route_id != exclude
            for road in route.roads
        }

    @staticmethod
    def _check_disjoint(roads: Sequence[RoadID], claimed: set[RoadID]) -> None:
        """Add ``roads`` to ``claimed``, failing on the first road already present.

        ``claimed`` is a scratch set; a route repeating one of its own roads also conflicts.
        """
        for road in roads:
            if road in claimed:
                raise RoadConflictError(road)
            claimed.add(road)

    def _next_id(self) -> RouteID:
        route_id = RouteID(self._id_counter)
        self._id_counter += 1
        return route_id

    def _recalculate_after_edits(self) -> None:
        for listener in self._listeners:
            listener()
