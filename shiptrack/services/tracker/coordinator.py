"""
Wires screen actions to the resolver, map controller and route requester
"""
import asyncio
import logging
from typing import Any, Mapping, Optional

from shiptrack.errors import ExternalServiceError, PlaceResolutionError
from shiptrack.models.geo import EdgePadding, Route
from shiptrack.models.state import (
    PointField,
    PointSelected,
    RouteCompleted,
    RouteFailed,
    SelectionFailed,
    SelectionState,
    TrackRequested,
)
from shiptrack.services.directions.route_requester import RouteRequester
from shiptrack.services.map.map_controller import MapController
from shiptrack.services.places.place_resolver import PlaceResolver
from shiptrack.services.tracker.store import SelectionStore

logger = logging.getLogger(__name__)


class TrackerCoordinator:
    def __init__(
        self,
        store: SelectionStore,
        resolver: PlaceResolver,
        map_controller: MapController,
        route_requester: RouteRequester,
        edge_padding: Optional[EdgePadding] = None,
    ):
        self.store = store
        self.resolver = resolver
        self.map_controller = map_controller
        self.route_requester = route_requester
        self.edge_padding = edge_padding

    @property
    def state(self) -> SelectionState:
        return self.store.state

    async def select_place(
        self, field: PointField, details: Optional[Mapping[str, Any]]
    ) -> SelectionState:
        """A suggestion was picked for the origin or destination field"""
        try:
            coordinate = self.resolver.resolve(details)
        except PlaceResolutionError as e:
            logger.warning("Could not resolve %s: %s", field, e)
            return self.store.dispatch(SelectionFailed(field=field, message=str(e)))

        state = self.store.dispatch(PointSelected(field=field, coordinate=coordinate))
        await self.map_controller.center_on(coordinate)
        return state

    async def track(self) -> "Optional[asyncio.Task[None]]":
        """Fit both points on screen and start a route request.

        Returns the request task, or None when a point is still missing.
        """
        state = self.store.state
        if state.origin is None or state.destination is None:
            logger.info("Track pressed before both points were selected")
            return None

        origin, destination = state.origin, state.destination
        await self.map_controller.fit_to_points([origin, destination], self.edge_padding)
        request = self.route_requester.request_route(
            origin, destination, self._on_route_ready, self._on_route_failed
        )
        self.store.dispatch(TrackRequested(request_id=request.request_id))
        return request.task

    def _on_route_ready(self, request_id: int, route: Route) -> None:
        self.store.dispatch(RouteCompleted(request_id=request_id, route=route))

    def _on_route_failed(self, request_id: int, error: ExternalServiceError) -> None:
        self.store.dispatch(RouteFailed(request_id=request_id, message=str(error)))
