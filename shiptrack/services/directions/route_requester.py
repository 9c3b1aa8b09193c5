"""
Fires route requests as asyncio tasks and reports results through callbacks.

Every request gets an increasing id. Which completions reach the callbacks
when requests overlap is decided by RoutePolicy.
"""
import asyncio
import itertools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from shiptrack.config import settings
from shiptrack.errors import ExternalServiceError, RouteRequestError
from shiptrack.models.geo import Coordinate, Route
from shiptrack.services.directions.directions_service import DirectionsService

logger = logging.getLogger(__name__)

OnReady = Callable[[int, Route], None]
OnError = Callable[[int, ExternalServiceError], None]


class RoutePolicy(str, Enum):
    # only the most recently issued request reports back
    LATEST_REQUEST = "latest_request"
    # a new request cancels the ones still in flight
    CANCEL_PREVIOUS = "cancel_previous"
    # every completion reports back, the last to finish wins
    LAST_COMPLETED = "last_completed"


@dataclass(frozen=True)
class RouteRequest:
    request_id: int
    task: "asyncio.Task[None]"


class RouteRequester:
    def __init__(
        self,
        directions_service: DirectionsService,
        policy: Optional[RoutePolicy] = None,
    ):
        self.directions_service = directions_service
        self.policy = RoutePolicy(policy or settings.route_policy)
        self._ids = itertools.count(1)
        self._latest_id = 0
        self._in_flight: Dict[int, "asyncio.Task[None]"] = {}

    @property
    def latest_id(self) -> int:
        return self._latest_id

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    def request_route(
        self,
        origin: Coordinate,
        destination: Coordinate,
        on_ready: OnReady,
        on_error: OnError,
    ) -> RouteRequest:
        """Start a route request; must be called from a running event loop"""
        request_id = next(self._ids)

        if self.policy is RoutePolicy.CANCEL_PREVIOUS:
            for previous_id, task in self._in_flight.items():
                logger.debug("Cancelling route request %d", previous_id)
                task.cancel()

        self._latest_id = request_id
        task = asyncio.get_running_loop().create_task(
            self._run(request_id, origin, destination, on_ready, on_error)
        )
        self._in_flight[request_id] = task
        task.add_done_callback(lambda _: self._in_flight.pop(request_id, None))
        return RouteRequest(request_id=request_id, task=task)

    def cancel_pending(self) -> List["asyncio.Task[None]"]:
        """Cancel every in-flight request without waiting for it to unwind"""
        tasks = list(self._in_flight.values())
        for task in tasks:
            task.cancel()
        return tasks

    async def cancel_all(self) -> None:
        await asyncio.gather(*self.cancel_pending(), return_exceptions=True)

    def _accepts(self, request_id: int) -> bool:
        if self.policy is RoutePolicy.LAST_COMPLETED:
            return True
        return request_id == self._latest_id

    async def _run(
        self,
        request_id: int,
        origin: Coordinate,
        destination: Coordinate,
        on_ready: OnReady,
        on_error: OnError,
    ) -> None:
        try:
            route = await self.directions_service.get_route(origin, destination)
        except ExternalServiceError as e:
            logger.warning("Route request %d failed: %s", request_id, e)
            if self._accepts(request_id):
                on_error(request_id, e)
            return
        except Exception as e:
            logger.exception("Route request %d crashed", request_id)
            if self._accepts(request_id):
                on_error(request_id, RouteRequestError(f"Route request failed: {e}"))
            return

        if not self._accepts(request_id):
            logger.info(
                "Discarding route %d, request %d is newer", request_id, self._latest_id
            )
            return

        logger.info(
            "Route %d ready: %.2f km, %.1f min",
            request_id,
            route.metrics.distance_km,
            route.metrics.duration_min,
        )
        on_ready(request_id, route)
