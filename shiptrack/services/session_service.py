"""
Session registry - one tracking screen per session

Each session owns its selection store, a headless map viewport and a route
requester. Sessions live in memory and are discarded on close, after
sitting idle longer than the TTL, or oldest first once the cap is reached.
"""
import asyncio
import dataclasses
import logging
import time
import uuid
from typing import Any, Callable, Dict, Mapping, Optional

from shiptrack.config import settings
from shiptrack.models.response import TrackerView
from shiptrack.models.state import PointField
from shiptrack.services.directions.directions_service import DirectionsService
from shiptrack.services.directions.route_requester import RouteRequester
from shiptrack.services.map.map_controller import MapController
from shiptrack.services.map.viewport_surface import ViewportMapSurface
from shiptrack.services.places.place_resolver import PlaceResolver
from shiptrack.services.places.places_service import PlacesService
from shiptrack.services.tracker.coordinator import TrackerCoordinator
from shiptrack.services.tracker.presenter import render
from shiptrack.services.tracker.store import SelectionStore

logger = logging.getLogger(__name__)


class SessionNotFoundError(KeyError):
    pass


@dataclasses.dataclass
class TrackerSession:
    session_id: str
    coordinator: TrackerCoordinator
    surface: ViewportMapSurface
    last_used: float = 0.0

    def view(self) -> TrackerView:
        return render(self.coordinator.state, region=self.surface.region)


class SessionService:
    def __init__(
        self,
        places_service: PlacesService,
        directions_service: DirectionsService,
        resolver: Optional[PlaceResolver] = None,
        session_ttl_s: Optional[float] = None,
        max_sessions: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.places_service = places_service
        self.directions_service = directions_service
        self.resolver = resolver or PlaceResolver()
        self.session_ttl_s = (
            session_ttl_s if session_ttl_s is not None else settings.session_ttl_s
        )
        self.max_sessions = max_sessions or settings.max_sessions
        self._clock = clock
        # insertion order doubles as least-recently-used order
        self._sessions: Dict[str, TrackerSession] = {}

    def open_session(self) -> TrackerSession:
        self.evict_idle()
        while len(self._sessions) >= self.max_sessions:
            oldest = next(iter(self._sessions))
            self._discard(oldest, "session cap reached")

        surface = ViewportMapSurface()
        coordinator = TrackerCoordinator(
            store=SelectionStore(),
            resolver=self.resolver,
            map_controller=MapController(surface),
            route_requester=RouteRequester(self.directions_service),
        )
        session = TrackerSession(
            session_id=uuid.uuid4().hex,
            coordinator=coordinator,
            surface=surface,
            last_used=self._clock(),
        )
        self._sessions[session.session_id] = session
        logger.info("Opened session %s", session.session_id)
        return session

    def get_session(self, session_id: str) -> TrackerSession:
        self.evict_idle()
        try:
            session = self._sessions.pop(session_id)
        except KeyError:
            raise SessionNotFoundError(session_id) from None
        session.last_used = self._clock()
        self._sessions[session_id] = session
        return session

    async def close_session(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session is None:
            return
        await session.coordinator.route_requester.cancel_all()
        logger.info("Closed session %s", session_id)

    def evict_idle(self) -> int:
        """Drop sessions idle for longer than the TTL; returns how many went"""
        cutoff = self._clock() - self.session_ttl_s
        expired = [
            session_id
            for session_id, session in self._sessions.items()
            if session.last_used < cutoff
        ]
        for session_id in expired:
            self._discard(session_id, "idle")
        return len(expired)

    def _discard(self, session_id: str, reason: str) -> None:
        session = self._sessions.pop(session_id)
        session.coordinator.route_requester.cancel_pending()
        logger.info("Evicted session %s (%s)", session_id, reason)

    async def select_place(
        self,
        session_id: str,
        field: PointField,
        place_id: Optional[str] = None,
        details: Optional[Mapping[str, Any]] = None,
    ) -> TrackerView:
        session = self.get_session(session_id)
        if details is None and place_id is not None:
            details = await self.places_service.get_place_details(place_id)
        await session.coordinator.select_place(field, details)
        return session.view()

    async def track(self, session_id: str) -> TrackerView:
        session = self.get_session(session_id)
        task = await session.coordinator.track()
        if task is not None:
            # a newer request may cancel this one; the view shows whichever won
            await asyncio.wait([task])
        return session.view()

    def __len__(self) -> int:
        return len(self._sessions)
