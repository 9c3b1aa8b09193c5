import logging
from typing import Callable, List, Optional

from shiptrack.config import settings
from shiptrack.models.state import SelectionState, TrackerEvent
from shiptrack.services.tracker.reducer import transition

logger = logging.getLogger(__name__)

Listener = Callable[[SelectionState], None]


class SelectionStore:
    """Holds the session's SelectionState and notifies subscribers on change"""

    def __init__(
        self,
        state: Optional[SelectionState] = None,
        clear_route_on_change: Optional[bool] = None,
    ):
        self._state = state or SelectionState()
        self.clear_route_on_change = (
            clear_route_on_change
            if clear_route_on_change is not None
            else settings.clear_route_on_change
        )
        self._listeners: List[Listener] = []

    @property
    def state(self) -> SelectionState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that removes it"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, event: TrackerEvent) -> SelectionState:
        new_state = transition(self._state, event, self.clear_route_on_change)
        if new_state is self._state:
            return new_state

        logger.debug(
            "%s: %s -> %s", type(event).__name__, self._state.phase, new_state.phase
        )
        self._state = new_state
        for listener in list(self._listeners):
            listener(new_state)
        return new_state
