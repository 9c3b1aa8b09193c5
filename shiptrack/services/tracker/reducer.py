"""
Pure state transitions for the tracking screen.

``transition`` never mutates its input; it returns the same object when an
event changes nothing, so callers can compare by identity.
"""
from functools import singledispatch

from shiptrack.models.state import (
    PointSelected,
    RouteCompleted,
    RouteFailed,
    SelectionFailed,
    SelectionState,
    TrackerEvent,
    TrackRequested,
)


def transition(
    state: SelectionState, event: TrackerEvent, clear_route_on_change: bool = False
) -> SelectionState:
    return _apply(event, state, clear_route_on_change)


@singledispatch
def _apply(event, state: SelectionState, clear_route_on_change: bool) -> SelectionState:
    raise TypeError(f"Unknown tracker event: {type(event).__name__}")


@_apply.register
def _(event: PointSelected, state: SelectionState, clear_route_on_change: bool):
    if getattr(state, event.field) == event.coordinate:
        if state.error is None:
            return state
        return state.model_copy(update={"error": None})

    update = {event.field: event.coordinate, "error": None}
    if state.route_requested:
        if clear_route_on_change:
            update.update(route_requested=False, route_stale=False, metrics=None, path=())
        else:
            # the drawn route stays until track is pressed again
            update["route_stale"] = True
    return state.model_copy(update=update)


@_apply.register
def _(event: SelectionFailed, state: SelectionState, clear_route_on_change: bool):
    return state.model_copy(update={"error": event.message})


@_apply.register
def _(event: TrackRequested, state: SelectionState, clear_route_on_change: bool):
    if not state.has_both_points:
        return state
    return state.model_copy(
        update={
            "route_requested": True,
            "route_stale": False,
            "request_id": event.request_id,
            "error": None,
        }
    )


@_apply.register
def _(event: RouteCompleted, state: SelectionState, clear_route_on_change: bool):
    if not state.route_requested:
        return state
    return state.model_copy(
        update={
            "request_id": event.request_id,
            "metrics": event.route.metrics,
            "path": event.route.path,
            "error": None,
        }
    )


@_apply.register
def _(event: RouteFailed, state: SelectionState, clear_route_on_change: bool):
    if not state.route_requested:
        return state
    return state.model_copy(
        update={
            "request_id": event.request_id,
            "metrics": None,
            "path": (),
            "error": event.message,
        }
    )
