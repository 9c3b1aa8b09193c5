import math
from typing import Optional

from shiptrack.models.geo import Region, RouteMetrics
from shiptrack.models.response import Marker, RouteLine, TrackerView
from shiptrack.models.state import SelectionState


def format_distance(metrics: RouteMetrics) -> str:
    return f"{metrics.distance_km:.2f} km"


def format_duration(metrics: RouteMetrics) -> str:
    return f"{math.ceil(metrics.duration_min)} mins"


def render(state: SelectionState, region: Optional[Region] = None) -> TrackerView:
    """Build the screen contents for a state"""
    markers = [
        Marker(field=field, coordinate=point)
        for field, point in (("origin", state.origin), ("destination", state.destination))
        if point is not None
    ]

    route = None
    if state.route_requested and state.path:
        route = RouteLine(path=list(state.path), stale=state.route_stale)

    view = TrackerView(
        phase=state.phase,
        markers=markers,
        route=route,
        error=state.error,
        region=region,
    )
    if state.metrics is not None:
        view.distance_text = format_distance(state.metrics)
        view.duration_text = format_duration(state.metrics)
    return view
