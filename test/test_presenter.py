from shiptrack.models.geo import RouteMetrics
from shiptrack.models.state import SelectionState, TrackerPhase
from shiptrack.services.tracker.presenter import format_distance, format_duration, render


def test_distance_and_duration_are_not_conflated(origin, destination, route_factory):
    route = route_factory(distance_km=12.3, duration_min=18)
    state = SelectionState(
        origin=origin,
        destination=destination,
        route_requested=True,
        request_id=1,
        metrics=route.metrics,
        path=route.path,
    )

    view = render(state)

    assert view.distance_text == "12.30 km"
    assert view.duration_text == "18 mins"
    assert view.phase is TrackerPhase.ROUTE_SHOWN
    assert [m.field for m in view.markers] == ["origin", "destination"]
    assert view.route.path == list(route.path)
    assert view.route.stroke_color == "#260ba9"


def test_duration_rounds_up():
    metrics = RouteMetrics(distance_km=3.14159, duration_min=17.2)
    assert format_distance(metrics) == "3.14 km"
    assert format_duration(metrics) == "18 mins"


def test_no_metrics_no_text(origin):
    view = render(SelectionState(origin=origin))

    assert view.distance_text is None
    assert view.duration_text is None
    assert view.route is None
    assert len(view.markers) == 1


def test_stale_route_is_flagged(origin, destination, route_factory):
    route = route_factory()
    state = SelectionState(
        origin=origin,
        destination=destination,
        route_requested=True,
        route_stale=True,
        metrics=route.metrics,
        path=route.path,
    )

    assert render(state).route.stale
