import asyncio

from shiptrack.errors import RouteRequestError
from shiptrack.services.directions.route_requester import RoutePolicy, RouteRequester


def run_overlapping(requester, origin, destination):
    """Fire two requests back to back and collect what the callbacks see"""
    ready, failed = [], []

    async def scenario():
        first = requester.request_route(
            origin, destination, lambda i, r: ready.append((i, r)), lambda i, e: failed.append((i, e))
        )
        second = requester.request_route(
            origin, destination, lambda i, r: ready.append((i, r)), lambda i, e: failed.append((i, e))
        )
        await asyncio.wait([first.task, second.task])
        return first, second

    first, second = asyncio.run(scenario())
    return first, second, ready, failed


def test_request_ids_increase(fake_directions, route_factory, origin, destination):
    requester = RouteRequester(fake_directions(), RoutePolicy.LATEST_REQUEST)

    first, second, _, _ = run_overlapping(requester, origin, destination)

    assert (first.request_id, second.request_id) == (1, 2)
    assert requester.in_flight == 0


def test_latest_request_discards_older_completion(
    fake_directions, route_factory, origin, destination
):
    # the first request finishes last
    slow, fast = route_factory(50, 60), route_factory(12.3, 18)
    service = fake_directions((0.05, slow), (0.0, fast))
    requester = RouteRequester(service, RoutePolicy.LATEST_REQUEST)

    _, _, ready, failed = run_overlapping(requester, origin, destination)

    assert ready == [(2, fast)]
    assert failed == []


def test_last_completed_delivers_every_result(
    fake_directions, route_factory, origin, destination
):
    slow, fast = route_factory(50, 60), route_factory(12.3, 18)
    service = fake_directions((0.05, slow), (0.0, fast))
    requester = RouteRequester(service, RoutePolicy.LAST_COMPLETED)

    _, _, ready, _ = run_overlapping(requester, origin, destination)

    assert ready == [(2, fast), (1, slow)]


def test_cancel_previous_cancels_in_flight(
    fake_directions, route_factory, origin, destination
):
    slow, fast = route_factory(50, 60), route_factory(12.3, 18)
    service = fake_directions((0.05, slow), (0.0, fast))
    requester = RouteRequester(service, RoutePolicy.CANCEL_PREVIOUS)

    first, _, ready, _ = run_overlapping(requester, origin, destination)

    assert first.task.cancelled()
    assert ready == [(2, fast)]


def test_service_error_goes_to_on_error(fake_directions, origin, destination):
    error = RouteRequestError("Directions API error: 500", 500)
    requester = RouteRequester(fake_directions((0.0, error)), RoutePolicy.LATEST_REQUEST)
    ready, failed = [], []

    async def scenario():
        request = requester.request_route(
            origin, destination, lambda i, r: ready.append(i), lambda i, e: failed.append((i, e))
        )
        await request.task

    asyncio.run(scenario())

    assert ready == []
    assert failed == [(1, error)]


def test_cancel_all(fake_directions, route_factory, origin, destination):
    requester = RouteRequester(
        fake_directions((1.0, route_factory())), RoutePolicy.LATEST_REQUEST
    )
    ready = []

    async def scenario():
        request = requester.request_route(
            origin, destination, lambda i, r: ready.append(i), lambda i, e: None
        )
        await requester.cancel_all()
        return request

    request = asyncio.run(scenario())

    assert request.task.cancelled()
    assert ready == []


def test_unexpected_failure_is_reported_not_lost(fake_directions, origin, destination):
    requester = RouteRequester(
        fake_directions((0.0, AttributeError("'NoneType' object has no attribute 'get'"))),
        RoutePolicy.LATEST_REQUEST,
    )
    failed = []

    async def scenario():
        request = requester.request_route(
            origin, destination, lambda i, r: None, lambda i, e: failed.append((i, e))
        )
        await request.task
        return request

    request = asyncio.run(scenario())

    assert request.task.exception() is None
    [(request_id, error)] = failed
    assert request_id == 1
    assert isinstance(error, RouteRequestError)
    assert "NoneType" in str(error)


def test_cancel_pending_returns_cancelled_tasks(fake_directions, route_factory, origin, destination):
    requester = RouteRequester(
        fake_directions((1.0, route_factory())), RoutePolicy.LAST_COMPLETED
    )

    async def scenario():
        request = requester.request_route(origin, destination, lambda i, r: None, lambda i, e: None)
        tasks = requester.cancel_pending()
        await asyncio.gather(*tasks, return_exceptions=True)
        return request, tasks

    request, tasks = asyncio.run(scenario())

    assert tasks == [request.task]
    assert request.task.cancelled()
