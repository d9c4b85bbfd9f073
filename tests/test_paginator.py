import asyncio

import pytest

from tamsclient import (
    ApiError,
    ConcurrentOperationError,
    CursorPaginator,
    NetworkError,
    Phase,
    TransportResponse,
    UnexpectedFormatError,
    ValidationError,
)


@pytest.mark.asyncio
async def test_fetch_first_populates_state(transport):
    paginator = CursorPaginator(transport, "/flows", {"limit": 2, "label": "cam"})
    state = await paginator.fetch_first()

    assert transport.calls == ["/flows?label=cam&limit=2"]
    assert state.phase == Phase.LOADED
    assert state.current_cursor is None
    assert state.history_stack == []
    assert state.next_cursor == "c2"
    assert state.last_cursor == "c3"
    assert state.prev_cursor is None
    assert state.limit == 2
    assert state.total_count == 6
    assert paginator.items == [{"id": "f1"}, {"id": "f2"}]
    assert paginator.page.shape == "bare"
    assert paginator.has_next
    assert not paginator.has_previous


@pytest.mark.asyncio
async def test_forward_and_back_returns_to_first_page(transport):
    paginator = CursorPaginator(transport, "/flows", {"limit": 2})
    await paginator.fetch_first()
    first_cursor = paginator.state.current_cursor

    await paginator.fetch_next()
    assert paginator.state.current_cursor == "c2"
    assert paginator.state.history_stack == [None]
    assert paginator.items == [{"id": "f3"}, {"id": "f4"}]
    assert paginator.page.shape == "wrapped"

    await paginator.fetch_next()
    assert paginator.state.current_cursor == "c3"
    assert paginator.state.history_stack == [None, "c2"]
    assert paginator.state.timerange == "0:0_60:0"

    await paginator.fetch_previous()
    assert paginator.state.current_cursor == "c2"
    state = await paginator.fetch_previous()

    assert state.history_stack == []
    assert state.current_cursor == first_cursor
    assert transport.calls == [
        "/flows?limit=2",
        "/flows?limit=2&page=c2",
        "/flows?limit=2&page=c3",
        "/flows?limit=2&page=c2",
        "/flows?limit=2",
    ]


@pytest.mark.asyncio
async def test_fetch_next_without_next_cursor_is_noop(transport):
    paginator = CursorPaginator(transport, "/flows", {"limit": 2})
    await paginator.fetch_first()
    await paginator.fetch_next()
    await paginator.fetch_next()
    before = paginator.state
    assert before.next_cursor is None

    after = await paginator.fetch_next()

    assert after == before
    assert len(transport.calls) == 3


@pytest.mark.asyncio
async def test_noops_before_first_fetch(transport):
    paginator = CursorPaginator(transport, "/flows")
    assert (await paginator.fetch_next()).phase == Phase.INITIAL
    assert (await paginator.fetch_previous()).phase == Phase.INITIAL
    assert (await paginator.refresh_current()).phase == Phase.INITIAL
    assert transport.calls == []


@pytest.mark.asyncio
async def test_refresh_keeps_history(transport):
    paginator = CursorPaginator(transport, "/flows", {"limit": 2})
    await paginator.fetch_first()
    await paginator.fetch_next()

    state = await paginator.refresh()

    assert state.current_cursor == "c2"
    assert state.history_stack == [None]
    assert transport.calls[-1] == "/flows?limit=2&page=c2"


@pytest.mark.asyncio
async def test_concurrent_navigation_is_rejected(transport):
    paginator = CursorPaginator(transport, "/flows", {"limit": 2})
    await paginator.fetch_first()

    transport.gate = asyncio.Event()
    first = asyncio.create_task(paginator.fetch_next())
    await asyncio.sleep(0)
    assert paginator.state.phase == Phase.LOADING

    with pytest.raises(ConcurrentOperationError):
        await paginator.fetch_next()
    with pytest.raises(ConcurrentOperationError):
        await paginator.refresh_current()
    with pytest.raises(ConcurrentOperationError):
        await paginator.fetch_first()

    transport.gate.set()
    state = await first

    assert state.current_cursor == "c2"
    assert state.history_stack == [None]
    assert len(transport.calls) == 2


@pytest.mark.asyncio
async def test_network_failure_keeps_stale_page(transport, flow_pages):
    flow_pages["c2"] = TransportResponse(503, {}, "service unavailable")
    paginator = CursorPaginator(transport, "/flows", {"limit": 2})
    await paginator.fetch_first()

    with pytest.raises(ApiError) as ei:
        await paginator.fetch_next()

    assert ei.value.status_code == 503
    state = paginator.state
    assert state.phase == Phase.ERROR
    assert state.error is ei.value
    assert state.current_cursor is None
    assert state.history_stack == []
    assert state.next_cursor == "c2"
    assert state.total_count == 6
    assert paginator.items == [{"id": "f1"}, {"id": "f2"}]

    # Caller-initiated retry from ERROR
    flow_pages["c2"] = TransportResponse(200, {}, [{"id": "f3"}])
    state = await paginator.refresh_current()
    assert state.phase == Phase.LOADED
    assert state.error is None


@pytest.mark.asyncio
async def test_transport_exception_is_wrapped(transport, flow_pages):
    flow_pages[None] = ConnectionError("connection refused")
    paginator = CursorPaginator(transport, "/flows")

    with pytest.raises(NetworkError) as ei:
        await paginator.fetch_first()

    assert isinstance(ei.value.__cause__, ConnectionError)
    assert paginator.state.phase == Phase.ERROR
    assert paginator.page is None


@pytest.mark.asyncio
async def test_unexpected_body_shape(transport, flow_pages):
    flow_pages[None] = TransportResponse(200, {}, {"items": []})
    paginator = CursorPaginator(transport, "/flows")

    with pytest.raises(UnexpectedFormatError):
        await paginator.fetch_first()
    assert paginator.state.phase == Phase.ERROR


@pytest.mark.asyncio
async def test_header_keys_are_cursor_fallback(transport, flow_pages):
    flow_pages[None] = TransportResponse(
        200, {"X-Paging-NextKey": "c2", "x-paging-limit": "not-a-number"}, []
    )
    paginator = CursorPaginator(transport, "/flows", {"limit": 2})
    state = await paginator.fetch_first()

    assert state.next_cursor == "c2"
    assert state.next_key == "c2"
    assert state.limit == 2
    assert state.total_count is None


@pytest.mark.asyncio
async def test_invalid_filters_leave_state_untouched(transport):
    paginator = CursorPaginator(transport, "/flows", {"limit": 2})
    await paginator.fetch_first()
    before = paginator.state

    with pytest.raises(ValidationError):
        await paginator.fetch_first({"limit": 0})

    assert paginator.state == before
    assert paginator.filters == {"limit": 2}
    assert len(transport.calls) == 1


def test_constructor_validates(transport):
    with pytest.raises(ValidationError):
        CursorPaginator(transport, "/flows", {"tags": {"a": "1"}, "tag_exists": ["a"]})
    with pytest.raises(ValidationError):
        CursorPaginator(transport, "/flows", default_limit=0)


@pytest.mark.asyncio
async def test_fetch_first_with_new_filters_drops_cursor(transport):
    paginator = CursorPaginator(transport, "/flows", {"limit": 2})
    await paginator.fetch_first()
    await paginator.fetch_next()

    state = await paginator.fetch_first({"limit": 2, "codec": "h264", "cursor": "ignored"})

    assert transport.calls[-1] == "/flows?codec=h264&limit=2"
    assert state.history_stack == []
    assert state.current_cursor is None


@pytest.mark.asyncio
async def test_default_limit_is_sent(transport):
    paginator = CursorPaginator(transport, "/flows", default_limit=25)
    await paginator.fetch_first()
    assert transport.calls == ["/flows?limit=25"]


@pytest.mark.asyncio
async def test_reset(transport):
    paginator = CursorPaginator(transport, "/flows", {"limit": 2})
    await paginator.fetch_first()
    await paginator.fetch_next()

    state = paginator.reset({"limit": 4})

    assert state.phase == Phase.INITIAL
    assert state.history_stack == []
    assert state.current_cursor is None
    assert state.limit == 4
    assert paginator.page is None
    assert paginator.items == []


@pytest.mark.asyncio
async def test_reset_discards_in_flight_result(transport):
    paginator = CursorPaginator(transport, "/flows", {"limit": 2})
    await paginator.fetch_first()

    transport.gate = asyncio.Event()
    in_flight = asyncio.create_task(paginator.fetch_next())
    await asyncio.sleep(0)

    paginator.reset()
    transport.gate.set()
    state = await in_flight

    assert state.phase == Phase.INITIAL
    assert state.history_stack == []
    assert paginator.page is None


@pytest.mark.asyncio
async def test_cancelled_navigation_restores_state(transport):
    paginator = CursorPaginator(transport, "/flows", {"limit": 2})
    await paginator.fetch_first()

    transport.gate = asyncio.Event()
    in_flight = asyncio.create_task(paginator.fetch_next())
    await asyncio.sleep(0)
    assert paginator.state.phase == Phase.LOADING

    in_flight.cancel()
    with pytest.raises(asyncio.CancelledError):
        await in_flight

    state = paginator.state
    assert state.phase == Phase.LOADED
    assert state.current_cursor is None
    assert state.history_stack == []
    assert state.next_cursor == "c2"

    transport.gate = None
    state = await paginator.fetch_first()
    assert state.phase == Phase.LOADED
    assert paginator.items == [{"id": "f1"}, {"id": "f2"}]


@pytest.mark.asyncio
async def test_timed_out_navigation_can_be_retried(transport):
    paginator = CursorPaginator(transport, "/flows", {"limit": 2})
    await paginator.fetch_first()

    transport.gate = asyncio.Event()
    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(paginator.fetch_next(), 0.01)
    assert paginator.state.phase == Phase.LOADED

    transport.gate = None
    state = await paginator.fetch_next()
    assert state.current_cursor == "c2"
    assert state.history_stack == [None]


@pytest.mark.asyncio
async def test_malformed_transport_result_becomes_network_error(transport, flow_pages):
    flow_pages["c2"] = {"status": 200}
    paginator = CursorPaginator(transport, "/flows", {"limit": 2})
    await paginator.fetch_first()

    with pytest.raises(NetworkError) as ei:
        await paginator.fetch_next()

    assert isinstance(ei.value.__cause__, AttributeError)
    state = paginator.state
    assert state.phase == Phase.ERROR
    assert state.current_cursor is None
    assert state.history_stack == []

    state = await paginator.fetch_first()
    assert state.phase == Phase.LOADED


@pytest.mark.asyncio
async def test_failed_fetch_first_keeps_previous_filters(transport, flow_pages):
    paginator = CursorPaginator(transport, "/flows", {"limit": 2})
    await paginator.fetch_first()
    await paginator.fetch_next()

    flow_pages[None] = TransportResponse(503, {}, "service unavailable")
    with pytest.raises(ApiError):
        await paginator.fetch_first({"limit": 2, "codec": "h264"})

    state = paginator.state
    assert state.phase == Phase.ERROR
    assert state.current_cursor == "c2"
    assert state.history_stack == [None]
    assert paginator.filters == {"limit": 2}

    await paginator.refresh_current()
    assert transport.calls[-1] == "/flows?limit=2&page=c2"
    assert paginator.state.phase == Phase.LOADED
