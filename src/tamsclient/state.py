"""
Pure pagination state machine.

transition(state, event) never mutates its input; CursorPaginator owns the
I/O and feeds the events in.
"""

from dataclasses import dataclass, replace
from typing import Literal, Optional, Union

from .paging import navigation_cursors
from .types.pagination import DEFAULT_LIMIT, PagingMeta, PaginationState, Phase

NavigationKind = Literal['first', 'next', 'previous', 'refresh']


@dataclass(frozen=True)
class NavigationStarted:
    kind: NavigationKind
    # Page size to record; only used by "first", where filters may change
    limit: Optional[int] = None


@dataclass(frozen=True)
class PageLoaded:
    meta: PagingMeta


@dataclass(frozen=True)
class PageFailed:
    error: Exception
    # State to fall back to: the one in place before the navigation started
    restore: PaginationState


@dataclass(frozen=True)
class Reset:
    limit: int = DEFAULT_LIMIT


Event = Union[NavigationStarted, PageLoaded, PageFailed, Reset]


def initial_state(limit: int = DEFAULT_LIMIT) -> PaginationState:
    return PaginationState(limit=limit)


def transition(state: PaginationState, event: Event) -> PaginationState:
    """Apply one event to a pagination state.

    Args:
        state: Current state (left untouched)
        event: Event to apply

    Returns:
        The resulting state
    """
    if isinstance(event, Reset):
        return initial_state(event.limit)
    if isinstance(event, NavigationStarted):
        return _start_navigation(state, event.kind, event.limit)
    if isinstance(event, PageLoaded):
        return _load_page(state, event.meta)
    if isinstance(event, PageFailed):
        return replace(
            event.restore,
            history_stack=list(event.restore.history_stack),
            phase=Phase.ERROR,
            error=event.error,
        )
    raise TypeError(f'unknown pagination event: {event!r}')


def _start_navigation(state: PaginationState, kind: NavigationKind, limit: Optional[int]) -> PaginationState:
    history = list(state.history_stack)
    cursor = state.current_cursor

    if kind == 'first':
        history = []
        cursor = None
        if limit:
            state = replace(state, limit=limit)
    elif kind == 'next':
        if state.next_cursor is None:
            return state
        history.append(state.current_cursor)
        cursor = state.next_cursor
    elif kind == 'previous':
        if not history:
            return state
        cursor = history.pop()
    elif kind != 'refresh':
        raise ValueError(f'unknown navigation kind: {kind!r}')

    return replace(state, current_cursor=cursor, history_stack=history, phase=Phase.LOADING)


def _load_page(state: PaginationState, meta: PagingMeta) -> PaginationState:
    next_cursor, prev_cursor, first_cursor, last_cursor = navigation_cursors(meta)
    return replace(
        state,
        history_stack=list(state.history_stack),
        next_cursor=next_cursor,
        prev_cursor=prev_cursor,
        first_cursor=first_cursor,
        last_cursor=last_cursor,
        limit=meta.limit if meta.limit and meta.limit > 0 else state.limit,
        total_count=meta.count,
        timerange=meta.timerange,
        next_key=meta.next_key,
        reverse_order=meta.reverse_order,
        phase=Phase.LOADED,
        error=None,
    )
