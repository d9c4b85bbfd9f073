"""
Cursor-based paginator for TAMS list endpoints.

A CursorPaginator walks one endpoint for one filter set. It performs the
requests through an injected async transport and records navigation in a
PaginationState; the transitions themselves live in tamsclient.state.
"""

import logging
from dataclasses import replace
from typing import Any, List, Optional

from .errors import ConcurrentOperationError, NetworkError, TAMSError, ValidationError
from .paging import to_page
from .query import build_path, with_cursor
from .state import NavigationKind, NavigationStarted, PageFailed, PageLoaded, Reset, initial_state, transition
from .types.pagination import DEFAULT_LIMIT, NormalizedPage, PaginationState, Phase
from .types.queries import FilterSetType
from .types.responses import Transport
from .utils.validation import validate_filter_set

logger = logging.getLogger(__name__)


class CursorPaginator:
    """Forward/backward navigation over a cursor-paginated endpoint.

    Only one navigation may be in flight at a time; a second call made
    while the state is LOADING raises ConcurrentOperationError. Failures
    move the state to ERROR while keeping the last loaded page.
    """

    def __init__(
        self,
        transport: Transport,
        path: str,
        filters: Optional[FilterSetType] = None,
        default_limit: int = DEFAULT_LIMIT,
    ) -> None:
        """Create a paginator.

        Args:
            transport: Async callable performing GET requests for a path
            path: Endpoint path, e.g. "/flows"
            filters: Filters for the first fetch (the cursor field is ignored)
            default_limit: Page size used when filters carry no limit

        Raises:
            ValidationError: If default_limit or filters are invalid
        """
        if isinstance(default_limit, bool) or not isinstance(default_limit, int) or default_limit <= 0:
            raise ValidationError(f'default_limit must be a positive integer, got {default_limit!r}')
        self.path = path
        self._transport = transport
        self._default_limit = default_limit
        self._filters = self._prepare(filters or {})
        self._state = initial_state(self._filters['limit'])
        self._page: Optional[NormalizedPage] = None
        # Bumped by reset() so that completions of abandoned requests are dropped
        self._generation = 0

    @property
    def state(self) -> PaginationState:
        """Snapshot of the current pagination state."""
        return replace(self._state, history_stack=list(self._state.history_stack))

    @property
    def filters(self) -> FilterSetType:
        return dict(self._filters)  # type: ignore[return-value]

    @property
    def page(self) -> Optional[NormalizedPage]:
        """Last successfully loaded page; kept when a later fetch fails."""
        return self._page

    @property
    def items(self) -> List[Any]:
        return list(self._page.items) if self._page else []

    @property
    def has_next(self) -> bool:
        return self._state.next_cursor is not None

    @property
    def has_previous(self) -> bool:
        return bool(self._state.history_stack)

    async def fetch_first(self, filters: Optional[FilterSetType] = None) -> PaginationState:
        """Load the first page, clearing the navigation history.

        Args:
            filters: New filters; the current ones are reused when omitted

        Returns:
            The resulting pagination state

        Raises:
            ConcurrentOperationError: If a navigation is already in flight
            ValidationError: If filters are invalid (state is left untouched)
            NetworkError: If the request fails
            UnexpectedFormatError: If the body has an unrecognized shape
        """
        self._ensure_idle()
        pending = self._prepare(filters) if filters is not None else self._filters
        return await self._navigate('first', pending)

    async def fetch_next(self) -> PaginationState:
        """Load the next page; no-op when there is no next cursor."""
        self._ensure_idle()
        return await self._navigate('next')

    async def fetch_previous(self) -> PaginationState:
        """Go back one page in the history; no-op when the history is empty."""
        self._ensure_idle()
        return await self._navigate('previous')

    async def refresh_current(self) -> PaginationState:
        """Reload the current page without touching the history."""
        self._ensure_idle()
        if self._state.phase == Phase.INITIAL:
            return self.state
        return await self._navigate('refresh')

    refresh = refresh_current

    def reset(self, filters: Optional[FilterSetType] = None) -> PaginationState:
        """Return to the INITIAL state, optionally with new filters.

        A request still in flight completes, but its result is discarded.
        """
        if filters is not None:
            self._filters = self._prepare(filters)
        self._generation += 1
        self._page = None
        self._state = transition(self._state, Reset(self._filters['limit']))
        logger.debug("Paginator for %s reset", self.path)
        return self.state

    async def _navigate(self, kind: NavigationKind, filters: Optional[FilterSetType] = None) -> PaginationState:
        # New filters only replace the current ones once their first page loads
        filters = self._filters if filters is None else filters
        previous = self._state
        limit = filters['limit'] if kind == 'first' else None
        started = transition(previous, NavigationStarted(kind, limit))
        if started is previous:
            logger.debug("Paginator for %s: nothing to do for %s", self.path, kind)
            return self.state

        path = build_path(self.path, with_cursor(filters, started.current_cursor))
        self._state = started
        generation = self._generation
        logger.debug("Paginator for %s: %s -> %s", self.path, kind, path)

        try:
            page = await self._fetch(path)
        except Exception as e:
            if generation == self._generation:
                self._state = transition(self._state, PageFailed(e, previous))
            raise
        except BaseException:
            # Cancelled: the navigation never happened
            if generation == self._generation:
                logger.debug("Navigation %s on %s cancelled", kind, self.path)
                self._state = previous
            raise

        if generation != self._generation:
            logger.debug("Discarding stale page for %s", path)
            return self.state
        self._filters = filters
        self._page = page
        self._state = transition(self._state, PageLoaded(page.meta))
        return self.state

    async def _fetch(self, path: str) -> NormalizedPage:
        try:
            response = await self._transport(path)
            return to_page(response)
        except TAMSError:
            raise
        except Exception as e:
            raise NetworkError(f'Request to {path} failed: {e}') from e

    def _ensure_idle(self) -> None:
        if self._state.phase == Phase.LOADING:
            raise ConcurrentOperationError(
                f'a navigation on {self.path} is already in flight'
            )

    def _prepare(self, filters: FilterSetType) -> FilterSetType:
        validate_filter_set(filters)
        prepared = with_cursor(filters, None)
        if prepared.get('limit') is None:
            prepared['limit'] = self._default_limit
        # Parses a string timerange, so bad filters never reach the state
        build_path(self.path, prepared)
        return prepared
