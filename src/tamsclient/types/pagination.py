from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Literal, Optional

from .links import LinkEntry

DEFAULT_LIMIT = 50


class Phase(str, Enum):
    INITIAL = 'initial'
    LOADING = 'loading'
    LOADED = 'loaded'
    ERROR = 'error'


@dataclass(frozen=True)
class PagingMeta:
    """Pagination metadata carried by the Link and X-Paging-* headers."""
    links: List[LinkEntry] = field(default_factory=list)
    limit: Optional[int] = None  # X-Paging-Limit
    count: Optional[int] = None  # X-Paging-Count
    next_key: Optional[str] = None
    prev_key: Optional[str] = None
    first_key: Optional[str] = None
    last_key: Optional[str] = None
    timerange: Optional[str] = None  # X-Paging-Timerange
    reverse_order: bool = False


@dataclass(frozen=True)
class NormalizedPage:
    """One page of entities, whichever body shape the server used."""
    items: List[Any]
    shape: Literal['bare', 'wrapped']
    meta: PagingMeta = field(default_factory=PagingMeta)


@dataclass
class PaginationState:
    """Navigation state of one CursorPaginator.

    history_stack holds the cursors of previously visited pages, oldest
    first; None stands for the first page.
    """
    current_cursor: Optional[str] = None
    history_stack: List[Optional[str]] = field(default_factory=list)
    next_cursor: Optional[str] = None
    prev_cursor: Optional[str] = None
    first_cursor: Optional[str] = None
    last_cursor: Optional[str] = None
    limit: int = DEFAULT_LIMIT
    total_count: Optional[int] = None
    timerange: Optional[str] = None
    next_key: Optional[str] = None
    reverse_order: bool = False
    phase: Phase = Phase.INITIAL
    error: Optional[Exception] = None
