"""
Response handling shared by the paginator and the services.

Turns transport responses into NormalizedPage objects: status check,
body shape normalization and X-Paging-* / Link header parsing.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .errors import ApiError, UnexpectedFormatError
from .link_header import extract_cursor, links_by_relation, parse_link_header
from .types.pagination import NormalizedPage, PagingMeta
from .types.responses import TransportResponse

logger = logging.getLogger(__name__)

RELATIONS = ('next', 'prev', 'first', 'last')


def parse_paging_headers(headers: Mapping[str, str]) -> PagingMeta:
    """Read the Link and X-Paging-* headers of a response.

    Args:
        headers: Response headers (case-insensitive mapping)

    Returns:
        Paging metadata; absent or malformed numeric headers are left as None
    """
    return PagingMeta(
        links=parse_link_header(headers.get('Link')),
        limit=_int_header(headers, 'X-Paging-Limit'),
        count=_int_header(headers, 'X-Paging-Count'),
        next_key=headers.get('X-Paging-NextKey') or None,
        prev_key=headers.get('X-Paging-PrevKey') or None,
        first_key=headers.get('X-Paging-FirstKey') or None,
        last_key=headers.get('X-Paging-LastKey') or None,
        timerange=headers.get('X-Paging-Timerange') or None,
        reverse_order=(headers.get('X-Paging-ReverseOrder') or '').lower() == 'true',
    )


def navigation_cursors(meta: PagingMeta) -> Tuple[Optional[str], Optional[str], Optional[str], Optional[str]]:
    """Resolve the (next, prev, first, last) cursors of a page.

    The Link relation's page cursor is preferred; the matching
    X-Paging-*Key header is the fallback.
    """
    indexed = links_by_relation(meta.links)
    fallbacks = (meta.next_key, meta.prev_key, meta.first_key, meta.last_key)
    cursors = []
    for relation, fallback in zip(RELATIONS, fallbacks):
        entry = indexed.get(relation)
        cursor = extract_cursor(entry.url) if entry else None
        cursors.append(cursor or fallback)
    return tuple(cursors)  # type: ignore[return-value]


def normalize_items(body: Any) -> Tuple[List[Any], str]:
    """Accept a bare list or a {"data": [...]} wrapper.

    Raises:
        UnexpectedFormatError: If the body has neither shape
    """
    if isinstance(body, list):
        return body, 'bare'
    if isinstance(body, dict) and isinstance(body.get('data'), list):
        return body['data'], 'wrapped'
    raise UnexpectedFormatError(
        f'expected a list or an object with a "data" list, got {type(body).__name__}'
    )


def check_response(response: TransportResponse) -> TransportResponse:
    """Raise ApiError for non-2xx responses."""
    if response.ok:
        return response
    body = response.body
    if isinstance(body, dict):
        raise ApiError(response.status, body)
    details = {'error': f'HTTP {response.status}'}
    if body:
        details['message'] = str(body)
    raise ApiError(response.status, details)


def to_page(response: TransportResponse) -> NormalizedPage:
    """Normalize a successful list response into a NormalizedPage."""
    check_response(response)
    items, shape = normalize_items(response.body)
    return NormalizedPage(items=items, shape=shape, meta=parse_paging_headers(response.headers))


def _int_header(headers: Mapping[str, str], name: str) -> Optional[int]:
    value = headers.get(name)
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        logger.debug("Ignoring non-integer %s header: %r", name, value)
        return None


def unwrap_entity(body: Any) -> Dict[str, Any]:
    """Return a single entity from a bare or {"data": {...}} body.

    Raises:
        UnexpectedFormatError: If the body is not a JSON object
    """
    if isinstance(body, dict) and isinstance(body.get('data'), dict):
        return body['data']
    if isinstance(body, dict):
        return body
    raise UnexpectedFormatError(f'expected a JSON object, got {type(body).__name__}')
