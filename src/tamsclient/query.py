"""
Query string builder for the TAMS Python client.

The output is canonical: parameters are sorted by name and every key and
value is percent-encoded per RFC 3986, so equal filters always produce
byte-identical query strings.
"""

from typing import List, Optional, Tuple
from urllib.parse import quote

from . import timerange as timerange_codec
from .types.queries import FilterSetType
from .utils.validation import validate_filter_set


def build_query(filters: FilterSetType) -> str:
    """Build the canonical query string for a filter set.

    Args:
        filters: Filter set (label, format, codec, tags, tag_exists,
            timerange, limit, cursor, custom)

    Returns:
        Query string without the leading "?" (empty if nothing to send)

    Raises:
        ValidationError: If the filter set is invalid
        ParseError: If timerange is a string that does not parse
    """
    validate_filter_set(filters)

    params: List[Tuple[str, str]] = []
    for name in ('label', 'format', 'codec'):
        if filters.get(name):
            params.append((name, filters[name]))
    if filters.get('limit') is not None:
        params.append(('limit', str(filters['limit'])))
    if filters.get('cursor'):
        params.append(('page', filters['cursor']))

    timerange = filters.get('timerange')
    if timerange is not None:
        if isinstance(timerange, str):
            timerange = timerange_codec.parse(timerange)
        serialized = timerange_codec.serialize(timerange)
        if serialized:
            params.append(('timerange', serialized))

    for key, value in (filters.get('tags') or {}).items():
        params.append((f'tag.{_encode(key)}', value))
    for key in filters.get('tag_exists') or ():
        params.append((f'tag_exists.{_encode(key)}', 'true'))
    for key, value in (filters.get('custom') or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = 'true' if value else 'false'
        params.append((_encode(key), str(value)))

    params.sort(key=lambda param: param[0])
    return '&'.join(f'{name}={_encode(value)}' for name, value in params)


def build_path(path: str, filters: FilterSetType) -> str:
    """Append the query string for filters to path, if there is one."""
    query_string = build_query(filters)
    return f"{path}{f'?{query_string}' if query_string else ''}"


def with_cursor(filters: FilterSetType, cursor: Optional[str]) -> FilterSetType:
    """Return a copy of filters pointing at cursor (or at no cursor)."""
    updated: FilterSetType = dict(filters)  # type: ignore[assignment]
    if cursor is None:
        updated.pop('cursor', None)
    else:
        updated['cursor'] = cursor
    return updated


def _encode(value: str) -> str:
    return quote(value, safe='')
