from typing import Any, Dict, Mapping

from ..errors import ValidationError
from ..types.timerange import Timerange

FILTER_FIELDS = frozenset(
    ['label', 'format', 'codec', 'tags', 'tag_exists', 'timerange', 'limit', 'cursor', 'custom']
)
RESERVED_PARAMS = frozenset(['label', 'format', 'codec', 'timerange', 'limit', 'page'])
RESERVED_PREFIXES = ('tag.', 'tag_exists.')


def validate_filter_set(filters: Dict[str, Any]) -> None:
    """Validate a filter set before it is turned into a query string.

    Raises:
        ValidationError: On unknown fields, wrongly typed values, a
            non-positive limit, or a key used in both tags and tag_exists
    """
    if not isinstance(filters, dict):
        raise ValidationError(f'filters must be a dict, got {type(filters).__name__}')

    unknown = sorted(set(filters) - FILTER_FIELDS)
    if unknown:
        raise ValidationError(f"unknown filter fields: {', '.join(unknown)}")

    for name in ('label', 'format', 'codec', 'cursor'):
        value = filters.get(name)
        if value is not None and not isinstance(value, str):
            raise ValidationError(f'{name} must be a string, got {type(value).__name__}')

    timerange = filters.get('timerange')
    if timerange is not None and not isinstance(timerange, (Timerange, str)):
        raise ValidationError(f'timerange must be a Timerange or a string, got {type(timerange).__name__}')

    limit = filters.get('limit')
    if limit is not None:
        if isinstance(limit, bool) or not isinstance(limit, int):
            raise ValidationError(f'limit must be an integer, got {limit!r}')
        if limit <= 0:
            raise ValidationError(f'limit must be positive, got {limit}')

    tags = filters.get('tags') or {}
    if not isinstance(tags, Mapping):
        raise ValidationError(f'tags must be a mapping, got {type(tags).__name__}')
    for key, value in tags.items():
        if not isinstance(key, str) or not key:
            raise ValidationError(f'tag keys must be non-empty strings, got {key!r}')
        if not isinstance(value, str):
            raise ValidationError(f'tag {key!r} must have a string value, got {type(value).__name__}')

    tag_exists = filters.get('tag_exists') or ()
    if isinstance(tag_exists, str):
        raise ValidationError('tag_exists must be a collection of keys, not a string')
    for key in tag_exists:
        if not isinstance(key, str) or not key:
            raise ValidationError(f'tag_exists keys must be non-empty strings, got {key!r}')

    shared = sorted(set(tags) & set(tag_exists))
    if shared:
        raise ValidationError(f"keys used in both tags and tag_exists: {', '.join(shared)}")

    for key in filters.get('custom') or {}:
        if not isinstance(key, str) or not key:
            raise ValidationError(f'custom parameter names must be non-empty strings, got {key!r}')
        if key in RESERVED_PARAMS or key.startswith(RESERVED_PREFIXES):
            raise ValidationError(f'custom parameter {key!r} collides with a reserved parameter')
