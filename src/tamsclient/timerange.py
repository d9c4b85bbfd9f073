"""
Timerange codec for the TAMS Python client.

Wire format: "<start_sec>:<start_nanos>_<end_sec>:<end_nanos>". Either side
may be left empty to mark it unbounded; the empty string matches everything.
"""

import re
from typing import Tuple

from .errors import ParseError, ValidationError
from .types.timerange import NANOS_PER_SECOND, Timerange

_TIMESTAMP = re.compile(r'(-?[0-9]+)(?::(-?[0-9]+))?')
_INFINITE_ENDS = ('inf', '∞')


def parse(raw: str) -> Timerange:
    """Parse a timerange string.

    Accepts the canonical form plus a few lenient spellings: a timestamp
    without nanoseconds ("10" is 10:0), a single timestamp without "_"
    (start-only, unbounded end) and "inf" or "∞" as an unbounded end.

    Args:
        raw: Timerange string

    Returns:
        Parsed Timerange

    Raises:
        ParseError: If the string is not a valid timerange
    """
    if not isinstance(raw, str):
        raise ParseError(f'timerange must be a string, got {type(raw).__name__}')
    if raw.count('_') > 1:
        raise ParseError(f'timerange {raw!r} contains more than one "_"')

    start_part, _, end_part = raw.partition('_')
    if end_part in _INFINITE_ENDS:
        end_part = ''

    start = _parse_timestamp(start_part, raw) if start_part else None
    end = _parse_timestamp(end_part, raw) if end_part else None

    try:
        return Timerange(
            start_seconds=start[0] if start else 0,
            start_nanos=start[1] if start else 0,
            end_seconds=end[0] if end else 0,
            end_nanos=end[1] if end else 0,
            start_unbounded=start is None,
            end_unbounded=end is None,
        )
    except ValidationError as e:
        raise ParseError(f'invalid timerange {raw!r}: {e.message}') from e


def serialize(timerange: Timerange) -> str:
    """Serialize a Timerange to its minimal canonical string."""
    start = '' if timerange.start_unbounded else f'{timerange.start_seconds}:{timerange.start_nanos}'
    end = '' if timerange.end_unbounded else f'{timerange.end_seconds}:{timerange.end_nanos}'
    if not start and not end:
        return ''
    return f'{start}_{end}'


def canonical_form(raw: str) -> str:
    """Return the canonical spelling of a timerange string."""
    return serialize(parse(raw))


def _parse_timestamp(part: str, raw: str) -> Tuple[int, int]:
    match = _TIMESTAMP.fullmatch(part)
    if match is None:
        raise ParseError(f'invalid timestamp {part!r} in timerange {raw!r}')
    seconds = int(match.group(1))
    nanos = int(match.group(2)) if match.group(2) is not None else 0
    if '-' in part:
        raise ParseError(f'negative component in timerange {raw!r}')
    if nanos >= NANOS_PER_SECOND:
        raise ParseError(f'nanosecond component {nanos} in timerange {raw!r} is not below 1e9')
    return seconds, nanos
