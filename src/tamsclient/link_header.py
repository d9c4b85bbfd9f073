"""
RFC 5988 Link header parsing for the TAMS Python client.

Parsing is lenient by default: an entry that cannot be parsed is logged and
skipped, and the remaining entries are still returned.
"""

import logging
import re
from typing import Dict, Iterable, List, Optional
from urllib.parse import parse_qs, urlsplit

from .errors import ParseError
from .types.links import LinkEntry

logger = logging.getLogger(__name__)

_QUOTED_PAIR = re.compile(r'\\(.)')


def parse_link_header(header_value: Optional[str], strict: bool = False) -> List[LinkEntry]:
    """Parse a Link header value into its entries, in header order.

    Args:
        header_value: Raw Link header value (None or empty yields no entries)
        strict: Raise on the first malformed entry instead of skipping it

    Returns:
        Parsed entries; a rel listing several relation types yields one
        entry per relation

    Raises:
        ParseError: In strict mode, if any entry is malformed
    """
    if not header_value:
        return []

    entries: List[LinkEntry] = []
    for raw_entry in _split_unquoted(header_value, ','):
        if not raw_entry.strip():
            continue
        try:
            entries.extend(_parse_entry(raw_entry.strip()))
        except ParseError as e:
            if strict:
                raise
            logger.warning("Skipping malformed Link header entry %r: %s", raw_entry.strip(), e.message)
    return entries


def links_by_relation(entries: Iterable[LinkEntry]) -> Dict[str, LinkEntry]:
    """Index entries by relation; the last entry for a relation wins."""
    indexed: Dict[str, LinkEntry] = {}
    for entry in entries:
        indexed[entry.relation] = entry
    return indexed


def extract_cursor(url: str) -> Optional[str]:
    """Return the opaque cursor held in the "page" query parameter of url.

    Args:
        url: Absolute or relative URL

    Returns:
        Cursor token, or None if the URL has no non-empty page parameter
    """
    values = parse_qs(urlsplit(url).query).get('page')
    return values[0] if values else None


def _parse_entry(entry: str) -> List[LinkEntry]:
    if not entry.startswith('<'):
        raise ParseError('entry does not start with <url>')
    close = entry.find('>')
    if close == -1:
        raise ParseError('unterminated <url>')
    url = entry[1:close].strip()
    if not url or '<' in url:
        raise ParseError(f'invalid target URL {url!r}')

    rest = entry[close + 1:].strip()
    if rest and not rest.startswith(';'):
        raise ParseError('expected ";" after <url>')

    relations: Optional[List[str]] = None
    params: Dict[str, str] = {}
    for segment in _split_unquoted(rest[1:], ';') if rest else []:
        segment = segment.strip()
        if not segment:
            continue
        key, sep, value = segment.partition('=')
        key = key.strip().lower()
        if not key or not sep:
            raise ParseError(f'malformed parameter {segment!r}')
        value = _unquote(value.strip())
        if key == 'rel':
            # Only the first rel parameter counts (RFC 5988 section 5.3)
            if relations is None:
                relations = value.lower().split()
        else:
            params[key] = value

    if not relations:
        raise ParseError('missing rel parameter')
    return [LinkEntry(relation=relation, url=url, params=dict(params)) for relation in relations]


def _unquote(value: str) -> str:
    if not value.startswith('"'):
        return value
    if len(value) < 2 or not value.endswith('"'):
        raise ParseError(f'unterminated quoted value {value!r}')
    return _QUOTED_PAIR.sub(r'\1', value[1:-1])


def _split_unquoted(value: str, separator: str) -> List[str]:
    """Split on separator, ignoring occurrences inside <...> or quotes."""
    parts: List[str] = []
    current: List[str] = []
    in_quotes = in_brackets = escaped = False
    for char in value:
        if escaped:
            escaped = False
        elif in_quotes and char == '\\':
            escaped = True
        elif char == '"' and not in_brackets:
            in_quotes = not in_quotes
        elif char == '<' and not in_quotes:
            in_brackets = True
        elif char == '>' and not in_quotes:
            in_brackets = False
        elif char == separator and not in_quotes and not in_brackets:
            parts.append(''.join(current))
            current = []
            continue
        current.append(char)
    parts.append(''.join(current))
    return parts
