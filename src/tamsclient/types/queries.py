from typing import Any, Collection, Mapping, TypedDict, Union

from .timerange import Timerange


class FilterSetType(TypedDict, total=False):
    """Filters accepted by every TAMS list endpoint."""
    label: str
    format: str  # URN, e.g. "urn:x-nmos:format:video"
    codec: str
    tags: Mapping[str, str]  # exact-match tag filters
    tag_exists: Collection[str]  # key-presence-only tag filters
    timerange: Union[Timerange, str]
    limit: int
    cursor: str  # sent as "page"
    custom: Mapping[str, Any]  # backend-specific extra parameters
