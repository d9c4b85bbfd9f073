from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, TypedDict

from requests.structures import CaseInsensitiveDict


@dataclass
class TransportResponse:
    """What a transport hands back for one GET request."""
    status: int
    headers: Mapping[str, str] = field(default_factory=CaseInsensitiveDict)
    body: Any = None

    def __post_init__(self) -> None:
        if not isinstance(self.headers, CaseInsensitiveDict):
            self.headers = CaseInsensitiveDict(self.headers or {})

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


# Async callable taking a request path (with query string) and returning the response
Transport = Callable[[str], Awaitable[TransportResponse]]


# Entity payloads are opaque beyond their filterable fields
FlowType = Dict[str, Any]
SourceType = Dict[str, Any]


class ServiceInfoResponseType(TypedDict, total=False):
    """Response of GET /service."""
    type: str
    api_version: str
    service_version: str
    media_store: Dict[str, Any]
    event_stream_mechanisms: List[Dict[str, Any]]
    name: Optional[str]
    description: Optional[str]
