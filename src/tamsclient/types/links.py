from dataclasses import dataclass, field
from typing import Mapping


@dataclass(frozen=True)
class LinkEntry:
    """One relation of an RFC 5988 Link header."""
    relation: str
    url: str
    params: Mapping[str, str] = field(default_factory=dict)
