from typing import Dict, TypedDict

from .responses import Transport


class SDKOptionsType(TypedDict, total=False):
    baseUrl: str
    timeout: float  # seconds, passed to requests
    headers: Dict[str, str]  # extra headers sent with every request
    fetch: Transport  # replaces the built-in requests transport
