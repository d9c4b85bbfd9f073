"""Services module for the TAMS Python client."""

from .flows import FlowsService
from .objects import ObjectsService
from .service import ServiceInfoService
from .sources import SourcesService

__all__ = ["FlowsService", "ObjectsService", "ServiceInfoService", "SourcesService"]
