"""
TAMS Python client

Client-side contract for a Time-Addressable Media Store (TAMS) REST API.
- Canonical timerange encoding (tamsclient.timerange)
- RFC 5988 Link header parsing (tamsclient.link_header)
- Deterministic query strings for filter sets (tamsclient.query)
- Cursor-based pagination with back/forward history (CursorPaginator)
"""

from typing import Optional

# Export all types
from .types import (
    # Common types
    SDKOptionsType as SDKOptions,

    # Timerange
    Timerange,

    # Query types
    FilterSetType as FilterSet,

    # Pagination types
    LinkEntry,
    NormalizedPage,
    PagingMeta,
    PaginationState,
    Phase,

    # Response types
    FlowType,
    ServiceInfoResponseType as ServiceInfoResponse,
    SourceType,
    Transport,
    TransportResponse,
)

from .errors import (
    TAMSError,
    ParseError,
    ValidationError,
    NetworkError,
    ApiError,
    UnexpectedFormatError,
    ConcurrentOperationError,
)

from .link_header import extract_cursor, links_by_relation, parse_link_header
from .paginator import CursorPaginator
from .query import build_path, build_query, with_cursor
from . import timerange

# Import internal modules
from .client.http import HTTPClient
from .services.flows import FlowsService
from .services.objects import ObjectsService
from .services.service import ServiceInfoService
from .services.sources import SourcesService


class TAMSClient:
    """TAMS Python client for the read-only listing endpoints."""

    def __init__(self, options: Optional[SDKOptions] = None) -> None:
        """Create a new TAMSClient.

        Args:
            options: SDK options including baseUrl, timeout, headers and fetch
        """
        if options is None:
            options = {}

        self.http_client = HTTPClient(options)
        self.flows_service = FlowsService(self.http_client)
        self.sources_service = SourcesService(self.http_client)
        self.objects_service = ObjectsService(self.http_client)
        self.service_info_service = ServiceInfoService(self.http_client)

        self.base_url = self.http_client.base_url

    # Service information
    async def get_service(self) -> ServiceInfoResponse:
        """Fetch service information from GET /service."""
        return await self.service_info_service.get_service()

    # Flows
    async def list_flows(self, filters: Optional[FilterSet] = None) -> NormalizedPage:
        """Fetch one page of flows.

        Args:
            filters: Optional filter set

        Returns:
            Page of flows
        """
        return await self.flows_service.list_flows(filters)

    def paginate_flows(self, filters: Optional[FilterSet] = None) -> CursorPaginator:
        """Create a paginator over flows."""
        return self.flows_service.paginate_flows(filters)

    async def get_flow(self, flow_id: str) -> FlowType:
        """Retrieve a flow by id."""
        return await self.flows_service.get_flow(flow_id)

    async def list_flow_segments(self, flow_id: str, filters: Optional[FilterSet] = None) -> NormalizedPage:
        """Fetch one page of segments of a flow.

        Args:
            flow_id: Flow id
            filters: Optional filter set (timerange, limit, cursor)

        Returns:
            Page of segments
        """
        return await self.flows_service.list_flow_segments(flow_id, filters)

    def paginate_flow_segments(self, flow_id: str, filters: Optional[FilterSet] = None) -> CursorPaginator:
        """Create a paginator over the segments of a flow."""
        return self.flows_service.paginate_flow_segments(flow_id, filters)

    # Sources
    async def list_sources(self, filters: Optional[FilterSet] = None) -> NormalizedPage:
        """Fetch one page of sources."""
        return await self.sources_service.list_sources(filters)

    def paginate_sources(self, filters: Optional[FilterSet] = None) -> CursorPaginator:
        """Create a paginator over sources."""
        return self.sources_service.paginate_sources(filters)

    async def get_source(self, source_id: str) -> SourceType:
        """Retrieve a source by id."""
        return await self.sources_service.get_source(source_id)

    # Objects
    async def list_objects(self, filters: Optional[FilterSet] = None) -> NormalizedPage:
        """Fetch one page of media objects."""
        return await self.objects_service.list_objects(filters)

    def paginate_objects(self, filters: Optional[FilterSet] = None) -> CursorPaginator:
        """Create a paginator over media objects."""
        return self.objects_service.paginate_objects(filters)


__all__ = [
    # Main client
    "TAMSClient",
    "HTTPClient",
    "CursorPaginator",

    # Codecs and builders
    "timerange",
    "parse_link_header",
    "links_by_relation",
    "extract_cursor",
    "build_query",
    "build_path",
    "with_cursor",

    # Types
    "SDKOptions",
    "Timerange",
    "FilterSet",
    "LinkEntry",
    "NormalizedPage",
    "PagingMeta",
    "PaginationState",
    "Phase",
    "FlowType",
    "ServiceInfoResponse",
    "SourceType",
    "Transport",
    "TransportResponse",

    # Errors
    "TAMSError",
    "ParseError",
    "ValidationError",
    "NetworkError",
    "ApiError",
    "UnexpectedFormatError",
    "ConcurrentOperationError",
]
