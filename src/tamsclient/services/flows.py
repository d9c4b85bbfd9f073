"""Flows service for the TAMS Python client."""

from typing import TYPE_CHECKING, Optional

from ..paginator import CursorPaginator
from ..paging import to_page, unwrap_entity
from ..query import build_path
from ..types.pagination import NormalizedPage
from ..types.queries import FilterSetType
from ..types.responses import FlowType

if TYPE_CHECKING:
    from ..client.http import HTTPClient


class FlowsService:
    """Service for flow and flow segment listings."""

    def __init__(self, http_client: "HTTPClient") -> None:
        """Initialize flows service.

        Args:
            http_client: HTTP client instance
        """
        self.http_client = http_client

    async def list_flows(self, filters: Optional[FilterSetType] = None) -> NormalizedPage:
        """Fetch one page of flows.

        Args:
            filters: Optional filters (label, format, codec, tags, tag_exists,
                timerange, limit, cursor)

        Returns:
            Page of flows with its paging metadata
        """
        response = await self.http_client.request(build_path("/flows", filters or {}))
        return to_page(response)

    def paginate_flows(self, filters: Optional[FilterSetType] = None) -> CursorPaginator:
        """Create a paginator over GET /flows for the given filters."""
        return CursorPaginator(self.http_client, "/flows", filters)

    async def get_flow(self, flow_id: str) -> FlowType:
        """Retrieve a flow by id.

        Args:
            flow_id: Flow id

        Returns:
            Flow data
        """
        encoded_id = self.http_client.encode_url_component(flow_id)
        response = await self.http_client.request(f"/flows/{encoded_id}")
        return unwrap_entity(response.body)

    async def list_flow_segments(self, flow_id: str, filters: Optional[FilterSetType] = None) -> NormalizedPage:
        """Fetch one page of segments of a flow.

        Args:
            flow_id: Flow id
            filters: Optional filters (timerange, limit, cursor)

        Returns:
            Page of segments with its paging metadata
        """
        response = await self.http_client.request(build_path(self._segments_path(flow_id), filters or {}))
        return to_page(response)

    def paginate_flow_segments(self, flow_id: str, filters: Optional[FilterSetType] = None) -> CursorPaginator:
        """Create a paginator over the segments of a flow."""
        return CursorPaginator(self.http_client, self._segments_path(flow_id), filters)

    def _segments_path(self, flow_id: str) -> str:
        return f"/flows/{self.http_client.encode_url_component(flow_id)}/segments"
