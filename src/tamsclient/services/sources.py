"""Sources service for the TAMS Python client."""

from typing import TYPE_CHECKING, Optional

from ..paginator import CursorPaginator
from ..paging import to_page, unwrap_entity
from ..query import build_path
from ..types.pagination import NormalizedPage
from ..types.queries import FilterSetType
from ..types.responses import SourceType

if TYPE_CHECKING:
    from ..client.http import HTTPClient


class SourcesService:
    """Service for source listings."""

    def __init__(self, http_client: "HTTPClient") -> None:
        self.http_client = http_client

    async def list_sources(self, filters: Optional[FilterSetType] = None) -> NormalizedPage:
        """Fetch one page of sources."""
        response = await self.http_client.request(build_path("/sources", filters or {}))
        return to_page(response)

    def paginate_sources(self, filters: Optional[FilterSetType] = None) -> CursorPaginator:
        """Create a paginator over GET /sources for the given filters."""
        return CursorPaginator(self.http_client, "/sources", filters)

    async def get_source(self, source_id: str) -> SourceType:
        """Retrieve a source by id."""
        encoded_id = self.http_client.encode_url_component(source_id)
        response = await self.http_client.request(f"/sources/{encoded_id}")
        return unwrap_entity(response.body)
