"""Objects service for the TAMS Python client."""

from typing import TYPE_CHECKING, Optional

from ..paginator import CursorPaginator
from ..paging import to_page
from ..query import build_path
from ..types.pagination import NormalizedPage
from ..types.queries import FilterSetType

if TYPE_CHECKING:
    from ..client.http import HTTPClient


class ObjectsService:
    """Service for media object listings."""

    def __init__(self, http_client: "HTTPClient") -> None:
        self.http_client = http_client

    async def list_objects(self, filters: Optional[FilterSetType] = None) -> NormalizedPage:
        response = await self.http_client.request(build_path("/objects", filters or {}))
        return to_page(response)

    def paginate_objects(self, filters: Optional[FilterSetType] = None) -> CursorPaginator:
        return CursorPaginator(self.http_client, "/objects", filters)
