"""Service information endpoint for the TAMS Python client."""

from typing import TYPE_CHECKING

from ..paging import unwrap_entity
from ..types.responses import ServiceInfoResponseType

if TYPE_CHECKING:
    from ..client.http import HTTPClient


class ServiceInfoService:
    """Service for the GET /service endpoint."""

    def __init__(self, http_client: "HTTPClient") -> None:
        """Initialize service info service.

        Args:
            http_client: HTTP client instance
        """
        self.http_client = http_client

    async def get_service(self) -> ServiceInfoResponseType:
        """Fetch service information.

        Returns:
            Parsed JSON object from GET /service
        """
        response = await self.http_client.request("/service")
        return unwrap_entity(response.body)
