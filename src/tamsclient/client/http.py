import asyncio
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import requests
from requests.structures import CaseInsensitiveDict

from ..errors import NetworkError, TAMSError
from ..paging import check_response
from ..types.responses import Transport, TransportResponse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = 'http://localhost:8000'
DEFAULT_TIMEOUT = 10


class HTTPClient:
    """GET-only transport for the TAMS API, built on requests."""

    def __init__(self, opts: Optional[Dict[str, Any]] = None):
        opts = opts or {}
        self.base_url = opts.get('baseUrl', DEFAULT_BASE_URL).rstrip('/')
        self.timeout = opts.get('timeout', DEFAULT_TIMEOUT)
        self.extra_headers: Dict[str, str] = dict(opts.get('headers') or {})
        self.fetch: Optional[Transport] = opts.get('fetch')

    def _headers(self) -> Dict[str, str]:
        """Build headers for a request."""
        headers: Dict[str, str] = {'Accept': 'application/json'}
        headers.update(self.extra_headers)
        return headers

    async def request(self, path: str) -> TransportResponse:
        """
        Perform a GET request against the configured base URL.
        The body is parsed JSON when Content-Type is application/json, otherwise text.

        Args:
            path: request path including the query string, e.g. '/flows?limit=10'

        Raises:
            ApiError: on a non-2xx response
            NetworkError: when the request cannot be performed
        """
        if self.fetch:
            try:
                response = await self.fetch(path)
            except TAMSError:
                raise
            except Exception as e:
                raise NetworkError(f'Request failed: {e}') from e
            return check_response(response)

        url = f"{self.base_url}{path}"
        logger.debug("GET %s", url)
        try:
            raw = await asyncio.to_thread(
                requests.get,
                url,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise NetworkError(f'Request failed: {e}') from e

        return check_response(self._to_response(raw))

    __call__ = request

    @staticmethod
    def _to_response(raw: requests.Response) -> TransportResponse:
        content_type = raw.headers.get('content-type', '')
        body: Any = None
        if raw.status_code != 204:
            if 'application/json' in content_type:
                try:
                    body = raw.json()
                except ValueError:
                    body = raw.text
            else:
                body = raw.text
        return TransportResponse(status=raw.status_code, headers=CaseInsensitiveDict(raw.headers), body=body)

    @staticmethod
    def encode_url_component(component: str) -> str:
        """Encode URL component (similar to encodeURIComponent in JS).

        Args:
            component: String to encode

        Returns:
            URL-encoded string
        """
        return quote(component, safe='')
