"""
Error classes for the TAMS Python client.

Every error raised by the client derives from TAMSError.
"""

from typing import Any, Dict, Optional


class TAMSError(Exception):
    """Base exception class for the TAMS client."""

    def __init__(self, message: str):
        """Initialize TAMS error.

        Args:
            message: Error message
        """
        super().__init__(message)
        self.message = message


class ParseError(TAMSError):
    """Malformed timerange string or Link header."""


class ValidationError(TAMSError):
    """Invalid filter set or timerange bounds."""


class NetworkError(TAMSError):
    """Transport failure (connection error, DNS failure, timeout, etc.)."""


class ApiError(NetworkError):
    """Non-2xx response, with status code and response details."""

    def __init__(self, status_code: int, response: Optional[Dict[str, Any]] = None):
        """Initialize API error.

        Args:
            status_code: HTTP status code
            response: Error response from API, if any
        """
        response = response or {}
        message = response.get('error', f'HTTP {status_code}')
        if 'message' in response:
            message = f"{message}: {response['message']}"
        super().__init__(message)
        self.status_code = status_code
        self.response = response


class UnexpectedFormatError(TAMSError):
    """Response body is neither a bare list nor a {"data": [...]} wrapper."""


class ConcurrentOperationError(TAMSError):
    """Navigation attempted while another one is still in flight."""
