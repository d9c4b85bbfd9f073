"""Shared fixtures: an in-memory transport serving three pages of flows."""

import asyncio
from typing import Dict, List, Optional, Union
from urllib.parse import parse_qs, urlsplit

import pytest

from tamsclient import TransportResponse

BASE = "http://tams.test"


def flows_link(cursor: Optional[str], rel: str) -> str:
    page = f"&page={cursor}" if cursor else ""
    return f'<{BASE}/flows?limit=2{page}>; rel="{rel}"'


class FakeTransport:
    """Serves canned responses keyed by the page cursor of the request."""

    def __init__(self, pages: Dict[Optional[str], Union[TransportResponse, Exception]]):
        self.pages = pages
        self.calls: List[str] = []
        self.gate: Optional[asyncio.Event] = None

    async def __call__(self, path: str) -> TransportResponse:
        self.calls.append(path)
        if self.gate is not None:
            await self.gate.wait()
        cursor = parse_qs(urlsplit(path).query).get("page", [None])[0]
        response = self.pages[cursor]
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def flow_pages() -> Dict[Optional[str], Union[TransportResponse, Exception]]:
    return {
        None: TransportResponse(
            200,
            {
                "Link": ", ".join([flows_link("c2", "next"), flows_link("c3", "last")]),
                "X-Paging-Limit": "2",
                "X-Paging-Count": "6",
            },
            [{"id": "f1"}, {"id": "f2"}],
        ),
        "c2": TransportResponse(
            200,
            {
                "Link": ", ".join([flows_link("c3", "next"), flows_link(None, "prev")]),
                "X-Paging-Limit": "2",
                "X-Paging-Count": "6",
            },
            {"data": [{"id": "f3"}, {"id": "f4"}]},
        ),
        "c3": TransportResponse(
            200,
            {
                "Link": flows_link("c2", "prev"),
                "X-Paging-Limit": "2",
                "X-Paging-Count": "6",
                "X-Paging-Timerange": "0:0_60:0",
            },
            [{"id": "f5"}, {"id": "f6"}],
        ),
    }


@pytest.fixture
def transport(flow_pages) -> FakeTransport:
    return FakeTransport(flow_pages)
