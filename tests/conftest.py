"""Pytest configuration and fixtures."""

import json
from typing import Any, Callable, List

import httpx
import pytest

from propstack_mcp.client import PropStackClient

TEST_API_KEY = "test-key-12345"


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


def json_response(payload: Any, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, content=json.dumps(payload).encode())

    return handler


@pytest.fixture
def make_client() -> Callable[..., tuple]:
    """Build a client whose HTTP calls are answered by the given handler."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]):
        transport = RecordingTransport(handler)
        return PropStackClient(api_key=TEST_API_KEY, transport=transport), transport

    return factory


@pytest.fixture
def summary_unit() -> dict:
    """Unit as returned without expand=1."""
    return {
        "id": 2071903,
        "unit_id": "2071903",
        "name": "Stadtwohnung Mitte",
        "title": {"label": "Titel", "value": "Helle 3-Zimmer-Wohnung"},
        "city": "München",
        "street": "Leopoldstraße",
        "house_number": "12a",
        "status": {
            "id": 133880,
            "name": "Vermarktung",
            "color": "#00ff00",
            "position": 3,
            "nonpublic": False,
        },
        "price": {"label": "Kaufpreis", "value": 450000},
        "living_space": 78.5,
        "number_of_rooms": {"label": "Zimmer", "value": 3},
        "lat": 48.1545678,
        "lng": 11.5812345,
        "images": [{"url": "https://img.example/1.jpg"}],
    }


@pytest.fixture
def detail_unit() -> dict:
    """Unit as returned with expand=1."""
    return {
        "id": 100,
        "unit_id": "100",
        "name": "Villa am See",
        "title": "Villa am See",
        "city": "Starnberg",
        "street": "Seestraße",
        "property_status": {
            "id": 133881,
            "name": "Reserviert",
            "color": "#ffff00",
            "position": 4,
            "nonpublic": False,
        },
        "price": 1250000,
        "lat": 47.9987654,
        "lng": 11.3401234,
        "broker": {"id": 7, "name": "Max Makler"},
        "openimmo_email": "max@makler.example",
        "openimmo_firstname": "Max",
        "openimmo_lastname": "Makler",
        "openimmo_phone": "+49 89 123456",
        "images": [{"url": "https://img.example/villa.jpg"}],
        "documents": [{"url": "https://doc.example/expose.pdf"}],
        "videos": [],
        "360_views": [],
    }
