"""Pytest configuration to make the local package importable without installation."""
import json
import sys
from pathlib import Path
from typing import Any, List

import pytest
import requests

# Ensure repository root is on sys.path for module resolution
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from hotelstream.api.server import Runtime, create_app
from hotelstream.core.config import Settings
from hotelstream.processing.client import StreamClient


def make_response(body: Any, status: int = 200) -> requests.Response:
    """Build a real ``requests.Response`` carrying a JSON body."""

    response = requests.Response()
    response.status_code = status
    response._content = b"" if body is None else json.dumps(body).encode("utf-8")
    response.encoding = "utf-8"
    response.url = "http://pms.test"
    return response


class FakeSession:
    """Stand-in for ``requests.Session`` that replays queued responses."""

    def __init__(self, responses: List[Any] | None = None) -> None:
        self.responses = list(responses or [])
        self.calls: List[str] = []
        self.headers: dict = {}
        self.auth = None

    def queue(self, item: Any) -> None:
        self.responses.append(item)

    def get(self, url: str, timeout: float | None = None) -> requests.Response:
        self.calls.append(url)
        item = self.responses.pop(0) if self.responses else make_response([])
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep a developer's .env and LOG_LEVEL out of the tests."""

    monkeypatch.setenv("HOTELSTREAM_ENV_FILE", str(tmp_path / "missing.env"))
    monkeypatch.delenv("LOG_LEVEL", raising=False)


@pytest.fixture
def stream_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def stats_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        host_url="http://pms.test",
        app_id="app",
        api_password="secret",
        stats_app_id="stats-app",
        stats_api_password="stats-secret",
        polling_enabled=False,
    )


@pytest.fixture
def runtime(settings: Settings, stream_session: FakeSession, stats_session: FakeSession) -> Runtime:
    """A runtime whose clients talk to fake sessions instead of the network."""

    return Runtime(
        settings,
        stream_client=StreamClient(settings.host_url, settings.app_id, settings.api_password, session=stream_session),
        stats_client=StreamClient(
            settings.host_url, settings.stats_app_id, settings.stats_api_password, session=stats_session
        ),
    )


@pytest.fixture
def api_client(runtime: Runtime):
    from fastapi.testclient import TestClient

    with TestClient(create_app(runtime)) as client:
        yield client


@pytest.fixture
def stats_snapshot_event() -> dict:
    """A stats-stream event in the nested ``statistics`` format."""

    return {
        "event_id": "S1",
        "type": "STATISTICS",
        "timestamp": "2025-01-01T06:00:00Z",
        "property_id": "P1",
        "property_code": "EXEC",
        "stream_id": "stream-1",
        "stream_name": "stats",
        "timezone": "America/New_York",
        "statistics": {
            "room_sold": 42,
            "average_daily_rate": 129.5,
            "occupancy_percent_for_tomorrow": 71.2,
            "vendor_specific": "x",
        },
        "change_events": [{"field": "room_sold", "old": 41, "new": 42}],
    }


@pytest.fixture
def reservation_payload() -> dict:
    return {
        "event_type": "RESERVATION",
        "event_id": "E1",
        "event_time": "2025-01-01T10:00:00Z",
        "property_id": "P1",
        "reservation": {
            "id": "R1",
            "reservation_no": "CN1",
            "status": "CONFIRMED",
            "guest_info": {"first_name": "Jane", "last_name": "Doe", "email": "jane@example.com"},
            "room_number": "101",
            "check_in_date": "2025-01-01",
            "check_out_date": "2025-01-03",
            "adult_count": 2,
            "child_count": 0,
        },
    }
