"""HTTP API behaviour against fake PMS sessions."""
import base64
import json
from pathlib import Path

import requests

from conftest import make_response
from hotelstream.storage.snapshots import SnapshotStore


def _basic(username: str, password: str) -> str:
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


def test_health(api_client):
    response = api_client.get("/health")

    assert response.status_code == 200
    assert response.text == "Hotel stream backend is running"


def test_stats_poll_then_queries(api_client, stats_session, stats_snapshot_event):
    stats_session.queue(
        make_response(
            [
                stats_snapshot_event,
                {"event_type": "FOLIO_BALANCE", "payload": {"guest_name": "Ann", "amount": 50.0}},
                {"event_type": "mystery"},
            ]
        )
    )

    polled = api_client.get("/api/stats/poll", params={"num": "3"})

    assert polled.status_code == 200
    body = polled.json()
    assert body["success"] is True
    assert [len(body["data"][bucket]) for bucket in ("stats", "balances", "raw")] == [1, 1, 1]
    assert stats_session.calls[-1].endswith("num_of_messages=3")

    stats = api_client.get("/api/stats").json()
    assert stats["count"] == 1
    assert stats["data"][0]["metrics"]["occupancy_percent_for_tomorrow"] == 71.2

    balances = api_client.get("/api/stats/balances").json()
    assert balances["data"][0]["guest_name"] == "Ann"
    assert balances["data"][0]["currency"] == "USD"

    summary = api_client.get("/api/stats/summary").json()
    assert (summary["stats_count"], summary["balances_count"], summary["raw_count"]) == (1, 1, 1)
    assert summary["last_updated"].endswith("Z")
    assert summary["latest_stats"][0]["id"] == "S1"
    assert summary["latest_balances"][0]["guest_name"] == "Ann"

    latest = api_client.get("/api/stats/latest", params={"limit": "bogus"}).json()
    assert latest["stats"]["count"] == 1
    assert latest["balances"]["count"] == 1


def test_stats_poll_uses_default_count_for_invalid_num(api_client, stats_session):
    api_client.get("/api/stats/poll", params={"num": "abc"})

    assert stats_session.calls[-1].endswith("num_of_messages=5")


def test_stream_poll_stores_reservations(api_client, stream_session, reservation_payload):
    stream_session.queue(make_response([{"payload": reservation_payload}]))

    polled = api_client.get("/api/stream/poll").json()

    assert polled == {"success": True, "count": 1, "data": polled["data"]}
    assert polled["data"][0]["data"]["guest_name"] == "Jane Doe"
    assert stream_session.calls[-1].endswith("num_of_messages=1")

    latest = api_client.get("/api/stream/latest").json()
    assert [event["event_id"] for event in latest] == ["E1"]


def test_stream_poll_failure_returns_500(api_client, stream_session):
    stream_session.queue(requests.ConnectionError("network unreachable"))

    response = api_client.get("/api/stream/poll")

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to poll data"}
    assert api_client.get("/api/stream/latest").json() == []


def test_stats_poll_failure_reports_error(api_client, stats_session):
    stats_session.queue(make_response({"error": "down"}, status=502))

    response = api_client.get("/api/stats/poll")

    assert response.status_code == 500
    assert response.json()["success"] is False
    assert api_client.get("/api/stats/summary").json()["stats_count"] == 0


def test_webhook_requires_authorization_header(api_client):
    response = api_client.post("/api/webhook", json={"payload": {"event_type": "A"}})

    assert response.status_code == 401
    assert api_client.get("/api/webhook/latest").json() == []


def test_webhook_accepts_any_header_when_unconfigured(api_client, reservation_payload):
    response = api_client.post(
        "/api/webhook",
        json=[{"payload": reservation_payload}],
        headers={"Authorization": "Basic anything"},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Events received"}
    latest = api_client.get("/api/webhook/latest").json()
    assert latest[0]["data"]["confirmation_number"] == "CN1"


def test_webhook_checks_configured_credentials(api_client, runtime):
    runtime.settings.webhook_username = "hook"
    runtime.settings.webhook_password = "s3cret"

    rejected = api_client.post(
        "/api/webhook", json={"payload": {}}, headers={"Authorization": _basic("hook", "wrong")}
    )
    accepted = api_client.post(
        "/api/webhook", json={"payload": {}}, headers={"Authorization": _basic("hook", "s3cret")}
    )

    assert rejected.status_code == 401
    assert accepted.status_code == 200
    assert len(api_client.get("/api/webhook/latest").json()) == 1


def test_webhook_rejects_non_ascii_credentials(api_client, runtime):
    runtime.settings.webhook_username = "hook"
    runtime.settings.webhook_password = "s3cret"

    response = api_client.post(
        "/api/webhook", json={"payload": {}}, headers={"Authorization": _basic("héllo", "x")}
    )

    assert response.status_code == 401
    assert api_client.get("/api/webhook/latest").json() == []


def test_webhook_accepts_non_ascii_configured_credentials(api_client, runtime):
    runtime.settings.webhook_username = "réception"
    runtime.settings.webhook_password = "clé"

    response = api_client.post(
        "/api/webhook", json={"payload": {}}, headers={"Authorization": _basic("réception", "clé")}
    )

    assert response.status_code == 200


def test_webhook_writes_snapshot_when_data_dir_set(api_client, runtime, tmp_path: Path, reservation_payload):
    runtime.snapshots = SnapshotStore(tmp_path)

    response = api_client.post(
        "/api/webhook", json={"payload": reservation_payload}, headers={"Authorization": "Basic anything"}
    )

    assert response.status_code == 200
    saved = json.loads((tmp_path / "webhook.json").read_text(encoding="utf-8"))
    assert saved[0]["event_id"] == "E1"


def test_stream_poll_access_denied_is_disabled_status(api_client, stream_session):
    stream_session.queue(make_response({"message": "forbidden"}, status=403))

    response = api_client.get("/api/stream/poll")

    assert response.status_code == 403
    body = response.json()
    assert body["success"] is False
    assert body["status"] == "DISABLED"


def test_stats_poll_access_denied_is_disabled_status(api_client, stats_session):
    stats_session.queue(make_response({"message": "unauthorized"}, status=401))

    response = api_client.get("/api/stats/poll")

    assert response.status_code == 403
    assert response.json()["status"] == "DISABLED"
    assert api_client.get("/api/stats/summary").json()["raw_count"] == 0


def test_inventory_access_denied_is_403(api_client, stream_session):
    stream_session.queue(make_response({"message": "forbidden"}, status=403))

    response = api_client.get("/api/inventory/rooms")

    assert response.status_code == 403
    assert response.json()["status"] == "DISABLED"


def test_inventory_summary(api_client, stream_session):
    stream_session.queue(
        make_response([{"status": "Occupied"}, {"housekeeping_status": "Dirty"}, {"status": "Vacant"}])
    )

    summary = api_client.get("/api/inventory/summary").json()

    assert summary == {"total_rooms": 3, "available": 1, "occupied": 1, "dirty": 1, "out_of_order": 0}


def test_inventory_upstream_failure_is_502(api_client, stream_session):
    stream_session.queue(make_response({}, status=500))

    response = api_client.get("/api/inventory/rooms")

    assert response.status_code == 502
    assert response.json()["status"] == "ERROR"
