"""Room inventory status handling and summaries."""
from conftest import FakeSession, make_response
from hotelstream.processing.client import StreamClient
from hotelstream.processing.inventory import (
    STATUS_DISABLED,
    STATUS_ERROR,
    STATUS_OK,
    load_inventory,
    summarize_rooms,
)


def _client(*responses) -> StreamClient:
    return StreamClient("http://pms.test", "app", "pw", session=FakeSession(list(responses)))


def test_summarize_rooms_precedence():
    rooms = [
        {"status": "OutOfOrder", "occupancy_status": "Occupied"},
        {"occupancy_status": "Occupied", "housekeeping_status": "Dirty"},
        {"status": "Occupied"},
        {"housekeeping_status": "Dirty"},
        {"housekeeping_status": "Clean"},
    ]

    assert summarize_rooms(rooms) == {
        "total_rooms": 5,
        "available": 1,
        "occupied": 2,
        "dirty": 1,
        "out_of_order": 1,
    }


def test_access_denied_is_a_disabled_status():
    result = load_inventory(_client(make_response({}, status=403)), "prop")

    assert result.status == STATUS_DISABLED
    assert not result.ok
    assert result.error == "Access Denied"
    assert result.to_dict()["status"] == "DISABLED"


def test_other_failures_are_error_status():
    result = load_inventory(_client(make_response({}, status=500)), "prop")

    assert result.status == STATUS_ERROR
    assert result.error == "Inventory Fetch Failed"


def test_successful_inventory_returns_rooms():
    result = load_inventory(_client(make_response([{"status": "Occupied"}])), "prop")

    assert result.status == STATUS_OK
    assert result.rooms == [{"status": "Occupied"}]
