"""
存储层不可用时的 API 响应（503）
"""
from staybook.errors import StoreUnavailable
from staybook.services.availability_service import AvailabilityService
from staybook.services.inventory_service import InventoryService
from staybook.services.reservation_service import ReservationService


def _unavailable(*args, **kwargs):
    raise StoreUnavailable("Store unavailable during test")


def test_search_503(client, guest_headers, monkeypatch):
    monkeypatch.setattr(AvailabilityService, "search", _unavailable)
    response = client.post("/availability/search", json={
        "check_in": "2024-06-01", "check_out": "2024-06-03"
    }, headers=guest_headers)
    assert response.status_code == 503


def test_create_reservation_503(client, guest_headers, monkeypatch):
    monkeypatch.setattr(ReservationService, "create_reservation", _unavailable)
    response = client.post("/reservations", json={
        "room_id": 1, "check_in": "2024-07-01", "check_out": "2024-07-03"
    }, headers=guest_headers)
    assert response.status_code == 503


def test_list_room_types_503(client, guest_headers, monkeypatch):
    monkeypatch.setattr(InventoryService, "get_room_types", _unavailable)
    assert client.get("/rooms/types", headers=guest_headers).status_code == 503


def test_list_rooms_503(client, guest_headers, monkeypatch):
    monkeypatch.setattr(InventoryService, "get_rooms", _unavailable)
    assert client.get("/rooms", headers=guest_headers).status_code == 503


def test_get_room_503(client, guest_headers, monkeypatch):
    monkeypatch.setattr(InventoryService, "get_room", _unavailable)
    assert client.get("/rooms/1", headers=guest_headers).status_code == 503


def test_stats_503(client, admin_headers, monkeypatch):
    monkeypatch.setattr(ReservationService, "booking_stats", _unavailable)
    assert client.get("/admin/stats", headers=admin_headers).status_code == 503
