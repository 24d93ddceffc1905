"""
可用性查询 API 测试
"""
from decimal import Decimal


def test_requires_token(client):
    response = client.post("/availability/search", json={"check_in": "2024-06-01", "check_out": "2024-06-03"})
    assert response.status_code == 401


def test_bad_token(client):
    response = client.post(
        "/availability/search",
        json={"check_in": "2024-06-01", "check_out": "2024-06-03"},
        headers={"Authorization": "Bearer not-a-token"},
    )
    assert response.status_code == 401


def test_search(client, guest_headers, sample_room, sample_room_102, suite_room):
    response = client.post(
        "/availability/search",
        json={"check_in": "2024-06-01", "check_out": "2024-06-03"},
        headers=guest_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert [item["room_type"]["name"] for item in data] == ["Standard", "Suite"]
    assert data[0]["available_room_count"] == 2
    assert [r["room_number"] for r in data[0]["available_rooms"]] == ["101", "102"]
    assert Decimal(data[0]["room_type"]["price_per_night"]) == Decimal("99")
    assert data[1]["room_type"]["amenities"] == ["WiFi", "TV", "Jacuzzi"]


def test_search_excludes_booked(client, guest_headers, sample_room):
    client.post(
        "/reservations",
        json={"room_id": sample_room.id, "check_in": "2024-06-01", "check_out": "2024-06-03"},
        headers=guest_headers,
    )
    response = client.post(
        "/availability/search",
        json={"check_in": "2024-06-02", "check_out": "2024-06-04"},
        headers=guest_headers,
    )
    assert response.status_code == 200
    assert response.json() == []


def test_inverted_range(client, guest_headers):
    response = client.post(
        "/availability/search",
        json={"check_in": "2024-06-03", "check_out": "2024-06-01"},
        headers=guest_headers,
    )
    assert response.status_code == 400
