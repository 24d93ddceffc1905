"""
房型与房间 API 测试
"""
from decimal import Decimal


class TestRoomTypes:

    def test_list(self, client, guest_headers, sample_room, sample_room_type_suite):
        response = client.get("/rooms/types", headers=guest_headers)
        assert response.status_code == 200
        data = response.json()
        assert [rt["name"] for rt in data] == ["Standard", "Suite"]
        assert data[0]["room_count"] == 1
        assert data[1]["room_count"] == 0

    def test_create(self, client, admin_headers):
        response = client.post("/rooms/types", json={
            "name": "Deluxe", "price_per_night": "159.00", "max_guests": 3, "amenities": ["WiFi"]
        }, headers=admin_headers)
        assert response.status_code == 200
        assert Decimal(response.json()["price_per_night"]) == Decimal("159")

    def test_create_forbidden_for_guest(self, client, guest_headers):
        response = client.post("/rooms/types", json={
            "name": "Deluxe", "price_per_night": "159.00"
        }, headers=guest_headers)
        assert response.status_code == 403

    def test_create_duplicate(self, client, admin_headers, sample_room_type):
        response = client.post("/rooms/types", json={
            "name": "Standard", "price_per_night": "10"
        }, headers=admin_headers)
        assert response.status_code == 409

    def test_update(self, client, admin_headers, sample_room_type):
        response = client.put(f"/rooms/types/{sample_room_type.id}", json={"max_guests": 3},
                              headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["max_guests"] == 3

    def test_update_missing(self, client, admin_headers):
        response = client.put("/rooms/types/999", json={"max_guests": 3}, headers=admin_headers)
        assert response.status_code == 404

    def test_delete_blocked_while_referenced(self, client, admin_headers, sample_room):
        response = client.delete(f"/rooms/types/{sample_room.room_type_id}", headers=admin_headers)
        assert response.status_code == 409

    def test_delete(self, client, admin_headers, sample_room_type):
        response = client.delete(f"/rooms/types/{sample_room_type.id}", headers=admin_headers)
        assert response.status_code == 200


class TestRooms:

    def test_list_and_filter(self, client, guest_headers, sample_room, sample_room_102, suite_room):
        response = client.get("/rooms", headers=guest_headers)
        assert [r["room_number"] for r in response.json()] == ["101", "102", "301"]

        response = client.get("/rooms", params={"room_type_id": suite_room.room_type_id}, headers=guest_headers)
        assert [r["room_type_name"] for r in response.json()] == ["Suite"]

    def test_get(self, client, guest_headers, sample_room):
        response = client.get(f"/rooms/{sample_room.id}", headers=guest_headers)
        assert response.status_code == 200
        assert response.json()["status"] == "available"

    def test_get_missing(self, client, guest_headers):
        assert client.get("/rooms/999", headers=guest_headers).status_code == 404

    def test_create(self, client, admin_headers, sample_room_type):
        response = client.post("/rooms", json={
            "room_number": "110", "floor": 1, "room_type_id": sample_room_type.id
        }, headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["room_type_name"] == "Standard"

    def test_create_forbidden_for_guest(self, client, guest_headers, sample_room_type):
        response = client.post("/rooms", json={
            "room_number": "110", "floor": 1, "room_type_id": sample_room_type.id
        }, headers=guest_headers)
        assert response.status_code == 403

    def test_set_maintenance_hides_from_search(self, client, admin_headers, guest_headers, sample_room):
        response = client.put(f"/rooms/{sample_room.id}", json={"status": "maintenance"},
                              headers=admin_headers)
        assert response.status_code == 200

        search = client.post("/availability/search", json={
            "check_in": "2024-06-01", "check_out": "2024-06-03"
        }, headers=guest_headers)
        assert search.json() == []

    def test_filter_by_status(self, client, admin_headers, sample_room, sample_room_102):
        client.put(f"/rooms/{sample_room.id}", json={"status": "maintenance"}, headers=admin_headers)
        response = client.get("/rooms", params={"room_status": "maintenance"}, headers=admin_headers)
        assert [r["room_number"] for r in response.json()] == ["101"]

    def test_delete_booked_room(self, client, guest_headers, admin_headers, sample_room):
        client.post("/reservations", json={
            "room_id": sample_room.id, "check_in": "2024-07-01", "check_out": "2024-07-02"
        }, headers=guest_headers)
        response = client.delete(f"/rooms/{sample_room.id}", headers=admin_headers)
        assert response.status_code == 409
