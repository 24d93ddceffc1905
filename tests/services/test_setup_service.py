"""
Tests for staybook/services/setup_service.py
"""
from staybook.config import settings
from staybook.models.ontology import GuestProfile, GuestRole, Room, RoomType
from staybook.services.setup_service import is_initialized, seed_sample_data


def test_seed_sample_data(db_session):
    stats = seed_sample_data(db_session)

    assert stats == {"room_types": 3, "rooms": 9, "skipped": False}
    assert db_session.query(RoomType).count() == 3
    assert db_session.query(Room).count() == 9
    assert is_initialized(db_session)


def test_seed_creates_admin_profile(db_session):
    seed_sample_data(db_session)
    admin = db_session.get(GuestProfile, settings.ADMIN_ID)
    assert admin.role == GuestRole.ADMIN
    assert admin.email == settings.ADMIN_EMAIL


def test_seed_is_idempotent(db_session):
    seed_sample_data(db_session)
    stats = seed_sample_data(db_session)

    assert stats["skipped"] is True
    assert db_session.query(RoomType).count() == 3
    assert db_session.query(Room).count() == 9


def test_seed_keeps_existing_rooms(db_session, sample_room):
    stats = seed_sample_data(db_session)
    # 101 已存在，跳过
    assert stats["rooms"] == 8
    assert db_session.query(Room).count() == 9
