"""
Tests for staybook/services/guest_service.py
Covers: ensure_profile, get_or_create_profile (including a lost insert race)
"""
from datetime import date

from staybook.models.ontology import GuestProfile, GuestRole
from staybook.services.guest_service import GuestService
from staybook.services.reservation_service import ReservationService


class TestGetOrCreateProfile:

    def test_creates_with_email_as_default_name(self, db_session):
        profile = GuestService(db_session).get_or_create_profile("guest-a", email="a@example.com")
        assert profile.name == "a@example.com"
        assert profile.role == GuestRole.GUEST

    def test_returns_existing(self, db_session):
        db_session.add(GuestProfile(id="guest-a", email="old@example.com", name="Old"))
        db_session.commit()
        profile = GuestService(db_session).get_or_create_profile("guest-a", email="new@example.com")
        assert profile.name == "Old"

    def test_concurrent_insert_reuses_committed_profile(self, db_session, monkeypatch):
        # 另一个会话已提交同一档案，本会话的存在性检查发生在其提交之前
        db_session.add(GuestProfile(id="guest-x", email="first@example.com", name="First"))
        db_session.commit()
        db_session.expunge_all()

        original = GuestService.get_profile
        calls = []

        def stale_then_real(self, guest_id):
            calls.append(guest_id)
            if len(calls) == 1:
                return None
            return original(self, guest_id)

        monkeypatch.setattr(GuestService, "get_profile", stale_then_real)
        profile = GuestService(db_session).get_or_create_profile("guest-x", email="second@example.com")

        assert profile.name == "First"
        assert db_session.query(GuestProfile).filter(GuestProfile.id == "guest-x").count() == 1


class TestProfileRole:

    def test_admin_first_booking_keeps_admin_role(self, db_session, sample_room):
        ReservationService(db_session).create_reservation(
            guest_id="admin", room_id=sample_room.id,
            check_in=date(2024, 7, 1), check_out=date(2024, 7, 2), guest_count=1,
            guest_email="admin@hotel.com", guest_role=GuestRole.ADMIN,
        )
        assert db_session.get(GuestProfile, "admin").role == GuestRole.ADMIN

    def test_default_role_is_guest(self, db_session, sample_room):
        ReservationService(db_session).create_reservation(
            guest_id="guest-a", room_id=sample_room.id,
            check_in=date(2024, 7, 1), check_out=date(2024, 7, 2), guest_count=1,
        )
        assert db_session.get(GuestProfile, "guest-a").role == GuestRole.GUEST
