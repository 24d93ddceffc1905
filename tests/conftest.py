"""
Pytest 配置和共享 fixtures
"""
import pytest
from decimal import Decimal
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from staybook.database import Base, get_db
from staybook.models import ontology  # noqa
from staybook.models.ontology import RoomType, Room, RoomStatus, GuestProfile, GuestRole
from staybook.security.access_policy import Actor
from staybook.security.auth import create_access_token
from staybook.main import app


@pytest.fixture(scope="function")
def db_engine():
    """创建内存数据库引擎"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """创建数据库会话"""
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="function")
def client(db_session):
    """创建测试客户端"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ============== 调用方 Fixtures ==============

@pytest.fixture
def guest_actor():
    return Actor(id="guest-a", role=GuestRole.GUEST, email="a@example.com", name="Guest A")


@pytest.fixture
def other_guest_actor():
    return Actor(id="guest-b", role=GuestRole.GUEST, email="b@example.com", name="Guest B")


@pytest.fixture
def admin_actor():
    return Actor(id="admin", role=GuestRole.ADMIN, email="admin@hotel.com", name="Hotel Administrator")


def _headers(actor: Actor) -> dict:
    token = create_access_token(actor.id, actor.role, email=actor.email, name=actor.name)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def guest_headers(guest_actor):
    """客人 A 的认证请求头"""
    return _headers(guest_actor)


@pytest.fixture
def other_guest_headers(other_guest_actor):
    """客人 B 的认证请求头"""
    return _headers(other_guest_actor)


@pytest.fixture
def admin_headers(admin_actor):
    """管理员的认证请求头"""
    return _headers(admin_actor)


# ============== 实体相关 Fixtures ==============

@pytest.fixture
def sample_room_type(db_session):
    """标准间：$99/晚，最多 2 人"""
    room_type = RoomType(
        name="Standard",
        description="Standard Room",
        price_per_night=Decimal("99.00"),
        max_guests=2,
        amenities=["WiFi", "TV"],
    )
    db_session.add(room_type)
    db_session.commit()
    db_session.refresh(room_type)
    return room_type


@pytest.fixture
def sample_room_type_suite(db_session):
    """套房：$249/晚，最多 4 人"""
    room_type = RoomType(
        name="Suite",
        description="Suite",
        price_per_night=Decimal("249.00"),
        max_guests=4,
        amenities=["WiFi", "TV", "Jacuzzi"],
    )
    db_session.add(room_type)
    db_session.commit()
    db_session.refresh(room_type)
    return room_type


@pytest.fixture
def sample_room(db_session, sample_room_type):
    """101 房间"""
    room = Room(
        room_number="101",
        floor=1,
        room_type_id=sample_room_type.id,
        status=RoomStatus.AVAILABLE
    )
    db_session.add(room)
    db_session.commit()
    db_session.refresh(room)
    return room


@pytest.fixture
def sample_room_102(db_session, sample_room_type):
    """102 房间"""
    room = Room(
        room_number="102",
        floor=1,
        room_type_id=sample_room_type.id,
        status=RoomStatus.AVAILABLE
    )
    db_session.add(room)
    db_session.commit()
    db_session.refresh(room)
    return room


@pytest.fixture
def suite_room(db_session, sample_room_type_suite):
    """301 套房"""
    room = Room(
        room_number="301",
        floor=3,
        room_type_id=sample_room_type_suite.id,
        status=RoomStatus.AVAILABLE
    )
    db_session.add(room)
    db_session.commit()
    db_session.refresh(room)
    return room


@pytest.fixture
def admin_profile(db_session):
    profile = GuestProfile(id="admin", email="admin@hotel.com", name="Hotel Administrator",
                           role=GuestRole.ADMIN)
    db_session.add(profile)
    db_session.commit()
    return profile
