"""
初始化数据服务
幂等：由持久化标志位 sample_data_initialized 控制，只在部署时显式调用一次
"""
from decimal import Decimal
from typing import Optional
import logging
from sqlalchemy.orm import Session
from staybook.config import settings
from staybook.database import store_call
from staybook.models.ontology import (
    RoomType, Room, RoomStatus, GuestRole, SystemSetting
)
from staybook.services.guest_service import GuestService

logger = logging.getLogger(__name__)

INITIALIZED_FLAG = "sample_data_initialized"

SEED_ROOM_TYPES = [
    {
        "name": "Standard Room",
        "description": "Comfortable room with essential amenities",
        "price_per_night": Decimal("99"),
        "max_guests": 2,
        "amenities": ["WiFi", "TV", "Air Conditioning", "Mini Fridge"],
        "image_url": "https://images.unsplash.com/photo-1631049307264-da0ec9d70304?w=800",
    },
    {
        "name": "Deluxe Room",
        "description": "Spacious room with premium amenities",
        "price_per_night": Decimal("159"),
        "max_guests": 3,
        "amenities": ["WiFi", "TV", "Air Conditioning", "Mini Bar", "Coffee Maker", "Balcony"],
        "image_url": "https://images.unsplash.com/photo-1590490360182-c33d57733427?w=800",
    },
    {
        "name": "Suite",
        "description": "Luxurious suite with separate living area",
        "price_per_night": Decimal("249"),
        "max_guests": 4,
        "amenities": [
            "WiFi", "TV", "Air Conditioning", "Mini Bar", "Coffee Maker",
            "Balcony", "Jacuzzi", "Living Room",
        ],
        "image_url": "https://images.unsplash.com/photo-1582719478250-c89cae4dc85b?w=800",
    },
]

# 房型名称 -> [(房号, 楼层)]
SEED_ROOMS = {
    "Standard Room": [("101", 1), ("102", 1), ("103", 1), ("104", 1)],
    "Deluxe Room": [("201", 2), ("202", 2), ("203", 2)],
    "Suite": [("301", 3), ("302", 3)],
}


def get_setting(db: Session, key: str) -> Optional[str]:
    with store_call(db, "load setting"):
        row = db.query(SystemSetting).filter(SystemSetting.key == key).first()
    return row.value if row else None


def is_initialized(db: Session) -> bool:
    """初始化数据是否已写入"""
    return get_setting(db, INITIALIZED_FLAG) == "true"


def seed_sample_data(db: Session) -> dict:
    """
    写入示例房型、房间和管理员档案

    已初始化时直接返回；已存在的房型 / 房间按名称 / 房号跳过。

    Returns:
        统计信息 {"room_types": n, "rooms": n, "skipped": bool}
    """
    stats = {"room_types": 0, "rooms": 0, "skipped": False}
    if is_initialized(db):
        logger.info("Sample data already initialized")
        stats["skipped"] = True
        return stats

    with store_call(db, "seed sample data"):
        type_map = {}
        for data in SEED_ROOM_TYPES:
            room_type = db.query(RoomType).filter(RoomType.name == data["name"]).first()
            if not room_type:
                room_type = RoomType(**data)
                db.add(room_type)
                db.flush()
                stats["room_types"] += 1
            type_map[data["name"]] = room_type

        for type_name, rooms in SEED_ROOMS.items():
            for room_number, floor in rooms:
                if db.query(Room).filter(Room.room_number == room_number).first():
                    continue
                db.add(Room(
                    room_number=room_number,
                    floor=floor,
                    room_type_id=type_map[type_name].id,
                    status=RoomStatus.AVAILABLE,
                ))
                stats["rooms"] += 1

        GuestService(db).ensure_profile(
            settings.ADMIN_ID,
            email=settings.ADMIN_EMAIL,
            name=settings.ADMIN_NAME,
            role=GuestRole.ADMIN,
        )
        db.add(SystemSetting(key=INITIALIZED_FLAG, value="true"))
        db.commit()

    logger.info(f"Sample data initialized: {stats}")
    return stats
