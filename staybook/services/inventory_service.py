"""
库存服务 - 本体操作层
管理 RoomType 和 Room 对象
"""
from typing import List, Optional
import logging
from sqlalchemy.orm import Session
from sqlalchemy import func
from staybook.database import store_call
from staybook.errors import Conflict, NotFound
from staybook.models.ontology import Room, RoomType, RoomStatus, Reservation
from staybook.models.schemas import RoomCreate, RoomUpdate, RoomTypeCreate, RoomTypeUpdate

logger = logging.getLogger(__name__)


class InventoryService:
    """库存服务"""

    def __init__(self, db: Session):
        self.db = db

    # ============== 房型操作 ==============

    def get_room_types(self) -> List[RoomType]:
        """获取所有房型（按价格升序）"""
        with store_call(self.db, "list room types"):
            return self.db.query(RoomType).order_by(RoomType.price_per_night, RoomType.id).all()

    def get_room_type(self, room_type_id: int) -> Optional[RoomType]:
        """获取单个房型"""
        with store_call(self.db, "load room type"):
            return self.db.query(RoomType).filter(RoomType.id == room_type_id).first()

    def require_room_type(self, room_type_id: int) -> RoomType:
        room_type = self.get_room_type(room_type_id)
        if not room_type:
            raise NotFound(f"Room type {room_type_id} not found")
        return room_type

    def get_room_type_by_name(self, name: str) -> Optional[RoomType]:
        """根据名称获取房型"""
        with store_call(self.db, "load room type"):
            return self.db.query(RoomType).filter(RoomType.name == name).first()

    def create_room_type(self, data: RoomTypeCreate) -> RoomType:
        """创建房型"""
        if self.get_room_type_by_name(data.name):
            raise Conflict(f"Room type '{data.name}' already exists")

        room_type = RoomType(**data.model_dump())
        with store_call(self.db, "create room type"):
            self.db.add(room_type)
            self.db.commit()
            self.db.refresh(room_type)
        logger.info(f"Room type created: {room_type.id} {room_type.name}")
        return room_type

    def update_room_type(self, room_type_id: int, data: RoomTypeUpdate) -> RoomType:
        """更新房型"""
        room_type = self.require_room_type(room_type_id)

        update_data = data.model_dump(exclude_unset=True)
        if 'name' in update_data:
            existing = self.get_room_type_by_name(update_data['name'])
            if existing and existing.id != room_type_id:
                raise Conflict(f"Room type '{update_data['name']}' already exists")

        for key, value in update_data.items():
            setattr(room_type, key, value)

        with store_call(self.db, "update room type"):
            self.db.commit()
            self.db.refresh(room_type)
        return room_type

    def delete_room_type(self, room_type_id: int) -> bool:
        """
        删除房型

        仍有房间引用该房型时拒绝删除，避免留下悬空引用。
        """
        room_type = self.require_room_type(room_type_id)

        room_count = self.count_rooms(room_type_id)
        if room_count > 0:
            raise Conflict(f"Room type {room_type_id} still has {room_count} rooms")

        with store_call(self.db, "delete room type"):
            self.db.delete(room_type)
            self.db.commit()
        logger.info(f"Room type deleted: {room_type_id}")
        return True

    def count_rooms(self, room_type_id: int) -> int:
        with store_call(self.db, "count rooms"):
            return self.db.query(func.count(Room.id)).filter(
                Room.room_type_id == room_type_id
            ).scalar()

    def get_room_type_with_count(self, room_type_id: int) -> Optional[dict]:
        """获取房型及房间数量"""
        room_type = self.get_room_type(room_type_id)
        if not room_type:
            return None

        return {
            'id': room_type.id,
            'name': room_type.name,
            'description': room_type.description,
            'price_per_night': room_type.price_per_night,
            'max_guests': room_type.max_guests,
            'amenities': list(room_type.amenities or []),
            'image_url': room_type.image_url,
            'room_count': self.count_rooms(room_type.id),
        }

    # ============== 房间操作 ==============

    def get_rooms(self, room_type_id: Optional[int] = None,
                  status: Optional[RoomStatus] = None) -> List[Room]:
        """获取房间列表（按楼层、房号排序）"""
        query = self.db.query(Room)

        if room_type_id is not None:
            query = query.filter(Room.room_type_id == room_type_id)
        if status is not None:
            query = query.filter(Room.status == status)

        with store_call(self.db, "list rooms"):
            return query.order_by(Room.floor, Room.room_number).all()

    def get_room(self, room_id: int) -> Optional[Room]:
        """获取单个房间"""
        with store_call(self.db, "load room"):
            return self.db.query(Room).filter(Room.id == room_id).first()

    def require_room(self, room_id: int) -> Room:
        room = self.get_room(room_id)
        if not room:
            raise NotFound(f"Room {room_id} not found")
        return room

    def get_room_by_number(self, room_number: str) -> Optional[Room]:
        """根据房间号获取房间"""
        with store_call(self.db, "load room"):
            return self.db.query(Room).filter(Room.room_number == room_number).first()

    def create_room(self, data: RoomCreate) -> Room:
        """创建房间"""
        if self.get_room_by_number(data.room_number):
            raise Conflict(f"Room number '{data.room_number}' already exists")

        self.require_room_type(data.room_type_id)

        room = Room(**data.model_dump())
        with store_call(self.db, "create room"):
            self.db.add(room)
            self.db.commit()
            self.db.refresh(room)
        logger.info(f"Room created: {room.id} #{room.room_number}")
        return room

    def update_room(self, room_id: int, data: RoomUpdate) -> Room:
        """更新房间"""
        room = self.require_room(room_id)

        update_data = data.model_dump(exclude_unset=True)

        if 'room_type_id' in update_data:
            self.require_room_type(update_data['room_type_id'])
        if 'room_number' in update_data:
            existing = self.get_room_by_number(update_data['room_number'])
            if existing and existing.id != room_id:
                raise Conflict(f"Room number '{update_data['room_number']}' already exists")

        old_status = room.status
        for key, value in update_data.items():
            setattr(room, key, value)

        with store_call(self.db, "update room"):
            self.db.commit()
            self.db.refresh(room)

        if room.status != old_status:
            logger.info(f"Room {room.room_number} status {old_status.value} -> {room.status.value}")
        return room

    def delete_room(self, room_id: int) -> bool:
        """删除房间（有预订记录时拒绝，请改为维修状态）"""
        room = self.require_room(room_id)

        with store_call(self.db, "check room reservations"):
            booked = self.db.query(func.count(Reservation.id)).filter(
                Reservation.room_id == room_id
            ).scalar()
        if booked > 0:
            raise Conflict(
                f"Room {room.room_number} has {booked} reservations; set it to maintenance instead"
            )

        with store_call(self.db, "delete room"):
            self.db.delete(room)
            self.db.commit()
        logger.info(f"Room deleted: {room_id}")
        return True

    def get_room_detail(self, room: Room) -> dict:
        """房间及房型名称"""
        return {
            'id': room.id,
            'room_number': room.room_number,
            'floor': room.floor,
            'room_type_id': room.room_type_id,
            'room_type_name': room.room_type.name if room.room_type else None,
            'status': room.status,
        }
