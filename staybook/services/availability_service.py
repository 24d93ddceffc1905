"""
可用性服务
给定日期区间，计算没有冲突预订的房间，并按房型分组

结果是时间点快照，不持有锁；并发预订可能使其失效，
提交时由 ReservationService 重新校验。
"""
from typing import Dict, List
from datetime import date
import logging
from sqlalchemy.orm import Session
from staybook.errors import InvalidRange
from staybook.models.ontology import Room, RoomStatus
from staybook.services.inventory_service import InventoryService
from staybook.services.reservation_store import ReservationStore

logger = logging.getLogger(__name__)


def validate_range(check_in: date, check_out: date) -> None:
    """日期区间必须满足 check_in < check_out"""
    if check_in is None or check_out is None:
        raise InvalidRange("Check-in and check-out dates are required")
    if check_out <= check_in:
        raise InvalidRange("Check-out date must be after check-in date")


class AvailabilityService:
    """可用性服务"""

    def __init__(self, db: Session):
        self.db = db
        self.inventory = InventoryService(db)
        self.store = ReservationStore(db)

    def find_available(self, check_in: date, check_out: date) -> Dict[int, dict]:
        """
        查找可用房间

        Args:
            check_in: 入住日期
            check_out: 离店日期（不含）

        Returns:
            {room_type_id: {"room_type": RoomType, "available_rooms": [Room, ...]}}
            没有剩余房间的房型不出现在结果中（即售罄）。

        Raises:
            InvalidRange: 日期区间无效
            StoreUnavailable: 存储层失败
        """
        validate_range(check_in, check_out)

        # 维修中 / 占用 的房间无论预订情况都不可售
        rooms = self.inventory.get_rooms(status=RoomStatus.AVAILABLE)
        booked_room_ids = {
            r.room_id for r in self.store.find_active(check_in, check_out)
        }

        result: Dict[int, dict] = {}
        for room in rooms:
            if room.id in booked_room_ids:
                continue
            room_type = room.room_type
            if room_type is None:
                logger.warning(f"Room {room.room_number} references missing room type {room.room_type_id}")
                continue
            group = result.setdefault(room_type.id, {
                "room_type": room_type,
                "available_rooms": [],
            })
            group["available_rooms"].append(room)

        logger.debug(
            f"Availability {check_in}..{check_out}: "
            f"{sum(len(g['available_rooms']) for g in result.values())} rooms "
            f"in {len(result)} room types"
        )
        return result

    def search(self, check_in: date, check_out: date) -> List[dict]:
        """可售房型及剩余房间数（按价格升序）"""
        groups = self.find_available(check_in, check_out)
        summary = []
        for room_type_id, group in groups.items():
            rooms: List[Room] = group["available_rooms"]
            summary.append({
                "room_type": self.inventory.get_room_type_with_count(room_type_id),
                "available_room_count": len(rooms),
                "available_rooms": rooms,
            })
        summary.sort(key=lambda item: (item["room_type"]["price_per_night"], item["room_type"]["id"]))
        return summary

    def has_conflict(self, room_id: int, check_in: date, check_out: date) -> bool:
        """指定房间在区间内是否已有有效预订"""
        validate_range(check_in, check_out)
        return len(self.store.find_active(check_in, check_out, room_id=room_id)) > 0
