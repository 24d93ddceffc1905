"""
预订服务 - 预订生命周期管理
创建预订（提交时重新校验可用性），以及入住、退房、取消的状态转换

状态机：
    confirmed --check_in--> checked_in --check_out--> checked_out
    confirmed / checked_in --cancel--> cancelled
checked_out 与 cancelled 为终态。
"""
from typing import Dict, List, Optional, Tuple
from datetime import date
import logging
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from staybook.errors import (
    CapacityExceeded, InvalidGuestCount, InvalidTransition, NotFound,
    RoomUnavailable, StoreUnavailable
)
from staybook.models.ontology import GuestRole, Reservation, ReservationStatus
from staybook.security.access_policy import Action, Actor, ensure_authorized
from staybook.services.availability_service import AvailabilityService, validate_range
from staybook.services.guest_service import GuestService
from staybook.services.inventory_service import InventoryService
from staybook.services.price_service import PriceService
from staybook.services.reservation_store import ReservationStore

logger = logging.getLogger(__name__)


# (动作) -> (允许的源状态, 目标状态)
TRANSITIONS: Dict[Action, Tuple[Tuple[ReservationStatus, ...], ReservationStatus]] = {
    Action.CHECK_IN: ((ReservationStatus.CONFIRMED,), ReservationStatus.CHECKED_IN),
    Action.CHECK_OUT: ((ReservationStatus.CHECKED_IN,), ReservationStatus.CHECKED_OUT),
    Action.CANCEL: (
        (ReservationStatus.CONFIRMED, ReservationStatus.CHECKED_IN),
        ReservationStatus.CANCELLED,
    ),
}


def _is_room_night_conflict(error: IntegrityError) -> bool:
    message = str(error.orig)
    return "room_nights" in message or "uq_room_night" in message


class ReservationService:
    """预订生命周期服务"""

    def __init__(self, db: Session):
        self.db = db
        self.store = ReservationStore(db)
        self.inventory = InventoryService(db)
        self.availability = AvailabilityService(db)
        self.price_service = PriceService()
        self.guest_service = GuestService(db)

    # ============== 创建 ==============

    def create_reservation(self, guest_id: str, room_id: int, check_in: date,
                           check_out: date, guest_count: int,
                           guest_email: Optional[str] = None,
                           guest_name: Optional[str] = None,
                           guest_role: GuestRole = GuestRole.GUEST) -> dict:
        """
        创建预订

        业务规则：
        - 提交时针对该房间重新校验重叠（可用性查询结果可能已过期）
        - 入住人数不超过房型上限
        - 按间夜计价，状态为 confirmed
        - 间夜唯一约束冲突（并发预订）视为 RoomUnavailable

        Returns:
            含客人、房间展示字段的完整预订记录
        """
        validate_range(check_in, check_out)

        room = self.inventory.require_room(room_id)
        room_type = self.inventory.require_room_type(room.room_type_id)

        if self.availability.has_conflict(room_id, check_in, check_out):
            logger.info(f"Room {room.room_number} unavailable for {check_in}..{check_out}")
            raise RoomUnavailable(f"Room {room.room_number} is not available for the selected dates")

        if guest_count < 1:
            raise InvalidGuestCount("Guest count must be at least 1")
        if guest_count > room_type.max_guests:
            raise CapacityExceeded(
                f"{room_type.name} allows at most {room_type.max_guests} guests"
            )

        total_price = self.price_service.price(room_type, check_in, check_out)

        # 档案在独立短事务中创建，并发的首次预订不会互相冲突
        self.guest_service.get_or_create_profile(
            guest_id, email=guest_email, name=guest_name, role=guest_role
        )
        reservation = Reservation(
            guest_id=guest_id,
            room_id=room_id,
            check_in=check_in,
            check_out=check_out,
            guests=guest_count,
            total_price=total_price,
            status=ReservationStatus.CONFIRMED,
        )

        try:
            self.store.add(reservation)
        except IntegrityError as e:
            if _is_room_night_conflict(e):
                logger.info(f"Concurrent booking lost race on room {room.room_number} {check_in}..{check_out}")
                raise RoomUnavailable(
                    f"Room {room.room_number} is not available for the selected dates"
                ) from e
            logger.error(f"Integrity failure creating reservation: {e}")
            raise StoreUnavailable("Reservation could not be stored") from e

        logger.info(
            f"Reservation {reservation.id} confirmed: guest={guest_id} room={room.room_number} "
            f"{check_in}..{check_out} total={total_price}"
        )
        return self.get_reservation_detail_for(reservation)

    # ============== 状态转换 ==============

    def _transition(self, reservation_id: int, actor: Actor, action: Action) -> dict:
        reservation = self.store.get(reservation_id)
        if not reservation:
            raise NotFound(f"Reservation {reservation_id} not found")

        ensure_authorized(actor, reservation, action)

        allowed_from, target = TRANSITIONS[action]
        if reservation.status not in allowed_from:
            raise InvalidTransition(
                f"Cannot {action.value} a reservation that is {reservation.status.value}"
            )

        old_status = reservation.status
        self.store.update_status(reservation, target)
        logger.info(
            f"Reservation {reservation_id} {old_status.value} -> {target.value} by {actor.id}"
        )
        return self.get_reservation_detail_for(reservation)

    def check_in(self, reservation_id: int, actor: Actor) -> dict:
        """办理入住（仅管理员）"""
        return self._transition(reservation_id, actor, Action.CHECK_IN)

    def check_out(self, reservation_id: int, actor: Actor) -> dict:
        """办理退房（仅管理员），释放间夜"""
        return self._transition(reservation_id, actor, Action.CHECK_OUT)

    def cancel(self, reservation_id: int, actor: Actor) -> dict:
        """取消预订（本人或管理员），释放间夜"""
        return self._transition(reservation_id, actor, Action.CANCEL)

    # ============== 查询 ==============

    def get_reservation_detail(self, reservation_id: int, actor: Actor) -> dict:
        """获取预订详情（本人或管理员）"""
        reservation = self.store.get(reservation_id)
        if not reservation:
            raise NotFound(f"Reservation {reservation_id} not found")
        ensure_authorized(actor, reservation, Action.VIEW)
        return self.get_reservation_detail_for(reservation)

    def list_for_guest(self, guest_id: str) -> List[dict]:
        """客人的预订（最新在前）"""
        return [self.get_reservation_detail_for(r) for r in self.store.list_for_guest(guest_id)]

    def list_for_property(self, actor: Actor,
                          status: Optional[ReservationStatus] = None) -> List[dict]:
        """全部预订（仅管理员，最新在前）"""
        ensure_authorized(actor, None, Action.LIST_ALL)
        return [self.get_reservation_detail_for(r) for r in self.store.list_all(status)]

    def todays_check_ins(self, actor: Actor, today: Optional[date] = None) -> List[dict]:
        """今日预抵（仅管理员）"""
        ensure_authorized(actor, None, Action.LIST_ALL)
        arrivals = self.store.find_arrivals(today or date.today())
        return [self.get_reservation_detail_for(r) for r in arrivals]

    def booking_stats(self, actor: Actor) -> dict:
        """按状态统计预订（仅管理员）"""
        ensure_authorized(actor, None, Action.LIST_ALL)
        counts = self.store.count_by_status()
        stats = {status.value: count for status, count in counts.items()}
        stats['total'] = sum(counts.values())
        return stats

    def get_reservation_detail_for(self, reservation: Reservation) -> dict:
        """预订详情（读取时关联客人与房间展示字段）"""
        guest = reservation.guest
        room = reservation.room
        room_type = room.room_type if room else None
        return {
            'id': reservation.id,
            'guest_id': reservation.guest_id,
            'guest_email': guest.email if guest else None,
            'guest_name': guest.name if guest else None,
            'room_id': reservation.room_id,
            'room_number': room.room_number if room else None,
            'room_type_name': room_type.name if room_type else 'Unknown',
            'check_in': reservation.check_in,
            'check_out': reservation.check_out,
            'guests': reservation.guests,
            'total_price': reservation.total_price,
            'status': reservation.status,
            'created_at': reservation.created_at,
        }
