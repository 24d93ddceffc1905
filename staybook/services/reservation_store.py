"""
预订存储 - 本体操作层
Reservation 记录的持久化，按 ID / 房间 / 客人查询，并维护间夜占用表
"""
from typing import Dict, List, Optional
from datetime import date, timedelta
import logging
from sqlalchemy.orm import Session, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy import func
from staybook.database import store_call
from staybook.models.ontology import (
    Reservation, ReservationStatus, RoomNight, ACTIVE_RESERVATION_STATUSES
)

logger = logging.getLogger(__name__)


def overlapping(query: Query, check_in: date, check_out: date) -> Query:
    """
    重叠判定（严格半开区间）

    existing.check_in < check_out AND existing.check_out > check_in，
    首尾相接的两段住宿不冲突。
    """
    return query.filter(
        Reservation.check_in < check_out,
        Reservation.check_out > check_in,
    )


def nights_between(check_in: date, check_out: date) -> List[date]:
    """[check_in, check_out) 内的每一晚"""
    return [check_in + timedelta(days=i) for i in range((check_out - check_in).days)]


class ReservationStore:
    """预订存储"""

    def __init__(self, db: Session):
        self.db = db

    def get(self, reservation_id: int) -> Optional[Reservation]:
        """获取单个预订"""
        with store_call(self.db, "load reservation"):
            return self.db.query(Reservation).filter(Reservation.id == reservation_id).first()

    def find_active(self, check_in: date, check_out: date,
                    room_id: Optional[int] = None) -> List[Reservation]:
        """查找与日期区间重叠的有效预订（已确认 / 已入住）"""
        query = self.db.query(Reservation).filter(
            Reservation.status.in_(ACTIVE_RESERVATION_STATUSES)
        )
        if room_id is not None:
            query = query.filter(Reservation.room_id == room_id)
        with store_call(self.db, "query active reservations"):
            return overlapping(query, check_in, check_out).all()

    def add(self, reservation: Reservation) -> Reservation:
        """
        持久化新预订及其间夜占用（同一事务）

        Raises:
            IntegrityError: 间夜已被其他预订占用（并发重叠预订）
        """
        with store_call(self.db, "create reservation"):
            try:
                self.db.add(reservation)
                self.db.flush()
                for night in nights_between(reservation.check_in, reservation.check_out):
                    self.db.add(RoomNight(
                        room_id=reservation.room_id,
                        night=night,
                        reservation_id=reservation.id,
                    ))
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                raise
            self.db.refresh(reservation)
        return reservation

    def update_status(self, reservation: Reservation, status: ReservationStatus) -> Reservation:
        """更新预订状态；离开有效状态时释放间夜占用"""
        with store_call(self.db, "update reservation"):
            reservation.status = status
            if status not in ACTIVE_RESERVATION_STATUSES:
                self.db.query(RoomNight).filter(
                    RoomNight.reservation_id == reservation.id
                ).delete(synchronize_session="fetch")
            self.db.commit()
            self.db.refresh(reservation)
        return reservation

    def list_for_guest(self, guest_id: str) -> List[Reservation]:
        """获取客人的预订（最新在前）"""
        with store_call(self.db, "list guest reservations"):
            return self.db.query(Reservation).filter(
                Reservation.guest_id == guest_id
            ).order_by(Reservation.created_at.desc(), Reservation.id.desc()).all()

    def list_all(self, status: Optional[ReservationStatus] = None) -> List[Reservation]:
        """获取全部预订（最新在前）"""
        query = self.db.query(Reservation)
        if status:
            query = query.filter(Reservation.status == status)
        with store_call(self.db, "list reservations"):
            return query.order_by(Reservation.created_at.desc(), Reservation.id.desc()).all()

    def find_arrivals(self, check_in: date) -> List[Reservation]:
        """查找指定日期到达的已确认预订"""
        with store_call(self.db, "list arrivals"):
            return self.db.query(Reservation).filter(
                Reservation.check_in == check_in,
                Reservation.status == ReservationStatus.CONFIRMED,
            ).order_by(Reservation.created_at).all()

    def count_by_status(self) -> Dict[ReservationStatus, int]:
        """按状态统计预订数"""
        with store_call(self.db, "count reservations"):
            rows = self.db.query(Reservation.status, func.count(Reservation.id)).group_by(
                Reservation.status
            ).all()
        counts = {s: 0 for s in ReservationStatus}
        for status, count in rows:
            counts[status] = count
        return counts
