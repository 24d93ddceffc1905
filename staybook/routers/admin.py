"""
管理员路由 - 全部预订、今日预抵、预订统计
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from staybook.database import get_db
from staybook.errors import BookingError
from staybook.models.ontology import ReservationStatus
from staybook.models.schemas import ReservationResponse, BookingStats
from staybook.security.access_policy import Actor
from staybook.security.auth import get_current_actor
from staybook.services.reservation_service import ReservationService

router = APIRouter(prefix="/admin", tags=["管理"])


@router.get("/reservations", response_model=List[ReservationResponse])
def list_all_reservations(
    status: Optional[ReservationStatus] = None,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """获取全部预订（最新在前）"""
    service = ReservationService(db)
    try:
        return [ReservationResponse(**d) for d in service.list_for_property(actor, status)]
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/check-ins-today", response_model=List[ReservationResponse])
def todays_check_ins(
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """获取今日预抵"""
    service = ReservationService(db)
    try:
        return [ReservationResponse(**d) for d in service.todays_check_ins(actor)]
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/stats", response_model=BookingStats)
def booking_stats(
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """按状态统计预订"""
    service = ReservationService(db)
    try:
        return BookingStats(**service.booking_stats(actor))
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
