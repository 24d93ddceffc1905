"""
预订管理路由
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from staybook.database import get_db
from staybook.errors import BookingError
from staybook.models.ontology import GuestRole
from staybook.models.schemas import ReservationCreate, ReservationResponse
from staybook.security.access_policy import Action, Actor, ensure_authorized
from staybook.security.auth import get_current_actor
from staybook.services.reservation_service import ReservationService

router = APIRouter(prefix="/reservations", tags=["预订管理"])


@router.post("", response_model=ReservationResponse)
def create_reservation(
    data: ReservationCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """创建预订（默认为本人预订，管理员可代客预订）"""
    service = ReservationService(db)
    try:
        if data.guest_id and data.guest_id != actor.id:
            ensure_authorized(actor, None, Action.BOOK_FOR_OTHER)
            guest_id, email, name, role = data.guest_id, None, None, GuestRole.GUEST
        else:
            guest_id, email, name, role = actor.id, actor.email, actor.name, actor.role

        detail = service.create_reservation(
            guest_id=guest_id,
            room_id=data.room_id,
            check_in=data.check_in,
            check_out=data.check_out,
            guest_count=data.guests,
            guest_email=email,
            guest_name=name,
            guest_role=role,
        )
        return ReservationResponse(**detail)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/mine", response_model=List[ReservationResponse])
def list_my_reservations(
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """获取本人的预订（最新在前）"""
    service = ReservationService(db)
    try:
        return [ReservationResponse(**d) for d in service.list_for_guest(actor.id)]
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/{reservation_id}", response_model=ReservationResponse)
def get_reservation(
    reservation_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """获取预订详情"""
    service = ReservationService(db)
    try:
        return ReservationResponse(**service.get_reservation_detail(reservation_id, actor))
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.post("/{reservation_id}/check-in", response_model=ReservationResponse)
def check_in(
    reservation_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """办理入住"""
    service = ReservationService(db)
    try:
        return ReservationResponse(**service.check_in(reservation_id, actor))
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.post("/{reservation_id}/check-out", response_model=ReservationResponse)
def check_out(
    reservation_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """办理退房"""
    service = ReservationService(db)
    try:
        return ReservationResponse(**service.check_out(reservation_id, actor))
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.post("/{reservation_id}/cancel", response_model=ReservationResponse)
def cancel_reservation(
    reservation_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """取消预订"""
    service = ReservationService(db)
    try:
        return ReservationResponse(**service.cancel(reservation_id, actor))
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
