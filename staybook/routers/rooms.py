"""
房间管理路由
房型与房间的查询对所有登录用户开放，增删改仅限管理员
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from staybook.database import get_db
from staybook.errors import BookingError
from staybook.models.ontology import RoomStatus
from staybook.models.schemas import (
    RoomTypeCreate, RoomTypeUpdate, RoomTypeResponse,
    RoomCreate, RoomUpdate, RoomResponse
)
from staybook.security.access_policy import Action, Actor, ensure_authorized
from staybook.security.auth import get_current_actor
from staybook.services.inventory_service import InventoryService

router = APIRouter(prefix="/rooms", tags=["房间管理"])


async def require_inventory_admin(actor: Actor = Depends(get_current_actor)) -> Actor:
    """库存管理权限"""
    try:
        ensure_authorized(actor, None, Action.MANAGE_INVENTORY)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return actor


# ============== 房型管理 ==============

@router.get("/types", response_model=List[RoomTypeResponse])
def list_room_types(
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """获取所有房型"""
    service = InventoryService(db)
    try:
        return [
            RoomTypeResponse(**service.get_room_type_with_count(rt.id))
            for rt in service.get_room_types()
        ]
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.post("/types", response_model=RoomTypeResponse)
def create_room_type(
    data: RoomTypeCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_inventory_admin)
):
    """创建房型"""
    service = InventoryService(db)
    try:
        room_type = service.create_room_type(data)
        return RoomTypeResponse(**service.get_room_type_with_count(room_type.id))
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.put("/types/{room_type_id}", response_model=RoomTypeResponse)
def update_room_type(
    room_type_id: int,
    data: RoomTypeUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_inventory_admin)
):
    """更新房型"""
    service = InventoryService(db)
    try:
        service.update_room_type(room_type_id, data)
        return RoomTypeResponse(**service.get_room_type_with_count(room_type_id))
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.delete("/types/{room_type_id}")
def delete_room_type(
    room_type_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_inventory_admin)
):
    """删除房型（仍有房间时拒绝）"""
    service = InventoryService(db)
    try:
        service.delete_room_type(room_type_id)
        return {"message": "Room type deleted", "room_type_id": room_type_id}
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


# ============== 房间管理 ==============

@router.get("", response_model=List[RoomResponse])
def list_rooms(
    room_type_id: Optional[int] = None,
    room_status: Optional[RoomStatus] = None,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """获取房间列表"""
    service = InventoryService(db)
    try:
        rooms = service.get_rooms(room_type_id=room_type_id, status=room_status)
        return [RoomResponse(**service.get_room_detail(r)) for r in rooms]
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.get("/{room_id}", response_model=RoomResponse)
def get_room(
    room_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """获取房间详情"""
    service = InventoryService(db)
    try:
        room = service.require_room(room_id)
        return RoomResponse(**service.get_room_detail(room))
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.post("", response_model=RoomResponse)
def create_room(
    data: RoomCreate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_inventory_admin)
):
    """创建房间"""
    service = InventoryService(db)
    try:
        room = service.create_room(data)
        return RoomResponse(**service.get_room_detail(room))
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.put("/{room_id}", response_model=RoomResponse)
def update_room(
    room_id: int,
    data: RoomUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_inventory_admin)
):
    """更新房间（含管理状态）"""
    service = InventoryService(db)
    try:
        room = service.update_room(room_id, data)
        return RoomResponse(**service.get_room_detail(room))
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.delete("/{room_id}")
def delete_room(
    room_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(require_inventory_admin)
):
    """删除房间"""
    service = InventoryService(db)
    try:
        service.delete_room(room_id)
        return {"message": "Room deleted", "room_id": room_id}
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
