"""
可用性查询路由
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from staybook.database import get_db
from staybook.errors import BookingError
from staybook.models.schemas import (
    AvailabilitySearch, AvailabilityResponse, AvailableRoom, RoomTypeResponse
)
from staybook.security.access_policy import Actor
from staybook.security.auth import get_current_actor
from staybook.services.availability_service import AvailabilityService

router = APIRouter(prefix="/availability", tags=["可用性"])


@router.post("/search", response_model=List[AvailabilityResponse])
def search_availability(
    data: AvailabilitySearch,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """查询日期区间内可售的房型及剩余房间数"""
    service = AvailabilityService(db)
    try:
        summary = service.search(data.check_in, data.check_out)
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    return [
        AvailabilityResponse(
            room_type=RoomTypeResponse(**item["room_type"]),
            available_room_count=item["available_room_count"],
            available_rooms=[AvailableRoom.model_validate(r) for r in item["available_rooms"]],
        )
        for item in summary
    ]
