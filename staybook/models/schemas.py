"""
Pydantic 模式定义
用于 API 请求/响应验证
"""
from datetime import datetime, date
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel, Field, ConfigDict
from staybook.models.ontology import RoomStatus, ReservationStatus, GuestRole


# ============== 房型 Schemas ==============

class RoomTypeBase(BaseModel):
    name: str = Field(..., max_length=50)
    description: Optional[str] = None
    price_per_night: Decimal = Field(..., ge=0)
    max_guests: int = Field(default=2, ge=1)
    amenities: List[str] = Field(default_factory=list)
    image_url: Optional[str] = Field(None, max_length=500)


class RoomTypeCreate(RoomTypeBase):
    pass


class RoomTypeUpdate(BaseModel):
    name: Optional[str] = Field(None, max_length=50)
    description: Optional[str] = None
    price_per_night: Optional[Decimal] = Field(None, ge=0)
    max_guests: Optional[int] = Field(None, ge=1)
    amenities: Optional[List[str]] = None
    image_url: Optional[str] = Field(None, max_length=500)


class RoomTypeResponse(RoomTypeBase):
    id: int
    room_count: int = 0
    model_config = ConfigDict(from_attributes=True)


# ============== 房间 Schemas ==============

class RoomBase(BaseModel):
    room_number: str = Field(..., max_length=10)
    floor: int = Field(..., ge=1)
    room_type_id: int


class RoomCreate(RoomBase):
    status: RoomStatus = RoomStatus.AVAILABLE


class RoomUpdate(BaseModel):
    room_number: Optional[str] = Field(None, max_length=10)
    floor: Optional[int] = Field(None, ge=1)
    room_type_id: Optional[int] = None
    status: Optional[RoomStatus] = None


class RoomResponse(RoomBase):
    id: int
    status: RoomStatus
    room_type_name: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


# ============== 可用性 Schemas ==============

class AvailabilitySearch(BaseModel):
    check_in: date
    check_out: date


class AvailableRoom(BaseModel):
    id: int
    room_number: str
    floor: int
    model_config = ConfigDict(from_attributes=True)


class AvailabilityResponse(BaseModel):
    room_type: RoomTypeResponse
    available_room_count: int
    available_rooms: List[AvailableRoom]


# ============== 预订 Schemas ==============

class ReservationCreate(BaseModel):
    room_id: int
    check_in: date
    check_out: date
    guests: int = Field(default=1, ge=1)
    # 仅管理员可代其他客人预订
    guest_id: Optional[str] = Field(None, max_length=64)


class ReservationResponse(BaseModel):
    id: int
    guest_id: str
    guest_email: Optional[str] = None
    guest_name: Optional[str] = None
    room_id: int
    room_number: Optional[str] = None
    room_type_name: Optional[str] = None
    check_in: date
    check_out: date
    guests: int
    total_price: Decimal
    status: ReservationStatus
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class BookingStats(BaseModel):
    total: int
    confirmed: int
    checked_in: int
    checked_out: int
    cancelled: int


# ============== 客人 Schemas ==============

class GuestProfileResponse(BaseModel):
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    role: GuestRole
    model_config = ConfigDict(from_attributes=True)
