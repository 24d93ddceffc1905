"""
本体对象定义 (Ontology Objects)
房型、房间、预订、客人档案，以及保证房间独占使用的间夜占用表
"""
from datetime import datetime
from enum import Enum
from sqlalchemy import (
    Column, Integer, String, DateTime, Date, JSON,
    ForeignKey, Text, Enum as SQLEnum, Numeric, UniqueConstraint
)
from sqlalchemy.orm import relationship
from staybook.database import Base


# ============== 枚举定义 ==============

class RoomStatus(str, Enum):
    """房间管理状态（与预订占用无关）"""
    AVAILABLE = "available"        # 可售
    OCCUPIED = "occupied"          # 占用
    MAINTENANCE = "maintenance"    # 维修中


class ReservationStatus(str, Enum):
    """预订状态枚举"""
    CONFIRMED = "confirmed"        # 已确认
    CHECKED_IN = "checked_in"      # 已入住
    CHECKED_OUT = "checked_out"    # 已退房
    CANCELLED = "cancelled"        # 已取消


# 占用房间的预订状态
ACTIVE_RESERVATION_STATUSES = (ReservationStatus.CONFIRMED, ReservationStatus.CHECKED_IN)

# 终态，不再允许任何变更
TERMINAL_RESERVATION_STATUSES = (ReservationStatus.CHECKED_OUT, ReservationStatus.CANCELLED)


class GuestRole(str, Enum):
    """客人档案角色"""
    GUEST = "guest"
    ADMIN = "admin"


# ============== 本体对象定义 ==============

class RoomType(Base):
    """房型对象"""
    __tablename__ = "room_types"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), unique=True, nullable=False)
    description = Column(Text)
    price_per_night = Column(Numeric(10, 2), nullable=False)
    max_guests = Column(Integer, nullable=False, default=2)
    amenities = Column(JSON, default=list)                  # 有序列表，展示顺序有意义
    image_url = Column(String(500))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 链接：一个房型对应多个房间
    rooms = relationship("Room", back_populates="room_type")


class Room(Base):
    """房间对象"""
    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, index=True)
    room_number = Column(String(10), unique=True, nullable=False)
    room_type_id = Column(Integer, ForeignKey("room_types.id"), nullable=False)
    status = Column(SQLEnum(RoomStatus), nullable=False, default=RoomStatus.AVAILABLE)
    floor = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    room_type = relationship("RoomType", back_populates="rooms")
    reservations = relationship("Reservation", back_populates="room")


class GuestProfile(Base):
    """
    客人档案
    由外部身份服务拥有，引擎只读引用；首次预订时按需创建
    """
    __tablename__ = "guest_profiles"

    id = Column(String(64), primary_key=True)               # = 身份服务的用户 ID
    email = Column(String(255))
    name = Column(String(100))
    role = Column(SQLEnum(GuestRole), nullable=False, default=GuestRole.GUEST)
    created_at = Column(DateTime, default=datetime.utcnow)

    reservations = relationship("Reservation", back_populates="guest")


class Reservation(Base):
    """
    预订对象 - 客人对某间房在日期区间 [check_in, check_out) 上的占用
    check_in / check_out / total_price / room_id 创建后不可修改
    """
    __tablename__ = "reservations"

    id = Column(Integer, primary_key=True, index=True)
    guest_id = Column(String(64), ForeignKey("guest_profiles.id"), nullable=False, index=True)
    room_id = Column(Integer, ForeignKey("rooms.id"), nullable=False, index=True)
    check_in = Column(Date, nullable=False)
    check_out = Column(Date, nullable=False)                # 不含当日
    guests = Column(Integer, nullable=False, default=1)
    total_price = Column(Numeric(10, 2), nullable=False)
    status = Column(SQLEnum(ReservationStatus), nullable=False, default=ReservationStatus.CONFIRMED)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    guest = relationship("GuestProfile", back_populates="reservations")
    room = relationship("Room", back_populates="reservations")
    nights = relationship("RoomNight", back_populates="reservation", cascade="all, delete-orphan")


class RoomNight(Base):
    """
    间夜占用
    有效预订（已确认 / 已入住）每晚一行；(room_id, night) 唯一，
    并发的重叠预订在提交时由存储层拒绝
    """
    __tablename__ = "room_nights"
    __table_args__ = (
        UniqueConstraint("room_id", "night", name="uq_room_night"),
    )

    id = Column(Integer, primary_key=True)
    room_id = Column(Integer, ForeignKey("rooms.id"), nullable=False)
    night = Column(Date, nullable=False)
    reservation_id = Column(Integer, ForeignKey("reservations.id"), nullable=False, index=True)

    reservation = relationship("Reservation", back_populates="nights")


class SystemSetting(Base):
    """系统设置 - 持久化标志位（如初始化数据是否已写入）"""
    __tablename__ = "system_settings"

    key = Column(String(100), primary_key=True)
    value = Column(String(500), nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
