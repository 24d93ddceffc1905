"""
价格服务
按 间夜数 × 房型每晚价格 计算房费
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Union

from staybook.errors import InvalidRange
from staybook.models.ontology import RoomType

DateLike = Union[date, datetime]


def _as_date(value: DateLike) -> date:
    """只比较日期部分，丢弃时刻"""
    if isinstance(value, datetime):
        return value.date()
    return value


class PriceService:
    """价格服务"""

    def count_nights(self, check_in: DateLike, check_out: DateLike) -> int:
        """
        计算间夜数

        使用日历日差而非经过时长：10:00 入住、次日 09:00 离店仍计 1 晚。

        Raises:
            InvalidRange: 间夜数 <= 0
        """
        nights = (_as_date(check_out) - _as_date(check_in)).days
        if nights <= 0:
            raise InvalidRange("Check-out date must be after check-in date")
        return nights

    def price(self, room_type: RoomType, check_in: DateLike, check_out: DateLike) -> Decimal:
        """计算总房费"""
        nights = self.count_nights(check_in, check_out)
        return Decimal(nights) * Decimal(room_type.price_per_night)
