"""
预订引擎错误分类

所有错误都上报给调用方，引擎内部不重试。
只有 StoreUnavailable 是暂时性的，调用方可退避后重试。
"""


class BookingError(ValueError):
    """预订引擎错误基类"""

    status_code = 400

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__name__)


class InvalidRange(BookingError):
    """日期范围无效（倒置或为空）"""

    status_code = 400


class InvalidGuestCount(BookingError):
    """入住人数无效"""

    status_code = 400


class CapacityExceeded(BookingError):
    """入住人数超过房型上限"""

    status_code = 400


class NotFound(BookingError):
    """预订 / 房间 / 房型不存在"""

    status_code = 404


class Forbidden(BookingError):
    """访问策略拒绝"""

    status_code = 403


class RoomUnavailable(BookingError):
    """提交时检测到日期重叠"""

    status_code = 409


class InvalidTransition(BookingError):
    """状态机不允许的转换"""

    status_code = 409


class Conflict(BookingError):
    """库存唯一性冲突（房号、房型名称）或被引用的删除"""

    status_code = 409


class StoreUnavailable(BookingError):
    """持久化层失败或超时"""

    status_code = 503
