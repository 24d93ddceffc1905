"""
客人档案服务
档案由外部身份服务拥有；引擎在首次预订时按需创建
"""
from typing import Optional
import logging
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from staybook.database import store_call
from staybook.errors import StoreUnavailable
from staybook.models.ontology import GuestProfile, GuestRole

logger = logging.getLogger(__name__)


class GuestService:
    """客人档案服务"""

    def __init__(self, db: Session):
        self.db = db

    def get_profile(self, guest_id: str) -> Optional[GuestProfile]:
        """获取客人档案"""
        with store_call(self.db, "load guest profile"):
            return self.db.query(GuestProfile).filter(GuestProfile.id == guest_id).first()

    def ensure_profile(self, guest_id: str, email: Optional[str] = None,
                       name: Optional[str] = None,
                       role: GuestRole = GuestRole.GUEST) -> GuestProfile:
        """
        获取或创建客人档案（不提交，随调用方事务一起提交）

        名称缺省时使用邮箱。
        """
        profile = self.get_profile(guest_id)
        if profile:
            return profile

        profile = GuestProfile(
            id=guest_id,
            email=email,
            name=name or email,
            role=role,
        )
        self.db.add(profile)
        logger.info(f"Guest profile created lazily: {guest_id}")
        return profile

    def get_or_create_profile(self, guest_id: str, email: Optional[str] = None,
                              name: Optional[str] = None,
                              role: GuestRole = GuestRole.GUEST) -> GuestProfile:
        """
        获取或创建客人档案并提交（独立短事务）

        同一新客人的并发请求可能同时插入档案，
        主键冲突的一方回滚后读取已提交的档案。
        """
        profile = self.ensure_profile(guest_id, email, name, role)
        with store_call(self.db, "save guest profile"):
            try:
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                profile = self.get_profile(guest_id)
                if profile is None:
                    raise StoreUnavailable(f"Guest profile {guest_id} could not be stored")
                logger.info(f"Guest profile {guest_id} created concurrently, reusing it")
                return profile
            self.db.refresh(profile)
        return profile
