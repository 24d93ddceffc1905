"""
客人档案路由
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from staybook.database import get_db
from staybook.errors import BookingError
from staybook.models.schemas import GuestProfileResponse
from staybook.security.access_policy import Actor
from staybook.security.auth import get_current_actor
from staybook.services.guest_service import GuestService

router = APIRouter(prefix="/guests", tags=["客人"])


@router.get("/me", response_model=GuestProfileResponse)
def get_my_profile(
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor)
):
    """获取本人档案（不存在时按令牌信息创建）"""
    service = GuestService(db)
    try:
        profile = service.get_or_create_profile(
            actor.id, email=actor.email, name=actor.name, role=actor.role
        )
    except BookingError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return GuestProfileResponse.model_validate(profile)
