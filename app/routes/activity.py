from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.core.auth import get_current_user
from app.core.config import settings
from app.models.user import UserResponse
from app.routes.dependencies import get_group_service
from app.schemas.activity import ActivityItem
from app.services.group_service import GroupService

router = APIRouter(prefix="/activity", tags=["activity"])


@router.get("", response_model=List[ActivityItem])
async def recent_activity(
    limit: Optional[int] = Query(None, ge=1, le=settings.ACTIVITY_MAX_LIMIT),
    current_user: UserResponse = Depends(get_current_user),
    service: GroupService = Depends(get_group_service)
):
    """Latest expenses and settlements across the current user's groups."""
    return await service.recent_activity(current_user.id, limit or settings.ACTIVITY_LIMIT)
