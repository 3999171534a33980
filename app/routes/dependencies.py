from fastapi import Depends, HTTPException, status

from app.core.auth import get_current_user
from app.db.mongo import get_db
from app.models.group import Group
from app.models.user import UserResponse
from app.repositories.group_repo import GroupRepository
from app.services.group_service import GroupService


def get_group_service(db = Depends(get_db)) -> GroupService:
    return GroupService(db)


async def get_member_group(
    group_id: str,
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
) -> Group:
    """Resolve ``group_id`` from the path; 404 unless the caller is a member."""
    repo = GroupRepository(db)
    group = await repo.get_group(group_id, current_user.id)
    if not group:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Group not found"
        )
    return group
