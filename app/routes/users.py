from fastapi import APIRouter, Depends, HTTPException, status

from app.core.auth import get_current_user
from app.db.mongo import get_db
from app.models.user import UserResponse, UserUpdate
from app.repositories.user_repo import UserRepository

router = APIRouter(prefix="/users", tags=["users"])


@router.patch("/me", response_model=UserResponse)
async def update_my_profile(
    user_update: UserUpdate,
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """Update current user profile"""
    updates = user_update.model_dump(exclude_unset=True, exclude_none=True)
    if not updates:
        return current_user

    user = await UserRepository(db).update_user(current_user.id, updates)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    return UserResponse(
        id=str(user.id),
        name=user.name,
        email=user.email,
        created_at=user.created_at,
        updated_at=user.updated_at
    )
