from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.auth import get_current_user
from app.db.mongo import get_db
from app.models.group import Group
from app.models.user import UserResponse
from app.repositories.expense_repo import ExpenseRepository
from app.routes.dependencies import get_group_service, get_member_group
from app.schemas.expense import ExpenseCreate, ExpenseResponse, to_expense_response
from app.services.group_service import GroupService
from app.utils.validation import ExpenseValidationError

router = APIRouter(prefix="/groups/{group_id}/expenses", tags=["expenses"])


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def add_expense(
    expense_in: ExpenseCreate,
    group: Group = Depends(get_member_group),
    current_user: UserResponse = Depends(get_current_user),
    service: GroupService = Depends(get_group_service)
):
    """Record an expense split equally between the chosen members."""
    try:
        expense = await service.add_expense(group, expense_in, current_user.id)
    except ExpenseValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc)
        )
    return to_expense_response(expense)


@router.get("", response_model=List[ExpenseResponse])
async def list_expenses(
    group: Group = Depends(get_member_group),
    db = Depends(get_db)
):
    """Expenses of the group, newest first."""
    expenses = await ExpenseRepository(db).list_by_group(str(group.id))
    return [to_expense_response(e) for e in expenses]
