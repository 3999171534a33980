from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.auth import get_current_user
from app.db.mongo import get_db
from app.models.group import Group
from app.models.user import UserResponse
from app.repositories.settlement_repo import SettlementRepository
from app.routes.dependencies import get_group_service, get_member_group
from app.schemas.settlement import SettlementCreate, SettlementResponse, to_settlement_response
from app.services.group_service import GroupService
from app.utils.validation import ExpenseValidationError

router = APIRouter(prefix="/groups/{group_id}/settlements", tags=["settlements"])


@router.post("", response_model=SettlementResponse, status_code=status.HTTP_201_CREATED)
async def add_settlement(
    settlement_in: SettlementCreate,
    group: Group = Depends(get_member_group),
    current_user: UserResponse = Depends(get_current_user),
    service: GroupService = Depends(get_group_service)
):
    """Record a direct payment between two members."""
    try:
        settlement = await service.add_settlement(group, settlement_in, current_user.id)
    except ExpenseValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc)
        )
    return to_settlement_response(settlement)


@router.get("", response_model=List[SettlementResponse])
async def list_settlements(
    group: Group = Depends(get_member_group),
    db = Depends(get_db)
):
    """Settlements of the group, newest first."""
    settlements = await SettlementRepository(db).list_by_group(str(group.id))
    return [to_settlement_response(s) for s in settlements]
