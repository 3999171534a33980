from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.auth import get_current_user
from app.db.mongo import get_db
from app.models.balance import SuggestedSettlement, UserBalanceSummary
from app.models.group import Group
from app.models.user import UserResponse
from app.repositories.group_repo import GroupRepository
from app.routes.dependencies import get_group_service, get_member_group
from app.schemas.balance import BalanceResponse
from app.schemas.group import (
    GroupCreate,
    GroupDetailsResponse,
    GroupResponse,
    MemberInvite,
    MemberResponse,
    to_group_response,
)
from app.services.balance_service import summarize_balance, suggest_settlements
from app.services.group_service import GroupService
from app.utils.validation import MembershipError

router = APIRouter(prefix="/groups", tags=["groups"])


@router.post("", response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
async def create_group(
    group_data: GroupCreate,
    current_user: UserResponse = Depends(get_current_user),
    service: GroupService = Depends(get_group_service)
):
    """Create a group; the creator becomes its admin."""
    group = await service.create_group(group_data.name, group_data.description, current_user.id)
    return to_group_response(group)


@router.get("", response_model=List[GroupResponse])
async def list_groups(
    current_user: UserResponse = Depends(get_current_user),
    db = Depends(get_db)
):
    """List groups the current user belongs to."""
    repo = GroupRepository(db)
    groups = await repo.list_groups_for_user(current_user.id)
    return [to_group_response(group) for group in groups]


@router.get("/{group_id}", response_model=GroupDetailsResponse)
async def get_group_details(
    group: Group = Depends(get_member_group),
    service: GroupService = Depends(get_group_service)
):
    """Group with member profiles, expenses, settlements and balances."""
    return await service.get_details(group)


@router.post(
    "/{group_id}/members",
    response_model=MemberResponse,
    status_code=status.HTTP_201_CREATED
)
async def invite_member(
    invite: MemberInvite,
    group: Group = Depends(get_member_group),
    current_user: UserResponse = Depends(get_current_user),
    service: GroupService = Depends(get_group_service)
):
    """Add a member by name, reusing an existing account when the email matches."""
    try:
        return await service.invite_member(group, invite.name, current_user.id, invite.email)
    except MembershipError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(exc)
        )


@router.get("/{group_id}/balances", response_model=Dict[str, BalanceResponse])
async def get_balances(
    group: Group = Depends(get_member_group),
    service: GroupService = Depends(get_group_service)
):
    """Net balance of every member with activity in the group."""
    balances = await service.get_balances(group)
    return {
        user_id: BalanceResponse(user_id=b.user_id, amount_cents=b.amount_cents)
        for user_id, b in balances.items()
    }


@router.get("/{group_id}/balances/me", response_model=UserBalanceSummary)
async def get_my_balance(
    group: Group = Depends(get_member_group),
    current_user: UserResponse = Depends(get_current_user),
    service: GroupService = Depends(get_group_service)
):
    """What the current user is owed and owes in this group."""
    balances = await service.get_balances(group)
    return summarize_balance(balances, current_user.id)


@router.get("/{group_id}/balances/suggestions", response_model=List[SuggestedSettlement])
async def get_settle_up_suggestions(
    group: Group = Depends(get_member_group),
    service: GroupService = Depends(get_group_service)
):
    """Payments that would settle the group completely."""
    balances = await service.get_balances(group)
    return suggest_settlements(balances)
