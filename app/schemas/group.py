"""Group, membership and group-details schemas."""
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from app.models.group import Group
from app.models.user import NormalizedEmail
from app.schemas.balance import BalanceResponse
from app.schemas.expense import ExpenseResponse
from app.schemas.settlement import SettlementResponse


class GroupCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field("", max_length=500)


class MemberInvite(BaseModel):
    """Invite someone by name, optionally matching an existing account by email."""
    name: str = Field(..., min_length=1, max_length=100)
    email: Optional[NormalizedEmail] = None


class MemberResponse(BaseModel):
    user_id: str
    name: str
    email: Optional[str] = None
    role: str
    joined_at: datetime


class GroupResponse(BaseModel):
    id: str
    name: str
    description: str
    created_by: str
    members: List[str]
    created_at: datetime


class GroupDetailsResponse(BaseModel):
    id: str
    name: str
    description: str
    created_by: str
    created_at: datetime
    members: List[MemberResponse]
    expenses: List[ExpenseResponse]
    settlements: List[SettlementResponse]
    balances: Dict[str, BalanceResponse]


def to_group_response(group: Group) -> GroupResponse:
    return GroupResponse(
        id=str(group.id),
        name=group.name,
        description=group.description,
        created_by=group.created_by,
        members=group.member_ids(),
        created_at=group.created_at
    )
