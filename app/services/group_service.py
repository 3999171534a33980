"""
GroupService - assembles group views on top of the repositories.

- Group details: members, expenses, settlements and computed balances
- Member invitation (existing account by email, or placeholder profile)
- Recording expenses and settlements after membership checks
- Recent activity across all of a user's groups
"""

import logging
from typing import Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.models.balance import Balance
from app.models.expense import Expense
from app.models.group import Group
from app.models.settlement import Settlement
from app.repositories.expense_repo import ExpenseRepository
from app.repositories.group_repo import GroupRepository
from app.repositories.settlement_repo import SettlementRepository
from app.repositories.user_repo import UserRepository
from app.schemas.activity import ActivityItem
from app.schemas.balance import BalanceResponse
from app.schemas.expense import ExpenseCreate, to_expense_response
from app.schemas.group import GroupDetailsResponse, MemberResponse
from app.schemas.settlement import SettlementCreate, to_settlement_response
from app.services.balance_service import compute_balances
from app.utils.money import format_cents
from app.utils.validation import (
    MembershipError,
    validate_expense_parties,
    validate_settlement_parties,
)

logger = logging.getLogger(__name__)

SETTLEMENT_ACTIVITY_DESCRIPTION = "Settlement between members"


class GroupService:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.groups = GroupRepository(db)
        self.users = UserRepository(db)
        self.expenses = ExpenseRepository(db)
        self.settlements = SettlementRepository(db)

    async def create_group(self, name: str, description: str, created_by: str) -> Group:
        group = await self.groups.create_group(name, description, created_by)
        logger.info("Group %s created by %s", group.id, created_by)
        return group

    async def get_balances(self, group: Group) -> Dict[str, Balance]:
        """Recompute balances from the group's current expenses and settlements."""
        group_id = str(group.id)
        expenses = await self.expenses.list_by_group(group_id)
        settlements = await self.settlements.list_by_group(group_id)
        return compute_balances(expenses, settlements)

    async def get_details(self, group: Group) -> GroupDetailsResponse:
        group_id = str(group.id)
        expenses = await self.expenses.list_by_group(group_id)
        settlements = await self.settlements.list_by_group(group_id)
        balances = compute_balances(expenses, settlements)

        profiles = {
            str(user.id): user
            for user in await self.users.get_users_by_ids(group.member_ids())
        }
        members = []
        for member in group.members:
            profile = profiles.get(member.user_id)
            members.append(MemberResponse(
                user_id=member.user_id,
                name=profile.name if profile else "Unknown member",
                email=profile.email if profile else None,
                role=member.role,
                joined_at=member.joined_at
            ))

        return GroupDetailsResponse(
            id=group_id,
            name=group.name,
            description=group.description,
            created_by=group.created_by,
            created_at=group.created_at,
            members=members,
            expenses=[to_expense_response(e) for e in expenses],
            settlements=[to_settlement_response(s) for s in settlements],
            balances={
                user_id: BalanceResponse(user_id=b.user_id, amount_cents=b.amount_cents)
                for user_id, b in balances.items()
            }
        )

    async def invite_member(
        self, group: Group, name: str, invited_by: str, email: Optional[str] = None
    ) -> MemberResponse:
        """
        Add someone to the group.

        With an email that belongs to a known user, that user is added.
        Otherwise a placeholder profile is created for them first.
        Raises MembershipError if they are already a member.
        """
        user = await self.users.get_user_by_email(email) if email else None
        if user is None:
            user = await self.users.create_placeholder(name, invited_by, email)
            logger.info("Created placeholder profile %s for group %s", user.id, group.id)

        user_id = str(user.id)
        if group.has_member(user_id):
            raise MembershipError("User is already a member of this group")

        updated = await self.groups.add_member(str(group.id), user_id)
        if updated is None:
            raise MembershipError("User is already a member of this group")

        member = next(m for m in updated.members if m.user_id == user_id)
        logger.info("Added user %s to group %s", user_id, group.id)
        return MemberResponse(
            user_id=user_id,
            name=user.name,
            email=user.email,
            role=member.role,
            joined_at=member.joined_at
        )

    async def add_expense(
        self, group: Group, expense_in: ExpenseCreate, created_by: str
    ) -> Expense:
        """Validate and store an expense. Raises ExpenseValidationError."""
        validate_expense_parties(group, expense_in.paid_by, expense_in.split_between)

        data = expense_in.model_dump(exclude_none=True)
        expense = Expense(group_id=str(group.id), created_by=created_by, **data)
        expense = await self.expenses.create_expense(expense)
        logger.info(
            "Expense %s of %s added to group %s by %s",
            expense.id, format_cents(expense.amount_cents), group.id, created_by
        )
        return expense

    async def add_settlement(
        self, group: Group, settlement_in: SettlementCreate, created_by: str
    ) -> Settlement:
        """Validate and store a settlement. Raises ExpenseValidationError."""
        validate_settlement_parties(group, settlement_in.from_user, settlement_in.to_user)

        data = settlement_in.model_dump(exclude_none=True)
        settlement = Settlement(group_id=str(group.id), created_by=created_by, **data)
        settlement = await self.settlements.create_settlement(settlement)
        logger.info(
            "Settlement %s of %s from %s to %s recorded in group %s",
            settlement.id, format_cents(settlement.amount_cents),
            settlement.from_user, settlement.to_user, group.id
        )
        return settlement

    async def recent_activity(self, user_id: str, limit: int) -> List[ActivityItem]:
        """Expenses and settlements from all of the user's groups, newest first."""
        groups = await self.groups.list_groups_for_user(user_id)
        if not groups:
            return []

        names = {str(g.id): g.name for g in groups}
        group_ids = list(names)

        expenses = await self.expenses.list_recent(group_ids, limit)
        settlements = await self.settlements.list_recent(group_ids, limit)

        items = [
            ActivityItem(
                type="expense",
                id=str(e.id),
                description=e.description,
                amount_cents=e.amount_cents,
                date=e.date,
                group_id=e.group_id,
                group_name=names.get(e.group_id, "")
            )
            for e in expenses
        ]
        items.extend(
            ActivityItem(
                type="settlement",
                id=str(s.id),
                description=SETTLEMENT_ACTIVITY_DESCRIPTION,
                amount_cents=s.amount_cents,
                date=s.date,
                group_id=s.group_id,
                group_name=names.get(s.group_id, "")
            )
            for s in settlements
        )

        items.sort(key=lambda item: item.date, reverse=True)
        return items[:limit]