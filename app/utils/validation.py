"""Membership checks applied before expenses and settlements are stored."""
from typing import Iterable

from app.models.group import Group


class ExpenseValidationError(Exception):
    """Raised when an expense or settlement does not fit its group."""
    pass


class MembershipError(Exception):
    """Raised when a group membership change is not allowed."""
    pass


def _require_members(group: Group, user_ids: Iterable[str], role: str) -> None:
    members = set(group.member_ids())
    missing = [uid for uid in user_ids if uid not in members]
    if missing:
        raise ExpenseValidationError(
            f"{role} not a member of this group: {', '.join(missing)}"
        )


def validate_expense_parties(group: Group, paid_by: str, split_between: list[str]) -> None:
    """Payer and every split participant must belong to the group."""
    if not split_between:
        raise ExpenseValidationError("An expense must be split between at least one member")
    _require_members(group, [paid_by], "Payer")
    _require_members(group, split_between, "Participant")


def validate_settlement_parties(group: Group, from_user: str, to_user: str) -> None:
    """Both settlement parties must belong to the group and differ."""
    if from_user == to_user:
        raise ExpenseValidationError("A settlement needs two different members")
    _require_members(group, [from_user, to_user], "Settlement party")
