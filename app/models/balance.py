"""
Balance records - derived from expenses and settlements, never persisted.

Sign convention:
- Positive = the group owes this member
- Negative = this member owes the group
"""

from pydantic import BaseModel


class Balance(BaseModel):
    user_id: str
    amount_cents: int = 0

    @property
    def amount(self) -> float:
        return self.amount_cents / 100


class UserBalanceSummary(BaseModel):
    """One member's position split into what they are owed and what they owe."""
    user_id: str
    is_owed_cents: int = 0
    owes_cents: int = 0
    net_cents: int = 0


class SuggestedSettlement(BaseModel):
    from_user: str
    to_user: str
    amount_cents: int
