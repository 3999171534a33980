"""
Expense model - a payment by one member split equally among participants.

All amounts are integer cents. The per-participant shares are derived with
``split_evenly`` and also materialised on the stored document as ``splits``.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from app.models.base import MongoModel, _utcnow, ensure_utc
from app.utils.money import split_evenly


class ExpenseSplit(BaseModel):
    user_id: str
    amount_cents: int


class Expense(MongoModel):
    group_id: str
    description: str = Field(..., min_length=1, max_length=200)
    amount_cents: int = Field(..., ge=0)
    paid_by: str
    split_between: List[str] = Field(..., min_length=1)
    date: datetime = Field(default_factory=_utcnow)
    created_by: Optional[str] = None

    @field_validator("date")
    @classmethod
    def date_as_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @field_validator("split_between")
    @classmethod
    def dedupe_participants(cls, value: List[str]) -> List[str]:
        return list(dict.fromkeys(value))

    def shares(self) -> Dict[str, int]:
        """Cents owed by each participant for this expense."""
        return split_evenly(self.amount_cents, self.split_between)

    def splits(self) -> List[ExpenseSplit]:
        return [
            ExpenseSplit(user_id=user_id, amount_cents=amount)
            for user_id, amount in self.shares().items()
        ]

    def to_document(self) -> dict:
        doc = super().to_document()
        doc["splits"] = [s.model_dump() for s in self.splits()]
        return doc
