from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from app.models.expense import Expense, ExpenseSplit


class ExpenseCreate(BaseModel):
    description: str = Field(..., min_length=1, max_length=200)
    amount_cents: int = Field(..., gt=0)
    paid_by: str
    split_between: List[str] = Field(..., min_length=1)
    date: Optional[datetime] = None


class ExpenseResponse(BaseModel):
    id: str
    group_id: str
    description: str
    amount_cents: int
    paid_by: str
    split_between: List[str]
    splits: List[ExpenseSplit]
    date: datetime
    created_by: Optional[str] = None


def to_expense_response(expense: Expense) -> ExpenseResponse:
    """Convert Expense model to ExpenseResponse schema."""
    return ExpenseResponse(
        id=str(expense.id),
        group_id=expense.group_id,
        description=expense.description,
        amount_cents=expense.amount_cents,
        paid_by=expense.paid_by,
        split_between=expense.split_between,
        splits=expense.splits(),
        date=expense.date,
        created_by=expense.created_by
    )
