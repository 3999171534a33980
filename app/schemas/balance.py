from pydantic import BaseModel


class BalanceResponse(BaseModel):
    """Signed balance: positive = is owed, negative = owes."""
    user_id: str
    amount_cents: int
