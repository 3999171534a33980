from pydantic import BaseModel, Field, model_validator
from datetime import datetime
from typing import Optional
from app.models.settlement import Settlement

class SettlementCreate(BaseModel):
    from_user: str
    to_user: str
    amount_cents: int = Field(..., gt=0)
    date: Optional[datetime] = None

    @model_validator(mode="after")
    def distinct_parties(self):
        if self.from_user == self.to_user:
            raise ValueError("from_user and to_user must differ")
        return self

class SettlementResponse(BaseModel):
    id: str
    group_id: str
    from_user: str
    to_user: str
    amount_cents: int
    date: datetime
    created_by: Optional[str] = None

def to_settlement_response(settlement: Settlement) -> SettlementResponse:
    """Convert Settlement model to SettlementResponse schema."""
    return SettlementResponse(
        id=str(settlement.id),
        group_id=settlement.group_id,
        from_user=settlement.from_user,
        to_user=settlement.to_user,
        amount_cents=settlement.amount_cents,
        date=settlement.date,
        created_by=settlement.created_by
    )
