from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from app.models.base import MongoModel, _utcnow, ensure_utc


class Settlement(MongoModel):
    """Direct payment of ``amount_cents`` from ``from_user`` to ``to_user``."""
    group_id: str
    from_user: str
    to_user: str
    amount_cents: int = Field(..., ge=0)
    date: datetime = Field(default_factory=_utcnow)
    created_by: Optional[str] = None

    @field_validator("date")
    @classmethod
    def date_as_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)
