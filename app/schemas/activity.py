from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class ActivityItem(BaseModel):
    """One entry of the recent-activity feed."""
    type: Literal["expense", "settlement"]
    id: str
    description: str
    amount_cents: int
    date: datetime
    group_id: str
    group_name: str
