from datetime import datetime
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from app.models.base import MongoModel, _utcnow


class GroupRole(str, Enum):
    ADMIN = "admin"
    MEMBER = "member"


# Embedded in the group document
class GroupMember(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    user_id: str
    role: GroupRole = Field(default=GroupRole.MEMBER, validate_default=True)
    joined_at: datetime = Field(default_factory=_utcnow)


class Group(MongoModel):
    name: str
    description: str = ""
    created_by: str
    members: List[GroupMember] = []
    is_deleted: bool = False

    def member_ids(self) -> List[str]:
        return [m.user_id for m in self.members]

    def has_member(self, user_id: str) -> bool:
        return any(m.user_id == user_id for m in self.members)
