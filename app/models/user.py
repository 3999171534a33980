from pydantic import AfterValidator, BaseModel, EmailStr, Field, ConfigDict
from datetime import datetime
from typing import Annotated, Optional
from bson import ObjectId

# Emails are matched case-insensitively; EmailStr only lowercases the domain
NormalizedEmail = Annotated[EmailStr, AfterValidator(str.lower)]

class UserBase(BaseModel):
    """Base user schema."""
    name: str = Field(..., min_length=1, max_length=100)
    email: Optional[EmailStr] = None

class UserCreate(UserBase):
    """User signup schema."""
    email: NormalizedEmail
    password: str = Field(..., min_length=8, max_length=72)

class UserUpdate(BaseModel):
    """Profile update schema."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)

class UserResponse(UserBase):
    """User response schema."""
    id: str = Field(validation_alias="_id", serialization_alias="id")
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True
    )

class UserInDB(BaseModel):
    """
    User database schema.

    Profiles created by a group invitation have no password (and possibly no
    email) until the person signs up with that email.
    """
    id: ObjectId = Field(alias="_id")
    name: str
    email: Optional[str] = None
    password_hash: Optional[str] = None
    invited_by: Optional[str] = None
    is_deleted: bool = False
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True,
        arbitrary_types_allowed=True
    )

    @property
    def is_placeholder(self) -> bool:
        return self.password_hash is None
