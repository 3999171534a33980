from pydantic import BaseModel
from app.models.user import NormalizedEmail, UserResponse


class UserLogin(BaseModel):
    """Schema for user login"""
    email: NormalizedEmail
    password: str


class TokenResponse(BaseModel):
    """Schema for authentication token response"""
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
