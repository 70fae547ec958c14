"""
Pydantic schemas for user-related request/response validation.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

# bcrypt only looks at the first 72 bytes of a password
PASSWORD_MAX_LENGTH = 72


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=PASSWORD_MAX_LENGTH)

    model_config = {"extra": "forbid"}


class AdminCreate(UserCreate):
    admin_code: str = Field(..., alias="adminCode")

    model_config = {"extra": "forbid", "populate_by_name": True}


class UserLogin(BaseModel):
    email: EmailStr
    password: str

    model_config = {"extra": "forbid"}


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6, max_length=PASSWORD_MAX_LENGTH)

    model_config = {"extra": "forbid"}


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    is_admin: bool = Field(..., alias="isAdmin")
    created_at: datetime = Field(..., alias="createdAt")

    model_config = {"from_attributes": True, "populate_by_name": True}


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class AuthResponse(Token):
    user: UserResponse
