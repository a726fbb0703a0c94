"""Pydantic schemas for users and the login flow.

UserRead deliberately has no password or salt fields.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class UserCreate(BaseModel):
    login: str = Field(..., min_length=1, max_length=100)
    email: Optional[str] = Field(None, max_length=255)
    password: Optional[str] = None


class UserUpdate(BaseModel):
    login: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[str] = Field(None, max_length=255)

    @field_validator("login")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class UserRead(BaseModel):
    id: int
    login: str
    email: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class LoginRequest(BaseModel):
    login: Optional[str] = None
    password: Optional[str] = None


class TokenResponse(BaseModel):
    token: str
