"""Pydantic schemas for employees and their check (clock) records."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


# ─── Employees ──────────────────────────────────────────

class EmployeeCreate(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: Optional[str] = Field(None, max_length=255)


class EmployeeUpdate(BaseModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[str] = Field(None, max_length=255)

    @field_validator("first_name", "last_name")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class EmployeeRead(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


# ─── Checks ─────────────────────────────────────────────

class CheckCreate(BaseModel):
    checkin: bool
    date: Optional[datetime] = None


class CheckUpdate(BaseModel):
    checkin: Optional[bool] = None
    date: Optional[datetime] = None

    @field_validator("checkin", "date")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class CheckReplace(BaseModel):
    checkin: bool
    date: datetime
    employee_id: int


class CheckRead(BaseModel):
    id: int
    checkin: bool
    date: datetime
    employee_id: int

    model_config = {"from_attributes": True}


class CountResponse(BaseModel):
    count: int
