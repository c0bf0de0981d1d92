"""Request/response models for user and water intake endpoints."""

import datetime as dt
import re
from typing import Optional
from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from hydrotrack.api.auth_models import blank_to_none
from hydrotrack.models.constants import (
    DATE_PATTERN,
    TIME_PATTERN,
    NAME_MIN_LENGTH,
    NAME_MAX_LENGTH,
    MAX_DAILY_WATER_GOAL,
    MAX_INTAKE_AMOUNT,
    MAX_DB_INTEGER,
)
from hydrotrack.models.intake import DayStatus
from hydrotrack.models.user import Gender, UserRole


def _require_pattern(value, pattern: str, message: str):
    """Reject anything that is not a string matching `pattern` before type parsing."""
    if not isinstance(value, str) or not re.match(pattern, value):
        raise ValueError(message)
    return value


class CamelModel(BaseModel):
    """Base for request bodies exchanged with the client in camelCase."""

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
        alias_generator = to_camel
        populate_by_name = True


class _NameFields(CamelModel):
    first_name: str = Field(..., min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    last_name: str = Field(..., min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    middle_name: Optional[str] = Field(None, min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)

    @field_validator("first_name", "last_name")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Field is required")
        return value

    @field_validator("middle_name", mode="before")
    @classmethod
    def optional_middle_name(cls, value):
        return blank_to_none(value)


class ProfileUpdateRequest(_NameFields):
    """Self-service profile update. Gender and goal are left unchanged when omitted."""
    gender: Optional[Gender] = None
    daily_water_goal: Optional[int] = Field(None, ge=0, le=MAX_DAILY_WATER_GOAL, strict=True)


class AdminUserUpdateRequest(_NameFields):
    """Admin update of any user, including role."""
    gender: Gender
    daily_water_goal: int = Field(..., ge=0, le=MAX_DAILY_WATER_GOAL, strict=True)
    role: UserRole


class IntakeCreateRequest(CamelModel):
    """Self-service intake; date and time are stamped by the server."""
    amount: int = Field(..., gt=0, le=MAX_INTAKE_AMOUNT, strict=True)


class AdminIntakeCreateRequest(CamelModel):
    """Admin intake for any user with an explicit date and time."""
    user_id: int = Field(..., gt=0, le=MAX_DB_INTEGER, strict=True)
    amount: int = Field(..., gt=0, le=MAX_INTAKE_AMOUNT, strict=True)
    date: dt.date
    time: dt.time

    @field_validator("date", mode="before")
    @classmethod
    def date_format(cls, value):
        return _require_pattern(value, DATE_PATTERN, "Date is required (YYYY-MM-DD)")

    @field_validator("time", mode="before")
    @classmethod
    def time_format(cls, value):
        return _require_pattern(value, TIME_PATTERN, "Time is required (HH:MM:SS)")


class IntakeUpdateRequest(CamelModel):
    """Admin edit of a record; only the fields sent are changed."""
    amount: Optional[int] = Field(None, gt=0, le=MAX_INTAKE_AMOUNT, strict=True)
    time: Optional[dt.time] = None

    @field_validator("time", mode="before")
    @classmethod
    def time_format(cls, value):
        if value is None:
            return value
        return _require_pattern(value, TIME_PATTERN, "Time must be HH:MM:SS")


class MessageResponse(BaseModel):
    """Plain confirmation message."""
    msg: str


class DayTotalResponse(BaseModel):
    """Total for one day against the user's goal."""
    date: dt.date
    total: int
    goal: int
    status: DayStatus

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
