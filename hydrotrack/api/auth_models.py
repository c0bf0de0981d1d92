"""Request/response models for authentication endpoints."""

from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from hydrotrack.models.constants import (
    DEFAULT_DAILY_WATER_GOAL,
    MAX_DAILY_WATER_GOAL,
    USERNAME_MIN_LENGTH,
    USERNAME_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
    PASSWORD_MAX_BYTES,
    NAME_MIN_LENGTH,
    NAME_MAX_LENGTH,
)
from hydrotrack.models.user import Gender


def blank_to_none(value):
    """Treat an empty or whitespace-only optional string as absent."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


class RegisterRequest(BaseModel):
    """Request model for registration.

    Any `role` sent by the client is ignored; new accounts are always plain users.
    """
    username: str = Field(..., min_length=USERNAME_MIN_LENGTH, max_length=USERNAME_MAX_LENGTH)
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)
    first_name: str = Field(..., min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    last_name: str = Field(..., min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    middle_name: Optional[str] = Field(None, min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    gender: Gender
    daily_water_goal: int = Field(DEFAULT_DAILY_WATER_GOAL, ge=0, le=MAX_DAILY_WATER_GOAL, strict=True)

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
        alias_generator = to_camel
        populate_by_name = True

    @field_validator("username", "first_name", "last_name")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Field is required")
        return value

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
        return value

    @field_validator("middle_name", mode="before")
    @classmethod
    def optional_middle_name(cls, value):
        return blank_to_none(value)


class LoginRequest(BaseModel):
    """Request model for login."""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Response model for authentication."""
    token: str
