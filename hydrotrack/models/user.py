"""User data model for hydrotrack."""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from hydrotrack.models.constants import DEFAULT_DAILY_WATER_GOAL


class Gender(str, Enum):
    """Gender enumeration."""
    MALE = "male"
    FEMALE = "female"


class UserRole(str, Enum):
    """Role enumeration (gates admin-only operations)."""
    USER = "user"
    ADMIN = "admin"


class User(BaseModel):
    """User model for hydrotrack.

    Never carries the password hash; that only lives on the database row.
    """

    id: int = Field(..., description="Unique user identifier")
    username: str = Field(..., description="Unique login name")
    email: str = Field(..., description="Unique email address")
    first_name: str = Field(..., description="First name")
    last_name: str = Field(..., description="Last name")
    middle_name: Optional[str] = Field(None, description="Middle name (optional)")
    gender: Gender = Field(..., description="Gender")
    daily_water_goal: int = Field(DEFAULT_DAILY_WATER_GOAL, ge=0, description="Daily hydration goal in ml")
    role: UserRole = Field(UserRole.USER, description="Access role")
    created_at: datetime = Field(..., description="User creation timestamp")
    updated_at: datetime = Field(..., description="User last update timestamp")

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
        alias_generator = to_camel
        populate_by_name = True


class UserSummary(BaseModel):
    """Minimal user projection for admin pickers."""

    id: int
    username: str
    first_name: str
    last_name: str
    middle_name: Optional[str] = None

    class Config:
        """Pydantic configuration."""
        alias_generator = to_camel
        populate_by_name = True
