"""Water intake data models for hydrotrack."""

import datetime as dt
from enum import Enum
from typing import Dict, List, Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class IntakeRecord(BaseModel):
    """A single logged water intake event.

    Date and time are naive local values; no timezone normalization is applied.
    """

    id: int = Field(..., description="Unique record identifier")
    user_id: int = Field(..., description="Owning user ID")
    amount: int = Field(..., gt=0, description="Amount in milliliters")
    date: dt.date = Field(..., description="Calendar date of the intake")
    time: dt.time = Field(..., description="Time of day of the intake")
    created_at: dt.datetime = Field(..., description="Record creation timestamp")
    updated_at: dt.datetime = Field(..., description="Record last update timestamp")

    class Config:
        """Pydantic configuration."""
        alias_generator = to_camel
        populate_by_name = True


class DayStatus(str, Enum):
    """Three-way classification of a calendar day against the daily goal."""
    NO_DATA = "no_data"
    BELOW_GOAL = "below_goal"
    GOAL_MET = "goal_met"


class DailyTotal(BaseModel):
    """Sum of intake amounts for one date."""

    date: dt.date
    total: int


class BestDay(BaseModel):
    """Highest single-day total in a window (date is None when the window is empty)."""

    date: Optional[dt.date] = None
    total: int = 0


class IntakeStats(BaseModel):
    """Rolling window statistics."""

    daily_totals: List[DailyTotal] = Field(default_factory=list)
    monthly_total: int = 0
    daily_average: float = 0
    best_day: BestDay = Field(default_factory=BestDay)

    class Config:
        """Pydantic configuration."""
        alias_generator = to_camel
        populate_by_name = True


class CalendarDay(BaseModel):
    """One calendar cell that has data."""

    date: dt.date
    total: int
    status: DayStatus

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


class MonthCalendar(BaseModel):
    """Per-day totals for one month, classified against a goal."""

    year: int
    month: int
    goal: int
    totals: Dict[dt.date, int] = Field(default_factory=dict, description="Map of date to day total (days with data only)")
    days: List[CalendarDay] = Field(default_factory=list)

    class Config:
        """Pydantic configuration."""
        alias_generator = to_camel
        populate_by_name = True
