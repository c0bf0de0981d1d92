"""Data models for hydrotrack."""

from hydrotrack.models.user import User, UserSummary, Gender, UserRole
from hydrotrack.models.intake import (
    IntakeRecord,
    DayStatus,
    DailyTotal,
    BestDay,
    IntakeStats,
    CalendarDay,
    MonthCalendar,
)

__all__ = [
    "User",
    "UserSummary",
    "Gender",
    "UserRole",
    "IntakeRecord",
    "DayStatus",
    "DailyTotal",
    "BestDay",
    "IntakeStats",
    "CalendarDay",
    "MonthCalendar",
]
