"""Intake aggregation for hydrotrack.

Summarizes ledger rows into day totals, a month calendar classified against
the daily goal, and rolling-window statistics. The arithmetic lives in pure
functions so it can be tested without a database.
"""

import calendar
from datetime import date, timedelta
from typing import Iterable, List, Optional, Tuple

from hydrotrack.database.intake_repository import IntakeRepository
from hydrotrack.models.constants import STATS_WINDOW_DAYS
from hydrotrack.models.intake import (
    BestDay,
    CalendarDay,
    DailyTotal,
    DayStatus,
    IntakeStats,
    MonthCalendar,
)


def classify_day(total: int, goal: int) -> DayStatus:
    """Classify a day total against the goal.

    A day with nothing logged is NO_DATA, a positive total under the goal is
    BELOW_GOAL, and anything at or above the goal is GOAL_MET.
    """
    if total <= 0:
        return DayStatus.NO_DATA
    if total >= goal:
        return DayStatus.GOAL_MET
    return DayStatus.BELOW_GOAL


def summarize_daily_totals(daily_totals: Iterable[Tuple[date, int]]) -> IntakeStats:
    """Build window statistics from (date, total) pairs.

    The pairs are kept in the order given. The best day is the first pair
    holding the maximum total, and the average divides by the number of days
    with data (1 when there are none).

    Args:
        daily_totals: Iterable of (date, total) pairs

    Returns:
        IntakeStats for the window
    """
    totals = [DailyTotal(date=day, total=total) for day, total in daily_totals]

    monthly_total = sum(item.total for item in totals)
    daily_average = monthly_total / (len(totals) or 1)

    best_day = BestDay()
    for item in totals:
        if item.total > best_day.total:
            best_day = BestDay(date=item.date, total=item.total)

    return IntakeStats(
        daily_totals=totals,
        monthly_total=monthly_total,
        daily_average=daily_average,
        best_day=best_day,
    )


def month_bounds(year: int, month: int) -> Tuple[date, date]:
    """First and last calendar date of a month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def daily_total(repository: IntakeRepository, user_id: int, on_date: date) -> int:
    """Sum of a user's intake amounts on one date (0 when nothing is logged)."""
    return sum(record.amount for record in repository.list_for_user_on_date(user_id, on_date))


def monthly_calendar(
    repository: IntakeRepository,
    user_id: int,
    year: int,
    month: int,
    goal: int,
) -> MonthCalendar:
    """Per-day totals for one month, with each day classified against `goal`.

    Only dates with at least one record appear.
    """
    start, end = month_bounds(year, month)
    rows = sorted(repository.daily_totals(user_id, start, end))
    days: List[CalendarDay] = [
        CalendarDay(date=day, total=total, status=classify_day(total, goal))
        for day, total in rows
    ]
    return MonthCalendar(
        year=year,
        month=month,
        goal=goal,
        totals={day: total for day, total in rows},
        days=days,
    )


def stats_30_day(repository: IntakeRepository, user_id: int, today: Optional[date] = None) -> IntakeStats:
    """Statistics over the window [today - 30 days, today], newest day first."""
    today = today or date.today()
    start = today - timedelta(days=STATS_WINDOW_DAYS)
    return summarize_daily_totals(repository.daily_totals(user_id, start, today))
