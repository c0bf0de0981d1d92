"""Tests for the aggregation engine."""

from datetime import date, time, timedelta

import pytest

from hydrotrack.engine.aggregation import (
    classify_day,
    summarize_daily_totals,
    month_bounds,
    daily_total,
    monthly_calendar,
    stats_30_day,
)
from hydrotrack.models.intake import DayStatus


class TestClassifyDay:
    """Three-way calendar classification."""

    @pytest.mark.parametrize("total,goal,expected", [
        (0, 2000, DayStatus.NO_DATA),
        (1, 2000, DayStatus.BELOW_GOAL),
        (1999, 2000, DayStatus.BELOW_GOAL),
        (2000, 2000, DayStatus.GOAL_MET),
        (3500, 2000, DayStatus.GOAL_MET),
        (0, 0, DayStatus.NO_DATA),
        (10, 0, DayStatus.GOAL_MET),
    ])
    def test_classification(self, total, goal, expected):
        assert classify_day(total, goal) == expected


class TestSummarizeDailyTotals:
    """Pure window statistics."""

    def test_empty_window(self):
        stats = summarize_daily_totals([])

        assert stats.daily_totals == []
        assert stats.monthly_total == 0
        assert stats.daily_average == 0
        assert stats.best_day.date is None
        assert stats.best_day.total == 0

    def test_totals_average_and_best_day(self):
        stats = summarize_daily_totals([
            (date(2026, 5, 3), 1500),
            (date(2026, 5, 2), 2500),
            (date(2026, 5, 1), 500),
        ])

        assert stats.monthly_total == 4500
        assert stats.daily_average == 1500
        assert stats.best_day.date == date(2026, 5, 2)
        assert stats.best_day.total == 2500
        assert [d.date for d in stats.daily_totals] == [date(2026, 5, 3), date(2026, 5, 2), date(2026, 5, 1)]

    def test_best_day_tie_keeps_first_in_input_order(self):
        stats = summarize_daily_totals([
            (date(2026, 5, 3), 2000),
            (date(2026, 5, 2), 2000),
        ])

        assert stats.best_day.date == date(2026, 5, 3)

    def test_average_is_not_truncated(self):
        stats = summarize_daily_totals([(date(2026, 5, 2), 1000), (date(2026, 5, 1), 501)])

        assert stats.daily_average == pytest.approx(750.5)


def test_month_bounds_handles_leap_february():
    assert month_bounds(2028, 2) == (date(2028, 2, 1), date(2028, 2, 29))
    assert month_bounds(2026, 12) == (date(2026, 12, 1), date(2026, 12, 31))


class TestRepositoryBackedAggregation:
    """Aggregations over a real ledger."""

    def test_daily_total_with_no_records_is_zero(self, intake_repository, sample_user):
        assert daily_total(intake_repository, sample_user.id, date(2026, 5, 1)) == 0

    def test_daily_total_matches_listed_records(self, intake_repository, sample_user):
        day = date(2026, 5, 1)
        for amount, hour in [(250, 8), (400, 12), (150, 20)]:
            intake_repository.create(sample_user.id, amount, day, time(hour, 0, 0))
        intake_repository.create(sample_user.id, 999, day + timedelta(days=1), time(8, 0, 0))

        listed = intake_repository.list_for_user_on_date(sample_user.id, day)
        assert daily_total(intake_repository, sample_user.id, day) == sum(r.amount for r in listed) == 800

    def test_monthly_calendar(self, intake_repository, sample_user):
        uid = sample_user.id
        intake_repository.create(uid, 1200, date(2026, 5, 2), time(8, 0, 0))
        intake_repository.create(uid, 900, date(2026, 5, 2), time(18, 0, 0))
        intake_repository.create(uid, 300, date(2026, 5, 20), time(8, 0, 0))
        intake_repository.create(uid, 5000, date(2026, 6, 1), time(8, 0, 0))

        calendar = monthly_calendar(intake_repository, uid, 2026, 5, goal=2000)

        assert calendar.totals == {date(2026, 5, 2): 2100, date(2026, 5, 20): 300}
        assert [(d.date, d.status) for d in calendar.days] == [
            (date(2026, 5, 2), DayStatus.GOAL_MET),
            (date(2026, 5, 20), DayStatus.BELOW_GOAL),
        ]

    def test_monthly_calendar_uses_given_goal(self, intake_repository, sample_user):
        intake_repository.create(sample_user.id, 1500, date(2026, 5, 2), time(8, 0, 0))

        calendar = monthly_calendar(intake_repository, sample_user.id, 2026, 5, goal=1200)

        assert calendar.goal == 1200
        assert calendar.days[0].status == DayStatus.GOAL_MET

    def test_stats_with_no_records(self, intake_repository, sample_user):
        stats = stats_30_day(intake_repository, sample_user.id, today=date(2026, 5, 31))

        assert stats.monthly_total == 0
        assert stats.daily_average == 0
        assert stats.best_day.total == 0

    def test_stats_window_bounds(self, intake_repository, sample_user):
        uid = sample_user.id
        today = date(2026, 5, 31)
        intake_repository.create(uid, 100, today, time(8, 0, 0))
        intake_repository.create(uid, 200, today - timedelta(days=30), time(8, 0, 0))
        intake_repository.create(uid, 400, today - timedelta(days=31), time(8, 0, 0))
        intake_repository.create(uid, 800, today + timedelta(days=1), time(8, 0, 0))

        stats = stats_30_day(intake_repository, uid, today=today)

        assert stats.monthly_total == 300
        assert stats.daily_average == 150
        assert stats.best_day.date == today - timedelta(days=30)
        assert [d.date for d in stats.daily_totals] == [today, today - timedelta(days=30)]
