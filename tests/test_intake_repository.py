"""Tests for IntakeRepository (ledger) operations."""

from datetime import date, datetime, time

import pytest
from sqlalchemy.exc import IntegrityError

from hydrotrack.database.models import WaterIntakeDB


class TestIntakeRepository:
    """Test IntakeRepository CRUD and queries."""

    def test_log_now_stamps_server_time(self, intake_repository, sample_user):
        now = datetime(2026, 3, 14, 9, 26, 53, 589793)
        record = intake_repository.log_now(sample_user.id, 500, now=now)

        assert record.amount == 500
        assert record.user_id == sample_user.id
        assert record.date == date(2026, 3, 14)
        assert record.time == time(9, 26, 53)

    def test_log_now_then_list_today(self, intake_repository, sample_user):
        intake_repository.log_now(sample_user.id, 500)

        records = intake_repository.list_for_user_on_date(sample_user.id, date.today())
        assert len(records) == 1
        assert records[0].amount == 500
        assert records[0].date == date.today()

    def test_list_on_date_ordered_by_time(self, intake_repository, sample_user):
        day = date(2026, 5, 1)
        intake_repository.create(sample_user.id, 300, day, time(18, 0, 0))
        intake_repository.create(sample_user.id, 100, day, time(7, 30, 0))
        intake_repository.create(sample_user.id, 200, day, time(12, 15, 0))
        intake_repository.create(sample_user.id, 999, date(2026, 5, 2), time(1, 0, 0))

        records = intake_repository.list_for_user_on_date(sample_user.id, day)
        assert [r.amount for r in records] == [100, 200, 300]

    def test_list_on_date_is_scoped_to_user(self, intake_repository, user_repository, sample_user, sample_user_data):
        other = user_repository.create(**{**sample_user_data, "username": "bob", "email": "bob@x.com"})
        day = date(2026, 5, 1)
        intake_repository.create(other.id, 250, day, time(8, 0, 0))

        assert intake_repository.list_for_user_on_date(sample_user.id, day) == []

    def test_range_is_inclusive_and_ordered(self, intake_repository, sample_user):
        uid = sample_user.id
        intake_repository.create(uid, 1, date(2026, 4, 30), time(23, 0, 0))
        intake_repository.create(uid, 2, date(2026, 5, 3), time(8, 0, 0))
        intake_repository.create(uid, 3, date(2026, 5, 1), time(9, 0, 0))
        intake_repository.create(uid, 4, date(2026, 5, 1), time(6, 0, 0))
        intake_repository.create(uid, 5, date(2026, 5, 4), time(0, 0, 0))

        records = intake_repository.list_for_user_in_range(uid, date(2026, 5, 1), date(2026, 5, 3))
        assert [r.amount for r in records] == [4, 3, 2]

    def test_list_for_user_newest_first(self, intake_repository, sample_user):
        uid = sample_user.id
        intake_repository.create(uid, 1, date(2026, 5, 1), time(6, 0, 0))
        intake_repository.create(uid, 2, date(2026, 5, 2), time(6, 0, 0))
        intake_repository.create(uid, 3, date(2026, 5, 2), time(9, 0, 0))

        assert [r.amount for r in intake_repository.list_for_user(uid)] == [3, 2, 1]

    def test_daily_totals_grouped_newest_first(self, intake_repository, sample_user):
        uid = sample_user.id
        intake_repository.create(uid, 200, date(2026, 5, 1), time(6, 0, 0))
        intake_repository.create(uid, 300, date(2026, 5, 1), time(9, 0, 0))
        intake_repository.create(uid, 700, date(2026, 5, 3), time(9, 0, 0))
        intake_repository.create(uid, 50, date(2026, 4, 1), time(9, 0, 0))

        totals = intake_repository.daily_totals(uid, date(2026, 5, 1), date(2026, 5, 31))
        assert totals == [(date(2026, 5, 3), 700), (date(2026, 5, 1), 500)]

    def test_update_only_given_fields(self, intake_repository, sample_user):
        record = intake_repository.create(sample_user.id, 200, date(2026, 5, 1), time(6, 0, 0))

        updated = intake_repository.update(record.id, amount=350)
        assert updated.amount == 350
        assert updated.time == time(6, 0, 0)

        updated = intake_repository.update(record.id, intake_time=time(7, 45, 0))
        assert updated.amount == 350
        assert updated.time == time(7, 45, 0)
        assert updated.date == date(2026, 5, 1)

    def test_update_and_delete_missing_record(self, intake_repository):
        assert intake_repository.update(12345, amount=10) is None
        assert intake_repository.delete(12345) is False

    def test_delete(self, intake_repository, sample_user):
        record = intake_repository.create(sample_user.id, 200, date(2026, 5, 1), time(6, 0, 0))

        assert intake_repository.delete(record.id) is True
        assert intake_repository.get(record.id) is None

    def test_non_positive_amount_rejected_by_store(self, intake_repository, sample_user):
        with pytest.raises(IntegrityError):
            intake_repository.create(sample_user.id, 0, date(2026, 5, 1), time(6, 0, 0))

    def test_unknown_user_rejected_by_foreign_key(self, intake_repository):
        with pytest.raises(IntegrityError):
            intake_repository.create(999, 100, date(2026, 5, 1), time(6, 0, 0))

    def test_deleting_user_cascades_to_records(self, db_session, intake_repository, user_repository, sample_user):
        intake_repository.create(sample_user.id, 200, date(2026, 5, 1), time(6, 0, 0))
        intake_repository.create(sample_user.id, 300, date(2026, 5, 2), time(6, 0, 0))

        user_repository.delete(sample_user.id)

        assert db_session.query(WaterIntakeDB).count() == 0
