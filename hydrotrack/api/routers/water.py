"""Water intake endpoints: self-service logging, views, and the admin path."""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.orm import Session

from hydrotrack.api.params import parse_date_param, parse_month_param
from hydrotrack.api.schemas import (
    IntakeCreateRequest,
    AdminIntakeCreateRequest,
    IntakeUpdateRequest,
    MessageResponse,
    DayTotalResponse,
)
from hydrotrack.auth.dependencies import get_current_user, get_current_admin
from hydrotrack.database.database import get_db
from hydrotrack.database.intake_repository import IntakeRepository
from hydrotrack.database.user_repository import UserRepository
from hydrotrack.engine.aggregation import classify_day, daily_total, monthly_calendar, stats_30_day
from hydrotrack.models.constants import MAX_DB_INTEGER
from hydrotrack.models.intake import IntakeRecord, IntakeStats, MonthCalendar
from hydrotrack.models.user import User, UserSummary

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/water", tags=["water"])


def _record_not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Water intake record not found")


@router.post("", response_model=IntakeRecord)
def log_intake(
    body: IntakeCreateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Log an intake for the current user, stamped with the server's date and time."""
    record = IntakeRepository(db).log_now(current_user.id, body.amount)
    logger.debug(f"User {current_user.id} logged {body.amount} ml")
    return record


@router.get("", response_model=List[IntakeRecord])
def list_intakes(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """All of the current user's records, newest first."""
    return IntakeRepository(db).list_for_user(current_user.id)


@router.get("/date/{date}", response_model=List[IntakeRecord])
def list_intakes_on_date(
    date: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Current user's records for one date, ordered by time."""
    on_date = parse_date_param(date)
    return IntakeRepository(db).list_for_user_on_date(current_user.id, on_date)


@router.get("/total/{date}", response_model=DayTotalResponse)
def get_day_total(
    date: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Current user's total for one date against their daily goal."""
    on_date = parse_date_param(date)
    total = daily_total(IntakeRepository(db), current_user.id, on_date)
    goal = current_user.daily_water_goal
    return DayTotalResponse(date=on_date, total=total, goal=goal, status=classify_day(total, goal))


@router.get("/range/{start}/{end}", response_model=List[IntakeRecord])
def list_intakes_in_range(
    start: str,
    end: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Current user's records with start <= date <= end (empty when start is after end)."""
    start_date = parse_date_param(start)
    end_date = parse_date_param(end)
    return IntakeRepository(db).list_for_user_in_range(current_user.id, start_date, end_date)


@router.get("/calendar/{month}", response_model=MonthCalendar)
def get_month_calendar(
    month: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Day totals for a `YYYY-MM` month, classified against the user's goal."""
    year, month_number = parse_month_param(month)
    return monthly_calendar(
        IntakeRepository(db),
        current_user.id,
        year,
        month_number,
        current_user.daily_water_goal,
    )


@router.get("/stats", response_model=IntakeStats)
def get_stats(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """30-day statistics for the current user."""
    return stats_30_day(IntakeRepository(db), current_user.id)


# Admin path

@router.post("/admin", response_model=IntakeRecord)
def admin_log_intake(
    body: AdminIntakeCreateRequest,
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    """Log an intake for any user at an explicit date and time."""
    if not UserRepository(db).exists(body.user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    record = IntakeRepository(db).create(body.user_id, body.amount, body.date, body.time)
    logger.info(f"Admin {admin.id} logged intake {record.id} for user {body.user_id}")
    return record


@router.get("/admin/users", response_model=List[UserSummary])
def admin_list_users(
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    """Minimal user list for admin pickers."""
    return UserRepository(db).list_summaries()


@router.get("/admin/{user_id}/date/{date}", response_model=List[IntakeRecord])
def admin_list_intakes_on_date(
    date: str,
    user_id: int = Path(..., le=MAX_DB_INTEGER),
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    """A specific user's records for one date."""
    on_date = parse_date_param(date)
    if not UserRepository(db).exists(user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return IntakeRepository(db).list_for_user_on_date(user_id, on_date)


@router.put("/admin/{record_id}", response_model=IntakeRecord)
def admin_update_intake(
    body: IntakeUpdateRequest,
    record_id: int = Path(..., le=MAX_DB_INTEGER),
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    """Edit the amount and/or time of a record."""
    changes = {}
    if body.amount is not None:
        changes["amount"] = body.amount
    if body.time is not None:
        changes["intake_time"] = body.time

    record = IntakeRepository(db).update(record_id, **changes)
    if not record:
        raise _record_not_found()
    logger.info(f"Admin {admin.id} updated intake {record_id}")
    return record


@router.delete("/admin/{record_id}", response_model=MessageResponse)
def admin_delete_intake(
    record_id: int = Path(..., le=MAX_DB_INTEGER),
    admin: User = Depends(get_current_admin),
    db: Session = Depends(get_db),
):
    """Delete a record."""
    if not IntakeRepository(db).delete(record_id):
        raise _record_not_found()
    logger.info(f"Admin {admin.id} deleted intake {record_id}")
    return MessageResponse(msg="Water intake record removed")
