"""Strict parsing of date and month path parameters."""

import re
from datetime import date
from typing import Tuple
from fastapi import HTTPException, status

from hydrotrack.models.constants import DATE_PATTERN, MONTH_PATTERN


def parse_date_param(value: str) -> date:
    """Parse a `YYYY-MM-DD` path segment, 400 on mismatch or impossible dates."""
    if not re.match(DATE_PATTERN, value):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid date format. Use YYYY-MM-DD",
        )
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid date: {value}",
        )


def parse_month_param(value: str) -> Tuple[int, int]:
    """Parse a `YYYY-MM` path segment into (year, month)."""
    if not re.match(MONTH_PATTERN, value):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid month format. Use YYYY-MM",
        )
    year, month = (int(part) for part in value.split("-"))
    if not 1 <= month <= 12 or year < 1:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid month: {value}",
        )
    return year, month
