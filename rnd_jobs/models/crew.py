"""Crew tenure classification, derived from the join date and never stored."""

from datetime import date, datetime
from enum import Enum
from typing import Optional


class Tenure(str, Enum):
    SENIOR = "Senior"   # 5 years or more
    JUNIOR = "Junior"   # 1 to 5 years
    PEMULA = "Pemula"   # under a year


DAYS_PER_YEAR = 365.25


def parse_join_date(join_date: Optional[str]) -> Optional[date]:
    """Parse a YYYY-MM-DD (or ISO datetime) join date; None when missing or invalid."""
    if not join_date:
        return None
    try:
        return datetime.fromisoformat(join_date.strip()).date()
    except ValueError:
        return None


def tenure_years(join_date: Optional[str], today: Optional[date] = None) -> Optional[float]:
    """Absolute years between the join date and today, one decimal."""
    joined = parse_join_date(join_date)
    if joined is None:
        return None
    today = today or date.today()
    return round(abs((today - joined).days) / DAYS_PER_YEAR, 1)


def tenure_for(join_date: Optional[str], today: Optional[date] = None) -> Optional[Tenure]:
    joined = parse_join_date(join_date)
    if joined is None:
        return None
    today = today or date.today()
    years = abs((today - joined).days) / DAYS_PER_YEAR

    if years >= 5:
        return Tenure.SENIOR
    if years >= 1:
        return Tenure.JUNIOR
    return Tenure.PEMULA
