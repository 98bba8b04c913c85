from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Tuple

from pointsplan.exceptions import PlanningError


def next_monday(today: date | None = None) -> date:
    """The Monday after ``today``; a week ahead when ``today`` is a Monday."""
    today = today or date.today()
    days_ahead = (7 - today.weekday()) % 7 or 7
    return today + timedelta(days=days_ahead)


def add_months(day: date, months: int) -> date:
    month_index = day.month - 1 + months
    year = day.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def sprint_window(start: date, index: int, duration: str) -> Tuple[date, date]:
    """Start and end date of the ``index``-th sprint (zero based)."""
    if duration == "1 week":
        sprint_start = start + timedelta(days=7 * index)
        return sprint_start, sprint_start + timedelta(days=6)
    if duration == "2 weeks":
        sprint_start = start + timedelta(days=14 * index)
        return sprint_start, sprint_start + timedelta(days=13)
    if duration == "1 month":
        sprint_start = add_months(start, index)
        last_day = calendar.monthrange(sprint_start.year, sprint_start.month)[1]
        return sprint_start, sprint_start.replace(day=last_day)
    raise PlanningError(f"Unsupported sprint duration: {duration}")
