"""Date range and navigation arithmetic for month, week and day views."""

import calendar
from datetime import date, datetime, timedelta
from typing import Any, Optional

from .constants import DEFAULT_WEEK_START
from .errors import ValidationError
from .models import Granularity, ViewWindow


def _as_date(anchor: Any) -> date:
    if isinstance(anchor, datetime):
        return anchor.date()
    if isinstance(anchor, date):
        return anchor
    raise ValidationError(f"Anchor must be a date or datetime, got {anchor!r}")


def _check_week_start(week_start: int) -> int:
    if not isinstance(week_start, int) or not 0 <= week_start <= 6:
        raise ValidationError(
            f"Week start must be a weekday number 0-6 (Monday=0), got {week_start!r}"
        )
    return week_start


def add_months(day: date, months: int) -> date:
    """
    Shift a date by whole calendar months.

    The day of month is clamped to the length of the target month, so
    January 31 plus one month is February 28 (or 29 in a leap year).

    Args:
        day: Date to shift
        months: Number of months, negative to go back

    Returns:
        The shifted date
    """
    years, month_index = divmod(day.month - 1 + months, 12)
    year = day.year + years
    month = month_index + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def week_start_for(day: date, week_start: int = DEFAULT_WEEK_START) -> date:
    """Return the first day of the week containing ``day``."""
    offset = (day.weekday() - _check_week_start(week_start)) % 7
    return day - timedelta(days=offset)


def compute_window(
    anchor: Any,
    granularity: Any,
    week_start: int = DEFAULT_WEEK_START,
) -> ViewWindow:
    """
    Compute the inclusive range of days displayed for an anchor date.

    Month windows cover the first through the last day of the anchor's
    month, week windows the seven days from the configured week start that
    contain the anchor, and day windows the anchor alone.

    Args:
        anchor: Reference date (a datetime is reduced to its date)
        granularity: Granularity member or "month", "week", "day"
        week_start: First weekday of a week, Monday=0 ... Sunday=6

    Returns:
        The computed view window

    Raises:
        ValidationError: For an unknown granularity or week start
    """
    day = _as_date(anchor)
    granularity = Granularity.parse(granularity)

    if granularity is Granularity.MONTH:
        start = day.replace(day=1)
        end = day.replace(day=calendar.monthrange(day.year, day.month)[1])
    elif granularity is Granularity.WEEK:
        start = week_start_for(day, week_start)
        end = start + timedelta(days=6)
    else:
        start = end = day

    days = tuple(start + timedelta(days=i) for i in range((end - start).days + 1))
    return ViewWindow(
        granularity=granularity, anchor=day, start=start, end=end, days=days
    )


def pad_to_weeks(
    window: ViewWindow, week_start: int = DEFAULT_WEEK_START
) -> list[date]:
    """
    Pad a window's days out to whole display weeks.

    The canonical window range is left untouched; the result only adds the
    leading and trailing days of adjacent months needed for a grid.
    """
    first = week_start_for(window.start, week_start)
    last = week_start_for(window.end, week_start) + timedelta(days=6)
    return [first + timedelta(days=i) for i in range((last - first).days + 1)]


def next_anchor(anchor: Any, granularity: Any) -> date:
    """Move the anchor forward by one month, seven days or one day."""
    return _shift(_as_date(anchor), Granularity.parse(granularity), 1)


def previous_anchor(anchor: Any, granularity: Any) -> date:
    """Move the anchor back by one month, seven days or one day."""
    return _shift(_as_date(anchor), Granularity.parse(granularity), -1)


def today(now: Optional[datetime] = None) -> date:
    """Return the current local date, or the date of ``now`` when given."""
    return (now or datetime.now()).date()


def _shift(day: date, granularity: Granularity, step: int) -> date:
    if granularity is Granularity.MONTH:
        return add_months(day, step)
    if granularity is Granularity.WEEK:
        return day + timedelta(days=7 * step)
    return day + timedelta(days=step)
