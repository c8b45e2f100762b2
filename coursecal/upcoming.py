"""Upcoming events panel and reminder countdown messages."""

from datetime import datetime, timedelta
from typing import Optional

from .constants import UPCOMING_WEEK_DAYS
from .errors import ValidationError
from .models import Event

TIMEFRAMES = ("today", "tomorrow", "week", "all")


def upcoming(
    events: list[Event], timeframe: str = "today", now: Optional[datetime] = None
) -> list[Event]:
    """
    Select events for the upcoming panel.

    Args:
        events: Candidate events
        timeframe: "today", "tomorrow", "week" (the next seven days) or "all"
        now: Reference time, defaults to the current local time

    Returns:
        Matching events ordered by start time, then creation order
    """
    if timeframe not in TIMEFRAMES:
        raise ValidationError(
            f"Unknown timeframe '{timeframe}'. Expected one of: {', '.join(TIMEFRAMES)}"
        )
    now = now or datetime.now()
    today = now.date()

    if timeframe == "today":
        selected = [e for e in events if e.start.date() == today]
    elif timeframe == "tomorrow":
        tomorrow = today + timedelta(days=1)
        selected = [e for e in events if e.start.date() == tomorrow]
    elif timeframe == "week":
        horizon = now + timedelta(days=UPCOMING_WEEK_DAYS)
        selected = [e for e in events if now <= e.start <= horizon]
    else:
        selected = list(events)
    return sorted(selected, key=lambda e: e.sort_key)


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'}"


def reminder_message(start: datetime, now: Optional[datetime] = None) -> str:
    """
    Describe how soon an event starts.

    Returns "Happening now" once the start has passed, a minute or hour
    countdown within the next day, and the calendar date beyond that.
    """
    now = now or datetime.now()
    delta = start - now
    if delta < timedelta(0):
        return "Happening now"
    minutes = int(delta.total_seconds() // 60)
    hours = minutes // 60
    if hours == 0:
        return f"In {_plural(minutes, 'minute')}"
    if hours < 24:
        return f"In {_plural(hours, 'hour')}"
    return f"On {start.strftime('%b')} {start.day}"
