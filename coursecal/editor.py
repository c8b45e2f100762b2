"""Turns submitted event form fields into canonical events."""

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Optional, Union

from .categories import Vocabulary
from .constants import (
    DATE_FORMAT,
    DEFAULT_END_TIME,
    DEFAULT_START_TIME,
    TIME_FORMAT,
)
from .errors import ValidationError
from .event_store import EventStore
from .models import Event, EventDraft

DateField = Union[str, date, None]
TimeField = Union[str, time, None]


@dataclass
class EventForm:
    """
    Raw field values as entered in the add/edit event form.

    Dates are ``YYYY-MM-DD`` strings (or date objects) and times ``HH:MM``
    strings (or time objects), entered separately.
    """

    title: str = ""
    start_date: DateField = None
    start_time: TimeField = None
    end_date: DateField = None
    end_time: TimeField = None
    category: Any = None
    course: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None


def _parse_date(value: DateField, field_name: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return datetime.strptime(value.strip(), DATE_FORMAT).date()
        except ValueError:
            raise ValidationError(
                f"Invalid {field_name} '{value}'. Use YYYY-MM-DD (e.g., 2025-04-22)"
            )
    raise ValidationError(f"Missing {field_name}")


def _parse_time(value: TimeField, default: str, field_name: str) -> time:
    if isinstance(value, time):
        return value
    if value is None or (isinstance(value, str) and not value.strip()):
        value = default
    try:
        return datetime.strptime(str(value).strip(), TIME_FORMAT).time()
    except ValueError:
        raise ValidationError(
            f"Invalid {field_name} '{value}'. Use HH:MM (e.g., 09:30)"
        )


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return str(value).strip() or None


def normalize(form: EventForm, vocabulary: Vocabulary) -> EventDraft:
    """
    Validate and normalize a submitted form.

    The end date defaults to the start date and missing times default to
    09:00 and 10:00. A zero-length event (end equal to start) is allowed.

    Args:
        form: Submitted field values
        vocabulary: Category vocabulary of the target calendar

    Returns:
        A canonical draft ready for the event store

    Raises:
        ValidationError: If the title is empty, a field cannot be parsed,
            the category is unknown, or the end is before the start
    """
    title = (form.title or "").strip()
    if not title:
        raise ValidationError("Title is required")

    start_day = _parse_date(form.start_date, "start date")
    if form.end_date in (None, ""):
        end_day = start_day
    else:
        end_day = _parse_date(form.end_date, "end date")
    start_time = _parse_time(form.start_time, DEFAULT_START_TIME, "start time")
    end_time = _parse_time(form.end_time, DEFAULT_END_TIME, "end time")
    start = datetime.combine(start_day, start_time)
    end = datetime.combine(end_day, end_time)
    if end < start:
        raise ValidationError(
            f"End {end:%Y-%m-%d %H:%M} is before start {start:%Y-%m-%d %H:%M}"
        )

    if form.category in (None, ""):
        category = vocabulary.default
    else:
        category = vocabulary.parse(form.category)

    return EventDraft(
        title=title,
        start=start,
        end=end,
        category=category,
        course=_clean(form.course),
        location=_clean(form.location),
        description=_clean(form.description),
    )


class EventEditor:
    """Submits add and edit forms to an event store."""

    def __init__(self, store: EventStore) -> None:
        self.store: EventStore = store

    def submit(
        self,
        form: EventForm,
        event_id: Optional[str] = None,
        expected_version: Optional[int] = None,
    ) -> Event:
        """
        Create a new event, or update ``event_id`` when editing.

        Shares of an edited event are kept as they are.
        """
        draft = normalize(form, self.store.vocabulary)
        if event_id is None:
            return self.store.create(draft)
        patch = {
            "title": draft.title,
            "start": draft.start,
            "end": draft.end,
            "category": draft.category,
            "course": draft.course,
            "location": draft.location,
            "description": draft.description,
        }
        return self.store.update(event_id, patch, expected_version=expected_version)

    @staticmethod
    def form_for(event: Event) -> EventForm:
        """Pre-fill a form with an existing event's values."""
        return EventForm(
            title=event.title,
            start_date=event.start.strftime(DATE_FORMAT),
            start_time=event.start.strftime(TIME_FORMAT),
            end_date=event.end.strftime(DATE_FORMAT),
            end_time=event.end.strftime(TIME_FORMAT),
            category=event.category.value,
            course=event.course or "",
            location=event.location or "",
            description=event.description or "",
        )
