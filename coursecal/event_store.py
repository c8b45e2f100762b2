"""In-memory store of calendar events with validated mutations."""

import dataclasses
import itertools
import logging
from datetime import date, datetime, time
from typing import Any, Iterable, Mapping, Optional

from .categories import STUDENT, Vocabulary
from .errors import Conflict, NotFound, ValidationError
from .filters import FilterEngine
from .models import Event, EventDraft, Share

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset(
    {"title", "start", "end", "category", "course", "location", "description"}
)


def _range_bound(value: Any, end: bool) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.max if end else time.min)
    raise ValidationError(f"Range bound must be a date or datetime, got {value!r}")


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class EventStore:
    """
    Holds calendar events and guards their invariants.

    Every mutation builds a complete new Event, validates it, and only then
    swaps it into the store, so a failed call leaves the store unchanged
    and readers never see a half-written event.

    Attributes:
        vocabulary: Category vocabulary events must belong to
    """

    def __init__(self, vocabulary: Vocabulary = STUDENT) -> None:
        """
        Initialize an empty event store.

        Args:
            vocabulary: Closed category set accepted by this store
        """
        self.vocabulary: Vocabulary = vocabulary
        self._events: dict[str, Event] = {}
        self._seq = itertools.count(1)

    def _validate(self, event: Event) -> Event:
        title = event.title.strip() if isinstance(event.title, str) else ""
        if not title:
            raise ValidationError("Event title must not be empty")
        if not isinstance(event.start, datetime) or not isinstance(event.end, datetime):
            raise ValidationError("Event start and end must be datetimes")
        if event.start > event.end:
            raise ValidationError(
                f"Event end {event.end.isoformat()} is before "
                f"start {event.start.isoformat()}"
            )
        category = (
            self.vocabulary.default
            if event.category is None
            else self.vocabulary.parse(event.category)
        )
        return dataclasses.replace(
            event,
            title=title,
            category=category,
            course=_optional_text(event.course),
            location=_optional_text(event.location),
            description=_optional_text(event.description),
        )

    def create(self, draft: EventDraft) -> Event:
        """
        Add a new event.

        Args:
            draft: Event fields; a missing category takes the vocabulary default

        Returns:
            The stored event with a fresh id and no shares

        Raises:
            ValidationError: If the title is empty, start is after end, or
                the category is unknown
        """
        candidate = Event(
            id="",
            title=draft.title,
            start=draft.start,
            end=draft.end,
            category=draft.category,
            course=draft.course,
            location=draft.location,
            description=draft.description,
        )
        event = self._validate(candidate)
        seq = next(self._seq)
        event = dataclasses.replace(event, id=str(seq), seq=seq)
        self._events[event.id] = event
        logger.info("Created event %s '%s'", event.id, event.title)
        return event

    def get(self, event_id: str) -> Event:
        """
        Return the event with this id.

        Raises:
            NotFound: If no such event exists
        """
        try:
            return self._events[event_id]
        except KeyError:
            raise NotFound(f"Event {event_id} not found")

    def check_version(self, event: Event, expected_version: Optional[int]) -> None:
        """Raise Conflict when an expected version stamp is stale."""
        if expected_version is not None and event.version != expected_version:
            raise Conflict(
                f"Event {event.id} is at version {event.version}, "
                f"expected {expected_version}"
            )

    def update(
        self,
        event_id: str,
        patch: Mapping[str, Any],
        expected_version: Optional[int] = None,
    ) -> Event:
        """
        Apply a patch of editable fields to an event.

        Args:
            event_id: Id of the event to change
            patch: Mapping of field name to new value
            expected_version: Version the caller last read, if checking for conflicts

        Returns:
            The updated event

        Raises:
            NotFound: If the event does not exist
            ValidationError: If a field is not editable or the merged event is invalid
            Conflict: If expected_version does not match the stored version
        """
        current = self.get(event_id)
        self.check_version(current, expected_version)

        unknown = set(patch) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(
                f"Cannot update field(s): {', '.join(sorted(unknown))}"
            )

        merged = self._validate(dataclasses.replace(current, **dict(patch)))
        updated = dataclasses.replace(merged, version=current.version + 1)
        self._events[event_id] = updated
        logger.info("Updated event %s (%s)", event_id, ", ".join(sorted(patch)))
        return updated

    def apply_shares(
        self,
        event_id: str,
        shares: Iterable[Share],
        expected_version: Optional[int] = None,
    ) -> Event:
        """
        Replace the share list of an event.

        Only the sharing state machine should call this; it owns the
        share invariants.
        """
        current = self.get(event_id)
        self.check_version(current, expected_version)
        updated = dataclasses.replace(
            current, shared_with=tuple(shares), version=current.version + 1
        )
        self._events[event_id] = updated
        return updated

    def delete(self, event_id: str) -> bool:
        """
        Remove an event.

        Returns:
            True if the event existed, False otherwise
        """
        removed = self._events.pop(event_id, None)
        if removed is None:
            return False
        logger.info("Deleted event %s '%s'", event_id, removed.title)
        return True

    def query(
        self,
        range_start: Any,
        range_end: Any,
        categories: Optional[Iterable[Any]] = None,
    ) -> list[Event]:
        """
        Find events intersecting an inclusive time range.

        Partial overlap counts: an event is returned when
        ``event.start <= range_end and event.end >= range_start``.

        Args:
            range_start: Start of the range; a date means its first instant
            range_end: End of the range; a date means its last instant
            categories: Optional category filter; empty or None means all

        Returns:
            Matching events ordered by start time, then creation order
        """
        start = _range_bound(range_start, end=False)
        end = _range_bound(range_end, end=True)
        if start > end:
            raise ValidationError("Query range start is after its end")
        active = self.vocabulary.parse_many(categories)
        hits = [event for event in self.all() if event.overlaps(start, end)]
        result = FilterEngine.apply(hits, active)
        logger.debug(
            "Query %s..%s matched %d event(s)",
            start.isoformat(),
            end.isoformat(),
            len(result),
        )
        return result

    def all(self) -> list[Event]:
        """Return every event ordered by start time, then creation order."""
        return sorted(self._events.values(), key=lambda e: e.sort_key)

    def count(self) -> int:
        return len(self._events)

    def __contains__(self, event_id: object) -> bool:
        return event_id in self._events

    def clear(self) -> None:
        """Remove all events from the store."""
        self._events = {}
