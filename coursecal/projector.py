"""Projects events onto the day and hour buckets of a view window."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Optional, Union

from .models import Event, Granularity, ViewWindow

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 24


@dataclass
class Bucket:
    """
    A day or hour slot and the events projected into it.

    Attributes:
        key: The day (date) or the hour of day (0-23)
        start: First instant covered by the slot
        end: Last instant covered by the slot
        events: Events ordered by start time, then creation order
        limit: Maximum number of events shown, None for no limit
    """

    key: Union[date, int]
    start: datetime
    end: datetime
    events: list[Event] = field(default_factory=list)
    limit: Optional[int] = None

    @property
    def visible(self) -> list[Event]:
        if self.limit is None:
            return list(self.events)
        return self.events[: self.limit]

    @property
    def hidden_count(self) -> int:
        """Number of events cut off by the display limit ("+N more")."""
        return len(self.events) - len(self.visible)

    def __len__(self) -> int:
        return len(self.events)


@dataclass
class Projection:
    """
    The buckets computed for one window.

    Attributes:
        window: Window the projection was computed for
        days: One bucket per day of the window
        hours: Hour buckets 0-23, only filled for day granularity
    """

    window: ViewWindow
    days: list[Bucket] = field(default_factory=list)
    hours: list[Bucket] = field(default_factory=list)

    def day(self, key: date) -> Bucket:
        for bucket in self.days:
            if bucket.key == key:
                return bucket
        raise KeyError(key)

    def events_on(self, key: date) -> list[Event]:
        return self.day(key).events

    def events_at(self, hour: int) -> list[Event]:
        if not self.hours:
            raise ValueError("Hour buckets are only computed for day views")
        if not 0 <= hour < HOURS_PER_DAY:
            raise KeyError(hour)
        return self.hours[hour].events

    @property
    def total(self) -> int:
        """Number of distinct events in the window."""
        seen = {event.id for bucket in self.days for event in bucket.events}
        return len(seen)


def touches_day(event: Event, day: date) -> bool:
    """
    Whether an event should be drawn on a day.

    Uses inclusive overlap, except that a positive-length event ending
    exactly at midnight does not spill into the day starting there.
    """
    day_start = datetime.combine(day, time.min)
    day_end = datetime.combine(day, time.max)
    if not event.overlaps(day_start, day_end):
        return False
    return not (event.end == day_start and event.start < event.end)


class Projector:
    """
    Maps filtered events onto the buckets of a view window.

    Projection is a pure read-side transform; it never mutates events or
    the store and can be recomputed on every render.

    Attributes:
        limit: Display limit applied to every day bucket, None for no limit
    """

    def __init__(self, limit: Optional[int] = None) -> None:
        if limit is not None and limit < 0:
            raise ValueError("Display limit must be non-negative")
        self.limit: Optional[int] = limit

    def project(self, window: ViewWindow, events: list[Event]) -> Projection:
        """
        Assign events to the day buckets (and hour buckets for day views).

        Args:
            window: Window produced by compute_window
            events: Events to place, typically already filtered

        Returns:
            Projection with ordered buckets
        """
        ordered = sorted(events, key=lambda e: e.sort_key)
        projection = Projection(window=window)

        for day in window.days:
            projection.days.append(
                Bucket(
                    key=day,
                    start=datetime.combine(day, time.min),
                    end=datetime.combine(day, time.max),
                    events=[e for e in ordered if touches_day(e, day)],
                    limit=self.limit,
                )
            )

        if window.granularity is Granularity.DAY:
            first_day = projection.days[0]
            projection.hours = self._hour_buckets(window.start, first_day.events)

        logger.debug(
            "Projected %d event(s) onto %d %s bucket(s)",
            projection.total,
            len(projection.days),
            window.granularity.value,
        )
        return projection

    def _hour_buckets(self, day: date, events: list[Event]) -> list[Bucket]:
        day_start = datetime.combine(day, time.min)
        hours = [
            Bucket(
                key=hour,
                start=day_start + timedelta(hours=hour),
                end=day_start + timedelta(hours=hour + 1) - timedelta(microseconds=1),
            )
            for hour in range(HOURS_PER_DAY)
        ]
        for event in events:
            # events that began on an earlier day open the day at 00:00
            hour = event.start.hour if event.start >= day_start else 0
            hours[hour].events.append(event)
        return hours
