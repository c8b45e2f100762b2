"""Value types shared across the calendar engine."""

from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Optional

from .errors import ValidationError


class Granularity(str, Enum):
    """Display resolution of a calendar view."""

    MONTH = "month"
    WEEK = "week"
    DAY = "day"

    @classmethod
    def parse(cls, value: Any) -> "Granularity":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(
                f"Unknown granularity '{value}'. Expected month, week or day"
            )


class ShareStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"

    @classmethod
    def parse(cls, value: Any) -> "ShareStatus":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValidationError(
                f"Unknown share status '{value}'. Expected pending, accepted or declined"
            )


@dataclass(frozen=True)
class Share:
    """
    One event offered to one recipient.

    Attributes:
        recipient_id: Identifier of the invited peer
        status: Current state, always pending on creation
        shared_at: When the invitation was created
        responded_at: When the recipient accepted or declined
        message: Optional note sent with the invitation
        allow_edit: Whether the recipient may edit the event
    """

    recipient_id: str
    status: ShareStatus = ShareStatus.PENDING
    shared_at: Optional[datetime] = None
    responded_at: Optional[datetime] = None
    message: Optional[str] = None
    allow_edit: bool = False

    @property
    def is_resolved(self) -> bool:
        return self.status is not ShareStatus.PENDING


@dataclass(frozen=True)
class EventDraft:
    """Canonical event fields before the store assigns an identity."""

    title: str
    start: datetime
    end: datetime
    category: Any = None
    course: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class Event:
    """
    A timed, categorized calendar entry.

    Events are immutable; the store commits changes by replacing the value.

    Attributes:
        id: Store-assigned identifier
        title: Non-empty title
        start: Start timestamp (naive, local time)
        end: End timestamp, never before start
        category: Member of the store's category vocabulary
        course: Optional course label
        location: Optional location text
        description: Optional description text
        shared_with: Share records in invitation order
        seq: Creation sequence number, used to break ordering ties
        version: Incremented on every committed change
    """

    id: str
    title: str
    start: datetime
    end: datetime
    category: Any
    course: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    shared_with: tuple[Share, ...] = ()
    seq: int = 0
    version: int = 1

    def overlaps(self, range_start: datetime, range_end: datetime) -> bool:
        """Inclusive intersection test against ``[range_start, range_end]``."""
        return self.start <= range_end and self.end >= range_start

    def share_for(self, recipient_id: str) -> Optional[Share]:
        for share in self.shared_with:
            if share.recipient_id == recipient_id:
                return share
        return None

    @property
    def sort_key(self) -> tuple[datetime, int]:
        return (self.start, self.seq)


@dataclass(frozen=True)
class ViewWindow:
    """
    The inclusive day range shown for a granularity and anchor.

    Attributes:
        granularity: Month, week or day
        anchor: Reference date the window was computed from
        start: First day in the window
        end: Last day in the window
        days: Every day from start to end, ascending
    """

    granularity: Granularity
    anchor: date
    start: date
    end: date
    days: tuple[date, ...] = field(default=())

    @property
    def range_start(self) -> datetime:
        return datetime.combine(self.start, time.min)

    @property
    def range_end(self) -> datetime:
        return datetime.combine(self.end, time.max)

    def contains(self, moment: Any) -> bool:
        if isinstance(moment, datetime):
            return self.range_start <= moment <= self.range_end
        return self.start <= moment <= self.end

    def __len__(self) -> int:
        return len(self.days)
