"""Exceptions raised by the calendar engine."""

from typing import Iterable


class CalendarError(Exception):
    """Base class for all calendar engine errors."""


class ValidationError(CalendarError, ValueError):
    """Raised when event or share fields fail validation."""


class NotFound(CalendarError, KeyError):
    """Raised for an unknown event id or (event, recipient) share pair."""

    def __str__(self) -> str:
        # KeyError quotes its argument, keep messages readable
        return str(self.args[0]) if self.args else ""


class InvalidTransition(CalendarError):
    """Raised when a share is moved out of a resolved state."""


class DuplicateShare(CalendarError):
    """
    Raised in strict mode when recipients already hold a share.

    Attributes:
        recipient_ids: Recipients that were already invited
    """

    def __init__(self, event_id: str, recipient_ids: Iterable[str]) -> None:
        self.event_id = event_id
        self.recipient_ids: list[str] = list(recipient_ids)
        super().__init__(
            f"Event {event_id} already shared with: {', '.join(self.recipient_ids)}"
        )


class Conflict(CalendarError):
    """Raised when an expected version stamp does not match the stored one."""
