"""Coordinates the store, filters, sharing and projection behind one view state."""

import json
import logging
from datetime import date, datetime
from typing import Any, Callable, Optional

from .config import CalendarConfig
from .editor import EventEditor, EventForm
from .errors import CalendarError
from .event_store import EventStore
from .filters import FilterEngine
from .models import Event, Granularity, ShareStatus, ViewWindow
from .projector import Projection, Projector
from .sharing import SharingStateMachine
from .upcoming import upcoming
from .window import compute_window, next_anchor, previous_anchor, today

logger = logging.getLogger(__name__)


class CalendarManager:
    """
    High-level coordinator for one calendar instance.

    Holds the current view state (anchor date, granularity and active
    category filter) and recomputes the projected window on demand. This
    is the main class that should be used by applications.

    Attributes:
        config: Calendar settings
        store: Event store
        filters: Active category filter
        sharing: Share state machine bound to the store
        editor: Form submission workflow bound to the store
        projector: Bucket projector using the configured display limit
        anchor: Reference date of the current view
        granularity: Current view granularity
    """

    def __init__(
        self,
        config: Optional[CalendarConfig] = None,
        anchor: Optional[date] = None,
        granularity: Any = Granularity.MONTH,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """
        Initialize the calendar manager.

        Args:
            config: Calendar settings, defaults to the student calendar
            anchor: Initial reference date, defaults to today
            granularity: Initial view granularity
            clock: Source of the current time
        """
        self.config: CalendarConfig = config or CalendarConfig()
        self.clock: Callable[[], datetime] = clock
        self.store: EventStore = EventStore(self.config.vocabulary)
        self.filters: FilterEngine = FilterEngine(self.config.vocabulary)
        self.sharing: SharingStateMachine = SharingStateMachine(self.store, clock)
        self.editor: EventEditor = EventEditor(self.store)
        self.projector: Projector = Projector(self.config.max_events_per_day)
        self.anchor: date = anchor or today(clock())
        self.granularity: Granularity = Granularity.parse(granularity)

    @property
    def window(self) -> ViewWindow:
        return compute_window(self.anchor, self.granularity, self.config.week_start)

    def set_view(
        self, granularity: Any = None, anchor: Optional[date] = None
    ) -> ViewWindow:
        """Change the granularity and/or anchor and return the new window."""
        if granularity is not None:
            self.granularity = Granularity.parse(granularity)
        if anchor is not None:
            self.anchor = anchor.date() if isinstance(anchor, datetime) else anchor
        return self.window

    def next(self) -> ViewWindow:
        self.anchor = next_anchor(self.anchor, self.granularity)
        return self.window

    def previous(self) -> ViewWindow:
        self.anchor = previous_anchor(self.anchor, self.granularity)
        return self.window

    def today(self) -> ViewWindow:
        self.anchor = today(self.clock())
        return self.window

    def toggle_filter(self, category: Any) -> frozenset:
        return self.filters.toggle(category)

    def visible_events(self) -> list[Event]:
        """Events intersecting the current window that pass the active filter."""
        window = self.window
        return self.store.query(
            window.range_start, window.range_end, self.filters.active
        )

    def project(self) -> Projection:
        """Project the visible events onto the current window's buckets."""
        return self.projector.project(self.window, self.visible_events())

    def upcoming(self, timeframe: str = "today") -> list[Event]:
        return upcoming(self.filters.filter(self.store.all()), timeframe, self.clock())

    def load_events(self, path: str) -> int:
        """
        Import seed events from a JSON file.

        The file holds a list of events, or an object with an "events" list.
        Each event has ISO "start"/"end" timestamps and optional "category",
        "course", "location", "description" and "shared_with" entries
        ({"recipient_id": ..., "status": ...}).

        Args:
            path: Path to the JSON events file

        Returns:
            Number of events imported

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file or an event in it is invalid
        """
        with open(path, encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON format: {e}")

        if isinstance(data, dict):
            data = data.get("events", [])
        if not isinstance(data, list):
            raise ValueError("Events file must contain a list of events")

        imported = 0
        for index, raw in enumerate(data):
            try:
                self._import_event(raw)
            except (CalendarError, ValueError, TypeError, KeyError) as e:
                raise ValueError(f"Invalid event #{index + 1} in {path}: {e}")
            imported += 1

        logger.info("Imported %d event(s) from %s", imported, path)
        return imported

    def _import_event(self, raw: dict[str, Any]) -> Event:
        if not isinstance(raw, dict):
            raise ValueError("event must be an object")
        start = datetime.fromisoformat(raw["start"])
        end = datetime.fromisoformat(raw.get("end") or raw["start"])
        form = EventForm(
            title=raw.get("title", ""),
            start_date=start.date(),
            start_time=start.time(),
            end_date=end.date(),
            end_time=end.time(),
            category=raw.get("category"),
            course=raw.get("course"),
            location=raw.get("location"),
            description=raw.get("description"),
        )
        event = self.editor.submit(form)

        shares = raw.get("shared_with") or []
        recipients = [share["recipient_id"] for share in shares]
        if recipients:
            self.sharing.share(event.id, recipients, notify=False)
        for share in shares:
            status = ShareStatus.parse(share.get("status", ShareStatus.PENDING))
            if status is not ShareStatus.PENDING:
                self.sharing.respond(event.id, share["recipient_id"], status)
        return self.store.get(event.id)
