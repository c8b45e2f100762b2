"""Calendar event scheduling and sharing engine for course calendars."""

from .calendar_manager import CalendarManager
from .categories import (
    ADMIN,
    INSTRUCTOR,
    STUDENT,
    AdminCategory,
    CategoryInfo,
    InstructorCategory,
    StudentCategory,
    Vocabulary,
    get_vocabulary,
)
from .editor import EventEditor, EventForm, normalize
from .errors import (
    CalendarError,
    Conflict,
    DuplicateShare,
    InvalidTransition,
    NotFound,
    ValidationError,
)
from .event_store import EventStore
from .filters import FilterEngine
from .models import Event, EventDraft, Granularity, Share, ShareStatus, ViewWindow
from .projector import Bucket, Projection, Projector
from .sharing import ShareResult, ShareSummary, SharingStateMachine, expand_recipients
from .window import compute_window, next_anchor, pad_to_weeks, previous_anchor, today

__version__ = "0.1.0"
