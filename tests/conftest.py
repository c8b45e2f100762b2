import json
import pytest
from datetime import datetime

from coursecal.event_store import EventStore
from coursecal.models import EventDraft
from coursecal.sharing import SharingStateMachine


FIXED_NOW = datetime(2025, 4, 22, 8, 0)


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def store():
    return EventStore()


@pytest.fixture
def sharing(store, clock):
    return SharingStateMachine(store, clock)


@pytest.fixture
def quiz_draft():
    return EventDraft(
        title="Quiz",
        start=datetime(2025, 4, 22, 10, 0),
        end=datetime(2025, 4, 22, 11, 0),
        category="assignment",
    )


@pytest.fixture
def quiz(store, quiz_draft):
    return store.create(quiz_draft)


@pytest.fixture
def sample_events():
    return [
        {
            "title": "JavaScript Fundamentals Quiz",
            "start": "2025-04-22T10:00",
            "end": "2025-04-22T11:00",
            "category": "assignment",
            "course": "Advanced JavaScript",
            "location": "Online",
        },
        {
            "title": "Algorithm Study Group",
            "start": "2025-04-23T18:00",
            "end": "2025-04-23T19:30",
            "category": "studyGroup",
            "course": "Data Structures & Algorithms",
            "shared_with": [
                {"recipient_id": "s3", "status": "accepted"},
                {"recipient_id": "s5", "status": "declined"},
                {"recipient_id": "s6"},
            ],
        },
        {
            "title": "Database Design Midterm",
            "start": "2025-04-25T09:00",
            "end": "2025-04-25T11:00",
            "category": "exam",
            "course": "Database Systems",
        },
        {
            "title": "Final Project Deadline",
            "start": "2025-05-02T23:59",
            "category": "deadline",
        },
    ]


@pytest.fixture
def events_file(tmp_path, sample_events):
    path = tmp_path / "events.json"
    path.write_text(json.dumps({"events": sample_events}))
    return path
