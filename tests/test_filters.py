"""Tests for the FilterEngine class."""

import pytest
from datetime import datetime, timedelta

from coursecal.categories import STUDENT, InstructorCategory, StudentCategory
from coursecal.errors import ValidationError
from coursecal.filters import FilterEngine
from coursecal.models import Event


def make_events():
    categories = [
        StudentCategory.EXAM,
        StudentCategory.ASSIGNMENT,
        StudentCategory.EXAM,
        StudentCategory.REMINDER,
        StudentCategory.DEADLINE,
    ]
    base = datetime(2025, 4, 22, 9, 0)
    # deliberately not in start order
    return [
        Event(
            id=str(i + 1),
            title=f"Event {i + 1}",
            start=base - timedelta(hours=i),
            end=base - timedelta(hours=i) + timedelta(minutes=30),
            category=category,
            seq=i + 1,
        )
        for i, category in enumerate(categories)
    ]


class TestApply:
    """Test the pure apply function."""

    def test_empty_set_is_identity(self):
        """Test that an empty selection means no filter, not select-none."""
        events = make_events()
        assert FilterEngine.apply(events, set()) == events

    def test_none_is_identity(self):
        events = make_events()
        assert FilterEngine.apply(events, None) == events

    def test_identity_returns_new_list(self):
        events = make_events()
        result = FilterEngine.apply(events, set())
        result.pop()
        assert len(events) == 5

    def test_keeps_only_selected_categories(self):
        events = make_events()
        result = FilterEngine.apply(events, {StudentCategory.EXAM})
        assert [e.id for e in result] == ["1", "3"]

    def test_multiple_categories_preserve_order(self):
        """Test that filtering is stable and never reorders."""
        events = make_events()
        active = {StudentCategory.DEADLINE, StudentCategory.EXAM}
        result = FilterEngine.apply(events, active)
        assert [e.id for e in result] == ["1", "3", "5"]
        assert result == [e for e in events if e.category in active]

    def test_no_matches(self):
        result = FilterEngine.apply(make_events(), {StudentCategory.STUDY_GROUP})
        assert result == []

    def test_empty_events(self):
        assert FilterEngine.apply([], {StudentCategory.EXAM}) == []

    def test_same_valued_category_of_other_vocabulary_does_not_match(self):
        result = FilterEngine.apply(make_events(), {InstructorCategory.DEADLINE})
        assert result == []

    def test_raw_string_selection_matches_by_value(self):
        result = FilterEngine.apply(make_events(), {"exam"})
        assert [e.id for e in result] == ["1", "3"]


class TestFilterState:
    """Test the stateful filter selection."""

    def test_starts_empty_and_shows_everything(self):
        engine = FilterEngine(STUDENT)
        assert engine.active == frozenset()
        assert all(engine.is_shown(c) for c in STUDENT)
        assert engine.filter(make_events()) == make_events()

    def test_toggle_on_and_off(self):
        engine = FilterEngine(STUDENT)
        assert engine.toggle("exam") == {StudentCategory.EXAM}
        assert engine.is_shown("exam")
        assert not engine.is_shown("reminder")
        assert engine.toggle(StudentCategory.EXAM) == frozenset()
        assert engine.is_shown("reminder")

    def test_filter_uses_active_selection(self):
        engine = FilterEngine(STUDENT, active=["reminder"])
        assert [e.id for e in engine.filter(make_events())] == ["4"]

    def test_clear(self):
        engine = FilterEngine(STUDENT, active=["exam", "deadline"])
        engine.clear()
        assert engine.active == frozenset()

    def test_toggle_unknown_category(self):
        engine = FilterEngine(STUDENT)
        with pytest.raises(ValidationError):
            engine.toggle("webinar")
        assert engine.active == frozenset()
