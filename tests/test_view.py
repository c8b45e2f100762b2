import pytest
from datetime import date, datetime
from coursecal.calendar_manager import CalendarManager
from coursecal.categories import STUDENT
from coursecal.colors import Colors
from coursecal.models import EventDraft
from coursecal.view import CalendarView


@pytest.fixture
def manager(clock, events_file):
    manager = CalendarManager(anchor=date(2025, 4, 22), clock=clock)
    manager.load_events(str(events_file))
    return manager


def render(manager, granularity):
    manager.set_view(granularity)
    view = CalendarView(manager.project(), STUDENT, now=manager.clock())
    view.display()


class TestTitle:
    def test_titles(self, manager, clock):
        expected = {
            "month": "April 2025",
            "week": "Week of Apr 20 - Apr 26, 2025",
            "day": "Tuesday, April 22, 2025",
        }
        for granularity, title in expected.items():
            manager.set_view(granularity)
            view = CalendarView(manager.project(), STUDENT, now=clock())
            assert view.title() == title


class TestFormatEvent:
    def test_time_range_and_course(self, manager):
        view = CalendarView(manager.project(), STUDENT, now=manager.clock())
        quiz = manager.store.get("1")

        line = view.format_event(quiz)

        assert "10:00 - 11:00" in line
        assert "JavaScript Fundamentals Quiz" in line
        assert "(Advanced JavaScript)" in line

    def test_zero_length_event_shows_single_time(self, manager):
        view = CalendarView(manager.project(), STUDENT, now=manager.clock())
        deadline = manager.store.get("4")

        line = view.format_event(deadline)

        assert "23:59" in line
        assert "23:59 - 23:59" not in line

    def test_share_badge(self, manager):
        view = CalendarView(manager.project(), STUDENT, now=manager.clock())

        assert "[shared 1/3]" in view.format_event(manager.store.get("2"))

    def test_truncate(self, manager):
        view = CalendarView(manager.project(), STUDENT)
        assert view.truncate("short", 10) == "short"
        assert view.truncate("a" * 20, 10) == "aaaaaaa..."


class TestDisplay:
    def test_month_view(self, manager, capsys):
        render(manager, "month")
        out = capsys.readouterr().out

        assert "April 2025" in out
        assert "Sun" in out.split("\n")[4]
        assert "22 •1" in out
        assert "Database Design Midterm" in out
        assert "Final Project Deadline" not in out
        assert "Total events: 3" in out

    def test_month_grid_week_start(self, manager, capsys):
        manager.set_view("month")
        view = CalendarView(manager.project(), STUDENT, week_start=0)
        view.display_month_grid()
        header = capsys.readouterr().out.split("\n")[0]

        assert header.split() == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

    def test_month_view_more_indicator(self, manager, capsys):
        for hour in (12, 13, 14):
            manager.store.create(
                EventDraft(
                    title=f"Lab {hour}",
                    start=datetime(2025, 4, 22, hour),
                    end=datetime(2025, 4, 22, hour, 45),
                )
            )
        render(manager, "month")
        out = capsys.readouterr().out

        assert "Lab 12" in out
        assert "Lab 13" not in out
        assert "+2 more" in out

    def test_week_view_lists_empty_days(self, manager, capsys):
        render(manager, "week")
        out = capsys.readouterr().out

        assert "Sunday, Apr 20" in out
        assert "Saturday, Apr 26" in out
        assert out.count("No events") == 4
        assert "⚲ Online" in out

    def test_day_view_hours(self, manager, capsys):
        render(manager, "day")
        out = capsys.readouterr().out

        assert "08:00" in out
        assert "10:00" in out
        assert "03:00" not in out
        assert "JavaScript Fundamentals Quiz" in out
        assert "Total events: 1" in out


class TestColors:
    def test_category_colors(self):
        assert Colors.for_category("amber") == Colors.YELLOW
        assert Colors.for_category("slate") == Colors.GREY
        assert Colors.for_category("unknown") == Colors.WHITE
