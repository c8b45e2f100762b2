import pytest
import json
import os
from pathlib import Path
from coursecal.categories import ADMIN, STUDENT, AdminCategory, StudentCategory
from coursecal.config import (
    CalendarConfig,
    find_default_config,
    load_config,
    parse_week_start,
)


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Empty working, home and XDG config directories."""
    monkeypatch.chdir(tmp_path)
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home_dir)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home_dir / ".config"))
    return home_dir


class TestParseWeekStart:
    def test_parse_names(self):
        assert parse_week_start("sunday") == 6
        assert parse_week_start("Monday") == 0
        assert parse_week_start(" wed ") == 2

    def test_parse_numbers(self):
        assert parse_week_start(0) == 0
        assert parse_week_start("6") == 6

    def test_reject_out_of_range(self):
        with pytest.raises(ValueError):
            parse_week_start(7)
        with pytest.raises(ValueError):
            parse_week_start("9")

    def test_reject_ambiguous_or_invalid(self):
        with pytest.raises(ValueError):
            parse_week_start("s")
        with pytest.raises(ValueError):
            parse_week_start("funday")
        with pytest.raises(ValueError):
            parse_week_start(True)
        with pytest.raises(ValueError):
            parse_week_start(None)


class TestLoadConfig:
    def test_load_valid_config(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_data = {
            "vocabulary": "admin",
            "week_start": "monday",
            "default_category": "system",
            "max_events_per_day": 3,
            "events": "/data/events.json",
        }
        config_file.write_text(json.dumps(config_data))

        config = load_config(str(config_file))

        assert config.vocabulary.name == "admin"
        assert config.vocabulary.default is AdminCategory.SYSTEM
        assert config.week_start == 0
        assert config.max_events_per_day == 3
        assert config.events_path == "/data/events.json"

    def test_load_config_with_defaults(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text("{}")

        config = load_config(str(config_file))

        assert config == CalendarConfig()
        assert config.vocabulary is STUDENT
        assert config.vocabulary.default is StudentCategory.ASSIGNMENT
        assert config.week_start == 6
        assert config.max_events_per_day == 2
        assert config.events_path is None

    def test_default_category_does_not_leak(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text('{"vocabulary": "admin", "default_category": "student"}')

        config = load_config(str(config_file))

        assert config.vocabulary.default is AdminCategory.STUDENT
        assert ADMIN.default is AdminCategory.COURSE

    def test_relative_events_path(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text('{"events": "events.json"}')

        config = load_config(str(config_file))

        assert config.events_path == str(tmp_path / "events.json")

    def test_unlimited_events_per_day(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text('{"max_events_per_day": null}')

        assert load_config(str(config_file)).max_events_per_day is None

    def test_load_nonexistent_config(self):
        with pytest.raises(FileNotFoundError):
            load_config("/nonexistent/path/config.json")

    def test_load_invalid_json(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text("{not json")

        with pytest.raises(ValueError, match="Invalid JSON"):
            load_config(str(config_file))

    def test_load_config_not_object(self, tmp_path):
        config_file = tmp_path / "config.json"
        config_file.write_text("[]")

        with pytest.raises(ValueError, match="JSON object"):
            load_config(str(config_file))

    @pytest.mark.parametrize(
        "config_data",
        [
            {"vocabulary": "parent"},
            {"default_category": "webinar"},
            {"week_start": "someday"},
            {"max_events_per_day": -1},
            {"max_events_per_day": "many"},
            {"events": 42},
        ],
    )
    def test_load_invalid_values(self, tmp_path, config_data):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps(config_data))

        with pytest.raises(ValueError):
            load_config(str(config_file))


class TestFindDefaultConfig:
    def test_find_coursecal_json(self, isolated_home):
        Path("coursecal.json").write_text("{}")

        assert find_default_config() == "coursecal.json"

    def test_find_calendar_json(self, isolated_home):
        Path("calendar.json").write_text("{}")

        assert find_default_config() == "calendar.json"

    def test_coursecal_priority_over_calendar(self, isolated_home):
        Path("coursecal.json").write_text("{}")
        Path("calendar.json").write_text("{}")

        assert find_default_config() == "coursecal.json"

    def test_no_default_config(self, isolated_home):
        assert find_default_config() is None

    def test_find_home_config(self, isolated_home):
        """Test finding config in home directory."""
        home_config = isolated_home / ".coursecal.json"
        home_config.write_text("{}")

        assert find_default_config() == str(home_config)

    def test_find_config_directory(self, isolated_home):
        """Test finding config in user config directory."""
        config_dir = isolated_home / ".config" / "coursecal"
        config_dir.mkdir(parents=True)
        config_file = config_dir / "config.json"
        config_file.write_text("{}")

        assert find_default_config() == str(config_file)

    def test_current_dir_priority(self, isolated_home):
        """Test that current directory has priority over home."""
        Path("coursecal.json").write_text("{}")
        (isolated_home / ".coursecal.json").write_text("{}")

        # Current directory should win
        assert find_default_config() == "coursecal.json"

    def test_home_priority_over_config_dir(self, isolated_home):
        """Test that home directory has priority over config directory."""
        home_config = isolated_home / ".coursecal.json"
        home_config.write_text("{}")
        config_dir = isolated_home / ".config" / "coursecal"
        config_dir.mkdir(parents=True)
        (config_dir / "config.json").write_text("{}")

        # Home directory should win
        assert find_default_config() == str(home_config)

    def test_config_directory_is_not_a_file(self, isolated_home):
        os.makedirs(isolated_home / ".config" / "coursecal" / "config.json")

        assert find_default_config() is None
