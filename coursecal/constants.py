"""Configuration constants for the coursecal engine."""

# Config file settings
DEFAULT_CONFIG_FILES = ["coursecal.json", "calendar.json"]
HOME_CONFIG_FILE = ".coursecal.json"
CONFIG_DIR_NAME = "coursecal"

# Calendar settings
DEFAULT_VOCABULARY = "student"
DEFAULT_WEEK_START = 6  # Sunday, datetime weekday numbering
DEFAULT_MAX_EVENTS_PER_DAY = 2

# Editor form defaults
DEFAULT_START_TIME = "09:00"
DEFAULT_END_TIME = "10:00"
DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

# Upcoming panel
UPCOMING_WEEK_DAYS = 7
