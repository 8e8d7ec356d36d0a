import os
from pathlib import Path

# Dataset markers
FREE_PERIOD = "---"
TEACHER_DELIMITER = "/"
TIME_RANGE_SEPARATOR = " - "

# Every period is treated as 40 minutes long, whatever the end time says
PERIOD_MINUTES = 40

# Weekly session count shown as a full load bar
FULL_WEEKLY_LOAD = 24

DEFAULT_DAY_ID = "sunday"

FALLBACK_SUBJECT = {
    "icon": "📚",
    "color": "#f5f5f5",
    "textColor": "#333",
    "borderColor": "#ddd",
}

FREE_PERIOD_COLORS = {"color": "#fafafa", "textColor": "#ccc", "borderColor": "#e0e0e0"}
UNKNOWN_SUBJECT_COLORS = {"color": "#f5f5f5", "textColor": "#666", "borderColor": "#ddd"}

REQUIRED_KEYS = ("days", "subjects", "periods", "rawData")
PERIOD_FIELDS = ("period", "time", "subject", "teacher")

TIMETABLE_PATH = os.environ.get(
    "TIMETABLE_PATH",
    str(Path(__file__).parent.parent / "assets" / "timetable.json"),
)
LOG_LEVEL = os.environ.get("TIMETABLE_LOG_LEVEL", "INFO")
