import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from constants import FREE_PERIOD, PERIOD_FIELDS, REQUIRED_KEYS
from utils import format_minutes, parse_end_minutes, parse_start_minutes, split_teachers

logger = logging.getLogger(__name__)


class TimetableDataError(ValueError):
    """Raised when the timetable file cannot be read or has the wrong shape."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path


@dataclass(frozen=True)
class Timetable:
    days: List[Dict[str, str]]
    subjects: Dict[str, Dict[str, str]]
    periods: List[Any]
    raw_data: Dict[str, Dict[str, List[Dict[str, str]]]] = field(default_factory=dict)


def load_from_dict(d: Dict[str, Any], path: Optional[str] = None) -> Timetable:
    """Validate the raw structure and wrap it in a Timetable."""
    if not isinstance(d, dict):
        raise TimetableDataError("Timetable root must be an object", path)
    for key in REQUIRED_KEYS:
        if key not in d:
            raise TimetableDataError(f"Missing required key '{key}'", path)

    expected = {"days": list, "subjects": dict, "periods": list, "rawData": dict}
    for key, kind in expected.items():
        if not isinstance(d[key], kind):
            raise TimetableDataError(f"'{key}' must be a {kind.__name__}", path)

    for day in d["days"]:
        if "id" not in day or "name" not in day:
            raise TimetableDataError("Every day needs an 'id' and a 'name'", path)

    for day_name, classes in d["rawData"].items():
        for class_name, entries in classes.items():
            for entry in entries:
                missing = [f for f in PERIOD_FIELDS if f not in entry]
                if missing:
                    raise TimetableDataError(
                        f"{day_name} / {class_name}: period entry missing {', '.join(missing)}", path
                    )

    day_names = [day["name"] for day in d["days"]]
    for name in day_names:
        if name not in d["rawData"]:
            logger.warning("Day %s has no timetable rows", name)
    for name in d["rawData"]:
        if name not in day_names:
            logger.warning("Timetable rows for %s do not match any listed day", name)

    return Timetable(
        days=d["days"],
        subjects=d["subjects"],
        periods=d["periods"],
        raw_data=d["rawData"],
    )


def parse_timetable(file) -> Timetable:
    """Read a timetable JSON file (path or file-like object) into a Timetable."""
    path = file if isinstance(file, str) else getattr(file, "name", None)
    try:
        if isinstance(file, str):
            with open(file, "r", encoding="utf-8") as f:
                d = json.load(f)
        else:
            d = json.load(file)
    except (OSError, json.JSONDecodeError) as e:
        raise TimetableDataError(f"Could not read timetable: {e}", path) from e

    timetable = load_from_dict(d, path)
    class_count = sum(len(classes) for classes in timetable.raw_data.values())
    logger.info(
        "Loaded timetable from %s: %d days, %d class schedules, %d subjects",
        path, len(timetable.days), class_count, len(timetable.subjects),
    )
    return timetable


def find_day(timetable: Timetable, day_id: str) -> Optional[Dict[str, str]]:
    for day in timetable.days:
        if day["id"] == day_id:
            return day
    return None


def day_rows(timetable: Timetable, day_id: str) -> Dict[str, List[Dict[str, str]]]:
    """Class -> period entries for a day id; empty when the day is unknown."""
    day = find_day(timetable, day_id)
    if day is None:
        return {}
    return timetable.raw_data.get(day["name"], {})


def classes_for_day(timetable: Timetable, day_id: str) -> List[str]:
    return sorted(day_rows(timetable, day_id))


def all_teachers(timetable: Timetable) -> List[str]:
    """Sorted individual teacher names across the whole week."""
    teachers = set()
    for classes in timetable.raw_data.values():
        for entries in classes.values():
            for entry in entries:
                teachers.update(split_teachers(entry["teacher"]))
    return sorted(teachers)


def legend_subjects(timetable: Timetable) -> List[Dict[str, str]]:
    return [s for s in timetable.subjects.values() if s.get("name") != FREE_PERIOD]


def default_class(classes: List[str], selected: Optional[str]) -> Optional[str]:
    if selected in classes:
        return selected
    return classes[0] if classes else None


def default_teacher(teachers: List[str], selected: Optional[str]) -> Optional[str]:
    if selected and selected in teachers:
        return selected
    return teachers[0] if teachers else None


def school_hours(timetable: Timetable) -> Optional[Tuple[str, str]]:
    """Earliest start and latest end over all well-formed period times."""
    starts, ends = [], []
    for classes in timetable.raw_data.values():
        for entries in classes.values():
            for entry in entries:
                start, end = parse_start_minutes(entry["time"]), parse_end_minutes(entry["time"])
                if start is not None and end is not None:
                    starts.append(start)
                    ends.append(end)
    if not starts:
        return None
    return format_minutes(min(starts)), format_minutes(max(ends))
