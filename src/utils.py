from constants import (
    FALLBACK_SUBJECT,
    FREE_PERIOD,
    FREE_PERIOD_COLORS,
    FULL_WEEKLY_LOAD,
    TEACHER_DELIMITER,
    TIME_RANGE_SEPARATOR,
    UNKNOWN_SUBJECT_COLORS,
)


def resolve_subject(subjects, subject_name):
    """Return the subject record whose display name matches, or a fresh fallback record.

    The first match in mapping order wins when two records share a name.
    The fallback is built per call so the shared mapping is never touched.
    """
    for record in subjects.values():
        if record.get("name") == subject_name:
            return record
    return {"name": subject_name, **FALLBACK_SUBJECT}


def is_free_teacher(raw_teacher):
    return not raw_teacher or raw_teacher == FREE_PERIOD


def split_teachers(raw_teacher):
    """Split a co-teacher field like "Ali/Sara" into individual names."""
    if is_free_teacher(raw_teacher):
        return []
    names = [name.strip() for name in raw_teacher.split(TEACHER_DELIMITER)]
    return [name for name in names if name]


def subject_colors(subjects, subject_name):
    """Colours for a raw subject string in the by-time view."""
    for record in subjects.values():
        if record.get("name") == subject_name:
            return {
                "color": record["color"],
                "textColor": record["textColor"],
                "borderColor": record["borderColor"],
            }
    if subject_name == FREE_PERIOD:
        return dict(FREE_PERIOD_COLORS)
    return dict(UNKNOWN_SUBJECT_COLORS)


def _clock_minutes(text):
    parts = text.strip().split(":")
    if len(parts) != 2 or not all(p.isdigit() for p in parts):
        return None
    return int(parts[0]) * 60 + int(parts[1])


def parse_start_minutes(time_range):
    """Minutes since midnight of the start of "HH:MM - HH:MM", or None if malformed."""
    if not time_range or TIME_RANGE_SEPARATOR not in time_range:
        return None
    return _clock_minutes(time_range.split(TIME_RANGE_SEPARATOR)[0])


def parse_end_minutes(time_range):
    if not time_range or TIME_RANGE_SEPARATOR not in time_range:
        return None
    return _clock_minutes(time_range.split(TIME_RANGE_SEPARATOR)[1])


def format_minutes(minutes):
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def current_minutes(now):
    """Wall-clock minutes since midnight for a datetime or time."""
    return now.hour * 60 + now.minute


def load_fraction(session_count):
    """Share of a full weekly load, capped at 1."""
    return min(session_count / FULL_WEEKLY_LOAD, 1.0)
