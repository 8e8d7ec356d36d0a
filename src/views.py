import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from constants import FREE_PERIOD, PERIOD_MINUTES
from parser import Timetable, day_rows
from utils import is_free_teacher, parse_start_minutes, resolve_subject, split_teachers

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedPeriod:
    period: int
    time: str
    subject: Optional[Dict[str, str]]
    teacher: Optional[str]


@dataclass(frozen=True)
class ClassSlot:
    class_name: str
    subject: str
    teacher: str


@dataclass(frozen=True)
class TimeSlotGroup:
    period: str
    time: str
    classes: Tuple[ClassSlot, ...]


@dataclass(frozen=True)
class TeacherPeriod:
    period: int
    time: str
    class_names: Tuple[str, ...]
    subject: Dict[str, str]


@dataclass(frozen=True)
class TeacherWorkloadStat:
    teacher_name: str
    session_count: int


def project_class_schedule(timetable: Timetable, day_id: str, class_name: str) -> List[ResolvedPeriod]:
    """Periods of one class on one day, in source order."""
    entries = day_rows(timetable, day_id).get(class_name)
    if not entries:
        return []

    schedule = []
    for entry in entries:
        subject = None
        if entry["subject"] != FREE_PERIOD:
            subject = resolve_subject(timetable.subjects, entry["subject"])
        # Co-teachers stay joined in this view
        teacher = None if is_free_teacher(entry["teacher"]) else entry["teacher"]
        schedule.append(ResolvedPeriod(
            period=int(entry["period"]),
            time=entry["time"],
            subject=subject,
            teacher=teacher,
        ))
    return schedule


def project_time_slots(timetable: Timetable, day_id: str) -> List[TimeSlotGroup]:
    """All classes of a day grouped by their literal (period, time) pair."""
    groups: Dict[Tuple[str, str], List[ClassSlot]] = {}
    for class_name, entries in day_rows(timetable, day_id).items():
        for entry in entries:
            key = (entry["period"], entry["time"])
            groups.setdefault(key, []).append(ClassSlot(
                class_name=class_name,
                subject=entry["subject"],
                teacher=entry["teacher"],
            ))

    ordered = sorted(groups.items(), key=lambda item: int(item[0][0]))
    return [
        TimeSlotGroup(period=period, time=time, classes=tuple(classes))
        for (period, time), classes in ordered
    ]


def project_teacher_schedule(timetable: Timetable, day_id: str, teacher_name: str) -> List[TeacherPeriod]:
    """One teacher's periods on a day; classes sharing a period are merged into one entry."""
    if not teacher_name:
        return []

    merged: Dict[str, dict] = {}
    for class_name, entries in day_rows(timetable, day_id).items():
        for entry in entries:
            if teacher_name not in split_teachers(entry["teacher"]):
                continue
            slot = merged.get(entry["period"])
            if slot is None:
                merged[entry["period"]] = {
                    "period": int(entry["period"]),
                    "time": entry["time"],
                    "class_names": [class_name],
                    "subject": resolve_subject(timetable.subjects, entry["subject"]),
                }
            elif class_name not in slot["class_names"]:
                slot["class_names"].append(class_name)

    schedule = [
        TeacherPeriod(
            period=slot["period"],
            time=slot["time"],
            class_names=tuple(slot["class_names"]),
            subject=slot["subject"],
        )
        for slot in merged.values()
    ]
    return sorted(schedule, key=lambda p: p.period)


def aggregate_workload(timetable: Timetable) -> List[TeacherWorkloadStat]:
    """Distinct weekly sessions per teacher, most loaded first.

    A session is (day, period, teacher): a teacher listed on several classes in the
    same period of the same day is counted once.
    """
    sessions: Dict[Tuple[str, str, str], None] = {}
    for day_name, classes in timetable.raw_data.items():
        for entries in classes.values():
            for entry in entries:
                for name in split_teachers(entry["teacher"]):
                    sessions.setdefault((day_name, entry["period"], name), None)

    counts: Dict[str, int] = {}
    for _, _, name in sessions:
        counts[name] = counts.get(name, 0) + 1

    stats = [TeacherWorkloadStat(teacher_name=name, session_count=count) for name, count in counts.items()]
    # sorted() is stable, so equal counts keep discovery order
    return sorted(stats, key=lambda s: s.session_count, reverse=True)


def locate_current_period(schedule: List[ResolvedPeriod], now_minutes: int) -> Optional[int]:
    """Index of the period running at now_minutes, or None."""
    for index, item in enumerate(schedule):
        start = parse_start_minutes(item.time)
        if start is None:
            logger.debug("Skipping period %s with malformed time %r", item.period, item.time)
            continue
        if start <= now_minutes < start + PERIOD_MINUTES:
            return index
    return None
