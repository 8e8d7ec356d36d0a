import pytest

from parser import load_from_dict
from views import (
    ClassSlot, ResolvedPeriod, TeacherWorkloadStat, aggregate_workload, locate_current_period,
    project_class_schedule, project_teacher_schedule, project_time_slots,
)


def _raw_entries(timetable, day_name):
    return [
        (class_name, e["subject"], e["teacher"])
        for class_name, entries in timetable.raw_data[day_name].items()
        for e in entries
    ]


class TestClassSchedule:

    def test_resolves_periods(self, timetable):
        schedule = project_class_schedule(timetable, "sunday", "5A")
        assert [p.period for p in schedule] == [1, 2, 3]
        assert schedule[0].subject is timetable.subjects["science"]
        assert schedule[0].teacher == "Huda"

    def test_free_period_has_no_subject_or_teacher(self, timetable):
        free = project_class_schedule(timetable, "sunday", "5A")[1]
        assert free.subject is None
        assert free.teacher is None

    def test_co_teachers_stay_joined(self, timetable):
        assert project_class_schedule(timetable, "sunday", "5A")[2].teacher == "Ali/Sara"

    def test_unknown_subject_and_blank_teacher(self, timetable):
        schedule = project_class_schedule(timetable, "sunday", "5B")
        assert schedule[0].subject["icon"] == "📚"
        assert schedule[0].subject["name"] == "Drama"
        assert schedule[1].teacher is None

    def test_length_matches_source(self, timetable):
        for day in timetable.days:
            for class_name, entries in timetable.raw_data.get(day["name"], {}).items():
                schedule = project_class_schedule(timetable, day["id"], class_name)
                assert len(schedule) == len(entries)

    @pytest.mark.parametrize("day_id, class_name", [
        ("sunday", "6C"), ("tuesday", "5A"), ("friday", "5A"),
    ])
    def test_missing_selection_is_empty(self, timetable, day_id, class_name):
        assert project_class_schedule(timetable, day_id, class_name) == []

    def test_bad_period_number_is_fatal(self, raw):
        raw["rawData"]["Sunday"]["5A"][0]["period"] = "first"
        with pytest.raises(ValueError):
            project_class_schedule(load_from_dict(raw), "sunday", "5A")


class TestTimeSlots:

    def test_groups_by_period_and_time(self, timetable):
        groups = project_time_slots(timetable, "sunday")
        assert [(g.period, g.time) for g in groups] == [
            ("1", "09:00 - 09:40"), ("2", "09:40 - 10:20"), ("3", "11:00 - 11:40"),
        ]
        assert groups[2].classes == (
            ClassSlot("5A", "Math", "Ali/Sara"),
            ClassSlot("5B", "Math", "Ali/Sara"),
        )

    def test_numeric_order_not_text_order(self, timetable):
        groups = project_time_slots(timetable, "monday")
        assert [g.period for g in groups] == ["1", "2", "10"]

    def test_no_entry_lost_or_duplicated(self, timetable):
        groups = project_time_slots(timetable, "sunday")
        flattened = [(s.class_name, s.subject, s.teacher) for g in groups for s in g.classes]
        assert sorted(flattened) == sorted(_raw_entries(timetable, "Sunday"))

    def test_same_period_different_time_kept_apart(self, raw):
        raw["rawData"]["Sunday"]["5B"][0]["time"] = "09:05 - 09:45"
        groups = project_time_slots(load_from_dict(raw), "sunday")
        assert [(g.period, g.time) for g in groups[:2]] == [
            ("1", "09:00 - 09:40"), ("1", "09:05 - 09:45"),
        ]

    def test_unknown_day(self, timetable):
        assert project_time_slots(timetable, "friday") == []


class TestTeacherSchedule:

    def test_co_taught_classes_merge(self, timetable):
        schedule = project_teacher_schedule(timetable, "sunday", "Ali")
        assert len(schedule) == 1
        assert schedule[0].period == 3
        assert schedule[0].class_names == ("5A", "5B")
        assert schedule[0].subject is timetable.subjects["math"]

    def test_sorted_by_period(self, timetable):
        schedule = project_teacher_schedule(timetable, "monday", "Huda")
        assert [p.period for p in schedule] == [1, 10]
        assert [p.class_names for p in schedule] == [("5B",), ("5A",)]

    def test_trimmed_names_match(self, timetable):
        assert [p.period for p in project_teacher_schedule(timetable, "monday", "Sara")] == [10]

    def test_every_entry_lists_the_teacher(self, timetable):
        for teacher in ("Ali", "Sara", "Huda", "Omar"):
            for day in timetable.days:
                for item in project_teacher_schedule(timetable, day["id"], teacher):
                    rows = timetable.raw_data[day["name"]]
                    assert any(
                        teacher in [n.strip() for n in e["teacher"].split("/")]
                        for c in item.class_names
                        for e in rows[c]
                        if int(e["period"]) == item.period
                    )

    def test_exact_name_only(self, timetable):
        assert project_teacher_schedule(timetable, "sunday", "Al") == []

    def test_empty_teacher_name(self, timetable):
        assert project_teacher_schedule(timetable, "sunday", "") == []


class TestWorkload:

    def test_counts_distinct_sessions(self, timetable):
        assert aggregate_workload(timetable) == [
            TeacherWorkloadStat("Huda", 3),
            TeacherWorkloadStat("Ali", 2),
            TeacherWorkloadStat("Sara", 2),
            TeacherWorkloadStat("Omar", 1),
        ]

    def test_co_teaching_counts_once(self):
        entry = {"period": "3", "time": "11:00 - 11:40", "subject": "Math", "teacher": "Ali/Sara"}
        timetable = load_from_dict({
            "days": [{"id": "sunday", "name": "Sunday"}],
            "subjects": {},
            "periods": [],
            "rawData": {"Sunday": {"5A": [dict(entry)], "5B": [dict(entry)]}},
        })
        assert aggregate_workload(timetable) == [
            TeacherWorkloadStat("Ali", 1),
            TeacherWorkloadStat("Sara", 1),
        ]

    def test_ties_keep_discovery_order(self, timetable):
        stats = aggregate_workload(timetable)
        assert [s.teacher_name for s in stats if s.session_count == 2] == ["Ali", "Sara"]

    def test_empty_dataset(self):
        timetable = load_from_dict({"days": [], "subjects": {}, "periods": [], "rawData": {}})
        assert aggregate_workload(timetable) == []


class TestCurrentPeriod:

    def _schedule(self, *times):
        return [ResolvedPeriod(period=i + 1, time=t, subject=None, teacher=None) for i, t in enumerate(times)]

    def test_inside_window(self):
        assert locate_current_period(self._schedule("09:00 - 09:40"), 565) == 0

    def test_window_is_forty_minutes(self):
        schedule = self._schedule("09:00 - 10:30")
        assert locate_current_period(schedule, 540) == 0
        assert locate_current_period(schedule, 579) == 0
        assert locate_current_period(schedule, 580) is None
        assert locate_current_period(schedule, 585) is None

    def test_first_match_wins(self):
        schedule = self._schedule("09:00 - 09:40", "09:20 - 10:00")
        assert locate_current_period(schedule, 565) == 0

    def test_malformed_times_are_skipped(self):
        schedule = self._schedule("09:00", "bad", "09:00 - 09:40")
        assert locate_current_period(schedule, 550) == 2

    def test_nothing_running(self):
        assert locate_current_period(self._schedule("09:00 - 09:40"), 500) is None
        assert locate_current_period([], 500) is None


def test_projections_are_repeatable(timetable):
    assert project_class_schedule(timetable, "sunday", "5A") == project_class_schedule(timetable, "sunday", "5A")
    assert project_time_slots(timetable, "monday") == project_time_slots(timetable, "monday")
    assert project_teacher_schedule(timetable, "sunday", "Ali") == project_teacher_schedule(timetable, "sunday", "Ali")
    assert aggregate_workload(timetable) == aggregate_workload(timetable)


def test_free_subject_with_real_teacher_still_counts():
    timetable = load_from_dict({
        "days": [{"id": "sunday", "name": "Sunday"}],
        "subjects": {},
        "periods": [],
        "rawData": {"Sunday": {"5A": [
            {"period": "1", "time": "09:00 - 09:40", "subject": "---", "teacher": "Ali"},
        ]}},
    })
    schedule = project_teacher_schedule(timetable, "sunday", "Ali")
    assert len(schedule) == 1
    assert schedule[0].class_names == ("5A",)
    assert schedule[0].subject["name"] == "---"

    groups = project_time_slots(timetable, "sunday")
    assert groups[0].classes == (ClassSlot("5A", "---", "Ali"),)

    assert aggregate_workload(timetable) == [TeacherWorkloadStat("Ali", 1)]
