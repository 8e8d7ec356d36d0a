import logging
from datetime import datetime

import pandas as pd
import streamlit as st

from constants import DEFAULT_DAY_ID, LOG_LEVEL, TIMETABLE_PATH
from parser import (
    TimetableDataError, parse_timetable, classes_for_day, all_teachers,
    legend_subjects, default_class, default_teacher, find_day, school_hours,
)
from views import (
    project_class_schedule, project_time_slots, project_teacher_schedule,
    aggregate_workload, locate_current_period,
)
from tables import (
    class_schedule_frame, time_slot_frame, workload_frame, teacher_schedule_frame, frame_to_excel,
    period_card_html, slot_card_html, legend_html,
)
from utils import current_minutes, subject_colors

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

st.set_page_config(page_title="School Timetable", layout="wide")


@st.cache_resource
def get_timetable(path):
    return parse_timetable(path)


# Derived views are cached per selector tuple; the dataset itself is never hashed
@st.cache_data
def cached_class_schedule(path, day_id, class_name):
    return project_class_schedule(get_timetable(path), day_id, class_name)


@st.cache_data
def cached_time_slots(path, day_id):
    return project_time_slots(get_timetable(path), day_id)


@st.cache_data
def cached_teacher_schedule(path, day_id, teacher_name):
    return project_teacher_schedule(get_timetable(path), day_id, teacher_name)


@st.cache_data
def cached_workload(path):
    return aggregate_workload(get_timetable(path))


def period_card(*args, **kwargs):
    st.markdown(period_card_html(*args, **kwargs), unsafe_allow_html=True)


try:
    timetable = get_timetable(TIMETABLE_PATH)
except TimetableDataError as e:
    logger.error("Timetable unavailable: %s", e.message)
    st.error(f"❌ {e.message}")
    st.stop()

# Session state initialization
if "selected_day" not in st.session_state:
    st.session_state.selected_day = DEFAULT_DAY_ID
if "selected_class" not in st.session_state:
    st.session_state.selected_class = None
if "selected_teacher" not in st.session_state:
    st.session_state.selected_teacher = None

# UI: Header
st.markdown("""
    <div style='text-align: center; padding: 10px;'>
        <h1 style='color: #1e3a8a;'>📅 School Timetable</h1>
        <hr style='margin-top: 15px; margin-bottom: 25px;'>
    </div>
""", unsafe_allow_html=True)

# Sidebar Navigation
st.sidebar.title("Navigation")
day_ids = [d["id"] for d in timetable.days]
day_labels = {d["id"]: d["name"] for d in timetable.days}
if st.session_state.selected_day not in day_ids and day_ids:
    st.session_state.selected_day = day_ids[0]
selected_day = st.sidebar.radio(
    "📆 Day", day_ids, format_func=lambda d: day_labels[d], key="selected_day"
)
view_mode = st.sidebar.radio("View", ["🎓 By Class", "⏰ By Period", "👨‍🏫 By Teacher"])

classes = classes_for_day(timetable, selected_day)
teachers = all_teachers(timetable)
selected_class = default_class(classes, st.session_state.selected_class)
selected_teacher = default_teacher(teachers, st.session_state.selected_teacher)

if view_mode == "🎓 By Class" and classes:
    selected_class = st.sidebar.selectbox("🎓 Class", classes, index=classes.index(selected_class))
    st.session_state.selected_class = selected_class
elif view_mode == "👨‍🏫 By Teacher" and teachers:
    selected_teacher = st.sidebar.selectbox("👨‍🏫 Teacher", teachers, index=teachers.index(selected_teacher))
    st.session_state.selected_teacher = selected_teacher

st.sidebar.markdown("### Subjects")
for subject in legend_subjects(timetable):
    st.sidebar.markdown(legend_html(subject), unsafe_allow_html=True)

day = find_day(timetable, selected_day)
st.subheader(day["name"] if day else "")

if view_mode == "🎓 By Class":
    if not selected_class:
        st.info("Please select a day and a class.")
    else:
        st.markdown(f"### Periods for {selected_class}")
        schedule = cached_class_schedule(TIMETABLE_PATH, selected_day, selected_class)
        current_index = locate_current_period(schedule, current_minutes(datetime.now()))
        cols = st.columns(3)
        for index, item in enumerate(schedule):
            with cols[index % 3]:
                period_card(item.period, item.time, item.subject, item.teacher, index == current_index)
        if schedule:
            with st.expander("Table"):
                st.dataframe(class_schedule_frame(schedule), use_container_width=True)

elif view_mode == "⏰ By Period":
    groups = cached_time_slots(TIMETABLE_PATH, selected_day)
    if not groups:
        st.info("No timetable data for this day.")
    for group in groups:
        with st.expander(f"Period #{group.period}  ⏰ {group.time}", expanded=True):
            cols = st.columns(3)
            for index, slot in enumerate(group.classes):
                colors = subject_colors(timetable.subjects, slot.subject)
                with cols[index % 3]:
                    st.markdown(slot_card_html(slot, colors), unsafe_allow_html=True)
    if groups:
        with st.expander("Table"):
            st.dataframe(time_slot_frame(groups), use_container_width=True)

elif view_mode == "👨‍🏫 By Teacher":
    if not selected_teacher:
        st.info("Please select a teacher to view the timetable.")
    else:
        st.markdown(f"### Periods for {selected_teacher}")
        schedule = cached_teacher_schedule(TIMETABLE_PATH, selected_day, selected_teacher)
        if not schedule:
            st.info(f"No periods for {selected_teacher} on this day.")
        cols = st.columns(3)
        for index, item in enumerate(schedule):
            with cols[index % 3]:
                period_card(item.period, item.time, item.subject, badge=" + ".join(item.class_names))
        if schedule:
            with st.expander("Table"):
                st.dataframe(teacher_schedule_frame(schedule), use_container_width=True)

# === SUMMARY ===
st.markdown("---")
hours = school_hours(timetable)
col1, col2, col3, col4 = st.columns(4)
col1.metric("📖 Daily periods", len(timetable.periods))
col2.metric("👨‍🏫 Teachers", len(teachers))
col3.metric("🎓 Classes today", len(classes))
col4.metric("⏰ School hours", f"{hours[0]} - {hours[1]}" if hours else "-")

# === WEEKLY LOAD ===
st.markdown("### 📊 Weekly Sessions per Teacher")
stats = cached_workload(TIMETABLE_PATH)
load_df = workload_frame(stats)
if load_df.empty:
    st.info("No teacher sessions found.")
else:
    st.dataframe(
        load_df,
        use_container_width=True,
        column_config={"Load": st.column_config.ProgressColumn("Load", min_value=0.0, max_value=1.0)},
    )
    st.bar_chart(load_df.set_index("Teacher")["Weekly Sessions"])
    st.download_button(
        label="📥 Download Excel",
        data=frame_to_excel(load_df, "Weekly sessions per teacher"),
        file_name=f"weekly_sessions_{pd.Timestamp.today():%Y-%m-%d}.xlsx",
    )
