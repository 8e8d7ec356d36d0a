from html import escape
from io import BytesIO

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font

from utils import load_fraction

CLASS_COLUMNS = ["Period", "Time", "Subject", "Teacher"]
TIME_SLOT_COLUMNS = ["Period", "Time", "Class", "Subject", "Teacher"]
TEACHER_COLUMNS = ["Period", "Time", "Classes", "Subject"]
WORKLOAD_COLUMNS = ["Teacher", "Weekly Sessions", "Load"]


def class_schedule_frame(schedule):
    rows = [{
        "Period": p.period,
        "Time": p.time,
        "Subject": p.subject["name"] if p.subject else "",
        "Teacher": p.teacher or "",
    } for p in schedule]
    return pd.DataFrame(rows, columns=CLASS_COLUMNS)


def time_slot_frame(groups):
    """One row per class per time slot, in group order."""
    rows = []
    for group in groups:
        for slot in group.classes:
            rows.append({
                "Period": group.period,
                "Time": group.time,
                "Class": slot.class_name,
                "Subject": slot.subject,
                "Teacher": slot.teacher,
            })
    return pd.DataFrame(rows, columns=TIME_SLOT_COLUMNS)


def teacher_schedule_frame(schedule):
    rows = [{
        "Period": p.period,
        "Time": p.time,
        "Classes": " + ".join(p.class_names),
        "Subject": p.subject["name"],
    } for p in schedule]
    return pd.DataFrame(rows, columns=TEACHER_COLUMNS)


def workload_frame(stats):
    rows = [{
        "Teacher": s.teacher_name,
        "Weekly Sessions": s.session_count,
        "Load": load_fraction(s.session_count),
    } for s in stats]
    return pd.DataFrame(rows, columns=WORKLOAD_COLUMNS)


def frame_to_excel(df, title):
    """Render a DataFrame as an .xlsx workbook with a merged title row; returns bytes."""
    output = BytesIO()
    wb = Workbook()
    ws = wb.active
    ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=max(df.shape[1], 1))
    ws.cell(row=1, column=1).value = title
    ws.cell(row=1, column=1).alignment = Alignment(horizontal='center')
    ws.cell(row=1, column=1).font = Font(bold=True, size=14)

    for c_idx, col_name in enumerate(df.columns, start=1):
        ws.cell(row=2, column=c_idx).value = col_name
        ws.cell(row=2, column=c_idx).font = Font(bold=True)

    for r_idx, row in enumerate(df.itertuples(index=False), start=3):
        for c_idx, value in enumerate(row, start=1):
            ws.cell(row=r_idx, column=c_idx).value = value

    wb.save(output)
    return output.getvalue()


def period_card_html(period, time, subject, teacher=None, is_current=False, badge=None):
    """Markup for one period card; dataset strings are escaped."""
    if subject is None:
        return "<div style='border-left: 4px solid #e5e7eb; padding: 10px; color: #9ca3af; text-align: center;'>---</div>"
    ring = "box-shadow: 0 0 0 2px #3b82f6;" if is_current else ""
    parts = [
        f"<div style='background: {escape(subject['color'])}; border-left: 4px solid {escape(subject['borderColor'])}; "
        f"color: {escape(subject['textColor'])}; padding: 10px; border-radius: 6px; margin-bottom: 8px; {ring}'>",
    ]
    if badge:
        parts.append(f"<div style='font-weight: bold; color: #1d4ed8;'>{escape(badge)}</div>")
    parts.append(f"<div style='font-size: 0.75em; color: gray;'>{escape(time)}</div>")
    parts.append(f"<div style='font-size: 1.1em; font-weight: bold;'>{escape(subject['icon'])} {escape(subject['name'])}</div>")
    if teacher:
        parts.append(f"<div style='opacity: 0.75;'>👨‍🏫 {escape(teacher)}</div>")
    parts.append(f"<div style='font-size: 0.75em; color: gray;'>Period #{period}</div>")
    if is_current:
        parts.append("<span style='background: #22c55e; color: white; padding: 2px 6px; border-radius: 4px;'>Now</span>")
    parts.append("</div>")
    return "".join(parts)


def slot_card_html(slot, colors):
    """Markup for one class inside a time-slot group."""
    teacher_line = f"<div style='opacity: 0.8;'>👨‍🏫 {escape(slot.teacher)}</div>" if slot.teacher else ""
    return (
        f"<div style='background: {escape(colors['color'])}; border-left: 4px solid {escape(colors['borderColor'])}; "
        f"padding: 10px; border-radius: 6px; margin-bottom: 8px;'>"
        f"<div style='font-size: 0.85em; color: #4b5563;'>{escape(slot.class_name)}</div>"
        f"<div style='font-weight: bold; color: {escape(colors['textColor'])};'>{escape(slot.subject)}</div>"
        f"{teacher_line}</div>"
    )


def legend_html(subject):
    return (
        f"<span style='display: inline-block; width: 12px; height: 12px; background: {escape(subject['color'])};'></span> "
        f"{escape(subject['name'])}"
    )
