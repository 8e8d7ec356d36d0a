import copy

import pytest

from parser import load_from_dict

RAW = {
    "days": [
        {"id": "sunday", "name": "Sunday"},
        {"id": "monday", "name": "Monday"},
        {"id": "tuesday", "name": "Tuesday"},
    ],
    "subjects": {
        "math": {"name": "Math", "icon": "🔢", "color": "#e3f2fd", "textColor": "#0d47a1", "borderColor": "#1976d2"},
        "science": {"name": "Science", "icon": "🔬", "color": "#e8f5e9", "textColor": "#1b5e20", "borderColor": "#388e3c"},
        "free": {"name": "---", "icon": "", "color": "#fafafa", "textColor": "#ccc", "borderColor": "#e0e0e0"},
    },
    "periods": [1, 2, 3],
    "rawData": {
        "Sunday": {
            "5A": [
                {"period": "1", "time": "09:00 - 09:40", "subject": "Science", "teacher": "Huda"},
                {"period": "2", "time": "09:40 - 10:20", "subject": "---", "teacher": "---"},
                {"period": "3", "time": "11:00 - 11:40", "subject": "Math", "teacher": "Ali/Sara"},
            ],
            "5B": [
                {"period": "1", "time": "09:00 - 09:40", "subject": "Drama", "teacher": "Omar"},
                {"period": "2", "time": "09:40 - 10:20", "subject": "Science", "teacher": ""},
                {"period": "3", "time": "11:00 - 11:40", "subject": "Math", "teacher": "Ali/Sara"},
            ],
        },
        "Monday": {
            "5A": [
                {"period": "2", "time": "09:40 - 10:20", "subject": "Math", "teacher": "Ali"},
                {"period": "10", "time": "14:00 - 14:40", "subject": "Science", "teacher": " Sara / Huda "},
            ],
            "5B": [
                {"period": "1", "time": "09:00 - 09:40", "subject": "Science", "teacher": "Huda"},
            ],
        },
    },
}


@pytest.fixture
def raw():
    return copy.deepcopy(RAW)


@pytest.fixture
def timetable(raw):
    return load_from_dict(raw)
