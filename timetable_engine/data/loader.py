"""
timetable_engine/data/loader.py
===============================
Reads course, faculty and room tables (CSV path or DataFrame) into model
records, accepting common column-name variants and filling missing optional
fields with their defaults.
"""

import pandas as pd

from timetable_engine.models.course import Course
from timetable_engine.models.faculty import Faculty
from timetable_engine.models.room import Room

COURSE_COLUMNS = {
    "code": ("code", "course code", "course_code"),
    "name": ("name", "course name", "course title", "title"),
    "faculty": ("faculty", "teacher", "lecturer", "instructor"),
    "duration": ("duration",),
    "type": ("type", "course type"),
    "branch": ("branch", "department", "dept"),
    "section": ("section",),
    "year": ("year",),
    "credits": ("credits",),
    "semesterHalf": ("semesterhalf", "semester half", "semester_half", "half"),
    "basket": ("basket",),
    "isElective": ("iselective", "is elective", "is_elective", "elective"),
    "sharedWith": ("sharedwith", "shared with", "shared_with"),
}

FACULTY_COLUMNS = {
    "name": ("name", "faculty", "faculty name"),
    "department": ("department", "dept"),
    "availability": ("availability", "available slots"),
}

ROOM_COLUMNS = {
    "number": ("number", "room no", "room number", "room", "name"),
    "capacity": ("capacity", "cap"),
    "type": ("type", "room type"),
}


# ---------- helpers ----------
def _read_table(source):
    if isinstance(source, pd.DataFrame):
        df = source.copy()
    elif isinstance(source, str) or hasattr(source, "__fspath__"):
        df = pd.read_csv(source, dtype=str, keep_default_na=True)
    else:
        raise ValueError("source must be DataFrame or CSV path")
    df.columns = [str(c).strip() for c in df.columns]
    return df


def _canonicalize(df, aliases):
    rename_map = {}
    for c in df.columns:
        low = c.lower()
        for canonical, names in aliases.items():
            if low in names and canonical not in rename_map.values():
                rename_map[c] = canonical
                break
    if rename_map:
        df = df.rename(columns=rename_map)
    return df


def _text(v, default=""):
    if v is None or (not isinstance(v, (list, tuple)) and pd.isna(v)):
        return default
    s = str(v).strip()
    return s if s else default


def _to_int(v, default=0):
    try:
        return int(float(v))
    except (TypeError, ValueError):
        return default


def _to_bool(v):
    if isinstance(v, bool):
        return v
    return _text(v).lower() in ("1", "true")


def _half(v):
    s = _text(v, "0")
    # "1.0" from numeric columns
    n = _to_int(s, None)
    return str(n) if n is not None else s


def _split_list(v):
    s = _text(v)
    if not s:
        return []
    return [t.strip() for t in s.replace(";", ",").split(",") if t.strip()]


# ---------- records ----------
def course_from_record(row):
    year = _to_int(row.get("year"), 1) or 1
    return Course(
        code=_text(row.get("code")),
        name=_text(row.get("name")),
        faculty=_text(row.get("faculty")),
        duration=_to_int(row.get("duration"), 1) or 1,
        type=_text(row.get("type"), "Lecture"),
        branch=_text(row.get("branch")),
        section=_text(row.get("section"), "ALL"),
        year=year,
        credits=_to_int(row.get("credits"), 3) or 3,
        semester_half=_half(row.get("semesterHalf")),
        basket=_to_int(row.get("basket"), 0),
        is_elective=_to_bool(row.get("isElective")),
        shared_with=_text(row.get("sharedWith")),
    )


def load_courses(source):
    df = _canonicalize(_read_table(source), COURSE_COLUMNS)
    return [course_from_record(row) for row in df.to_dict(orient="records")]


def load_faculty(source):
    df = _canonicalize(_read_table(source), FACULTY_COLUMNS)
    faculty = []
    for row in df.to_dict(orient="records"):
        name = _text(row.get("name"))
        if not name:
            continue
        faculty.append(Faculty(
            name=name,
            department=_text(row.get("department")),
            availability=_split_list(row.get("availability")),
        ))
    return faculty


def load_rooms(source):
    df = _canonicalize(_read_table(source), ROOM_COLUMNS)
    rooms = []
    for row in df.to_dict(orient="records"):
        number = _text(row.get("number"))
        if not number:
            continue
        rooms.append(Room(
            number=number,
            capacity=_to_int(row.get("capacity"), 0),
            type=_text(row.get("type"), "Classroom"),
        ))
    return rooms
