"""
timetable_engine/data/exporter.py
=================================
Turns generated entries into DataFrames / CSV files: one combined table,
one file per cohort and semester half, and a faculty-wise view.
"""

import os

import pandas as pd

from timetable_engine.config.time_config import get_active_config

ENTRY_COLUMNS = [
    "Branch", "Year", "Section", "Semester Half", "Day", "Time Slot",
    "Course", "Faculty", "Room", "Type", "Is Shared", "Shared With",
]
FACULTY_COLUMNS = [
    "Faculty", "Semester Half", "Day", "Time Slot", "Course",
    "Branch", "Year", "Section", "Room", "Type",
]


def _order_maps(config):
    config = config or get_active_config()
    day_index = {d: i for i, d in enumerate(config["working_days"])}
    slot_index = {s: i for i, s in enumerate(config["time_slots"])}
    return day_index, slot_index


def _sort(df, leading, config):
    if df.empty:
        return df
    day_index, slot_index = _order_maps(config)
    df = df.assign(
        _day=df["Day"].map(lambda d: day_index.get(d, 999)),
        _slot=df["Time Slot"].map(lambda s: slot_index.get(s, 999)),
    )
    df = df.sort_values(leading + ["_day", "_slot"], kind="stable")
    return df.drop(columns=["_day", "_slot"]).reset_index(drop=True)


def entries_to_frame(entries, config=None):
    """All entries as one table sorted by branch, year, section, half, then day and slot."""
    df = pd.DataFrame([e.to_record() for e in entries], columns=ENTRY_COLUMNS)
    return _sort(df, ["Branch", "Year", "Section", "Semester Half"], config)


def export_csv(entries, path, config=None):
    df = entries_to_frame(entries, config)
    folder = os.path.dirname(os.fspath(path))
    if folder:
        os.makedirs(folder, exist_ok=True)
    df.to_csv(path, index=False, encoding="utf-8")
    return path


def export_per_cohort(entries, output_dir="timetable_outputs", config=None):
    """One CSV per branch/year/section/half under output_dir/<branch>/."""
    df = entries_to_frame(entries, config)
    paths = []
    if df.empty:
        return paths
    for (branch, year, section, half), rows in df.groupby(
            ["Branch", "Year", "Section", "Semester Half"], sort=True):
        branch_dir = os.path.join(output_dir, str(branch))
        os.makedirs(branch_dir, exist_ok=True)
        path = os.path.join(branch_dir, f"Year{year}_{section}_{half}.csv")
        rows.to_csv(path, index=False, encoding="utf-8")
        paths.append(path)
    return paths


def faculty_timetable(entries, config=None):
    """
    One row per (individual faculty, entry). Team-taught courses list their
    faculty as "A / B"; each name gets its own row.
    """
    rows = []
    for e in entries:
        if not e.faculty:
            continue
        for name in (f.strip() for f in e.faculty.split("/")):
            if not name:
                continue
            rows.append({
                "Faculty": name,
                "Semester Half": e.semester_half,
                "Day": e.day,
                "Time Slot": e.time_slot,
                "Course": e.course,
                "Branch": e.branch,
                "Year": e.year,
                "Section": e.section,
                "Room": e.room,
                "Type": e.type,
            })
    df = pd.DataFrame(rows, columns=FACULTY_COLUMNS)
    return _sort(df, ["Faculty", "Semester Half"], config)


def export_faculty_csv(entries, path, config=None):
    df = faculty_timetable(entries, config)
    folder = os.path.dirname(os.fspath(path))
    if folder:
        os.makedirs(folder, exist_ok=True)
    df.to_csv(path, index=False, encoding="utf-8")
    return path
