"""
timetable_engine/config/time_config.py
======================================
Defines the working week, the fixed time-of-day slots, the continuous blocks
between breaks, and the tuning knobs of the scheduling passes.
"""

from copy import deepcopy

_ACTIVE_CONFIG = {
    "working_days": ["MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY"],

    # Ordered time-of-day slots ("HH:MM - HH:MM")
    "time_slots": [
        "09:00 - 10:00",
        "10:00 - 10:30",
        "10:45 - 11:00",
        "11:00 - 12:00",
        "12:00 - 12:15",
        "12:15 - 12:30",
        "12:30 - 13:15",
        "14:00 - 14:30",
        "14:30 - 15:30",
        "15:30 - 15:40",
        "15:40 - 16:00",
        "16:00 - 16:30",
        "16:30 - 17:10",
        "17:10 - 17:30",
        "17:30 - 18:30",
    ],

    # Runs of slots with no break inside (tea break 10:30-10:45, lunch 13:15-14:00)
    "continuous_blocks": [
        {
            "name": "morning",
            "slots": ["09:00 - 10:00", "10:00 - 10:30"],
        },
        {
            "name": "late-morning",
            "slots": [
                "10:45 - 11:00",
                "11:00 - 12:00",
                "12:00 - 12:15",
                "12:15 - 12:30",
                "12:30 - 13:15",
            ],
        },
        {
            "name": "afternoon",
            "slots": [
                "14:00 - 14:30",
                "14:30 - 15:30",
                "15:30 - 15:40",
                "15:40 - 16:00",
                "16:00 - 16:30",
                "16:30 - 17:10",
                "17:10 - 17:30",
                "17:30 - 18:30",
            ],
        },
    ],

    # session durations (minutes)
    "durations": {"Lecture": 90, "Tutorial": 60, "Lab": 120},

    # a slot run matches a duration when within this many minutes of it
    "duration_tolerance": 5,

    # random (day, combination) draws per synchronized elective session
    "elective_max_attempts": 3000,

    # "year" or "year_basket"
    "elective_grouping": "year",

    # semesterHalf code -> label stamped on entries
    "half_labels": {"1": "First_Half", "2": "Second_Half"},
}


def get_active_config():
    """Return a fresh copy of the active configuration dict."""
    return deepcopy(_ACTIVE_CONFIG)
