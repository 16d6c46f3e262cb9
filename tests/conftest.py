from collections import defaultdict

import pytest

from timetable_engine.models.course import Course
from timetable_engine.models.room import Room


def _course(code, faculty, branch="CSE", year=1, **kwargs):
    kwargs.setdefault("name", f"{code} course")
    return Course(code=code, faculty=faculty, branch=branch, year=year, **kwargs)


@pytest.fixture
def make_course():
    return _course


@pytest.fixture
def classrooms():
    return [Room("C101", 60, "Classroom"), Room("C102", 60, "Classroom")]


def _is_combined(group):
    """Entries of one combined (cross-listed) session: same room, type and annotation."""
    return all(e.is_shared for e in group) and len({(e.room, e.type, e.shared_with) for e in group}) == 1


def _is_synchronized_elective(group):
    return all(e.is_shared and e.shared_with.endswith("Cross-Branch Elective") for e in group)


def _collisions(entries, key):
    groups = defaultdict(set)
    for e in entries:
        groups[key(e)].add(e)
    return [g for g in groups.values() if len(g) > 1]


@pytest.fixture
def assert_no_double_booking():
    def check(entries):
        # an entry without faculty books nobody
        staffed = [e for e in entries if e.faculty]
        for group in _collisions(staffed, lambda e: (e.faculty, e.day, e.time_slot, e.semester_half)):
            assert _is_combined(group), f"faculty double-booked: {group}"
        for group in _collisions(entries, lambda e: (e.room, e.day, e.time_slot, e.semester_half)):
            assert _is_combined(group), f"room double-booked: {group}"
        for group in _collisions(entries, lambda e: (e.branch, e.year, e.section, e.day, e.time_slot, e.semester_half)):
            assert _is_synchronized_elective(group), f"cohort double-booked: {group}"
    return check
