import random

import pytest

from timetable_engine.config.time_config import get_active_config
from timetable_engine.models.room import Room
from timetable_engine.models.timetable import GenerationResult
from timetable_engine.scheduler.electives import ElectiveScheduler
from timetable_engine.scheduler.state import ScheduleState
from timetable_engine.scheduler.time_grid import session_combinations

SESSIONS = ("Lecture 1", "Lecture 2", "Tutorial")


@pytest.fixture
def config():
    return get_active_config()


@pytest.fixture
def rooms():
    return [Room("C101", 60, "Classroom"), Room("C102", 60, "Classroom"), Room("L1", 30, "Lab")]


def _scheduler(config, rooms, seed=1, combinations=None):
    return ElectiveScheduler(config, rooms, combinations or session_combinations(config), random.Random(seed))


def _times(entries, name, session):
    prefix = f"{name} - {session}"
    return {(e.day, e.time_slot) for e in entries if e.course.startswith(prefix)}


def _rooms(entries, name, session):
    prefix = f"{name} - {session}"
    return {e.room for e in entries if e.course.startswith(prefix)}


def test_year_electives_share_day_and_slots(config, rooms, make_course, assert_no_double_booking):
    ml = make_course("CS401", "Dr A", branch="CSE", year=3, name="ML", is_elective=True)
    vlsi = make_course("EC401", "Dr B", branch="ECE", year=3, name="VLSI", is_elective=True)
    state, result = ScheduleState("First_Half"), GenerationResult()

    assert _scheduler(config, rooms).schedule([ml, vlsi], state, result) == (2, 2)

    for session in SESSIONS:
        times = _times(result.entries, "ML", session)
        assert times
        assert times == _times(result.entries, "VLSI", session)
        assert _rooms(result.entries, "ML", session).isdisjoint(_rooms(result.entries, "VLSI", session))

    assert all(e.is_shared and e.shared_with == "Year 3 Cross-Branch Elective" for e in result.entries)
    assert {e.room for e in result.entries} <= {"C101", "C102"}
    assert state.is_assigned(ml) and state.is_assigned(vlsi)
    assert result.sessions_placed == result.sessions_required == 6
    assert result.elective_summary == {"First_Half": (2, 2)}
    assert_no_double_booking(result.entries)


def test_elective_sessions_spread_over_days(config, rooms, make_course):
    ml = make_course("CS401", "Dr A", year=3, name="ML", is_elective=True)
    state, result = ScheduleState("First_Half"), GenerationResult()
    _scheduler(config, rooms).schedule([ml], state, result)
    assert len({e.day for e in result.entries}) == 3


def test_group_by_year_and_basket(config, rooms, make_course):
    config["elective_grouping"] = "year_basket"
    b1 = make_course("CS401", "Dr A", year=3, basket=1, name="ML", is_elective=True)
    b2 = make_course("CS402", "Dr B", year=3, basket=2, name="NLP", is_elective=True)
    scheduler = _scheduler(config, rooms)

    assert list(scheduler.group_electives([b2, b1])) == [(3, 1), (3, 2)]

    state, result = ScheduleState("First_Half"), GenerationResult()
    scheduler.schedule([b1, b2], state, result)
    annotations = {e.shared_with for e in result.entries}
    assert annotations == {"Year 3 Basket 1 Cross-Branch Elective", "Year 3 Basket 2 Cross-Branch Elective"}


def test_unknown_grouping_rejected(config, rooms):
    config["elective_grouping"] = "branch"
    with pytest.raises(ValueError):
        _scheduler(config, rooms)


def test_fallback_places_each_elective_individually(config, rooms, make_course, assert_no_double_booking):
    config["elective_max_attempts"] = 0
    ml = make_course("CS401", "Dr A", branch="CSE", year=3, name="ML", is_elective=True)
    vlsi = make_course("EC401", "Dr B", branch="ECE", year=3, name="VLSI", is_elective=True)
    state, result = ScheduleState("First_Half"), GenerationResult()

    assert _scheduler(config, rooms).schedule([ml, vlsi], state, result) == (2, 2)
    assert result.entries
    assert not any(e.is_shared for e in result.entries)
    assert result.is_complete
    assert_no_double_booking(result.entries)


def test_same_faculty_cannot_be_synchronized(config, rooms, make_course, assert_no_double_booking):
    config["elective_max_attempts"] = 50
    ml = make_course("CS401", "Dr A", branch="CSE", year=3, name="ML", is_elective=True)
    dl = make_course("EC401", "Dr A", branch="ECE", year=3, name="DL", is_elective=True)
    state, result = ScheduleState("First_Half"), GenerationResult()

    _scheduler(config, rooms).schedule([ml, dl], state, result)

    assert result.is_complete
    assert _times(result.entries, "ML", "Lecture 1").isdisjoint(_times(result.entries, "DL", "Lecture 1"))
    assert_no_double_booking(result.entries)


def test_busy_cohort_is_respected(config, rooms, make_course):
    ml = make_course("CS401", "Dr A", branch="CSE", year=3, name="ML", is_elective=True)
    state, result = ScheduleState("First_Half"), GenerationResult()
    # the cohort is busy all Monday to Thursday
    for day in config["working_days"][:4]:
        for slot in config["time_slots"]:
            state.cohort_busy[ml.cohort][day].add(slot)

    _scheduler(config, rooms).schedule([ml], state, result)

    assert {e.day for e in result.entries} == {"FRIDAY"}
    # one day left, so only one of the three sessions fits
    assert result.sessions_placed == 1
    assert [f.session for f in result.failures] == ["Lecture 2", "Tutorial"]
    assert result.elective_summary["First_Half"] == (0, 1)


def test_no_combinations_is_a_soft_failure(config, rooms, make_course):
    ml = make_course("CS401", "Dr A", year=3, name="ML", is_elective=True)
    empty = {"Lecture": [], "Tutorial": [], "Lab": []}
    state, result = ScheduleState("First_Half"), GenerationResult()

    assert _scheduler(config, rooms, combinations=empty).schedule([ml], state, result) == (0, 1)
    assert result.entries == []
    assert len(result.failures) == 3


def test_no_electives(config, rooms):
    state, result = ScheduleState("Second_Half"), GenerationResult()
    assert _scheduler(config, rooms).schedule([], state, result) == (0, 0)
    assert result.elective_summary == {"Second_Half": (0, 0)}


def test_electives_without_faculty(config, rooms, make_course, assert_no_double_booking):
    ml = make_course("CS401", "", branch="CSE", year=3, name="ML", is_elective=True)
    dl = make_course("EC401", "", branch="ECE", year=3, name="DL", is_elective=True)
    state, result = ScheduleState("First_Half"), GenerationResult()

    assert _scheduler(config, rooms).schedule([ml, dl], state, result) == (2, 2)

    assert all(e.is_shared for e in result.entries)
    assert _times(result.entries, "ML", "Lecture 1") == _times(result.entries, "DL", "Lecture 1")
    assert not state.faculty_busy
    assert_no_double_booking(result.entries)
