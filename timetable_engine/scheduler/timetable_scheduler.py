"""
timetable_engine/scheduler/timetable_scheduler.py

Greedy weekly timetable generation.
- semester split: first half = both-halves + first-only courses,
  second half = both-halves + second-only courses, each with fresh bookings
- electives first, synchronized per year (see electives.py)
- then per branch-year-section: regular courses (2 lectures + 1 tutorial,
  combined with a mutually cross-listed partner when one exists), then labs
- rooms/faculty/student conflict checks on every slot of a session
- a course never gets two sessions on the same day
"""

import logging
import random
from collections import defaultdict

from timetable_engine.config.time_config import get_active_config
from timetable_engine.models.room import classrooms_or_all, labs_or_all
from timetable_engine.models.timetable import (
    LAB_SESSION,
    WEEKLY_SESSIONS,
    GenerationResult,
    SessionFailure,
    build_entries,
)
from timetable_engine.scheduler.common_course import filter_valid_courses
from timetable_engine.scheduler.cross_dept import find_partner
from timetable_engine.scheduler.electives import ElectiveScheduler
from timetable_engine.scheduler.state import ScheduleState
from timetable_engine.scheduler.time_grid import session_combinations

logger = logging.getLogger(__name__)


class SchedulingError(ValueError):
    """Raised when no session of some kind could ever be placed (e.g. no rooms at all)."""


def _failure(course, session, semester_half):
    return SessionFailure(
        code=course.code, name=course.name, branch=course.branch, section=course.section,
        year=course.year, session=session.label, semester_half=semester_half,
    )


# ------------------- scheduler -------------------
class TimetableScheduler:
    def __init__(self, config=None, seed=None):
        self.config = config or get_active_config()
        self.days = self.config.get("working_days", ["MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY"])
        self.half_labels = self.config.get("half_labels", {"1": "First_Half", "2": "Second_Half"})

        # slot combinations per session type, reused read-only by every pass
        self.combinations = session_combinations(self.config)

        self.rng = random.Random(seed)

    # ---------- orchestration ----------
    def generate(self, courses, faculty=None, rooms=None, seed=None):
        """
        Build both semester halves and return a GenerationResult whose
        entries are the first half followed by the second half.
        """
        if seed is not None:
            self.rng.seed(seed)

        courses = list(courses or [])
        rooms = list(rooms or [])
        if courses and not rooms:
            raise SchedulingError("no rooms available: every session needs a room")

        logger.info("=== Starting Timetable Generation ===")
        logger.info("Total Courses: %d, Faculty: %d, Rooms: %d", len(courses), len(faculty or []), len(rooms))

        first_only = [c for c in courses if c.semester_half == "1"]
        second_only = [c for c in courses if c.semester_half == "2"]
        both = [c for c in courses if c.semester_half == "0"]
        ignored = len(courses) - len(first_only) - len(second_only) - len(both)
        if ignored:
            logger.warning("Ignoring %d courses with an unknown semester half", ignored)

        logger.info("First Half Only: %d", len(first_only))
        logger.info("Second Half Only: %d", len(second_only))
        logger.info("Both Halves: %d", len(both))

        result = GenerationResult()
        for code, half_only in (("1", first_only), ("2", second_only)):
            label = self.half_labels[code]
            half_courses = both + half_only
            logger.info("Generating %s with %d courses", label, len(half_courses))
            half_result = self.generate_half(half_courses, rooms, label)
            logger.info("%s: %d entries, %d/%d sessions placed", label, len(half_result.entries),
                        half_result.sessions_placed, half_result.sessions_required)
            result.merge(half_result)

        logger.info("=== Generation Complete: %d entries, %.2f%% of sessions placed ===",
                    len(result.entries), result.coverage)
        return result

    def generate_half(self, courses, rooms, semester_half):
        state = ScheduleState(semester_half)
        result = GenerationResult()

        valid = filter_valid_courses(courses)
        electives = [c for c in valid if c.is_elective]
        regular = [c for c in valid if not c.is_elective]
        logger.info("%s - Electives: %d, Regular: %d", semester_half, len(electives), len(regular))

        logger.info("=== PHASE 1: Scheduling Electives (Synchronized) ===")
        ElectiveScheduler(self.config, rooms, self.combinations, self.rng).schedule(electives, state, result)

        logger.info("=== PHASE 2: Scheduling Regular Courses and Labs ===")
        self.schedule_regular(regular, rooms, state, result)
        return result

    # ---------- regular + lab pass ----------
    def schedule_regular(self, courses, rooms, state, result):
        groups = defaultdict(list)
        for course in courses:
            if not course.branch or not course.year:
                logger.debug("Skipping %s without branch/year", course.code)
                continue
            groups[course.cohort].append(course)

        logger.info("Processing %d branch-year-section combinations", len(groups))

        for cohort in sorted(groups, key=lambda k: tuple(str(part) for part in k)):
            branch, year, section = cohort
            cohort_courses = groups[cohort]
            logger.info("  %s Year %s Section %s: %d courses", branch, year, section, len(cohort_courses))

            # non-lab courses take the slots first, labs fill in afterwards
            lab_courses = [c for c in cohort_courses if c.is_lab]
            lecture_courses = [c for c in cohort_courses if not c.is_lab]

            for course in lecture_courses:
                if state.is_assigned(course):
                    continue
                partner = find_partner(course, courses, state.assigned)
                to_schedule = [course, partner] if partner else [course]
                if partner:
                    logger.info("    Cross-scheduling: %s (%s) with %s", course.code, course.branch, partner.branch)
                    state.mark_assigned(partner)
                state.mark_assigned(course)

                for session in WEEKLY_SESSIONS:
                    placed = self._schedule_session(to_schedule, session, rooms, state, result)
                    label = f"{course.code} ({course.branch}+{partner.branch})" if partner else course.code
                    if placed:
                        logger.debug("    OK %s %s", label, session.label)
                    else:
                        logger.warning("    Failed: %s %s", label, session.label)
                    for c in to_schedule:
                        result.record_session(placed, None if placed else _failure(c, session, state.semester_half))

            for course in lab_courses:
                if state.is_assigned(course):
                    continue
                state.mark_assigned(course)
                placed = self._schedule_lab(course, rooms, state, result)
                if placed:
                    logger.debug("    OK %s Lab", course.code)
                else:
                    logger.warning("    Failed: %s Lab", course.code)
                result.record_session(placed, None if placed else _failure(course, LAB_SESSION, state.semester_half))

    def _schedule_session(self, to_schedule, session, rooms, state, result):
        """
        Place one session for a course (or a course and its partner) in a
        single room. Days already used by any course in the set are skipped;
        the first free (day, combination) wins.
        """
        used = set()
        for course in to_schedule:
            used.update(state.days_used(course))
        available_days = [d for d in self.days if d not in used]

        classrooms = classrooms_or_all(rooms)
        shared = len(to_schedule) > 1
        shared_with = ", ".join(f"{c.branch}-{c.section}" for c in to_schedule) if shared else ""

        for day in available_days:
            for combo in self.combinations.get(session.kind, []):
                slots = combo.slots
                room = self.rng.choice(classrooms)
                if not state.room_free(room.number, day, slots):
                    continue
                if not all(state.course_can_take(c, day, slots) for c in to_schedule):
                    continue

                for course in to_schedule:
                    state.commit(course, room.number, day, slots)
                    result.entries.extend(build_entries(
                        course, session, day, slots, room.number, state.semester_half,
                        is_shared=shared, shared_with=shared_with,
                    ))
                return True
        return False

    def _schedule_lab(self, course, rooms, state, result):
        lab_rooms = labs_or_all(rooms)
        for day in self.days:
            for combo in self.combinations.get(LAB_SESSION.kind, []):
                slots = combo.slots
                room = self.rng.choice(lab_rooms)
                if not state.room_free(room.number, day, slots):
                    continue
                if not state.course_can_take(course, day, slots):
                    continue
                state.commit(course, room.number, day, slots)
                result.entries.extend(build_entries(
                    course, LAB_SESSION, day, slots, room.number, state.semester_half,
                ))
                return True
        return False
