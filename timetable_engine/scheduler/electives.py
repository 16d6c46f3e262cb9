"""
timetable_engine/scheduler/electives.py
=======================================
Handles elective groups and global elective slot sync.

All electives of a group (a cohort year, or a year + basket) get each of their
weekly sessions at the same day and slots, each in its own room, so students
of every branch can pick any of them. When no common placement turns up
within the attempt cap, each elective is placed on its own instead.
"""

import logging
from collections import Counter, OrderedDict

from timetable_engine.models.room import classrooms_or_all
from timetable_engine.models.timetable import WEEKLY_SESSIONS, SessionFailure, build_entries

logger = logging.getLogger(__name__)

GROUP_BY_YEAR = "year"
GROUP_BY_YEAR_BASKET = "year_basket"


class ElectiveScheduler:
    def __init__(self, config, rooms, combinations, rng):
        self.days = config["working_days"]
        self.max_attempts = config.get("elective_max_attempts", 3000)
        self.grouping = config.get("elective_grouping", GROUP_BY_YEAR)
        if self.grouping not in (GROUP_BY_YEAR, GROUP_BY_YEAR_BASKET):
            raise ValueError(f"unknown elective grouping: {self.grouping!r}")
        self.rooms = classrooms_or_all(rooms)
        self.combinations = combinations
        self.rng = rng

    # ---------- grouping ----------
    def group_key(self, course):
        if self.grouping == GROUP_BY_YEAR_BASKET:
            return (course.year, course.basket or 0)
        return (course.year,)

    def group_electives(self, electives):
        groups = {}
        for course in electives:
            if not course.branch or not course.year:
                logger.debug("Skipping elective %s without branch/year", course.code)
                continue
            groups.setdefault(self.group_key(course), []).append(course)
        return OrderedDict(sorted(groups.items(), key=lambda kv: tuple(str(k) for k in kv[0])))

    @staticmethod
    def annotation(key):
        if len(key) == 2:
            return f"Year {key[0]} Basket {key[1]} Cross-Branch Elective"
        return f"Year {key[0]} Cross-Branch Elective"

    # ---------- main pass ----------
    def schedule(self, electives, state, result):
        """Place every elective session; returns (fully scheduled, total)."""
        if not electives:
            logger.info("No electives to schedule")
            result.elective_summary[state.semester_half] = (0, 0)
            return 0, 0

        groups = self.group_electives(electives)
        for key, group in groups.items():
            branches = sorted({str(c.branch) for c in group})
            logger.info("  %s: %d electives across branches: %s",
                        self.annotation(key), len(group), ", ".join(branches))

        placed_sessions = Counter()
        for key, group in groups.items():
            for session in WEEKLY_SESSIONS:
                combos = self.combinations.get(session.kind, [])
                if self._schedule_synchronized(group, session, combos, state, result, self.annotation(key)):
                    for course in group:
                        placed_sessions[id(course)] += 1
                        result.record_session(True)
                    continue

                logger.warning("    FAILED: %s for %s after %d attempts, falling back to individual placement",
                               session.label, self.annotation(key), self.max_attempts)
                # every elective of the group retries this session, assigned or not
                for course in group:
                    placed = self._schedule_individually(course, session, combos, state, result)
                    if placed:
                        placed_sessions[id(course)] += 1
                        logger.debug("      %s (%s) %s scheduled individually", course.code, course.branch, session.label)
                    else:
                        logger.warning("      %s (%s) %s could not be scheduled", course.code, course.branch, session.label)
                    result.record_session(placed, None if placed else SessionFailure(
                        code=course.code, name=course.name, branch=course.branch, section=course.section,
                        year=course.year, session=session.label, semester_half=state.semester_half,
                    ))

        total = sum(len(g) for g in groups.values())
        scheduled = sum(1 for g in groups.values() for c in g if placed_sessions[id(c)] == len(WEEKLY_SESSIONS))
        rate = round(scheduled * 100 / total) if total else 100
        if scheduled == total:
            logger.info("Electives scheduled: %d/%d (%d%%)", scheduled, total, rate)
        else:
            logger.warning("Electives scheduled: %d/%d (%d%%), %d incomplete",
                           scheduled, total, rate, total - scheduled)
        result.elective_summary[state.semester_half] = (scheduled, total)
        return scheduled, total

    # ---------- synchronized placement ----------
    def _assign_rooms(self, group, day, slots, state):
        """One free, distinct room per elective at (day, slots), or None if any elective cannot go."""
        rooms_used_now = set()
        faculty_used_now = set()
        local_assign = []
        for course in group:
            if day in state.days_used(course):
                return None
            if not state.course_can_take(course, day, slots):
                return None
            if course.faculty and course.faculty in faculty_used_now:
                return None
            room = next((r for r in self.rooms
                         if r.number not in rooms_used_now and state.room_free(r.number, day, slots)), None)
            if room is None:
                return None
            rooms_used_now.add(room.number)
            faculty_used_now.add(course.faculty)
            local_assign.append((course, room))
        return local_assign

    def _schedule_synchronized(self, group, session, combos, state, result, annotation):
        if not combos:
            logger.warning("    No slot combinations available for %s", session.label)
            return False

        for _ in range(self.max_attempts):
            day = self.rng.choice(self.days)
            combo = self.rng.choice(combos)
            local_assign = self._assign_rooms(group, day, combo.slots, state)
            if local_assign is None:
                continue

            for course, room in local_assign:
                state.commit(course, room.number, day, combo.slots)
                result.entries.extend(build_entries(
                    course, session, day, combo.slots, room.number, state.semester_half,
                    is_shared=True, shared_with=annotation,
                ))
                state.mark_assigned(course)

            logger.info("    %s on %s (%s): %d electives at the same time",
                        session.label, day, combo.slots[0], len(local_assign))
            for course, room in local_assign:
                logger.debug("      - %s (%s): Room %s [Faculty: %s]",
                             course.code, course.branch, room.number, course.faculty)
            return True
        return False

    # ---------- fallback ----------
    def _schedule_individually(self, course, session, combos, state, result):
        for combo in combos:
            slots = combo.slots
            for day in self.days:
                if day in state.days_used(course):
                    continue
                if not state.course_can_take(course, day, slots):
                    continue
                for room in self.rooms:
                    if not state.room_free(room.number, day, slots):
                        continue
                    state.commit(course, room.number, day, slots)
                    result.entries.extend(build_entries(
                        course, session, day, slots, room.number, state.semester_half,
                    ))
                    state.mark_assigned(course)
                    return True
        return False
