"""
timetable_engine/scheduler/state.py

Conflict bookkeeping for one semester-half run.
Nothing is ever unbooked: once a (resource, day, slot, half) is taken it stays
taken until the state is thrown away.
"""

from collections import defaultdict


class ScheduleState:
    def __init__(self, semester_half):
        self.semester_half = semester_half
        self.faculty_busy = set()                              # (faculty, day, slot, half)
        self.room_busy = set()                                 # (room, day, slot, half)
        self.cohort_busy = defaultdict(lambda: defaultdict(set))  # cohort -> day -> {slot}
        self.course_days = defaultdict(list)                   # tracking key -> [day]
        self.assigned = set()                                  # id(course)

    # ---------- availability ----------
    def faculty_free(self, faculty, day, slots):
        if not faculty:
            return True
        return not any((faculty, day, s, self.semester_half) in self.faculty_busy for s in slots)

    def room_free(self, room, day, slots):
        return not any((room, day, s, self.semester_half) in self.room_busy for s in slots)

    def cohort_free(self, cohort, day, slots):
        taken = self.cohort_busy[cohort][day]
        return not any(s in taken for s in slots)

    def days_used(self, course):
        return self.course_days[course.tracking_key(self.semester_half)]

    def course_can_take(self, course, day, slots):
        """Cohort and faculty of `course` are free on every slot of `day`."""
        return self.cohort_free(course.cohort, day, slots) and self.faculty_free(course.faculty, day, slots)

    # ---------- booking ----------
    def book(self, course, room, day, slot):
        if course.faculty:
            self.faculty_busy.add((course.faculty, day, slot, self.semester_half))
        self.room_busy.add((room, day, slot, self.semester_half))
        self.cohort_busy[course.cohort][day].add(slot)

    def commit(self, course, room, day, slots):
        for slot in slots:
            self.book(course, room, day, slot)
        self.record_day(course, day)

    def record_day(self, course, day):
        days = self.days_used(course)
        if day not in days:
            days.append(day)

    def is_assigned(self, course):
        return id(course) in self.assigned

    def mark_assigned(self, course):
        self.assigned.add(id(course))
