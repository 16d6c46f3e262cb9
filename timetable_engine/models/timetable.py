"""
timetable_engine/models/timetable.py
====================================
Output records of a generation run: one TimetableEntry per occupied slot,
one SessionFailure per session that could not be placed, and the
GenerationResult that bundles them with placement counters.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class Session:
    kind: str  # Lecture / Tutorial / Lab
    number: int = 1

    @property
    def label(self):
        if self.kind == "Lecture":
            return f"Lecture {self.number}"
        return self.kind

    def course_label(self, name, part, parts):
        text = f"{name} - {self.label}"
        if parts > 1:
            text += f" ({part}/{parts})"
        return text


WEEKLY_SESSIONS = (Session("Lecture", 1), Session("Lecture", 2), Session("Tutorial"))
LAB_SESSION = Session("Lab")


@dataclass(frozen=True)
class TimetableEntry:
    day: str
    time_slot: str
    course: str
    faculty: str
    room: str
    type: str
    branch: str
    section: str
    year: int
    semester_half: str
    is_shared: bool = False
    shared_with: str = ""

    @property
    def cohort(self):
        return (self.branch, self.year, self.section)

    def to_record(self):
        return {
            "Branch": self.branch,
            "Year": self.year,
            "Section": self.section,
            "Semester Half": self.semester_half,
            "Day": self.day,
            "Time Slot": self.time_slot,
            "Course": self.course,
            "Faculty": self.faculty,
            "Room": self.room,
            "Type": self.type,
            "Is Shared": self.is_shared,
            "Shared With": self.shared_with,
        }


def build_entries(course, session, day, slots, room, semester_half, is_shared=False, shared_with=""):
    """One entry per slot of a placed session."""
    return [
        TimetableEntry(
            day=day,
            time_slot=slot,
            course=session.course_label(course.name, idx, len(slots)),
            faculty=course.faculty,
            room=room,
            type=session.kind,
            branch=course.branch,
            section=course.section,
            year=course.year,
            semester_half=semester_half,
            is_shared=is_shared,
            shared_with=shared_with,
        )
        for idx, slot in enumerate(slots, start=1)
    ]


@dataclass(frozen=True)
class SessionFailure:
    code: str
    name: str
    branch: str
    section: str
    year: int
    session: str  # "Lecture 1", "Tutorial", "Lab"
    semester_half: str
    reason: str = "no conflict-free day/slot/room found"


@dataclass
class GenerationResult:
    entries: List[TimetableEntry] = field(default_factory=list)
    failures: List[SessionFailure] = field(default_factory=list)
    sessions_required: int = 0
    sessions_placed: int = 0
    # half label -> (electives scheduled, electives total)
    elective_summary: Dict[str, Tuple[int, int]] = field(default_factory=dict)

    @property
    def coverage(self) -> float:
        """Percentage of required sessions that were placed."""
        if not self.sessions_required:
            return 100.0
        return round(self.sessions_placed * 100.0 / self.sessions_required, 2)

    @property
    def is_complete(self) -> bool:
        return self.sessions_placed == self.sessions_required

    def record_session(self, placed, failure=None):
        self.sessions_required += 1
        if placed:
            self.sessions_placed += 1
        elif failure is not None:
            self.failures.append(failure)

    def merge(self, other):
        self.entries.extend(other.entries)
        self.failures.extend(other.failures)
        self.sessions_required += other.sessions_required
        self.sessions_placed += other.sessions_placed
        self.elective_summary.update(other.elective_summary)
