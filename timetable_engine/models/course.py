"""
timetable_engine/models/course.py
=================================
Dataclass model for Course representation.
"""

from dataclasses import dataclass


def parse_shared_targets(shared_with):
    """Split a 'CSE, ECE-A; cs301' style string into lower-cased tokens."""
    if not shared_with or not str(shared_with).strip():
        return frozenset()
    cleaned = str(shared_with).replace(";", ",")
    return frozenset(t.strip().lower() for t in cleaned.split(",") if t.strip())


@dataclass
class Course:
    code: str
    name: str
    faculty: str
    branch: str
    year: int
    type: str = "Lecture"  # Lecture / Lab
    section: str = "ALL"
    credits: int = 3
    duration: int = 1
    semester_half: str = "0"  # "0" both, "1" first, "2" second
    basket: int = 0  # For electives
    is_elective: bool = False
    shared_with: str = ""

    def __post_init__(self):
        self.section = self.section or "ALL"
        self.semester_half = str(self.semester_half)

    @property
    def shared_targets(self):
        return parse_shared_targets(self.shared_with)

    @property
    def cohort(self):
        return (self.branch, self.year, self.section)

    @property
    def is_lab(self):
        return "lab" in (self.type or "").lower()

    def tracking_key(self, semester_half):
        """Key for the days-already-used map of this course."""
        return (self.branch, self.year, self.section, self.code, semester_half)

    def identity_tokens(self):
        """Tokens another course may use in its shared-with list to name this one."""
        branch = (self.branch or "").lower()
        section = (self.section or "ALL").lower()
        return {branch, section, f"{branch}-{section}", (self.code or "").lower()}
