"""
timetable_engine/models/room.py
===============================
Room model + helper methods for type filtering.
"""

from dataclasses import dataclass


@dataclass
class Room:
    number: str
    capacity: int = 0
    type: str = "Classroom"  # "Classroom", "Software Lab", etc.

    @property
    def is_classroom(self) -> bool:
        return "class" in (self.type or "").lower()

    @property
    def is_lab(self) -> bool:
        return "lab" in (self.type or "").lower()


def classrooms_or_all(rooms):
    """Classroom-typed rooms, or every room when none is typed as a classroom."""
    classrooms = [r for r in rooms if r.is_classroom]
    return classrooms or list(rooms)


def labs_or_all(rooms):
    """Lab-typed rooms, or every room when no lab exists."""
    labs = [r for r in rooms if r.is_lab]
    return labs or list(rooms)
