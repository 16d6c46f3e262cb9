"""
timetable_engine/models/faculty.py
==================================
Faculty record. Availability is carried for reporting only; the scheduler
does not enforce it.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class Faculty:
    name: str
    department: str = ""
    availability: List[str] = field(default_factory=list)
