"""
timetable_engine/scheduler/time_grid.py

Time helpers and the slot-combination finder.
A slot combination is a run of consecutive slots inside one continuous block
whose summed length is within the tolerance of a session duration
(90-minute lecture, 60-minute tutorial, 120-minute lab).
"""

from dataclasses import dataclass
from typing import Tuple

from timetable_engine.config.time_config import get_active_config


# ------------------- time helpers -------------------
def time_to_min(t):
    h, m = t.strip().split(":")
    return int(h) * 60 + int(m)


def slot_to_range(slot):
    # "HH:MM - HH:MM"
    start, end = slot.split("-")
    return time_to_min(start), time_to_min(end)


def duration_minutes(slot):
    start, end = slot_to_range(slot)
    return end - start


@dataclass(frozen=True)
class SlotCombination:
    slots: Tuple[str, ...]
    total_minutes: int
    block: str


def continuous_blocks(config=None):
    config = config or get_active_config()
    return [{"name": b["name"], "slots": list(b["slots"])} for b in config["continuous_blocks"]]


def combinations_for(target_minutes, blocks=None, tolerance=5):
    """
    For every block and every start index, extend the run one slot at a time.
    The run is accepted as soon as its length is within `tolerance` of the
    target and abandoned once it overshoots target + tolerance.
    """
    if blocks is None:
        blocks = continuous_blocks()

    found = []
    for block in blocks:
        slots = block["slots"]
        for start_idx in range(len(slots)):
            total = 0
            selected = []
            for slot in slots[start_idx:]:
                selected.append(slot)
                total += duration_minutes(slot)
                if abs(total - target_minutes) <= tolerance:
                    found.append(SlotCombination(tuple(selected), total, block["name"]))
                    break
                if total > target_minutes + tolerance:
                    break
    return found


def session_combinations(config):
    """Combinations for every configured session type, computed once per run."""
    blocks = continuous_blocks(config)
    tolerance = config.get("duration_tolerance", 5)
    return {
        kind: combinations_for(minutes, blocks, tolerance)
        for kind, minutes in config["durations"].items()
    }
