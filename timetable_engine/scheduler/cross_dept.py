"""
timetable_engine/scheduler/cross_dept.py
========================================
Cross-listed course pairing between branches / sections.

A course names its counterpart cohorts in `shared_with` (branch, section,
"branch-section" or course code). Two records are paired only when each one
names the other, so a single combined session can serve both cohorts.
"""


def _names(course, targets):
    return bool(targets & course.identity_tokens())


def find_partner(course, pool, assigned_ids):
    """First course in `pool` that mutually cross-lists with `course`, else None."""
    if not course.shared_targets:
        return None

    code = (course.code or "").lower()
    year = str(course.year)
    identity = ((course.branch or "").lower(), (course.section or "ALL").lower())

    for candidate in pool:
        if candidate is course or id(candidate) in assigned_ids:
            continue
        if (candidate.code or "").lower() != code:
            continue
        if str(candidate.year) != year:
            continue
        if ((candidate.branch or "").lower(), (candidate.section or "ALL").lower()) == identity:
            continue
        # mutual: we name them and they name us
        if not _names(candidate, course.shared_targets):
            continue
        if not _names(course, candidate.shared_targets):
            continue
        return candidate
    return None
