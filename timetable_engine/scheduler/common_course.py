"""
timetable_engine/scheduler/common_course.py
===========================================
Handles courses common to all sections of a branch-year ("ALL" rows).

Once any row of a (branch, year) names a real section, the generic "ALL"
rows of that (branch, year) are dropped: the same course must then be given
per section, otherwise the generic and the section copies would double-book
the same students.
"""

from collections import OrderedDict


def filter_valid_courses(courses):
    groups = OrderedDict()  # (branch, year) -> {"has_specific": bool, "courses": [...]}
    for course in courses:
        group = groups.setdefault((course.branch, course.year), {"has_specific": False, "courses": []})
        if (course.section or "ALL") != "ALL":
            group["has_specific"] = True
        group["courses"].append(course)

    valid = []
    for group in groups.values():
        if group["has_specific"]:
            valid.extend(c for c in group["courses"] if (c.section or "ALL") != "ALL")
        else:
            valid.extend(group["courses"])
    return valid
