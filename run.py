"""
run.py — Entry point for the weekly timetable engine
====================================================
Loads courses / faculty / rooms CSVs, generates both semester halves and
writes the combined timetable, the faculty view and one file per cohort.
"""

import argparse
import logging
import os
import sys

from timetable_engine.config.time_config import get_active_config
from timetable_engine.data.exporter import export_csv, export_faculty_csv, export_per_cohort
from timetable_engine.data.loader import load_courses, load_faculty, load_rooms
from timetable_engine.scheduler.timetable_scheduler import SchedulingError, TimetableScheduler


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Weekly timetable generator")
    parser.add_argument("--courses", required=True, help="courses CSV")
    parser.add_argument("--faculty", required=True, help="faculty CSV")
    parser.add_argument("--rooms", required=True, help="rooms CSV")
    parser.add_argument("--output-dir", default="timetable_outputs")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--elective-grouping", choices=["year", "year_basket"], default="year")
    parser.add_argument("--log-level", default="INFO")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    config = get_active_config()
    config["elective_grouping"] = args.elective_grouping
    scheduler = TimetableScheduler(config, seed=args.seed)

    courses = load_courses(args.courses)
    faculty = load_faculty(args.faculty)
    rooms = load_rooms(args.rooms)

    print(f"\n🚀 Generating timetable for {len(courses)} courses, {len(faculty)} faculty, {len(rooms)} rooms\n")
    try:
        result = scheduler.generate(courses, faculty, rooms)
    except SchedulingError as e:
        print(f"⚠️ Cannot generate timetable: {e}")
        return 1

    combined = export_csv(result.entries, os.path.join(args.output_dir, "timetable.csv"), config)
    by_faculty = export_faculty_csv(result.entries, os.path.join(args.output_dir, "faculty-timetable.csv"), config)
    cohort_files = export_per_cohort(result.entries, os.path.join(args.output_dir, "cohorts"), config)

    print(f"Saved {combined}")
    print(f"Saved {by_faculty}")
    print(f"Saved {len(cohort_files)} cohort timetables")
    for half, (scheduled, total) in result.elective_summary.items():
        print(f"{half}: electives {scheduled}/{total}")
    print(f"\n📊 Sessions placed: {result.sessions_placed}/{result.sessions_required} ({result.coverage}%)")
    if result.is_complete:
        print("✅ All sessions scheduled!")
    else:
        print(f"⚠️ {len(result.failures)} sessions could not be scheduled")
        for f in result.failures:
            print(f"   - {f.code} ({f.branch}-{f.section}, Year {f.year}) {f.session} [{f.semester_half}]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
