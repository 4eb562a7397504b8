"""
execution/admin/seed_class.py

Dev/test harness — Seed Class.

Creates (or updates) a course and inserts a class with the given session
start times and a number of placeholder registrations, so the upcoming-class
listing and next-class generation can be exercised against local data.

THIS MODULE IS DEV-ONLY.  It must never be imported or called in production.

No business logic lives here.  No direct SQL.  All persistence is delegated
to existing execution functions:
  - execution.classes.upsert_course
  - execution.classes.insert_class
  - execution.classes.register_student
"""

from datetime import datetime, timedelta

from execution.classes.insert_class import insert_class
from execution.classes.models import Session
from execution.classes.register_student import register_student
from execution.classes.upsert_course import upsert_course


def seed_class(
    *,
    class_id: str,
    course_id: str,
    session_starts: list[datetime],
    capacity: int = 10,
    duration: int = 60,
    registrations: int = 0,
    weekly: bool = False,
    active: bool = True,
    days: int | None = None,
    subject_id: str | None = None,
    level: int | None = None,
    db_path: str | None = None,
) -> dict:
    """Upsert a course and insert one class with sessions and registrations.

    Args:
        class_id:       Stable unique identifier for the class.
                        Whitespace is trimmed before use.
        course_id:      Course to create or update.
        session_starts: Start datetime of each session, in order; each session
                        lasts `duration` minutes. An empty list seeds a class
                        with no dates, which never appears in listings.
        capacity:       Seats per class for the course.
        duration:       Minutes per session for the course.
        registrations:  Number of placeholder registrations to record.
        weekly:         Cadence flag for the class.
        active:         Whether the class is listed at all.
        days:           Camp-length signal; defaults to the session count.
        subject_id:     Optional subject for the course.
        level:          Optional course level.
        db_path:        Path to the SQLite file.  Defaults to tmp/app.db.
                        Tests must always supply an explicit isolated path.

    Returns:
        dict with keys:
            ok       (bool)  True on success.
            message  (str)   Human-readable outcome, e.g.:
                             "Class K1 created with 3 session(s)."
                             "Class K1 created with 3 session(s). 2 registration(s) recorded."
                             "Class K1 already exists. Course C1 updated."  (ok=False)
                             "Class ID is required."  (ok=False)

    Raises:
        ValueError: When registrations is negative.
    """
    class_id = class_id.strip()
    if not class_id:
        return {"ok": False, "message": "Class ID is required."}

    if registrations < 0:
        raise ValueError("registrations must not be negative.")

    upsert_course(
        course_id,
        capacity=capacity,
        duration=duration,
        subject_id=subject_id,
        level=level,
        db_path=db_path,
    )

    length = timedelta(minutes=duration)
    sessions = [
        Session(idx=idx, start_date=start, end_date=start + length)
        for idx, start in enumerate(session_starts)
    ]

    inserted = insert_class(
        class_id,
        course_id,
        sessions,
        active=active,
        weekly=weekly,
        days=days,
        db_path=db_path,
    )
    if not inserted:
        return {
            "ok": False,
            "message": f"Class {class_id} already exists. Course {course_id} updated.",
        }

    for n in range(registrations):
        register_student(class_id, f"{class_id}-student-{n + 1}", db_path=db_path)

    message = f"Class {class_id} created with {len(sessions)} session(s)."
    if registrations:
        message += f" {registrations} registration(s) recorded."

    return {"ok": True, "message": message}
