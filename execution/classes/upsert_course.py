"""
execution/classes/upsert_course.py

Inserts a new course or updates an existing one without overwriting
fields that were not supplied. No business logic lives here.
"""

from datetime import datetime, timezone

from execution.db.sqlite import connect, init_db


def _utc_now() -> str:
    """Return the current UTC time as an ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat()


def upsert_course(
    course_id: str,
    capacity: int | None = None,
    duration: int | None = None,
    subject_id: str | None = None,
    level: int | None = None,
    db_path: str | None = None,
) -> None:
    """Insert a new course row or update an existing one.

    - On insert: capacity and duration are required; level defaults to 0.
    - On update: only non-None arguments overwrite existing column values;
      created_at is never touched; updated_at is always refreshed.

    Args:
        course_id:  Stable unique identifier for the course (TEXT PRIMARY KEY).
        capacity:   Seats per class; must be > 0.
        duration:   Minutes per session.
        subject_id: Optional subject the course belongs to.
        level:      Course level; negative levels are hidden from subject listings.
        db_path:    Path to the SQLite file; defaults to the repo tmp/app.db.

    Raises:
        ValueError: on insert when capacity or duration is missing, or when
                    capacity is not positive.
    """
    if capacity is not None and capacity <= 0:
        raise ValueError("capacity must be greater than 0.")

    conn = connect(db_path)
    try:
        init_db(conn)
        now = _utc_now()

        existing = conn.execute(
            "SELECT id FROM courses WHERE id = ?", (course_id,)
        ).fetchone()

        if existing is None:
            if capacity is None or duration is None:
                raise ValueError(
                    "capacity and duration are required when creating a course."
                )
            conn.execute(
                """
                INSERT INTO courses
                    (id, subject_id, level, capacity, duration, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (course_id, subject_id, level or 0, capacity, duration, now, now),
            )
        else:
            updates: list[tuple[str, object]] = [("updated_at", now)]
            if capacity is not None:
                updates.append(("capacity", capacity))
            if duration is not None:
                updates.append(("duration", duration))
            if subject_id is not None:
                updates.append(("subject_id", subject_id))
            if level is not None:
                updates.append(("level", level))

            set_clause = ", ".join(f"{col} = ?" for col, _ in updates)
            values = [val for _, val in updates]
            values.append(course_id)

            conn.execute(
                f"UPDATE courses SET {set_clause} WHERE id = ?",  # noqa: S608
                values,
            )

        conn.commit()
    finally:
        conn.close()
