"""
execution/classes/register_student.py

Records that a student registered for a class.
Idempotent on (class_id, student_id). No business logic lives here.
"""

from datetime import datetime, timezone

from execution.db.sqlite import connect, init_db


def _utc_now() -> str:
    """Return the current UTC time as an ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat()


def register_student(
    class_id: str,
    student_id: str,
    created_at: str | None = None,
    db_path: str | None = None,
) -> None:
    """Insert a registration row, skipping silently if it already exists.

    The class must exist; IntegrityError is not caught here.

    Args:
        class_id:   ID of the class.
        student_id: ID of the registering student.
        created_at: ISO 8601 timestamp; defaults to current UTC if None.
        db_path:    Path to the SQLite file; defaults to tmp/app.db.
    """
    conn = connect(db_path)
    try:
        init_db(conn)

        existing = conn.execute(
            "SELECT id FROM registrations WHERE class_id = ? AND student_id = ?",
            (class_id, student_id),
        ).fetchone()

        if existing is not None:
            return

        conn.execute(
            """
            INSERT INTO registrations (class_id, student_id, created_at)
            VALUES (?, ?, ?)
            """,
            (class_id, student_id, created_at or _utc_now()),
        )
        conn.commit()
    finally:
        conn.close()
