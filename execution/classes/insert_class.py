"""
execution/classes/insert_class.py

Writes a class row and its sessions in one transaction.
Skips silently when the class id already exists. No business logic lives here.
"""

import json
from datetime import datetime, timezone
from typing import Sequence

from execution.classes.models import Session
from execution.db.sqlite import connect, init_db, to_db_timestamp


def _utc_now() -> str:
    """Return the current UTC time as an ISO 8601 string."""
    return datetime.now(timezone.utc).isoformat()


def insert_class(
    class_id: str,
    course_id: str,
    sessions: Sequence[Session],
    *,
    active: bool = True,
    weekly: bool = False,
    days: int | None = None,
    details: dict | None = None,
    db_path: str | None = None,
) -> bool:
    """Insert a class with its sessions.

    start_date and end_date are taken from the first and last session by idx.
    The foreign key on course_id requires the course to exist;
    IntegrityError is not caught here so the caller is made aware of it.

    Args:
        class_id:  Stable unique identifier for the class (TEXT PRIMARY KEY).
        course_id: ID of the course this class runs.
        sessions:  Sessions to store; may be empty.
        active:    Whether the class is listed at all.
        weekly:    Whether the class meets once a week.
        days:      Session-count signal used by the camp filter;
                   defaults to len(sessions).
        details:   Optional metadata, stored as JSON.
        db_path:   Path to the SQLite file; defaults to tmp/app.db.

    Returns:
        True when the class was inserted, False when it already existed.
    """
    ordered = sorted(sessions, key=lambda s: s.idx)
    start_date = to_db_timestamp(ordered[0].start_date) if ordered else None
    end_date = to_db_timestamp(ordered[-1].end_date) if ordered else None

    conn = connect(db_path)
    try:
        init_db(conn)

        existing = conn.execute(
            "SELECT id FROM classes WHERE id = ?", (class_id,)
        ).fetchone()

        if existing is not None:
            return False  # idempotent — already stored

        conn.execute(
            """
            INSERT INTO classes
                (id, course_id, active, start_date, end_date, days, weekly,
                 details_json, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                class_id,
                course_id,
                int(active),
                start_date,
                end_date,
                len(ordered) if days is None else days,
                int(weekly),
                json.dumps(details) if details is not None else None,
                _utc_now(),
            ),
        )
        conn.executemany(
            """
            INSERT INTO class_sessions (class_id, idx, start_date, end_date)
            VALUES (?, ?, ?, ?)
            """,
            [
                (
                    class_id,
                    session.idx,
                    to_db_timestamp(session.start_date),
                    to_db_timestamp(session.end_date),
                )
                for session in ordered
            ],
        )
        conn.commit()
    finally:
        conn.close()

    return True
