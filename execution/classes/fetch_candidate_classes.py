"""
execution/classes/fetch_candidate_classes.py

Read-only store queries: candidate classes for an upcoming-class listing,
and single-class lookup for next-class seeding. No visibility rules live
here; see filter_upcoming_classes.py.

Schema tables used:
    classes         — base table; active only, start_date inside the window
    courses         — inner-joined; optional course_id / subject_id filter
    class_sessions  — embedded per class, ordered by idx
    registrations   — counted per class

`now` MUST be provided by the caller; this function never calls datetime.now().
"""

from dataclasses import dataclass
from datetime import datetime

from execution.classes.class_policy import (
    CAMP_CLASS_MAX_DAYS,
    CAMP_MIN_DAYS,
    QUERY_WINDOW_END,
    QUERY_WINDOW_START,
)
from execution.classes.models import ClassCandidate, Course, Session
from execution.db.sqlite import connect, from_db_timestamp, init_db, to_db_timestamp

_SELECT = """
    SELECT
        c.id,
        c.active,
        c.start_date,
        c.end_date,
        c.days,
        c.weekly,
        co.id           AS course_id,
        co.subject_id,
        co.level,
        co.capacity,
        co.duration,
        (
            SELECT COUNT(*) FROM registrations r WHERE r.class_id = c.id
        )               AS number_of_registrations
    FROM classes c
    JOIN courses co ON co.id = c.course_id
"""

_SQL = _SELECT + """
    WHERE c.active = 1
      AND c.start_date >= ?
      AND c.start_date <= ?
      {filters}
    ORDER BY c.start_date ASC, c.id ASC
"""


@dataclass(frozen=True)
class ClassQuery:
    """Listing request.

    course_id takes precedence over subject_id. Subject listings only include
    courses with level >= 0. camps restricts results to camp-length classes.
    """

    course_id: str | None = None
    subject_id: str | None = None
    camps: bool = False


def _build_filters(query: ClassQuery) -> tuple[str, list]:
    clauses: list[str] = []
    params: list = []

    if query.camps:
        clauses.append("AND c.days >= ? AND c.days < ?")
        params.extend([CAMP_MIN_DAYS, CAMP_CLASS_MAX_DAYS])

    if query.course_id:
        clauses.append("AND co.id = ?")
        params.append(query.course_id)
    elif query.subject_id:
        clauses.append("AND co.subject_id = ? AND co.level >= 0")
        params.append(query.subject_id)

    return "\n      ".join(clauses), params


def _load_sessions(conn, class_ids: list[str]) -> dict[str, list[Session]]:
    sessions: dict[str, list[Session]] = {class_id: [] for class_id in class_ids}
    if not class_ids:
        return sessions

    placeholders = ", ".join("?" for _ in class_ids)
    rows = conn.execute(
        f"""
        SELECT class_id, idx, start_date, end_date
        FROM class_sessions
        WHERE class_id IN ({placeholders})
        ORDER BY class_id ASC, idx ASC
        """,
        class_ids,
    ).fetchall()

    for row in rows:
        sessions[row["class_id"]].append(
            Session(
                idx=row["idx"],
                start_date=from_db_timestamp(row["start_date"]),
                end_date=from_db_timestamp(row["end_date"]),
            )
        )
    return sessions


def _to_candidate(row, sessions: list[Session]) -> ClassCandidate:
    return ClassCandidate(
        id=row["id"],
        course=Course(
            id=row["course_id"],
            capacity=row["capacity"],
            duration=row["duration"],
            subject_id=row["subject_id"],
            level=row["level"],
        ),
        sessions=tuple(sessions),
        start_date=from_db_timestamp(row["start_date"]) if row["start_date"] else None,
        end_date=from_db_timestamp(row["end_date"]) if row["end_date"] else None,
        number_of_registrations=row["number_of_registrations"],
        active=bool(row["active"]),
        days=row["days"],
        weekly=bool(row["weekly"]),
    )


def fetch_candidates(
    query: ClassQuery,
    now: datetime | None,
    db_path: str | None = None,
) -> list[ClassCandidate]:
    """Return active classes starting between now+30min and now+8 weeks.

    Args:
        query:   Course / subject / camp filters.
        now:     Reference datetime for the start-date window. Must be
                 provided explicitly; raises ValueError when None.
        db_path: Path to the SQLite file; defaults to tmp/app.db.

    Returns:
        ClassCandidate list ordered by start_date ascending (ties by id),
        each with its sessions ordered by idx and its registration count.
        Classes without sessions are returned as-is with an empty tuple.

    Raises:
        ValueError: if now is None.
    """
    if now is None:
        raise ValueError(
            "now must be provided explicitly; "
            "do not call datetime.now() inside execution functions."
        )

    filters, filter_params = _build_filters(query)
    params = [
        to_db_timestamp(now + QUERY_WINDOW_START),
        to_db_timestamp(now + QUERY_WINDOW_END),
        *filter_params,
    ]

    conn = connect(db_path)
    try:
        init_db(conn)
        rows = conn.execute(_SQL.format(filters=filters), params).fetchall()
        sessions = _load_sessions(conn, [row["id"] for row in rows])
    finally:
        conn.close()

    return [_to_candidate(row, sessions[row["id"]]) for row in rows]


def fetch_class(class_id: str, db_path: str | None = None) -> ClassCandidate | None:
    """Return a single class by id regardless of its date or active flag.

    Used to load a finished class as the seed for build_next_class().
    Returns None when the class does not exist.
    """
    conn = connect(db_path)
    try:
        init_db(conn)
        row = conn.execute(_SELECT + "    WHERE c.id = ?", (class_id,)).fetchone()
        if row is None:
            return None
        sessions = _load_sessions(conn, [class_id])
    finally:
        conn.close()

    return _to_candidate(row, sessions[class_id])
