"""
execution/classes/query_upcoming_classes.py

Upcoming-class listing: loads candidates from the store and applies the
visibility rules. The capacity waterfall is enabled when the listing is for
a single course.
"""

from datetime import datetime

from execution.classes.fetch_candidate_classes import ClassQuery, fetch_candidates
from execution.classes.filter_upcoming_classes import filter_upcoming
from execution.classes.models import ClassCandidate


def query_upcoming_classes(
    query: ClassQuery,
    now: datetime | None,
    db_path: str | None = None,
) -> list[ClassCandidate]:
    """Return the classes to show for `query`, ordered by start_date.

    Raises:
        ValueError: if now is None.
    """
    candidates = fetch_candidates(query, now, db_path=db_path)
    return filter_upcoming(
        candidates,
        now,
        scoped_to_single_course=bool(query.course_id),
    )
