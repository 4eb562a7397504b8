"""
tests/test_build_next_class.py

Unit tests for execution/classes/build_next_class.py.
Pure in-memory tests; no database access.
"""

import sys
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path

# ---------------------------------------------------------------------------
# PYTHONPATH bootstrap — repo root must be importable from any test runner.
# ---------------------------------------------------------------------------
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from execution.classes.build_next_class import build_next_class      # noqa: E402
from execution.classes.build_next_schedule import next_schedule      # noqa: E402
from execution.classes.models import ClassCandidate, Course, Session  # noqa: E402

UTC = timezone.utc
COURSE = Course(id="PY101", capacity=8, duration=45)


def _seed(*starts: datetime, weekly: bool = False) -> ClassCandidate:
    sessions = tuple(
        Session(idx=i, start_date=s, end_date=s + timedelta(minutes=60))
        for i, s in enumerate(starts)
    )
    return ClassCandidate(
        id="SEED_01",
        course=COURSE,
        sessions=sessions,
        start_date=sessions[0].start_date if sessions else None,
        end_date=sessions[-1].end_date if sessions else None,
        number_of_registrations=4,
        days=len(sessions),
        weekly=weekly,
    )


_MON_WED_TWICE = (
    datetime(2026, 3, 2, 17, 0, tzinfo=UTC),
    datetime(2026, 3, 4, 17, 0, tzinfo=UTC),
    datetime(2026, 3, 9, 17, 0, tzinfo=UTC),
    datetime(2026, 3, 11, 17, 0, tzinfo=UTC),
)


class TestBuildNextClass(unittest.TestCase):

    def test_dates_match_generated_slots(self):
        """start/end of the new class are the first slot start and last slot end."""
        seed = _seed(*_MON_WED_TWICE)
        slots = next_schedule(seed.sessions, False, COURSE.duration, tz=UTC)

        new_class = build_next_class(seed, COURSE, tz=UTC)

        self.assertEqual(new_class.start_date, slots[0].start_date)
        self.assertEqual(new_class.end_date, slots[-1].end_date)
        self.assertEqual(new_class.start_date, datetime(2026, 3, 16, 17, 0, tzinfo=UTC))
        self.assertEqual(new_class.end_date, datetime(2026, 3, 25, 17, 45, tzinfo=UTC))

    def test_sessions_are_indexed_by_position(self):
        seed = _seed(*_MON_WED_TWICE)

        new_class = build_next_class(seed, COURSE, tz=UTC)

        self.assertEqual(len(new_class.sessions), len(seed.sessions))
        self.assertEqual([s.idx for s in new_class.sessions], [0, 1, 2, 3])
        for session in new_class.sessions:
            self.assertEqual(session.end_date - session.start_date, timedelta(minutes=45))

    def test_details_record_seed_and_course(self):
        new_class = build_next_class(_seed(*_MON_WED_TWICE), COURSE, tz=UTC)

        self.assertEqual(new_class.course_id, "PY101")
        self.assertEqual(new_class.details, {"seedClassId": "SEED_01", "autoGenerated": True})

    def test_weekly_seed_uses_weekly_cadence(self):
        seed = _seed(
            datetime(2026, 3, 2, 17, 0, tzinfo=UTC),
            datetime(2026, 3, 9, 17, 0, tzinfo=UTC),
            weekly=True,
        )

        new_class = build_next_class(seed, COURSE, tz=UTC)

        self.assertEqual(
            [s.start_date for s in new_class.sessions],
            [
                datetime(2026, 3, 16, 17, 0, tzinfo=UTC),
                datetime(2026, 3, 23, 17, 0, tzinfo=UTC),
            ],
        )

    def test_seed_is_not_modified(self):
        seed = _seed(*_MON_WED_TWICE)
        sessions_before = seed.sessions

        build_next_class(seed, COURSE, tz=UTC)

        self.assertEqual(seed.sessions, sessions_before)
        self.assertEqual(seed.start_date, _MON_WED_TWICE[0])

    def test_seed_without_sessions_raises(self):
        with self.assertRaises(ValueError):
            build_next_class(_seed(), COURSE, tz=UTC)


if __name__ == "__main__":
    unittest.main()
