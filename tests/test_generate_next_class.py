"""
tests/test_generate_next_class.py

Unit tests for execution/classes/generate_next_class.py and
execution/classes/save_next_class.py.

Covers:
    T1 — Finished Mon/Wed class -> new class stored two weeks later
    T2 — details_json records the seed class and the auto-generated flag
    T3 — Weekly flag carried from seed to new class
    T4 — Same new class id twice -> second call ok=False, nothing overwritten
    T5 — Unknown seed -> ok=False
    T6 — Seed without sessions -> ok=False, nothing written
    T7 — Blank ids -> ok=False

Uses an isolated database (tmp/test_generate_next_class.db) and never
touches the application database (tmp/app.db).
"""

import json
import os
import sys
import unittest
from datetime import datetime, timezone
from pathlib import Path

# ---------------------------------------------------------------------------
# PYTHONPATH bootstrap — repo root must be importable from any test runner.
# ---------------------------------------------------------------------------
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from execution.admin.seed_class import seed_class                          # noqa: E402
from execution.classes.fetch_candidate_classes import fetch_class          # noqa: E402
from execution.classes.generate_next_class import generate_next_class      # noqa: E402
from execution.classes.save_next_class import save_next_class              # noqa: E402
from execution.classes.build_next_class import build_next_class            # noqa: E402
from execution.db.sqlite import connect                                    # noqa: E402

TEST_DB_PATH = str(REPO_ROOT / "tmp" / "test_generate_next_class.db")

UTC = timezone.utc
_MON_WED_TWICE = [
    datetime(2026, 2, 2, 18, 0, tzinfo=UTC),
    datetime(2026, 2, 4, 18, 0, tzinfo=UTC),
    datetime(2026, 2, 9, 18, 0, tzinfo=UTC),
    datetime(2026, 2, 11, 18, 0, tzinfo=UTC),
]


def _class_row(class_id: str) -> dict | None:
    conn = connect(TEST_DB_PATH)
    try:
        row = conn.execute("SELECT * FROM classes WHERE id = ?", (class_id,)).fetchone()
        return dict(row) if row else None
    finally:
        conn.close()


def _class_count() -> int:
    conn = connect(TEST_DB_PATH)
    try:
        return conn.execute("SELECT COUNT(*) FROM classes").fetchone()[0]
    finally:
        conn.close()


class TestGenerateNextClass(unittest.TestCase):

    def setUp(self):
        (REPO_ROOT / "tmp").mkdir(parents=True, exist_ok=True)
        if os.path.exists(TEST_DB_PATH):
            os.remove(TEST_DB_PATH)
        seed_class(
            class_id="SEED",
            course_id="PY101",
            session_starts=_MON_WED_TWICE,
            duration=90,
            registrations=3,
            db_path=TEST_DB_PATH,
        )

    def tearDown(self):
        if os.path.exists(TEST_DB_PATH):
            os.remove(TEST_DB_PATH)

    # ------------------------------------------------------------------
    # T1
    # ------------------------------------------------------------------
    def test_new_class_is_stored_two_weeks_later(self):
        result = generate_next_class("SEED", "NEXT", tz=UTC, db_path=TEST_DB_PATH)

        self.assertTrue(result["ok"], result["message"])
        self.assertEqual(result["class_id"], "NEXT")

        new_class = fetch_class("NEXT", db_path=TEST_DB_PATH)
        self.assertEqual(
            [s.start_date for s in new_class.sessions],
            [
                datetime(2026, 2, 16, 18, 0, tzinfo=UTC),
                datetime(2026, 2, 18, 18, 0, tzinfo=UTC),
                datetime(2026, 2, 23, 18, 0, tzinfo=UTC),
                datetime(2026, 2, 25, 18, 0, tzinfo=UTC),
            ],
        )
        self.assertEqual(new_class.start_date, datetime(2026, 2, 16, 18, 0, tzinfo=UTC))
        self.assertEqual(new_class.end_date, datetime(2026, 2, 25, 19, 30, tzinfo=UTC))
        self.assertEqual(new_class.course.id, "PY101")
        self.assertEqual(new_class.number_of_registrations, 0)
        self.assertEqual(new_class.days, 4)
        self.assertTrue(new_class.active)

    # ------------------------------------------------------------------
    # T2
    # ------------------------------------------------------------------
    def test_details_record_seed(self):
        generate_next_class("SEED", "NEXT", tz=UTC, db_path=TEST_DB_PATH)

        row = _class_row("NEXT")

        self.assertEqual(
            json.loads(row["details_json"]),
            {"seedClassId": "SEED", "autoGenerated": True},
        )

    # ------------------------------------------------------------------
    # T3
    # ------------------------------------------------------------------
    def test_weekly_flag_is_carried_over(self):
        seed_class(
            class_id="WEEKLY_SEED",
            course_id="PY101",
            session_starts=_MON_WED_TWICE[:2],
            weekly=True,
            db_path=TEST_DB_PATH,
        )

        generate_next_class("WEEKLY_SEED", "WEEKLY_NEXT", tz=UTC, db_path=TEST_DB_PATH)
        new_class = fetch_class("WEEKLY_NEXT", db_path=TEST_DB_PATH)

        self.assertTrue(new_class.is_weekly_cadence())
        self.assertEqual(
            [s.start_date for s in new_class.sessions],
            [
                datetime(2026, 2, 11, 18, 0, tzinfo=UTC),
                datetime(2026, 2, 18, 18, 0, tzinfo=UTC),
            ],
        )

    # ------------------------------------------------------------------
    # T4
    # ------------------------------------------------------------------
    def test_existing_class_id_is_not_overwritten(self):
        first = generate_next_class("SEED", "NEXT", tz=UTC, db_path=TEST_DB_PATH)
        seed = fetch_class("SEED", db_path=TEST_DB_PATH)
        second = save_next_class(
            build_next_class(seed, seed.course, tz=UTC),
            "NEXT",
            db_path=TEST_DB_PATH,
        )

        self.assertTrue(first["ok"])
        self.assertFalse(second["ok"])
        self.assertIn("already exists", second["message"])
        self.assertEqual(_class_count(), 2)

    # ------------------------------------------------------------------
    # T5
    # ------------------------------------------------------------------
    def test_unknown_seed(self):
        result = generate_next_class("MISSING", "NEXT", tz=UTC, db_path=TEST_DB_PATH)

        self.assertFalse(result["ok"])
        self.assertIn("not found", result["message"])

    # ------------------------------------------------------------------
    # T6
    # ------------------------------------------------------------------
    def test_seed_without_sessions(self):
        seed_class(
            class_id="EMPTY",
            course_id="PY101",
            session_starts=[],
            db_path=TEST_DB_PATH,
        )

        result = generate_next_class("EMPTY", "NEXT", tz=UTC, db_path=TEST_DB_PATH)

        self.assertFalse(result["ok"])
        self.assertIsNone(_class_row("NEXT"))

    # ------------------------------------------------------------------
    # T7
    # ------------------------------------------------------------------
    def test_blank_ids(self):
        self.assertFalse(generate_next_class("  ", "NEXT", db_path=TEST_DB_PATH)["ok"])
        self.assertFalse(
            generate_next_class("SEED", "   ", tz=UTC, db_path=TEST_DB_PATH)["ok"]
        )
        self.assertIsNone(_class_row("NEXT"))


if __name__ == "__main__":
    unittest.main()
