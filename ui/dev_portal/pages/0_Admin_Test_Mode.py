"""
ui/dev_portal/pages/0_Admin_Test_Mode.py

Admin / Test Mode harness — DEV ONLY

Seeds classes into the local SQLite file and generates follow-on classes.
No business logic lives here; all writes are delegated to execution/*.

Run from the repository root:
    streamlit run ui/dev_portal/dev_app.py
"""

import logging
import sqlite3
import sys
from datetime import datetime, timedelta
from pathlib import Path

import streamlit as st

# ---------------------------------------------------------------------------
# sys.path bootstrap — this file lives three levels below repo root
# (ui/dev_portal/pages/).
# ---------------------------------------------------------------------------
REPO_ROOT = Path(__file__).resolve().parents[3]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from execution.admin.seed_class import seed_class                          # noqa: E402
from execution.classes.class_policy import get_class_timezone              # noqa: E402
from execution.classes.generate_next_class import generate_next_class      # noqa: E402
from execution.db.sqlite import get_db_path                                # noqa: E402
from ui.theme import apply_portal_theme                                    # noqa: E402

DB_PATH = get_db_path()

# ---------------------------------------------------------------------------
# Page config — must be the first Streamlit call in the file.
# ---------------------------------------------------------------------------
st.set_page_config(page_title="Admin / Test Mode", layout="centered")
apply_portal_theme("Dev Portal", "Admin & diagnostics (internal)")

st.title("Admin / Test Mode (Dev Only)")
st.warning("⚠ DEV ONLY — This tool modifies local SQLite data.")

tz = get_class_timezone()

# ===========================================================================
# SECTION 1 — Seed Class
# ===========================================================================
st.divider()
st.header("Seed Class")
st.caption(
    "Creates or updates the course, then inserts a class whose sessions start "
    "on the given local dates at the given time."
)

s1_class_id  = st.text_input("Class ID (required)", key="s1_class_id", placeholder="e.g. K-001")
s1_course_id = st.text_input("Course ID (required)", key="s1_course_id", placeholder="e.g. PY101")

c1, c2, c3 = st.columns(3)
s1_capacity = c1.number_input("Capacity", min_value=1, value=10, step=1, key="s1_capacity")
s1_duration = c2.number_input("Minutes / session", min_value=5, value=60, step=5, key="s1_duration")
s1_regs     = c3.number_input("Registrations", min_value=0, value=0, step=1, key="s1_regs")

s1_first = st.date_input(
    "First session date",
    # Convenience default for display only.
    value=datetime.now(tz).date() + timedelta(days=7),
    key="s1_first",
)
s1_time = st.time_input("Session start time", value=datetime(2026, 1, 1, 17, 0).time(), key="s1_time")
s1_offsets = st.text_input(
    "Session day offsets from first date (comma-separated)",
    value="0, 2, 4",
    key="s1_offsets",
    help="0, 2, 4 starting on a Monday gives Mon/Wed/Fri.",
)
s1_weekly = st.checkbox("Weekly cadence", key="s1_weekly")

if st.button("Seed Class", key="btn_seed_class"):
    try:
        if not s1_course_id.strip():
            raise ValueError("Course ID is required.")
        offsets = [int(part) for part in s1_offsets.split(",") if part.strip()]
        first_start = datetime.combine(s1_first, s1_time, tzinfo=tz)
        result = seed_class(
            class_id=s1_class_id,
            course_id=s1_course_id.strip(),
            session_starts=[first_start + timedelta(days=d) for d in offsets],
            capacity=int(s1_capacity),
            duration=int(s1_duration),
            registrations=int(s1_regs),
            weekly=s1_weekly,
            db_path=DB_PATH,
        )
        if result["ok"]:
            st.success(result["message"])
        else:
            st.error(result["message"])
    except ValueError as exc:
        st.error(str(exc))
    except sqlite3.OperationalError:
        st.error("Database unavailable. Check that tmp/app.db is accessible.")
    except Exception:
        logging.exception("Unexpected error in Seed Class")
        st.error("An unexpected error occurred. See console for details.")

# ===========================================================================
# SECTION 2 — Generate Next Class
# ===========================================================================
st.divider()
st.header("Generate Next Class")
st.caption(
    "Builds the follow-on class for a finished class and saves it. "
    "The new class has the same number of sessions as the seed."
)

s2_seed_id = st.text_input("Seed Class ID (required)", key="s2_seed_id")
s2_new_id  = st.text_input("New Class ID (required)", key="s2_new_id")

if st.button("Generate", key="btn_generate_next"):
    try:
        result = generate_next_class(s2_seed_id, s2_new_id, tz=tz, db_path=DB_PATH)
        if result["ok"]:
            st.success(result["message"])
        else:
            st.error(result["message"])
    except sqlite3.OperationalError:
        st.error("Database unavailable. Check that tmp/app.db is accessible.")
    except Exception:
        logging.exception("Unexpected error in Generate Next Class")
        st.error("An unexpected error occurred. See console for details.")
