"""
ui/app.py

Upcoming Classes Viewer.

Lists the classes currently eligible for booking and previews the follow-on
schedule that would be generated for any class. Read-only: nothing is saved
from this page (see the Dev Portal for seeding and generation).

Run from the repository root:
    streamlit run ui/app.py
"""

import logging
import sqlite3
import sys
from datetime import datetime, timezone
from pathlib import Path

import streamlit as st

# ---------------------------------------------------------------------------
# Ensure repo root is on sys.path so execution.* imports work regardless of
# where Streamlit is launched from.
# ---------------------------------------------------------------------------
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from execution.classes.build_next_class import build_next_class               # noqa: E402
from execution.classes.class_policy import get_class_timezone                 # noqa: E402
from execution.classes.fetch_candidate_classes import ClassQuery, fetch_class  # noqa: E402
from execution.classes.query_upcoming_classes import query_upcoming_classes   # noqa: E402
from execution.db.sqlite import get_db_path                                   # noqa: E402
from ui.theme import apply_portal_theme                                       # noqa: E402

DB_PATH = get_db_path()
EM_DASH = "—"

# ---------------------------------------------------------------------------
# Page config — must be the first Streamlit call in the file.
# ---------------------------------------------------------------------------
st.set_page_config(page_title="Upcoming Classes", layout="wide")
apply_portal_theme("Upcoming Classes", "Listing eligibility & next-class preview")

st.title("Upcoming Classes")
st.caption(
    "Classes starting in the next 8 weeks that pass the listing rules. "
    "Filter by course to enable the capacity waterfall."
)

tz = get_class_timezone()

# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------
col_course, col_subject, col_camps = st.columns([2, 2, 1])
with col_course:
    course_id = st.text_input("Course ID", placeholder="e.g. PY101")
with col_subject:
    subject_id = st.text_input(
        "Subject ID",
        placeholder="e.g. MATH",
        help="Ignored when a course ID is given.",
    )
with col_camps:
    camps = st.checkbox("Camps only", value=False)


def _fmt(dt: datetime | None) -> str:
    """Format a datetime in the class timezone. None → em dash."""
    if dt is None:
        return EM_DASH
    return dt.astimezone(tz).strftime("%a %Y-%m-%d %H:%M")


# ---------------------------------------------------------------------------
# Listing — auto-loads on every page render (read-only, fast).
# ---------------------------------------------------------------------------
classes = []
load_error = False
now_utc = datetime.now(timezone.utc)  # captured once per render; passed to execution layer

try:
    classes = query_upcoming_classes(
        ClassQuery(
            course_id=course_id.strip() or None,
            subject_id=subject_id.strip() or None,
            camps=camps,
        ),
        now_utc,
        db_path=DB_PATH,
    )
except sqlite3.OperationalError:
    st.error("Database unavailable. Check that tmp/app.db exists.")
    load_error = True
except Exception:
    logging.exception("Unexpected error loading upcoming classes")
    st.error("An unexpected error occurred loading classes. See console for details.")
    load_error = True

if not load_error:
    m1, m2, m3 = st.columns(3)
    m1.metric("Listed Classes", len(classes))
    m2.metric("Full", sum(1 for k in classes if k.is_full))
    m3.metric("Trials", sum(1 for k in classes if len(k.sessions) == 1))

    if not classes:
        st.info("No upcoming classes match these filters.")
    else:
        st.dataframe(
            [
                {
                    "Class": k.id,
                    "Course": k.course.id,
                    "Starts": _fmt(k.start_date),
                    "Ends": _fmt(k.end_date),
                    "Sessions": len(k.sessions),
                    "Registered": f"{k.number_of_registrations}/{k.course.capacity}",
                    "Weekly": "Yes" if k.is_weekly_cadence() else "No",
                }
                for k in classes
            ],
            use_container_width=True,
            hide_index=True,
        )

# ---------------------------------------------------------------------------
# Next-class preview
# ---------------------------------------------------------------------------
st.divider()
st.header("Next Class Preview")
st.caption("Projects the schedule of the follow-on class for any class, including finished ones.")

seed_id = st.text_input("Seed Class ID", placeholder="e.g. K-2026-03")

if st.button("Preview", type="primary"):
    if not seed_id or not seed_id.strip():
        st.error("Seed class ID is required.")
    else:
        try:
            seed = fetch_class(seed_id.strip(), db_path=DB_PATH)
            if seed is None:
                st.warning("Class not found.")
            elif not seed.sessions:
                st.warning("Class has no sessions; nothing to project.")
            else:
                new_class = build_next_class(seed, seed.course, tz=tz)
                st.write(
                    f"**{len(new_class.sessions)}** session(s), "
                    f"{_fmt(new_class.start_date)} {EM_DASH} {_fmt(new_class.end_date)}"
                )
                st.table(
                    [
                        {
                            "#": s.idx,
                            "Starts": _fmt(s.start_date),
                            "Ends": _fmt(s.end_date),
                        }
                        for s in new_class.sessions
                    ]
                )
        except sqlite3.OperationalError:
            st.error("Database unavailable. Check that tmp/app.db exists.")
        except Exception:
            logging.exception("Unexpected error in Next Class Preview")
            st.error("An unexpected error occurred. See console for details.")
