"""
execution/classes/class_policy.py

Business-policy constants for upcoming-class visibility and next-class
scheduling. No database access. Pure constants and helpers only.

The class timezone is a deployment setting read from the CLASS_TIMEZONE
environment variable; everything else is fixed policy.
"""

import os
from datetime import timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo

# ---------------------------------------------------------------------------
# Listing cutoffs — minimum lead time before start for unregistered classes
# ---------------------------------------------------------------------------
TRIAL_CUTOFF: timedelta = timedelta(hours=3)   # single-session (trial) classes
PAID_CUTOFF: timedelta = timedelta(days=2)     # multi-session classes

# Capacity waterfall only runs on single-course listings longer than this.
WATERFALL_MIN_CLASSES: int = 5

# ---------------------------------------------------------------------------
# Candidate query window, relative to the injected `now`
# ---------------------------------------------------------------------------
QUERY_WINDOW_START: timedelta = timedelta(minutes=30)
QUERY_WINDOW_END: timedelta = timedelta(weeks=8)

# Camp classes have between CAMP_MIN_DAYS (inclusive) and
# CAMP_CLASS_MAX_DAYS (exclusive) sessions.
CAMP_MIN_DAYS: int = 4
CAMP_CLASS_MAX_DAYS: int = 6

DEFAULT_CLASS_TIMEZONE: str = "UTC"


def get_class_timezone() -> tzinfo:
    """Return the timezone in which class weekdays and wall-clock times are read.

    Reads CLASS_TIMEZONE from the environment (an IANA name such as
    "America/Los_Angeles"); falls back to UTC when unset.

    Raises:
        zoneinfo.ZoneInfoNotFoundError: if CLASS_TIMEZONE names an unknown zone.
    """
    name = os.environ.get("CLASS_TIMEZONE", "").strip() or DEFAULT_CLASS_TIMEZONE
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)
