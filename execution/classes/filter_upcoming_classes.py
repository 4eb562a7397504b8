"""
execution/classes/filter_upcoming_classes.py

Decides which upcoming classes are eligible for listing and booking.
Read-only: operates on candidates already loaded by the store and never
touches the database.

Rules are applied in order:
    1. Bad metadata   — classes with no sessions are dropped.
    2. Cutoff         — unregistered classes starting too soon are dropped
                        (TRIAL_CUTOFF for one-session classes, PAID_CUTOFF
                        otherwise).
    3. Waterfall      — on single-course listings with more than
                        WATERFALL_MIN_CLASSES entries, full classes before the
                        first class with open seats are hidden.

`now` MUST be provided by the caller; this function never calls datetime.now().
"""

import logging
from datetime import datetime, timezone
from typing import Iterable

from execution.classes.class_policy import (
    PAID_CUTOFF,
    TRIAL_CUTOFF,
    WATERFALL_MIN_CLASSES,
)
from execution.classes.models import ClassCandidate

logger = logging.getLogger(__name__)


def _passes_cutoff(
    klass: ClassCandidate,
    trial_cutoff: datetime,
    paid_cutoff: datetime,
) -> bool:
    if klass.number_of_registrations > 0:
        return True
    if len(klass.sessions) == 1:
        return klass.start_date >= trial_cutoff
    return klass.start_date >= paid_cutoff


def _apply_capacity_waterfall(classes: list[ClassCandidate]) -> list[ClassCandidate]:
    """Hide full classes that come before the first class with open seats.

    Single left-to-right pass; `classes` must be ordered by start_date.
    Once an open class has been seen, every later class is kept whether it
    is full or not.
    """
    has_open = False
    kept: list[ClassCandidate] = []
    for klass in classes:
        if klass.is_full:
            if has_open:
                kept.append(klass)
            continue
        has_open = True
        kept.append(klass)
    return kept


def filter_upcoming(
    candidates: Iterable[ClassCandidate],
    now: datetime | None,
    scoped_to_single_course: bool = False,
) -> list[ClassCandidate]:
    """Return the candidates that should be shown, preserving input order.

    Args:
        candidates:              Classes ordered by start_date ascending, as
                                 returned by fetch_candidates().
        now:                     Reference datetime for the cutoff rules.
                                 Must be provided explicitly; a naive value is
                                 taken to be UTC, as the store does.
        scoped_to_single_course: True when the listing was requested for one
                                 course; enables the capacity waterfall.

    Returns:
        A new list; the input is not modified.

    Raises:
        ValueError: if now is None.
    """
    if now is None:
        raise ValueError(
            "now must be provided explicitly; "
            "do not call datetime.now() inside execution functions."
        )
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    trial_cutoff = now + TRIAL_CUTOFF
    paid_cutoff = now + PAID_CUTOFF

    visible: list[ClassCandidate] = []
    for klass in candidates:
        if not klass.sessions:
            logger.debug("filter_upcoming: class %s has no sessions; skipping.", klass.id)
            continue
        if _passes_cutoff(klass, trial_cutoff, paid_cutoff):
            visible.append(klass)

    if scoped_to_single_course and len(visible) > WATERFALL_MIN_CLASSES:
        visible = _apply_capacity_waterfall(visible)

    return visible
