"""
execution/classes/models.py

In-memory records for classes, their sessions and courses.

These are read-only snapshots materialised by the store layer
(execution/classes/fetch_candidate_classes.py). The visibility filter and the
schedule generator only read them; nothing here touches the database.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Session:
    """One meeting of a class. ``idx`` is the 0-based position within the class."""

    idx: int
    start_date: datetime
    end_date: datetime


@dataclass(frozen=True)
class Course:
    """Catalogue entry a class is a run of.

    ``duration`` is the length of every session in minutes.
    """

    id: str
    capacity: int
    duration: int
    subject_id: str | None = None
    level: int = 0


@dataclass(frozen=True)
class ClassCandidate:
    """A scheduled class as seen by the listing and scheduling logic.

    ``start_date``/``end_date`` mirror the first and last session; the store
    keeps them in sync and nothing here re-validates that.
    ``days`` is the session-count signal used by the camp filter.
    """

    id: str
    course: Course
    sessions: tuple[Session, ...] = ()
    start_date: datetime | None = None
    end_date: datetime | None = None
    number_of_registrations: int = 0
    active: bool = True
    days: int = 0
    weekly: bool = False

    def is_weekly_cadence(self) -> bool:
        """Return True when the class meets once a week."""
        return self.weekly

    @property
    def is_full(self) -> bool:
        return self.number_of_registrations >= self.course.capacity


@dataclass(frozen=True)
class GeneratedSlot:
    """A projected (start, end) pair for a session that does not exist yet."""

    start_date: datetime
    end_date: datetime


@dataclass(frozen=True)
class NewClass:
    """An auto-generated follow-on class, built in memory and not yet saved."""

    course_id: str
    start_date: datetime
    end_date: datetime
    sessions: tuple[Session, ...]
    details: dict = field(default_factory=dict)
