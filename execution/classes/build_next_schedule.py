"""
execution/classes/build_next_schedule.py

Projects the session times of the follow-on class for a finished class.

The recurrence pattern is inferred from the ISO weekdays of the finished
class's sessions and matched against CADENCE_RULES, evaluated top to bottom;
the first matching rule produces the schedule. When nothing matches, sessions
are placed every other day.

Rule order is significant. TUE_THU_SUN shares its (TUE, THU) opening with
TUE_THU_SAT, which is checked first, so TUE_THU_SUN only ever fires for the
(THU, SUN) and (SUN, TUE) openings.

No database access. Day and week steps are wall-clock arithmetic in the class
timezone, so the time of day survives DST changes (a time skipped by a
spring-forward change moves forward and later steps keep the new time);
session ends are an absolute number of minutes after the start.
"""

import logging
from datetime import datetime, timedelta, timezone, tzinfo
from enum import IntEnum
from typing import Callable, NamedTuple, Sequence

from execution.classes.class_policy import get_class_timezone
from execution.classes.models import GeneratedSlot, Session

logger = logging.getLogger(__name__)


class Weekday(IntEnum):
    """ISO 8601 weekday numbers, as returned by datetime.isoweekday()."""

    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7


Weekdays = Sequence[Weekday | None]
Projector = Callable[[list[datetime], list[Weekday]], list[datetime]]


class CadenceRule(NamedTuple):
    name: str
    matches: Callable[[Weekdays], bool]
    project: Projector


def _weekday_at(weekdays: Sequence[Weekday], i: int) -> Weekday | None:
    """Weekday of session i, or None when the class has fewer sessions."""
    return weekdays[i] if i < len(weekdays) else None


def _opening(weekdays: Sequence[Weekday]) -> tuple[Weekday | None, Weekday | None]:
    return _weekday_at(weekdays, 0), _weekday_at(weekdays, 1)


# ---------------------------------------------------------------------------
# Projections
# ---------------------------------------------------------------------------
def _step(current: datetime, delta: timedelta) -> datetime:
    """Add a wall-clock delta, moving times that fall in a DST gap forward."""
    return (current + delta).astimezone(timezone.utc).astimezone(current.tzinfo)


def _every_week(starts: list[datetime], weekdays: list[Weekday]) -> list[datetime]:
    current = starts[-1]
    projected = []
    for _ in starts:
        current = _step(current, timedelta(weeks=1))
        projected.append(current)
    return projected


def _two_weeks_later(starts: list[datetime], weekdays: list[Weekday]) -> list[datetime]:
    return [_step(start, timedelta(weeks=2)) for start in starts]


def _alternate_days(long_gap_after: Weekday) -> Projector:
    """Walk forward from the last start, 2 days per session, 3 after `long_gap_after`.

    The gap for position i is chosen from the weekday of the finished class's
    session i, which is the weekday the new session i is expected to fall on.
    """

    def project(starts: list[datetime], weekdays: list[Weekday]) -> list[datetime]:
        current = starts[-1]
        projected = []
        for weekday in weekdays:
            current = _step(current, timedelta(days=3 if weekday == long_gap_after else 2))
            projected.append(current)
        return projected

    return project


def _every_other_day(starts: list[datetime], weekdays: list[Weekday]) -> list[datetime]:
    current = starts[-1]
    projected = []
    for _ in starts:
        current = _step(current, timedelta(days=2))
        projected.append(current)
    return projected


def _opens_with(*pairs: tuple[Weekday, Weekday]) -> Callable[[Weekdays], bool]:
    def matches(weekdays: Weekdays) -> bool:
        return _opening(weekdays) in pairs

    return matches


def _twice_a_week_for_two_weeks(weekdays: Weekdays) -> bool:
    return (
        _weekday_at(weekdays, 0) == _weekday_at(weekdays, 2)
        and _weekday_at(weekdays, 1) == _weekday_at(weekdays, 3)
    )


# Evaluated in order after the weekly check; first match wins.
CADENCE_RULES: tuple[CadenceRule, ...] = (
    CadenceRule("TWICE_WEEKLY_REPEAT", _twice_a_week_for_two_weeks, _two_weeks_later),
    CadenceRule(
        "MON_WED_FRI",
        _opens_with(
            (Weekday.MONDAY, Weekday.WEDNESDAY),
            (Weekday.WEDNESDAY, Weekday.FRIDAY),
            (Weekday.FRIDAY, Weekday.MONDAY),
        ),
        _alternate_days(Weekday.FRIDAY),
    ),
    CadenceRule(
        "TUE_THU_SAT",
        _opens_with(
            (Weekday.TUESDAY, Weekday.THURSDAY),
            (Weekday.THURSDAY, Weekday.SATURDAY),
            (Weekday.SATURDAY, Weekday.TUESDAY),
        ),
        _alternate_days(Weekday.SATURDAY),
    ),
    CadenceRule(
        "TUE_THU_SUN",
        _opens_with(
            (Weekday.TUESDAY, Weekday.THURSDAY),
            (Weekday.THURSDAY, Weekday.SUNDAY),
            (Weekday.SUNDAY, Weekday.TUESDAY),
        ),
        _alternate_days(Weekday.THURSDAY),
    ),
)

WEEKLY_RULE = CadenceRule("WEEKLY", lambda weekdays: True, _every_week)
FALLBACK_RULE = CadenceRule("EVERY_OTHER_DAY", lambda weekdays: True, _every_other_day)


def match_cadence(weekdays: Sequence[Weekday], is_weekly_cadence: bool) -> CadenceRule:
    """Return the rule that schedules a class with these session weekdays."""
    if is_weekly_cadence:
        return WEEKLY_RULE
    for rule in CADENCE_RULES:
        if rule.matches(weekdays):
            return rule
    return FALLBACK_RULE


def next_schedule(
    existing_sessions: Sequence[Session],
    is_weekly_cadence: bool,
    duration_minutes: int,
    tz: tzinfo | None = None,
) -> list[GeneratedSlot]:
    """Project one new slot per existing session.

    Args:
        existing_sessions: Sessions of the finished class, ordered by idx.
        is_weekly_cadence: True when the class meets once a week; overrides
                           weekday pattern matching.
        duration_minutes:  Length of each new session.
        tz:                Timezone used to read weekdays and step dates.
                           Defaults to get_class_timezone().

    Returns:
        A list the same length as existing_sessions; empty when there are
        no sessions. Slot datetimes are expressed in `tz`.
    """
    if not existing_sessions:
        return []

    if tz is None:
        tz = get_class_timezone()

    ordered = sorted(existing_sessions, key=lambda s: s.idx)
    starts = [session.start_date.astimezone(tz) for session in ordered]
    weekdays = [Weekday(start.isoweekday()) for start in starts]

    rule = match_cadence(weekdays, is_weekly_cadence)
    if rule is FALLBACK_RULE:
        logger.debug(
            "next_schedule: no cadence rule for weekdays %s; using every other day.",
            [int(w) for w in weekdays],
        )
    projected = rule.project(starts, weekdays)

    length = timedelta(minutes=duration_minutes)
    return [
        GeneratedSlot(
            start_date=start,
            end_date=(start.astimezone(timezone.utc) + length).astimezone(tz),
        )
        for start in projected
    ]
