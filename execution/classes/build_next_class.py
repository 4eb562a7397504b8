"""
execution/classes/build_next_class.py

Assembles the auto-generated follow-on class for a class that has finished.
The new class is returned in memory only; saving it is the caller's job
(see execution/classes/save_next_class.py).
"""

from datetime import tzinfo

from execution.classes.build_next_schedule import next_schedule
from execution.classes.models import ClassCandidate, Course, NewClass, Session


def build_next_class(
    seed: ClassCandidate,
    course: Course,
    tz: tzinfo | None = None,
) -> NewClass:
    """Return an unsaved class that continues `seed` with the same session count.

    Args:
        seed:   The finished class used as the template.
        course: Course of the new class; its duration sets session length.
        tz:     Class timezone passed through to next_schedule().

    Returns:
        NewClass whose start/end match the first and last generated slot and
        whose details record the seed class id.

    Raises:
        ValueError: if the seed class has no sessions.
    """
    if not seed.sessions:
        raise ValueError(f"Class {seed.id} has no sessions to build a schedule from.")

    slots = next_schedule(seed.sessions, seed.is_weekly_cadence(), course.duration, tz)

    return NewClass(
        course_id=course.id,
        start_date=slots[0].start_date,
        end_date=slots[-1].end_date,
        details={"seedClassId": seed.id, "autoGenerated": True},
        sessions=tuple(
            Session(idx=idx, start_date=slot.start_date, end_date=slot.end_date)
            for idx, slot in enumerate(slots)
        ),
    )
