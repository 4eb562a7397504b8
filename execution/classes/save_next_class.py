"""
execution/classes/save_next_class.py

Persists a class produced by build_next_class(). The new class is stored
active, with the seed's cadence flag and one session row per generated slot.
"""

import logging

from execution.classes.insert_class import insert_class
from execution.classes.models import NewClass

logger = logging.getLogger(__name__)


def save_next_class(
    new_class: NewClass,
    class_id: str,
    *,
    weekly: bool = False,
    db_path: str | None = None,
) -> dict:
    """Store `new_class` under `class_id`.

    Args:
        new_class: Output of build_next_class().
        class_id:  ID to store the class under. Whitespace is trimmed.
        weekly:    Cadence flag to carry over from the seed class.
        db_path:   Path to the SQLite file; defaults to tmp/app.db.

    Returns:
        dict with keys:
            ok       (bool) True when the class was written.
            message  (str)  Human-readable outcome.
            class_id (str)  The trimmed class id. Present only when ok=True.
    """
    class_id = class_id.strip()
    if not class_id:
        return {"ok": False, "message": "Class ID is required."}

    inserted = insert_class(
        class_id,
        new_class.course_id,
        new_class.sessions,
        weekly=weekly,
        details=new_class.details,
        db_path=db_path,
    )
    if not inserted:
        return {
            "ok": False,
            "message": f"Class {class_id} already exists. Nothing written.",
        }

    logger.info(
        "save_next_class: stored %s (%d sessions) seeded from %s.",
        class_id,
        len(new_class.sessions),
        new_class.details.get("seedClassId"),
    )
    return {
        "ok": True,
        "message": f"Class {class_id} created with {len(new_class.sessions)} session(s).",
        "class_id": class_id,
    }
