"""
execution/classes/generate_next_class.py

Follow-on class workflow for a finished class: load the seed from the store,
build the next class in memory, then save it. The scheduling decision itself
lives in build_next_class.py; this module only wires the store around it.
"""

from datetime import tzinfo

from execution.classes.build_next_class import build_next_class
from execution.classes.fetch_candidate_classes import fetch_class
from execution.classes.save_next_class import save_next_class


def generate_next_class(
    seed_class_id: str,
    new_class_id: str,
    *,
    tz: tzinfo | None = None,
    db_path: str | None = None,
) -> dict:
    """Create the follow-on class for `seed_class_id` under `new_class_id`.

    Returns:
        dict with keys:
            ok       (bool) True when the new class was written.
            message  (str)  Human-readable outcome.
            class_id (str)  Present only when ok=True.
    """
    seed_class_id = seed_class_id.strip()
    if not seed_class_id:
        return {"ok": False, "message": "Seed class ID is required."}

    seed = fetch_class(seed_class_id, db_path=db_path)
    if seed is None:
        return {"ok": False, "message": f"Class {seed_class_id} not found."}

    if not seed.sessions:
        return {
            "ok": False,
            "message": f"Class {seed_class_id} has no sessions. Nothing generated.",
        }

    new_class = build_next_class(seed, seed.course, tz=tz)
    return save_next_class(
        new_class,
        new_class_id,
        weekly=seed.is_weekly_cadence(),
        db_path=db_path,
    )
