"""
execution/db/sqlite.py

SQLite helper module for deterministic local persistence.
Provides only infrastructure: path resolution, connection setup, schema
initialization, and the timestamp format used for every stored datetime.
No business logic lives here.
"""

import os
import sqlite3
from datetime import datetime, timezone
from pathlib import Path


def get_db_path() -> str:
    """Return the absolute path to the local SQLite database file.

    The file lives under the repo's /tmp folder (which is safe to delete
    and is never committed). Creates the directory if it does not exist.
    The CLASS_DB_PATH environment variable overrides the default location.

    Returns:
        str: Absolute path to tmp/app.db relative to the repo root.
    """
    override = os.environ.get("CLASS_DB_PATH", "").strip()
    if override:
        return override
    repo_root = Path(__file__).resolve().parents[2]  # execution/db/sqlite.py -> repo root
    tmp_dir = repo_root / "tmp"
    tmp_dir.mkdir(parents=True, exist_ok=True)
    return str(tmp_dir / "app.db")


def connect(db_path: str | None = None) -> sqlite3.Connection:
    """Open and return a sqlite3 connection with foreign key enforcement enabled.

    Args:
        db_path: Path to the SQLite file. Defaults to the result of get_db_path().

    Returns:
        sqlite3.Connection: An open connection with PRAGMA foreign_keys = ON.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.execute("PRAGMA foreign_keys = ON")
    conn.row_factory = sqlite3.Row  # rows accessible by column name
    return conn


def to_db_timestamp(dt: datetime) -> str:
    """Serialise an aware datetime as a second-precision ISO 8601 UTC string.

    Every stored timestamp uses this format so that string comparison in SQL
    matches chronological order. Naive datetimes are taken to be UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="seconds")


def from_db_timestamp(value: str) -> datetime:
    """Parse a stored timestamp back into an aware UTC datetime."""
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def init_db(conn: sqlite3.Connection) -> None:
    """Create all application tables if they do not already exist.

    Safe to call multiple times (uses CREATE TABLE IF NOT EXISTS).
    Does not drop or migrate existing tables.

    Schema:
        courses         — course catalogue entry (capacity, minutes per session)
        classes         — a scheduled run of a course
        class_sessions  — the individual meetings of a class, ordered by idx
        registrations   — one row per student enrolled in a class

    Args:
        conn: An open sqlite3.Connection (foreign keys should already be ON).
    """
    conn.executescript("""
        CREATE TABLE IF NOT EXISTS courses (
            id          TEXT PRIMARY KEY,
            subject_id  TEXT,
            level       INTEGER NOT NULL DEFAULT 0,
            capacity    INTEGER NOT NULL,
            duration    INTEGER NOT NULL,
            created_at  TEXT,
            updated_at  TEXT
        );

        CREATE TABLE IF NOT EXISTS classes (
            id            TEXT PRIMARY KEY,
            course_id     TEXT NOT NULL,
            active        INTEGER NOT NULL DEFAULT 1,
            start_date    TEXT,
            end_date      TEXT,
            days          INTEGER NOT NULL DEFAULT 0,
            weekly        INTEGER NOT NULL DEFAULT 0,
            details_json  TEXT,
            created_at    TEXT,
            FOREIGN KEY (course_id) REFERENCES courses (id)
        );

        CREATE TABLE IF NOT EXISTS class_sessions (
            class_id    TEXT NOT NULL,
            idx         INTEGER NOT NULL,
            start_date  TEXT NOT NULL,
            end_date    TEXT NOT NULL,
            PRIMARY KEY (class_id, idx),
            FOREIGN KEY (class_id) REFERENCES classes (id) ON DELETE CASCADE
        );

        CREATE TABLE IF NOT EXISTS registrations (
            id          INTEGER PRIMARY KEY AUTOINCREMENT,
            class_id    TEXT NOT NULL,
            student_id  TEXT NOT NULL,
            created_at  TEXT,
            FOREIGN KEY (class_id) REFERENCES classes (id) ON DELETE CASCADE,
            UNIQUE (class_id, student_id)
        );

        CREATE INDEX IF NOT EXISTS idx_classes_start_date
            ON classes (start_date);

        CREATE INDEX IF NOT EXISTS idx_registrations_class_id
            ON registrations (class_id);
    """)
    conn.commit()
