# file: db_utils.py
import sqlite3
import os


def get_db_connection() -> sqlite3.Connection:
    """
    Returns a NEW SQLite connection configured for the event log.
    The path is read from DATABASE_FILE on every call so tests can redirect it.
    """
    db_file = os.getenv("DATABASE_FILE", "extractions.sqlite")

    # timeout=30 sets busy_timeout; check_same_thread=False because FastAPI
    # may run sync dependencies on a worker thread.
    conn = sqlite3.connect(db_file, timeout=30, check_same_thread=False)
    conn.execute("PRAGMA journal_mode=WAL;")
    conn.row_factory = sqlite3.Row
    return conn


def fetch_recent_events(limit: int = 20, event_type: str = None) -> list:
    """Reads the latest events, newest first."""
    conn = get_db_connection()
    try:
        if event_type:
            rows = conn.execute(
                "SELECT * FROM event_log WHERE event_type = ? ORDER BY id DESC LIMIT ?",
                (event_type, limit)
            ).fetchall()
        else:
            rows = conn.execute("SELECT * FROM event_log ORDER BY id DESC LIMIT ?", (limit,)).fetchall()
        return [dict(row) for row in rows]
    finally:
        conn.close()
