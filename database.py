import json
import logging
import os
import sqlite3
from contextlib import contextmanager
from datetime import datetime

from services.entries import as_labels, as_level, as_number

logger = logging.getLogger(__name__)


# Use .env / environment variables if present.
def _resolve_db_path() -> str:
    p = os.getenv("DATABASE_PATH")
    if p:
        return p
    url = os.getenv("DATABASE_URL") or os.getenv("DATABASE_URI")
    if url and url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "", 1)
    return "gastroguard.db"


DATABASE_PATH = _resolve_db_path()

LIST_FIELDS = ("symptoms", "triggers", "remedies")
PROFILE_LIST_FIELDS = (
    "conditions",
    "medications",
    "allergies",
    "dietary_restrictions",
    "triggers",
    "effective_remedies",
)


def init_database():
    """Initialize the database with required tables."""
    conn = sqlite3.connect(DATABASE_PATH)
    cursor = conn.cursor()

    # Symptom log entries; list fields are JSON text
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS symptom_logs (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            date TEXT,
            time TEXT,
            pain_level INTEGER DEFAULT 0,
            stress_level INTEGER DEFAULT 0,
            symptoms TEXT DEFAULT '[]',
            triggers TEXT DEFAULT '[]',
            remedies TEXT DEFAULT '[]',
            notes TEXT DEFAULT '',
            meal TEXT DEFAULT '',
            meal_size TEXT DEFAULT '',
            time_since_eating REAL,
            sleep_quality INTEGER DEFAULT 5,
            exercise_level INTEGER DEFAULT 0,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)

    # Lightweight migrations for older DBs
    for stmt in [
        "ALTER TABLE symptom_logs ADD COLUMN weather_condition TEXT DEFAULT ''",
        "ALTER TABLE symptom_logs ADD COLUMN ingestion_time TEXT DEFAULT ''",
    ]:
        try:
            cursor.execute(stmt)
        except sqlite3.OperationalError:
            pass

    # Single-user profile (latest row is active)
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS user_profiles (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT DEFAULT '',
            age INTEGER DEFAULT 0,
            height TEXT DEFAULT '',
            weight TEXT DEFAULT '',
            gender TEXT DEFAULT '',
            conditions TEXT DEFAULT '[]',
            medications TEXT DEFAULT '[]',
            allergies TEXT DEFAULT '[]',
            dietary_restrictions TEXT DEFAULT '[]',
            triggers TEXT DEFAULT '[]',
            effective_remedies TEXT DEFAULT '[]',
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)

    conn.commit()
    conn.close()
    logger.debug("Database ready at %s", DATABASE_PATH)


@contextmanager
def get_db():
    """Context manager for database connections."""
    conn = sqlite3.connect(DATABASE_PATH)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        conn.close()


def _load_list(raw, field, row_id):
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Corrupt %s column on row %s; treating as empty", field, row_id)
        return []
    return as_labels(value) if isinstance(value, list) else []


def _row_to_entry(row):
    entry = dict(row)
    for field in LIST_FIELDS:
        entry[field] = _load_list(entry.get(field), field, entry.get("id"))
    return entry


def _level(value, default=0):
    return int(round(as_level(default if value is None else value)))


def _text(value):
    return "" if value is None else str(value)


def save_symptom_log(data):
    """Save a symptom log entry. Returns the new row id."""
    now = datetime.now()
    hours = data.get("time_since_eating")
    hours = None if hours in (None, "") else max(0.0, as_number(hours))
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("""
            INSERT INTO symptom_logs (
                date, time, pain_level, stress_level, symptoms, triggers, remedies,
                notes, meal, meal_size, time_since_eating, sleep_quality,
                exercise_level, weather_condition, ingestion_time
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """, (
            _text(data.get("date")) or now.strftime("%Y-%m-%d"),
            _text(data.get("time")) or now.strftime("%H:%M:%S"),
            _level(data.get("pain_level")),
            _level(data.get("stress_level")),
            json.dumps(as_labels(data.get("symptoms"))),
            json.dumps(as_labels(data.get("triggers"))),
            json.dumps(as_labels(data.get("remedies"))),
            _text(data.get("notes")),
            _text(data.get("meal")),
            _text(data.get("meal_size")).lower(),
            hours,
            _level(data.get("sleep_quality"), default=5),
            _level(data.get("exercise_level")),
            _text(data.get("weather_condition")),
            _text(data.get("ingestion_time")),
        ))
        conn.commit()
        logger.info("Saved symptom log %s", cursor.lastrowid)
        return cursor.lastrowid


def get_symptom_logs(date=None, limit=None):
    """Get symptom logs, newest first, optionally filtered by date."""
    with get_db() as conn:
        cursor = conn.cursor()
        sql = "SELECT * FROM symptom_logs"
        params = []
        if date:
            sql += " WHERE date = ?"
            params.append(date)
        sql += " ORDER BY date DESC, time DESC, id DESC"
        if limit is not None:
            sql += " LIMIT ?"
            params.append(int(limit))
        cursor.execute(sql, params)
        return [_row_to_entry(row) for row in cursor.fetchall()]


def get_symptom_log(log_id: int):
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT * FROM symptom_logs WHERE id = ?", (log_id,))
        row = cursor.fetchone()
        return _row_to_entry(row) if row else None


def delete_symptom_log(log_id: int) -> bool:
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("DELETE FROM symptom_logs WHERE id = ?", (log_id,))
        conn.commit()
        deleted = cursor.rowcount > 0
    if deleted:
        logger.info("Deleted symptom log %s", log_id)
    return deleted


def get_user_profile():
    """Get the latest user profile, or None when none has been saved."""
    with get_db() as conn:
        cur = conn.cursor()
        cur.execute("SELECT * FROM user_profiles ORDER BY id DESC LIMIT 1")
        row = cur.fetchone()
        if not row:
            return None
        profile = dict(row)
        for field in PROFILE_LIST_FIELDS:
            profile[field] = _load_list(profile.get(field), field, profile.get("id"))
        return profile


def save_user_profile(data):
    """Save the user profile (a new row becomes the active profile)."""
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("""
            INSERT INTO user_profiles (
                name, age, height, weight, gender, conditions, medications,
                allergies, dietary_restrictions, triggers, effective_remedies
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """, (
            _text(data.get("name")).strip(),
            max(0, int(as_number(data.get("age")))),
            _text(data.get("height")),
            _text(data.get("weight")),
            _text(data.get("gender")),
            *(json.dumps(as_labels(data.get(f))) for f in PROFILE_LIST_FIELDS),
        ))
        conn.commit()
        logger.info("Saved user profile %s", cursor.lastrowid)
        return cursor.lastrowid
