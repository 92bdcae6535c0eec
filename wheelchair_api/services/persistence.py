"""
SQLite persistence layer for wheelchair telemetry.

Holds one connection for the lifetime of the application. Every report is
appended as a new row; nothing is ever updated or deleted. "Latest" means
the row with the highest id in its table.
"""

import os
import sqlite3
import logging
from typing import Any, Dict, List

from wheelchair_api.models.telemetry import GESTURE_COLUMNS, STATUS_COLUMNS

logger = logging.getLogger(__name__)

DEFAULT_LOG_LIMIT = 50


class StorageError(Exception):
    """Raised when the SQLite store rejects a statement."""


class StorageWriteError(StorageError):
    pass


class StorageReadError(StorageError):
    pass


def _insert_sql(table: str, columns) -> str:
    placeholders = ", ".join("?" for _ in columns)
    return f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})"


INSERT_STATUS = _insert_sql("wheelchair_status", STATUS_COLUMNS)
INSERT_STATISTICS = _insert_sql("gesture_statistics", GESTURE_COLUMNS)
INSERT_GESTURE = _insert_sql("gesture_log", ("gesture",))


class TelemetryStore:
    """SQLite-backed append-only log of status and gesture reports."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        if db_path != ":memory:":
            directory = os.path.dirname(os.path.abspath(db_path))
            os.makedirs(directory, exist_ok=True)
        self._conn = sqlite3.connect(db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._init_db()

    def _init_db(self):
        """Create tables if they don't exist."""
        self._conn.executescript("""
            CREATE TABLE IF NOT EXISTS wheelchair_status (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                touchActive INTEGER,
                currentDirection TEXT,
                isMoving INTEGER,
                tiltMode INTEGER,
                totalDistanceMeters REAL,
                totalDistanceKm REAL,
                sessionDistanceMeters REAL,
                totalTimeSeconds INTEGER,
                timeHours INTEGER,
                timeMinutes INTEGER,
                timeSeconds INTEGER,
                wifiStrength INTEGER,
                timestamp DATETIME DEFAULT CURRENT_TIMESTAMP
            );

            CREATE TABLE IF NOT EXISTS gesture_statistics (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                totalGestures INTEGER,
                upCount INTEGER,
                downCount INTEGER,
                leftCount INTEGER,
                rightCount INTEGER,
                lastGesture TEXT,
                timestamp DATETIME DEFAULT CURRENT_TIMESTAMP
            );

            CREATE TABLE IF NOT EXISTS gesture_log (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                gesture TEXT,
                timestamp DATETIME DEFAULT CURRENT_TIMESTAMP
            );
        """)
        self._conn.commit()
        logger.info(f"Telemetry DB initialized at {self.db_path}")

    # ── Writes ────────────────────────────────────────────────────────────

    def save_status(self, record: Dict[str, Any]) -> int:
        """Append one status snapshot and return its id."""
        try:
            with self._conn:
                cur = self._conn.execute(
                    INSERT_STATUS, tuple(record.get(c) for c in STATUS_COLUMNS)
                )
            return cur.lastrowid
        except sqlite3.Error as e:
            logger.error(f"Insert error (wheelchair_status): {e}")
            raise StorageWriteError(str(e)) from e

    def save_gesture(self, record: Dict[str, Any], gesture: Any = None) -> int:
        """
        Append one gesture-statistics row and, when `gesture` is given, one
        gesture-log row. Both inserts share a transaction: either both rows
        land or neither does.
        """
        try:
            with self._conn:
                cur = self._conn.execute(
                    INSERT_STATISTICS, tuple(record.get(c) for c in GESTURE_COLUMNS)
                )
                if gesture:
                    self._conn.execute(INSERT_GESTURE, (gesture,))
            return cur.lastrowid
        except sqlite3.Error as e:
            logger.error(f"Insert error (gesture_statistics/gesture_log): {e}")
            raise StorageWriteError(str(e)) from e

    # ── Reads ─────────────────────────────────────────────────────────────

    def _latest(self, table: str) -> Dict[str, Any]:
        try:
            row = self._conn.execute(
                f"SELECT * FROM {table} ORDER BY id DESC LIMIT 1"
            ).fetchone()
        except sqlite3.Error as e:
            logger.error(f"Read error ({table}): {e}")
            raise StorageReadError(str(e)) from e
        return dict(row) if row is not None else {}

    def latest_status(self) -> Dict[str, Any]:
        """Most recent status snapshot, or {} when none was reported yet."""
        return self._latest("wheelchair_status")

    def latest_statistics(self) -> Dict[str, Any]:
        """Most recent gesture counters, or {} when none were reported yet."""
        return self._latest("gesture_statistics")

    def recent_gestures(self, limit: int = DEFAULT_LOG_LIMIT) -> List[Dict[str, Any]]:
        """Last `limit` logged gestures, most recent first."""
        try:
            rows = self._conn.execute(
                "SELECT * FROM gesture_log ORDER BY id DESC LIMIT ?", (limit,)
            ).fetchall()
        except sqlite3.Error as e:
            logger.error(f"Read error (gesture_log): {e}")
            raise StorageReadError(str(e)) from e
        return [dict(r) for r in rows]

    def get_stats(self) -> Dict[str, Any]:
        """Row counts per table."""
        try:
            return {
                "status_records": self._conn.execute(
                    "SELECT COUNT(*) FROM wheelchair_status").fetchone()[0],
                "statistics_records": self._conn.execute(
                    "SELECT COUNT(*) FROM gesture_statistics").fetchone()[0],
                "gesture_log_records": self._conn.execute(
                    "SELECT COUNT(*) FROM gesture_log").fetchone()[0],
                "database_path": self.db_path,
            }
        except sqlite3.Error as e:
            logger.error(f"Read error (stats): {e}")
            raise StorageReadError(str(e)) from e

    def close(self) -> None:
        self._conn.close()
