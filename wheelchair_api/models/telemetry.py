"""
Request bodies reported by the wheelchair controller.

Every field is optional so partial reports are accepted. Values are not
type-checked: they reach SQLite as sent and the column affinity decides how
they are stored. Missing values are stored as NULL, except the boolean flags,
which are stored as 1/0 by truthiness with a missing flag counting as 0.
"""

from typing import Any, Dict

from pydantic import BaseModel, Field

STATUS_FLAGS = ("touchActive", "isMoving", "tiltMode")

STATUS_COLUMNS = (
    "touchActive",
    "currentDirection",
    "isMoving",
    "tiltMode",
    "totalDistanceMeters",
    "totalDistanceKm",
    "sessionDistanceMeters",
    "totalTimeSeconds",
    "timeHours",
    "timeMinutes",
    "timeSeconds",
    "wifiStrength",
)

GESTURE_COLUMNS = (
    "totalGestures",
    "upCount",
    "downCount",
    "leftCount",
    "rightCount",
    "lastGesture",
)


def flag_to_int(value: Any) -> int:
    """SQLite has no boolean type; flags are stored as 1 or 0."""
    return 1 if value else 0


class StatusUpdate(BaseModel):
    """One status snapshot sent by the controller to /api/wheelchair/update."""
    touchActive: Any = Field(default=None, description="Touch sensor engaged")
    currentDirection: Any = Field(default=None, description="forward, backward, left, right, stop")
    isMoving: Any = Field(default=None, description="Motors are driving")
    tiltMode: Any = Field(default=None, description="Tilt (head) control enabled")
    totalDistanceMeters: Any = Field(default=None, description="Odometer (m)")
    totalDistanceKm: Any = Field(default=None, description="Odometer (km)")
    sessionDistanceMeters: Any = Field(default=None, description="Distance since power-on (m)")
    totalTimeSeconds: Any = Field(default=None, description="Total driving time (s)")
    timeHours: Any = Field(default=None)
    timeMinutes: Any = Field(default=None)
    timeSeconds: Any = Field(default=None)
    wifiStrength: Any = Field(default=None, description="RSSI or signal percentage")

    def to_record(self) -> Dict[str, Any]:
        record = self.model_dump()
        for flag in STATUS_FLAGS:
            record[flag] = flag_to_int(record[flag])
        return {column: record[column] for column in STATUS_COLUMNS}


class GestureUpdate(BaseModel):
    """Cumulative gesture counters sent to /api/wheelchair/gesture."""
    totalGestures: Any = Field(default=None)
    upCount: Any = Field(default=None)
    downCount: Any = Field(default=None)
    leftCount: Any = Field(default=None)
    rightCount: Any = Field(default=None)
    lastGesture: Any = Field(default=None, description="Most recent gesture, e.g. 'up'")

    def to_record(self) -> Dict[str, Any]:
        record = self.model_dump()
        return {column: record[column] for column in GESTURE_COLUMNS}

    @property
    def logged_gesture(self) -> Any:
        """The gesture to append to the log, or None when nothing was reported."""
        return self.lastGesture if self.lastGesture else None
