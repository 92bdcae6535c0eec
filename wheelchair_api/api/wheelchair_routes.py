"""
Wheelchair telemetry API routes.
The controller posts status and gesture reports here; the dashboard reads
the latest state back.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from wheelchair_api.models.telemetry import GestureUpdate, StatusUpdate
from wheelchair_api.services.persistence import StorageError, TelemetryStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/wheelchair", tags=["Wheelchair"])


def get_store(request: Request) -> TelemetryStore:
    """The store opened at startup."""
    return request.app.state.store


def get_log_limit(request: Request) -> int:
    return request.app.state.settings.log_limit


def _storage_failure(message: str) -> JSONResponse:
    return JSONResponse(content={"error": message}, status_code=500)


@router.post("/update", summary="Record a status report from the controller")
async def record_status(
    data: Optional[StatusUpdate] = None, store: TelemetryStore = Depends(get_store)
) -> Dict[str, Any]:
    """A request without a body is stored as an empty report."""
    if data is None:
        data = StatusUpdate()
    try:
        store.save_status(data.to_record())
    except StorageError:
        return _storage_failure("Database error")
    logger.info(
        f"Status received: direction={data.currentDirection}, moving={data.isMoving}, "
        f"wifi={data.wifiStrength}"
    )
    return {"success": True}


@router.post("/gesture", summary="Record gesture counters and the last gesture")
async def record_gesture(
    data: Optional[GestureUpdate] = None, store: TelemetryStore = Depends(get_store)
) -> Dict[str, Any]:
    """
    Appends a statistics row, plus a log entry when `lastGesture` is set.
    Both rows are written atomically; a storage failure is reported as 500.
    """
    if data is None:
        data = GestureUpdate()
    try:
        store.save_gesture(data.to_record(), data.logged_gesture)
    except StorageError:
        return _storage_failure("Database error")
    logger.info(f"Gesture received: last={data.lastGesture}, total={data.totalGestures}")
    return {"success": True}


@router.get("/status", summary="Latest status report")
async def get_latest_status(
    store: TelemetryStore = Depends(get_store),
) -> Dict[str, Any]:
    """Return the most recent status row, or {} if nothing was reported yet."""
    try:
        return store.latest_status()
    except StorageError as e:
        return _storage_failure(str(e))


@router.get("/statistics", summary="Latest gesture counters")
async def get_latest_statistics(
    store: TelemetryStore = Depends(get_store),
) -> Dict[str, Any]:
    try:
        return store.latest_statistics()
    except StorageError as e:
        return _storage_failure(str(e))


@router.get("/log", summary="Recent gestures, newest first")
async def get_gesture_log(
    store: TelemetryStore = Depends(get_store),
    limit: int = Depends(get_log_limit),
) -> List[Dict[str, Any]]:
    try:
        return store.recent_gestures(limit)
    except StorageError as e:
        return _storage_failure(str(e))
