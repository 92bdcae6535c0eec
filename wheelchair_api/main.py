"""
Wheelchair Telemetry Service — Backend Entry Point.

FastAPI application that serves:
- Status and gesture ingestion for the ESP32 wheelchair controller
- Latest status, gesture statistics and gesture log for the dashboard
- The static dashboard page
"""

import logging
import os
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from wheelchair_api.config import Settings
from wheelchair_api.api.wheelchair_routes import router as wheelchair_router
from wheelchair_api.services.persistence import StorageError, TelemetryStore

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s │ %(levelname)-8s │ %(name)-30s │ %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application. Without `settings`, configuration is read from the environment."""
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    # ── FastAPI App ──────────────────────────────────────────────────────────
    app = FastAPI(
        title="Wheelchair Telemetry API",
        description=(
            "Receives status and gesture reports from the wheelchair "
            "controller and serves the latest state to the dashboard."
        ),
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings

    # ── CORS ─────────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Routers ──────────────────────────────────────────────────────────────
    app.include_router(wheelchair_router)

    # ── Root & Health ────────────────────────────────────────────────────────
    @app.get("/api", tags=["System"])
    async def root():
        """API root — returns service info."""
        try:
            records = app.state.store.get_stats()
        except StorageError as e:
            return JSONResponse(content={"error": str(e)}, status_code=500)
        return {
            "service": "Wheelchair Telemetry API",
            "version": "1.0.0",
            "status": "operational",
            "docs": "/docs",
            "dashboard": "/",
            "records": records,
            "endpoints": {
                "update": "/api/wheelchair/update",
                "gesture": "/api/wheelchair/gesture",
                "status": "/api/wheelchair/status",
                "statistics": "/api/wheelchair/statistics",
                "log": "/api/wheelchair/log",
            },
        }

    @app.get("/health", tags=["System"])
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    # ── Static Files (Web Dashboard) ────────────────────────────────────────
    # Mounted last so the API routes above take precedence.
    if os.path.isdir(settings.static_dir):
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="dashboard")
    else:
        logger.warning(f"Dashboard directory not found at {settings.static_dir}, serving API only")

    # ── Startup / Shutdown ───────────────────────────────────────────────────
    @app.on_event("startup")
    async def startup_event():
        """Open the telemetry store."""
        app.state.store = TelemetryStore(settings.db_path)
        logger.info("=" * 60)
        logger.info("Wheelchair Telemetry API running")
        logger.info(f"Dashboard:    http://localhost:{settings.port}/")
        logger.info(f"API endpoint: http://localhost:{settings.port}/api/wheelchair/update")
        logger.info("Waiting for ESP32 data...")
        logger.info("=" * 60)

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("Shutting down, closing telemetry store")
        app.state.store.close()
        logger.info("Shutdown complete")

    return app


app = create_app()
