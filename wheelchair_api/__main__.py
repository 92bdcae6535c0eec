"""
Run the wheelchair telemetry server.

Usage:
  python -m wheelchair_api
  python -m wheelchair_api --port 8080 --db /var/lib/wheelchair/wheelchair.db
"""

import argparse

import uvicorn

from wheelchair_api.config import Settings
from wheelchair_api.main import create_app


def main():
    settings = Settings.from_env()

    parser = argparse.ArgumentParser(description="Wheelchair Telemetry Server")
    parser.add_argument("--host", default=settings.host,
                        help=f"Interface to bind (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port,
                        help=f"Port to listen on (default: {settings.port})")
    parser.add_argument("--db", default=settings.db_path,
                        help=f"SQLite database file (default: {settings.db_path})")
    args = parser.parse_args()

    settings.host = args.host
    settings.port = args.port
    settings.db_path = args.db

    uvicorn.run(create_app(settings), host=settings.host, port=settings.port,
                log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
