"""
Runtime configuration for the wheelchair telemetry service.

Values come from environment variables, optionally loaded from a .env file
in the working directory.
"""

import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file

PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_STATIC_DIR = os.path.join(PACKAGE_DIR, "static")


def parse_origins(value: str) -> List[str]:
    """Comma-separated origin list; an empty value falls back to any origin."""
    origins = [o.strip() for o in value.split(",") if o.strip()]
    return origins or ["*"]


@dataclass
class Settings:
    """Service settings. Build with `Settings.from_env()` or pass explicit values in tests."""

    db_path: str = "./wheelchair.db"
    host: str = "0.0.0.0"
    port: int = 3000
    static_dir: str = DEFAULT_STATIC_DIR
    log_level: str = "INFO"
    log_limit: int = 50
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            db_path=os.getenv("WHEELCHAIR_DB_PATH", "./wheelchair.db"),
            host=os.getenv("WHEELCHAIR_HOST", "0.0.0.0"),
            port=int(os.getenv("WHEELCHAIR_PORT", "3000")),
            static_dir=os.getenv("WHEELCHAIR_STATIC_DIR", DEFAULT_STATIC_DIR),
            log_level=os.getenv("WHEELCHAIR_LOG_LEVEL", "INFO").upper(),
            log_limit=int(os.getenv("WHEELCHAIR_LOG_LIMIT", "50")),
            cors_origins=parse_origins(os.getenv("WHEELCHAIR_CORS_ORIGINS", "*")),
        )
