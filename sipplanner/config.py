"""Environment-driven settings, loaded once when the app is created."""

from __future__ import annotations

import os
from typing import Any, Dict, List

from dotenv import load_dotenv

DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"


def _split(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def load_config() -> Dict[str, Any]:
    """Read ``SIPPLANNER_*`` variables (a local ``.env`` file is honoured)."""
    load_dotenv()
    return {
        "DB_PATH": os.environ.get("SIPPLANNER_DB_PATH", "sipplanner.db"),
        "CORS_ORIGINS": _split(os.environ.get("SIPPLANNER_CORS_ORIGINS", DEFAULT_CORS_ORIGINS)),
        "LOG_LEVEL": os.environ.get("SIPPLANNER_LOG_LEVEL", "INFO").upper(),
        "PROJECTION_INTERVAL": int(os.environ.get("SIPPLANNER_PROJECTION_INTERVAL", "6")),
    }
