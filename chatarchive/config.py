"""Environment-driven settings.

Values come from the process environment, optionally seeded from a ``.env``
file in the project directory (secrets and paths stay out of shell profiles).
"""

import os
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_DB_PATH = "data/chatarchive.db"


def load_env() -> None:
    load_dotenv(Path(__file__).resolve().parent.parent / ".env")


def database_path() -> str:
    return os.environ.get("CHATARCHIVE_DB") or DEFAULT_DB_PATH


def cors_origins() -> list[str]:
    raw = os.environ.get("CHATARCHIVE_CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level() -> str:
    return os.environ.get("CHATARCHIVE_LOG_LEVEL", "INFO").upper()
