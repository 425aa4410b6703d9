"""
Settings for the task-reminder service.

Values come from the process environment, with an optional .env file
loaded first (existing environment variables win).
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./tasks.db"
DEFAULT_CHECK_INTERVAL_SECONDS = 60.0

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw.strip())
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def _env_log_level(name: str, default: str) -> str:
    raw = (os.getenv(name) or default).strip().upper()
    level = LOG_LEVEL_ALIASES.get(raw, raw)
    if level not in LOG_LEVELS:
        raise ValueError(f"{name} must be one of {', '.join(LOG_LEVELS)}, got {raw!r}")
    return level


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw.strip())
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    sql_echo: bool = False
    task_check_enabled: bool = True
    task_check_interval_seconds: float = DEFAULT_CHECK_INTERVAL_SECONDS
    log_level: str = "INFO"
    log_dir: Path = Path("logs")
    host: str = "0.0.0.0"
    port: int = 8000


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """
    Build Settings from the environment.

    Raises ValueError for unparsable numbers, a non-positive check interval
    or an unknown log level.
    """
    load_dotenv(dotenv_path or find_dotenv(usecwd=True), override=False)

    interval = _env_float("TASK_CHECK_INTERVAL_SECONDS", DEFAULT_CHECK_INTERVAL_SECONDS)
    if interval <= 0:
        raise ValueError(f"TASK_CHECK_INTERVAL_SECONDS must be > 0, got {interval}")

    return Settings(
        database_url=os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL,
        sql_echo=_env_bool("SQL_ECHO", False),
        task_check_enabled=_env_bool("TASK_CHECK_ENABLED", True),
        task_check_interval_seconds=interval,
        log_level=_env_log_level("LOG_LEVEL", "INFO"),
        log_dir=Path(os.getenv("LOG_DIR") or "logs"),
        host=os.getenv("HOST") or "0.0.0.0",
        port=_env_int("PORT", 8000),
    )
