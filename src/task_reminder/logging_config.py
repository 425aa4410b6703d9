"""
Logging configuration for the task-reminder service.

Everything under the "task_reminder" logger goes to a rotating file in
LOG_DIR; warnings and errors are echoed to the console as well.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Union

SERVICE_LOGGER = "task_reminder"
LOG_FILE_NAME = "task_reminder.log"

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s [%(filename)s:%(lineno)d] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

MAX_BYTES = 10 * 1024 * 1024  # 10 MB
BACKUP_COUNT = 5


def _build_handlers(log_file: Path, level: int) -> List[logging.Handler]:
    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=MAX_BYTES,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(level)

    # Console stays quiet unless something needs attention
    console_handler = logging.StreamHandler()
    console_handler.setLevel(max(level, logging.WARNING))

    for handler in (file_handler, console_handler):
        handler.setFormatter(formatter)
    return [file_handler, console_handler]


def setup_logging(level: str = "INFO", log_dir: Union[str, Path] = "logs") -> logging.Logger:
    """
    Configure the root and service loggers. Safe to call more than once: the
    service logger's previous handlers are closed and replaced.
    """
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    logging.getLogger().setLevel(resolved)

    service_logger = logging.getLogger(SERVICE_LOGGER)
    service_logger.setLevel(resolved)
    for handler in list(service_logger.handlers):
        service_logger.removeHandler(handler)
        handler.close()
    for handler in _build_handlers(log_path / LOG_FILE_NAME, resolved):
        service_logger.addHandler(handler)

    # SQL statements only show up when SQL_ECHO is on
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    return service_logger


def get_logger(name: str) -> logging.Logger:
    """
    Convenience wrapper to get a named logger.
    """
    return logging.getLogger(name)
