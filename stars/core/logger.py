# stars/core/logger.py

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from stars.core.config_loader import settings


LOGGER_NAME = "dubai_to_the_stars"
PROJECT_ROOT = Path(__file__).resolve().parents[2]

LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
)


def resolve_log_dir(log_dir: Union[str, Path]) -> Path:
    """Relative directories are taken from the project root, not the cwd."""
    path = Path(log_dir)
    return path if path.is_absolute() else PROJECT_ROOT / path


def build_logger(
    name: str = LOGGER_NAME,
    log_dir: Optional[Union[str, Path]] = None,
    level: Optional[str] = None,
) -> logging.Logger:
    """
    Rotating file handler at ``level`` (settings.log_level) plus a console
    handler that also shows DEBUG in development. Calling it again for the
    same name returns the already configured logger.
    """
    log = logging.getLogger(name)
    if log.handlers:
        return log

    directory = resolve_log_dir(log_dir or settings.log_dir)
    directory.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT)
    file_level = (level or settings.log_level).upper()

    file_handler = RotatingFileHandler(
        directory / settings.log_file,
        maxBytes=settings.log_max_bytes,
        backupCount=settings.log_backup_count,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(file_level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.DEBUG if settings.environment == "development" else file_level)

    log.setLevel(logging.DEBUG)
    log.propagate = False
    log.addHandler(file_handler)
    log.addHandler(console_handler)
    return log


logger = build_logger()
