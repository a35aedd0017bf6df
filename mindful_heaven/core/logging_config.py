"""
Logging setup for Mindful Heaven.

One console handler (and optionally a rotating file) on the root logger,
per-package levels, and a filter that masks email addresses and bearer
tokens before a record is written. Account emails travel through the
sign-in and password reset paths, so every handler carries the filter.

Environment:
    MINDFUL_HEAVEN_LOG_LEVEL  console level when settings are unavailable
    LOG_FORMAT                ``simple``, ``detailed`` (default) or ``json``
    LOG_FILE_DIR              directory of ``mindful_heaven.log``
    ENABLE_FILE_LOGGING       ``true`` to also write the log file
"""

import logging
import os
import re
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _default_level() -> str:
    try:
        from mindful_heaven.server.core.config import settings

        return settings.log_level.upper()
    except Exception:
        return os.getenv("MINDFUL_HEAVEN_LOG_LEVEL", "INFO").upper()


LOG_LEVEL = _default_level()
LOG_FORMAT = os.getenv("LOG_FORMAT", "detailed")
LOG_FILE_DIR = os.getenv("LOG_FILE_DIR", "logs")
ENABLE_FILE_LOGGING = _env_flag("ENABLE_FILE_LOGGING")
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5

SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"
DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(funcName)s() - %(message)s"
JSON_FORMAT = (
    '{"timestamp": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", '
    '"module": "%(filename)s", "function": "%(funcName)s", "line": %(lineno)d, '
    '"message": "%(message)s"}'
)
FORMATS = {"simple": SIMPLE_FORMAT, "detailed": DETAILED_FORMAT, "json": JSON_FORMAT}

MODULE_LOG_LEVELS = {
    "mindful_heaven": "INFO",
    "mindful_heaven.server.api": "DEBUG",
    "mindful_heaven.server.services": "DEBUG",
    "mindful_heaven.client": "INFO",
    # Third-party libraries
    "sqlalchemy": "WARNING",
    "sqlalchemy.engine": "WARNING",
    "aiosqlite": "WARNING",
    "httpx": "WARNING",
    "httpcore": "WARNING",
    "asyncio": "WARNING",
    "uvicorn": "INFO",
    "uvicorn.access": "INFO",
}

_EMAIL = re.compile(r"([A-Za-z0-9._%+-])[A-Za-z0-9._%+-]*@([A-Za-z0-9.-]+\.[A-Za-z]{2,})")
_BEARER = re.compile(r"(Bearer\s+)[A-Za-z0-9._~+/=-]+")


def redact(text: str) -> str:
    """Mask email local parts and bearer tokens: ``j***@example.com``, ``Bearer ***``."""
    return _BEARER.sub(r"\1***", _EMAIL.sub(r"\1***@\2", text))


class RedactingFilter(logging.Filter):
    """Rewrites the formatted message of each record with :func:`redact`."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = redact(message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def _handler(handler: logging.Handler, level, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(RedactingFilter())
    return handler


def setup_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
    enable_file: bool = True,
) -> None:
    """
    Configure the root logger. Calling it again replaces earlier handlers.

    Args:
        log_level: Console level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: ``simple``, ``detailed`` or ``json``; anything else means detailed
        enable_file: Also write the log file, when ``ENABLE_FILE_LOGGING`` is set
    """
    level = (log_level or LOG_LEVEL).upper()
    fmt = log_format or LOG_FORMAT
    formatter = logging.Formatter(FORMATS.get(fmt, DETAILED_FORMAT), datefmt="%Y-%m-%d %H:%M:%S")

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)

    root_logger.addHandler(_handler(logging.StreamHandler(), level, formatter))

    file_logging = enable_file and ENABLE_FILE_LOGGING
    if file_logging:
        log_dir = Path(LOG_FILE_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / "mindful_heaven.log", maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS
        )
        root_logger.addHandler(_handler(file_handler, logging.DEBUG, formatter))

    for module_name, module_level in MODULE_LOG_LEVELS.items():
        logging.getLogger(module_name).setLevel(module_level)

    root_logger.info(f"Logging configured: level={level}, format={fmt}, file_logging={file_logging}")


def get_logger(name: str) -> logging.Logger:
    """Logger for a module; pass ``__name__``."""
    return logging.getLogger(name)
