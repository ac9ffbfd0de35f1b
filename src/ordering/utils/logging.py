"""Logging for the Ordering domain.

``configure_logging()`` installs three stdlib handlers on the root logger
(stdout, ``ordering.log`` and ``ordering_error.log`` under ``LOG_DIR``) and
points structlog at them. Lines are JSON in production and staging and
coloured console output everywhere else.

Environment:
    ENVIRONMENT / PROTEAN_ENV   picks the default level and the renderer
    LOG_LEVEL                   overrides the level
    LOG_DIR                     directory for the log files (``logs``)
    LOG_MAX_BYTES               rotation size per file (10 MiB)
    LOG_BACKUP_COUNT            rotated files kept (5)
"""

import logging
import os
import sys
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path

import structlog

LEVEL_BY_ENVIRONMENT = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}
JSON_ENVIRONMENTS = frozenset({"production", "staging"})
QUIET_LOGGERS = ("protean", "asyncio", "uvicorn.access")

logging.getLogger("protean").setLevel(logging.WARNING)


def get_environment() -> str:
    return (os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    """``LOG_LEVEL`` when set, otherwise the default for the environment."""
    default = LEVEL_BY_ENVIRONMENT.get(get_environment(), "INFO")
    return os.getenv("LOG_LEVEL", default).upper()


@dataclass(frozen=True)
class LogSettings:
    level: str
    log_dir: Path
    json_output: bool
    max_bytes: int = 10 * 1024 * 1024
    backup_count: int = 5

    @classmethod
    def from_env(cls, log_dir: str | Path | None = None) -> "LogSettings":
        return cls(
            level=get_log_level(),
            log_dir=Path(log_dir or os.getenv("LOG_DIR", "logs")),
            json_output=get_environment() in JSON_ENVIRONMENTS,
            max_bytes=int(os.getenv("LOG_MAX_BYTES", str(10 * 1024 * 1024))),
            backup_count=int(os.getenv("LOG_BACKUP_COUNT", "5")),
        )


def _file_handler(settings: LogSettings, filename: str, level: str | int) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=settings.log_dir / filename,
        maxBytes=settings.max_bytes,
        backupCount=settings.backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def setup_stdlib_logging(log_dir: str | Path | None = None) -> LogSettings:
    """Replace the root logger's handlers with console, full-log and error-log handlers."""
    settings = LogSettings.from_env(log_dir)
    settings.log_dir.mkdir(parents=True, exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(settings.level)

    root = logging.getLogger()
    root.setLevel(settings.level)
    root.handlers = [
        console,
        _file_handler(settings, "ordering.log", settings.level),
        _file_handler(settings, "ordering_error.log", logging.ERROR),
    ]

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return settings


def _renderer(json_output: bool):
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=True,
        exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=2),
    )


def setup_structlog(json_output: bool | None = None) -> None:
    if json_output is None:
        json_output = get_environment() in JSON_ENVIRONMENTS

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(json_output),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(log_dir: str | Path | None = None) -> LogSettings:
    settings = setup_stdlib_logging(log_dir)
    setup_structlog(settings.json_output)
    return settings
