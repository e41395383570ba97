"""structlog setup: JSON lines to the console and to files under ``logs/``."""

from __future__ import annotations

import logging.config
from pathlib import Path

import structlog

LOGGER_NAME = "listing_aggregator"
LOG_FILES = {"aggregator": "INFO", "error": "ERROR"}

_LOG_DIR: Path | None = None


def current_log_dir() -> Path:
    return _LOG_DIR or Path.cwd() / "logs"


def _file_handler(path: Path, level: str) -> dict:
    return {
        "class": "logging.FileHandler",
        "level": level,
        "filename": str(path),
        "encoding": "utf-8",
        "formatter": "json",
    }


def configure_logging(verbose: bool = False, log_dir: Path | None = None) -> structlog.BoundLogger:
    """Route structlog events through stdlib handlers once per process.

    The console only shows warnings unless ``verbose`` is set; stage events
    land in ``aggregator.log`` and errors additionally in ``error.log``.
    """

    global _LOG_DIR
    if _LOG_DIR is None:
        _LOG_DIR = log_dir or current_log_dir()
        _LOG_DIR.mkdir(parents=True, exist_ok=True)
        level = "DEBUG" if verbose else "INFO"
        handlers = {
            "console": {
                "class": "logging.StreamHandler",
                "level": level if verbose else "WARNING",
                "formatter": "json",
            }
        }
        for name, file_level in LOG_FILES.items():
            handlers[f"{name}_file"] = _file_handler(_LOG_DIR / f"{name}.log", file_level)
        logging.config.dictConfig(
            {
                "version": 1,
                "disable_existing_loggers": False,
                "formatters": {
                    "json": {
                        "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
                        "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s",
                    }
                },
                "handlers": handlers,
                "loggers": {
                    LOGGER_NAME: {"handlers": list(handlers), "level": level, "propagate": False},
                },
            }
        )
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.stdlib.add_log_level,
                structlog.processors.format_exc_info,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )
    return structlog.get_logger(LOGGER_NAME)


def source_logger(source_name: str) -> structlog.BoundLogger:
    return structlog.get_logger(LOGGER_NAME).bind(source=source_name)


def log_files(log_dir: Path) -> list[Path]:
    if not log_dir.exists():
        return []
    return sorted(log_dir.glob("*.log"))


def tail_log(path: Path, line_count: int = 100) -> list[str]:
    """Return the last N lines from a log file."""

    if not path.exists():
        return []
    with path.open("r", encoding="utf-8", errors="ignore") as stream:
        return stream.readlines()[-line_count:]


__all__ = [
    "LOGGER_NAME",
    "configure_logging",
    "current_log_dir",
    "log_files",
    "source_logger",
    "tail_log",
]
