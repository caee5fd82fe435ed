"""
Structured logging configuration for the comp-rollup project.

This module provides a centralized way to configure logging across the application
with different log levels and output files for different concerns.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import List, Optional, Set

# Define logger names for different concerns
ENGINE_LOGGER = "comp_rollup.engines"
REPORTING_LOGGER = "comp_rollup.reporting"
STORAGE_LOGGER = "comp_rollup.storage"
DEBUG_LOGGER = "comp_rollup"

# Standard log format with module name and line number
LOG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

DEFAULT_LOG_DIR = Path("output/rollup_logs")

LOG_FILES: List[str] = [
    "rollup_events.log",
    "storage_events.log",
    "warnings_errors.log",
    "debug_detail.log",
    "combined.log",
]

_MAX_BYTES = 10 * 1024 * 1024
_BACKUP_COUNT = 5

# Track if logging is already configured and log files
_LOGGING_CONFIGURED = False
_log_files_created: Set[Path] = set()
_handlers_installed: List[tuple] = []


def clear_logs(log_dir: Path) -> None:
    """
    Clear all log files in the specified directory.

    Args:
        log_dir: Directory containing log files to clear
    """
    for name in LOG_FILES:
        log_file = log_dir / name
        if log_file.exists():
            try:
                log_file.unlink()
            except OSError as e:
                logging.getLogger(__name__).warning(f"Could not delete {log_file}: {e}")


def _rotating_handler(path: Path, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
        mode="a",
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    _log_files_created.add(path)
    return handler


def _attach(logger_name: Optional[str], handler: logging.Handler) -> None:
    logging.getLogger(logger_name).addHandler(handler)
    _handlers_installed.append((logger_name, handler))


def setup_logging(log_dir: Path = DEFAULT_LOG_DIR, debug: bool = False, clear_existing: bool = True) -> None:
    """
    Configure structured logging for the application.

    Creates separate log files for different concerns:
    - rollup_events.log: Increase resolution and report building (INFO+)
    - storage_events.log: Project save/load/delete (INFO+)
    - warnings_errors.log: Warnings and errors (WARNING+)
    - debug_detail.log: Detailed debug information (DEBUG, only if debug=True)
    - combined.log: Combined log of all messages (INFO+)

    Args:
        log_dir: Directory where log files will be stored
        debug: If True, enables debug logging and creates debug_detail.log
        clear_existing: If True, clears existing log files before starting
    """
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED:
        return

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    if clear_existing:
        clear_logs(log_dir)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

    # Formatters
    file_formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    console_formatter = logging.Formatter("%(levelname)-8s %(message)s")

    # Console handler (for warnings and above)
    console = logging.StreamHandler()
    console.setLevel(logging.WARNING)
    console.setFormatter(console_formatter)
    _attach(None, console)

    _attach(None, _rotating_handler(log_dir / "combined.log", logging.INFO, file_formatter))
    _attach(None, _rotating_handler(log_dir / "warnings_errors.log", logging.WARNING, file_formatter))

    rollup_handler = _rotating_handler(log_dir / "rollup_events.log", logging.INFO, file_formatter)
    for name in (ENGINE_LOGGER, REPORTING_LOGGER):
        _attach(name, rollup_handler)

    _attach(STORAGE_LOGGER, _rotating_handler(log_dir / "storage_events.log", logging.INFO, file_formatter))

    if debug:
        _attach(DEBUG_LOGGER, _rotating_handler(log_dir / "debug_detail.log", logging.DEBUG, file_formatter))
        logging.getLogger(DEBUG_LOGGER).setLevel(logging.DEBUG)

    _LOGGING_CONFIGURED = True


def reset_logging() -> None:
    """Remove every handler installed by setup_logging so it can run again."""
    global _LOGGING_CONFIGURED
    while _handlers_installed:
        name, handler = _handlers_installed.pop()
        logging.getLogger(name).removeHandler(handler)
        handler.close()
    _log_files_created.clear()
    _LOGGING_CONFIGURED = False


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (e.g., __name__). If None, returns root logger.

    Returns:
        Logger instance
    """
    return logging.getLogger(name)
