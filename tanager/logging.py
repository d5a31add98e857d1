# MIT License
# Copyright (c) 2025 Matt / Grain Ecosystem

"""
Logging infrastructure for tanager.

Daily log files with automatic cleanup.
Enable via ~/.tanager.json: {"logging": {"debug": true}}

Log files are created at ~/.tanager/logs/tanager_<date>.log
Every invocation appends to the same daily file.
"""

import sys
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from loguru import logger

# Session ID - generated once per process (for correlating log entries)
_session_id: Optional[str] = None
_configured: bool = False

DEFAULT_LOG_RETENTION_COUNT = 7


def get_session_id() -> str:
    """Get or generate the current session ID."""
    global _session_id
    if _session_id is None:
        _session_id = uuid.uuid4().hex[:8]
    return _session_id


def get_log_dir() -> Path:
    """Get the log directory path."""
    return Path.home() / ".tanager" / "logs"


def get_daily_log_path() -> Path:
    """Get the log file path for today."""
    today = datetime.now().strftime("%Y-%m-%d")
    return get_log_dir() / f"tanager_{today}.log"


def cleanup_old_logs(retention_count: int) -> int:
    """
    Remove old log files, keeping only the most recent N days.

    Args:
        retention_count: Number of daily log files to keep

    Returns:
        Number of files deleted
    """
    log_dir = get_log_dir()
    if not log_dir.exists():
        return 0

    # Newest first
    log_files = sorted(
        log_dir.glob("tanager_*.log"),
        key=lambda p: p.stat().st_mtime,
        reverse=True,
    )

    deleted = 0
    for old_file in log_files[retention_count:]:
        try:
            old_file.unlink()
            deleted += 1
        except OSError:
            pass  # Another process may have removed it

    return deleted


def configure_logging(settings: Any = None) -> None:
    """
    Configure loguru.

    Without settings this only happens once per process and leaves logging
    off (null sink). Passing settings (anything with .debug and
    .log_retention_count, e.g. LoggingConfig) always reconfigures.

    If debug is enabled, logs append to the daily file and INFO and above
    also go to stderr.
    """
    global _configured
    if _configured and settings is None:
        return

    # Remove default stderr handler
    logger.remove()

    if settings is not None and settings.debug:
        log_dir = get_log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)

        cleanup_old_logs(getattr(settings, "log_retention_count", DEFAULT_LOG_RETENTION_COUNT))

        session_id = get_session_id()

        log_path = get_daily_log_path()
        logger.add(
            log_path,
            format="{time:HH:mm:ss} | {level: <7} | [" + session_id + "] {extra[name]} | {message}",
            level="DEBUG",
            rotation=None,  # One file per day
            retention=None,  # We handle retention manually
        )

        logger.add(
            sys.stderr,
            format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <7}</level> | {message}",
            level="INFO",
            colorize=True,
        )

        logger.bind(name="logging").debug(f"Log file: {log_path}")

    _configured = True


def get_logger(name: str = "tanager"):
    """
    Get a configured logger instance.

    Automatically configures logging on first call.

    Args:
        name: Logger name (for filtering)

    Returns:
        Configured loguru logger
    """
    configure_logging()
    return logger.bind(name=name)


def log_error(context: str, error: Exception) -> None:
    """Log an error with context."""
    log = get_logger("errors")
    log.error(f"{context}: {type(error).__name__}: {error}")
