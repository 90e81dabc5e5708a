"""
Centralized Logging System for sheet-financials
This module provides a unified loguru configuration that can be imported
and used across all modules in the project.
"""

import atexit
import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

from loguru import logger as _loguru_logger

# One log file per utility and process run.
RUN_ID = f"{datetime.now().strftime('%Y%m%d_%H%M%S')}_{os.getpid()}"

# Base logs directory at project root
LOGS_BASE_DIR = Path(__file__).parent.parent.parent.parent / "logs"

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level:<8} | {extra[utility]} | {message} | {function}:{line}"


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes"}


class InterceptHandler(logging.Handler):
    """Intercepts stdlib logging (aiohttp, asyncio) and routes it to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = _loguru_logger.level(record.levelname).name
        except (ValueError, AttributeError):
            level = record.levelno

        # Find caller from where logging was called
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        _loguru_logger.bind(utility=record.name).opt(
            depth=depth, exception=record.exc_info
        ).log(level, record.getMessage())


def _utility_for(name: str) -> str:
    lower_name = name.lower()
    if "sheet_financials" in lower_name:
        return "sheet_financials"
    if "utils" in lower_name:
        return "utils"
    return "general"


def get_logger(name: str, utility: Optional[str] = None):
    """Return a Loguru logger bound to ``name`` and a utility tag.

    The utility is auto-detected from the module name when not given. When
    ``LOG_TO_FILE`` is enabled every utility gets its own rotating file under
    ``logs/<utility>/``.
    """
    if utility is None:
        utility = _utility_for(name)

    _initialize_sinks_once()
    if _env_flag("LOG_TO_FILE"):
        _ensure_file_sink_for_utility(utility)

    return _loguru_logger.bind(name=name, utility=utility)


def _initialize_sinks_once() -> None:
    """Initialize console sink and stdlib intercept once per process."""
    global _sinks_initialized, _console_sink_id
    if _sinks_initialized:
        return

    _loguru_logger.remove()
    _loguru_logger.configure(extra={"utility": "general"})

    _console_sink_id = _loguru_logger.add(
        sys.stdout,
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format=LOG_FORMAT,
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0)

    _sinks_initialized = True


def _ensure_file_sink_for_utility(utility: str) -> None:
    """Add a file sink for the given utility if not already added for this run."""
    if utility in _file_sink_ids:
        return

    util_dir = LOGS_BASE_DIR / utility
    util_dir.mkdir(parents=True, exist_ok=True)
    log_file = util_dir / f"{utility}_{RUN_ID}.log"

    _file_sink_ids[utility] = _loguru_logger.add(
        str(log_file),
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        rotation="10 MB",
        retention="30 days",
        encoding="utf-8",
        enqueue=True,
        format=LOG_FORMAT,
        filter=lambda record, u=utility: record["extra"].get("utility") == u,
    )


def shutdown_logging() -> None:
    """Remove all Loguru sinks to flush queued messages. Safe to call multiple times."""
    global _sinks_initialized, _console_sink_id
    for sid in list(_file_sink_ids.values()):
        try:
            _loguru_logger.remove(sid)
        except ValueError as e:
            sys.stderr.write(f"Error removing file sink id={sid}: {e}\n")
    _file_sink_ids.clear()

    try:
        if _console_sink_id is not None:
            _loguru_logger.remove(_console_sink_id)
    except ValueError as e:
        sys.stderr.write(f"Error removing console sink id={_console_sink_id}: {e}\n")
    finally:
        _console_sink_id = None

    _sinks_initialized = False


_sinks_initialized = False
_console_sink_id: Optional[int] = None
_file_sink_ids: Dict[str, int] = {}

# Flush sinks on graceful exit
atexit.register(shutdown_logging)
