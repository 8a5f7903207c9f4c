"""
Error handling and logging module.

Failures of event, settings and webhook operations go to a rotating
logs/errors.log file and are echoed to the console.
"""

import os
import logging
from logging.handlers import RotatingFileHandler
from config import LOGS_DIR

# ============================================================================
# ERROR LOGGING SYSTEM
# ============================================================================

# Setup error logger with rotation (5MB per file, keep 5 backup files)
error_logger = logging.getLogger('schedule_errors')
error_logger.setLevel(logging.ERROR)

error_log_file = os.path.join(LOGS_DIR, "errors.log")
if not error_logger.handlers:
    error_handler = RotatingFileHandler(
        error_log_file,
        maxBytes=5*1024*1024,  # 5MB per file
        backupCount=5,          # Keep 5 backup files
        encoding='utf-8'
    )
    error_handler.setLevel(logging.ERROR)

    # Format: timestamp | level | location | message
    error_formatter = logging.Formatter(
        '%(asctime)s | %(levelname)s | %(funcName)s:%(lineno)d | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    error_handler.setFormatter(error_formatter)
    error_logger.addHandler(error_handler)


def format_error(error: Exception, context: str = None, extra_info: dict = None) -> str:
    """Build the one-line log message for an error

    Schedule errors usually wrap a gspread/aiohttp/OS error; the wrapped
    type is appended as `cause=...` so the log shows which layer failed.

    Example:
        [Listing events] StorageUnavailableError: ... | cause=APIError | sheet=Events
    """
    error_msg = f"{type(error).__name__}: {error}"
    if context:
        error_msg = f"[{context}] {error_msg}"

    details = {}
    if error.__cause__ is not None:
        details["cause"] = type(error.__cause__).__name__
    details.update(extra_info or {})
    if details:
        info_str = " | ".join(f"{k}={v}" for k, v in details.items())
        error_msg = f"{error_msg} | {info_str}"
    return error_msg


def log_error(error: Exception, context: str = None, extra_info: dict = None):
    """Write a schedule operation failure to logs/errors.log and the console

    Args:
        error: The exception that occurred
        context: Operation that failed, e.g. "Updating event"
        extra_info: Additional key-value pairs to log (event id, file path)
    """
    try:
        error_msg = format_error(error, context, extra_info)
        error_logger.error(error_msg, exc_info=error)
        print(f"❌ {error_msg}")
    except Exception as log_e:
        print(f"⚠️ Failed to log error: {log_e}")
