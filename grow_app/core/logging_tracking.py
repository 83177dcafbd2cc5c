# grow_app/core/logging_tracking.py

import logging
import os
from logging.handlers import RotatingFileHandler

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

ERROR_LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'

# --- Log-Once-Per-Session Utility ---
_logged_once_set = set()
def log_once_per_session(level: str, msg: str):
    """
    Log a message only once per process/session, regardless of how many times it's called.
    Usage: log_once_per_session('warning', 'Some warning message')
    """
    key = f"{level}:{msg}"
    if key in _logged_once_set:
        return
    _logged_once_set.add(key)
    if level.lower() == 'warning':
        logger.warning(msg)
    elif level.lower() == 'error':
        logger.error(msg)
    elif level.lower() == 'info':
        logger.info(msg)
    else:
        logger.log(logging.getLevelName(level.upper()), msg)


def setup_global_rotating_error_log(logfile: str = 'error.log', max_bytes: int = 1_000_000, backup_count: int = 3) -> RotatingFileHandler:
    """Attach a WARNING+ rotating file handler to the root logger once per file."""
    logfile = os.path.abspath(logfile)
    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        if isinstance(handler, RotatingFileHandler) and getattr(handler, 'baseFilename', None) == logfile:
            return handler
    handler = RotatingFileHandler(logfile, maxBytes=max_bytes, backupCount=backup_count)
    handler.setLevel(logging.WARNING)
    handler.setFormatter(logging.Formatter(ERROR_LOG_FORMAT))
    root_logger.addHandler(handler)
    return handler


def configure_logging(level: str = "INFO", error_log_path: str = 'error.log'):
    """Basic console logging plus the rotating error log."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    setup_global_rotating_error_log(error_log_path)
