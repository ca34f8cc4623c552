"""
Centralized logging configuration.

Every module logs through get_logger(__name__); setup_logging() attaches
the handlers once at startup. Lines look like:

    2024-01-15 10:30:45 | INFO     | chat_relay.services.chat_service:82 | Processing message: ...

Request lines come from the audit middleware, so uvicorn's own access log
is turned down to avoid logging every request twice.
"""
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are too chatty at INFO/DEBUG
QUIET_LOGGERS = ("httpx", "httpcore", "openai", "uvicorn.access")

_logging_configured = False


def setup_logging(
    log_level: str = "INFO",
    log_dir: Optional[Union[str, Path]] = None,
    app_name: str = "chat_relay",
) -> logging.Logger:
    """
    Configure application-wide logging.

    Repeated calls are no-ops.

    Args:
        log_level: Console logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for a daily log file capturing everything at
            DEBUG. No file is written when this is None.
        app_name: Prefix of the log file name

    Returns:
        Configured root logger instance
    """
    global _logging_configured

    root_logger = logging.getLogger()
    if _logging_configured:
        return root_logger

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root_logger.addHandler(console_handler)

    log_file = None
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"{app_name}_{datetime.now().strftime('%Y%m%d')}.log"
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)

    root_logger.setLevel(logging.DEBUG)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _logging_configured = True
    root_logger.debug(f"Logging configured: level={log_level}, file={log_file or '-'}")

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Args:
        name: Logger name, typically __name__ of the calling module
    """
    return logging.getLogger(name)
