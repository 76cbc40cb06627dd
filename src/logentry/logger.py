import logging
import sys
from typing import Any, Iterable, Optional

from .config import EntryConfig, get_default_config
from .formatter import LogEntryFormatter


def get_logger(name: str, config: Optional[EntryConfig] = None) -> logging.Logger:
    """Create a logger writing log entries as JSON lines to stdout"""
    logger = logging.getLogger(name)

    if not logger.handlers:
        config = config or get_default_config()
        logger.setLevel(getattr(logging, config.log_level.upper()))

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(LogEntryFormatter(config))
        logger.addHandler(console_handler)

        logger.propagate = True

    return logger


def log_with_context(
    logger: logging.Logger,
    level: str,
    *args: Any,
    details: Optional[Iterable[Any]] = None,
    **data: Any,
) -> None:
    """Log free-form arguments with optional details and data fields

    The arguments are kept on the record and converted by
    LogEntryFormatter; other handlers see them joined by spaces.
    """
    extra = {"entry_args": args}
    if details is not None:
        extra["entry_details"] = list(details)
    if data:
        extra["entry_data"] = data

    logger.log(
        getattr(logging, level.upper()), " ".join(["%s"] * len(args)), *args, extra=extra
    )
