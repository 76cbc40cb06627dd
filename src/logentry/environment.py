"""
Process and clock facts captured by log entries
"""

import multiprocessing
import os
from datetime import datetime, timezone

PRIMARY = "primary"
WORKER = "worker"


def current_pid() -> int:
    return os.getpid()


def current_role() -> str:
    """'primary' for the process that started the program, 'worker' for its children"""
    return PRIMARY if multiprocessing.parent_process() is None else WORKER


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
