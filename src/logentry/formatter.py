"""
JSON formatter rendering standard library log records as log entries
"""

import json
import logging
import math
from typing import Any, List, Optional

from .config import EntryConfig, get_default_config
from .context import get_context_tags, get_request_id
from .entry import LogEntry


def _finite(value: Any) -> Any:
    """NaN and Infinity have no JSON form, they are written as null"""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: _finite(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_finite(item) for item in value]
    return value


class LogEntryFormatter(logging.Formatter):
    """JSON formatter building a LogEntry for every record

    Recognized record extras:
        entry_args: message arguments, used instead of ``record.msg``
        entry_details: arguments for one details entry
        entry_data: mapping merged into the entry data
        ctx_<name>: single data fields, as set by ``log_with_context``
    """

    def __init__(self, config: Optional[EntryConfig] = None):
        super().__init__()
        self.config = config or get_default_config()

    def _contexts(self) -> List[Any]:
        contexts: List[Any] = []
        if self.config.include_request_id:
            req_id = get_request_id()
            if req_id:
                contexts.append(req_id)
        if self.config.include_contexts:
            contexts.extend(get_context_tags())
        return contexts

    def _message_args(self, record: logging.LogRecord) -> List[Any]:
        entry_args = getattr(record, "entry_args", None)
        if entry_args is not None:
            return list(entry_args)
        if not isinstance(record.msg, str) and not record.args:
            return [record.msg]
        return [record.getMessage()]

    def build_entry(self, record: logging.LogRecord) -> LogEntry:
        entry = LogEntry(record.name, self.config)

        contexts = self._contexts()
        if contexts:
            entry.add_contexts(contexts)

        entry.add_message_args(self._message_args(record))

        details = getattr(record, "entry_details", None)
        if details is not None:
            entry.add_details(details)

        if record.exc_info and record.exc_info[1] is not None:
            entry.add_details([record.exc_info[1]])

        data = getattr(record, "entry_data", None)
        if data is not None:
            entry.add_data(data)

        for key, value in record.__dict__.items():
            if key.startswith("ctx_"):
                entry.add_data({key[4:]: value})

        return entry

    def format(self, record: logging.LogRecord) -> str:
        payload = self.build_entry(record).to_dict()
        payload["level"] = record.levelname
        return json.dumps(_finite(payload), separators=(",", ":"), allow_nan=False)
