"""
The LogEntry aggregate

A log entry is what gets emitted each time something is logged. It carries
the message text, context tags, detail strings and a structured data
mapping, all of which are plain serializable values.
"""

from typing import Any, Dict, Iterable, List, Optional

from .config import EntryConfig, get_default_config
from .environment import current_pid, current_role, utc_now
from .serializers import serialize_any, serialize_arguments


class LogEntry:
    """A single log entry, built up by the add_* methods"""

    def __init__(self, channel: str, config: Optional[EntryConfig] = None):
        self.config = config or get_default_config()
        self.timestamp = utc_now()
        self.pid = current_pid()
        self.role = current_role()
        self._channel = channel
        self.message: Optional[str] = None
        self.contexts: Optional[List[Any]] = None
        self.details: Optional[List[str]] = None
        self.data: Optional[Any] = None

    @property
    def channel(self) -> str:
        return self._channel

    def _serialize_arguments(self, args: Iterable[Any]) -> Optional[str]:
        # Exception details land in the data mapping, created on demand
        data = self.data if isinstance(self.data, dict) else {}
        text = serialize_arguments(args, data, self.config)
        if data:
            self.data = data
        return text

    def add_message_args(self, args: Iterable[Any]) -> None:
        """Append the arguments' text to the message, space separated"""
        text = self._serialize_arguments(args)
        if text is None:
            return

        if self.message:
            self.message += " " + text
        else:
            self.message = text

    def add_contexts(self, tags: Iterable[Any]) -> None:
        """Append context tags as given"""
        if self.contexts is None:
            self.contexts = []
        self.contexts.extend(tags)

    def add_details(self, args: Iterable[Any]) -> None:
        """Append one detail entry holding the arguments' joined text"""
        text = self._serialize_arguments(args)

        if self.details is None:
            self.details = []
        self.details.append(text or "")

    def add_data(self, value: Any) -> None:
        """Merge serialized data into the entry, last write wins per key"""
        serialized = serialize_any(value)

        if isinstance(serialized, dict) and isinstance(self.data, dict):
            self.data.update(serialized)
        else:
            self.data = serialized

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready view of the entry, absent fields omitted"""
        result: Dict[str, Any] = {
            "timestamp": self.timestamp.isoformat(),
            "pid": self.pid,
            "role": self.role,
            "channel": self.channel,
        }

        if self.message is not None:
            result["message"] = self.message
        if self.contexts is not None:
            result["contexts"] = serialize_any(self.contexts)
        if self.details is not None:
            result["details"] = list(self.details)
        if self.data is not None:
            result["data"] = self.data

        return result

    def __repr__(self) -> str:
        return f"<LogEntry channel={self.channel!r} message={self.message!r}>"
