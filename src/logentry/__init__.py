"""
logentry

Encoding core for structured log records: cycle-safe deep serialization,
argument-to-text conversion and exception detail extraction, plus a
standard library logging formatter that emits the records as JSON.
"""

__version__ = "0.1.0"

from .config import EntryConfig, get_default_config, set_default_config
from .context import (
    get_context_tags,
    get_request_id,
    push_context_tags,
    request_context,
    set_context_tags,
    set_request_id,
)
from .entry import LogEntry
from .formatter import LogEntryFormatter
from .logger import get_logger, log_with_context
from .serializers import (
    CIRCULAR_REFERENCE,
    ShapeRegistry,
    extract_error_details,
    register_shape,
    serialize_any,
    serialize_argument,
    serialize_arguments,
    unregister_shape,
)

__all__ = [
    "EntryConfig",
    "get_default_config",
    "set_default_config",
    "request_context",
    "get_request_id",
    "set_request_id",
    "get_context_tags",
    "set_context_tags",
    "push_context_tags",
    "LogEntry",
    "LogEntryFormatter",
    "get_logger",
    "log_with_context",
    # Serialization
    "CIRCULAR_REFERENCE",
    "ShapeRegistry",
    "register_shape",
    "unregister_shape",
    "serialize_any",
    "serialize_argument",
    "serialize_arguments",
    "extract_error_details",
]
