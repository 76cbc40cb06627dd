"""
Stack trace normalization and error detail extraction

Traces are handled in a single text form: a header line followed by one
"at <function> (<file>:<line>:<column>)" line per frame, innermost call
first. Exceptions relayed from other runtimes may carry such text in a
``stack`` attribute; Python exceptions have their traceback rendered into it.
"""

import logging
import os
import re
import traceback
from typing import Any, Callable, Dict, List, Optional

from ..config import EntryConfig, get_default_config
from .base import serialize_any
from .shapes import own_attributes, safe_str

logger = logging.getLogger(__name__)

FRAME_SEPARATOR = re.compile(r"\s*\n\s*at\s+")
# "fn (path:line:col)" takes the whole parenthesized path, spaces included
WRAPPED_LOCATION_PATTERN = re.compile(r"\(((?:[A-Za-z]:)?[^()]+?):([0-9]+):([0-9]+)\)")
LOCATION_PATTERN = re.compile(r"((?:[A-Za-z]:)?[^\s():]+):([0-9]+):([0-9]+)")


def _frame_location(frame: traceback.FrameSummary) -> str:
    filename = frame.filename
    # Synthetic sources have no file to point at, render them like native frames
    if filename.startswith("<") and filename.endswith(">"):
        return filename

    column = getattr(frame, "colno", None) or 0
    return f"{filename}:{frame.lineno or 0}:{column}"


def format_trace(error: BaseException) -> str:
    """Render an exception's traceback as trace text, innermost frame first"""
    lines = [f"{type(error).__name__}: {safe_str(error)}"]

    if error.__traceback__ is not None:
        for frame in reversed(traceback.extract_tb(error.__traceback__)):
            lines.append(f"at {frame.name} ({_frame_location(frame)})")

    return "\n    ".join(lines)


def _trace_text(error: BaseException) -> Optional[str]:
    try:
        stack = getattr(error, "stack", None)
    except Exception:
        stack = None
    if isinstance(stack, str):
        return stack
    return format_trace(error)


def split_frames(trace: Optional[str]) -> List[str]:
    """Frame lines of a trace, without the header line"""
    if not trace:
        return []

    segments = FRAME_SEPARATOR.split(trace)
    if len(segments) <= 1:
        return []
    return segments[1:]


def _to_int(text: str) -> int:
    try:
        return int(text, 10)
    except (TypeError, ValueError):
        return 0


def find_location(frames: List[str]) -> Optional[Dict[str, Any]]:
    """File, line and offset of the first frame carrying a location

    Frames without one (native or synthetic code) are skipped.
    """
    for frame in frames:
        match = WRAPPED_LOCATION_PATTERN.search(frame) or LOCATION_PATTERN.search(frame)
        if match:
            return {
                "file": match.group(1),
                "line": _to_int(match.group(2)),
                "offset": _to_int(match.group(3)),
            }
    return None


def _relative(frame: str, root_path: str) -> str:
    if not root_path:
        return frame
    return frame.replace(root_path.rstrip("/\\") + os.sep, "", 1)


def _stack_frames(error: BaseException, config: EntryConfig) -> List[str]:
    frames = split_frames(_trace_text(error))
    return [_relative(frame, config.root_path) for frame in frames]


def _copy_attributes(error: BaseException, data: Dict[str, Any]) -> None:
    # Custom exceptions may carry extra fields
    for key, value in own_attributes(error).items():
        data[str(key)] = serialize_any(value)


def _error_code(error: BaseException) -> Any:
    code = getattr(error, "code", None) or getattr(error, "errno", None)
    return serialize_any(code) if code else None


def _guarded(step: Callable[..., Any], error: BaseException, *args: Any) -> Any:
    try:
        return step(error, *args)
    except Exception as e:
        logger.debug("%s failed for %s: %s", step.__name__, type(error).__name__, e)
        return None


def extract_error_details(
    error: BaseException, data: Dict[str, Any], config: Optional[EntryConfig] = None
) -> None:
    """
    Move an exception's details into a structured data mapping

    Copies the exception's own attributes, then records ``file``, ``line``
    and ``offset`` of the first located frame, ``code`` when present,
    ``type`` and the root-relative ``stack``. The ``message`` key is removed
    since the message text is carried by the log entry itself.

    Each step fails on its own: a broken attribute or trace only loses that
    part, ``type`` and ``stack`` are always recorded. Never raises.
    """
    config = config or get_default_config()

    frames = _guarded(_stack_frames, error, config) or []
    _guarded(_copy_attributes, error, data)
    data.pop("message", None)

    location = find_location(frames)
    if location:
        data.update(location)

    code = _guarded(_error_code, error)
    if code is not None:
        data["code"] = code

    data["type"] = type(error).__name__
    data["stack"] = frames
