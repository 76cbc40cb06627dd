"""
Conversion of logged arguments into display text
"""

import json
import pprint
from typing import Any, Dict, Iterable, NamedTuple, Optional

from ..config import EntryConfig, get_default_config
from .errors import extract_error_details
from .shapes import (
    BUFFER_TYPES,
    is_regex,
    is_routine,
    own_attributes,
    regex_literal,
    safe_str,
    to_primitive,
)


class EncodeResult(NamedTuple):
    """Outcome of an encoding attempt"""

    ok: bool
    text: str = ""


def _json_default(obj: Any) -> Any:
    """Expose values the json module does not know about, or reject them"""
    if is_routine(obj) or isinstance(obj, BUFFER_TYPES):
        raise TypeError(f"{type(obj).__name__} is not JSON serializable")

    primitive = to_primitive(obj)
    if primitive is not obj:
        return primitive

    if isinstance(obj, (set, frozenset)):
        return list(obj)

    attributes = own_attributes(obj)
    if not attributes and not hasattr(obj, "__dict__"):
        raise TypeError(f"{type(obj).__name__} is not JSON serializable")
    return attributes


def encode_compact(value: Any) -> EncodeResult:
    """Compact JSON encoding, fails on cycles, NaN/Infinity and unencodable values"""
    try:
        text = json.dumps(value, default=_json_default, separators=(",", ":"), allow_nan=False)
        return EncodeResult(True, text)
    except (TypeError, ValueError, OverflowError, RecursionError):
        return EncodeResult(False)


def encode_verbose(value: Any) -> str:
    """Readable multi-line representation, never fails"""
    try:
        return pprint.pformat(value)
    except Exception as e:
        return f"<repr failed: {str(e)[:50]}>"


def serialize_argument(
    arg: Any, data: Dict[str, Any], config: Optional[EntryConfig] = None
) -> str:
    """
    Convert one logged argument to text

    Exceptions have their details extracted into ``data`` and are
    represented by their message.
    """
    config = config or get_default_config()

    if isinstance(arg, BaseException):
        extract_error_details(arg, data, config)
        return safe_str(arg)

    if arg is None:
        return config.missing_text

    if isinstance(arg, str):
        return arg

    if is_regex(arg):
        return regex_literal(arg)

    result = encode_compact(arg)
    if result.ok:
        return result.text
    return encode_verbose(arg)


def serialize_arguments(
    args: Iterable[Any], data: Dict[str, Any], config: Optional[EntryConfig] = None
) -> Optional[str]:
    """Convert arguments to text joined by single spaces, None when empty"""
    parts = [serialize_argument(arg, data, config) for arg in args]
    if not parts:
        return None
    return " ".join(parts)
