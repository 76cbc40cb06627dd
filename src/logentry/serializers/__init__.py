"""
Serializers package for log entries

Deep serialization of arbitrary values, conversion of logged arguments to
text and extraction of exception details.
"""

from .arguments import (
    EncodeResult,
    encode_compact,
    encode_verbose,
    serialize_argument,
    serialize_arguments,
)
from .base import CIRCULAR_REFERENCE, serialize_any
from .errors import extract_error_details, find_location, format_trace, split_frames
from .registry import Shape, ShapeRegistry, get_registry, register_shape, unregister_shape
from .shapes import regex_literal, to_primitive

__all__ = [
    # Deep serialization
    "serialize_any",
    "CIRCULAR_REFERENCE",
    "to_primitive",
    "regex_literal",
    # Shape registry
    "Shape",
    "ShapeRegistry",
    "get_registry",
    "register_shape",
    "unregister_shape",
    # Arguments
    "EncodeResult",
    "encode_compact",
    "encode_verbose",
    "serialize_argument",
    "serialize_arguments",
    # Errors
    "extract_error_details",
    "find_location",
    "format_trace",
    "split_frames",
]
