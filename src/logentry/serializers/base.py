"""
Deep serialization of arbitrary values for log records
"""

from collections.abc import Mapping, Sequence, Set
from typing import Any, Dict, Optional

from .registry import ShapeRegistry, get_registry
from .shapes import BUFFER_TYPES, own_attributes, to_primitive

CIRCULAR_REFERENCE = "[Circular reference]"

SCALAR_TYPES = (str, int, float, bool, type(None))

# Sequence-like types that are serialized as scalars or buffers, not element-wise
_NON_SEQUENCE_TYPES = (str,) + BUFFER_TYPES


def serialize_any(obj: Any, registry: Optional[ShapeRegistry] = None) -> Any:
    """
    Serialize any value into a plain, cycle-free, JSON-representable tree

    Composite values seen a second time during one call are replaced with
    the circular reference sentinel. The visited map is created here for
    each call and never shared between calls.

    Args:
        obj: Value to serialize
        registry: Shape registry, defaults to the global registry

    Returns:
        Serialized value tree
    """
    return _serialize(obj, {}, registry or get_registry())


def _is_sequence(obj: Any) -> bool:
    return isinstance(obj, (Sequence, Set)) and not isinstance(obj, _NON_SEQUENCE_TYPES)


def _serialize(obj: Any, visited: Dict[int, Any], registry: ShapeRegistry) -> Any:
    # One-level coercion, the coerced value is dispatched as-is
    obj = to_primitive(obj)

    if isinstance(obj, SCALAR_TYPES):
        return obj

    leaf = registry.find(obj, leaf=True)
    if leaf is not None:
        return leaf.reduce(obj)

    # Visited entries keep a reference so ids stay unique for the whole pass
    if id(obj) in visited:
        return CIRCULAR_REFERENCE
    visited[id(obj)] = obj

    if _is_sequence(obj):
        return [_serialize(item, visited, registry) for item in obj]

    shape = registry.find(obj, leaf=False)
    if shape is not None:
        return _serialize(shape.reduce(obj), visited, registry)

    if isinstance(obj, Mapping):
        items = obj.items()
    else:
        items = own_attributes(obj).items()

    return {
        key if isinstance(key, str) else str(key): _serialize(value, visited, registry)
        for key, value in items
    }
