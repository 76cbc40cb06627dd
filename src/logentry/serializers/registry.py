"""
Shape registry for type-specific reductions
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

logger = logging.getLogger(__name__)

Matcher = Callable[[Any], bool]
Reducer = Callable[[Any], Any]


@dataclass(frozen=True)
class Shape:
    """A recognized value shape and the reducer applied to it"""

    name: str
    matcher: Matcher
    reducer: Reducer
    leaf: bool = False  # Leaf shapes reduce to scalars and hold no references

    def matches(self, obj: Any) -> bool:
        try:
            return bool(self.matcher(obj))
        except Exception:
            return False

    def reduce(self, obj: Any) -> Any:
        try:
            return self.reducer(obj)
        except Exception as e:
            logger.debug("Reducer %r failed for %s: %s", self.name, type(obj).__name__, e)
            return {
                "__serialization_error__": str(e),
                "__type__": type(obj).__name__,
                "__repr__": _safe_repr(obj),
            }


def _safe_repr(obj: Any) -> str:
    try:
        return repr(obj)[:200]
    except Exception as e:
        return f"<repr failed: {str(e)[:50]}>"


class ShapeRegistry:
    """Ordered registry of matcher+reducer pairs

    Shapes are tried in order; custom registrations go in front of the
    built-in ones so they can override them.
    """

    def __init__(self, defaults: bool = True):
        self._shapes: List[Shape] = []
        if defaults:
            self._setup_default_shapes()

    def _setup_default_shapes(self) -> None:
        """Setup built-in shapes in priority order"""
        from . import shapes

        self._shapes.extend(
            [
                Shape("buffer", shapes.is_buffer, shapes.reduce_buffer, leaf=True),
                Shape("regex", shapes.is_regex, shapes.regex_literal, leaf=True),
                Shape("routine", shapes.is_routine, shapes.reduce_routine, leaf=True),
                Shape("request", shapes.is_request_like, shapes.reduce_request),
                Shape("response", shapes.is_response_like, shapes.reduce_response),
            ]
        )

    def register(
        self, name: str, matcher: Matcher, reducer: Reducer, leaf: bool = False
    ) -> None:
        """Register a shape, replacing any shape with the same name"""
        if not callable(matcher) or not callable(reducer):
            raise TypeError("matcher and reducer must be callable")

        self.unregister(name)
        self._shapes.insert(0, Shape(name, matcher, reducer, leaf))

    def unregister(self, name: str) -> bool:
        """Remove a shape by name, returns whether one was removed"""
        before = len(self._shapes)
        self._shapes = [shape for shape in self._shapes if shape.name != name]
        return len(self._shapes) != before

    def find(self, obj: Any, leaf: Optional[bool] = None) -> Optional[Shape]:
        """Get the first shape matching an object

        Args:
            obj: Value to classify
            leaf: When given, only consider leaf (True) or container (False) shapes
        """
        for shape in self._shapes:
            if leaf is not None and shape.leaf != leaf:
                continue
            if shape.matches(obj):
                return shape
        return None

    def names(self) -> List[str]:
        return [shape.name for shape in self._shapes]


# Global registry instance
_global_registry = ShapeRegistry()


def get_registry() -> ShapeRegistry:
    return _global_registry


def register_shape(
    name: str, matcher: Matcher, reducer: Reducer, leaf: bool = False
) -> None:
    """
    Register a custom shape on the global registry

    Args:
        name: Unique shape name, re-registering a name replaces it
        matcher: Predicate recognizing the shape, exceptions count as no match
        reducer: Function returning the reduced form, which is serialized further
        leaf: True when the reducer always returns a scalar
    """
    _global_registry.register(name, matcher, reducer, leaf)


def unregister_shape(name: str) -> bool:
    """Remove a shape from the global registry"""
    return _global_registry.unregister(name)
