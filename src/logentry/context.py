import uuid
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Tuple

request_id: ContextVar[str] = ContextVar("request_id", default="")
context_tags: ContextVar[Tuple[Any, ...]] = ContextVar("context_tags", default=())


def get_request_id() -> str:
    """Get current request ID"""
    return request_id.get("")


def set_request_id(req_id: str) -> None:
    """Set request ID for current context"""
    request_id.set(req_id)


def get_context_tags() -> Tuple[Any, ...]:
    """Get context tags for current context, oldest first"""
    return context_tags.get(())


def set_context_tags(*tags: Any) -> None:
    """Replace context tags for current context"""
    context_tags.set(tuple(tags))


def push_context_tags(*tags: Any) -> None:
    """Append context tags for current context"""
    context_tags.set(get_context_tags() + tags)


@contextmanager
def request_context(*tags: Any) -> Generator[str, None, None]:
    """Context manager for request-scoped request ID and context tags"""
    req_id = str(uuid.uuid4())

    old_request_id = get_request_id()
    old_tags = get_context_tags()

    try:
        set_request_id(req_id)
        push_context_tags(*tags)

        yield req_id
    finally:
        set_request_id(old_request_id)
        set_context_tags(*old_tags)
