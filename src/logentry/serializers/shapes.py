"""
Built-in value shapes recognized by the serializers

Recognition is structural: request and response objects from werkzeug/Flask,
Django, Starlette, aiohttp, requests and http.server are matched by the
attributes they expose rather than by class.
"""

import inspect
import os
import re
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional
from uuid import UUID

BUFFER_TYPES = (bytes, bytearray, memoryview)

# Inline flag letters in the order Python itself prints them
_REGEX_FLAGS = (
    (re.ASCII, "a"),
    (re.IGNORECASE, "i"),
    (re.LOCALE, "L"),
    (re.MULTILINE, "m"),
    (re.DOTALL, "s"),
    (re.VERBOSE, "x"),
)


def to_primitive(value: Any) -> Any:
    """Flatten a value to its canonical primitive form, one level only"""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, timedelta):
        return value.total_seconds()
    if isinstance(value, (Decimal, UUID)):
        return str(value)
    if isinstance(value, os.PathLike):
        return os.fspath(value)
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and type(value) is not int:
        return int(value)
    if isinstance(value, float) and type(value) is not float:
        return float(value)
    if isinstance(value, str) and type(value) is not str:
        return str(value)
    return value


def safe_str(obj: Any) -> str:
    """str() that never raises"""
    try:
        return str(obj)
    except Exception as e:
        return f"<str failed: {str(e)[:50]}>"


def own_attributes(obj: Any) -> Dict[str, Any]:
    """Instance attributes of an object, excluding class attributes and dunders"""
    attributes: Dict[str, Any] = {}

    for cls in type(obj).__mro__:
        slots = getattr(cls, "__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name.startswith("__") or name in attributes:
                continue
            try:
                attributes[name] = getattr(obj, name)
            except AttributeError:
                continue

    instance_dict = getattr(obj, "__dict__", None)
    if isinstance(instance_dict, dict):
        for key, value in instance_dict.items():
            if not (isinstance(key, str) and key.startswith("__")):
                attributes[key] = value

    return attributes


# Buffers


def is_buffer(obj: Any) -> bool:
    return isinstance(obj, BUFFER_TYPES)


def reduce_buffer(obj: Any) -> str:
    size = obj.nbytes if isinstance(obj, memoryview) else len(obj)
    return f"[Buffer ({size} bytes)]"


# Regular expressions


def is_regex(obj: Any) -> bool:
    return isinstance(obj, re.Pattern)


def regex_literal(pattern: "re.Pattern") -> str:
    """Literal form of a compiled pattern, e.g. /ab+c/i"""
    source = pattern.pattern
    if isinstance(source, bytes):
        source = source.decode("utf-8", "backslashreplace")

    flags = "".join(letter for flag, letter in _REGEX_FLAGS if pattern.flags & flag)
    return f"/{source}/{flags}"


# Functions, classes and modules


def is_routine(obj: Any) -> bool:
    return inspect.isroutine(obj) or inspect.isclass(obj) or inspect.ismodule(obj)


def reduce_routine(obj: Any) -> str:
    if inspect.ismodule(obj):
        kind = "Module"
    elif inspect.isclass(obj):
        kind = "Class"
    else:
        kind = "Function"

    name = getattr(obj, "__qualname__", None) or getattr(obj, "__name__", None)
    return f"[{kind}: {name or 'anonymous'}]"


# HTTP requests


def _read(obj: Any, name: str) -> Any:
    try:
        return getattr(obj, name, None)
    except Exception:
        return None


def _first(obj: Any, *names: str) -> Any:
    for name in names:
        value = _read(obj, name)
        if value is not None:
            return value
    return None


def _environ(obj: Any) -> Dict[str, Any]:
    """WSGI environ (werkzeug), META (Django) or ASGI scope (Starlette)"""
    for name in ("environ", "META", "scope"):
        value = _read(obj, name)
        if isinstance(value, dict):
            return value
    return {}


def is_request_like(obj: Any) -> bool:
    method = _first(obj, "method", "command")
    return isinstance(method, str) and _read(obj, "headers") is not None


def _http_version(obj: Any) -> Optional[str]:
    version = _first(obj, "http_version", "request_version", "version")
    if version is None:
        environ = _environ(obj)
        version = environ.get("SERVER_PROTOCOL") or environ.get("http_version")

    if isinstance(version, tuple) and len(version) >= 2:
        return f"{version[0]}.{version[1]}"
    if isinstance(version, str):
        return version[5:] if version.upper().startswith("HTTP/") else version
    return None


def _url(obj: Any) -> Optional[str]:
    url = _read(obj, "url")
    if url is not None and not callable(url):
        return str(url)

    full_path = _read(obj, "get_full_path")
    if callable(full_path):
        return full_path()

    path = _read(obj, "path")
    return str(path) if path is not None else None


def _headers(obj: Any) -> Any:
    headers = _read(obj, "headers")
    if hasattr(headers, "items"):
        return {str(key): value for key, value in headers.items()}
    if isinstance(headers, (list, tuple)):
        return {str(key): value for key, value in headers}
    return headers


def _host(address: Any) -> Optional[str]:
    """Host part of a peer address, tuple or Starlette Address"""
    if address is None:
        return None
    host = _read(address, "host")
    if host is not None:
        return host
    if isinstance(address, (tuple, list)) and address:
        return address[0]
    return str(address)


def _remote_address(obj: Any) -> Optional[str]:
    remote = _first(obj, "remote_addr", "remote")
    if isinstance(remote, str):
        return remote

    address = _host(_first(obj, "client_address", "client"))
    if address is not None:
        return address

    for name in ("connection", "transport"):
        carrier = _read(obj, name)
        if carrier is None:
            continue
        remote = _first(carrier, "remote_address", "remote_addr", "remoteAddress")
        if remote is not None:
            return _host(remote)
        get_extra_info = _read(carrier, "get_extra_info")
        if callable(get_extra_info):
            return _host(get_extra_info("peername"))

    environ = _environ(obj)
    if environ.get("REMOTE_ADDR"):
        return environ["REMOTE_ADDR"]
    return _host(environ.get("client"))


def reduce_request(obj: Any) -> Dict[str, Any]:
    """Reduce an inbound request to a fixed field subset"""
    return {
        "http_version": _http_version(obj),
        "method": _first(obj, "method", "command"),
        "url": _url(obj),
        "headers": _headers(obj),
        "remote_address": _remote_address(obj),
    }


# HTTP responses


def _status_code(obj: Any) -> Optional[int]:
    for name in ("status_code", "status"):
        code = _read(obj, name)
        if isinstance(code, int) and not isinstance(code, bool):
            return code
    return None


def is_response_like(obj: Any) -> bool:
    return _status_code(obj) is not None and not is_request_like(obj)


def reduce_response(obj: Any) -> Dict[str, Any]:
    """Reduce an outbound response to its status code"""
    return {"status": _status_code(obj)}
