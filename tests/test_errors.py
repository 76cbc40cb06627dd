"""
Tests for exception detail extraction
"""

import errno
import os

from logentry.config import EntryConfig
from logentry.serializers import extract_error_details, find_location, format_trace, split_frames

HERE = os.path.dirname(os.path.abspath(__file__))


class RemoteError(Exception):
    """Exception relayed from another runtime, carrying its trace text"""

    def __init__(self, message, stack):
        super().__init__(message)
        self.stack = stack


class PaymentError(Exception):
    def __init__(self, message, order_id, code):
        super().__init__(message)
        self.message = message
        self.order_id = order_id
        self.code = code


class ExitError(Exception):
    code = 0


class UnprintableError(Exception):
    def __str__(self):
        raise RuntimeError("cannot print")


class BrokenStackError(Exception):
    @property
    def stack(self):
        raise RuntimeError("stack unavailable")


class BrokenCodeError(RemoteError):
    @property
    def code(self):
        raise LookupError("code unavailable")


def _fail():
    raise KeyError("missing")


def _raised(func):
    try:
        func()
    except Exception as e:
        return e
    raise AssertionError("expected an exception")


class TestForeignTraces:
    """Trace text carried by the exception"""

    def test_native_frame_skipped(self):
        error = RemoteError(
            "boom",
            "Error: boom\n"
            "    at JSON.parse (<anonymous>)\n"
            "    at handler (/srv/app/lib/api.js:42:13)",
        )
        data = {}
        extract_error_details(error, data, EntryConfig(root_path="/srv/app"))

        assert data["file"] == "lib/api.js"
        assert data["line"] == 42
        assert data["offset"] == 13
        assert data["stack"] == ["JSON.parse (<anonymous>)", "handler (lib/api.js:42:13)"]
        assert data["type"] == "RemoteError"

    def test_only_first_location_recorded(self):
        error = RemoteError(
            "boom",
            "Error: boom\n"
            "    at parse (/srv/app/parse.js:3:9)\n"
            "    at main (/srv/app/index.js:7:1)",
        )
        data = {}
        extract_error_details(error, data, EntryConfig(root_path="/srv/app/"))

        assert (data["file"], data["line"], data["offset"]) == ("parse.js", 3, 9)
        assert data["stack"] == ["parse (parse.js:3:9)", "main (index.js:7:1)"]

    def test_no_location_anywhere(self):
        error = RemoteError("x", "Error: x\n  at foo (native)\n  at bar (<anonymous>)")
        data = {}
        extract_error_details(error, data, EntryConfig(root_path="/srv/app"))

        assert "file" not in data
        assert "line" not in data
        assert "offset" not in data
        assert data["stack"] == ["foo (native)", "bar (<anonymous>)"]
        assert data["type"] == "RemoteError"

    def test_header_only_trace(self):
        data = {}
        extract_error_details(RemoteError("x", "Error: x"), data)
        assert "file" not in data
        assert data["stack"] == []
        assert data["type"] == "RemoteError"

    def test_frames_outside_root_kept_absolute(self):
        error = RemoteError("x", "Error: x\n    at run (/opt/lib/runner.js:1:2)")
        data = {}
        extract_error_details(error, data, EntryConfig(root_path="/srv/app"))
        assert data["file"] == "/opt/lib/runner.js"

    def test_path_with_spaces(self):
        error = RemoteError("x", "Error: x\n    at run (/home/John Doe/app/x.js:4:2)")
        data = {}
        extract_error_details(error, data, EntryConfig(root_path="/srv/app"))
        assert (data["file"], data["line"], data["offset"]) == ("/home/John Doe/app/x.js", 4, 2)


class TestPythonTracebacks:
    """Tracebacks of raised Python exceptions"""

    def test_innermost_frame_located(self):
        error = _raised(_fail)
        data = {}
        extract_error_details(error, data, EntryConfig(root_path=HERE))

        assert data["type"] == "KeyError"
        assert data["file"] == "test_errors.py"
        assert data["line"] == _fail.__code__.co_firstlineno + 1
        assert isinstance(data["offset"], int)
        assert len(data["stack"]) == 2
        assert data["stack"][0].startswith("_fail (test_errors.py:")
        assert data["stack"][1].startswith("_raised (test_errors.py:")

    def test_synthetic_frame_skipped(self):
        def run_generated():
            exec(compile("raise RuntimeError('generated')", "<generated>", "exec"))

        error = _raised(run_generated)
        data = {}
        extract_error_details(error, data, EntryConfig(root_path=HERE))

        assert data["stack"][0] == "<module> (<generated>)"
        assert data["file"] == "test_errors.py"
        assert data["stack"][1].startswith("run_generated (test_errors.py:")

    def test_never_raised_exception(self):
        data = {}
        extract_error_details(ValueError("not raised"), data)
        assert data == {"type": "ValueError", "stack": []}

    def test_format_trace(self):
        trace = format_trace(_raised(_fail))
        lines = trace.split("\n")
        assert lines[0] == "KeyError: 'missing'"
        assert lines[1].startswith("    at _fail (")
        assert split_frames(trace)[0].startswith("_fail (")


class TestErrorFields:
    """Attributes, codes and failure handling"""

    def test_custom_attributes_copied_and_message_removed(self):
        data = {"message": "earlier", "kept": True}
        extract_error_details(PaymentError("declined", 17, "E_DECLINED"), data)

        assert "message" not in data
        assert data["kept"] is True
        assert data["order_id"] == 17
        assert data["code"] == "E_DECLINED"
        assert data["type"] == "PaymentError"

    def test_errno_used_as_code(self):
        data = {}
        extract_error_details(FileNotFoundError(errno.ENOENT, "missing"), data)
        assert data["code"] == errno.ENOENT

    def test_falsy_code_not_recorded(self):
        data = {}
        extract_error_details(ExitError("done"), data)
        assert "code" not in data

    def test_attribute_values_serialized(self):
        error = ValueError("x")
        error.payload = b"\x00\x01"
        error.related = error
        data = {}
        extract_error_details(error, data)
        assert data["payload"] == "[Buffer (2 bytes)]"
        assert isinstance(data["related"], dict)

    def test_unprintable_exception(self):
        data = {}
        extract_error_details(_raised(_raise_unprintable), data)
        assert data["type"] == "UnprintableError"

    def test_broken_stack_does_not_raise(self):
        data = {}
        extract_error_details(BrokenStackError("x"), data)
        assert data == {"type": "BrokenStackError", "stack": []}

    def test_broken_code_keeps_other_details(self):
        error = BrokenCodeError("x", "Error: x\n    at run (/srv/app/run.js:1:2)")
        error.order_id = 9
        data = {}
        extract_error_details(error, data, EntryConfig(root_path="/srv/app"))

        assert "code" not in data
        assert data["order_id"] == 9
        assert data["file"] == "run.js"
        assert data["type"] == "BrokenCodeError"
        assert data["stack"] == ["run (run.js:1:2)"]


def _raise_unprintable():
    raise UnprintableError()


class TestLocationParsing:
    def test_find_location(self):
        assert find_location(["a (b.py:1:2)"]) == {"file": "b.py", "line": 1, "offset": 2}
        assert find_location(["native"]) is None
        assert find_location([]) is None

    def test_windows_path(self):
        location = find_location([r"main (C:\app\main.py:10:4)"])
        assert location == {"file": r"C:\app\main.py", "line": 10, "offset": 4}

    def test_split_frames(self):
        assert split_frames(None) == []
        assert split_frames("") == []
        assert split_frames("Error: x") == []
        assert split_frames("Error: x\n   at a\n\tat   b") == ["a", "b"]
