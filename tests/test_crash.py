import datetime as dt

import pytest

from neogrid.crash import (
    BACKTRACE_ENV,
    BACKTRACE_NOTE,
    REQUEST_MESSAGE,
    UNPARSABLE_PAYLOAD,
    ExplainedError,
    exit_code_from_int,
    format_crash_message,
    log_panic_to_file,
    panic_log_message,
    panic_message,
    stderr_message,
    unwrap_or_explained,
)


def test_unwrap_returns_plain_value():
    assert unwrap_or_explained([1, 2], "loading") == [1, 2]


def test_unwrap_raises_explained_error_with_cause():
    original = ValueError("bad value")
    with pytest.raises(ExplainedError) as info:
        unwrap_or_explained(original, "Could not load config")
    assert str(info.value) == "Could not load config: bad value"
    assert info.value.__cause__ is original


@pytest.mark.parametrize("code", [0, 1, 42, 255])
def test_exit_code_in_range_unchanged(code):
    assert exit_code_from_int(code) == code


def test_exit_code_wraps_negative():
    assert exit_code_from_int(-1) == 255


@pytest.mark.parametrize("code", [-300, -1, 7, 1000])
def test_exit_code_wraps_modulo_256(code):
    result = exit_code_from_int(code)
    assert 0 <= result <= 255
    assert exit_code_from_int(code + 256) == result


def test_format_crash_message_contains_error_and_cause():
    try:
        try:
            raise OSError("disk missing")
        except OSError as inner:
            raise RuntimeError("startup failed") from inner
    except RuntimeError as err:
        msg = format_crash_message(err)
    assert msg.startswith("Neogrid just crashed :(")
    assert "startup failed" in msg
    assert "disk missing" in msg
    assert msg.index("startup failed") < msg.index("disk missing")


def test_panic_message_with_string_payload():
    msg = panic_message("boom", "src/app.py", 12, 4)
    assert "'boom'" in msg
    assert "File: src/app.py" in msg
    assert "Line: 12" in msg
    assert "Column: 4" in msg


def test_panic_message_with_unparsable_payload():
    assert panic_message(object(), "f.py", 1, 1) == UNPARSABLE_PAYLOAD


def test_stderr_message_release():
    assert stderr_message("oops", "trace", debug=False) == f"oops\n{REQUEST_MESSAGE}"


def test_stderr_message_debug_without_backtrace(monkeypatch):
    monkeypatch.delenv(BACKTRACE_ENV, raising=False)
    msg = stderr_message("oops", "trace", debug=True)
    assert msg == f"oops\n{REQUEST_MESSAGE}\n{BACKTRACE_NOTE}"


@pytest.mark.parametrize("value", ["1", "full"])
def test_stderr_message_debug_with_backtrace(monkeypatch, value):
    monkeypatch.setenv(BACKTRACE_ENV, value)
    msg = stderr_message("oops", "frame 0", debug=True)
    assert msg.endswith("\nframe 0")
    assert BACKTRACE_NOTE not in msg


def test_panic_log_message_format():
    stamp = dt.datetime(2024, 3, 5, 7, 8, 9)
    msg = panic_log_message("boom", stamp, "frames")
    assert msg == "2024-03-05 07:08:09 - boom\nframes\n"


def test_log_panic_to_file_appends(tmp_path, capsys):
    path = tmp_path / "backtraces.log"
    assert log_panic_to_file("first\n", path) is True
    assert log_panic_to_file("second\n", path) is True
    assert path.read_text(encoding="utf-8") == "first\nsecond\n"
    assert "Backtrace saved to" in capsys.readouterr().err


def test_log_panic_to_file_failure(tmp_path, capsys):
    assert log_panic_to_file("entry", tmp_path) is False
    assert "Could not create backtraces file" in capsys.readouterr().err