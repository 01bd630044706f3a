"""Crash reporting: explained failures, exit codes and panic logs."""

from __future__ import annotations

import datetime as _dt
import logging
import os
import sys
from pathlib import Path
from typing import TypeVar

log = logging.getLogger(__name__)

T = TypeVar("T")

BACKTRACES_FILE = "neogrid_backtraces.log"
REQUEST_MESSAGE = "This is a bug and we would love for it to be reported to the issue tracker"
UNPARSABLE_PAYLOAD = "Could not parse panic payload to a string. This is a bug."
BACKTRACE_ENV = "NEOGRID_BACKTRACE"
BACKTRACE_NOTE = (
    f"note: run with `{BACKTRACE_ENV}=1` environment variable to display a backtrace"
)
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


class ExplainedError(RuntimeError):
    """A fatal failure carrying a human readable explanation."""


def unwrap_or_explained(result: T | BaseException, explanation: str) -> T:
    """Return ``result``, or raise ExplainedError if it is an exception."""
    if isinstance(result, BaseException):
        message = f"{explanation}: {result}"
        log.error("%s", message)
        raise ExplainedError(message) from result
    return result


def exit_code_from_int(code: int) -> int:
    """Wrap an integer into the 0..255 range of process exit codes."""
    return code & 0xFF


def _error_chain(error: BaseException) -> list[str]:
    chain = []
    seen = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        chain.append(str(current) or type(current).__name__)
        current = current.__cause__ or current.__context__
    return chain


def format_crash_message(error: BaseException) -> str:
    """Build and log the message shown when startup fails."""
    head, *causes = _error_chain(error)
    details = head
    if causes:
        lines = "\n".join(f"    {i}: {cause}" for i, cause in enumerate(causes))
        details = f"{head}\n\nCaused by:\n{lines}"
    msg = (
        "Neogrid just crashed :(\n"
        "This is the error that caused the crash. In case you don't know what to do "
        "with this, please feel free to report it on the issue tracker!\n"
        "\n"
        f"{details}"
    )
    log.error("%s", msg)
    return msg


def panic_message(payload: object, file: str, line: int, column: int) -> str:
    """Describe a crash payload and where it happened."""
    if isinstance(payload, bytes):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError:
            return UNPARSABLE_PAYLOAD
    if not isinstance(payload, str):
        return UNPARSABLE_PAYLOAD
    return (
        f"Neogrid panicked with the message '{payload}'. "
        f"(File: {file}; Line: {line}, Column: {column})"
    )


def _backtrace_requested() -> bool:
    return os.environ.get(BACKTRACE_ENV) in ("full", "1")


def stderr_message(panic_text: str, backtrace: str, debug: bool = False) -> str:
    """Message printed to stderr on a crash; debug builds add backtrace info."""
    if not debug:
        return f"{panic_text}\n{REQUEST_MESSAGE}"
    backtrace_msg = backtrace if _backtrace_requested() else BACKTRACE_NOTE
    return f"{panic_text}\n{REQUEST_MESSAGE}\n{backtrace_msg}"


def panic_log_message(
    panic_text: str,
    timestamp: _dt.datetime | None = None,
    backtrace: str = "",
) -> str:
    """Timestamped entry for the backtraces file."""
    if timestamp is None:
        timestamp = _dt.datetime.now(_dt.timezone.utc)
    stamp = timestamp.strftime(TIMESTAMP_FORMAT)
    return f"{stamp} - {panic_text}\n{backtrace}\n"


def log_panic_to_file(log_message: str, path: str | os.PathLike = BACKTRACES_FILE) -> bool:
    """Append ``log_message`` to ``path``; report the outcome on stderr."""
    target = Path(path)
    try:
        handle = target.open("a", encoding="utf-8")
    except OSError as err:
        print(f"Could not create backtraces file. ({err})", file=sys.stderr)
        return False
    with handle:
        try:
            handle.write(log_message)
        except OSError as err:
            print(f"Failed writing panic to {target}: {err}", file=sys.stderr)
            return False
    print(f"\nBacktrace saved to {target}!", file=sys.stderr)
    return True