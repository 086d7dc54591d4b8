from __future__ import annotations

import inspect
import linecache
from collections.abc import Callable
from typing import Any, Final, NoReturn, TypeAlias

import wadler_lindig as wl

from ._thunk import Thunk
from .errors import AssumptionFailed, InvalidHandler

Handler: TypeAlias = Callable[[Any, Thunk], object]

SOURCE_UNAVAILABLE: Final = "<unable to open source code file>"


def _source_line(filename: str, lineno: int) -> str:
    # ``linecache`` swallows read errors and returns "" for anything it
    # can't resolve (missing file, bad encoding, ``<stdin>``, ...).
    linecache.checkcache(filename)
    line = linecache.getline(filename, lineno)
    if not line:
        return SOURCE_UNAVAILABLE
    return line.rstrip("\r\n")


def _make_error_str(filename: str, lineno: int, source: str, result: Any) -> str:
    error_components: list[str] = []
    error_components.append(f"in {filename}")
    error_components.append(f"source code (line {lineno}):")
    error_components.append(source)
    error_components.append(f"result was: {wl.pformat(result)}")
    return "\n" + "\n".join(error_components)


def default_handler(result: Any, thunk: Thunk) -> NoReturn:
    """
    Raise `AssumptionFailed` describing where the failing condition was written.

    Args:
        result: The falsy value the condition produced.
        thunk: The condition, carrying its source location.
    """
    __tracebackhide__ = True

    filename, lineno = thunk.source_location
    source = _source_line(filename, lineno)
    raise AssumptionFailed(
        _make_error_str(filename, lineno, source, result),
        filename=filename,
        lineno=lineno,
        source=source,
        result=result,
    )


def validate_handler(value: Any) -> Handler:
    """Return `value` if it can be called as ``value(result, thunk)``, else raise `InvalidHandler`."""
    if not callable(value):
        raise InvalidHandler(value)

    try:
        signature = inspect.signature(value)
    except (TypeError, ValueError):
        # No introspectable signature (some builtins): callable is all we can check.
        return value

    try:
        signature.bind(None, None)
    except TypeError as e:
        raise InvalidHandler(
            value, f"cannot be called as handler(result, thunk): {e}"
        ) from None

    return value
