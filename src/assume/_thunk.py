from __future__ import annotations

import functools
import inspect
import sys
from collections.abc import Callable
from types import CodeType
from typing import Any, NamedTuple

from typing_extensions import override


class SourceLocation(NamedTuple):
    filename: str
    lineno: int


def _code_or_none(fn: Callable[..., Any]) -> CodeType | None:
    # Peel off decorators and partials to reach the function that owns the code.
    while True:
        fn = inspect.unwrap(fn)
        if isinstance(fn, functools.partial):
            fn = fn.func
            continue
        break

    code = getattr(fn, "__code__", None)
    if code is None and not inspect.isroutine(fn) and not inspect.isclass(fn):
        # Callable instance: use its ``__call__``.
        code = getattr(type(fn).__call__, "__code__", None)
    return code if isinstance(code, CodeType) else None


class Thunk:
    """
    A deferred, zero-argument condition paired with the place it was written.

    Calling the thunk evaluates the wrapped condition. The source location is
    taken from the condition's code object when it has one (lambdas, functions,
    methods); otherwise it falls back to the frame that created the thunk.

    For a decorated ``def`` the code object starts at the first decorator, so
    the reported line (and the source quoted by `default_handler`) is the
    decorator line rather than the ``def`` line.
    """

    __slots__ = ("fn", "filename", "lineno")

    def __init__(self, fn: Callable[[], Any], filename: str, lineno: int):
        self.fn = fn
        self.filename = filename
        self.lineno = lineno

    @classmethod
    def wrap(cls, fn: Callable[[], Any], *, stacklevel: int = 1) -> Thunk:
        """Wrap `fn`, resolving its source location.

        Args:
            fn: The zero-argument condition.
            stacklevel: Which caller frame to use when `fn` carries no code
                object. ``1`` is the caller of `wrap`.
        """
        if (code := _code_or_none(fn)) is not None:
            return cls(fn, code.co_filename, code.co_firstlineno)

        frame = sys._getframe(stacklevel)
        return cls(fn, frame.f_code.co_filename, frame.f_lineno)

    @property
    def source_location(self) -> SourceLocation:
        return SourceLocation(self.filename, self.lineno)

    def __call__(self) -> Any:
        return self.fn()

    @override
    def __repr__(self) -> str:
        return f"<Thunk {self.fn!r} at {self.filename}:{self.lineno}>"
