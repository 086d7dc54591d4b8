from __future__ import annotations

from typing import Any


class AssumeError(Exception):
    """Base class for all errors raised by ``assume``."""


class ArgumentError(AssumeError, TypeError):
    """Raised when ``assume`` is called without a (callable) condition."""


class InvalidHandler(AssumeError, TypeError):
    """Raised when a value that can't be called as ``handler(result, thunk)`` is registered."""

    def __init__(self, handler: Any, reason: str | None = None):
        self.handler = handler
        if reason is None:
            message = f"Assumption handler must be callable, but got: {handler!r}"
        else:
            message = f"Assumption handler {handler!r} {reason}"
        super().__init__(message)


class AssumptionFailed(AssumeError, AssertionError):
    """Raised by the default handler when an enabled assumption does not hold."""

    def __init__(
        self,
        message: str,
        *,
        filename: str,
        lineno: int,
        source: str,
        result: Any,
    ):
        super().__init__(message)
        self.filename = filename
        self.lineno = lineno
        self.source = source
        self.result = result
