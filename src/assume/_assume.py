from __future__ import annotations

from collections.abc import Callable
from typing import Any

from ._config import AssumeConfig, config as default_config
from ._thunk import Thunk
from .errors import ArgumentError


def assume(
    condition: Callable[[], Any] | None = None,
    /,
    *,
    config: AssumeConfig | None = None,
) -> None:
    """Runtime assumption, checked only while assumptions are enabled.

    The condition is a zero-argument callable. It is never called while the
    gate is off. When the gate is on and the condition returns a falsy value,
    the active handler is called with ``(result, thunk)``; the default handler
    raises `AssumptionFailed`.

    Args:
        condition: Zero-argument callable returning the value to check.
        config: Config to use instead of the process-wide default.

    Examples:
        assume(lambda: batch.shape[0] > 0)
    """
    __tracebackhide__ = True

    if condition is None:
        raise ArgumentError("assumptions require a condition")
    if not callable(condition):
        raise ArgumentError(
            f"assumptions require a callable condition, but got: {condition!r}"
        )

    cfg = config if config is not None else default_config()
    if not cfg.is_enabled():
        return None

    thunk = Thunk.wrap(condition, stacklevel=2)
    result = thunk()
    if not result:
        cfg.get_handler()(result, thunk)

    return None


assumption = assume
