from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any, Final

from typing_extensions import Self
from typing_extensions import override as override_

from ._handler import Handler, default_handler, validate_handler

log = logging.getLogger(__name__)

ENABLED_ENV_KEY: Final = "ASSUME_ENABLED"

_SENTINEL: Final = object()
_TRUTHY: Final = frozenset({"1", "true", "yes", "on"})
_FALSY: Final = frozenset({"0", "false", "no", "off"})


def _parse_env_bool(value: str) -> bool | None:
    """Parse environment variable as boolean, or None if it isn't one."""
    value = value.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    return None


class AssumeConfig:
    """
    The gate and handler registry behind `assume`.

    The gate decides whether conditions are evaluated at all; the registry
    holds at most one custom handler, falling back to `default_handler`.
    A process-wide default instance is available through `config()`, but
    any number of isolated instances can be created and passed to `assume`.
    """

    __slots__ = ("_enabled", "_handler")

    def __init__(self, enabled: bool = False, handler: Handler | None = None):
        self._enabled = bool(enabled)
        self._handler: Handler | None = None
        if handler is not None:
            self.set_handler(handler)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Self:
        """
        Create a config from environment variables.

        Supports ``ASSUME_ENABLED=1`` (or true/yes/on) and
        ``ASSUME_ENABLED=0`` (or false/no/off). Anything else is ignored.
        """
        environ = os.environ if environ is None else environ
        self = cls()

        if (raw := environ.get(ENABLED_ENV_KEY)) is None:
            return self

        if (flag := _parse_env_bool(raw)) is None:
            log.warning(
                f"Ignoring unrecognized value {raw!r} for environment variable '{ENABLED_ENV_KEY}'."
            )
            return self

        log.info(f"Assumptions {'enabled' if flag else 'disabled'} by '{ENABLED_ENV_KEY}'.")
        self._enabled = flag
        return self

    # Gate
    def set_enabled(self, flag: Any) -> None:
        """Turn assumption checking on or off."""
        self._enabled = bool(flag)
        log.debug(f"Assumptions {'enabled' if self._enabled else 'disabled'}.")

    def enable(self) -> None:
        self.set_enabled(True)

    def disable(self) -> None:
        self.set_enabled(False)

    def is_enabled(self) -> bool:
        return self._enabled

    @property
    def enabled(self) -> bool:
        return self._enabled

    # Handler registry
    def set_handler(self, handler: Any) -> None:
        """
        Replace the handler called for failing assumptions.

        Raises:
            InvalidHandler: If `handler` can't be called as ``handler(result, thunk)``.
                The current handler is left in place.
        """
        self._handler = validate_handler(handler)
        log.debug(f"Assumption handler set to {handler!r}.")

    def get_handler(self) -> Handler:
        """Return the registered handler, or `default_handler` if none is set."""
        return self._handler if self._handler is not None else default_handler

    def reset_handler(self) -> None:
        self._handler = None

    def reset(self) -> None:
        """Disable the gate and go back to the default handler."""
        self._enabled = False
        self._handler = None

    @contextmanager
    def override(
        self,
        enabled: bool | object = _SENTINEL,
        handler: Handler | None | object = _SENTINEL,
    ) -> Iterator[Self]:
        """
        Temporarily change the gate and/or handler.

        Pass ``handler=None`` to use the default handler within the block.
        The previous values are restored on exit. This mutates the shared
        config, so the change is visible to every thread while it lasts.
        """
        previous = (self._enabled, self._handler)
        try:
            if handler is None:
                self._handler = None
            elif handler is not _SENTINEL:
                self.set_handler(handler)
            if enabled is not _SENTINEL:
                self.set_enabled(enabled)
            yield self
        finally:
            self._enabled, self._handler = previous

    @override_
    def __repr__(self) -> str:
        return f"<AssumeConfig enabled={self._enabled} handler={self.get_handler()!r}>"


_default_config: Final = AssumeConfig.from_env()


# Convenience layer
def config() -> AssumeConfig:
    """Return the process-wide default config."""
    return _default_config


def set_enabled(flag: Any) -> None:
    _default_config.set_enabled(flag)


def enable() -> None:
    _default_config.enable()


def disable() -> None:
    _default_config.disable()


def is_enabled() -> bool:
    return _default_config.is_enabled()


def set_handler(handler: Any) -> None:
    _default_config.set_handler(handler)


def get_handler() -> Handler:
    return _default_config.get_handler()


def reset_handler() -> None:
    _default_config.reset_handler()


def reset() -> None:
    _default_config.reset()


@contextmanager
def override(
    enabled: bool | object = _SENTINEL,
    handler: Handler | None | object = _SENTINEL,
) -> Iterator[AssumeConfig]:
    """Temporarily change the default config's gate and/or handler."""
    with _default_config.override(enabled=enabled, handler=handler) as cfg:
        yield cfg
