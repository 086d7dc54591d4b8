from __future__ import annotations

import logging
from pathlib import Path

import wadler_lindig as wl

from ._handler import Handler
from ._thunk import Thunk

log = logging.getLogger(__name__)

PACKAGE_LOGGER: str = "assume"


def setup_logging(
    *,
    rich: bool = False,
    rich_tracebacks: bool = False,
    log_level: int | str | None = logging.INFO,
    assume_log_level: int | str | None = None,
    log_save_dir: Path | None = None,
):
    """
    Configure Python logging for an application that uses assumptions.

    Args:
        rich: Log through `rich.logging.RichHandler` if `rich` is installed.
        rich_tracebacks: Render tracebacks (e.g. of `AssumptionFailed`) with rich.
        log_level: Root log level.
        assume_log_level: Level for the ``assume`` loggers (gate changes and
            handler replacement are logged at DEBUG). Inherits the root level
            if not given.
        log_save_dir: If given, also write to ``logging.log`` in this directory.
    """
    notices: list[str] = []
    log_handlers: list[logging.Handler] = []
    if log_save_dir:
        log_file = log_save_dir / "logging.log"
        log_file.touch(exist_ok=True)
        log_handlers.append(logging.FileHandler(log_file))

    if rich:
        try:
            from rich.logging import RichHandler  # type: ignore

            log_handlers.append(RichHandler(rich_tracebacks=rich_tracebacks))
        except ImportError:
            notices.append(
                "Failed to import rich. Falling back to default Python logging."
            )

    # Nothing may be logged before this point: the first record on an
    # unconfigured root logger installs a default handler and turns
    # `basicConfig` into a no-op.
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=log_handlers or None,
    )
    if assume_log_level is not None:
        logging.getLogger(PACKAGE_LOGGER).setLevel(assume_log_level)

    for notice in notices:
        log.info(notice)
    log.info(
        "Logging initialized. "
        f"Rich: {rich}, Log level: {log_level}, "
        f"Assume log level: {assume_log_level}, Log save dir: {log_save_dir}"
    )


init_python_logging = setup_logging


def log_handler(
    level: int = logging.WARNING,
    logger: logging.Logger | None = None,
) -> Handler:
    """
    Return an assumption handler that logs failures instead of raising.

    Examples:
        assume.set_handler(log_handler(logging.ERROR))
    """
    target = logger if logger is not None else log

    def handler(result: object, thunk: Thunk) -> None:
        filename, lineno = thunk.source_location
        target.log(
            level,
            f"Assumption failed at {filename}:{lineno}, result was: {wl.pformat(result)}",
        )

    return handler
