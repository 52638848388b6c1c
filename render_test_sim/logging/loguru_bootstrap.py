from __future__ import annotations

import inspect
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional

from loguru import logger as _logger

from ..core.constants import PACKAGE_NAME

# {extra[test_name]} is filled by log_context(); sinks default it to "-"
LOG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[test_name]}</cyan> | {name}:{function}:{line} - {message}"
)


class InterceptHandler(logging.Handler):
    """Forward stdlib records from the package loggers to loguru."""

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover - thin wrapper
        try:
            level: Any = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        # skip this handler and logging's own frames so loguru reports the caller
        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1
        _logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _package_records_only(record: Any) -> bool:
    name = record["name"] or ""
    return name == PACKAGE_NAME or name.startswith(f"{PACKAGE_NAME}.")


def setup_logging(
    *,
    level: str = "INFO",
    console: bool = True,
    file_path: Optional[str | Path] = None,
    rotation: Optional[str | int] = None,
    retention: Optional[str | int] = None,
    serialize: bool = False,
    package_only: bool = True,
) -> None:
    """Route test-run logs through loguru.

    - Replaces existing loguru sinks with a stderr sink and an optional file sink
    - Bridges the ``render_test_sim`` stdlib logger tree into loguru
    - ``package_only`` drops records from other libraries' loggers
    """
    _logger.remove()
    _logger.configure(extra={"test_name": "-", "seed": None})
    lvl = level.upper()
    sink_filter = _package_records_only if package_only else None

    if console:
        _logger.add(
            sys.stderr,
            level=lvl,
            format=LOG_FORMAT,
            filter=sink_filter,
            backtrace=False,
            diagnose=False,
            serialize=serialize,
        )
    if file_path:
        _logger.add(
            str(file_path),
            level=lvl,
            format=LOG_FORMAT,
            filter=sink_filter,
            rotation=rotation,
            retention=retention,
            backtrace=False,
            diagnose=False,
            serialize=serialize,
        )
    _bridge_package_loggers(lvl)


def _bridge_package_loggers(level: str) -> None:
    package_logger = logging.getLogger(PACKAGE_NAME)
    package_logger.handlers = [InterceptHandler()]
    package_logger.setLevel(getattr(logging, level, logging.INFO))
    package_logger.propagate = False
    prefix = f"{PACKAGE_NAME}."
    for name in list(logging.Logger.manager.loggerDict):
        if name.startswith(prefix):
            child = logging.getLogger(name)
            child.handlers = []
            child.propagate = True


@contextmanager
def log_context(test_name: str, seed: Optional[int] = None) -> Iterator[None]:
    """Tag every loguru record emitted inside the block with the test name and seed."""
    with _logger.contextualize(test_name=test_name, seed=seed):
        yield


def get_logger():  # pragma: no cover - trivial accessor
    """Return the configured loguru logger instance."""
    return _logger
