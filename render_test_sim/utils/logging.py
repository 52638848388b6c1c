"""
Component logger factory for render_test_sim.

Modules normally log through ``logging.getLogger(__name__)``. Long-lived objects
that want a per-component namespace (coordinators, drivers, trackers) use
:func:`get_component_logger`, which returns a cached stdlib logger under
``render_test_sim.<component>.<name>``. Handlers are never installed at import
time; call :func:`configure_logging_for_development` (or
``render_test_sim.logging.setup_logging``) from a test session to route output
through loguru.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Union

from ..core.constants import PACKAGE_NAME
from .exceptions import ValidationError

__all__ = [
    "ComponentType",
    "get_component_logger",
    "configure_logging_for_development",
]


class ComponentType(Enum):
    GENERATOR = "generator"
    GRAPHICS = "graphics"
    DRIVER = "driver"
    TRACKING = "tracking"
    ISOLATION = "isolation"
    UTILS = "utils"


_logger_cache: Dict[str, logging.Logger] = {}
_cache_lock = threading.Lock()


def get_component_logger(
    component_name: str,
    component_type: ComponentType = ComponentType.UTILS,
    logger_level: Optional[str] = None,
) -> logging.Logger:
    """Create or fetch the namespaced logger for one component instance.

    Args:
        component_name: Free-form name, e.g. the test name of a coordinator.
        component_type: Namespace segment under the package logger.
        logger_level: Optional level override such as ``"DEBUG"``.

    Raises:
        ValidationError: If ``component_type`` is not a :class:`ComponentType`.
    """
    if not isinstance(component_type, ComponentType):
        raise ValidationError(
            f"component_type must be ComponentType enum, got {type(component_type)}",
            parameter_name="component_type",
        )

    logger_name = f"{PACKAGE_NAME}.{component_type.value}.{component_name}"
    with _cache_lock:
        logger = _logger_cache.get(logger_name)
        if logger is None:
            logger = logging.getLogger(logger_name)
            _logger_cache[logger_name] = logger

    if logger_level is not None:
        level = getattr(logging, logger_level.upper(), None)
        if not isinstance(level, int):
            raise ValidationError(
                f"Unknown logger level '{logger_level}'",
                parameter_name="logger_level",
                parameter_value=logger_level,
            )
        logger.setLevel(level)
    return logger


def configure_logging_for_development(
    log_level: str = "DEBUG",
    log_file_path: Optional[Union[str, Path]] = None,
) -> None:
    """Send package logs to stderr (and optionally a file) through loguru."""
    from ..logging.loguru_bootstrap import setup_logging

    setup_logging(level=log_level, console=True, file_path=log_file_path)
    logging.getLogger(PACKAGE_NAME).debug(
        "Development logging configured at %s", log_level.upper()
    )
