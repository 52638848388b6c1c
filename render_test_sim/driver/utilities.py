"""Waiting and reset helpers layered on :class:`SimulatedPage`."""

from __future__ import annotations

import logging
import time
from typing import Any, Iterable, List, Optional

from ..core.constants import TEST_GLOBAL_PROPERTIES
from ..gl.context import SimulatedCanvas
from ..utils.exceptions import ValidationError, WaitTimeoutError
from .intents import is_intent
from .page import SimulatedPage

logger = logging.getLogger(__name__)


def wait_for_condition(
    page: SimulatedPage,
    condition: Any,
    timeout: float = 5000,
    interval: float = 50,
    retries: int = 3,
    error_message: str = "Condition not met within timeout",
) -> Any:
    """Wait for ``condition`` with up to ``retries`` attempts.

    The timeout is split evenly across attempts (``timeout // retries`` ms
    each). ``condition`` may be a callable, an expression string or a script
    intent. Returns the first truthy result.

    Raises:
        ValidationError: If ``page`` is missing, ``retries`` is below 1 or
            ``condition`` has an unsupported type.
        WaitTimeoutError: After the last attempt times out.
    """
    if page is None:
        raise ValidationError("Page object is required", parameter_name="page")
    if retries < 1:
        raise ValidationError(
            "retries must be at least 1", parameter_name="retries", parameter_value=retries
        )
    if not (callable(condition) or isinstance(condition, str) or is_intent(condition)):
        raise ValidationError(
            "Condition must be a callable, string or script intent",
            parameter_name="condition",
            parameter_value=type(condition).__name__,
        )

    timeout_per_attempt = timeout // retries
    started = time.monotonic()
    for attempt in range(1, retries + 1):
        try:
            return page.wait_for_function(
                condition, timeout=timeout_per_attempt, polling=interval
            )
        except WaitTimeoutError as exc:
            if attempt >= retries:
                elapsed_ms = (time.monotonic() - started) * 1000.0
                raise WaitTimeoutError(
                    f"{error_message} (after {retries} attempts): {exc.message}",
                    elapsed_ms=elapsed_ms,
                    timeout_ms=timeout,
                ) from exc
            logger.debug("Condition attempt %d/%d timed out", attempt, retries)
            time.sleep(interval / 1000.0)
    return None


def reset_global_state(
    page: SimulatedPage, properties: Optional[Iterable[str]] = None
) -> List[str]:
    """Remove well-known test globals from the page's window.

    Canvas contexts registered in the document are reset as well. Returns the
    names that were actually removed.
    """
    if page is None:
        raise ValidationError(
            "Page object is required for resetting global state", parameter_name="page"
        )
    window = page.window
    names = TEST_GLOBAL_PROPERTIES if properties is None else tuple(properties)
    removed = [name for name in names if window.delete(name)]

    document = window["document"]
    if document is not None:
        for element in document.elements:
            if isinstance(element, SimulatedCanvas) and element.context is not None:
                element.context.cleanup()

    if removed:
        logger.debug("Reset %d global test properties", len(removed))
    return removed


__all__ = ["wait_for_condition", "reset_global_state"]
