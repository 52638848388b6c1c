"""Simulated browser manager: lifecycle and registry bookkeeping for one session."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional, Union

from ..core.constants import (
    DEFAULT_HEADLESS,
    DEFAULT_TIMEOUT_MS,
    DEFAULT_VIEWPORT_HEIGHT,
    DEFAULT_VIEWPORT_WIDTH,
)
from ..utils.exceptions import DoubleInitializationError, NotInitializedError
from .browser import SimulatedBrowser
from .page import SimulatedPage
from .registry import InstanceRegistry, default_registry
from .window import SimulatedWindow

logger = logging.getLogger(__name__)


@dataclass
class BrowserOptions:
    headless: bool = DEFAULT_HEADLESS
    width: int = DEFAULT_VIEWPORT_WIDTH
    height: int = DEFAULT_VIEWPORT_HEIGHT
    args: List[str] = field(default_factory=list)
    default_timeout_ms: float = DEFAULT_TIMEOUT_MS

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "BrowserOptions":
        """Build options from a mapping such as a suite config's ``viewport``.

        Keys that are not option fields are ignored.
        """
        known = {f.name for f in fields(cls)}
        ignored = sorted(set(values) - known)
        if ignored:
            logger.debug("Ignoring non-option keys %s", ignored)
        return cls(**{key: value for key, value in values.items() if key in known})


OptionsLike = Union[BrowserOptions, Mapping[str, Any], None]


class SimulatedBrowserManager:
    """In-process replacement for a real browser automation manager.

    Args:
        options: :class:`BrowserOptions`, a mapping of option fields, or ``None``.
        window: Global scope shared by the manager's pages; a fresh one by default.
        registry: Registry the manager joins while initialized.

    Example:
        >>> manager = SimulatedBrowserManager({"width": 800, "height": 600})
        >>> manager.initialize().page.evaluate("true")
        True
        >>> manager.cleanup(); manager.is_initialized
        False
    """

    def __init__(
        self,
        options: OptionsLike = None,
        *,
        window: Optional[SimulatedWindow] = None,
        registry: Optional[InstanceRegistry] = None,
    ):
        if options is None:
            options = BrowserOptions()
        elif not isinstance(options, BrowserOptions):
            options = BrowserOptions.from_mapping(options)
        self.options: BrowserOptions = options
        self.window = window if window is not None else SimulatedWindow()
        self.registry = registry if registry is not None else default_registry
        self.browser: Optional[SimulatedBrowser] = None
        self.page: Optional[SimulatedPage] = None
        self._initialized = False

    def __repr__(self) -> str:
        return (
            f"SimulatedBrowserManager(width={self.options.width}, "
            f"height={self.options.height}, initialized={self._initialized})"
        )

    def __enter__(self) -> "SimulatedBrowserManager":
        return self.initialize()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> "SimulatedBrowserManager":
        if self._initialized:
            raise DoubleInitializationError(
                "BrowserManager already initialized", component_name="SimulatedBrowserManager"
            )
        self.browser = SimulatedBrowser(self)
        self._initialized = True
        self.page = self.browser.new_page()
        self.registry.add(self)
        logger.debug(
            "Initialized browser manager %dx%d (headless=%s)",
            self.options.width,
            self.options.height,
            self.options.headless,
        )
        return self

    def cleanup(self) -> None:
        """Close page and browser, clear the window and leave the registry.

        Does nothing on a manager that was never initialized.
        """
        if not self._initialized and self.browser is None:
            return
        if self.page is not None and not self.page.is_closed():
            self.page.close()
        if self.browser is not None:
            self.browser.close()
        self._initialized = False
        self.page = None
        self.browser = None
        self.registry.discard(self)
        self.window.clear()
        logger.debug("Browser manager cleaned up")

    def _on_browser_closed(self, browser: SimulatedBrowser) -> None:
        if browser is self.browser:
            self._initialized = False
            self.registry.discard(self)

    def _validate_initialized(self) -> None:
        if not self._initialized or self.page is None:
            raise NotInitializedError(
                "Browser not initialized. Call initialize() first.",
                component_name="SimulatedBrowserManager",
            )

    # ------------------------------------------------------------------
    # Global properties
    def set_global_property(self, name: str, value: Any) -> None:
        self.window[name] = value

    def get_global_property(self, name: str) -> Any:
        return self.window[name]

    def clear_global_properties(self) -> None:
        self.window.clear()

    def global_properties(self) -> Dict[str, Any]:
        return self.window.to_dict()

    # ------------------------------------------------------------------
    # Registry
    def cleanup_all(self) -> int:
        return self.registry.cleanup_all()

    def get_active_instance_count(self) -> int:
        return self.registry.count()


__all__ = ["BrowserOptions", "SimulatedBrowserManager"]
