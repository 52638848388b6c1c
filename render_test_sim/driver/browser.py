"""Simulated browser handle owned by a :class:`SimulatedBrowserManager`."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List

from ..core.constants import BROWSER_VERSION, USER_AGENT
from .page import SimulatedPage

if TYPE_CHECKING:
    from .manager import SimulatedBrowserManager

logger = logging.getLogger(__name__)


class SimulatedBrowser:
    def __init__(self, manager: "SimulatedBrowserManager"):
        self._manager = manager
        self._pages: List[SimulatedPage] = []
        self._connected = True

    def __repr__(self) -> str:
        return f"SimulatedBrowser(pages={len(self._pages)}, connected={self.is_connected()})"

    def new_page(self) -> SimulatedPage:
        page = SimulatedPage(self._manager)
        self._pages.append(page)
        return page

    def pages(self) -> List[SimulatedPage]:
        return [page for page in self._pages if not page.is_closed()]

    def is_connected(self) -> bool:
        return self._connected and self._manager.is_initialized

    def version(self) -> str:
        return BROWSER_VERSION

    def user_agent(self) -> str:
        return USER_AGENT

    def close(self) -> None:
        """Close every page and detach the owning manager from its registry."""
        if not self._connected:
            return
        for page in self._pages:
            page.close()
        self._connected = False
        self._manager._on_browser_closed(self)
        logger.debug("Browser closed")


__all__ = ["SimulatedBrowser"]
