"""Simulated automation page.

Every call resolves in-process against the owning manager's
:class:`~render_test_sim.driver.window.SimulatedWindow`. Script evaluation
never interprets source text; see :meth:`SimulatedPage.evaluate` for the
resolution order.
"""

from __future__ import annotations

import inspect
import logging
import re
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from ..core.constants import DEFAULT_LIBRARY_VERSION, DEFAULT_POLLING_INTERVAL_MS
from ..gl.context import SimulatedGLContext
from ..utils.exceptions import WaitTimeoutError
from .intents import detect_intent
from .scene_library import build_three_namespace
from .window import SimulatedDocument, SimulatedWindow

if TYPE_CHECKING:
    from .manager import SimulatedBrowserManager

logger = logging.getLogger(__name__)

SCREENSHOT_PLACEHOLDER = b"simulated-screenshot-data"
BLANK_URL = "about:blank"

_LITERALS: Dict[str, Any] = {"true": True, "false": False, "null": None, "undefined": None}
_NUMBER = re.compile(r"^-?\d+(\.\d+)?([eE][-+]?\d+)?$")
_PROPERTY_PATH = re.compile(r"^[A-Za-z_$][\w$]*(\.[A-Za-z_$][\w$]*)*$")
_LIBRARY_SCRIPT = re.compile(r"three\.js/(r\d+)/three(\.min)?\.js")


@dataclass(frozen=True)
class Response:
    url: str
    status: int = 200
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@dataclass
class JSHandle:
    value: Any

    def json_value(self) -> Any:
        return self.value


@dataclass
class ElementHandle:
    """Handle returned by ``wait_for_selector``; input actions are recorded."""

    selector: str
    element: Any = None
    actions: List[Tuple[str, Any]] = field(default_factory=list)

    def click(self) -> None:
        self.actions.append(("click", None))

    def type(self, text: str) -> None:
        self.actions.append(("type", text))


def _accepts_arguments(func: Callable) -> bool:
    try:
        parameters = inspect.signature(func).parameters.values()
    except (TypeError, ValueError):
        return False
    return any(
        p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD, p.VAR_POSITIONAL)
        for p in parameters
    )


class SimulatedPage:
    """Page stand-in bound to a :class:`SimulatedBrowserManager`.

    Args:
        manager: Owning manager; every operation checks it is initialized.
        viewport: Initial viewport mapping; defaults to the manager's size.
        default_timeout_ms: Timeout used by ``wait_for_function`` when none is given.
    """

    def __init__(
        self,
        manager: "SimulatedBrowserManager",
        viewport: Optional[Mapping[str, Any]] = None,
        default_timeout_ms: Optional[float] = None,
    ):
        self._manager = manager
        self._viewport: Optional[Dict[str, Any]] = dict(viewport) if viewport else None
        self._default_timeout_ms = (
            manager.options.default_timeout_ms if default_timeout_ms is None else default_timeout_ms
        )
        self._content = ""
        self._url = BLANK_URL
        self._closed = False
        self._listeners: Dict[str, List[Callable]] = {}

    def __repr__(self) -> str:
        return f"SimulatedPage(url={self._url!r}, closed={self._closed})"

    @property
    def window(self) -> SimulatedWindow:
        return self._manager.window

    @property
    def document(self) -> SimulatedDocument:
        document = self.window["document"]
        if document is None:
            document = SimulatedDocument()
            self.window["document"] = document
        return document

    def _require_live(self) -> None:
        self._manager._validate_initialized()

    # ------------------------------------------------------------------
    # Script evaluation
    def evaluate(self, script: Any, *args: Any) -> Any:
        """Resolve ``script`` against the window.

        Resolution order:

        1. a script intent (direct, tagged, partial or closure) is resolved;
        2. a callable is called, with the window first when it takes parameters;
        3. a string is read as a literal (``true``, ``42``, ``'text'``) or a
           window property path (``window.sceneReady``);
        4. anything else evaluates to ``True``.

        Exceptions raised by a callable propagate to the caller.
        """
        self._require_live()
        return self._evaluate(script, args)

    def _evaluate(self, script: Any, args: Tuple[Any, ...] = ()) -> Any:
        intent = detect_intent(script)
        if intent is not None:
            return intent.resolve(self.window)
        if callable(script):
            if _accepts_arguments(script):
                return script(self.window, *args)
            return script()
        if isinstance(script, str):
            return self._evaluate_expression(script)
        return True

    def _evaluate_expression(self, expression: str) -> Any:
        text = expression.strip().rstrip(";").strip()
        if text in _LITERALS:
            return _LITERALS[text]
        if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"":
            return text[1:-1]
        if _NUMBER.match(text):
            return float(text) if any(c in text for c in ".eE") else int(text)
        if _PROPERTY_PATH.match(text):
            return self.window.resolve(text)
        logger.debug("Unrecognized expression %r evaluated to True", text)
        return True

    def evaluate_handle(self, script: Any, *args: Any) -> JSHandle:
        return JSHandle(self.evaluate(script, *args))

    # ------------------------------------------------------------------
    # Content and navigation
    def set_content(self, html: str) -> None:
        """Store ``html`` and install the globals it references, then emit ``load``."""
        self._require_live()
        self._content = html
        self.document.load_html(html)

        if "three.min.js" in html or "THREE" in html:
            match = _LIBRARY_SCRIPT.search(html)
            version = match.group(1) if match else DEFAULT_LIBRARY_VERSION
            self.window["THREE"] = build_three_namespace(version)
            logger.debug("Installed rendering library namespace %s", version)

        if "WebGLRenderer" in html or "canvas" in html:
            self.window["WebGLRenderingContext"] = SimulatedGLContext

        self.emit("load", self)

    def content(self) -> str:
        self._require_live()
        return self._content

    def goto(self, url: str, **options: Any) -> Response:
        self._require_live()
        self._url = url
        logger.debug("Navigated to %s", url)
        return Response(url=url, status=200)

    @property
    def url(self) -> str:
        return self._url

    # ------------------------------------------------------------------
    # Waiting
    def wait_for_function(
        self,
        predicate: Any,
        *args: Any,
        timeout: Optional[float] = None,
        polling: float = DEFAULT_POLLING_INTERVAL_MS,
    ) -> Any:
        """Poll ``predicate`` every ``polling`` ms until it is truthy.

        Errors raised while evaluating are logged and polling continues. On
        timeout a :class:`WaitTimeoutError` carrying the elapsed milliseconds is
        raised and no page state is touched.
        """
        self._require_live()
        timeout_ms = self._default_timeout_ms if timeout is None else timeout
        started = time.monotonic()
        while True:
            try:
                result = self._evaluate(predicate, args)
            except Exception as exc:
                logger.debug("Predicate raised during polling: %s", exc)
                result = None
            if result:
                return result

            elapsed_ms = (time.monotonic() - started) * 1000.0
            if elapsed_ms >= timeout_ms:
                raise WaitTimeoutError(
                    f"wait_for_function timeout after {timeout_ms}ms",
                    elapsed_ms=elapsed_ms,
                    timeout_ms=timeout_ms,
                )
            time.sleep(max(0.0, min(polling, timeout_ms - elapsed_ms)) / 1000.0)

    def wait_for_selector(self, selector: str, **options: Any) -> ElementHandle:
        self._require_live()
        return ElementHandle(selector, self.document.query_selector(selector))

    # ------------------------------------------------------------------
    # Viewport and capture
    def set_viewport(self, viewport: Mapping[str, Any]) -> None:
        self._require_live()
        self._viewport = dict(viewport)
        if "width" in viewport:
            self.window["inner_width"] = viewport["width"]
        if "height" in viewport:
            self.window["inner_height"] = viewport["height"]

    def viewport(self) -> Dict[str, Any]:
        if self._viewport is not None:
            return dict(self._viewport)
        options = self._manager.options
        return {"width": options.width, "height": options.height}

    def screenshot(self, path: Union[str, Path, None] = None, **options: Any) -> bytes:
        self._require_live()
        if path is not None:
            Path(path).write_bytes(SCREENSHOT_PLACEHOLDER)
        return SCREENSHOT_PLACEHOLDER

    # ------------------------------------------------------------------
    # Events and lifecycle
    def on(self, event: str, handler: Callable) -> None:
        self._listeners.setdefault(event, []).append(handler)

    def remove_listener(self, event: str, handler: Callable) -> None:
        handlers = self._listeners.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: str, *payload: Any) -> None:
        for handler in list(self._listeners.get(event, [])):
            handler(*payload)

    def set_default_timeout(self, timeout_ms: float) -> None:
        self._default_timeout_ms = timeout_ms

    @property
    def default_timeout(self) -> float:
        return self._default_timeout_ms

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.emit("close", self)

    def is_closed(self) -> bool:
        return self._closed


__all__ = [
    "SimulatedPage",
    "Response",
    "JSHandle",
    "ElementHandle",
    "SCREENSHOT_PLACEHOLDER",
    "BLANK_URL",
]
