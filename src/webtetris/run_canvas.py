"""Browser front-end for Tetris.

The board is drawn as a grid of ``div`` cells inside ``#game-board`` and the
readouts go to ``#score span`` and ``#level span``.  The page is expected to
load this module through PyScript/pyodide; ``main`` wires the start button and
keyboard to a :class:`Runner`.

The DOM objects can be passed in explicitly, which is how the tests drive the
runner outside of a browser.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from .controller import GameController
from .view import CELL_CLASSES, flatten_cells, format_level, format_score


logger = logging.getLogger(__name__)


def _browser():
    """Return the pyodide ``document``, ``window`` and ``create_proxy``."""

    from js import document, window  # type: ignore
    from pyodide.ffi import create_proxy  # type: ignore

    return document, window, create_proxy


class DiagnosticsHandler(logging.Handler):
    """Logging handler that prepends records to the ``#diagnostics`` element."""

    def __init__(self, document, level: int = logging.INFO) -> None:
        super().__init__(level)
        self.document = document
        self.setFormatter(logging.Formatter("[%(asctime)s] %(message)s", "%H:%M:%S"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            el = self.document.getElementById("diagnostics")
            if el:
                entry = self.document.createElement("div")
                entry.textContent = self.format(record)
                el.prepend(entry)
        except Exception:
            self.handleError(record)


class DomView:
    """Render snapshots into the page's board and readout elements."""

    def __init__(self, document, window) -> None:
        self.document = document
        self.window = window

    def render(self, grid, score: int, level: int) -> None:
        board = self.document.getElementById("game-board")
        if board:
            board.innerHTML = ""
            for marker in flatten_cells(grid):
                div = self.document.createElement("div")
                div.className = CELL_CLASSES[marker]
                board.appendChild(div)
        self._set_text("#score span", format_score(score))
        self._set_text("#level span", format_level(level))

    def game_over(self, score: int) -> None:
        self.window.alert(f"Game over! Your score: {score}")

    def _set_text(self, selector: str, text: str) -> None:
        el = self.document.querySelector(selector)
        if el:
            el.textContent = text


class Runner:
    """Animation loop and event bindings around a :class:`GameController`."""

    def __init__(
        self,
        document=None,
        window=None,
        create_proxy=None,
        rng: Optional[random.Random] = None,
    ) -> None:
        if document is None or window is None or create_proxy is None:
            document, window, create_proxy = _browser()
        self.document = document
        self.window = window
        self.controller = GameController(DomView(document, window), rng=rng)
        self.last_ts = 0.0
        self.raf_handle: Optional[int] = None
        # pyodide proxies must stay referenced for as long as JS may call them.
        self._tick_proxy = create_proxy(self._tick)
        self._key_proxy = create_proxy(self._on_key)
        self._start_proxy = create_proxy(self._on_start_click)

    def install(self) -> None:
        """Attach the start button and keyboard listeners."""

        button = self.document.getElementById("start-button")
        if button:
            button.addEventListener("click", self._start_proxy)
        self.document.addEventListener("keydown", self._key_proxy)

    def _request_frame(self) -> None:
        self.raf_handle = self.window.requestAnimationFrame(self._tick_proxy)

    def _restart_after_crash(self, exc: Exception) -> None:
        logger.exception("Crash detected: %s", exc)
        self.controller.start()
        self.last_ts = 0.0

    def _tick(self, ts: float) -> None:
        self.raf_handle = None
        if not self.controller.running:
            return
        try:
            if self.last_ts == 0:
                self.last_ts = ts
            dt = ts - self.last_ts
            self.last_ts = ts
            self.controller.advance(dt)
        except Exception as exc:  # pragma: no cover
            self._restart_after_crash(exc)
        if self.controller.running:
            self._request_frame()

    def _on_key(self, evt) -> None:
        if self.controller.handle_key(evt.key):
            evt.preventDefault()

    def _on_start_click(self, _evt=None) -> None:
        self.start()

    def start(self) -> None:
        board = self.document.getElementById("game-board")
        if board:
            board.focus()
        self.controller.start()
        self.last_ts = 0.0
        if self.raf_handle is None:
            self._request_frame()

    def pause(self) -> None:
        self.controller.pause()

    def resume(self) -> None:
        self.controller.resume()
        # Avoid counting the paused time as elapsed.
        self.last_ts = 0.0

    def stop(self) -> None:
        self.controller.stop()
        if self.raf_handle is not None:
            self.window.cancelAnimationFrame(self.raf_handle)
            self.raf_handle = None


runner: Optional[Runner] = None


def main() -> Runner:
    """Create the page runner, route logging to the page and bind controls."""

    global runner
    document, window, create_proxy = _browser()
    logging.getLogger("webtetris").addHandler(DiagnosticsHandler(document))
    logging.getLogger("webtetris").setLevel(logging.INFO)
    runner = Runner(document, window, create_proxy)
    runner.install()
    return runner


def start() -> None:
    runner.start()


def pause() -> None:
    runner.pause()


def resume() -> None:
    runner.resume()


def stop() -> None:
    runner.stop()
