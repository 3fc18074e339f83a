"""Input and timing glue between a front-end and the game state.

The controller owns a :class:`GameState` and a view object.  Front-ends feed it
key presses and elapsed time; after every change it asks the view to redraw.
A view needs two methods: ``render(grid, score, level)`` and
``game_over(score)``.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional
import logging
import random

from .game_state import GameState
from .utils import tick_interval_ms


logger = logging.getLogger(__name__)


class Command(str, Enum):
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SOFT_DROP = "soft_drop"
    ROTATE = "rotate"


# Browser ``KeyboardEvent.key`` names.
KEY_BINDINGS = {
    "ArrowLeft": Command.MOVE_LEFT,
    "ArrowRight": Command.MOVE_RIGHT,
    "ArrowDown": Command.SOFT_DROP,
    "ArrowUp": Command.ROTATE,
}


class GameController:
    """Drive a game session from commands and clock ticks."""

    def __init__(self, view, rng: Optional[random.Random] = None) -> None:
        self.view = view
        self.state = GameState(rng=rng or random.Random())
        self.running = False
        self.paused = False
        self.drop_accum = 0.0

    @property
    def interval_ms(self) -> int:
        """Gravity interval for the current level."""

        return tick_interval_ms(self.state.level)

    def start(self) -> None:
        """Start a fresh session, discarding any game in progress."""

        self.state.start()
        self.running = True
        self.paused = False
        self.drop_accum = 0.0
        logger.info("Game started")
        self.refresh()

    def stop(self) -> None:
        if not self.running:
            logger.info("Stop ignored: game not running")
            return
        self.running = False
        self.paused = False
        logger.info("Game stopped")

    def pause(self) -> None:
        if not self.running:
            logger.info("Pause ignored: game not running")
            return
        self.paused = True
        logger.info("Paused")

    def resume(self) -> None:
        if not self.running:
            logger.info("Resume ignored: game not running")
            return
        self.paused = False
        logger.info("Resumed")

    def refresh(self) -> None:
        self.view.render(self.state.snapshot(), self.state.score, self.state.level)

    def handle_key(self, key: str) -> bool:
        """Dispatch a browser key name; unbound keys are ignored."""

        command = KEY_BINDINGS.get(key)
        if command is None:
            return False
        return self.handle_command(command)

    def handle_command(self, command: Command) -> bool:
        """Apply ``command`` to the active piece and redraw.

        Returns whether the piece moved.  Commands are ignored while the game
        is stopped, paused or over.
        """

        if not self.running or self.paused or self.state.game_over:
            return False
        if command is Command.MOVE_LEFT:
            moved = self.state.move_left()
        elif command is Command.MOVE_RIGHT:
            moved = self.state.move_right()
        elif command is Command.SOFT_DROP:
            moved = self.state.move_down()
        else:
            moved = self.state.rotate()
        self.refresh()
        self._check_game_over()
        return moved

    def tick(self) -> None:
        """Apply one step of gravity."""

        if not self.running or self.paused:
            return
        self.state.move_down()
        self.refresh()
        self._check_game_over()

    def advance(self, dt_ms: float) -> bool:
        """Account for ``dt_ms`` of elapsed time and return whether a tick ran.

        At most one tick is applied per call, so a long stall does not drop the
        piece several rows at once.  The interval is looked up from the level on
        every call, so the pieces speed up as soon as the level rises.
        """

        if not self.running or self.paused:
            return False
        self.drop_accum += dt_ms
        if self.drop_accum < self.interval_ms:
            return False
        self.drop_accum = 0.0
        self.tick()
        return True

    def _check_game_over(self) -> None:
        if self.running and self.state.game_over:
            self.running = False
            self.drop_accum = 0.0
            self.view.game_over(self.state.score)
