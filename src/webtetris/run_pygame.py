"""Simple pygame front-end for the Tetris engine.

A desktop counterpart to the browser front-end.  Arrow keys move and rotate
the piece, Enter starts a new game and ``P`` toggles pause.  Score and level
are shown in the window caption.
"""

from __future__ import annotations

import asyncio
import logging
import os
import random
from typing import Optional

import pygame

from .board import Board, Cell
from .controller import Command, GameController
from .view import flatten_cells, format_level, format_score

# Size of a single board cell in pixels
CELL_SIZE = 30
# Frames per second to run the game loop at
FPS = 60

CELL_COLORS = {
    Cell.EMPTY: (0, 0, 0),
    Cell.FILLED: (128, 128, 128),
    Cell.ACTIVE: (0, 255, 255),
}
GRID_COLOR = (50, 50, 50)

PYGAME_KEYS = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_UP: Command.ROTATE,
}

logger = logging.getLogger(__name__)


class PygameView:
    """Draw snapshots onto a pygame surface."""

    def __init__(self, screen: Optional[pygame.Surface] = None) -> None:
        self.screen = screen
        self.caption = "Tetris"

    def render(self, grid, score: int, level: int) -> None:
        self.caption = f"Tetris - Score: {format_score(score)} - Level: {format_level(level)}"
        if self.screen is None:
            return
        self.screen.fill(CELL_COLORS[Cell.EMPTY])
        for index, marker in enumerate(flatten_cells(grid)):
            r, c = divmod(index, Board.width)
            rect = pygame.Rect(c * CELL_SIZE, r * CELL_SIZE, CELL_SIZE, CELL_SIZE)
            pygame.draw.rect(self.screen, CELL_COLORS[marker], rect)
            pygame.draw.rect(self.screen, GRID_COLOR, rect, 1)
        pygame.display.set_caption(self.caption)

    def game_over(self, score: int) -> None:
        self.caption = f"Tetris - Game over! Your score: {format_score(score)} - Enter to restart"
        logger.info("Game over. Your score: %d", score)
        if self.screen is not None:
            pygame.display.set_caption(self.caption)


def handle_key(event: pygame.event.Event, controller: GameController) -> None:
    """Process keyboard events for piece movement and game control."""

    if event.key == pygame.K_RETURN:
        controller.start()
    elif event.key == pygame.K_p:
        if controller.paused:
            controller.resume()
        else:
            controller.pause()
    elif event.key in PYGAME_KEYS:
        controller.handle_command(PYGAME_KEYS[event.key])


class GameRunner:
    """Manage the window and the frame loop around a :class:`GameController`."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.controller = GameController(PygameView(), rng=rng)
        self._open = False
        self._task: asyncio.Task | None = None
        self._clock: pygame.time.Clock | None = None

    @property
    def open(self) -> bool:
        return self._open

    async def _run_loop(self) -> None:
        os.environ.setdefault("SDL_HINT_EMSCRIPTEN_CANVAS_ELEMENT_ID", "#canvas")
        os.environ.setdefault("SDL_HINT_EMSCRIPTEN_KEYBOARD_ELEMENT", "#canvas")
        pygame.init()
        board_px = Board.width * CELL_SIZE
        board_py = Board.height * CELL_SIZE
        self.controller.view.screen = pygame.display.set_mode((board_px, board_py))
        self._clock = pygame.time.Clock()
        self.controller.start()

        self._open = True
        while self._open:
            dt = self._clock.tick(FPS)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._open = False
                elif event.type == pygame.KEYDOWN:
                    handle_key(event, self.controller)

            self.controller.advance(dt)
            pygame.display.flip()

            # Yield to the host event loop to keep the UI responsive
            await asyncio.sleep(0)

        self.controller.stop()
        pygame.quit()

    def start(self) -> None:
        if self._task and not self._task.done():
            logger.info("Game already running")
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No running loop (plain Python); block until the window closes
            asyncio.run(self._run_loop())
        else:
            self._task = loop.create_task(self._run_loop())

    def close(self) -> None:
        self._open = False


def main() -> None:
    GameRunner().start()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
