"""Simple pygame front-end for the engine.

This module is the host for a playable session: it renders
:meth:`Engine.snapshot` every frame and forwards key presses through the
:class:`~blockfall.input.InputDispatcher`.  Gravity comes from the engine's
own scheduler running on the asyncio loop, so the frame loop never moves
pieces by itself.
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Dict, Optional, Tuple

import pygame

from .board import Board, PIECE_VALUES
from .config import EngineConfig
from .engine import Engine
from .game_state import Snapshot, Status
from .input import InputDispatcher
from .scheduler import AsyncioTimer
from .tetromino import SHAPE_COLORS

# Size of a single board cell in pixels
CELL_SIZE = 30
# Frames per second to run the game loop at
FPS = 60

LOGGER = logging.getLogger(__name__)


def _hex_to_rgb(value: str) -> Tuple[int, int, int]:
    value = value.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


# Mapping from the integer stored in the board grid to a colour
CELL_COLORS: Dict[int, Tuple[int, int, int]] = {0: (0, 0, 0)}
for shape, value in PIECE_VALUES.items():
    CELL_COLORS[value] = _hex_to_rgb(SHAPE_COLORS[shape])

# pygame key codes translated to the key names used by ``KEY_BINDINGS``
PYGAME_KEYS = {
    pygame.K_LEFT: "ArrowLeft",
    pygame.K_RIGHT: "ArrowRight",
    pygame.K_DOWN: "ArrowDown",
    pygame.K_UP: "ArrowUp",
    pygame.K_SPACE: " ",
    pygame.K_p: "p",
}


def draw_grid(screen: pygame.Surface, snapshot: Snapshot) -> None:
    """Render the board with the active piece overlaid."""

    for r, row in enumerate(snapshot.active_piece_overlay):
        for c, value in enumerate(row):
            rect = pygame.Rect(c * CELL_SIZE, r * CELL_SIZE, CELL_SIZE, CELL_SIZE)
            pygame.draw.rect(screen, CELL_COLORS[value], rect)
            pygame.draw.rect(screen, (50, 50, 50), rect, 1)


def caption(snapshot: Snapshot) -> str:
    prefix = {
        Status.PAUSED: "Paused - ",
        Status.GAME_OVER: "Game Over (Enter for new game) - ",
        Status.IDLE: "Press Enter - ",
    }.get(snapshot.status, "")
    return f"Tetris - {prefix}Score: {snapshot.score}"


class GameRunner:
    """Manage the window, the frame loop and the engine."""

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self.config = config or EngineConfig()
        self._running = False
        self._task: asyncio.Task | None = None
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self.engine: Engine | None = None
        self.dispatcher: InputDispatcher | None = None

    @property
    def running(self) -> bool:
        return self._running

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self._running = False
        elif event.type == pygame.KEYDOWN and self.engine and self.dispatcher:
            if event.key == pygame.K_RETURN:
                self.engine.start()
                return
            key = PYGAME_KEYS.get(event.key)
            if key is not None:
                self.dispatcher.handle_key(key)

    async def _run_loop(self) -> None:
        os.environ.setdefault("SDL_HINT_EMSCRIPTEN_CANVAS_ELEMENT_ID", "#canvas")
        os.environ.setdefault("SDL_HINT_EMSCRIPTEN_KEYBOARD_ELEMENT", "#canvas")
        pygame.init()
        self._screen = pygame.display.set_mode((Board.width * CELL_SIZE, Board.height * CELL_SIZE))
        self._clock = pygame.time.Clock()

        self.engine = Engine(self.config, timer=AsyncioTimer(asyncio.get_running_loop()))
        self.dispatcher = InputDispatcher(self.engine)
        self.engine.start()
        LOGGER.info("Game started")

        self._running = True
        while self._running:
            self._clock.tick(FPS)
            for event in pygame.event.get():
                self.handle_event(event)

            snapshot = self.engine.snapshot()
            self._screen.fill((0, 0, 0))
            draw_grid(self._screen, snapshot)
            pygame.display.set_caption(caption(snapshot))
            pygame.display.flip()

            # Yield so the gravity timer can fire
            await asyncio.sleep(0)

        self.engine.scheduler.stop()
        pygame.quit()
        LOGGER.info("Game stopped")

    def start(self) -> None:
        if self._task and not self._task.done():
            LOGGER.info("Game already running")
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No running loop (e.g., plain Python); run synchronously
            asyncio.run(self._run_loop())
        else:
            self._task = loop.create_task(self._run_loop())


def main(config: Optional[EngineConfig] = None) -> None:
    """Open a window and play until it is closed."""

    GameRunner(config).start()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
