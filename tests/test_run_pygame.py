from __future__ import annotations

import pygame

from blockfall.board import PIECE_VALUES
from blockfall.config import EngineConfig
from blockfall.engine import Engine
from blockfall.game_state import Status
from blockfall.input import InputDispatcher
from blockfall.run_pygame import CELL_COLORS, GameRunner, caption
from blockfall.scheduler import ManualTimer
from blockfall.tetromino import TetrominoType


def _runner() -> GameRunner:
    runner = GameRunner(EngineConfig(seed=2))
    runner.engine = Engine(runner.config, timer=ManualTimer())
    runner.dispatcher = InputDispatcher(runner.engine)
    return runner


def test_palette_covers_every_piece() -> None:
    assert CELL_COLORS[0] == (0, 0, 0)
    assert CELL_COLORS[PIECE_VALUES[TetrominoType.L]] == (255, 165, 0)
    assert len(CELL_COLORS) == 8


def test_enter_starts_and_arrow_keys_are_forwarded() -> None:
    runner = _runner()
    runner.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_RETURN))
    assert runner.engine.state.status is Status.PLAYING
    col = runner.engine.state.active.col
    runner.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_LEFT))
    assert runner.engine.state.active.col == col - 1
    runner.handle_event(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_p))
    assert runner.engine.state.status is Status.PAUSED


def test_quit_event_stops_loop() -> None:
    runner = _runner()
    runner._running = True
    runner.handle_event(pygame.event.Event(pygame.QUIT))
    assert not runner.running


def test_caption_shows_status_and_score() -> None:
    runner = _runner()
    assert caption(runner.engine.snapshot()) == "Tetris - Press Enter - Score: 0"
    runner.engine.start()
    assert caption(runner.engine.snapshot()) == "Tetris - Score: 0"
    runner.engine.pause()
    assert caption(runner.engine.snapshot()) == "Tetris - Paused - Score: 0"
