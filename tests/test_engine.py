from __future__ import annotations

import logging
import random

import pytest

from blockfall.config import EngineConfig
from blockfall.engine import Command, Engine
from blockfall.game_state import Status
from blockfall.scheduler import ManualTimer
from blockfall.tetromino import TetrominoType

from helpers import SequenceRng


def _engine(kinds: list[TetrominoType] | None = None) -> tuple[Engine, ManualTimer]:
    timer = ManualTimer()
    rng = SequenceRng(kinds) if kinds is not None else random.Random(0)
    return Engine(EngineConfig(), rng=rng, timer=timer), timer  # type: ignore[arg-type]


def test_gravity_runs_only_while_playing() -> None:
    engine, timer = _engine([TetrominoType.I])
    timer.advance(5000)
    assert engine.state.status is Status.IDLE
    assert timer.pending == 0

    engine.start()
    assert engine.scheduler.running
    timer.advance(499)
    assert engine.state.active.row == 0
    timer.advance(1)
    assert engine.state.active.row == 1


def test_i_piece_locks_on_twentieth_gravity_tick() -> None:
    engine, timer = _engine([TetrominoType.I, TetrominoType.T])
    engine.start()
    timer.advance(19 * 500)
    assert engine.state.active.row == 19
    assert engine.state.pieces == 0
    timer.advance(500)
    assert engine.state.pieces == 1
    assert engine.state.active.kind is TetrominoType.T


def test_pause_stops_ticks_and_resume_restarts_interval() -> None:
    engine, timer = _engine([TetrominoType.O])
    engine.start()
    timer.advance(250)
    paused = engine.pause()
    assert paused.status is Status.PAUSED
    assert timer.pending == 0

    timer.advance(5000)
    assert engine.state is paused
    assert engine.tick() is paused

    engine.resume()
    timer.advance(499)
    assert engine.state.active.row == 0
    timer.advance(1)
    assert engine.state.active.row == 1


def test_stale_tick_after_pause_is_dropped() -> None:
    engine, timer = _engine([TetrominoType.O])
    engine.start()
    generation = engine.scheduler.generation
    engine.pause()
    engine.resume()
    before = engine.state
    assert engine.submit(Command.TICK, generation=generation) is before
    assert engine.submit(Command.TICK, generation=engine.scheduler.generation).active.row == 1


def test_game_over_cancels_gravity() -> None:
    engine, timer = _engine()
    engine.start()
    for _ in range(200):
        if engine.state.status is Status.GAME_OVER:
            break
        engine.hard_drop()
    assert engine.state.status is Status.GAME_OVER
    assert not engine.scheduler.running
    assert timer.pending == 0

    over = engine.state
    timer.advance(10_000)
    assert engine.state is over

    engine.start()
    assert engine.state.status is Status.PLAYING
    assert engine.scheduler.running


def test_commands_queued_during_a_command_run_afterwards() -> None:
    engine, timer = _engine([TetrominoType.O])
    engine.start()
    order: list[int] = []
    original = engine._apply

    def recording(command, generation):
        order.append(engine.state.active.col)
        if command is Command.MOVE_LEFT and len(order) == 1:
            # re-entrant submit from inside a command is queued, not nested
            assert engine.submit(Command.MOVE_LEFT) is engine.state
            assert len(order) == 1
        original(command, generation)

    engine._apply = recording  # type: ignore[method-assign]
    engine.move_left()
    assert order == [4, 3]
    assert engine.state.active.col == 2


def test_submit_rejects_unknown_commands() -> None:
    engine, _ = _engine()
    with pytest.raises(TypeError):
        engine.submit("left")  # type: ignore[arg-type]


def test_status_changes_are_logged(caplog) -> None:
    engine, _ = _engine([TetrominoType.T])
    with caplog.at_level(logging.INFO, logger="blockfall.engine"):
        engine.start()
        engine.pause()
    assert "idle -> playing" in caplog.text
    assert "playing -> paused" in caplog.text


def test_snapshot_reflects_current_state() -> None:
    engine, _ = _engine([TetrominoType.T])
    assert engine.snapshot().status is Status.IDLE
    engine.start()
    snap = engine.snapshot()
    assert snap.status is Status.PLAYING
    assert any(any(row) for row in snap.active_piece_overlay)
    assert not any(any(row) for row in snap.board)


def test_points_per_line_comes_from_config() -> None:
    engine = Engine(EngineConfig(points_per_line=40, seed=1), timer=ManualTimer())
    assert engine.state.points_per_line == 40
