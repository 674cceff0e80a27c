"""Single-consumer command loop around :class:`~blockfall.game_state.GameState`.

Player input and gravity ticks both arrive as :class:`Command` values.  They
are appended to one FIFO queue and applied strictly in arrival order, each as
one atomic state swap, so a lock/clear/spawn sequence is never observed half
done.  After every command the engine keeps the tick scheduler in step with
the session status: leaving ``PLAYING`` cancels gravity, entering it re-arms
gravity from a fresh period.
"""

from __future__ import annotations

import logging
import random
from collections import deque
from enum import Enum
from typing import Deque, Optional, Tuple

from .config import EngineConfig
from .game_state import GameState, Snapshot, Status
from .scheduler import ManualTimer, TickScheduler, Timer


LOGGER = logging.getLogger(__name__)


class Command(str, Enum):
    """Commands accepted by the engine; values name ``GameState`` methods."""

    START = "start"
    PAUSE = "pause"
    RESUME = "resume"
    TOGGLE_PAUSE = "toggle_pause"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SOFT_DROP = "soft_drop"
    HARD_DROP = "hard_drop"
    ROTATE = "rotate"
    TICK = "tick"


class Engine:
    """Own the session state and serialise every command applied to it."""

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        *,
        rng: Optional[random.Random] = None,
        timer: Optional[Timer] = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.timer = timer if timer is not None else ManualTimer()
        self.state = GameState(
            points_per_line=self.config.points_per_line,
            rng=rng if rng is not None else self.config.make_rng(),
        )
        self.scheduler = TickScheduler(
            self.timer, self._on_tick, interval_ms=self.config.gravity_ms
        )
        self._queue: Deque[Tuple[Command, Optional[int]]] = deque()
        self._draining = False

    # ------------------------------------------------------------------
    # Command intake
    # ------------------------------------------------------------------
    def submit(self, command: Command, *, generation: Optional[int] = None) -> GameState:
        """Queue ``command`` and process the queue unless already doing so.

        ``generation`` is only used for ticks emitted by the scheduler; a tick
        from an outdated generation is dropped.  Returns the state after the
        queue has been drained (or the current state when called re-entrantly).

        Raises:
            TypeError: If ``command`` is not a :class:`Command`.
        """

        if not isinstance(command, Command):
            raise TypeError(f"Expected a Command, got {command!r}")
        self._queue.append((command, generation))
        if not self._draining:
            self._drain()
        return self.state

    def _on_tick(self, generation: int) -> None:
        self.submit(Command.TICK, generation=generation)

    def _drain(self) -> None:
        self._draining = True
        try:
            while self._queue:
                command, generation = self._queue.popleft()
                self._apply(command, generation)
        finally:
            self._draining = False

    def _apply(self, command: Command, generation: Optional[int]) -> None:
        if generation is not None and not self.scheduler.is_current(generation):
            LOGGER.debug("Dropped stale tick (generation %d)", generation)
            return

        before = self.state
        after = getattr(before, command.value)()
        if after is before:
            LOGGER.debug("%s ignored while %s", command.value, before.status.value)
            return
        self.state = after
        self._sync_scheduler(before.status, after.status)

    def _sync_scheduler(self, before: Status, after: Status) -> None:
        if before is after:
            return
        LOGGER.info("Status %s -> %s (score %d)", before.value, after.value, self.state.score)
        if after is Status.PLAYING:
            self.scheduler.start()
        elif before is Status.PLAYING:
            self.scheduler.stop()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def start(self) -> GameState:
        return self.submit(Command.START)

    def pause(self) -> GameState:
        return self.submit(Command.PAUSE)

    def resume(self) -> GameState:
        return self.submit(Command.RESUME)

    def toggle_pause(self) -> GameState:
        return self.submit(Command.TOGGLE_PAUSE)

    def move_left(self) -> GameState:
        return self.submit(Command.MOVE_LEFT)

    def move_right(self) -> GameState:
        return self.submit(Command.MOVE_RIGHT)

    def soft_drop(self) -> GameState:
        return self.submit(Command.SOFT_DROP)

    def hard_drop(self) -> GameState:
        return self.submit(Command.HARD_DROP)

    def rotate(self) -> GameState:
        return self.submit(Command.ROTATE)

    def tick(self) -> GameState:
        """Apply a gravity step outside the scheduler (e.g. from tests)."""

        return self.submit(Command.TICK)

    def snapshot(self) -> Snapshot:
        return self.state.snapshot()
