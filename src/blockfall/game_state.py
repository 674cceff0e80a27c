"""High level game state container.

A :class:`GameState` is an immutable session value.  Every command returns a
new state, or the very same object when the command is rejected, so callers
can detect a no-op with ``new is old``.  Randomness comes from the injected
``rng`` so seeded sessions replay deterministically.
"""

from __future__ import annotations

import copy
import logging
import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional

from .board import Board, clear_full_rows, lock
from .config import POINTS_PER_LINE
from .tetromino import Tetromino, spawn
from .utils import drop_distance, is_valid_placement, render_grid


LOGGER = logging.getLogger(__name__)


class Status(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of a session for renderers."""

    board: List[List[int]]
    active_piece_overlay: List[List[int]]
    score: int
    status: Status

    def as_dict(self) -> Dict[str, Any]:
        return {
            "board": self.board,
            "activePieceOverlay": self.active_piece_overlay,
            "score": self.score,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class GameState:
    """State of one game session."""

    board: Board = field(default_factory=Board)
    active: Optional[Tetromino] = None
    score: int = 0
    status: Status = Status.IDLE
    lines: int = 0
    pieces: int = 0
    points_per_line: int = POINTS_PER_LINE
    rng: random.Random = field(default_factory=random.Random, compare=False, repr=False)

    @property
    def playing(self) -> bool:
        return self.status is Status.PLAYING

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> "GameState":
        """Begin a fresh game from ``IDLE`` or ``GAME_OVER``."""

        if self.status not in (Status.IDLE, Status.GAME_OVER):
            return self
        fresh = replace(
            self,
            board=Board(),
            active=None,
            score=0,
            lines=0,
            pieces=0,
            status=Status.PLAYING,
        )
        return fresh._spawn_next(fresh.board)

    def pause(self) -> "GameState":
        if self.status is not Status.PLAYING:
            return self
        return replace(self, status=Status.PAUSED)

    def resume(self) -> "GameState":
        if self.status is not Status.PAUSED:
            return self
        return replace(self, status=Status.PLAYING)

    def toggle_pause(self) -> "GameState":
        """Pause while playing, resume while paused, otherwise do nothing."""

        if self.status is Status.PLAYING:
            return self.pause()
        return self.resume()

    # ------------------------------------------------------------------
    # Piece commands
    # ------------------------------------------------------------------
    def move_left(self) -> "GameState":
        return self._shift(-1)

    def move_right(self) -> "GameState":
        return self._shift(1)

    def rotate(self) -> "GameState":
        """Rotate the active piece clockwise in place if the result fits.

        There is no wall kick: a rotation blocked by a wall or a locked cell
        is simply ignored.
        """

        if not self.playing or self.active is None:
            return self
        rotated = self.active.rotated()
        if not is_valid_placement(rotated, self.board):
            return self
        return replace(self, active=rotated)

    def soft_drop(self) -> "GameState":
        return self._step_down()

    def tick(self) -> "GameState":
        """Apply one gravity step."""

        return self._step_down()

    def hard_drop(self) -> "GameState":
        """Drop the active piece as far as it goes and land it immediately."""

        if not self.playing or self.active is None:
            return self
        distance = drop_distance(self.active, self.board)
        return self._land(self.active.moved(0, distance))

    def snapshot(self) -> Snapshot:
        return Snapshot(
            board=self.board.to_list(),
            active_piece_overlay=render_grid(self.board, self.active),
            score=self.score,
            status=self.status,
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _shift(self, dx: int) -> "GameState":
        if not self.playing or self.active is None:
            return self
        if not is_valid_placement(self.active, self.board, dx, 0):
            return self
        return replace(self, active=self.active.moved(dx, 0))

    def _step_down(self) -> "GameState":
        if not self.playing or self.active is None:
            return self
        if is_valid_placement(self.active, self.board, 0, 1):
            return replace(self, active=self.active.moved(0, 1))
        return self._land(self.active)

    def _land(self, piece: Tetromino) -> "GameState":
        """Lock ``piece``, clear rows, score them and spawn the next piece."""

        board, cleared = clear_full_rows(lock(piece, self.board))
        if cleared:
            LOGGER.debug("Cleared %d row(s)", cleared)
        landed = replace(
            self,
            score=self.score + cleared * self.points_per_line,
            lines=self.lines + cleared,
            pieces=self.pieces + 1,
        )
        return landed._spawn_next(board)

    def _spawn_next(self, board: Board) -> "GameState":
        # Draw from a copy so earlier session values keep their own sequence.
        rng = copy.copy(self.rng)
        piece = spawn(rng)
        if not is_valid_placement(piece, board):
            LOGGER.info("Game over. Score: %d", self.score)
            return replace(self, board=board, active=None, status=Status.GAME_OVER, rng=rng)
        return replace(self, board=board, active=piece, rng=rng)
