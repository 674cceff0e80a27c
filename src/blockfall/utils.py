"""Utility helpers for the engine."""

from __future__ import annotations

from typing import List, Optional

from .board import Board, PIECE_VALUES
from .tetromino import Tetromino


def is_valid_placement(piece: Tetromino, board: Board, dx: int = 0, dy: int = 0) -> bool:
    """Return ``True`` if ``piece`` translated by ``dx``/``dy`` fits on ``board``.

    Every occupied block must stay within the board's columns and above its
    floor, and must not overlap a locked cell.  Blocks above the top edge
    (negative rows) are allowed: a freshly spawned piece may still be entering
    the board.  Every move, rotation, spawn and drop is validated here before
    it is applied.
    """

    for row, col in piece.blocks():
        new_row = row + dy
        new_col = col + dx
        if not 0 <= new_col < board.width or new_row >= board.height:
            return False
        if new_row >= 0 and not board.is_empty(new_row, new_col):
            return False
    return True


def drop_distance(piece: Tetromino, board: Board) -> int:
    """Return how many rows ``piece`` can fall before hitting an obstruction.

    The result is the largest ``dy >= 0`` for which every offset from ``1`` to
    ``dy`` is a valid placement.
    """

    distance = 0
    while is_valid_placement(piece, board, 0, distance + 1):
        distance += 1
    return distance


def render_grid(board: Board, active: Optional[Tetromino] = None) -> List[List[int]]:
    """Return a copy of the board grid with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without mutating the underlying board state (i.e. without locking the
    piece).  Cells occupied by the active piece receive the mapped integer
    value for the piece's shape; blocks above the visible grid are skipped.
    """

    grid = board.to_list()
    if active is not None:
        for r, c in active.blocks():
            if 0 <= r < board.height and 0 <= c < board.width:
                grid[r][c] = PIECE_VALUES[active.kind]
    return grid
