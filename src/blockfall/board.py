"""Board representation for the playfield.

The engine treats boards as values: :func:`lock` and :func:`clear_full_rows`
return new :class:`Board` instances and never modify their input.  The cell
setters remain available for building test positions.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .tetromino import Tetromino, TetrominoType


# Dimensions of the standard board.
WIDTH = 10
HEIGHT = 20

EMPTY = 0

Grid = NDArray[np.uint8]

# Mapping from ``TetrominoType`` to the colour identifier stored in the grid.
# ``0`` represents an empty cell.
PIECE_VALUES = {t: i + 1 for i, t in enumerate(TetrominoType)}
VALUE_PIECES = {v: t for t, v in PIECE_VALUES.items()}


def create_empty_grid() -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((HEIGHT, WIDTH), dtype=np.uint8)


class Board:
    """Board holding the locked cells."""

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self, grid: Grid | None = None) -> None:
        if grid is None:
            grid = create_empty_grid()
        self.grid: Grid = grid

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Board":
        """Build a board from nested rows of colour identifiers.

        Raises:
            ValueError: If the dimensions differ from the standard board or a
                value is neither empty nor a known colour identifier.
        """

        if len(rows) != HEIGHT:
            raise ValueError("Grid height mismatch")
        if any(len(row) != WIDTH for row in rows):
            raise ValueError("Grid width mismatch")
        grid = np.asarray(rows, dtype=np.int64)
        if not np.isin(grid, [EMPTY, *VALUE_PIECES]).all():
            raise ValueError("Unknown cell value")
        return cls(grid.astype(np.uint8))

    def copy(self) -> "Board":
        return Board(self.grid.copy())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self.grid, other.grid))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Board(filled={int(np.count_nonzero(self.grid))})"

    def get_cell(self, row: int, col: int) -> int:
        """Safely return the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            return int(self.grid[row, col])
        raise IndexError("Cell out of bounds")

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Safely set the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            self.grid[row, col] = np.uint8(value)
        else:
            raise IndexError("Cell out of bounds")

    def is_empty(self, row: int, col: int) -> bool:
        """Return ``True`` if the cell at ``(row, col)`` is empty."""

        return bool(self.grid[row, col] == EMPTY)

    def to_list(self) -> List[List[int]]:
        """Return the grid as nested Python lists."""

        return self.grid.tolist()


def lock(piece: Tetromino, board: Board) -> Board:
    """Return a copy of ``board`` with ``piece`` merged into it.

    Blocks that are still above the visible grid (negative rows) are dropped.
    The input board is left unmodified.
    """

    locked = board.copy()
    visible = [(r, c) for r, c in piece.blocks() if r >= 0]
    if not visible:
        return locked

    rows, cols = np.asarray(visible, dtype=np.int16).T
    locked.grid[rows, cols] = np.uint8(PIECE_VALUES[piece.kind])
    return locked


def clear_full_rows(board: Board) -> Tuple[Board, int]:
    """Remove completed rows and return ``(new_board, cleared)``.

    The surviving rows keep their top-to-bottom order and the board is padded
    with empty rows at the top back to its full height.
    """

    full_rows = np.all(board.grid != EMPTY, axis=1)
    cleared = int(np.count_nonzero(full_rows))
    if not cleared:
        return board.copy(), 0
    remaining = board.grid[~full_rows]
    new_rows = np.zeros((cleared, board.width), dtype=board.grid.dtype)
    return Board(np.vstack((new_rows, remaining))), cleared
