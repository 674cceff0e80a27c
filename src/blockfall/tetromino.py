"""Tetromino definitions and basic behaviour.

Pieces are immutable values: moving or rotating a :class:`Tetromino` returns a
new instance and leaves the original untouched.  Shapes are stored as small
rectangular 0/1 matrices whose dimensions change under rotation.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Tuple

Shape = Tuple[Tuple[int, ...], ...]


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


def rotate_clockwise(shape: Shape) -> Shape:
    """Return ``shape`` rotated 90 degrees clockwise.

    An ``R x C`` matrix becomes ``C x R`` with ``result[j][R - 1 - i]`` equal
    to ``shape[i][j]``.  No offset correction is applied, so non-square
    pieces may appear to drift sideways when rotated.
    """

    return tuple(tuple(column) for column in zip(*shape[::-1]))


# Spawn orientations.  Every other orientation is derived with
# ``rotate_clockwise``.
BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: ((1, 1, 1, 1),),
    TetrominoType.O: ((1, 1), (1, 1)),
    TetrominoType.T: ((0, 1, 0), (1, 1, 1)),
    TetrominoType.S: ((0, 1, 1), (1, 1, 0)),
    TetrominoType.Z: ((1, 1, 0), (0, 1, 1)),
    TetrominoType.J: ((1, 0, 0), (1, 1, 1)),
    TetrominoType.L: ((0, 0, 1), (1, 1, 1)),
}

# Display colours used by front-ends.
SHAPE_COLORS: Dict[TetrominoType, str] = {
    TetrominoType.I: "#00ffff",
    TetrominoType.O: "#ffff00",
    TetrominoType.T: "#800080",
    TetrominoType.S: "#00ff00",
    TetrominoType.Z: "#ff0000",
    TetrominoType.J: "#0000ff",
    TetrominoType.L: "#ffa500",
}


@dataclass(frozen=True)
class Tetromino:
    """Active falling piece in the game."""

    kind: TetrominoType
    shape: Shape
    position: Tuple[int, int] = (0, 0)  # (row, col)

    @classmethod
    def of(cls, kind: TetrominoType, position: Tuple[int, int] = (0, 0)) -> "Tetromino":
        """Return ``kind`` in its spawn orientation at ``position``."""

        return cls(kind, BASE_SHAPES[kind], position)

    @property
    def row(self) -> int:
        return self.position[0]

    @property
    def col(self) -> int:
        return self.position[1]

    @property
    def width(self) -> int:
        return len(self.shape[0])

    @property
    def height(self) -> int:
        return len(self.shape)

    def moved(self, dx: int, dy: int) -> "Tetromino":
        """Return a copy moved by the given offsets.

        ``dx`` moves horizontally (columns) and ``dy`` moves vertically
        (rows).  The piece's position is stored as ``(row, col)``.
        """

        row, col = self.position
        return replace(self, position=(row + dy, col + dx))

    def rotated(self) -> "Tetromino":
        """Return a copy rotated clockwise about the same anchor."""

        return replace(self, shape=rotate_clockwise(self.shape))

    def cells(self) -> List[Tuple[int, int]]:
        """Return the ``(row, col)`` offsets of occupied shape cells."""

        return [
            (r, c)
            for r, line in enumerate(self.shape)
            for c, value in enumerate(line)
            if value
        ]

    def blocks(self) -> List[Tuple[int, int]]:
        """Return the global block coordinates for this piece."""

        row, col = self.position
        return [(row + dr, col + dc) for dr, dc in self.cells()]


def spawn(rng: random.Random) -> Tetromino:
    """Pick a variant uniformly with ``rng`` and place it at the top centre.

    The piece starts in its base orientation at row ``0``, horizontally centred
    over the board.  The placement is not validated here; callers check it
    with :func:`blockfall.utils.is_valid_placement`.
    """

    # Local import to avoid a circular import with ``board``.
    from .board import WIDTH

    kind = rng.choice(list(TetrominoType))
    shape = BASE_SHAPES[kind]
    return Tetromino(kind, shape, (0, WIDTH // 2 - len(shape[0]) // 2))
