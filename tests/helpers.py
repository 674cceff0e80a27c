"""Shared test doubles."""

from __future__ import annotations

from typing import Sequence

from blockfall.tetromino import TetrominoType


class SequenceRng:
    """Stand-in random source returning a fixed sequence of piece types.

    The position is a plain integer, so ``copy.copy`` yields an independent
    source in the same way it does for ``random.Random``.
    """

    def __init__(self, kinds: Sequence[TetrominoType]) -> None:
        self._kinds = tuple(kinds)
        self._index = 0

    def choice(self, seq):
        if self._index >= len(self._kinds):
            return seq[0]
        kind = self._kinds[self._index]
        self._index += 1
        return kind
