"""Engine configuration."""

from __future__ import annotations

import os
import random
from dataclasses import dataclass
from typing import Mapping, Optional


# Milliseconds between automatic downward moves
GRAVITY_MS = 500
# Points awarded for each cleared row
POINTS_PER_LINE = 100


@dataclass(frozen=True)
class EngineConfig:
    gravity_ms: int = GRAVITY_MS
    points_per_line: int = POINTS_PER_LINE
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.gravity_ms <= 0:
            raise ValueError(f"gravity_ms must be positive, got {self.gravity_ms}")
        if self.points_per_line < 0:
            raise ValueError(f"points_per_line must not be negative, got {self.points_per_line}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        """Build a config from ``BLOCKFALL_*`` environment variables.

        Unset variables fall back to the defaults.  Values that are not
        integers raise :class:`ValueError`.
        """

        env = os.environ if environ is None else environ
        seed = env.get("BLOCKFALL_SEED")
        return cls(
            gravity_ms=int(env.get("BLOCKFALL_GRAVITY_MS", GRAVITY_MS)),
            points_per_line=int(env.get("BLOCKFALL_POINTS_PER_LINE", POINTS_PER_LINE)),
            seed=int(seed) if seed not in (None, "") else None,
        )

    def make_rng(self) -> random.Random:
        """Return a piece-selection source seeded from ``seed``."""

        return random.Random(self.seed)
