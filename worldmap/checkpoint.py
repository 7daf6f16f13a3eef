"""Checkpoints: named rectangular regions used for spawning."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Checkpoint:
    """Axis-aligned tile rectangle ``[x, x+w) × [y, y+h)``."""

    id: int | str
    x: int
    y: int
    w: int
    h: int

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.w and self.y <= y < self.y + self.h

    def random_position(self, rng: Optional[random.Random] = None) -> Tuple[int, int]:
        """Return a tile drawn uniformly from the rectangle."""
        rng = rng or random
        return (
            rng.randrange(self.x, self.x + self.w),
            rng.randrange(self.y, self.y + self.h),
        )
