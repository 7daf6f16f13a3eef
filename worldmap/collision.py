"""Collision index: dense blocked/free lookup over the tile grid.

World files list blocked tiles sparsely as flat indices. Movement checks
happen far more often than loads, so the index is expanded once into a
row-major grid of booleans.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple


@dataclass
class CollisionIndex:
    """Row-major grid where ``grid[row][col]`` is True for blocked tiles."""

    width: int
    height: int
    grid: List[List[bool]] = field(default_factory=list)

    @classmethod
    def build(cls, width: int, height: int, blocked: Iterable[int]) -> "CollisionIndex":
        """Expand blocked tile indices into a ``height × width`` grid.

        Cell ``(row, col)`` is blocked iff ``row * width + col`` appears in
        ``blocked``. Indices outside the grid are ignored.
        """
        blocked_set = set(blocked)
        grid = [
            [row * width + col in blocked_set for col in range(width)]
            for row in range(height)
        ]
        return cls(width=width, height=height, grid=grid)

    @property
    def shape(self) -> Tuple[int, int]:
        return len(self.grid), len(self.grid[0]) if self.grid else 0

    def is_out_of_bounds(self, x: int, y: int) -> bool:
        # Row 0 and column 0 count as out of bounds.
        return x <= 0 or x >= self.width or y <= 0 or y >= self.height

    def is_colliding(self, x: int, y: int) -> bool:
        """True if the tile is blocked. Out-of-bounds tiles never collide."""
        if self.is_out_of_bounds(x, y):
            return False
        return self.grid[y][x]
