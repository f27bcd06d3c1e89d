"""
Grid layout and scan directions for els-finder.

The normalized text is filled left-to-right, top-to-bottom into rows of a
fixed width. Cell (x, y) always maps to linear index y * width + x.
"""

import math
from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class Direction:
    """A unit grid step."""
    dx: int
    dy: int
    label: str

    def is_plain_reading(self, stride: int) -> bool:
        """Forward horizontal at stride 1 is just the text read normally."""
        return stride == 1 and self.dx == 1 and self.dy == 0


DIRECTIONS: Tuple[Direction, ...] = (
    Direction(1, 0, "horizontal →"),
    Direction(-1, 0, "horizontal ←"),
    Direction(0, 1, "vertical ↓"),
    Direction(0, -1, "vertical ↑"),
    Direction(1, 1, "diagonal ↘"),
    Direction(-1, 1, "diagonal ↙"),
    Direction(1, -1, "diagonal ↗"),
    Direction(-1, -1, "diagonal ↖"),
)


@dataclass(frozen=True)
class Grid:
    """Normalized text reshaped into rows; the last row may be shorter."""
    rows: Tuple[str, ...]
    width: int

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def contains(self, x: int, y: int) -> bool:
        """Return True if (x, y) is a real cell, honouring the ragged last row."""
        return 0 <= y < len(self.rows) and 0 <= x < len(self.rows[y])

    def char_at(self, x: int, y: int) -> str:
        return self.rows[y][x]

    def linear_index(self, x: int, y: int) -> int:
        return y * self.width + x

    def cells(self):
        """Yield (x, y, char) in fill order."""
        for y, row in enumerate(self.rows):
            for x, ch in enumerate(row):
                yield x, y, ch

    def walk(
        self,
        x: int,
        y: int,
        direction: Direction,
        stride: int,
        steps: int,
    ) -> List[str]:
        """
        Read up to `steps` characters starting at (x, y), moving by
        stride * direction each time. Stops at the first cell off the grid.
        """
        chars: List[str] = []
        for _ in range(steps):
            if not self.contains(x, y):
                break
            chars.append(self.rows[y][x])
            x += direction.dx * stride
            y += direction.dy * stride
        return chars


def row_width(length: int) -> int:
    """Width of a square-ish grid for `length` characters (at least 1)."""
    return max(1, math.ceil(math.sqrt(length)))


def build_grid(text: str, width: int) -> Grid:
    """Split text into consecutive rows of `width` characters."""
    if width < 1:
        raise ValueError(f"Grid width must be at least 1, got {width}")
    rows = tuple(text[i:i + width] for i in range(0, len(text), width))
    return Grid(rows=rows, width=width)
