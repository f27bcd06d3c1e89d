"""
Equidistant letter sequence matching for els-finder.

Scans every grid cell holding a phrase's first letter, at every stride in
the requested range and in every direction, and keeps the placements where
all letters of the phrase line up.
"""

from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Tuple

from elsfinder.grid import DIRECTIONS, Direction, Grid


class SearchCancelled(Exception):
    """Raised when the caller's cancel callback asks the scan to stop."""
    pass


@dataclass(frozen=True)
class LetterPosition:
    """One matched letter and the grid cell it was read from."""
    x: int
    y: int
    letter: str


@dataclass(frozen=True)
class CandidateMatch:
    """A placement of a phrase at a fixed stride and direction."""
    phrase: str
    normalized: str
    x: int
    y: int
    stride: int
    direction: Direction
    positions: Tuple[LetterPosition, ...]

    @property
    def key(self) -> tuple:
        """Identity used to report a placement only once."""
        return (self.phrase, self.x, self.y, self.stride,
                self.direction.dx, self.direction.dy)

    @property
    def letters(self) -> str:
        return "".join(p.letter for p in self.positions)


def locate(
    grid: Grid,
    phrase: str,
    normalized: str,
    min_distance: int,
    max_distance: int,
    cancel: Optional[Callable[[], bool]] = None,
) -> Iterator[CandidateMatch]:
    """
    Yield every placement of `normalized` in the grid.

    Args:
        grid: Grid built from the normalized text.
        phrase: Phrase as supplied by the caller (kept for reporting).
        normalized: The phrase after normalization; must be non-empty.
        min_distance: Smallest stride to try (inclusive).
        max_distance: Largest stride to try (inclusive).
        cancel: Optional callback polled before each start cell.

    Raises:
        SearchCancelled: If `cancel` returns True.
    """
    first = normalized[0]
    for x, y, ch in grid.cells():
        if cancel is not None and cancel():
            raise SearchCancelled("Search cancelled by caller")
        if ch != first:
            continue

        for stride in range(min_distance, max_distance + 1):
            for direction in DIRECTIONS:
                if direction.is_plain_reading(stride):
                    continue
                positions = _match_at(grid, normalized, x, y, stride, direction)
                if positions is not None:
                    yield CandidateMatch(
                        phrase=phrase,
                        normalized=normalized,
                        x=x,
                        y=y,
                        stride=stride,
                        direction=direction,
                        positions=positions,
                    )


def _match_at(
    grid: Grid,
    normalized: str,
    x: int,
    y: int,
    stride: int,
    direction: Direction,
) -> Optional[Tuple[LetterPosition, ...]]:
    """Return the letter positions if the phrase lines up, else None."""
    positions: List[LetterPosition] = []
    for i, letter in enumerate(normalized):
        cx = x + i * stride * direction.dx
        cy = y + i * stride * direction.dy
        if not grid.contains(cx, cy) or grid.char_at(cx, cy) != letter:
            return None
        positions.append(LetterPosition(cx, cy, letter))
    return tuple(positions)


def is_genuine(grid: Grid, match: CandidateMatch, window: int = 3) -> bool:
    """
    Reject stride-1 placements that are plain text read in some direction.

    Reads up to `window` * phrase length characters from the start cell in
    the match direction at stride 1; if the phrase occurs contiguously in
    that reading, the match is not a hidden sequence. Larger strides are
    always genuine.
    """
    if match.stride != 1:
        return True
    reading = "".join(grid.walk(
        match.x, match.y, match.direction, 1, len(match.normalized) * window
    ))
    return match.normalized not in reading
