"""
Context reconstruction around a confirmed ELS match.

Two views are produced: the "hidden paragraph" sampled at the match's own
stride and direction, and windows of the original text around each letter.
"""

from typing import Iterable, List

from elsfinder.grid import Grid
from elsfinder.locator import CandidateMatch, LetterPosition


def hidden_paragraph(grid: Grid, match: CandidateMatch, length: int = 200) -> str:
    """
    Sample up to `length` characters along the match's stride and direction.

    length // 2 cells are read backwards from the start cell and the
    remaining cells forwards, the start cell included. Both sides stop at
    the grid edge, so the result may be shorter than `length`.
    """
    before = length // 2
    after = length - before
    dx = match.direction.dx * match.stride
    dy = match.direction.dy * match.stride

    backward: List[str] = []
    x, y = match.x - dx, match.y - dy
    for _ in range(before):
        if not grid.contains(x, y):
            break
        backward.append(grid.char_at(x, y))
        x -= dx
        y -= dy
    backward.reverse()

    forward = grid.walk(match.x, match.y, match.direction, match.stride, after)
    return "".join(backward) + "".join(forward)


def highlight(paragraph: str, letters: str, length: int = 200) -> str:
    """
    Splice "[letters]" into the middle of a hidden paragraph.

    Replaces the slice [length//2 - n//2, length//2 + ceil(n/2)) where n is
    the number of letters. The offsets are fixed relative to `length`, so a
    paragraph clipped by the grid edge is spliced at the same offsets.
    """
    half = length // 2
    n = len(letters)
    head = paragraph[:max(0, half - n // 2)]
    tail = paragraph[half + (n + 1) // 2:]
    return f"{head}[{letters}]{tail}"


def literal_context(
    original: str,
    positions: Iterable[LetterPosition],
    width: int,
    radius: int = 20,
) -> str:
    """
    Windows of the original, unnormalized text around each matched letter.

    Each letter's grid cell is converted to y * width + x and used directly
    as an offset into `original`. Normalization removes characters, so the
    offset is an approximation of where the letter came from. Each window
    runs from `radius` characters before the offset to `radius` after it,
    clipped so it never reaches the final character of the text.
    """
    windows: List[str] = []
    last = len(original) - 1
    for pos in positions:
        offset = pos.y * width + pos.x
        start = max(0, offset - radius)
        end = min(last, offset + radius)
        windows.append(f"[...{original[start:end]}...]")
    return " ".join(windows)
