import pytest

from elsfinder.grid import build_grid, row_width
from elsfinder.locator import SearchCancelled, is_genuine, locate


def _grid(text):
    return build_grid(text, row_width(len(text)))


def test_finds_stride_three_horizontal(stride3_text):
    grid = _grid(stride3_text)
    matches = list(locate(grid, "AB", "AB", 2, 5))
    assert len(matches) == 1
    m = matches[0]
    assert (m.x, m.y, m.stride) == (0, 0, 3)
    assert (m.direction.dx, m.direction.dy) == (1, 0)
    assert [(p.x, p.y, p.letter) for p in m.positions] == [(0, 0, "A"), (3, 0, "B")]
    assert m.letters == "AB"
    assert is_genuine(grid, m)


def test_forward_horizontal_stride_one_never_scanned():
    grid = _grid("ABXXXXXXXXXXXXXX")
    assert list(locate(grid, "AB", "AB", 1, 1)) == []


def test_stride_one_reverse_reading_is_not_genuine():
    grid = _grid("BAXXXXXXXXXXXXXX")
    matches = list(locate(grid, "AB", "AB", 1, 1))
    assert len(matches) == 1
    assert (matches[0].direction.dx, matches[0].direction.dy) == (-1, 0)
    assert not is_genuine(grid, matches[0])


def test_stride_one_vertical_reading_is_not_genuine():
    grid = _grid("XAXXXBXXXXXXXXXX")
    matches = list(locate(grid, "AB", "AB", 1, 1))
    assert [(m.direction.dx, m.direction.dy) for m in matches] == [(0, 1)]
    assert not is_genuine(grid, matches[0])


def test_out_of_bounds_aborts_placement():
    # B is 4 characters after A in the text, but the grid wraps it to (0, 1)
    grid = _grid("AXXXBXXXXXXXXXXX")
    assert list(locate(grid, "AB", "AB", 4, 4)) == []


def test_key_identifies_placement(stride3_text):
    grid = _grid(stride3_text)
    m = next(locate(grid, "ab", "AB", 3, 3))
    assert m.key == ("ab", 0, 0, 3, 1, 0)


def test_cancel_stops_scan(stride3_text):
    grid = _grid(stride3_text)
    with pytest.raises(SearchCancelled):
        list(locate(grid, "AB", "AB", 2, 5, cancel=lambda: True))
