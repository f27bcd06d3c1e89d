import pytest

from elsfinder.grid import DIRECTIONS, Direction, build_grid, row_width


def test_rows_reproduce_text_with_ragged_tail():
    grid = build_grid("ABCDEFGHIJ", 4)
    assert grid.rows == ("ABCD", "EFGH", "IJ")
    assert grid.row_count == 3
    assert "".join(grid.rows) == "ABCDEFGHIJ"


def test_contains_respects_ragged_last_row():
    grid = build_grid("ABCDEFGHIJ", 4)
    assert grid.contains(1, 2)
    assert not grid.contains(2, 2)
    assert not grid.contains(-1, 0)
    assert not grid.contains(0, 3)
    assert not grid.contains(4, 0)


def test_linear_index_matches_fill_order():
    text = "ABCDEFGHIJ"
    grid = build_grid(text, 4)
    for x, y, ch in grid.cells():
        assert text[grid.linear_index(x, y)] == ch


@pytest.mark.parametrize("length,width", [(0, 1), (1, 1), (10, 4), (16, 4), (17, 5)])
def test_row_width_is_ceil_sqrt(length, width):
    assert row_width(length) == width


def test_empty_text_builds_empty_grid():
    assert build_grid("", 1).rows == ()


def test_zero_width_rejected():
    with pytest.raises(ValueError):
        build_grid("ABC", 0)


def test_walk_stops_at_edge():
    grid = build_grid("ABCDEFGHIJKLMNOP", 4)
    diagonal = Direction(1, 1, "diagonal ↘")
    assert grid.walk(0, 0, diagonal, 1, 10) == ["A", "F", "K", "P"]
    assert grid.walk(0, 0, diagonal, 2, 10) == ["A", "K"]


def test_eight_distinct_directions():
    steps = {(d.dx, d.dy) for d in DIRECTIONS}
    assert len(steps) == 8
    assert (0, 0) not in steps


def test_only_forward_horizontal_stride_one_is_plain_reading():
    plain = [(d.dx, d.dy, s) for d in DIRECTIONS for s in (1, 2) if d.is_plain_reading(s)]
    assert plain == [(1, 0, 1)]
