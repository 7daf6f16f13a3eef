"""Tests for the collision index and its bounds convention."""

from worldmap.collision import CollisionIndex


def test_build_marks_blocked_tiles_row_major():
    index = CollisionIndex.build(4, 3, [1, 6, 11])

    assert index.shape == (3, 4)
    assert index.grid[0] == [False, True, False, False]
    assert index.grid[1] == [False, False, True, False]
    assert index.grid[2] == [False, False, False, True]


def test_out_of_range_indices_are_ignored():
    index = CollisionIndex.build(3, 3, [-1, 9, 100])

    assert index.shape == (3, 3)
    assert not any(cell for row in index.grid for cell in row)


def test_first_row_is_out_of_bounds_and_never_collides():
    index = CollisionIndex.build(3, 3, [0, 1, 2])

    # Tile (0, 0) is blocked in the grid but sits on the excluded edge.
    assert index.grid[0][0] is True
    assert index.is_out_of_bounds(0, 0) is True
    assert index.is_colliding(0, 0) is False
    assert index.is_colliding(1, 0) is False
    assert index.is_colliding(2, 0) is False


def test_bounds_convention_at_each_edge():
    index = CollisionIndex.build(3, 3, [])

    # Left edge: x == 0 is out, x == 1 is in
    assert index.is_out_of_bounds(0, 1) is True
    assert index.is_out_of_bounds(1, 1) is False
    # Right edge: x == width is out, x == width - 1 is in
    assert index.is_out_of_bounds(3, 1) is True
    assert index.is_out_of_bounds(2, 1) is False
    # Top edge: y == 0 is out
    assert index.is_out_of_bounds(1, 0) is True
    # Bottom edge: y == height is out, y == height - 1 is in
    assert index.is_out_of_bounds(1, 3) is True
    assert index.is_out_of_bounds(1, 2) is False


def test_interior_blocked_tile_collides():
    index = CollisionIndex.build(3, 3, [4])

    assert index.is_colliding(1, 1) is True
    assert index.is_colliding(2, 1) is False


def test_out_of_bounds_never_collides_even_when_everything_is_blocked():
    width, height = 5, 4
    index = CollisionIndex.build(width, height, range(width * height))

    for x in range(-2, width + 2):
        for y in range(-2, height + 2):
            if index.is_out_of_bounds(x, y):
                assert index.is_colliding(x, y) is False
            else:
                assert index.is_colliding(x, y) is True
