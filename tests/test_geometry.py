import numpy as np
import pytest

from plinko.config import BoardLayout, WallStyle
from plinko.geometry import Board, WallSegment, build_geometry, fit_board


def test_board_scale():
    assert Board(400, 700).scale == 1.0
    assert Board(800, 1400).scale == 2.0
    with pytest.raises(ValueError):
        Board(0, 700)


def test_peg_field_layout():
    geo = build_geometry(Board(400, 700), BoardLayout())
    assert geo.pegs.shape == (80, 2)
    # field centred vertically: (700 - 6 * 38) / 2
    assert geo.peg_start_y == pytest.approx(236.0)
    assert geo.pegs[0] == pytest.approx([25.0, 236.0])

    row0 = geo.pegs[:11]
    row1 = geo.pegs[11:23]
    assert row0[:, 0].mean() == pytest.approx(200.0)
    assert row1[:, 0].mean() == pytest.approx(200.0)
    assert np.diff(row1[:, 0]) == pytest.approx(np.full(11, 35.0))
    assert row1[0, 1] - row0[0, 1] == pytest.approx(38.0)


def test_pegs_are_read_only():
    geo = build_geometry(Board(), BoardLayout())
    with pytest.raises(ValueError):
        geo.pegs[0, 0] = 0.0


def test_geometry_scales_with_board():
    small = build_geometry(Board(400, 700), BoardLayout())
    big = build_geometry(Board(800, 1400), BoardLayout())
    assert big.peg_radius == pytest.approx(2 * small.peg_radius)
    assert big.ball_radius == pytest.approx(2 * small.ball_radius)
    assert big.pegs[1, 0] - big.pegs[0, 0] == pytest.approx(70.0)
    assert big.dividers == pytest.approx(tuple(2 * d for d in small.dividers))


def test_build_is_idempotent():
    board, layout = Board(360, 640), BoardLayout(wall_style=WallStyle.ZIGZAG)
    a = build_geometry(board, layout)
    b = build_geometry(board, layout)
    assert np.array_equal(a.pegs, b.pegs)
    assert a.walls == b.walls
    assert a.dividers == b.dividers
    assert (a.slot_y, a.slot_height) == (b.slot_y, b.slot_height)


def test_bin_row_and_dividers():
    geo = build_geometry(Board(400, 700), BoardLayout())
    assert geo.slot_y == pytest.approx(560.0)
    assert geo.slot_height == pytest.approx(126.0)
    assert len(geo.dividers) == 8
    assert geo.n_bins == 7
    assert geo.dividers[0] == pytest.approx(40.0)
    assert geo.dividers[-1] == pytest.approx(360.0)
    assert np.diff(geo.dividers) == pytest.approx(np.full(7, 320.0 / 7))


def test_bin_index():
    geo = build_geometry(Board(400, 700), BoardLayout())
    assert geo.bin_index(40.0) == 0
    assert geo.bin_index(geo.dividers[1]) == 1
    assert geo.bin_index(200.0) == 3
    assert geo.bin_index(360.0) == 6
    assert geo.bin_index(39.0) is None
    assert geo.bin_index(361.0) is None
    assert geo.bin_centers()[3] == pytest.approx(200.0)


def test_diagonal_walls():
    geo = build_geometry(Board(400, 700), BoardLayout(wall_style=WallStyle.DIAGONAL))
    left, right = geo.walls
    assert left == WallSegment(pytest.approx(72.0), pytest.approx(216.0),
                               pytest.approx(40.0), pytest.approx(560.0))
    assert right.x1 == pytest.approx(328.0)
    assert right.x2 == pytest.approx(360.0)


def test_zigzag_walls():
    layout = BoardLayout(wall_style=WallStyle.ZIGZAG, zigzag_segments=4)
    geo = build_geometry(Board(400, 700), layout)
    assert len(geo.walls) == 8
    left, right = geo.walls[:4], geo.walls[4:]

    # margin 24, inset 20: vertices alternate 44 / 24 starting inset
    assert [s.x1 for s in left] == pytest.approx([44.0, 24.0, 44.0, 24.0])
    assert [s.x2 for s in left] == pytest.approx([24.0, 44.0, 24.0, 44.0])
    assert [s.x1 for s in right] == pytest.approx([356.0, 376.0, 356.0, 376.0])

    for a, b in zip(left, left[1:]):
        assert (a.x2, a.y2) == pytest.approx((b.x1, b.y1))
    assert left[0].y1 == pytest.approx(216.0)
    assert left[-1].y2 == pytest.approx(560.0)


def test_no_walls():
    geo = build_geometry(Board(), BoardLayout(wall_style=WallStyle.NONE))
    assert geo.walls == ()


def test_fit_board():
    board = fit_board(1000, 800)
    assert board.height == pytest.approx(760.0)
    assert board.width == pytest.approx(433.2)

    narrow = fit_board(300, 1000)
    assert narrow.width == pytest.approx(285.0)
    assert narrow.height == pytest.approx(500.0)
