"""
Static collision geometry: pegs, guide walls and bin dividers.

Built once per board size by `build_geometry`; never patched afterwards.
"""

import numpy as np
from dataclasses import dataclass
from typing import List, Optional, Tuple

import plinko as P
from plinko.config import BoardLayout, WallStyle


@dataclass(frozen=True)
class Board:
    width: float = P.BOARD_WIDTH
    height: float = P.BOARD_HEIGHT
    reference_width: float = P.REFERENCE_WIDTH

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Board size must be positive, got {self.width}x{self.height}")

    @property
    def scale(self) -> float:
        return self.width / self.reference_width


@dataclass(frozen=True)
class WallSegment:
    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def length(self) -> float:
        return float(np.hypot(self.x2 - self.x1, self.y2 - self.y1))


@dataclass(frozen=True, eq=False)
class Geometry:
    board: Board
    pegs: np.ndarray                     # (n_pegs, 2) peg centres
    peg_radius: float
    ball_radius: float
    walls: Tuple[WallSegment, ...]
    dividers: Tuple[float, ...]          # n_bins + 1 x-positions
    slot_y: float
    slot_height: float
    bin_labels: Tuple[str, ...]
    peg_start_y: float = 0.0
    wall_style: WallStyle = WallStyle.NONE

    @property
    def width(self) -> float:
        return self.board.width

    @property
    def height(self) -> float:
        return self.board.height

    @property
    def scale(self) -> float:
        return self.board.scale

    @property
    def n_bins(self) -> int:
        return len(self.dividers) - 1

    def in_bin_row(self, y: float) -> bool:
        return self.slot_y <= y <= self.slot_y + self.slot_height

    def bin_index(self, x: float) -> Optional[int]:
        """Bin whose [left, right) span holds x; the last bin is closed on the right."""
        if self.n_bins < 1 or x < self.dividers[0] or x > self.dividers[-1]:
            return None
        idx = int(np.searchsorted(self.dividers, x, side='right')) - 1
        return min(idx, self.n_bins - 1)

    def bin_centers(self) -> List[float]:
        return [(self.dividers[i] + self.dividers[i + 1]) / 2 for i in range(self.n_bins)]


def build_pegs(board: Board, layout: BoardLayout) -> Tuple[np.ndarray, float]:
    """Row-centred peg grid, field centred vertically. Returns (pegs, peg_start_y)."""
    pitch_x = layout.peg_pitch_x * board.scale
    pitch_y = layout.peg_pitch_y * board.scale
    field_height = (len(layout.peg_rows) - 1) * pitch_y
    start_y = (board.height - field_height) / 2
    center_x = board.width / 2

    pegs = []
    for r, cols in enumerate(layout.peg_rows):
        row_width = (cols - 1) * pitch_x
        start_x = center_x - row_width / 2
        y = start_y + r * pitch_y
        for c in range(cols):
            pegs.append((start_x + c * pitch_x, y))
    pegs = np.array(pegs, dtype=float).reshape(-1, 2)
    pegs.flags.writeable = False
    return pegs, start_y


def build_diagonal_walls(board: Board, layout: BoardLayout,
                         top_y: float, bottom_y: float) -> List[WallSegment]:
    w = board.width
    top, bottom = layout.diagonal_top_ratio, layout.diagonal_bottom_ratio
    return [
        WallSegment(w * top, top_y, w * bottom, bottom_y),
        WallSegment(w * (1 - top), top_y, w * (1 - bottom), bottom_y),
    ]


def build_zigzag_walls(board: Board, layout: BoardLayout,
                       top_y: float, bottom_y: float) -> List[WallSegment]:
    """Sawtooth guides: vertices alternate inset / flush, starting inset."""
    w = board.width
    k = layout.zigzag_segments
    margin = layout.zigzag_margin_ratio * w
    inset = layout.zigzag_inset_ratio * w
    ys = np.linspace(top_y, bottom_y, k + 1)
    offsets = [inset if j % 2 == 0 else 0.0 for j in range(k + 1)]

    walls = []
    for j in range(k):
        left_a, left_b = margin + offsets[j], margin + offsets[j + 1]
        walls.append(WallSegment(left_a, float(ys[j]), left_b, float(ys[j + 1])))
    for j in range(k):
        right_a, right_b = w - margin - offsets[j], w - margin - offsets[j + 1]
        walls.append(WallSegment(right_a, float(ys[j]), right_b, float(ys[j + 1])))
    return walls


def build_dividers(board: Board, layout: BoardLayout) -> Tuple[float, ...]:
    bins_width = board.width * layout.bins_width_ratio
    bins_start = (board.width - bins_width) / 2
    slot_w = bins_width / layout.n_bins
    return tuple(bins_start + i * slot_w for i in range(layout.n_bins + 1))


def build_geometry(board: Board, layout: BoardLayout, ball_radius: float = P.BALL_RADIUS) -> Geometry:
    """All static geometry for `board`. Pure: same inputs, same output."""
    scale = board.scale
    pegs, peg_start_y = build_pegs(board, layout)
    slot_y = board.height * layout.slot_y_ratio
    slot_height = board.height * layout.slot_height_ratio

    top_y = peg_start_y - layout.wall_top_offset * scale
    if layout.wall_style == WallStyle.DIAGONAL:
        walls = build_diagonal_walls(board, layout, top_y, slot_y)
    elif layout.wall_style == WallStyle.ZIGZAG:
        walls = build_zigzag_walls(board, layout, top_y, slot_y)
    else:
        walls = []

    return Geometry(
        board=board,
        pegs=pegs,
        peg_radius=layout.peg_radius * scale,
        ball_radius=ball_radius * scale,
        walls=tuple(walls),
        dividers=build_dividers(board, layout),
        slot_y=slot_y,
        slot_height=slot_height,
        bin_labels=tuple(layout.bin_labels),
        peg_start_y=peg_start_y,
        wall_style=layout.wall_style,
    )


def fit_board(viewport_w: float, viewport_h: float,
              aspect: float = P.VIEWPORT_ASPECT, fill: float = P.VIEWPORT_FILL) -> Board:
    """Largest portrait board (width = aspect * height) that fits the viewport."""
    height = viewport_h * fill
    width = height * aspect
    if width > viewport_w:
        width = viewport_w * fill
        height = width / aspect
    return Board(width=width, height=height)
