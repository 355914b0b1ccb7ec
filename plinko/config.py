"""
Immutable configuration for the board layout and the ball physics.

Every constant a variant of the game tweaks lives here, so a single
collision resolver and integrator cover all of them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

import plinko as P


class WallStyle(str, Enum):
    NONE = 'none'
    DIAGONAL = 'diagonal'
    ZIGZAG = 'zigzag'


@dataclass(frozen=True)
class BoardLayout:
    """Static geometry parameters, expressed at reference scale."""
    peg_rows: Tuple[int, ...] = P.PEG_ROWS
    peg_pitch_x: float = P.PEG_PITCH_X
    peg_pitch_y: float = P.PEG_PITCH_Y
    peg_radius: float = P.PEG_RADIUS
    bin_labels: Tuple[str, ...] = P.BIN_LABELS
    slot_y_ratio: float = P.SLOT_Y_RATIO
    slot_height_ratio: float = P.SLOT_HEIGHT_RATIO
    bins_width_ratio: float = P.BINS_WIDTH_RATIO
    wall_style: WallStyle = WallStyle.DIAGONAL
    wall_top_offset: float = P.WALL_TOP_OFFSET
    diagonal_top_ratio: float = P.DIAGONAL_TOP_RATIO
    diagonal_bottom_ratio: float = P.DIAGONAL_BOTTOM_RATIO
    zigzag_segments: int = P.ZIGZAG_SEGMENTS
    zigzag_margin_ratio: float = P.ZIGZAG_MARGIN_RATIO
    zigzag_inset_ratio: float = P.ZIGZAG_INSET_RATIO

    def __post_init__(self):
        if not self.bin_labels:
            raise ValueError("bin_labels must name at least one bin")
        if any(cols < 1 for cols in self.peg_rows):
            raise ValueError(f"peg_rows must be positive, got {self.peg_rows}")
        if not 0.0 < self.bins_width_ratio <= 1.0:
            raise ValueError(f"bins_width_ratio must be in (0, 1], got {self.bins_width_ratio}")
        if self.zigzag_segments < 1:
            raise ValueError(f"zigzag_segments must be >= 1, got {self.zigzag_segments}")
        # accept plain strings, e.g. from the command line
        object.__setattr__(self, 'wall_style', WallStyle(self.wall_style))

    @property
    def n_bins(self) -> int:
        return len(self.bin_labels)


@dataclass(frozen=True)
class PhysicsConfig:
    """Per-tick constants at reference scale; speeds are multiplied by the board scale."""
    ball_radius: float = P.BALL_RADIUS
    gravity: float = P.GRAVITY
    friction: float = P.FRICTION
    boundary_bounce: float = P.BOUNDARY_BOUNCE
    peg_bounce: float = P.PEG_BOUNCE
    wall_bounce: float = P.WALL_BOUNCE
    divider_bounce: float = P.DIVIDER_BOUNCE
    divider_clearance: float = P.DIVIDER_CLEARANCE
    divider_clamp: bool = True
    spawn_y: float = P.SPAWN_Y
    spawn_speed: float = P.SPAWN_SPEED
    settle_margin: float = P.SETTLE_MARGIN
    settle_margin_ratio: Optional[float] = None

    def __post_init__(self):
        if self.ball_radius <= 0:
            raise ValueError(f"ball_radius must be positive, got {self.ball_radius}")
        if not 0.0 < self.friction <= 1.0:
            raise ValueError(f"friction must be in (0, 1], got {self.friction}")
        if self.spawn_speed < 0:
            raise ValueError(f"spawn_speed must be >= 0, got {self.spawn_speed}")
        if self.settle_margin_ratio is not None and not 0.0 <= self.settle_margin_ratio < 1.0:
            raise ValueError(f"settle_margin_ratio must be in [0, 1), got {self.settle_margin_ratio}")

    def settle_line(self, height: float) -> float:
        """y beyond which a ball counts as settled."""
        if self.settle_margin_ratio is not None:
            return height - self.settle_margin_ratio * height
        return height - self.settle_margin


@dataclass(frozen=True)
class Variant:
    name: str
    layout: BoardLayout = field(default_factory=BoardLayout)
    physics: PhysicsConfig = field(default_factory=PhysicsConfig)


VARIANTS: Dict[str, Variant] = {
    # light gravity, diagonal guides, velocity inversion only at dividers
    'floaty': Variant(
        'floaty',
        BoardLayout(wall_style=WallStyle.DIAGONAL),
        PhysicsConfig(divider_clamp=False),
    ),
    'classic': Variant(
        'classic',
        BoardLayout(wall_style=WallStyle.NONE),
        PhysicsConfig(gravity=0.2, friction=0.99, boundary_bounce=0.7,
                      peg_bounce=1.5, divider_bounce=0.5),
    ),
    'heavy': Variant(
        'heavy',
        BoardLayout(wall_style=WallStyle.DIAGONAL),
        PhysicsConfig(gravity=0.3, friction=0.985, boundary_bounce=0.5,
                      peg_bounce=1.8, wall_bounce=1.6, divider_bounce=0.4,
                      settle_margin_ratio=0.03),
    ),
    'zigzag': Variant(
        'zigzag',
        BoardLayout(wall_style=WallStyle.ZIGZAG),
        PhysicsConfig(gravity=0.15, friction=0.99, boundary_bounce=0.6,
                      peg_bounce=1.2, wall_bounce=1.4),
    ),
}


def get_variant(name: str) -> Variant:
    try:
        return VARIANTS[name]
    except KeyError:
        raise KeyError(f"Unknown variant {name!r}; known: {sorted(VARIANTS)}") from None

