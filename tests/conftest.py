import os

import numpy as np
import pytest

os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')

from plinko.geometry import Board, Geometry


def make_geometry(pegs=(), walls=(), dividers=(), width=400.0, height=700.0,
                  ball_radius=7.0, peg_radius=5.0, slot_y=560.0, slot_height=126.0):
    """Hand-built geometry for collision scenarios."""
    n_bins = max(0, len(dividers) - 1)
    return Geometry(
        board=Board(width, height),
        pegs=np.array(pegs, dtype=float).reshape(-1, 2),
        peg_radius=peg_radius,
        ball_radius=ball_radius,
        walls=tuple(walls),
        dividers=tuple(dividers),
        slot_y=slot_y,
        slot_height=slot_height,
        bin_labels=tuple(str(i) for i in range(n_bins)),
    )


@pytest.fixture
def flat_geometry():
    return make_geometry()
