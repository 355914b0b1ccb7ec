"""
2D Plinko engine: balls falling through a static peg board.

- Balls only collide with static geometry, never with each other
- Per tick: gravity → position → friction → collisions → settle check
- State per ball: (x, y, vx, vy, active)
"""

import logging
import numpy as np
from dataclasses import dataclass
from typing import Dict, Iterator, List, NamedTuple, Optional

import plinko as P
from plinko.collisions import check_settled, resolve_collisions
from plinko.config import BoardLayout, PhysicsConfig, get_variant
from plinko.geometry import Board, Geometry, build_geometry
from plinko.metrics import bin_histogram

logger = logging.getLogger(__name__)


@dataclass
class Ball:
    """Physics-only state container. No appearance variables."""
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    active: bool = True
    ball_id: int = 0

    @property
    def state(self) -> np.ndarray:
        return np.array([self.x, self.y, self.vx, self.vy])


class BallView(NamedTuple):
    """Read-only snapshot handed to the presentation layer."""
    x: float
    y: float
    radius: float
    active: bool
    ball_id: int


def integrate_ball(ball: Ball, geometry: Geometry,
                   physics: PhysicsConfig) -> Optional[Dict[str, int]]:
    """Advance one ball by one tick. Inactive balls are left untouched (returns None)."""
    if not ball.active:
        return None

    prev_x = ball.x
    ball.vy += physics.gravity * geometry.scale
    ball.x += ball.vx
    ball.y += ball.vy
    ball.vx *= physics.friction
    ball.vy *= physics.friction

    contacts = resolve_collisions(ball, geometry, physics, prev_x)
    check_settled(ball, geometry, physics)
    return contacts


class PlinkoEngine:
    """
    Owns the live balls and the geometry for the current board size.

    Driven once per frame: spawn_ball() on input, tick(), then
    balls_for_render() for drawing.
    """

    def __init__(self, board: Optional[Board] = None,
                 layout: Optional[BoardLayout] = None,
                 physics: Optional[PhysicsConfig] = None,
                 seed: Optional[int] = None,
                 log_collisions: bool = False):
        self.layout = layout or BoardLayout()
        self.physics = physics or PhysicsConfig()
        self.rng = np.random.RandomState(seed)
        self.log_collisions = log_collisions
        self.geometry: Geometry = build_geometry(board or Board(), self.layout,
                                                 self.physics.ball_radius)
        self.balls: List[Ball] = []
        self.just_settled: List[Ball] = []
        self.tick_count: int = 0
        self.collision_log: List[Dict] = []
        self.settle_log: List[Dict] = []
        self._next_id = 0

    @classmethod
    def from_variant(cls, name: str, board: Optional[Board] = None,
                     seed: Optional[int] = None, **kwargs) -> 'PlinkoEngine':
        variant = get_variant(name)
        return cls(board, variant.layout, variant.physics, seed=seed, **kwargs)

    @property
    def board(self) -> Board:
        return self.geometry.board

    def on_layout_changed(self, board: Board):
        """Rebuild all geometry for a new board size; balls keep their coordinates."""
        self.geometry = build_geometry(board, self.layout, self.physics.ball_radius)
        logger.debug("Layout changed to %.1fx%.1f (scale %.3f)",
                     board.width, board.height, board.scale)

    def reset(self):
        self.balls = []
        self.just_settled = []
        self.tick_count = 0
        self.collision_log = []
        self.settle_log = []
        self._next_id = 0

    # Spawning

    def add_ball(self, x: float, y: float, vx: float = 0.0, vy: float = 0.0) -> Ball:
        ball = Ball(x=float(x), y=float(y), vx=float(vx), vy=float(vy),
                    ball_id=self._next_id)
        self._next_id += 1
        self.balls.append(ball)
        return ball

    def spawn_ball(self) -> Ball:
        """Drop a new ball at top-centre with a small random sideways speed."""
        scale = self.geometry.scale
        max_vx = self.physics.spawn_speed * scale
        vx = self.rng.uniform(-max_vx, max_vx)
        return self.add_ball(self.geometry.width / 2, self.physics.spawn_y * scale, vx=vx)

    # Stepping

    def tick(self) -> List[Dict]:
        """Advance every ball one step, then drop settled ones. Returns this tick's settle records."""
        self.tick_count += 1
        settled = []
        for ball in self.balls:
            contacts = integrate_ball(ball, self.geometry, self.physics)
            if contacts and self.log_collisions and any(contacts.values()):
                self.collision_log.append({
                    'tick': self.tick_count, 'ball_id': ball.ball_id, **contacts,
                })
            if not ball.active:
                settled.append(self._record_settle(ball))

        self.just_settled = [b for b in self.balls if not b.active]
        self.balls = [b for b in self.balls if b.active]
        return settled

    def _record_settle(self, ball: Ball) -> Dict:
        bin_idx = self.geometry.bin_index(ball.x)
        label = self.geometry.bin_labels[bin_idx] if bin_idx is not None else None
        record = {
            'tick': self.tick_count, 'ball_id': ball.ball_id,
            'x': ball.x, 'bin': bin_idx, 'label': label,
        }
        self.settle_log.append(record)
        logger.debug("Ball %d settled in bin %s (%s)", ball.ball_id, bin_idx, label)
        return record

    # State access

    def balls_for_render(self, include_settled: bool = False) -> Iterator[BallView]:
        """Fresh snapshot of the live balls (plus this tick's settled ones, if asked)."""
        radius = self.geometry.ball_radius
        for ball in self.balls:
            yield BallView(ball.x, ball.y, radius, ball.active, ball.ball_id)
        if include_settled:
            for ball in self.just_settled:
                yield BallView(ball.x, ball.y, radius, ball.active, ball.ball_id)

    def get_state(self) -> np.ndarray:
        """(n_balls, 4) → [x, y, vx, vy]"""
        if not self.balls:
            return np.zeros((0, 4))
        return np.array([b.state for b in self.balls])


def drop_trajectory(board: Optional[Board] = None,
                    layout: Optional[BoardLayout] = None,
                    physics: Optional[PhysicsConfig] = None,
                    seed: Optional[int] = None,
                    vx: Optional[float] = None,
                    max_steps: int = P.MAX_STEPS) -> Dict:
    """Drop one ball and record it until it settles.

    Returns dict with states (T+1, 4), bin, label, steps, settled.
    """
    engine = PlinkoEngine(board, layout, physics, seed=seed)
    ball = engine.spawn_ball()
    if vx is not None:
        ball.vx = float(vx)

    states = [ball.state]
    settle = None
    for _ in range(max_steps):
        records = engine.tick()
        states.append(ball.state)
        if records:
            settle = records[0]
            break

    return {
        'states': np.array(states),
        'geometry': engine.geometry,
        'bin': settle['bin'] if settle else None,
        'label': settle['label'] if settle else None,
        'steps': engine.tick_count,
        'settled': settle is not None,
    }


def simulate_drops(n_balls: int = P.N_DROPS,
                   board: Optional[Board] = None,
                   layout: Optional[BoardLayout] = None,
                   physics: Optional[PhysicsConfig] = None,
                   seed: int = P.SEED,
                   max_steps: int = P.MAX_STEPS) -> Dict:
    """Drop `n_balls` at once (they never interact) and tally where they land.

    Returns dict with counts (n_bins,), bins (per ball, -1 for a miss),
    missed, unsettled, steps.
    """
    engine = PlinkoEngine(board, layout, physics, seed=seed)
    for _ in range(n_balls):
        engine.spawn_ball()

    while engine.balls and engine.tick_count < max_steps:
        engine.tick()

    n_bins = engine.geometry.n_bins
    bins = np.full(n_balls, -1, dtype=int)
    for record in engine.settle_log:
        if record['bin'] is not None:
            bins[record['ball_id']] = record['bin']

    counts = bin_histogram(bins, n_bins)
    unsettled = len(engine.balls)
    return {
        'counts': counts,
        'bins': bins,
        'missed': len(engine.settle_log) - int(counts.sum()),
        'unsettled': unsettled,
        'steps': engine.tick_count,
        'labels': engine.geometry.bin_labels,
    }
