"""
Ball vs static geometry collision resolution.

Discrete, per-tick position correction:
  side boundaries → pegs → guide walls → bin dividers

A contact does not reflect the incoming velocity; it overwrites it with a
fixed bounce speed along the contact normal and pushes the ball out of
overlap. Geometry is only read. Degenerate contacts (coincident centres,
zero-length walls) are skipped, never raised.
"""

import numpy as np
from typing import Dict, Tuple

from plinko.config import PhysicsConfig
from plinko.geometry import Geometry, WallSegment

EPS = 1e-9


def resolve_boundaries(ball, geometry: Geometry, physics: PhysicsConfig) -> int:
    r = geometry.ball_radius
    hits = 0
    if ball.x < r:
        ball.x = r
        ball.vx *= -physics.boundary_bounce
        hits += 1
    if ball.x > geometry.width - r:
        ball.x = geometry.width - r
        ball.vx *= -physics.boundary_bounce
        hits += 1
    return hits


def resolve_pegs(ball, geometry: Geometry, physics: PhysicsConfig) -> int:
    """Sequential circle-circle corrections in peg order."""
    min_dist = geometry.ball_radius + geometry.peg_radius
    speed = physics.peg_bounce * geometry.scale
    if len(geometry.pegs) == 0:
        return 0
    # broad phase: no overlap at the current position, nothing to correct
    d = np.hypot(geometry.pegs[:, 0] - ball.x, geometry.pegs[:, 1] - ball.y)
    if not np.any((d < min_dist) & (d >= EPS)):
        return 0

    hits = 0
    for px, py in geometry.pegs:
        dx = ball.x - px
        dy = ball.y - py
        dist = np.hypot(dx, dy)
        if dist >= min_dist or dist < EPS:
            continue

        angle = np.arctan2(dy, dx)
        cos_a, sin_a = np.cos(angle), np.sin(angle)
        ball.vx = float(cos_a * speed)
        ball.vy = float(sin_a * speed)

        overlap = min_dist - dist
        ball.x = float(ball.x + cos_a * overlap)
        ball.y = float(ball.y + sin_a * overlap)
        hits += 1
    return hits


def closest_point_on_segment(x: float, y: float, seg: WallSegment) -> Tuple[float, float]:
    """Projection of (x, y) onto the segment, clamped to its endpoints."""
    abx = seg.x2 - seg.x1
    aby = seg.y2 - seg.y1
    length_sq = abx * abx + aby * aby
    if length_sq < EPS:
        return seg.x1, seg.y1
    t = ((x - seg.x1) * abx + (y - seg.y1) * aby) / length_sq
    t = min(1.0, max(0.0, t))
    return seg.x1 + abx * t, seg.y1 + aby * t


def resolve_walls(ball, geometry: Geometry, physics: PhysicsConfig) -> int:
    r = geometry.ball_radius
    speed = physics.wall_bounce * geometry.scale
    hits = 0
    for seg in geometry.walls:
        cx, cy = closest_point_on_segment(ball.x, ball.y, seg)
        dx = ball.x - cx
        dy = ball.y - cy
        dist = np.hypot(dx, dy)
        if dist >= r or dist < EPS:
            continue

        angle = np.arctan2(dy, dx)
        cos_a, sin_a = np.cos(angle), np.sin(angle)
        ball.vx = float(cos_a * speed)
        ball.vy = float(sin_a * speed)

        overlap = r - dist
        ball.x = float(ball.x + cos_a * overlap)
        ball.y = float(ball.y + sin_a * overlap)
        hits += 1
    return hits


def resolve_dividers(ball, geometry: Geometry, physics: PhysicsConfig, prev_x: float) -> int:
    """
    Keep a ball inside its bin once it is in the bin row.

    `prev_x` is the ball's x before this tick's integration; with clamping
    on, the ball is put back on that side of the divider.
    """
    if not geometry.in_bin_row(ball.y):
        return 0

    clearance = physics.divider_clearance * geometry.ball_radius
    hits = 0
    for divider_x in geometry.dividers:
        if abs(ball.x - divider_x) >= clearance:
            continue
        ball.vx *= -physics.divider_bounce
        if physics.divider_clamp:
            if prev_x <= divider_x:
                ball.x = divider_x - clearance
            else:
                ball.x = divider_x + clearance
        hits += 1
    return hits


def check_settled(ball, geometry: Geometry, physics: PhysicsConfig) -> bool:
    """Deactivate a ball past the settle line. Returns True on the settling tick."""
    if ball.active and ball.y > physics.settle_line(geometry.height):
        ball.active = False
        return True
    return False


def resolve_collisions(ball, geometry: Geometry, physics: PhysicsConfig,
                       prev_x: float) -> Dict[str, int]:
    """Run every resolver in the fixed order; contact counts per kind."""
    return {
        'boundary': resolve_boundaries(ball, geometry, physics),
        'peg': resolve_pegs(ball, geometry, physics),
        'wall': resolve_walls(ball, geometry, physics),
        'divider': resolve_dividers(ball, geometry, physics, prev_x),
    }
