"""
Gravity sandbox physics for Free Explore.

Inverse-square attraction toward wells, elastic collisions, breaking of
labelled stones and absorption into gravity wells. All functions work on
stones in place; the mode decides which pairs to feed them.
"""
import math
from dataclasses import dataclass
from typing import List, Optional

from zen.modes.stone import Stone, StoneKind


@dataclass
class CentralWell:
    """The fixed well in the middle of the screen."""
    x: float
    y: float
    mass: float = 50.0
    radius: float = 40.0
    strength: float = 300.0


def attract(stone: Stone, source_x: float, source_y: float, pull: float, dt: float,
            min_distance: float, max_distance: Optional[float] = None) -> bool:
    """Accelerate a stone toward a point with an inverse-square force.

    force = pull * stone.mass / d^2, acceleration = force / stone.mass.

    Args:
        pull: Gravitational constant times source mass
        min_distance: No force inside this radius (singularity guard)
        max_distance: No force beyond this radius (None = unlimited)

    Returns:
        True if a force was applied
    """
    dx = source_x - stone.x
    dy = source_y - stone.y
    dist_sq = dx * dx + dy * dy
    dist = math.sqrt(dist_sq)

    if dist < min_distance or dist == 0:
        return False
    if max_distance is not None and dist > max_distance:
        return False

    force = pull * stone.mass / dist_sq
    stone.vx += (dx / dist) * (force / stone.mass) * dt
    stone.vy += (dy / dist) * (force / stone.mass) * dt
    return True


def wrap_position(stone: Stone, width: float, height: float) -> bool:
    """Toroidal screen wrap. Returns True if the stone was moved."""
    x, y = stone.x, stone.y
    margin = stone.radius
    if x < -margin:
        x = width + margin
    elif x > width + margin:
        x = -margin
    if y < -margin:
        y = height + margin
    elif y > height + margin:
        y = -margin
    if (x, y) != (stone.x, stone.y):
        stone.set_position(x, y)
        return True
    return False


def relative_speed(a: Stone, b: Stone) -> float:
    """Speed of one stone as seen from the other (mass-independent)."""
    return math.hypot(a.vx - b.vx, a.vy - b.vy)


def overlapping(a: Stone, b: Stone) -> bool:
    return a.distance_to(b) < a.radius + b.radius


def _shift(stone: Stone, dx: float, dy: float) -> None:
    stone.x += dx
    stone.y += dy
    stone.target_x += dx
    stone.target_y += dy


def resolve_collision(a: Stone, b: Stone) -> bool:
    """Separate two overlapping stones and exchange momentum elastically.

    De-penetration is mass weighted so the heavier stone moves less.

    Returns:
        False when skipped (no overlap, or coincident centres)
    """
    dx = b.x - a.x
    dy = b.y - a.y
    dist = math.hypot(dx, dy)
    if dist == 0:
        return False

    overlap = a.radius + b.radius - dist
    if overlap <= 0:
        return False

    nx = dx / dist
    ny = dy / dist
    total_mass = a.mass + b.mass

    share_a = b.mass / total_mass
    share_b = a.mass / total_mass
    _shift(a, -nx * overlap * share_a, -ny * overlap * share_a)
    _shift(b, nx * overlap * share_b, ny * overlap * share_b)

    v1n = a.vx * nx + a.vy * ny
    v2n = b.vx * nx + b.vy * ny
    v1n_after = (v1n * (a.mass - b.mass) + 2 * b.mass * v2n) / total_mass
    v2n_after = (v2n * (b.mass - a.mass) + 2 * a.mass * v1n) / total_mass

    a.vx += (v1n_after - v1n) * nx
    a.vy += (v1n_after - v1n) * ny
    b.vx += (v2n_after - v2n) * nx
    b.vy += (v2n_after - v2n) * ny
    return True


def is_breakable(stone: Stone) -> bool:
    return (stone.kind == StoneKind.REGULAR
            and stone.label is not None
            and stone.label >= 2)


def break_stone(stone: Stone, explosion_speed: float = 80.0) -> List[Stone]:
    """Split a labelled stone into ``label`` unlabelled pieces.

    Pieces sit on a ring at half the parent's radius, each with
    mass / N and radius / sqrt(N), moving with the parent's velocity plus
    an outward kick.
    """
    count = stone.label
    piece_mass = stone.mass / count
    piece_radius = stone.radius / math.sqrt(count)
    ring = stone.radius * 0.5

    pieces = []
    for i in range(count):
        angle = (i / count) * math.pi * 2
        piece = Stone(
            stone.x + math.cos(angle) * ring,
            stone.y + math.sin(angle) * ring,
            mass=piece_mass,
            radius=piece_radius,
            color=stone.color,
        )
        piece.vx = stone.vx + math.cos(angle) * explosion_speed
        piece.vy = stone.vy + math.sin(angle) * explosion_speed
        pieces.append(piece)
    return pieces


def can_absorb(well: Stone, stone: Stone) -> bool:
    """A well swallows a stone whose centre passes half its radius into the core."""
    return well.distance_to(stone) < well.radius + stone.radius * 0.5


def absorb(well: Stone, stone: Stone, growth: float, max_radius: float,
           reach_factor: float) -> None:
    """Grow a gravity well by the absorbed stone's mass."""
    well.mass += stone.mass
    well.radius = min(well.radius + growth, max_radius)
    well.gravitational_radius = well.radius * reach_factor
