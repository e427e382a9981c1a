"""
Stacking physics: falling, landing, wobble, stability and toppling.

Each stone in the mode has a StackBody carrying its stacking phase and
per-stone physics; the Stone itself still owns position and velocity.
"""
import math
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from zen.modes.motion import mass_centroid
from zen.modes.stone import Stone


class StackPhase(Enum):
    """Per-stone state machine."""
    AVAILABLE = "available"   # In the tray (or in hand)
    FALLING = "falling"
    STACKED = "stacked"
    TOPPLING = "toppling"
    REMOVED = "removed"


@dataclass
class Platform:
    x: float
    y: float
    width: float
    height: float = 8.0

    @property
    def top(self) -> float:
        return self.y - self.height / 2

    @property
    def half_width(self) -> float:
        return self.width / 2

    def spans(self, x: float) -> bool:
        return self.x - self.half_width <= x <= self.x + self.half_width


@dataclass
class StackBody:
    """Stacking state of one stone."""
    stone: Stone
    color_name: str
    tray_x: float
    tray_y: float
    base_color: Tuple[int, int, int] = (0, 0, 0)
    phase: StackPhase = StackPhase.AVAILABLE
    spin: float = 0.0
    rotation: float = 0.0
    wobble: float = 0.0
    wobble_velocity: float = 0.0
    glow: float = 0.0
    spark: float = 0.0
    display_color: Optional[Tuple[int, int, int]] = None

    @property
    def id(self) -> int:
        return self.stone.id


@dataclass
class Contact:
    """Surface a falling stone has hit; normal points away from it."""
    nx: float
    ny: float
    penetration: float
    other: Optional[Stone] = None


# =============================================================================
# Stability
# =============================================================================

def stack_offset(stones: Sequence[Stone], platform_x: float) -> float:
    """Mass-weighted centroid x minus the platform centre (0 if empty)."""
    center = mass_centroid(stones)
    if center is None:
        return 0.0
    return center[0] - platform_x


def is_stack_stable(stones: Sequence[Stone], platform_x: float, half_width: float,
                    tolerance: float) -> bool:
    """A stack stands while its centre of mass is over the middle of the base.

    Fewer than two stones always stand.
    """
    if len(stones) < 2:
        return True
    return abs(stack_offset(stones, platform_x)) <= tolerance * half_width


def height_ranks(stones: Sequence[Stone]) -> List[Tuple[int, Stone]]:
    """(rank, stone) pairs with rank 0 for the lowest stone on screen."""
    ordered = sorted(stones, key=lambda s: s.y, reverse=True)
    return list(enumerate(ordered))


def topple(bodies: Sequence[StackBody], direction: int, force: float, height_factor: float,
           kick: float, spin_range: Tuple[float, float], rng: random.Random) -> None:
    """Throw every body off the stack; higher stones get a bigger push."""
    by_stone = {body.stone.id: body for body in bodies}
    for rank, stone in height_ranks([b.stone for b in bodies]):
        body = by_stone[stone.id]
        body.phase = StackPhase.TOPPLING
        body.wobble = body.wobble_velocity = 0.0
        stone.vx = direction * force * (1 + rank * height_factor) * rng.uniform(0.8, 1.2)
        stone.vy = -kick * rng.random()
        body.spin = direction * rng.uniform(*spin_range)


# =============================================================================
# Landing
# =============================================================================

def landing_y(stone: Stone, other: Stone) -> float:
    """Centre y of a stone sitting on top of another."""
    return other.y - other.radius - stone.radius


def find_contact(stone: Stone, platform: Platform, stacked: Sequence[Stone],
                 footprint: float = 0.8) -> Optional[Contact]:
    """Highest surface the falling stone has reached, if any.

    The platform only counts while the stone is horizontally over it. A
    stacked stone is a flat surface at its top, and only counts while the
    footprints overlap and the falling stone is above it and moving down.
    """
    best: Optional[Contact] = None

    if platform.spans(stone.x):
        depth = stone.y + stone.radius - platform.top
        if depth >= 0:
            best = Contact(0.0, -1.0, depth)

    if stone.vy <= 0:
        return best

    for other in stacked:
        if other is stone or stone.y >= other.y:
            continue
        if abs(stone.x - other.x) >= (stone.radius + other.radius) * footprint:
            continue
        depth = stone.y - landing_y(stone, other)
        if depth < 0:
            continue
        if best is None or depth > best.penetration:
            best = Contact(0.0, -1.0, depth, other)

    return best


def is_supported(stone: Stone, platform: Platform, stacked: Sequence[Stone],
                 footprint: float = 0.8, tolerance: float = 1.0) -> bool:
    """True if the stone rests on the platform or on a stacked stone."""
    if platform.spans(stone.x) and abs(stone.y + stone.radius - platform.top) <= tolerance:
        return True
    for other in stacked:
        if other is stone or other.y <= stone.y:
            continue
        if abs(stone.x - other.x) >= (stone.radius + other.radius) * footprint:
            continue
        if abs(stone.y - landing_y(stone, other)) <= tolerance:
            return True
    return False


def restitution(speed: float, base: float = 0.2, per_speed: float = 0.002,
                maximum: float = 0.5) -> float:
    """Bounce factor; faster impacts bounce more."""
    return min(maximum, base + per_speed * speed)


def resolve_contact(stone: Stone, contact: Contact, rest_speed: float,
                    rng: random.Random, scatter: float = 20.0,
                    base: float = 0.2, per_speed: float = 0.002,
                    maximum: float = 0.5) -> Tuple[bool, float]:
    """Push the stone out of the surface, then bounce or come to rest.

    Only platform bounces scatter sideways; a stone bouncing on the stack
    keeps its line so it can settle on the stone below.

    Returns:
        (rested, impact speed along the normal)
    """
    stone.set_position(stone.x + contact.nx * contact.penetration,
                       stone.y + contact.ny * contact.penetration)

    along = stone.vx * contact.nx + stone.vy * contact.ny
    impact = max(0.0, -along)

    if impact > rest_speed:
        e = restitution(impact, base, per_speed, maximum)
        stone.vx -= (1 + e) * along * contact.nx
        stone.vy -= (1 + e) * along * contact.ny
        if contact.other is None:
            stone.vx += rng.uniform(-scatter, scatter)
        return False, impact

    stone.stop()
    return True, impact


# =============================================================================
# Wobble
# =============================================================================

def transfer_wobble(source: Stone, bodies: Sequence[StackBody], speed: float,
                    transfer: float, radius_factor: float) -> List[StackBody]:
    """Kick stacked neighbours of a stone that just came to rest.

    Returns:
        Bodies that received an impulse
    """
    reach = source.radius * radius_factor
    touched = []
    for body in bodies:
        other = body.stone
        if other is source or body.phase != StackPhase.STACKED:
            continue
        dx = other.x - source.x
        if math.hypot(dx, other.y - source.y) > reach:
            continue
        direction = 1.0 if dx >= 0 else -1.0
        body.wobble_velocity += direction * speed * transfer
        touched.append(body)
    return touched


def step_wobble(body: StackBody, dt: float, spring: float, damping: float) -> None:
    """Damped spring pulling the visual wobble offset back to zero."""
    accel = -spring * body.wobble - damping * body.wobble_velocity
    body.wobble_velocity += accel * dt
    body.wobble += body.wobble_velocity * dt
