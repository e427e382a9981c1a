"""
Beam and pan mechanics for the balance scale.

Every stone on a side is treated as sitting at the full half-width of the
beam, so a side's torque is simply its total mass times the half-width.
The beam eases toward the target angle with single-pole smoothing, which
never overshoots.
"""
import math
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from zen.modes.stone import Stone


@dataclass
class Pan:
    """One dish of the scale.

    Holds references to stones that are owned by the mode's stone list.
    """
    side: str
    x: float = 0.0
    y: float = 0.0
    stones: List[Stone] = field(default_factory=list)

    @property
    def total_mass(self) -> float:
        return sum(s.mass for s in self.stones)

    def holds(self, stone: Stone) -> bool:
        return stone in self.stones

    def add(self, stone: Stone) -> None:
        if stone not in self.stones:
            self.stones.append(stone)

    def discard(self, stone: Stone) -> bool:
        if stone in self.stones:
            self.stones.remove(stone)
            return True
        return False

    def accepts(self, x: float, y: float, reach: float) -> bool:
        """True if a drop at (x, y) lands within reach of the pan centre."""
        return math.hypot(x - self.x, y - self.y) < reach


@dataclass
class Beam:
    """Pivoting beam; angle > 0 means the right side is down."""
    x: float = 0.0
    y: float = 0.0
    width: float = 400.0
    angle: float = 0.0
    target_angle: float = 0.0
    frozen: bool = False

    @property
    def half_width(self) -> float:
        return self.width / 2


def side_torque(masses: Iterable[float], half_width: float) -> float:
    return sum(m * half_width for m in masses)


def compute_target_angle(left: Iterable[float], right: Iterable[float], half_width: float,
                         max_tilt: float, normalizer: float = 6.0) -> float:
    """Target tilt for the given pan masses.

    Args:
        left: Masses on the left pan
        right: Masses on the right pan
        half_width: Lever arm for every stone
        max_tilt: Clamp in radians
        normalizer: Mass difference that reaches max_tilt

    Returns:
        Angle in [-max_tilt, max_tilt]; positive tips the right pan down
    """
    diff = side_torque(right, half_width) - side_torque(left, half_width)
    k = max_tilt / (normalizer * half_width)
    return max(-max_tilt, min(max_tilt, k * diff))


def ease_angle(angle: float, target: float, speed: float, dt: float) -> float:
    """Move angle toward target by min(1, speed * dt) of the gap."""
    return angle + (target - angle) * min(1.0, speed * dt)


def pan_positions(beam: Beam) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """(left, right) pan centres at the ends of the tilted beam."""
    dx = math.cos(beam.angle) * beam.half_width
    dy = math.sin(beam.angle) * beam.half_width
    return (beam.x - dx, beam.y - dy), (beam.x + dx, beam.y + dy)


def pan_layout(pan: Pan, lift: float = 15.0, max_ring: float = 30.0) -> List[Tuple[float, float]]:
    """Resting spots for the stones on a pan, in pan order.

    A single stone sits centred just above the pan; two or more sit on a
    ring starting at the top.
    """
    count = len(pan.stones)
    if count == 0:
        return []
    cx, cy = pan.x, pan.y - lift
    if count == 1:
        return [(cx, cy)]

    ring = min(max_ring, 20 + count * 5)
    spots = []
    for i in range(count):
        a = (i / count) * math.pi * 2 - math.pi / 2
        spots.append((cx + math.cos(a) * ring, cy + math.sin(a) * ring))
    return spots
