"""
Stone - the draggable physical entity shared by every mode.

A stone eases toward its target position at a rate that depends on its
mass, so heavy stones feel sluggish. Modes that run free-body physics also
give it a velocity, which is integrated on top of the easing.
"""

import itertools
import math
import random
from enum import Enum
from typing import Optional, Tuple

STONE_RADIUS = 35.0
MIN_MASS = 0.1

# Fraction of the remaining distance covered per 60 Hz frame by a unit-mass stone
EASE_RATE = 0.2

_stone_ids = itertools.count(1)


class StoneKind(Enum):
    """Stone variants."""
    REGULAR = "regular"
    GRAVITY_WELL = "gravity_well"


def radius_for_mass(mass: float, base_radius: float = STONE_RADIUS) -> float:
    """Radius used for randomly created stones in Free Explore."""
    return base_radius * (0.6 + mass * 0.25)


class Stone:
    """A draggable stone.

    Attributes:
        id: Unique id, stable for the session
        x, y: Current position
        target_x, target_y: Eased destination
        vx, vy: Velocity, non-zero only under free-body physics
        mass: Mass, never below MIN_MASS
        radius: Hit-test and drawing radius
        color: RGB tuple
        label: Optional integer printed on the stone
        kind: REGULAR or GRAVITY_WELL
        is_dragging: True while captured by the pointer
        is_locked: Locked stones cannot be dragged
        structure_id, structure_index: Slot bookkeeping for Number Structures
    """

    def __init__(
        self,
        x: float,
        y: float,
        mass: float = 1.0,
        radius: Optional[float] = None,
        color: Tuple[int, int, int] = (139, 125, 107),
        label: Optional[int] = None,
        kind: StoneKind = StoneKind.REGULAR,
        is_locked: bool = False,
    ):
        self.id = next(_stone_ids)
        self.x = float(x)
        self.y = float(y)
        self.target_x = self.x
        self.target_y = self.y
        self.vx = 0.0
        self.vy = 0.0

        self.mass = max(MIN_MASS, float(mass))
        self.radius = float(radius) if radius is not None else STONE_RADIUS + random.uniform(-5, 5)
        self.color = color
        self.label = label
        self.kind = kind

        self.is_dragging = False
        self.is_locked = is_locked

        self.structure_id: Optional[int] = None
        self.structure_index: Optional[int] = None

        # Gravity wells pull on stones within this radius
        self.gravitational_radius = 0.0
        self.gravitational_strength = 0.0
        if kind == StoneKind.GRAVITY_WELL:
            self.gravitational_radius = self.radius * 3
            self.gravitational_strength = 200.0

    @property
    def drag_coefficient(self) -> float:
        """1 / mass: heavier stones follow their target more slowly."""
        return 1.0 / self.mass

    @property
    def is_gravity_well(self) -> bool:
        return self.kind == StoneKind.GRAVITY_WELL

    @property
    def speed(self) -> float:
        return math.hypot(self.vx, self.vy)

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def ease_factor(self, dt: float) -> float:
        """Fraction of the remaining distance to cover this step.

        Always inside [0, 1), so easing never overshoots.
        """
        if dt <= 0:
            return 0.0
        return 1.0 - math.pow(1.0 - EASE_RATE, dt * 60.0 * self.drag_coefficient)

    def update(self, dt: float) -> None:
        """Advance eased motion and, if moving, free-body motion."""
        if self.is_dragging:
            return

        ease = self.ease_factor(dt)
        self.x += (self.target_x - self.x) * ease
        self.y += (self.target_y - self.y) * ease

        if self.vx or self.vy:
            # The target travels with the body so easing does not pull it back
            dx = self.vx * dt
            dy = self.vy * dt
            self.x += dx
            self.y += dy
            self.target_x += dx
            self.target_y += dy

    def set_position(self, x: float, y: float) -> None:
        """Snap position and target (no lag under the pointer)."""
        self.x = self.target_x = float(x)
        self.y = self.target_y = float(y)

    def set_target(self, x: float, y: float) -> None:
        """Change only the eased destination."""
        self.target_x = float(x)
        self.target_y = float(y)

    def start_drag(self) -> bool:
        """Begin a drag. Returns False (and changes nothing) if locked."""
        if self.is_locked:
            return False
        self.is_dragging = True
        return True

    def stop_drag(self) -> None:
        self.is_dragging = False

    def stop(self) -> None:
        """Zero the velocity."""
        self.vx = 0.0
        self.vy = 0.0

    def contains(self, x: float, y: float) -> bool:
        """Point-in-circle hit test."""
        dx = x - self.x
        dy = y - self.y
        return dx * dx + dy * dy <= self.radius * self.radius

    def distance_to(self, other: 'Stone') -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def clear_structure(self) -> None:
        self.structure_id = None
        self.structure_index = None

    def __repr__(self) -> str:
        return (f"Stone(id={self.id}, pos=({self.x:.1f}, {self.y:.1f}), "
                f"mass={self.mass:.2f}, r={self.radius:.1f})")
