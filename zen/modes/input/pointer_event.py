"""
Pointer Event - a single press, move or release of the pointer.

Uses a frozen dataclass so events can be queued and replayed in tests.
"""
from dataclasses import dataclass
from enum import Enum

from models import Point2D


class PointerAction(Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"


@dataclass(frozen=True)
class PointerEvent:
    """Immutable pointer event in mode (screen) coordinates.

    Attributes:
        action: DOWN, MOVE or UP
        position: Where the pointer is (screen coordinates)
        timestamp: Seconds from a monotonic clock
    """
    action: PointerAction
    position: Point2D
    timestamp: float = 0.0

    def __post_init__(self):
        if self.timestamp < 0:
            raise ValueError(f'Timestamp must be non-negative, got {self.timestamp}')

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y

    def __str__(self) -> str:
        return (f"PointerEvent({self.action.value}, pos=({self.position.x:.1f}, "
                f"{self.position.y:.1f}), t={self.timestamp:.3f})")
