"""
Mode lifecycle states and the queryable state each mode exposes.

The challenge evaluator only ever sees these frozen snapshots, never the
mode object itself, so a goal can not mutate a mode by accident.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union


class ModeState(Enum):
    """Lifecycle of a mode instance."""
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    INACTIVE = "inactive"


class ModeKind(str, Enum):
    """Mode identifiers, shared with the challenge library."""
    FREE_EXPLORE = "free-explore"
    BALANCE_SCALE = "balance-scale"
    STACK_BALANCE = "stack-balance"
    NUMBER_STRUCTURES = "number-structures"


@dataclass(frozen=True)
class StoneSnapshot:
    """Read-only view of a stone."""
    id: int
    x: float
    y: float
    radius: float
    mass: float
    label: Optional[int] = None
    color_name: Optional[str] = None

    @classmethod
    def of(cls, stone, color_name: Optional[str] = None) -> 'StoneSnapshot':
        return cls(
            id=stone.id,
            x=stone.x,
            y=stone.y,
            radius=stone.radius,
            mass=stone.mass,
            label=stone.label,
            color_name=color_name,
        )


@dataclass(frozen=True)
class StructureSnapshot:
    """Read-only view of a number structure."""
    id: int
    value: int
    intact: bool
    center: Tuple[float, float]
    stone_ids: Tuple[int, ...]


@dataclass(frozen=True)
class FreeExploreState:
    stones: Tuple[StoneSnapshot, ...]
    groups: Tuple[Tuple[StoneSnapshot, ...], ...]
    running: bool = False
    kind: ModeKind = field(default=ModeKind.FREE_EXPLORE, init=False)


@dataclass(frozen=True)
class BalanceState:
    left: Tuple[StoneSnapshot, ...]
    right: Tuple[StoneSnapshot, ...]
    tray: Tuple[StoneSnapshot, ...]
    is_balanced: bool
    angle: float
    kind: ModeKind = field(default=ModeKind.BALANCE_SCALE, init=False)

    @property
    def left_mass(self) -> float:
        return sum(s.mass for s in self.left)

    @property
    def right_mass(self) -> float:
        return sum(s.mass for s in self.right)


@dataclass(frozen=True)
class StackState:
    stacked: Tuple[StoneSnapshot, ...]
    available: Tuple[StoneSnapshot, ...]
    is_toppling: bool
    platform_x: float
    platform_width: float
    kind: ModeKind = field(default=ModeKind.STACK_BALANCE, init=False)


@dataclass(frozen=True)
class StructuresState:
    structures: Tuple[StructureSnapshot, ...]
    loose: Tuple[StoneSnapshot, ...]
    kind: ModeKind = field(default=ModeKind.NUMBER_STRUCTURES, init=False)

    @property
    def intact(self) -> Tuple[StructureSnapshot, ...]:
        return tuple(s for s in self.structures if s.intact)


QueryableState = Union[FreeExploreState, BalanceState, StackState, StructuresState]
