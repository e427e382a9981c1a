"""A recognised arrangement of stones standing for one number."""
from dataclasses import dataclass, field
from typing import List, Tuple

from zen.modes.motion import centroid
from zen.modes.stone import Stone
from games.NumberStructures import patterns
from games.NumberStructures.patterns import PatternMatch


@dataclass
class Structure:
    """Stones arranged in the canonical pattern for ``value``.

    ``stones`` is ordered by slot: each member's ``structure_index`` is its
    position in the canonical pattern.
    """
    id: int
    value: int
    stones: List[Stone] = field(default_factory=list)
    center: Tuple[float, float] = (0.0, 0.0)
    intact: bool = True
    glow: float = 0.0

    def __len__(self) -> int:
        return len(self.stones)

    def __contains__(self, stone: Stone) -> bool:
        return stone in self.stones

    @property
    def positions(self) -> List[Tuple[float, float]]:
        return [(s.x, s.y) for s in self.stones]

    @property
    def stone_ids(self) -> Tuple[int, ...]:
        return tuple(s.id for s in self.stones)

    def adopt(self, stones: List[Stone], match: PatternMatch) -> None:
        """Take ownership of matched stones, ordered by their matched slot."""
        self.value = match.value
        self.stones = [stones[match.assignment[slot]] for slot in range(match.value)]
        self.tag()

    def tag(self) -> None:
        for index, stone in enumerate(self.stones):
            stone.structure_id = self.id
            stone.structure_index = index

    def release(self) -> List[Stone]:
        """Clear every back-reference and hand the stones back."""
        stones = self.stones
        for stone in stones:
            stone.clear_structure()
        self.stones = []
        self.intact = False
        return stones

    def remove(self, stone: Stone) -> None:
        self.stones.remove(stone)
        stone.clear_structure()

    def refresh(self, threshold: float, spacing: float) -> bool:
        """Recompute the live centre and the intact flag."""
        center = centroid(self.stones)
        if center is not None:
            self.center = center
        slots = [s.structure_index for s in self.stones]
        self.intact = patterns.arrangement_intact(self.positions, slots, self.value,
                                                  threshold, spacing)
        return self.intact

    def snap(self, spacing: float) -> None:
        """Ease members onto their exact slots around the live centre."""
        center = centroid(self.stones)
        if center is None:
            return
        self.center = center
        slots = patterns.slot_positions(self.value, center[0], center[1], spacing)
        for stone in self.stones:
            stone.set_target(*slots[stone.structure_index])

    def translate(self, dx: float, dy: float) -> None:
        for stone in self.stones:
            stone.set_position(stone.x + dx, stone.y + dy)
        self.center = (self.center[0] + dx, self.center[1] + dy)
