"""Guess-the-heavier-side puzzles."""
import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple


class GuessState(Enum):
    """Guess game state machine."""
    IDLE = "idle"
    WAITING = "waiting"      # Puzzle posed, beam frozen, totals hidden
    REVEALED = "revealed"    # Guess made, beam released, feedback showing


class Answer(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    BALANCED = "balanced"


# difficulty -> ((min stones, max stones), (min mass, max mass))
DIFFICULTY_LEVELS: Dict[int, Tuple[Tuple[int, int], Tuple[int, int]]] = {
    1: ((2, 4), (1, 3)),
    2: ((3, 5), (1, 4)),
    3: ((4, 6), (1, 5)),
}


@dataclass(frozen=True)
class Puzzle:
    """Masses pre-assigned to each pan."""
    left: Tuple[int, ...]
    right: Tuple[int, ...]

    @property
    def answer(self) -> Answer:
        return compare_sides(sum(self.left), sum(self.right))

    @property
    def stone_count(self) -> int:
        return len(self.left) + len(self.right)


def compare_sides(left_total: float, right_total: float) -> Answer:
    if left_total > right_total:
        return Answer.LEFT
    if right_total > left_total:
        return Answer.RIGHT
    return Answer.BALANCED


def generate_puzzle(difficulty: int = 1, rng: Optional[random.Random] = None) -> Puzzle:
    """Random puzzle for a difficulty level (clamped to 1-3).

    Each side always gets at least one stone.
    """
    rng = rng or random.Random()
    level = max(1, min(3, difficulty))
    (min_count, max_count), (min_mass, max_mass) = DIFFICULTY_LEVELS[level]

    count = rng.randint(min_count, max_count)
    masses = [rng.randint(min_mass, max_mass) for _ in range(count)]

    left: List[int] = [masses[0]]
    right: List[int] = [masses[1]]
    for mass in masses[2:]:
        (left if rng.random() < 0.5 else right).append(mass)
    return Puzzle(left=tuple(left), right=tuple(right))
