"""
Canonical number patterns and pattern recognition.

Patterns 1-10 are dice and domino motifs; 11-20 stack the 2x5 ten-block
above the pattern for the remainder, so every teen number visibly reads as
"ten and some more".

All geometry is done with numpy arrays of shape (n, 2). Both the live
points and the canonical pattern are normalised to their own centroids
before comparing, so a structure can be anywhere on screen.
"""
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

SPACING = 50.0
MAX_VALUE = 20


@lru_cache(maxsize=4)
def _pattern_table(spacing: float) -> Dict[int, np.ndarray]:
    s = spacing
    h = s / 2
    table: Dict[int, List[Tuple[float, float]]] = {
        1: [(0, 0)],
        2: [(0, -h), (0, h)],
        3: [(-s, -s), (0, 0), (s, s)],
        4: [(-h, -h), (h, -h), (-h, h), (h, h)],
        5: [(-s, -s), (s, -s), (0, 0), (-s, s), (s, s)],
        6: [(-s, -h), (0, -h), (s, -h),
            (-s, h), (0, h), (s, h)],
        7: [(-1.5 * s, -h), (-0.5 * s, -h), (0.5 * s, -h), (1.5 * s, -h),
            (-s, h), (0, h), (s, h)],
        8: [(-1.5 * s, -h), (-0.5 * s, -h), (0.5 * s, -h), (1.5 * s, -h),
            (-1.5 * s, h), (-0.5 * s, h), (0.5 * s, h), (1.5 * s, h)],
        9: [(-s, -s), (0, -s), (s, -s),
            (-s, 0), (0, 0), (s, 0),
            (-s, s), (0, s), (s, s)],
        10: [(-2 * s, -h), (-s, -h), (0, -h), (s, -h), (2 * s, -h),
             (-2 * s, h), (-s, h), (0, h), (s, h), (2 * s, h)],
    }

    # Teens: ten-block shifted up, remainder shifted down with a gap
    ten = table[10]
    for value in range(11, MAX_VALUE + 1):
        extras = table[value - 10]
        table[value] = ([(x, y - s) for x, y in ten]
                        + [(x, y + 1.5 * s) for x, y in extras])

    arrays = {}
    for value, offsets in table.items():
        arr = np.array(offsets, dtype=float)
        arr.setflags(write=False)
        arrays[value] = arr
    return arrays


def pattern_array(value: int, spacing: float = SPACING) -> np.ndarray:
    """Canonical offsets for a value as an (n, 2) array; empty if unsupported."""
    table = _pattern_table(float(spacing))
    if value not in table:
        return np.empty((0, 2))
    return table[value].copy()


def pattern_for(value: int, spacing: float = SPACING) -> List[Tuple[float, float]]:
    """Canonical offsets for a value; empty list if unsupported."""
    return [(float(x), float(y)) for x, y in pattern_array(value, spacing)]


def centered_pattern(value: int, spacing: float = SPACING) -> np.ndarray:
    """Pattern offsets relative to the pattern's own centroid."""
    arr = pattern_array(value, spacing)
    if len(arr) == 0:
        return arr
    return arr - arr.mean(axis=0)


def slot_positions(value: int, cx: float, cy: float,
                   spacing: float = SPACING) -> List[Tuple[float, float]]:
    """Absolute slot positions for a structure whose centroid is (cx, cy)."""
    return [(cx + float(x), cy + float(y)) for x, y in centered_pattern(value, spacing)]


@dataclass(frozen=True)
class PatternMatch:
    """Result of a successful recognition.

    Attributes:
        value: Recognised number
        assignment: slot index -> index into the input points
        error: Mean distance between points and their slots
    """
    value: int
    assignment: Dict[int, int]
    error: float

    def slot_of(self, point_index: int) -> int:
        for slot, index in self.assignment.items():
            if index == point_index:
                return slot
        raise KeyError(point_index)


def recognize_pattern(points: Sequence[Tuple[float, float]], threshold: float = 40.0,
                      average_fraction: float = 0.7,
                      spacing: float = SPACING) -> Optional[PatternMatch]:
    """Match a set of points against the canonical pattern of the same size.

    Greedy: for each canonical slot in order, claim the nearest unclaimed
    point. Any slot without a point within ``threshold`` fails the match,
    and so does a mean error of ``average_fraction * threshold`` or more.

    Returns:
        PatternMatch, or None (also for 0 or more than 20 points)
    """
    count = len(points)
    if count == 0 or count > MAX_VALUE:
        return None

    live = np.asarray(points, dtype=float)
    live = live - live.mean(axis=0)
    slots = centered_pattern(count, spacing)

    claimed = np.zeros(count, dtype=bool)
    assignment: Dict[int, int] = {}
    errors = []

    for slot, offset in enumerate(slots):
        dist = np.hypot(live[:, 0] - offset[0], live[:, 1] - offset[1])
        dist[claimed] = np.inf
        best = int(np.argmin(dist))
        if dist[best] > threshold:
            return None
        claimed[best] = True
        assignment[slot] = best
        errors.append(float(dist[best]))

    error = float(np.mean(errors))
    if error >= average_fraction * threshold:
        return None
    return PatternMatch(value=count, assignment=assignment, error=error)


def arrangement_intact(points: Sequence[Tuple[float, float]], slots: Sequence[int], value: int,
                       threshold: float = 40.0, spacing: float = SPACING) -> bool:
    """True if every point lies within threshold of its slot.

    Both the points and the pattern are taken relative to their centroids,
    so translating the whole arrangement never breaks it.
    """
    expected = centered_pattern(value, spacing)
    if len(points) == 0 or len(points) != len(expected):
        return False
    if sorted(slots) != list(range(len(expected))):
        return False

    live = np.asarray(points, dtype=float)
    live = live - live.mean(axis=0)
    deviation = live - expected[list(slots)]
    return bool(np.all(np.hypot(deviation[:, 0], deviation[:, 1]) <= threshold))
