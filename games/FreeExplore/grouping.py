"""
Proximity groups for Free Explore.

Groups are recomputed from scratch after every pointer-up. A group is a
chain of stones each within the threshold of some other member.
"""
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from zen.modes.motion import centroid, cluster_by_proximity
from zen.modes.stone import Stone


@dataclass
class StoneGroup:
    """A proximity cluster of two or more stones."""
    stones: List[Stone]

    @property
    def size(self) -> int:
        return len(self.stones)

    @property
    def center(self) -> Tuple[float, float]:
        return centroid(self.stones)

    def contains(self, stone: Stone) -> bool:
        return stone in self.stones


def compute_groups(stones: Sequence[Stone], threshold: float) -> List[StoneGroup]:
    """Group regular stones by chained proximity; singletons are dropped.

    Gravity wells are scenery, not countable stones, so they never join a
    group.
    """
    countable = [s for s in stones if not s.is_gravity_well]
    return [StoneGroup(cluster) for cluster in cluster_by_proximity(countable, threshold, min_size=2)]
