"""
Free helper functions shared by the modes.

Modes compose these rather than inheriting behaviour: the default
per-frame step is just ``advance_stones``, and both Free Explore grouping
and Number Structures recognition cluster stones with
``cluster_by_proximity``.
"""

import math
from typing import Iterable, List, Optional, Sequence, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from zen.modes.stone import Stone

DEFAULT_MAX_DT = 0.1


def clamp_dt(dt: float, max_dt: float = DEFAULT_MAX_DT) -> float:
    """Clamp a frame delta so a stalled frame cannot tunnel stones."""
    if dt <= 0:
        return 0.0
    return min(dt, max_dt)


def advance_stones(stones: Iterable['Stone'], dt: float) -> None:
    """Advance every stone's eased motion by dt."""
    for stone in stones:
        stone.update(dt)


def distance(ax: float, ay: float, bx: float, by: float) -> float:
    return math.hypot(bx - ax, by - ay)


def centroid(stones: Sequence['Stone']) -> Optional[Tuple[float, float]]:
    """Unweighted centre of the given stones, None if empty."""
    if not stones:
        return None
    n = len(stones)
    return (sum(s.x for s in stones) / n, sum(s.y for s in stones) / n)


def mass_centroid(stones: Sequence['Stone']) -> Optional[Tuple[float, float]]:
    """Mass-weighted centre of the given stones, None if empty."""
    total = sum(s.mass for s in stones)
    if not stones or total <= 0:
        return None
    return (
        sum(s.x * s.mass for s in stones) / total,
        sum(s.y * s.mass for s in stones) / total,
    )


def cluster_by_proximity(
    stones: Sequence['Stone'],
    threshold: float,
    min_size: int = 2,
) -> List[List['Stone']]:
    """Partition stones into proximity clusters.

    Flood fill: a stone joins a cluster when it is within ``threshold`` of
    any member already in it, so chains of near stones form one cluster
    even if their endpoints are far apart. Clusters smaller than
    ``min_size`` are dropped.

    Args:
        stones: Stones to cluster (order is preserved inside clusters)
        threshold: Maximum centre-to-centre distance for a link (inclusive)
        min_size: Smallest cluster reported

    Returns:
        List of clusters, each a list of stones
    """
    assigned = set()
    clusters: List[List['Stone']] = []

    for seed in stones:
        if seed.id in assigned:
            continue

        cluster = [seed]
        assigned.add(seed.id)
        frontier = [seed]
        while frontier:
            current = frontier.pop()
            for other in stones:
                if other.id in assigned:
                    continue
                if distance(current.x, current.y, other.x, other.y) <= threshold:
                    assigned.add(other.id)
                    cluster.append(other)
                    frontier.append(other)

        if len(cluster) >= min_size:
            clusters.append(cluster)

    return clusters
