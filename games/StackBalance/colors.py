"""Neighbour colour reactions and ambient blending for stacked stones."""
import math
from typing import Optional, Sequence

from zen.modes import palette
from games.StackBalance.stack import StackBody, StackPhase

MATCH = "match"
SPARK = "spark"
KIN = "kin"

MATCH_GLOW = 1.0
KIN_GLOW = 0.4


def touching(a: StackBody, b: StackBody, factor: float) -> bool:
    reach = (a.stone.radius + b.stone.radius) * factor
    return a.stone.distance_to(b.stone) < reach


def reaction_for(a: str, b: str) -> Optional[str]:
    """Reaction between two colour names, or None."""
    if a == b:
        return MATCH
    if palette.are_complementary(a, b):
        return SPARK
    category = palette.color_category(a)
    if category is not None and category == palette.color_category(b):
        return KIN
    return None


def apply_reactions(bodies: Sequence[StackBody], touch_factor: float,
                    spark_duration: float) -> int:
    """Light up touching stacked pairs.

    Returns:
        Number of reacting pairs
    """
    stacked = [b for b in bodies if b.phase == StackPhase.STACKED]
    pairs = 0
    for i, a in enumerate(stacked):
        for b in stacked[i + 1:]:
            if not touching(a, b, touch_factor):
                continue
            kind = reaction_for(a.color_name, b.color_name)
            if kind == MATCH:
                a.glow = b.glow = MATCH_GLOW
            elif kind == SPARK:
                a.spark = max(a.spark, spark_duration)
                b.spark = max(b.spark, spark_duration)
            elif kind == KIN:
                a.glow = max(a.glow, KIN_GLOW)
                b.glow = max(b.glow, KIN_GLOW)
            else:
                continue
            pairs += 1
    return pairs


def decay(body: StackBody, dt: float, glow_rate: float) -> None:
    body.glow = max(0.0, body.glow - glow_rate * dt)
    body.spark = max(0.0, body.spark - dt)


def blend_colors(bodies: Sequence[StackBody], radius: float, strength: float) -> None:
    """Shift each stacked stone's display colour toward its neighbours'.

    Neighbours within ``radius`` are weighted by closeness; stones off the
    stack show their own colour.
    """
    stacked = [b for b in bodies if b.phase == StackPhase.STACKED]
    for body in bodies:
        body.display_color = body.base_color
        if body.phase != StackPhase.STACKED:
            continue

        colors, weights = [], []
        for other in stacked:
            if other is body:
                continue
            d = math.hypot(other.stone.x - body.stone.x, other.stone.y - body.stone.y)
            if d < radius:
                colors.append(other.base_color)
                weights.append(1.0 - d / radius)

        average = palette.weighted_average(colors, weights)
        if average is not None:
            body.display_color = palette.lerp_color(body.base_color, average, strength)
