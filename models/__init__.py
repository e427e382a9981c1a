"""
Data models for Zen Stones.

This package provides the Pydantic data models shared across the project:
- Primitives: geometric and colour types (Point2D, Vector2D, Color, Rectangle)
- Challenge: challenge library documents and goal descriptors

Usage:
    >>> from models import Point2D, Challenge
    >>> from models.challenge import StructureFormedGoal
"""

from .primitives import (
    Point2D,
    Vector2D,  # Alias for Point2D
    Color,
    Rectangle,
)

from .challenge import (
    ModeId,
    Goal,
    GroupCountGoal,
    GroupSizeGoal,
    EqualGroupsGoal,
    ScaleBalancedGoal,
    StoneCountPerSideGoal,
    AllStonesUsedGoal,
    StackHeightGoal,
    StackCenteredGoal,
    StackMatchingNeighborsGoal,
    StackAllWarmGoal,
    StructureFormedGoal,
    StructureCountGoal,
    StructuresSumToGoal,
    StructureSpec,
    StoneSpec,
    InitialConfig,
    Challenge,
    ChallengeLibrary,
)

__all__ = [
    # Primitives
    'Point2D',
    'Vector2D',
    'Color',
    'Rectangle',
    # Challenges
    'ModeId',
    'Goal',
    'GroupCountGoal',
    'GroupSizeGoal',
    'EqualGroupsGoal',
    'ScaleBalancedGoal',
    'StoneCountPerSideGoal',
    'AllStonesUsedGoal',
    'StackHeightGoal',
    'StackCenteredGoal',
    'StackMatchingNeighborsGoal',
    'StackAllWarmGoal',
    'StructureFormedGoal',
    'StructureCountGoal',
    'StructuresSumToGoal',
    'StructureSpec',
    'StoneSpec',
    'InitialConfig',
    'Challenge',
    'ChallengeLibrary',
]
