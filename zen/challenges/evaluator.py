"""
Goal evaluation against a mode's queryable state.

Every check is a pure predicate over frozen snapshots. A goal asked about
a state of the wrong mode is simply not satisfied.
"""
import math
from typing import Callable, Dict, Iterable, Optional, Sequence, Type

from models import (
    AllStonesUsedGoal,
    EqualGroupsGoal,
    GroupCountGoal,
    GroupSizeGoal,
    ScaleBalancedGoal,
    StackAllWarmGoal,
    StackCenteredGoal,
    StackHeightGoal,
    StackMatchingNeighborsGoal,
    StoneCountPerSideGoal,
    StructureCountGoal,
    StructureFormedGoal,
    StructuresSumToGoal,
)
from zen.logging import get_logger
from zen.modes import palette
from zen.modes.mode_state import (
    BalanceState,
    FreeExploreState,
    QueryableState,
    StackState,
    StoneSnapshot,
    StructuresState,
)

log = get_logger('evaluator')


def _mass(stones: Sequence[StoneSnapshot]) -> float:
    return sum(s.mass for s in stones)


# =============================================================================
# Free Explore
# =============================================================================

def _group_count(goal: GroupCountGoal, state: QueryableState) -> bool:
    return isinstance(state, FreeExploreState) and len(state.groups) == goal.count


def _group_size(goal: GroupSizeGoal, state: QueryableState) -> bool:
    return isinstance(state, FreeExploreState) and any(len(g) == goal.size for g in state.groups)


def _equal_groups(goal: EqualGroupsGoal, state: QueryableState) -> bool:
    if not isinstance(state, FreeExploreState) or len(state.groups) < 2:
        return False
    return len({len(g) for g in state.groups}) == 1


# =============================================================================
# Balance Scale
# =============================================================================

def _scale_balanced(goal: ScaleBalancedGoal, state: QueryableState) -> bool:
    if not isinstance(state, BalanceState):
        return False
    left, right = _mass(state.left), _mass(state.right)
    total = left + right
    if total <= 0:
        return False
    return abs(left - right) / total <= goal.tolerance + 1e-9


def _count_per_side(goal: StoneCountPerSideGoal, state: QueryableState) -> bool:
    return (isinstance(state, BalanceState)
            and len(state.left) == goal.left and len(state.right) == goal.right)


def _all_stones_used(goal: AllStonesUsedGoal, state: QueryableState) -> bool:
    if isinstance(state, BalanceState):
        return not state.tray and bool(state.left or state.right)
    if isinstance(state, StackState):
        return not state.available and bool(state.stacked)
    if isinstance(state, StructuresState):
        return not state.loose and bool(state.structures)
    return False


# =============================================================================
# Stack Balance
# =============================================================================

def _stack_height(goal: StackHeightGoal, state: QueryableState) -> bool:
    return (isinstance(state, StackState) and not state.is_toppling
            and len(state.stacked) >= goal.min_height)


def _stack_centered(goal: StackCenteredGoal, state: QueryableState) -> bool:
    if not isinstance(state, StackState) or not state.stacked:
        return False
    total = _mass(state.stacked)
    center_x = sum(s.x * s.mass for s in state.stacked) / total
    return abs(center_x - state.platform_x) <= goal.tolerance


def _stack_matching_neighbors(goal: StackMatchingNeighborsGoal, state: QueryableState) -> bool:
    if not isinstance(state, StackState) or len(state.stacked) < 2:
        return False

    def has_match(stone: StoneSnapshot) -> bool:
        for other in state.stacked:
            if other.id == stone.id or other.color_name != stone.color_name:
                continue
            if math.hypot(other.x - stone.x, other.y - stone.y) < goal.touch_factor * (stone.radius + other.radius):
                return True
        return False

    return all(has_match(s) for s in state.stacked)


def _stack_all_warm(goal: StackAllWarmGoal, state: QueryableState) -> bool:
    if not isinstance(state, StackState) or not state.stacked:
        return False
    return all(palette.is_warm(s.color_name or '') for s in state.stacked)


# =============================================================================
# Number Structures
# =============================================================================

def _intact_values(state: QueryableState) -> Optional[list]:
    if not isinstance(state, StructuresState):
        return None
    return [s.value for s in state.structures if s.intact]


def _structure_formed(goal: StructureFormedGoal, state: QueryableState) -> bool:
    found = _intact_values(state)
    return found is not None and goal.value in found


def _structure_count(goal: StructureCountGoal, state: QueryableState) -> bool:
    found = _intact_values(state)
    if found is None:
        return False
    if goal.value is not None:
        found = [v for v in found if v == goal.value]
    return len(found) >= goal.min_count


def _structures_sum_to(goal: StructuresSumToGoal, state: QueryableState) -> bool:
    found = _intact_values(state)
    return bool(found) and sum(found) == goal.target_sum


_CHECKS: Dict[Type, Callable[..., bool]] = {
    GroupCountGoal: _group_count,
    GroupSizeGoal: _group_size,
    EqualGroupsGoal: _equal_groups,
    ScaleBalancedGoal: _scale_balanced,
    StoneCountPerSideGoal: _count_per_side,
    AllStonesUsedGoal: _all_stones_used,
    StackHeightGoal: _stack_height,
    StackCenteredGoal: _stack_centered,
    StackMatchingNeighborsGoal: _stack_matching_neighbors,
    StackAllWarmGoal: _stack_all_warm,
    StructureFormedGoal: _structure_formed,
    StructureCountGoal: _structure_count,
    StructuresSumToGoal: _structures_sum_to,
}


def evaluate_goal(goal, state: Optional[QueryableState]) -> bool:
    """True if the goal holds for the given state.

    Unknown goal types, a missing state and any failure inside a check
    all count as "not satisfied"; evaluation never raises.
    """
    if state is None:
        return False
    check = _CHECKS.get(type(goal))
    if check is None:
        log.warning(f"No check for goal type {type(goal).__name__}")
        return False
    try:
        return bool(check(goal, state))
    except (ArithmeticError, TypeError, ValueError, AttributeError) as e:
        log.warning(f"Goal {getattr(goal, 'type', goal)} could not be evaluated: {e}")
        return False


def evaluate_goals(goals: Iterable, state: Optional[QueryableState]) -> bool:
    """True when every goal holds (and there is at least one)."""
    goals = list(goals)
    return bool(goals) and all(evaluate_goal(g, state) for g in goals)
