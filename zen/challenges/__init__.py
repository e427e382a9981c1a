"""
Challenges - declarative goals over a mode's queryable state.

    loader:    ChallengeLoader reads the YAML/JSON library into pydantic models
    evaluator: evaluate_goal(goal, state) pure predicates
    engine:    ChallengeEngine drives the active challenge through the manager
    progress:  ProgressStore keeps completed challenge ids on disk
"""

from zen.challenges.loader import ChallengeLoader, ChallengeLoadError, DEFAULT_LIBRARY_PATH
from zen.challenges.evaluator import evaluate_goal, evaluate_goals
from zen.challenges.progress import ProgressStore, default_progress_path
from zen.challenges.engine import ChallengeEngine

__all__ = [
    'ChallengeLoader',
    'ChallengeLoadError',
    'DEFAULT_LIBRARY_PATH',
    'evaluate_goal',
    'evaluate_goals',
    'ProgressStore',
    'default_progress_path',
    'ChallengeEngine',
]
