"""
Tests for the challenge data models.

Tests cover:
- Goal parsing through the discriminator
- Challenge field validation
- Library id uniqueness
"""

import pytest
from pydantic import ValidationError

from models import (
    Challenge,
    ChallengeLibrary,
    InitialConfig,
    StackHeightGoal,
    StructureFormedGoal,
    StructureSpec,
)


def challenge_data(**overrides):
    data = {
        "id": "struct-100",
        "mode": "number-structures",
        "title": "Make Eight",
        "goals": [{"type": "structure-formed", "value": 8}],
    }
    data.update(overrides)
    return data


class TestGoals:

    def test_discriminator_picks_class(self):
        challenge = Challenge(**challenge_data(goals=[
            {"type": "structure-formed", "value": 8},
            {"type": "stack-height", "min_height": 3},
        ]))
        assert isinstance(challenge.goals[0], StructureFormedGoal)
        assert isinstance(challenge.goals[1], StackHeightGoal)

    def test_unknown_goal_type_rejected(self):
        with pytest.raises(ValidationError):
            Challenge(**challenge_data(goals=[{"type": "fly-away"}]))

    def test_goal_field_range(self):
        with pytest.raises(ValidationError):
            StructureFormedGoal(value=21)

    def test_goals_are_frozen(self):
        goal = StructureFormedGoal(value=3)
        with pytest.raises(ValidationError):
            goal.value = 4


class TestChallenge:

    def test_defaults(self):
        challenge = Challenge(**challenge_data())
        assert challenge.difficulty == 1
        assert challenge.initial_config is None
        assert challenge.hint == ""

    def test_needs_a_goal(self):
        with pytest.raises(ValidationError):
            Challenge(**challenge_data(goals=[]))

    def test_unknown_mode(self):
        with pytest.raises(ValidationError):
            Challenge(**challenge_data(mode="space-race"))

    @pytest.mark.parametrize("difficulty", [0, 5])
    def test_difficulty_range(self, difficulty):
        with pytest.raises(ValidationError):
            Challenge(**challenge_data(difficulty=difficulty))

    def test_id_without_spaces(self):
        with pytest.raises(ValidationError):
            Challenge(**challenge_data(id="struct 100"))

    def test_initial_config(self):
        challenge = Challenge(**challenge_data(initial_config={"structures": [{"value": 8}]}))
        assert challenge.initial_config.structures == [StructureSpec(value=8)]
        assert not challenge.initial_config.is_empty
        assert InitialConfig().is_empty


class TestLibrary:

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValidationError, match="Duplicate"):
            ChallengeLibrary(challenges=[challenge_data(), challenge_data()])

    def test_empty_library(self):
        assert ChallengeLibrary().challenges == []
