"""
Pydantic v2 models for the challenge library.

A challenge binds a mode to an ordered list of declarative goals and an
optional initial scene. Goals are discriminated on their ``type`` field so
the YAML library reads naturally:

    goals:
      - type: structure-formed
        value: 8
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

ModeId = Literal["free-explore", "balance-scale", "stack-balance", "number-structures"]


# =============================================================================
# Goal descriptors
# =============================================================================

class GroupCountGoal(BaseModel):
    """Exactly ``count`` proximity groups exist."""
    model_config = {"frozen": True}

    type: Literal["group-count"] = "group-count"
    count: int = Field(description="Required number of groups", ge=0)


class GroupSizeGoal(BaseModel):
    """At least one group contains exactly ``size`` stones."""
    model_config = {"frozen": True}

    type: Literal["group-size"] = "group-size"
    size: int = Field(description="Stones per group", ge=2)


class EqualGroupsGoal(BaseModel):
    """Two or more groups exist and all have the same size."""
    model_config = {"frozen": True}

    type: Literal["equal-groups"] = "equal-groups"


class ScaleBalancedGoal(BaseModel):
    """Both pans carry (nearly) the same mass.

    The check compares pan masses rather than the beam angle because goals
    are evaluated on pointer-up, before the beam has finished easing.
    """
    model_config = {"frozen": True}

    type: Literal["scale-balanced"] = "scale-balanced"
    tolerance: float = Field(
        default=0.0,
        description="Allowed |left - right| / (left + right) mass difference",
        ge=0.0,
        le=1.0
    )


class StoneCountPerSideGoal(BaseModel):
    """Each pan holds an exact number of stones."""
    model_config = {"frozen": True}

    type: Literal["stone-count-per-side"] = "stone-count-per-side"
    left: int = Field(ge=0)
    right: int = Field(ge=0)


class AllStonesUsedGoal(BaseModel):
    """No stone is left in the tray or lying loose."""
    model_config = {"frozen": True}

    type: Literal["all-stones-used"] = "all-stones-used"


class StackHeightGoal(BaseModel):
    """A standing stack of at least ``min_height`` stones."""
    model_config = {"frozen": True}

    type: Literal["stack-height"] = "stack-height"
    min_height: int = Field(ge=1)


class StackCenteredGoal(BaseModel):
    """The stack's centre of mass sits close to the platform centre."""
    model_config = {"frozen": True}

    type: Literal["stack-centered"] = "stack-centered"
    tolerance: float = Field(default=30.0, description="Pixels from platform centre", gt=0.0)


class StackMatchingNeighborsGoal(BaseModel):
    """Every stacked stone touches a stacked neighbour of the same colour."""
    model_config = {"frozen": True}

    type: Literal["stack-matching-neighbors"] = "stack-matching-neighbors"
    touch_factor: float = Field(
        default=1.5,
        description="Stones touch when closer than touch_factor * (r1 + r2)",
        gt=0.0
    )


class StackAllWarmGoal(BaseModel):
    """Every stacked stone has a warm colour."""
    model_config = {"frozen": True}

    type: Literal["stack-all-warm"] = "stack-all-warm"


class StructureFormedGoal(BaseModel):
    """An intact structure of ``value`` exists."""
    model_config = {"frozen": True}

    type: Literal["structure-formed"] = "structure-formed"
    value: int = Field(ge=1, le=20)


class StructureCountGoal(BaseModel):
    """At least ``min_count`` intact structures, optionally of one value."""
    model_config = {"frozen": True}

    type: Literal["structure-count"] = "structure-count"
    min_count: int = Field(ge=1)
    value: Optional[int] = Field(default=None, ge=1, le=20)


class StructuresSumToGoal(BaseModel):
    """The intact structures' values add up to ``target_sum``."""
    model_config = {"frozen": True}

    type: Literal["structures-sum-to"] = "structures-sum-to"
    target_sum: int = Field(ge=1)


Goal = Annotated[
    Union[
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
    ],
    Field(discriminator="type"),
]


# =============================================================================
# Initial scene
# =============================================================================

class StructureSpec(BaseModel):
    """A pre-built structure placed relative to the screen centre."""
    model_config = {"frozen": True}

    value: int = Field(ge=1, le=20)
    offset_x: float = 0.0
    offset_y: float = 0.0


class StoneSpec(BaseModel):
    """A loose stone placed relative to the screen centre."""
    model_config = {"frozen": True}

    offset_x: float = 0.0
    offset_y: float = 0.0
    mass: float = Field(default=1.0, ge=0.1)
    label: Optional[int] = Field(default=None, ge=1)


class InitialConfig(BaseModel):
    """Scene a mode builds when a challenge starts."""
    model_config = {"frozen": True}

    structures: List[StructureSpec] = Field(default_factory=list)
    stones: List[StoneSpec] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.structures and not self.stones


# =============================================================================
# Challenge
# =============================================================================

class Challenge(BaseModel):
    """One entry in the challenge library."""
    model_config = {"frozen": True}

    id: str = Field(min_length=1)
    mode: ModeId
    title: str
    description: str = ""
    difficulty: int = Field(default=1, ge=1, le=4)
    concepts: List[str] = Field(default_factory=list)
    goals: List[Goal] = Field(min_length=1)
    initial_config: Optional[InitialConfig] = None
    hint: str = Field(default="", description="Shown when the challenge starts")

    @field_validator('id')
    @classmethod
    def validate_id(cls, v: str) -> str:
        if v != v.strip() or ' ' in v:
            raise ValueError(f'Challenge id must not contain spaces, got {v!r}')
        return v


class ChallengeLibrary(BaseModel):
    """Top-level document of a challenge library file."""
    model_config = {"frozen": True}

    version: int = 1
    challenges: List[Challenge] = Field(default_factory=list)

    @model_validator(mode='after')
    def validate_unique_ids(self) -> 'ChallengeLibrary':
        seen = set()
        for challenge in self.challenges:
            if challenge.id in seen:
                raise ValueError(f'Duplicate challenge id: {challenge.id}')
            seen.add(challenge.id)
        return self
