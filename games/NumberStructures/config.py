"""Configuration for Number Structures mode."""
import os
from pathlib import Path

from pydantic import Field

from zen.modes.config import ModeConfig, load_env_file

MODE_DIR = Path(__file__).parent

load_env_file(MODE_DIR / ".env")

STRUCTURE_SPACING = float(os.environ.get('STRUCTURE_SPACING', 50))
RECOGNITION_THRESHOLD = float(os.environ.get('RECOGNITION_THRESHOLD', 40))
CLUSTER_DISTANCE = float(os.environ.get('CLUSTER_DISTANCE', 80))
MERGE_DISTANCE = float(os.environ.get('MERGE_DISTANCE', 120))
EXTRACT_DISTANCE = float(os.environ.get('EXTRACT_DISTANCE', 30))
EXTRACT_HOLD_TIME = float(os.environ.get('EXTRACT_HOLD_TIME', 0.15))


class NumberStructuresConfig(ModeConfig):
    """Tunables for Number Structures."""

    spacing: float = Field(default=STRUCTURE_SPACING, description="Distance between pattern slots", gt=0.0)
    structure_stone_radius: float = Field(default=22.0, gt=0.0)

    recognition_threshold: float = Field(default=RECOGNITION_THRESHOLD, gt=0.0)
    average_error_fraction: float = Field(
        default=0.7,
        description="Mean slot error must stay below this fraction of the threshold",
        gt=0.0,
        le=1.0
    )
    cluster_distance: float = Field(default=CLUSTER_DISTANCE, gt=0.0)
    merge_distance: float = Field(default=MERGE_DISTANCE, gt=0.0)

    extract_distance: float = Field(default=EXTRACT_DISTANCE, gt=0.0)
    extract_hold_time: float = Field(
        default=EXTRACT_HOLD_TIME,
        description="Press held this long before moving pulls a single stone out",
        ge=0.0
    )
    glow_duration: float = Field(default=2.0, ge=0.0)

    initial_left_value: int = Field(default=3, ge=1, le=20)
    initial_right_value: int = Field(default=5, ge=1, le=20)
    initial_offset: float = Field(default=150.0)


def load_config(**overrides) -> NumberStructuresConfig:
    """Build the config from environment defaults plus explicit overrides."""
    return NumberStructuresConfig(**overrides)
