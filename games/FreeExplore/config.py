"""Configuration for Free Explore mode."""
import os
from pathlib import Path
from typing import List

from pydantic import Field

from zen.modes.config import ModeConfig, load_env_file, parse_floats

MODE_DIR = Path(__file__).parent

load_env_file(MODE_DIR / ".env")

# Grouping
GROUP_THRESHOLD = float(os.environ.get('GROUP_THRESHOLD', 80))

# Creation pool
POOL_HEIGHT = float(os.environ.get('POOL_HEIGHT', 80))
POOL_PADDING = float(os.environ.get('POOL_PADDING', 20))
DOUBLE_TAP_TIME = float(os.environ.get('DOUBLE_TAP_TIME', 0.3))
DOUBLE_TAP_DISTANCE = float(os.environ.get('DOUBLE_TAP_DISTANCE', 50))
LABEL_CHANCE = float(os.environ.get('LABEL_CHANCE', 0.2))

# Starting scene
INITIAL_MASSES = parse_floats(os.environ.get('INITIAL_MASSES', '0.5,0.7,1.0,1.0,1.5,2.0,2.5,3.0'))
INITIAL_SPREAD = float(os.environ.get('INITIAL_SPREAD', 150))

# Gravity sandbox
CENTRAL_WELL_MASS = float(os.environ.get('CENTRAL_WELL_MASS', 50))
CENTRAL_WELL_RADIUS = float(os.environ.get('CENTRAL_WELL_RADIUS', 40))
GRAVITATIONAL_CONSTANT = float(os.environ.get('GRAVITATIONAL_CONSTANT', 300))
WELL_STRENGTH = float(os.environ.get('WELL_STRENGTH', 200))
DAMPING = float(os.environ.get('DAMPING', 0.995))
BREAK_SPEED = float(os.environ.get('BREAK_SPEED', 150))
EXPLOSION_SPEED = float(os.environ.get('EXPLOSION_SPEED', 80))


class FreeExploreConfig(ModeConfig):
    """Tunables for Free Explore."""

    group_threshold: float = Field(default=GROUP_THRESHOLD, gt=0.0)

    pool_height: float = Field(default=POOL_HEIGHT, gt=0.0)
    pool_padding: float = Field(default=POOL_PADDING, ge=0.0)
    double_tap_time: float = Field(default=DOUBLE_TAP_TIME, gt=0.0)
    double_tap_distance: float = Field(default=DOUBLE_TAP_DISTANCE, gt=0.0)
    label_chance: float = Field(default=LABEL_CHANCE, ge=0.0, le=1.0)
    min_spawn_mass: float = Field(default=0.5, ge=0.1)
    max_spawn_mass: float = Field(default=3.0, ge=0.1)

    initial_masses: List[float] = Field(default_factory=lambda: list(INITIAL_MASSES))
    initial_spread: float = Field(default=INITIAL_SPREAD, ge=0.0)

    central_well_mass: float = Field(default=CENTRAL_WELL_MASS, gt=0.0)
    central_well_radius: float = Field(default=CENTRAL_WELL_RADIUS, gt=0.0)
    gravitational_constant: float = Field(default=GRAVITATIONAL_CONSTANT, ge=0.0)
    well_mass: float = Field(default=5.0, ge=0.1)
    well_radius_factor: float = Field(default=1.2, gt=0.0)
    well_reach_factor: float = Field(default=3.0, description="Gravitational radius / radius", gt=1.0)
    well_strength: float = Field(default=WELL_STRENGTH, ge=0.0)
    well_max_radius: float = Field(default=70.0, gt=0.0)
    well_growth: float = Field(default=2.0, ge=0.0)
    damping: float = Field(default=DAMPING, gt=0.0, le=1.0)
    break_speed: float = Field(default=BREAK_SPEED, gt=0.0)
    explosion_speed: float = Field(default=EXPLOSION_SPEED, ge=0.0)

    throw_samples: int = Field(default=5, ge=2)
    button_flash: float = Field(default=0.15, ge=0.0)


def load_config(**overrides) -> FreeExploreConfig:
    """Build the config from environment defaults plus explicit overrides."""
    return FreeExploreConfig(**overrides)
