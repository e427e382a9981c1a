"""Configuration for Stack Balance mode."""
import os
from pathlib import Path

from pydantic import Field

from zen.modes.config import ModeConfig, load_env_file

MODE_DIR = Path(__file__).parent

load_env_file(MODE_DIR / ".env")

# Falling
GRAVITY = float(os.environ.get('STACK_GRAVITY', 400))
REST_SPEED = float(os.environ.get('REST_SPEED', 60))

# Platform
PLATFORM_WIDTH = float(os.environ.get('PLATFORM_WIDTH', 200))
PLATFORM_HEIGHT = float(os.environ.get('PLATFORM_HEIGHT', 8))
PLATFORM_BOTTOM_OFFSET = float(os.environ.get('PLATFORM_BOTTOM_OFFSET', 100))

# Stability
STABILITY_TOLERANCE = float(os.environ.get('STABILITY_TOLERANCE', 0.6))
TOPPLE_FORCE = float(os.environ.get('TOPPLE_FORCE', 150))

# Tray
STONE_COUNT = int(os.environ.get('STACK_STONE_COUNT', 10))


class StackBalanceConfig(ModeConfig):
    """Tunables for Stack Balance."""

    gravity: float = Field(default=GRAVITY, description="Pixels per second squared", gt=0.0)

    platform_width: float = Field(default=PLATFORM_WIDTH, gt=0.0)
    platform_height: float = Field(default=PLATFORM_HEIGHT, gt=0.0)
    platform_bottom_offset: float = Field(default=PLATFORM_BOTTOM_OFFSET, description="Platform y above the bottom edge")

    stability_tolerance: float = Field(
        default=STABILITY_TOLERANCE,
        description="Allowed centroid offset as a fraction of the platform half-width",
        gt=0.0
    )
    topple_force: float = Field(default=TOPPLE_FORCE, ge=0.0)
    topple_height_factor: float = Field(default=0.3, ge=0.0)
    topple_kick: float = Field(default=50.0, description="Largest upward speed on topple", ge=0.0)
    topple_spin_min: float = Field(default=2.0, ge=0.0)
    topple_spin_max: float = Field(default=5.0, ge=0.0)
    topple_friction: float = Field(default=0.98, gt=0.0, le=1.0)
    offscreen_margin: float = Field(default=100.0, ge=0.0)

    drop_zone_y: float = Field(default=120.0, description="Releases below this y start falling")
    rest_speed: float = Field(default=REST_SPEED, gt=0.0)
    restitution_base: float = Field(default=0.2, ge=0.0)
    restitution_per_speed: float = Field(default=0.002, ge=0.0)
    restitution_max: float = Field(default=0.5, ge=0.0, le=1.0)
    bounce_scatter: float = Field(default=20.0, ge=0.0)
    landing_footprint: float = Field(default=0.8, description="Fraction of r1 + r2 counted as overlap", gt=0.0)

    wobble_spring: float = Field(default=120.0, gt=0.0)
    wobble_damping: float = Field(default=6.0, ge=0.0)
    wobble_transfer: float = Field(default=0.05, ge=0.0)
    wobble_radius_factor: float = Field(default=2.5, gt=0.0)

    touch_factor: float = Field(default=1.1, gt=0.0)
    glow_decay: float = Field(default=1.0, description="Glow lost per second", ge=0.0)
    spark_duration: float = Field(default=0.5, ge=0.0)
    blend_radius: float = Field(default=150.0, gt=0.0)
    blend_strength: float = Field(default=0.35, ge=0.0, le=1.0)

    stone_count: int = Field(default=STONE_COUNT, ge=1)
    min_size: float = Field(default=0.7, gt=0.0)
    max_size: float = Field(default=1.3, gt=0.0)
    tray_width_fraction: float = Field(default=0.8, gt=0.0, le=1.0)
    tray_y: float = Field(default=60.0)


def load_config(**overrides) -> StackBalanceConfig:
    """Build the config from environment defaults plus explicit overrides."""
    return StackBalanceConfig(**overrides)
