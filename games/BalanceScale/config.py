"""Configuration for Balance Scale mode."""
import math
import os
from pathlib import Path
from typing import List

from pydantic import Field

from zen.modes.config import ModeConfig, load_env_file, parse_floats

MODE_DIR = Path(__file__).parent

load_env_file(MODE_DIR / ".env")

# Beam geometry
BEAM_WIDTH = float(os.environ.get('BEAM_WIDTH', 400))
PAN_RADIUS = float(os.environ.get('PAN_RADIUS', 60))
PAN_SNAP_MARGIN = float(os.environ.get('PAN_SNAP_MARGIN', 20))
FULCRUM_SIZE = float(os.environ.get('FULCRUM_SIZE', 30))

# Tilt
MAX_TILT = float(os.environ.get('MAX_TILT', math.pi / 8))
TILT_SPEED = float(os.environ.get('TILT_SPEED', 4))
BALANCE_EPSILON = float(os.environ.get('BALANCE_EPSILON', 0.01))

# Tray
TRAY_MASSES = parse_floats(os.environ.get('TRAY_MASSES', '1,1,1,2,2,3,3'))
TRAY_Y = float(os.environ.get('TRAY_Y', 80))

# Guess game
FEEDBACK_DURATION = float(os.environ.get('FEEDBACK_DURATION', 2.0))


class BalanceScaleConfig(ModeConfig):
    """Tunables for Balance Scale."""

    beam_width: float = Field(default=BEAM_WIDTH, gt=0.0)
    pan_radius: float = Field(default=PAN_RADIUS, gt=0.0)
    pan_snap_margin: float = Field(default=PAN_SNAP_MARGIN, ge=0.0)
    fulcrum_size: float = Field(default=FULCRUM_SIZE, gt=0.0)
    fulcrum_offset: float = Field(default=40.0, description="Fulcrum below screen centre")

    max_tilt: float = Field(default=MAX_TILT, description="Radians", gt=0.0)
    tilt_speed: float = Field(default=TILT_SPEED, description="Smoothing rate per second", gt=0.0)
    balance_epsilon: float = Field(default=BALANCE_EPSILON, gt=0.0)
    torque_normalizer: float = Field(
        default=6.0,
        description="Mass difference that produces full tilt",
        gt=0.0
    )

    tray_masses: List[float] = Field(default_factory=lambda: list(TRAY_MASSES))
    tray_y: float = Field(default=TRAY_Y)
    tray_width_fraction: float = Field(default=0.6, gt=0.0, le=1.0)

    pan_lift: float = Field(default=15.0, description="Stones sit this far above the pan centre")
    feedback_duration: float = Field(default=FEEDBACK_DURATION, ge=0.0)


def load_config(**overrides) -> BalanceScaleConfig:
    """Build the config from environment defaults plus explicit overrides."""
    return BalanceScaleConfig(**overrides)
