"""
Base configuration model shared by every mode.

Each mode package extends ModeConfig with its own tunables in its
config.py, where defaults come from environment variables (or a .env file
next to the mode). Modes receive a config instance at construction.
"""

import os
from pathlib import Path
from typing import List, Tuple

from pydantic import BaseModel, Field

from zen.modes import palette as stone_palette


def load_env_file(env_file: Path) -> None:
    """Load KEY=VALUE lines from a .env file without overriding the environment."""
    if not env_file.exists():
        return
    with open(env_file) as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith('#') and '=' in line:
                key, value = line.split('=', 1)
                if key.strip() not in os.environ:
                    os.environ[key.strip()] = value.strip()


def parse_color(value: str, default: Tuple[int, int, int] = (255, 255, 255)) -> Tuple[int, int, int]:
    """Parse RGB color from string like '255,255,255'."""
    try:
        parts = value.split(',')
        return (int(parts[0]), int(parts[1]), int(parts[2]))
    except (ValueError, IndexError):
        return default


def parse_bool(value: str) -> bool:
    """Parse boolean from string."""
    return value.lower() in ('true', '1', 'yes')


def parse_floats(value: str) -> List[float]:
    """Parse '1,1,2.5' into [1.0, 1.0, 2.5]."""
    return [float(part) for part in value.split(',') if part.strip()]


SCREEN_WIDTH = int(os.environ.get('SCREEN_WIDTH', 1280))
SCREEN_HEIGHT = int(os.environ.get('SCREEN_HEIGHT', 720))


class ModeConfig(BaseModel):
    """Settings common to all modes."""
    model_config = {"frozen": True}

    stone_radius: float = Field(default=35.0, description="Base stone radius in pixels", gt=0.0)
    max_dt: float = Field(
        default=0.1,
        description="Largest frame delta used for integration (seconds)",
        gt=0.0
    )
    palette: str = Field(
        default=os.environ.get('STONE_PALETTE', 'earth'),
        description="Stone tone palette name"
    )
    background_color: Tuple[int, int, int] = parse_color(
        os.environ.get('BACKGROUND_COLOR', ''), stone_palette.BACKGROUND
    )
    text_color: Tuple[int, int, int] = stone_palette.TEXT
    show_texture: bool = Field(
        default=parse_bool(os.environ.get('SHOW_TEXTURE', 'true')),
        description="Speckled paper background"
    )
