"""Base class for all stone modes.

Every mode implements the same lifecycle so the mode manager can drive it:

    init() -> update(dt) / render(surface) / pointer hooks ... -> cleanup()

Mode metadata (MODE_ID, NAME, DESCRIPTION, ...) and hint texts are class
attributes, which the registry reads without instantiating the mode.

The manager (not the mode) owns the drag session: on_pointer_down returns
the grabbed stone and the manager passes it back into on_pointer_move and
on_pointer_up. A mode must not assume a drag outlives what it is told.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import pygame

from models import InitialConfig
from zen.logging import get_logger
from zen.modes import renderer
from zen.modes.config import ModeConfig
from zen.modes.mode_state import ModeState, QueryableState
from zen.modes.motion import advance_stones, clamp_dt
from zen.modes.palette import StonePalette
from zen.modes.stone import Stone

log = get_logger('base_mode')


class BaseMode(ABC):
    """Abstract base class for all modes.

    Class Attributes (metadata):
        MODE_ID: Identifier used by the registry and the challenge library
        NAME: Display name
        DESCRIPTION: One-line description
        VERSION: Semantic version string
        AUTHOR: Author/team name
        HINTS: Gentle prompts shown after a period of inactivity

    Subclasses must implement:
        - _setup(): Populate stones and sub-entities (called by init)
        - get_state() -> QueryableState: Read-only snapshot for goals

    Optional overrides:
        - update(dt), render(surface): call the base versions for stones
        - on_pointer_down/move/up: mode-specific interaction
        - apply_configuration(initial_config) -> bool
        - _teardown(): Clear mode-specific collections (called by cleanup)
    """

    MODE_ID: str = "unnamed"
    NAME: str = "Unnamed Mode"
    DESCRIPTION: str = "No description"
    VERSION: str = "1.0.0"
    AUTHOR: str = "Zen Stones"
    HINTS: List[str] = []

    CONFIG_CLASS = ModeConfig

    @classmethod
    def get_info(cls) -> Dict[str, Any]:
        """Mode metadata as a dictionary."""
        return {
            'id': cls.MODE_ID,
            'name': cls.NAME,
            'description': cls.DESCRIPTION,
            'version': cls.VERSION,
            'author': cls.AUTHOR,
        }

    def __init__(self, width: int = 1280, height: int = 720, config: Optional[ModeConfig] = None):
        """Initialize the mode (does not create stones until init()).

        Args:
            width: Screen width in pixels
            height: Screen height in pixels
            config: Mode configuration; None means defaults
        """
        self.width = width
        self.height = height
        self.config = config if config is not None else self.CONFIG_CLASS()
        self.palette = StonePalette(self.config.palette)
        self.stones: List[Stone] = []
        self._state = ModeState.UNINITIALIZED

    # =========================================================================
    # Lifecycle
    # =========================================================================

    @property
    def state(self) -> ModeState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state == ModeState.ACTIVE

    def init(self) -> None:
        """Activate the mode and build its scene."""
        self.stones = []
        self._setup()
        self._state = ModeState.ACTIVE
        log.info(f"{self.NAME} started with {len(self.stones)} stones")

    @abstractmethod
    def _setup(self) -> None:
        """Populate the stone collection and sub-entities."""
        pass

    def update(self, dt: float) -> None:
        """Advance one frame. Default: eased motion for every stone."""
        advance_stones(self.stones, clamp_dt(dt, self.config.max_dt))

    def render(self, surface: pygame.Surface) -> None:
        """Draw background then stones in list order (last on top)."""
        renderer.draw_background(surface, self.config.background_color, self.config.show_texture)
        self._render_stones(surface)

    def _render_stones(self, surface: pygame.Surface) -> None:
        for stone in self.stones:
            renderer.draw_stone(surface, stone)

    def cleanup(self) -> None:
        """Deactivate and release everything the mode owns."""
        for stone in self.stones:
            stone.stop_drag()
        self._teardown()
        self.stones = []
        self._state = ModeState.INACTIVE
        log.info(f"{self.NAME} cleaned up")

    def _teardown(self) -> None:
        """Clear mode-specific collections."""
        pass

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    # =========================================================================
    # Pointer hooks
    # =========================================================================

    def on_pointer_down(self, x: float, y: float) -> Optional[Stone]:
        """Grab the top-most stone under the pointer.

        Returns:
            The grabbed stone, or None (nothing there, or it is locked)
        """
        stone = self.find_stone_at(x, y)
        if stone is None or not stone.start_drag():
            return None
        self.move_stone_to_top(stone)
        return stone

    def on_pointer_move(self, x: float, y: float, dragged: Optional[Stone]) -> None:
        if dragged is not None:
            dragged.set_position(x, y)

    def on_pointer_up(self, x: float, y: float, dragged: Optional[Stone]) -> None:
        if dragged is not None:
            dragged.stop_drag()

    # =========================================================================
    # Stone collection helpers
    # =========================================================================

    def find_stone_at(self, x: float, y: float) -> Optional[Stone]:
        """Top-most stone containing the point (searches last-drawn first)."""
        for stone in reversed(self.stones):
            if stone.contains(x, y):
                return stone
        return None

    def move_stone_to_top(self, stone: Stone) -> None:
        """Reorder so the stone draws above all others."""
        if stone in self.stones:
            self.stones.remove(stone)
            self.stones.append(stone)

    def add_stone(self, stone: Stone) -> Stone:
        self.stones.append(stone)
        return stone

    def remove_stone(self, stone: Stone) -> bool:
        if stone in self.stones:
            self.stones.remove(stone)
            return True
        return False

    def get_stone(self, stone_id: int) -> Optional[Stone]:
        for stone in self.stones:
            if stone.id == stone_id:
                return stone
        return None

    # =========================================================================
    # Queries and configuration
    # =========================================================================

    @abstractmethod
    def get_state(self) -> QueryableState:
        """Read-only snapshot used by the challenge evaluator."""
        pass

    def apply_configuration(self, initial_config: InitialConfig) -> bool:
        """Rebuild the scene from a challenge's initial configuration.

        Returns:
            False when the mode does not support configuration loading
        """
        return False

    @property
    def center(self):
        return (self.width / 2, self.height / 2)
