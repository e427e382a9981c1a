"""
Mode Manager - owns the active mode and the pointer drag session.

The manager is the only place that remembers which stone is being dragged.
It forwards pointer events to the active mode with the grab offset removed,
so a stone does not jump to centre itself under the pointer.
"""
from typing import Callable, List, Optional

import pygame

from zen.logging import get_logger
from zen.modes.base_mode import BaseMode
from zen.modes.config import ModeConfig
from zen.modes.input.pointer_event import PointerAction, PointerEvent
from zen.modes.stone import Stone

log = get_logger('mode_manager')

PointerUpListener = Callable[[float, float], None]


class ModeManager:
    """Switches between modes and routes input and frames to the active one.

    Usage:
        manager = ModeManager(ModeRegistry(), 1280, 720)
        manager.switch_mode('free-explore')
        manager.pointer_down(x, y)
    """

    def __init__(self, registry, width: int, height: int):
        self.registry = registry
        self.width = width
        self.height = height
        self.current_mode: Optional[BaseMode] = None
        self.dragged: Optional[Stone] = None
        self._grab_offset = (0.0, 0.0)
        self._pointer_up_listeners: List[PointerUpListener] = []
        self._mode_switch_listeners: List[Callable[[str], None]] = []

    @property
    def current_mode_id(self) -> Optional[str]:
        return self.current_mode.MODE_ID if self.current_mode is not None else None

    def add_pointer_up_listener(self, listener: PointerUpListener) -> None:
        """Called with (x, y) after the mode has handled every pointer-up."""
        self._pointer_up_listeners.append(listener)

    def add_mode_switch_listener(self, listener: Callable[[str], None]) -> None:
        self._mode_switch_listeners.append(listener)

    def switch_mode(self, mode_id: str, config: Optional[ModeConfig] = None, **kwargs) -> BaseMode:
        """Clean up the current mode, then create and init the new one.

        Raises:
            KeyError: Unknown mode id (the current mode is left running)
        """
        mode = self.registry.create_mode(mode_id, self.width, self.height, config=config, **kwargs)

        self.blur()
        if self.current_mode is not None:
            self.current_mode.cleanup()

        mode.init()
        self.current_mode = mode
        log.info(f"Switched to {mode.NAME}")
        for listener in self._mode_switch_listeners:
            listener(mode_id)
        return mode

    # =========================================================================
    # Pointer
    # =========================================================================

    def pointer_down(self, x: float, y: float) -> Optional[Stone]:
        if self.current_mode is None:
            return None
        self.dragged = self.current_mode.on_pointer_down(x, y)
        if self.dragged is not None:
            self._grab_offset = (x - self.dragged.x, y - self.dragged.y)
        else:
            self._grab_offset = (0.0, 0.0)
        return self.dragged

    def pointer_move(self, x: float, y: float) -> None:
        if self.current_mode is None:
            return
        if self.dragged is not None:
            x -= self._grab_offset[0]
            y -= self._grab_offset[1]
        self.current_mode.on_pointer_move(x, y, self.dragged)

    def pointer_up(self, x: float, y: float) -> None:
        """Release: the mode sees the stone centre, listeners the raw pointer."""
        if self.current_mode is None:
            return
        dragged = self.dragged
        offset_x, offset_y = self._grab_offset
        self.dragged = None
        self._grab_offset = (0.0, 0.0)
        self.current_mode.on_pointer_up(x - offset_x, y - offset_y, dragged)
        if dragged is not None:
            dragged.stop_drag()
        for listener in self._pointer_up_listeners:
            listener(x, y)

    def blur(self) -> None:
        """Stop any drag, e.g. when the window loses focus."""
        if self.dragged is not None:
            self.dragged.stop_drag()
            log.debug(f"Drag of stone {self.dragged.id} cancelled")
        self.dragged = None
        self._grab_offset = (0.0, 0.0)

    def handle_input(self, events: List[PointerEvent]) -> None:
        for event in events:
            if event.action == PointerAction.DOWN:
                self.pointer_down(event.x, event.y)
            elif event.action == PointerAction.MOVE:
                self.pointer_move(event.x, event.y)
            elif event.action == PointerAction.UP:
                self.pointer_up(event.x, event.y)

    # =========================================================================
    # Frame
    # =========================================================================

    def update(self, dt: float) -> None:
        if self.current_mode is not None:
            self.current_mode.update(dt)

    def render(self, surface: pygame.Surface) -> None:
        if self.current_mode is not None:
            self.current_mode.render(surface)

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        if self.current_mode is not None:
            self.current_mode.resize(width, height)

    def shutdown(self) -> None:
        self.blur()
        if self.current_mode is not None:
            self.current_mode.cleanup()
            self.current_mode = None
