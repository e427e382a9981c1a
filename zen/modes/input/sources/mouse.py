"""
Mouse Input Source - converts pygame mouse events into pointer events.
"""
import time
from typing import Callable, List

import pygame

from models import Point2D
from zen.modes.input.pointer_event import PointerAction, PointerEvent
from zen.modes.input.sources.base import InputSource


class MouseInputSource(InputSource):
    """Left-button mouse as a pointer.

    Feed it every pygame event from the main loop; mouse events it
    understands are queued and the method reports whether it consumed one.
    Motion is only forwarded while the button is held.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._event_queue: List[PointerEvent] = []
        self._clock = clock
        self._pressed = False

    def process_event(self, event: pygame.event.Event) -> bool:
        action = None
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._pressed = True
            action = PointerAction.DOWN
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self._pressed = False
            action = PointerAction.UP
        elif event.type == pygame.MOUSEMOTION and self._pressed:
            action = PointerAction.MOVE

        if action is None:
            return False

        pos_x, pos_y = event.pos
        self._event_queue.append(PointerEvent(
            action=action,
            position=Point2D(x=float(pos_x), y=float(pos_y)),
            timestamp=self._clock(),
        ))
        return True

    def release(self) -> None:
        """Forget a held button (e.g. the window lost focus)."""
        self._pressed = False

    def poll_events(self) -> List[PointerEvent]:
        events = self._event_queue.copy()
        self._event_queue.clear()
        return events
