"""
Base Input Source - abstract interface for pointer backends.
"""
from abc import ABC, abstractmethod
from typing import List

from zen.modes.input.pointer_event import PointerEvent


class InputSource(ABC):
    """Abstract base class for pointer input sources."""

    @abstractmethod
    def poll_events(self) -> List[PointerEvent]:
        """Return pointer events collected since the last poll."""
        pass

    def clear(self) -> None:
        """Drop any queued events."""
        self.poll_events()
