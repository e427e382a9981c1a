"""
Pointer input abstraction.

The mode manager only understands PointerEvents; sources convert a
concrete backend (the mouse, for now) into them.
"""

from zen.modes.input.pointer_event import PointerAction, PointerEvent

__all__ = ['PointerAction', 'PointerEvent']
