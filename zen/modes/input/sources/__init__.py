"""
Input source implementations.
"""

from zen.modes.input.sources.base import InputSource
from zen.modes.input.sources.mouse import MouseInputSource

__all__ = ['InputSource', 'MouseInputSource']
