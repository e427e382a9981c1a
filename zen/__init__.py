"""
Zen Stones

Shared core for the stones toy: the stone entity, the mode lifecycle
contract, the mode manager, challenges and hints. The individual modes live
in the games/ package.
"""

from zen.logging import get_logger

logger = get_logger('zen')

__all__ = ['logger']
