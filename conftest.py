"""Shared pytest fixtures."""
import os
import random

import pytest

# Rendering tests draw on off-screen surfaces only
os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def surface():
    """Off-screen pygame surface for render smoke tests."""
    import pygame
    pygame.font.init()
    yield pygame.Surface((1280, 720))
