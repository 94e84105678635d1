import os
import random

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame  # noqa: E402

import snake  # noqa: E402


@pytest.fixture
def config():
    return snake.GameConfig(screen_length=480, cells_per_row=48)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def surface(config):
    return pygame.Surface((config.screen_length, config.screen_length))
