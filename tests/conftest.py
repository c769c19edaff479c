"""Shared fixtures; pygame runs headless."""
import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame as pg
import pytest

from pixelwalker.models.clip import ClipTable
from pixelwalker.models.sprite_generator import SpriteGenerator


@pytest.fixture
def generator():
    return SpriteGenerator()


@pytest.fixture
def spritesheet(generator):
    return generator.generate_spritesheet()


@pytest.fixture
def default_table():
    return ClipTable.default()


@pytest.fixture
def display():
    """Initialize pygame with a headless window."""
    pg.init()
    screen = pg.display.set_mode((800, 600))
    yield screen
    pg.quit()
