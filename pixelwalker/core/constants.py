"""Core constants for the Pixel Walker demo."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Final


# Display constants
WINDOW_TITLE: Final[str] = "Pixel Walker"
DEFAULT_WINDOW_WIDTH: Final[int] = 800
DEFAULT_WINDOW_HEIGHT: Final[int] = 600
MIN_WINDOW_WIDTH: Final[int] = 640
MIN_WINDOW_HEIGHT: Final[int] = 480

# World constants
WORLD_WIDTH: Final[int] = 800
WORLD_HEIGHT: Final[int] = 600
GROUND_TILE_SIZE: Final[int] = 32
GROUND_SEED: Final[int] = 1337

# Movement constants
WALK_SPEED: Final[float] = 100.0  # pixels per second
RUN_SPEED: Final[float] = 180.0  # pixels per second

# Visual constants
BACKGROUND_COLOR: Final[tuple[int, int, int]] = (74, 124, 89)
TEXT_COLOR_PRIMARY: Final[tuple[int, int, int]] = (255, 255, 255)
TEXT_COLOR_SECONDARY: Final[tuple[int, int, int]] = (200, 200, 200)

# File paths
CONFIG_FILE: Final[str] = "config.json"
STORE_FILE: Final[str] = "spritesheet_store.json"
EXPORT_FILE: Final[str] = "spritesheet_config.json"

# Key-value store keys
SPRITESHEET_CONFIG_KEY: Final[str] = "spritesheet_config"
SPRITESHEET_IMAGE_KEY: Final[str] = "spritesheet_image"

# FPS options
ALLOWED_FPS_VALUES: Final[list[int]] = [30, 60, 90, 120, 144]


@dataclass(frozen=True)
class SpriteConstants:
    """Spritesheet layout defaults."""

    FRAME_WIDTH: int = 32
    FRAME_HEIGHT: int = 32
    FRAMES_PER_ROW: int = 6
    TOTAL_ROWS: int = 12

    # Distance from the bottom of a tile to the character's feet
    FOOT_MARGIN: int = 4

    # Frames per action on the generated sheet
    FRAME_COUNTS = {
        "idle": 4,
        "walk": 6,
        "run": 6,
    }

    # Default playback rates; the last five are editor placeholders
    ANIMATION_FPS = {
        "idle": 4,
        "walk": 8,
        "run": 12,
        "attack": 10,
        "hurt": 6,
        "death": 6,
        "jump": 8,
        "cast": 8,
    }

    # Defaults for a clip added from the editor
    NEW_CLIP_FRAME_COUNT: int = 4
    NEW_CLIP_FRAME_RATE: int = 8


@dataclass(frozen=True)
class Palette:
    """Flat colors of the generated character."""

    skin: tuple[int, int, int] = (0xF4, 0xC9, 0x9B)
    skin_shadow: tuple[int, int, int] = (0xD4, 0xA5, 0x74)
    hair: tuple[int, int, int] = (0x4A, 0x37, 0x28)
    hair_highlight: tuple[int, int, int] = (0x5C, 0x43, 0x33)
    shirt: tuple[int, int, int] = (0x34, 0x98, 0xDB)
    shirt_shadow: tuple[int, int, int] = (0x29, 0x80, 0xB9)
    pants: tuple[int, int, int] = (0x2C, 0x3E, 0x50)
    pants_shadow: tuple[int, int, int] = (0x1A, 0x25, 0x2F)
    shoes: tuple[int, int, int] = (0x8B, 0x45, 0x13)
    eyes: tuple[int, int, int] = (0x2C, 0x2C, 0x2C)


@dataclass(frozen=True)
class PlayerConstants:
    """Player-specific constants."""

    SPAWN: tuple[float, float] = (400.0, 300.0)
    RENDER_SCALE: int = 2


@dataclass(frozen=True)
class GroundColors:
    """Colors used by the decorative ground."""

    grass: tuple[int, int, int] = (0x4A, 0x7C, 0x59)
    grass_light: tuple[int, int, int] = (0x5A, 0x8C, 0x69)
    grass_dark: tuple[int, int, int] = (0x3A, 0x6C, 0x49)
    path: tuple[int, int, int] = (0x8B, 0x73, 0x55)
    path_light: tuple[int, int, int] = (0x9B, 0x83, 0x65)
    bush_shadow: tuple[int, int, int] = (0x2A, 0x5C, 0x39)
    bush: tuple[int, int, int] = (0x3D, 0x8C, 0x4F)
    bush_light: tuple[int, int, int] = (0x5A, 0xAC, 0x6F)
    bush_positions: tuple[tuple[int, int], ...] = (
        (100, 150), (700, 100), (650, 450), (80, 500), (200, 350), (550, 250),
    )


@dataclass(frozen=True)
class EditorConstants:
    """Layout of the spritesheet mapping editor."""

    SHEET_ORIGIN: tuple[int, int] = (16, 56)
    PANEL_X: int = 448
    DEFAULT_ZOOM: int = 2
    MAX_ZOOM: int = 3
    PREVIEW_SCALE: int = 4
    SCROLL_STEP: int = 32
    GRID_COLOR: tuple[int, int, int] = (90, 90, 110)
    SELECTION_COLOR: tuple[int, int, int] = (255, 200, 0)
    BACKGROUND: tuple[int, int, int] = (28, 28, 36)
    PANEL_COLOR: tuple[int, int, int] = (40, 40, 52)
