"""Configuration management model."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Sequence
from dataclasses import dataclass, asdict
import pygame as pg

from pixelwalker.core.constants import (
    CONFIG_FILE, DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT,
    MIN_WINDOW_WIDTH, MIN_WINDOW_HEIGHT, ALLOWED_FPS_VALUES, WINDOW_TITLE
)
from pixelwalker.core.exceptions import ConfigError
from pixelwalker.models.animation_selector import MovementInput

logger = logging.getLogger(__name__)

# Key code meaning "not bound"
UNBOUND = 0


@dataclass
class KeyBindings:
    """Movement keys; every direction has a primary and an alternate key."""

    left: int = pg.K_LEFT
    right: int = pg.K_RIGHT
    up: int = pg.K_UP
    down: int = pg.K_DOWN
    alt_left: int = pg.K_a
    alt_right: int = pg.K_d
    alt_up: int = pg.K_w
    alt_down: int = pg.K_s
    run: int = pg.K_LSHIFT

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, int]) -> KeyBindings:
        """
        Create from saved data.

        Raises:
            ConfigError: If data names an unknown action
        """
        try:
            return cls(**data)
        except TypeError as e:
            raise ConfigError(f"Invalid key bindings: {e}")

    def read_movement(self, pressed: Sequence[bool]) -> MovementInput:
        """
        Sample movement input from a keyboard state.

        Args:
            pressed: Key state as returned by ``pygame.key.get_pressed()``
        """
        def held(*keys: int) -> bool:
            return any(key != UNBOUND and pressed[key] for key in keys)

        return MovementInput(
            left=held(self.left, self.alt_left),
            right=held(self.right, self.alt_right),
            up=held(self.up, self.alt_up),
            down=held(self.down, self.alt_down),
            running=held(self.run),
        )


@dataclass
class DisplaySettings:
    """Window settings; out-of-range values are corrected on creation."""

    vsync: bool = True
    fps_limit: int = 60
    fullscreen: bool = False
    window_width: int = DEFAULT_WINDOW_WIDTH
    window_height: int = DEFAULT_WINDOW_HEIGHT

    def __post_init__(self) -> None:
        if self.fps_limit not in ALLOWED_FPS_VALUES:
            self.fps_limit = 60
        self.window_width = max(self.window_width, MIN_WINDOW_WIDTH)
        self.window_height = max(self.window_height, MIN_WINDOW_HEIGHT)

    @property
    def window_size(self) -> tuple[int, int]:
        return (self.window_width, self.window_height)

    def display_flags(self) -> int:
        """Get the pygame display flags for these settings."""
        if self.fullscreen:
            return pg.DOUBLEBUF | pg.FULLSCREEN | pg.SCALED
        return pg.DOUBLEBUF | pg.RESIZABLE


class Config:
    """
    Game configuration persisted as JSON.

    Holds the key bindings, the display settings and the window surface
    created from them. A missing or unreadable file leaves the defaults.
    """

    def __init__(self, config_path: Optional[str] = None) -> None:
        self._path = Path(config_path or CONFIG_FILE)
        self._key_bindings = KeyBindings()
        self._display = DisplaySettings()
        self._screen: Optional[pg.Surface] = None
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def key_bindings(self) -> KeyBindings:
        return self._key_bindings

    @property
    def display(self) -> DisplaySettings:
        return self._display

    @property
    def screen(self) -> Optional[pg.Surface]:
        """Get the window surface, None before create_display."""
        return self._screen

    def toggle_fullscreen(self) -> None:
        """Switch between windowed and fullscreen, recreating an open window."""
        self._display.fullscreen = not self._display.fullscreen
        if self._screen is not None:
            self.create_display()

    def create_display(self) -> pg.Surface:
        """
        Open or reopen the game window.

        Raises:
            ConfigError: If the requested mode fails; a minimum-size window
                is opened before raising
        """
        try:
            self._screen = pg.display.set_mode(
                self._display.window_size,
                self._display.display_flags(),
                vsync=int(self._display.vsync),
            )
        except pg.error as e:
            self._display = DisplaySettings(
                vsync=self._display.vsync,
                fps_limit=self._display.fps_limit,
                window_width=MIN_WINDOW_WIDTH,
                window_height=MIN_WINDOW_HEIGHT,
            )
            self._screen = pg.display.set_mode(self._display.window_size)
            pg.display.set_caption(WINDOW_TITLE)
            raise ConfigError(f"Failed to create display: {e}")

        pg.display.set_caption(WINDOW_TITLE)
        return self._screen

    def save(self) -> None:
        """
        Write the configuration file.

        Raises:
            ConfigError: If the file cannot be written
        """
        data = {
            'key_bindings': self._key_bindings.to_dict(),
            'display': asdict(self._display),
        }
        try:
            self._path.write_text(json.dumps(data, indent=2), encoding='utf-8')
        except OSError as e:
            raise ConfigError(f"Failed to save configuration: {e}")
        logger.debug("Configuration saved to %s", self._path)

    def _load(self) -> None:
        if not self._path.exists():
            return

        try:
            data = json.loads(self._path.read_text(encoding='utf-8'))
            self._apply(data)
        except (OSError, json.JSONDecodeError, ConfigError) as e:
            logger.warning("Failed to load configuration from %s: %s", self._path, e)

    def _apply(self, data: Any) -> None:
        """Replace settings with the sections present in data."""
        if not isinstance(data, dict):
            raise ConfigError("Configuration file must hold a JSON object")

        key_bindings = self._key_bindings
        display = self._display

        if 'key_bindings' in data:
            key_bindings = KeyBindings.from_dict(data['key_bindings'])
        if 'display' in data:
            try:
                display = DisplaySettings(**data['display'])
            except TypeError as e:
                raise ConfigError(f"Invalid display settings: {e}")

        # Only take effect when every section is valid
        self._key_bindings = key_bindings
        self._display = display
