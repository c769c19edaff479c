"""Base scene: the per-frame loop shared by every scene."""
from __future__ import annotations

from typing import Optional
import pygame as pg

from pixelwalker.core.interfaces import IScene
from pixelwalker.models.config import Config


class BaseScene(IScene):
    """
    Runs events, update, render and flip once per frame.

    The loop stops as soon as ``handle_events`` names a next scene; the
    delta time passed to ``update`` is the length of the previous frame.
    """

    def __init__(self, config: Config) -> None:
        self._config = config
        self._clock = pg.time.Clock()
        self._frame_time = 0.0

    @property
    def config(self) -> Config:
        return self._config

    @property
    def screen(self) -> pg.Surface:
        """Get the window surface."""
        return self._config.screen or pg.display.get_surface()

    @property
    def measured_fps(self) -> float:
        """Get the frame rate averaged by the clock."""
        return self._clock.get_fps()

    def run(self) -> Optional[str]:
        """
        Loop until the scene is left.

        Returns:
            Identifier of the next scene, ``"exit"`` to quit
        """
        self.on_enter()
        next_scene: Optional[str] = None
        try:
            while next_scene is None:
                next_scene = self.handle_events()
                if next_scene is not None:
                    break

                self.update(self._frame_time)
                self.render()
                pg.display.flip()
                self._frame_time = self._clock.tick(self._config.display.fps_limit) / 1000.0
        finally:
            self.on_exit()
        return next_scene

    def on_enter(self) -> None:
        """Hook run before the first frame."""
        self._frame_time = 0.0

    def on_exit(self) -> None:
        """Hook run after the last frame."""

    def _handle_common_events(self, event: pg.event.Event) -> Optional[str]:
        """Window close quits; Alt+Enter toggles fullscreen."""
        if event.type == pg.QUIT:
            return "exit"

        if event.type == pg.KEYDOWN and event.key == pg.K_RETURN and event.mod & pg.KMOD_ALT:
            self._config.toggle_fullscreen()

        return None
