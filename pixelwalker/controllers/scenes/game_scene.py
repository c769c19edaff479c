"""Game scene: a generated character walking around a field."""
from __future__ import annotations

import logging
from typing import Optional
import pygame as pg

from pixelwalker.controllers.base.scene import BaseScene
from pixelwalker.views.renderers.game_renderer import GameRenderer
from pixelwalker.models.animation import AnimationSet
from pixelwalker.models.clip import ClipTable, DEFAULT_CLIP_KEY
from pixelwalker.models.config import Config
from pixelwalker.models.entities.player import Player
from pixelwalker.models.sprite_generator import SpriteGenerator
from pixelwalker.core.constants import WORLD_HEIGHT, WORLD_WIDTH, PlayerConstants
from pixelwalker.core.exceptions import AnimationError, ConfigError

logger = logging.getLogger(__name__)


class GameScene(BaseScene):
    """Demo scene driving the animation selector once per frame."""

    def __init__(
        self,
        config: Config,
        table: Optional[ClipTable] = None,
        generator: Optional[SpriteGenerator] = None
    ) -> None:
        """
        Initialize game scene.

        Args:
            config: Game configuration
            table: Clip mapping of the spritesheet, default layout if omitted
            generator: Spritesheet generator, default sizes if omitted
        """
        super().__init__(config)

        self._table = table or ClipTable.default()
        try:
            self._check_table(self._table)
        except ConfigError as e:
            logger.warning("Clip table rejected (%s), using default mapping", e)
            self._table = ClipTable.default()

        self._generator = generator or SpriteGenerator(
            frame_width=self._table.frame_width,
            frame_height=self._table.frame_height,
        )
        self._spritesheet = self._generator.generate_spritesheet()

        self._world_bounds = pg.Rect(0, 0, WORLD_WIDTH, WORLD_HEIGHT)
        self._renderer = GameRenderer(self._world_bounds.size)

        animations = self._build_animations()
        spawn_x, spawn_y = PlayerConstants.SPAWN
        self._player = Player(spawn_x, spawn_y, animations, bounds=self._world_bounds)

    @property
    def player(self) -> Player:
        return self._player

    @property
    def spritesheet(self) -> pg.Surface:
        return self._spritesheet

    def handle_events(self) -> Optional[str]:
        """Process window and key events."""
        for event in pg.event.get():
            action = self._handle_common_events(event)
            if action:
                return action

            if event.type == pg.KEYDOWN:
                if event.key == pg.K_ESCAPE:
                    return "exit"
                elif event.key == pg.K_F3:
                    self._renderer.toggle_debug_mode()
                elif event.key == pg.K_e:
                    return "editor"

            elif event.type == pg.VIDEORESIZE:
                self._renderer.update_screen_size(event.w, event.h)

        return None

    def update(self, delta_time: float) -> None:
        """Sample input, select the clip, then move and animate."""
        inputs = self.config.key_bindings.read_movement(pg.key.get_pressed())
        self._player.handle_input(inputs)
        self._player.update(delta_time)

    def render(self) -> None:
        """Render game scene."""
        self._renderer.render(self.screen, self._player, self.measured_fps)

    def on_enter(self) -> None:
        """Called when entering game scene."""
        super().on_enter()
        logger.info("Game scene started with %d clips", len(self._table))

    @staticmethod
    def _check_table(table: ClipTable) -> None:
        """
        Check that a table can drive the player.

        Raises:
            ConfigError: If rows are shared or an idle, walk or run clip is missing
        """
        table.validate()
        missing = table.missing_playable()
        if missing:
            raise ConfigError(f"missing clips: {', '.join(key.name for key in missing)}")

    def _build_animations(self) -> AnimationSet:
        """Cut the playable clips out of the sheet, falling back to the default mapping."""
        try:
            return AnimationSet.from_table(self._spritesheet, self._table.playable(), DEFAULT_CLIP_KEY)
        except AnimationError as e:
            logger.warning("Clip table does not fit the spritesheet (%s), using default mapping", e)
            self._table = ClipTable.default()
            return AnimationSet.from_table(self._spritesheet, self._table, DEFAULT_CLIP_KEY)
