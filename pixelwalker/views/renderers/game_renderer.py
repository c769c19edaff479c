"""Game world renderer: ground, player and debug overlay."""
from __future__ import annotations

import random
from typing import List, Optional
import pygame as pg

from pixelwalker.models.entities.player import Player
from pixelwalker.core.constants import (
    BACKGROUND_COLOR, GROUND_SEED, GROUND_TILE_SIZE, TEXT_COLOR_PRIMARY, TEXT_COLOR_SECONDARY,
    GroundColors, PlayerConstants
)
from pixelwalker.core.interfaces import IRenderer

INSTRUCTIONS = "Arrows/WASD: move   Shift: run   E: editor   F3: debug   Esc: quit"


class GameRenderer(IRenderer):
    """Renders the ground, the player and UI text."""

    def __init__(self, world_size: tuple[int, int]) -> None:
        """
        Initialize game renderer.

        Args:
            world_size: Width and height of the walkable field
        """
        self._world_size = world_size
        self._ground: Optional[pg.Surface] = None
        self._debug_mode = False
        self._font: Optional[pg.font.Font] = None
        self._offset = (0, 0)

    @property
    def debug_mode(self) -> bool:
        return self._debug_mode

    def toggle_debug_mode(self) -> None:
        """Toggle debug rendering mode."""
        self._debug_mode = not self._debug_mode

    def update_screen_size(self, width: int, height: int) -> None:
        """Center the field in a resized window."""
        world_width, world_height = self._world_size
        self._offset = ((width - world_width) // 2, (height - world_height) // 2)

    def render(self, surface: pg.Surface, player: Player, fps: float = 0.0) -> None:
        """
        Render complete game view.

        Args:
            surface: Surface to render to
            player: Player entity
            fps: Measured frame rate for the debug panel
        """
        if self._ground is None:
            self._ground = self._build_ground()

        surface.fill(BACKGROUND_COLOR)
        surface.blit(self._ground, self._offset)
        self._render_player(surface, player)

        if self._debug_mode:
            self._render_debug(surface, player, fps)

        self._render_instructions(surface)

    def _render_player(self, surface: pg.Surface, player: Player) -> None:
        """Draw the player scaled up, anchored at its position."""
        if player.image is None:
            return

        scale = PlayerConstants.RENDER_SCALE
        frame = pg.transform.scale(
            player.image,
            (player.image.get_width() * scale, player.image.get_height() * scale)
        )
        screen_rect = frame.get_rect(center=(
            int(player.position.x) + self._offset[0],
            int(player.position.y) + self._offset[1],
        ))
        surface.blit(frame, screen_rect)

        if self._debug_mode:
            pg.draw.rect(surface, (0, 255, 255), screen_rect, 1)

    def _build_ground(self) -> pg.Surface:
        """
        Paint grass tiles, dirt paths and bushes once.

        Speckles use a seeded generator so the field looks the same
        on every run.
        """
        colors = GroundColors()
        rng = random.Random(GROUND_SEED)
        width, height = self._world_size
        ground = pg.Surface((width, height))

        tile = pg.Surface((GROUND_TILE_SIZE, GROUND_TILE_SIZE))
        tile.fill(colors.grass)
        for _ in range(20):
            tile.fill(colors.grass_light, (rng.randrange(30), rng.randrange(30), 2, 2))
        for _ in range(10):
            tile.fill(colors.grass_dark, (rng.randrange(28), rng.randrange(28), 3, 1))

        for x in range(0, width, GROUND_TILE_SIZE):
            for y in range(0, height, GROUND_TILE_SIZE):
                ground.blit(tile, (x, y))

        # Crossing paths through the middle of the field
        vertical = pg.Rect(width // 2 - 50, 0, 100, height)
        horizontal = pg.Rect(0, height // 2 - 20, width, 40)
        ground.fill(colors.path, vertical)
        ground.fill(colors.path, horizontal)
        for _ in range(50):
            ground.fill(colors.path_light, (vertical.x + rng.randrange(vertical.width), rng.randrange(height), 3, 3))
            ground.fill(colors.path_light, (rng.randrange(width), horizontal.y + rng.randrange(horizontal.height), 3, 3))

        for x, y in colors.bush_positions:
            pg.draw.circle(ground, colors.bush_shadow, (x + 2, y + 2), 15)
            pg.draw.circle(ground, colors.bush, (x, y), 15)
            pg.draw.circle(ground, colors.bush_light, (x - 3, y - 3), 6)

        return ground

    def _get_font(self) -> pg.font.Font:
        if self._font is None:
            self._font = pg.font.Font(None, 20)
        return self._font

    def _render_debug(self, surface: pg.Surface, player: Player, fps: float) -> None:
        """Render debug information."""
        font = self._get_font()
        animation = player.animations.current_animation

        debug_info: List[str] = [
            f"Position: ({int(player.position.x)}, {int(player.position.y)})",
            f"Velocity: ({player.velocity.x:.1f}, {player.velocity.y:.1f})",
            f"Action: {player.current_action.value}",
            f"Direction: {player.current_direction.value}",
            f"Clip: {player.animations.current_state.name}",
            f"Frame: {animation.current_frame_index + 1}/{animation.frame_count} @ {animation.fps} fps",
            f"FPS: {fps:.0f}",
        ]

        y = 10
        for line in debug_info:
            text = font.render(line, True, TEXT_COLOR_PRIMARY)
            text_bg = pg.Surface((text.get_width() + 4, text.get_height() + 2))
            text_bg.fill((0, 0, 0))
            text_bg.set_alpha(128)
            surface.blit(text_bg, (8, y - 1))
            surface.blit(text, (10, y))
            y += 22

    def _render_instructions(self, surface: pg.Surface) -> None:
        text = self._get_font().render(INSTRUCTIONS, True, TEXT_COLOR_SECONDARY)
        rect = text.get_rect(midbottom=(surface.get_width() // 2, surface.get_height() - 8))
        surface.blit(text, rect)
