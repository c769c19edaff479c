"""Editor scene: map spritesheet rows to clips and preview them."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional
import pygame as pg

from pixelwalker.controllers.base.scene import BaseScene
from pixelwalker.views.renderers.editor_renderer import EditorRenderer
from pixelwalker.models.clip import Action, ClipKey, Direction, DEFAULT_CLIP_KEY
from pixelwalker.models.config import Config
from pixelwalker.models.sheet_editor import SpritesheetEditor
from pixelwalker.models.sprite_config import SpriteConfigStore
from pixelwalker.models.sprite_generator import SpriteGenerator
from pixelwalker.core.constants import EXPORT_FILE, EditorConstants
from pixelwalker.core.exceptions import ConfigError

logger = logging.getLogger(__name__)

# Keys that nudge a field of the target clip
_FIELD_KEYS = {
    pg.K_EQUALS: ("frame_count", 1),
    pg.K_MINUS: ("frame_count", -1),
    pg.K_RIGHTBRACKET: ("start_frame", 1),
    pg.K_LEFTBRACKET: ("start_frame", -1),
    pg.K_PAGEUP: ("frame_rate", 1),
    pg.K_PAGEDOWN: ("frame_rate", -1),
}


class EditorScene(BaseScene):
    """
    Spritesheet mapping editor.

    Clicking the sheet selects a row, the arrow keys pick the target
    clip and Enter maps the selected row to it. Edits change the stored
    table in place; S writes it back through the store.
    """

    def __init__(
        self,
        config: Config,
        sprite_config: SpriteConfigStore,
        generator: Optional[SpriteGenerator] = None,
        export_path: str = EXPORT_FILE
    ) -> None:
        """
        Initialize editor scene.

        Args:
            config: Game configuration
            sprite_config: Store holding the table being edited
            generator: Spritesheet generator used when no image is stored
            export_path: File written by the export command
        """
        super().__init__(config)
        self._store = sprite_config
        self._generator = generator
        self._export_path = Path(export_path)

        self._spritesheet = self._load_spritesheet()
        self._editor = SpritesheetEditor(self._store.table, zoom=EditorConstants.DEFAULT_ZOOM)
        self._target = DEFAULT_CLIP_KEY
        self._scroll = 0
        self._preview_time = 0.0
        self._status = ""
        self._renderer = EditorRenderer()

    @property
    def editor(self) -> SpritesheetEditor:
        return self._editor

    @property
    def spritesheet(self) -> pg.Surface:
        return self._spritesheet

    @property
    def target(self) -> ClipKey:
        """Get the clip that edits apply to."""
        return self._target

    @property
    def status(self) -> str:
        return self._status

    @property
    def scroll_offset(self) -> int:
        return self._scroll

    @property
    def sheet_rect(self) -> pg.Rect:
        """Get the window area showing the zoomed sheet."""
        origin_x, origin_y = EditorConstants.SHEET_ORIGIN
        zoom = self._editor.zoom
        width = min(self._spritesheet.get_width() * zoom, EditorConstants.PANEL_X - 2 * origin_x)
        height = self._spritesheet.get_height() * zoom - self._scroll
        return pg.Rect(origin_x, origin_y, width, height)

    def handle_events(self) -> Optional[str]:
        """Process window, key and mouse events."""
        for event in pg.event.get():
            action = self._handle_common_events(event)
            if action:
                return action

            if event.type == pg.KEYDOWN and not event.mod & pg.KMOD_ALT:
                next_scene = self.handle_key(event.key)
                if next_scene:
                    return next_scene

            elif event.type == pg.MOUSEBUTTONDOWN and event.button == 1:
                self.handle_click(event.pos)

            elif event.type == pg.MOUSEWHEEL:
                self.scroll(-event.y * EditorConstants.SCROLL_STEP)

        return None

    def handle_key(self, key: int) -> Optional[str]:
        """
        Apply one editor command.

        Returns:
            ``"game"`` when the editor is left, None otherwise
        """
        if key in (pg.K_ESCAPE, pg.K_TAB):
            return "game"

        if key == pg.K_LEFT:
            self._cycle_target(action_step=-1)
        elif key == pg.K_RIGHT:
            self._cycle_target(action_step=1)
        elif key == pg.K_UP:
            self._cycle_target(direction_step=-1)
        elif key == pg.K_DOWN:
            self._cycle_target(direction_step=1)
        elif key == pg.K_RETURN:
            self._assign_selected_row()
        elif key in _FIELD_KEYS:
            field, step = _FIELD_KEYS[key]
            self._adjust_field(field, step)
        elif key == pg.K_z:
            self._editor.zoom = self._editor.zoom % EditorConstants.MAX_ZOOM + 1
            self.scroll(0)
        elif key == pg.K_s:
            self.save()
        elif key == pg.K_x:
            self.export()
        elif key == pg.K_r:
            self.reset()

        return None

    def handle_click(self, pos: tuple[int, int]) -> Optional[int]:
        """Select the sheet row under a window position, if any."""
        if not self.sheet_rect.collidepoint(pos):
            return None
        row = self._editor.select_row_at(pos[1] - EditorConstants.SHEET_ORIGIN[1] + self._scroll)
        self._status = f"Row {row} selected"
        return row

    def scroll(self, amount: int) -> None:
        """Scroll the sheet view, keeping the last row reachable."""
        zoom = self._editor.zoom
        limit = max(0, (self._spritesheet.get_height() - self._editor.table.frame_height) * zoom)
        self._scroll = max(0, min(self._scroll + amount, limit))

    def save(self) -> bool:
        """Persist the table unless two clips share a row."""
        table = self._editor.table
        try:
            table.validate()
        except ConfigError as e:
            self._status = f"Not saved: {e}"
            return False

        if not self._store.save_table():
            self._status = "Save failed"
            return False

        missing = table.missing_playable()
        if missing:
            self._status = f"Saved; {len(missing)} clips missing, the game will use the default mapping"
        else:
            self._status = "Saved"
        return True

    def export(self) -> bool:
        """Write the table as JSON to the export file."""
        try:
            self._export_path.write_text(self._store.export_json(), encoding='utf-8')
        except OSError as e:
            logger.error("Failed to export clip table: %s", e)
            self._status = f"Export failed: {e}"
            return False

        logger.info("Clip table exported to %s", self._export_path)
        self._status = f"Exported to {self._export_path}"
        return True

    def reset(self) -> None:
        """Restore the default mapping and the generated sheet."""
        self._store.reset()
        self._spritesheet = self._load_spritesheet()
        self._editor = SpritesheetEditor(self._store.table, zoom=self._editor.zoom)
        self._target = DEFAULT_CLIP_KEY
        self._scroll = 0
        self._preview_time = 0.0
        self._status = "Default mapping restored"

    def preview_frame_surface(self) -> Optional[pg.Surface]:
        """Get the current preview frame, None if it is not on the sheet."""
        if self._editor.preview_key not in self._editor.table:
            return None
        rect = self._editor.preview_source_rect()
        if not self._spritesheet.get_rect().contains(rect):
            return None
        return self._spritesheet.subsurface(rect)

    def update(self, delta_time: float) -> None:
        """Advance the preview at the previewed clip's frame rate."""
        key = self._editor.preview_key
        if key not in self._editor.table:
            return

        clip = self._editor.table.get(key.action, key.direction)
        steps, self._preview_time = divmod(self._preview_time + delta_time, 1.0 / clip.frame_rate)
        for _ in range(int(steps)):
            self._editor.step_preview()

    def render(self) -> None:
        """Render editor scene."""
        self._renderer.render(
            self.screen,
            self._spritesheet,
            self._editor,
            self._target,
            self.preview_frame_surface(),
            self._scroll,
            self._status,
        )

    def on_enter(self) -> None:
        """Called when entering editor scene."""
        super().on_enter()
        logger.info("Editor opened with %d clips", len(self._editor.table))

    def _load_spritesheet(self) -> pg.Surface:
        """Load the stored sheet image, generating the default sheet without one."""
        path = self._store.spritesheet_path
        if path:
            try:
                return pg.image.load(path)
            except (pg.error, OSError) as e:
                logger.warning("Failed to load spritesheet %s (%s), using generated sheet", path, e)

        table = self._store.table
        generator = self._generator or SpriteGenerator(
            frame_width=table.frame_width,
            frame_height=table.frame_height,
        )
        return generator.generate_spritesheet()

    def _cycle_target(self, action_step: int = 0, direction_step: int = 0) -> None:
        actions = list(Action)
        directions = list(Direction)
        action = actions[(actions.index(self._target.action) + action_step) % len(actions)]
        direction = directions[(directions.index(self._target.direction) + direction_step) % len(directions)]

        self._target = ClipKey(action, direction)
        self._editor.preview(action, direction)
        self._preview_time = 0.0

    def _assign_selected_row(self) -> None:
        try:
            clip = self._editor.assign_selected_row(self._target.action, self._target.direction)
        except ConfigError as e:
            self._status = str(e)
            return

        self._editor.preview(clip.action, clip.direction)
        self._status = f"Row {clip.row} mapped to {clip.name}"

    def _adjust_field(self, field: str, step: int) -> None:
        if self._target not in self._editor.table:
            self._status = "Map a row first"
            return

        clip = self._editor.table.get(self._target.action, self._target.direction)
        try:
            self._editor.set_clip_field(clip.action, clip.direction, field, getattr(clip, field) + step)
        except ConfigError as e:
            self._status = str(e)
