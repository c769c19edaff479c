"""Spritesheet editor renderer: zoomed sheet, clip panel and preview."""
from __future__ import annotations

from typing import List, Optional
import pygame as pg

from pixelwalker.models.clip import ClipKey
from pixelwalker.models.sheet_editor import SpritesheetEditor
from pixelwalker.core.constants import TEXT_COLOR_PRIMARY, TEXT_COLOR_SECONDARY, EditorConstants
from pixelwalker.core.interfaces import IRenderer

INSTRUCTIONS = (
    "Click: select row   Enter: map row",
    "Left/Right: action   Up/Down: direction",
    "-/=: frames   [/]: start   PgUp/PgDn: fps",
    "Z: zoom   S: save   X: export   R: reset",
    "Esc: back to game",
)


class EditorRenderer(IRenderer):
    """Renders the editor screen."""

    def __init__(self) -> None:
        self._font: Optional[pg.font.Font] = None
        self._title_font: Optional[pg.font.Font] = None
        self._scaled_sheet: Optional[pg.Surface] = None
        self._scaled_key: Optional[tuple[int, int]] = None

    def update_screen_size(self, width: int, height: int) -> None:
        """Layout follows the target surface; nothing is cached by size."""

    def render(
        self,
        surface: pg.Surface,
        spritesheet: pg.Surface,
        editor: SpritesheetEditor,
        target: ClipKey,
        preview: Optional[pg.Surface],
        scroll: int,
        status: str
    ) -> None:
        """
        Render complete editor view.

        Args:
            surface: Surface to render to
            spritesheet: Sheet image being mapped
            editor: Editor state
            target: Clip that edits apply to
            preview: Current preview frame, if any
            scroll: Vertical scroll of the sheet view in pixels
            status: Result of the last command
        """
        surface.fill(EditorConstants.BACKGROUND)
        title = self._get_title_font().render("Spritesheet Editor", True, TEXT_COLOR_PRIMARY)
        surface.blit(title, (16, 16))

        self._render_sheet(surface, spritesheet, editor, scroll)
        self._render_panel(surface, spritesheet, editor, target, preview, status)

    def _render_sheet(
        self,
        surface: pg.Surface,
        spritesheet: pg.Surface,
        editor: SpritesheetEditor,
        scroll: int
    ) -> None:
        """Draw the zoomed sheet with its frame grid and the selected row."""
        zoom = editor.zoom
        origin_x, origin_y = EditorConstants.SHEET_ORIGIN
        width, height = spritesheet.get_width() * zoom, spritesheet.get_height() * zoom

        key = (id(spritesheet), zoom)
        if self._scaled_key != key:
            self._scaled_sheet = pg.transform.scale(spritesheet, (width, height))
            self._scaled_key = key

        view = pg.Rect(
            origin_x, origin_y,
            min(width, EditorConstants.PANEL_X - 2 * origin_x),
            surface.get_height() - origin_y,
        )
        surface.set_clip(view)
        top = origin_y - scroll
        surface.blit(self._scaled_sheet, (origin_x, top))

        cell_width = editor.table.frame_width * zoom
        cell_height = editor.table.frame_height * zoom
        grid = editor.grid_for(spritesheet.get_width(), spritesheet.get_height())
        for column in range(grid.columns + 1):
            x = origin_x + column * cell_width
            pg.draw.line(surface, EditorConstants.GRID_COLOR, (x, top), (x, top + grid.rows * cell_height))
        for row in range(grid.rows + 1):
            y = top + row * cell_height
            pg.draw.line(surface, EditorConstants.GRID_COLOR, (origin_x, y), (origin_x + grid.columns * cell_width, y))

        if editor.selected_row is not None:
            selection = pg.Rect(origin_x, top + editor.selected_row * cell_height, width, cell_height)
            pg.draw.rect(surface, EditorConstants.SELECTION_COLOR, selection, 2)

        surface.set_clip(None)

    def _render_panel(
        self,
        surface: pg.Surface,
        spritesheet: pg.Surface,
        editor: SpritesheetEditor,
        target: ClipKey,
        preview: Optional[pg.Surface],
        status: str
    ) -> None:
        """Draw the target clip, the preview, the status and the key help."""
        font = self._get_font()
        panel_x = EditorConstants.PANEL_X
        panel = pg.Rect(panel_x - 8, 48, surface.get_width() - panel_x, surface.get_height() - 56)
        pg.draw.rect(surface, EditorConstants.PANEL_COLOR, panel)

        grid = editor.grid_for(spritesheet.get_width(), spritesheet.get_height())
        selected = "-" if editor.selected_row is None else str(editor.selected_row)
        lines: List[str] = [
            f"Clip: {target.name}",
            f"Selected row: {selected}",
            f"Zoom: {editor.zoom}x   Grid: {grid.columns}x{grid.rows}",
        ]
        if target in editor.table:
            clip = editor.table.get(target.action, target.direction)
            lines += [
                f"Row: {clip.row}",
                f"Start frame: {clip.start_frame}",
                f"Frames: {clip.frame_count}",
                f"FPS: {clip.frame_rate}",
            ]
        else:
            lines.append("Not mapped")

        y = 56
        for line in lines:
            surface.blit(font.render(line, True, TEXT_COLOR_PRIMARY), (panel_x, y))
            y += 22

        if preview is not None:
            scale = EditorConstants.PREVIEW_SCALE
            frame = pg.transform.scale(preview, (preview.get_width() * scale, preview.get_height() * scale))
            box = frame.get_rect(topleft=(panel_x, y + 8))
            pg.draw.rect(surface, EditorConstants.BACKGROUND, box)
            surface.blit(frame, box)
            pg.draw.rect(surface, EditorConstants.GRID_COLOR, box, 1)
            y = box.bottom

        if status:
            surface.blit(font.render(status, True, EditorConstants.SELECTION_COLOR), (panel_x, y + 12))

        y = surface.get_height() - 16 - 20 * len(INSTRUCTIONS)
        for line in INSTRUCTIONS:
            surface.blit(font.render(line, True, TEXT_COLOR_SECONDARY), (panel_x, y))
            y += 20

    def _get_font(self) -> pg.font.Font:
        if self._font is None:
            self._font = pg.font.Font(None, 20)
        return self._font

    def _get_title_font(self) -> pg.font.Font:
        if self._title_font is None:
            self._title_font = pg.font.Font(None, 32)
        return self._title_font
