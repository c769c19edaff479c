"""Model behind the spritesheet mapping editor."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional
import pygame as pg

from pixelwalker.core.exceptions import ConfigError
from pixelwalker.models.clip import Action, AnimationClip, ClipKey, ClipTable, DEFAULT_CLIP_KEY, Direction

logger = logging.getLogger(__name__)

MIN_ZOOM = 1
MAX_ZOOM = 8


@dataclass(frozen=True)
class SheetGrid:
    """How many whole frames fit on a sheet image."""

    columns: int
    rows: int

    @property
    def total_frames(self) -> int:
        """Get the number of grid cells."""
        return self.columns * self.rows

    @classmethod
    def from_image_size(cls, width: int, height: int, frame_width: int, frame_height: int) -> SheetGrid:
        """
        Compute the grid of an image.

        Raises:
            ConfigError: If the frame size is not positive
        """
        if frame_width <= 0 or frame_height <= 0:
            raise ConfigError(f"Frame size must be positive, got {frame_width}x{frame_height}")
        return cls(width // frame_width, height // frame_height)


class SpritesheetEditor:
    """Row selection, clip editing and preview playback over a clip table."""

    def __init__(self, table: ClipTable, zoom: int = 3) -> None:
        self._table = table
        self._zoom = self._clamp_zoom(zoom)
        self._selected_row: Optional[int] = None
        self._preview_key = DEFAULT_CLIP_KEY
        self._preview_frame = 0

    @property
    def table(self) -> ClipTable:
        return self._table

    @property
    def zoom(self) -> int:
        return self._zoom

    @zoom.setter
    def zoom(self, value: int) -> None:
        self._zoom = self._clamp_zoom(value)

    @property
    def selected_row(self) -> Optional[int]:
        return self._selected_row

    @property
    def preview_key(self) -> ClipKey:
        return self._preview_key

    @property
    def preview_frame(self) -> int:
        return self._preview_frame

    def grid_for(self, image_width: int, image_height: int) -> SheetGrid:
        """Get the frame grid of a sheet image at the table's frame size."""
        return SheetGrid.from_image_size(
            image_width, image_height, self._table.frame_width, self._table.frame_height
        )

    def set_frame_size(self, frame_width: int, frame_height: int) -> None:
        if frame_width <= 0 or frame_height <= 0:
            raise ConfigError(f"Frame size must be positive, got {frame_width}x{frame_height}")
        self._table.frame_width = frame_width
        self._table.frame_height = frame_height

    def select_row_at(self, y: float) -> int:
        """Select the sheet row under a y coordinate of the zoomed view."""
        row = int(y // (self._table.frame_height * self._zoom))
        self._selected_row = max(0, row)
        return self._selected_row

    def assign_selected_row(self, action: Action, direction: Direction) -> AnimationClip:
        """
        Map the selected row to a clip.

        Raises:
            ConfigError: If no row is selected
        """
        if self._selected_row is None:
            raise ConfigError("No row selected")
        logger.debug("Mapping row %d to %s", self._selected_row, ClipKey(action, direction))
        return self._table.update(action, direction, row=self._selected_row)

    def set_clip_field(self, action: Action, direction: Direction, field: str, value: Any) -> AnimationClip:
        """Change one field of a clip, adding it with defaults if missing."""
        clip = self._table.update(action, direction, **{field: value})
        if clip.key == self._preview_key:
            self._preview_frame %= clip.frame_count
        return clip

    def preview(self, action: Action, direction: Direction) -> None:
        """Start previewing a clip from its first frame."""
        self._preview_key = ClipKey(action, direction)
        self._preview_frame = 0

    def step_preview(self) -> int:
        """Advance the preview by one frame, wrapping at the clip length."""
        clip = self._table.get(self._preview_key.action, self._preview_key.direction)
        self._preview_frame = (self._preview_frame + 1) % clip.frame_count
        return self._preview_frame

    def preview_source_rect(self) -> pg.Rect:
        """Get the sheet area of the current preview frame."""
        clip = self._table.get(self._preview_key.action, self._preview_key.direction)
        fw, fh = self._table.frame_width, self._table.frame_height
        return pg.Rect((clip.start_frame + self._preview_frame) * fw, clip.row * fh, fw, fh)

    @staticmethod
    def _clamp_zoom(value: int) -> int:
        return max(MIN_ZOOM, min(MAX_ZOOM, int(value)))
