"""Procedural pixel-art character spritesheet generator."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Tuple, Union
import pygame as pg

from pixelwalker.core.constants import Palette, SpriteConstants
from pixelwalker.core.exceptions import FrameIndexError, ResourceError
from pixelwalker.core.interfaces import FillTarget
from pixelwalker.models.clip import Action, Direction, PLAYABLE_ACTIONS
from pixelwalker.models.pose import LegPositions, Pose, compute_pose, frame_count

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]

# Sheet rows, top to bottom
SPRITESHEET_ROWS: tuple[tuple[Action, Direction], ...] = tuple(
    (action, direction) for action in PLAYABLE_ACTIONS for direction in Direction
)

LEG_HEIGHT = 8
TORSO_RISE = 18
ARM_RISE = 16
HEAD_RISE = 26


@dataclass(frozen=True)
class DrawCommand:
    """A filled rectangle in tile-local pixel coordinates."""

    x: int
    y: int
    width: int
    height: int
    color: Color
    part: str

    @property
    def rect(self) -> pg.Rect:
        """Get the command area as a pygame rect."""
        return pg.Rect(self.x, self.y, self.width, self.height)


class _CommandList:
    """Collects draw commands, flooring positions the way a canvas would."""

    def __init__(self) -> None:
        self.commands: List[DrawCommand] = []

    def rect(self, part: str, x: float, y: float, width: int, height: int, color: Color) -> None:
        self.commands.append(
            DrawCommand(math.floor(x), math.floor(y), width, height, color, part)
        )

    def pixel(self, part: str, x: float, y: float, color: Color) -> None:
        self.rect(part, x, y, 1, 1, color)


class SpriteGenerator:
    """
    Draws a humanoid character for every (action, direction, frame) cell.

    Each frame is described as an ordered list of flat-color rectangles,
    back to front, so pose logic can be tested without a display and any
    backend able to fill rectangles can composite it.
    """

    def __init__(
        self,
        frame_width: int = SpriteConstants.FRAME_WIDTH,
        frame_height: int = SpriteConstants.FRAME_HEIGHT,
        frames_per_row: int = SpriteConstants.FRAMES_PER_ROW,
        palette: Palette = Palette()
    ) -> None:
        """
        Initialize generator.

        Args:
            frame_width: Width of one tile in pixels
            frame_height: Height of one tile in pixels
            frames_per_row: Number of tile columns on the sheet
            palette: Character colors
        """
        self.frame_width = frame_width
        self.frame_height = frame_height
        self.frames_per_row = frames_per_row
        self.palette = palette

    @property
    def total_rows(self) -> int:
        """Get the number of rows on the generated sheet."""
        return len(SPRITESHEET_ROWS)

    @property
    def sheet_size(self) -> tuple[int, int]:
        """Get the pixel size of the generated sheet."""
        return (self.frame_width * self.frames_per_row, self.frame_height * self.total_rows)

    # Draw command generation
    def frame_commands(self, action: Action, direction: Direction, frame_index: int) -> List[DrawCommand]:
        """
        Build the draw commands of one frame.

        Args:
            action: Idle, walk or run
            direction: Facing direction
            frame_index: Frame within the clip

        Returns:
            Rectangles ordered back to front

        Raises:
            FrameIndexError: If frame_index is outside the action's frames
        """
        count = frame_count(action)
        if isinstance(frame_index, bool) or not isinstance(frame_index, int):
            raise FrameIndexError(f"Frame index must be an integer, got {frame_index!r}")
        if not 0 <= frame_index < count:
            raise FrameIndexError(
                f"Frame index {frame_index} out of range for {action.value} (0..{count - 1})"
            )

        pose = compute_pose(action, frame_index)
        center_x = self.frame_width / 2
        base_y = self.frame_height - SpriteConstants.FOOT_MARGIN + pose.vertical_offset

        out = _CommandList()
        self._draw_legs(out, center_x, base_y, direction, pose.legs)
        self._draw_torso(out, center_x, base_y, direction)

        if direction == Direction.UP:
            self._draw_head(out, center_x, base_y, direction)
            self._draw_hair_back(out, center_x, base_y)
        elif direction == Direction.DOWN:
            self._draw_head(out, center_x, base_y, direction)
            self._draw_face_front(out, center_x, base_y)
            self._draw_hair_front(out, center_x, base_y)
        else:
            self._draw_arm(out, center_x, base_y, direction, pose)
            self._draw_head(out, center_x, base_y, direction)
            self._draw_face_side(out, center_x, base_y, direction)
            self._draw_hair_side(out, center_x, base_y, direction)

        return out.commands

    # Rasterization
    @staticmethod
    def rasterize(commands: Iterable[DrawCommand], target: FillTarget) -> None:
        """Composite commands onto a target in order; the target clips."""
        for command in commands:
            target.fill(command.color, command.rect)

    def render_frame(self, action: Action, direction: Direction, frame_index: int) -> pg.Surface:
        """Rasterize one frame onto a new transparent tile."""
        tile = pg.Surface((self.frame_width, self.frame_height), pg.SRCALPHA)
        self.rasterize(self.frame_commands(action, direction, frame_index), tile)
        return tile

    def frame_bytes(self, action: Action, direction: Direction, frame_index: int) -> bytes:
        """Get the RGBA pixels of one rendered frame."""
        return pg.image.tobytes(self.render_frame(action, direction, frame_index), "RGBA")

    def generate_spritesheet(self) -> pg.Surface:
        """
        Render every frame of every row into one sheet.

        Returns:
            Transparent surface laid out as in SPRITESHEET_ROWS
        """
        sheet = pg.Surface(self.sheet_size, pg.SRCALPHA)

        for row, (action, direction) in enumerate(SPRITESHEET_ROWS):
            for frame_index in range(min(frame_count(action), self.frames_per_row)):
                tile = sheet.subsurface(pg.Rect(
                    frame_index * self.frame_width,
                    row * self.frame_height,
                    self.frame_width,
                    self.frame_height,
                ))
                self.rasterize(self.frame_commands(action, direction, frame_index), tile)

        logger.info(
            "Generated %dx%d spritesheet (%d rows of %dx%d frames)",
            sheet.get_width(), sheet.get_height(), self.total_rows,
            self.frame_width, self.frame_height,
        )
        return sheet

    def save_spritesheet(self, path: Union[str, Path]) -> Path:
        """
        Generate the sheet and write it as an image file.

        Raises:
            ResourceError: If the file cannot be written
        """
        path = Path(path)
        try:
            pg.image.save(self.generate_spritesheet(), str(path))
        except (pg.error, OSError) as e:
            raise ResourceError(f"Failed to save spritesheet {path}: {e}")
        logger.info("Saved spritesheet to %s", path)
        return path

    # Body parts
    def _draw_legs(
        self,
        out: _CommandList,
        center_x: float,
        base_y: float,
        direction: Direction,
        legs: LegPositions
    ) -> None:
        p = self.palette

        if direction in (Direction.LEFT, Direction.RIGHT):
            # One leg in front of the other
            front_x = legs.left_x if direction == Direction.LEFT else legs.right_x
            back_x = legs.right_x if direction == Direction.LEFT else legs.left_x

            out.rect("legs", center_x + back_x - 2, base_y - LEG_HEIGHT - 2, 3, LEG_HEIGHT, p.pants_shadow)
            out.rect("legs", center_x + back_x - 2, base_y - 3, 3, 3, p.shoes)
            out.rect("legs", center_x + front_x - 2, base_y - LEG_HEIGHT, 3, LEG_HEIGHT, p.pants)
            out.rect("legs", center_x + front_x - 2, base_y - 2, 3, 2, p.shoes)
        else:
            out.rect("legs", center_x - 5, base_y - LEG_HEIGHT + legs.left_y, 4, LEG_HEIGHT, p.pants)
            out.rect("legs", center_x - 5, base_y - 2 + legs.left_y, 4, 2, p.shoes)
            out.rect("legs", center_x + 1, base_y - LEG_HEIGHT + legs.right_y, 4, LEG_HEIGHT, p.pants)
            out.rect("legs", center_x + 1, base_y - 2 + legs.right_y, 4, 2, p.shoes)

    def _draw_torso(self, out: _CommandList, center_x: float, base_y: float, direction: Direction) -> None:
        p = self.palette
        top = base_y - TORSO_RISE

        out.rect("torso", center_x - 5, top, 10, 10, p.shirt)
        if direction == Direction.LEFT:
            out.rect("torso", center_x + 2, top, 3, 10, p.shirt_shadow)
        elif direction == Direction.RIGHT:
            out.rect("torso", center_x - 5, top, 3, 10, p.shirt_shadow)
        else:
            out.rect("torso", center_x - 5, top + 7, 10, 3, p.shirt_shadow)

    def _draw_arm(
        self,
        out: _CommandList,
        center_x: float,
        base_y: float,
        direction: Direction,
        pose: Pose
    ) -> None:
        p = self.palette
        arm_y = base_y - ARM_RISE

        # The far arm is hidden behind the torso
        if direction == Direction.LEFT:
            out.rect("arm", center_x + 4, arm_y + pose.arm_swing, 3, 6, p.shirt)
            out.rect("arm", center_x + 4, arm_y + 5 + pose.arm_swing, 3, 2, p.skin)
        elif direction == Direction.RIGHT:
            out.rect("arm", center_x - 7, arm_y - pose.arm_swing, 3, 6, p.shirt)
            out.rect("arm", center_x - 7, arm_y + 5 - pose.arm_swing, 3, 2, p.skin)

    def _draw_head(self, out: _CommandList, center_x: float, base_y: float, direction: Direction) -> None:
        p = self.palette
        top = base_y - HEAD_RISE

        out.rect("head", center_x - 5, top + 1, 10, 7, p.skin)
        out.rect("head", center_x - 4, top, 8, 1, p.skin)
        out.rect("head", center_x - 4, top + 8, 8, 1, p.skin)

        if direction == Direction.LEFT:
            out.rect("head", center_x + 3, top + 1, 2, 7, p.skin_shadow)
        elif direction == Direction.RIGHT:
            out.rect("head", center_x - 5, top + 1, 2, 7, p.skin_shadow)

    def _draw_face_front(self, out: _CommandList, center_x: float, base_y: float) -> None:
        top = base_y - HEAD_RISE
        out.pixel("face", center_x - 3, top + 3, self.palette.eyes)
        out.pixel("face", center_x + 2, top + 3, self.palette.eyes)

    def _draw_face_side(self, out: _CommandList, center_x: float, base_y: float, direction: Direction) -> None:
        top = base_y - HEAD_RISE
        eye_x = center_x - 3 if direction == Direction.LEFT else center_x + 2
        out.pixel("face", eye_x, top + 3, self.palette.eyes)

    def _draw_hair_front(self, out: _CommandList, center_x: float, base_y: float) -> None:
        p = self.palette
        top = base_y - HEAD_RISE

        out.rect("hair", center_x - 5, top - 2, 10, 3, p.hair)
        out.rect("hair", center_x - 4, top - 3, 8, 1, p.hair)
        # Fringe
        out.rect("hair", center_x - 4, top, 3, 2, p.hair)
        out.rect("hair", center_x + 1, top, 3, 2, p.hair)
        out.pixel("hair", center_x - 2, top - 2, p.hair_highlight)

    def _draw_hair_back(self, out: _CommandList, center_x: float, base_y: float) -> None:
        p = self.palette
        top = base_y - HEAD_RISE

        out.rect("hair", center_x - 5, top - 2, 10, 10, p.hair)
        out.rect("hair", center_x - 4, top - 3, 8, 1, p.hair)
        out.pixel("hair", center_x, top - 1, p.hair_highlight)

    def _draw_hair_side(self, out: _CommandList, center_x: float, base_y: float, direction: Direction) -> None:
        p = self.palette
        top = base_y - HEAD_RISE

        out.rect("hair", center_x - 5, top - 2, 10, 3, p.hair)
        out.rect("hair", center_x - 4, top - 3, 8, 1, p.hair)
        if direction == Direction.LEFT:
            out.rect("hair", center_x + 3, top, 2, 5, p.hair)
        else:
            out.rect("hair", center_x - 5, top, 2, 5, p.hair)
        out.pixel("hair", center_x - 1, top - 2, p.hair_highlight)
