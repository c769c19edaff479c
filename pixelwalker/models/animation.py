"""Animation playback of spritesheet clips."""
from __future__ import annotations

import logging
from typing import Dict, List, Sequence
import pygame as pg

from pixelwalker.core.interfaces import IPlayback
from pixelwalker.core.exceptions import AnimationError, MissingClipError
from pixelwalker.models.clip import AnimationClip, ClipKey, ClipTable

logger = logging.getLogger(__name__)


class Animation(IPlayback):
    """
    Frames of one clip shown at a fixed rate.

    Playback is driven by elapsed time, so a slow frame skips ahead
    instead of slowing the clip down.
    """

    def __init__(self, frames: Sequence[pg.Surface], fps: int, loop: bool = True) -> None:
        """
        Initialize animation.

        Args:
            frames: Frames in playback order
            fps: Frames shown per second
            loop: Wrap to the first frame after the last one

        Raises:
            AnimationError: If there are no frames or fps is not positive
        """
        if not frames:
            raise AnimationError("Animation needs at least one frame")
        if fps <= 0:
            raise AnimationError(f"Animation fps must be positive, got {fps}")

        self._frames: List[pg.Surface] = list(frames)
        self._fps = fps
        self._loop = loop
        self._seconds_per_frame = 1.0 / fps

        self._index = 0
        self._carry = 0.0
        self._playing = False
        self._finished = False

    @classmethod
    def from_clip(cls, sheet: pg.Surface, clip: AnimationClip, frame_size: tuple[int, int]) -> Animation:
        """
        Cut a clip's frames out of a spritesheet.

        Frames are subsurfaces, so they share pixels with the sheet.

        Raises:
            AnimationError: If the clip reaches outside the sheet
        """
        frame_width, frame_height = frame_size
        bounds = sheet.get_rect()
        frames = []

        for column in range(clip.start_frame, clip.start_frame + clip.frame_count):
            area = pg.Rect(column * frame_width, clip.row * frame_height, frame_width, frame_height)
            if not bounds.contains(area):
                raise AnimationError(
                    f"Clip {clip.name} frame {column} at {tuple(area)} is outside the "
                    f"{bounds.width}x{bounds.height} sheet"
                )
            frames.append(sheet.subsurface(area))

        return cls(frames, clip.frame_rate)

    @property
    def fps(self) -> int:
        return self._fps

    @property
    def frame_count(self) -> int:
        return len(self._frames)

    @property
    def current_frame_index(self) -> int:
        return self._index

    @property
    def current_frame(self) -> pg.Surface:
        return self._frames[self._index]

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def is_finished(self) -> bool:
        """Check if a one-shot animation reached its last frame."""
        return self._finished

    def start(self) -> None:
        self._index = 0
        self._carry = 0.0
        self._playing = True
        self._finished = False

    def stop(self) -> None:
        self._playing = False

    def update(self, delta_time: float) -> pg.Surface:
        """Advance by elapsed time and return the frame to show."""
        if self._playing:
            steps, self._carry = divmod(self._carry + delta_time, self._seconds_per_frame)
            if steps:
                self._advance(int(steps))
        return self.current_frame

    def get_frame(self, index: int) -> pg.Surface:
        """
        Get a frame by position.

        Raises:
            AnimationError: If index is out of range
        """
        if not 0 <= index < len(self._frames):
            raise AnimationError(f"Frame index {index} out of range 0..{len(self._frames) - 1}")
        return self._frames[index]

    def _advance(self, steps: int) -> None:
        target = self._index + steps
        if self._loop:
            self._index = target % len(self._frames)
        elif target >= len(self._frames):
            self._index = len(self._frames) - 1
            self._finished = True
            self._playing = False
        else:
            self._index = target


class AnimationSet:
    """Animations keyed by clip, with one playing at a time."""

    def __init__(self, animations: Dict[ClipKey, Animation], initial: ClipKey) -> None:
        """
        Initialize animation set.

        Args:
            animations: Dictionary mapping clip keys to animations
            initial: Clip to start playing

        Raises:
            AnimationError: If no animations provided
            MissingClipError: If the initial clip is not in the set
        """
        if not animations:
            raise AnimationError("AnimationSet must have at least one animation")
        if initial not in animations:
            raise MissingClipError(initial)

        self._animations = animations
        self._current_state = initial
        self._current_animation = animations[initial]
        self._current_animation.start()

    @classmethod
    def from_table(cls, sheet: pg.Surface, table: ClipTable, initial: ClipKey) -> AnimationSet:
        """Build one animation per clip in a table."""
        frame_size = (table.frame_width, table.frame_height)
        animations = {
            clip.key: Animation.from_clip(sheet, clip, frame_size)
            for clip in table
        }
        return cls(animations, initial)

    @property
    def current_state(self) -> ClipKey:
        """Get the clip being played."""
        return self._current_state

    @property
    def current_animation(self) -> Animation:
        """Get current animation object."""
        return self._current_animation

    def set_state(self, state: ClipKey) -> bool:
        """
        Switch to another clip, restarting it only if it differs.

        Returns:
            True if playback switched

        Raises:
            MissingClipError: If the clip is not in the set
        """
        if state not in self._animations:
            raise MissingClipError(state)

        if state == self._current_state:
            return False

        self._current_animation.stop()
        self._current_state = state
        self._current_animation = self._animations[state]
        self._current_animation.start()
        logger.debug("Playing clip %s", state)
        return True

    def update(self, delta_time: float) -> None:
        """Update current animation."""
        self._current_animation.update(delta_time)

    def get_current_frame(self) -> pg.Surface:
        """Get the current frame of the playing clip."""
        return self._current_animation.current_frame

    def has_state(self, state: ClipKey) -> bool:
        """Check if animation set contains given clip."""
        return state in self._animations
