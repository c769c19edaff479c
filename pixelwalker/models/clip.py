"""Animation clip model: actions, directions and the spritesheet clip table."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Iterator, List, NamedTuple, Optional

from pixelwalker.core.constants import SpriteConstants
from pixelwalker.core.exceptions import ConfigError, MissingClipError

logger = logging.getLogger(__name__)


class Direction(Enum):
    """Facing directions, in spritesheet row order."""

    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"


class Action(Enum):
    """Character actions."""

    IDLE = "idle"
    WALK = "walk"
    RUN = "run"

    # Editor placeholders, never generated or selected
    ATTACK = "attack"
    HURT = "hurt"
    DEATH = "death"
    JUMP = "jump"
    CAST = "cast"

    @property
    def default_fps(self) -> int:
        """Get the default playback rate for this action."""
        return SpriteConstants.ANIMATION_FPS[self.value]


PLAYABLE_ACTIONS: tuple[Action, ...] = (Action.IDLE, Action.WALK, Action.RUN)


class ClipKey(NamedTuple):
    """Typed (action, direction) key into a clip table."""

    action: Action
    direction: Direction

    @property
    def name(self) -> str:
        """Get the clip name, e.g. ``walk-left``."""
        return f"{self.action.value}-{self.direction.value}"

    @classmethod
    def parse(cls, name: str) -> ClipKey:
        """Build a key from a clip name such as ``run-up``."""
        action, sep, direction = name.partition("-")
        if not sep:
            raise ConfigError(f"Invalid clip name: {name!r}")
        try:
            return cls(Action(action), Direction(direction))
        except ValueError as e:
            raise ConfigError(f"Invalid clip name {name!r}: {e}")

    def __str__(self) -> str:
        return self.name


DEFAULT_CLIP_KEY = ClipKey(Action.IDLE, Direction.DOWN)


@dataclass(frozen=True)
class AnimationClip:
    """A run of frames on one spritesheet row played at a fixed rate."""

    action: Action
    direction: Direction
    row: int
    start_frame: int = 0
    frame_count: int = SpriteConstants.NEW_CLIP_FRAME_COUNT
    frame_rate: int = SpriteConstants.NEW_CLIP_FRAME_RATE

    def __post_init__(self) -> None:
        """Validate clip fields."""
        if self.row < 0:
            raise ConfigError(f"{self.key}: row must be non-negative, got {self.row}")
        if self.start_frame < 0:
            raise ConfigError(f"{self.key}: start frame must be non-negative, got {self.start_frame}")
        if self.frame_count <= 0:
            raise ConfigError(f"{self.key}: frame count must be positive, got {self.frame_count}")
        if self.frame_rate <= 0:
            raise ConfigError(f"{self.key}: frame rate must be positive, got {self.frame_rate}")

    @property
    def key(self) -> ClipKey:
        """Get the table key of this clip."""
        return ClipKey(self.action, self.direction)

    @property
    def name(self) -> str:
        """Get the clip name."""
        return self.key.name

    def frame_indices(self, frames_per_row: int) -> List[int]:
        """
        Get the sheet-wide frame numbers of this clip.

        Frames are numbered left to right, top to bottom, so row ``r``
        starts at ``r * frames_per_row``.

        Args:
            frames_per_row: Number of frame columns on the sheet

        Returns:
            Frame numbers in playback order
        """
        first = self.row * frames_per_row + self.start_frame
        return list(range(first, first + self.frame_count))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON wire format."""
        return {
            "action": self.action.value,
            "direction": self.direction.value,
            "row": self.row,
            "startFrame": self.start_frame,
            "frameCount": self.frame_count,
            "frameRate": self.frame_rate,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> AnimationClip:
        """Create from the JSON wire format."""
        try:
            return cls(
                action=Action(data["action"]),
                direction=Direction(data["direction"]),
                row=int(data["row"]),
                start_frame=int(data.get("startFrame", 0)),
                frame_count=int(data.get("frameCount", SpriteConstants.NEW_CLIP_FRAME_COUNT)),
                frame_rate=int(data.get("frameRate", SpriteConstants.NEW_CLIP_FRAME_RATE)),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid animation entry {data!r}: {e}")


# Field names accepted by ClipTable.update, mapped from wire names too
_CLIP_FIELDS = {
    "row": "row",
    "start_frame": "start_frame",
    "startFrame": "start_frame",
    "frame_count": "frame_count",
    "frameCount": "frame_count",
    "frame_rate": "frame_rate",
    "frameRate": "frame_rate",
}


class ClipTable:
    """Process-wide mapping from (action, direction) to animation clips."""

    def __init__(
        self,
        clips: Optional[List[AnimationClip]] = None,
        frame_width: int = SpriteConstants.FRAME_WIDTH,
        frame_height: int = SpriteConstants.FRAME_HEIGHT,
    ) -> None:
        """
        Initialize clip table.

        Args:
            clips: Clips to register, later entries replace earlier ones
            frame_width: Width of one sheet frame in pixels
            frame_height: Height of one sheet frame in pixels

        Raises:
            ConfigError: If frame dimensions are not positive
        """
        if frame_width <= 0 or frame_height <= 0:
            raise ConfigError(f"Frame size must be positive, got {frame_width}x{frame_height}")

        self.frame_width = frame_width
        self.frame_height = frame_height
        self._clips: Dict[ClipKey, AnimationClip] = {}
        for clip in clips or []:
            self._clips[clip.key] = clip

    @classmethod
    def default(cls) -> ClipTable:
        """Build the mapping that matches the generated spritesheet."""
        clips = []
        row = 0
        for action in PLAYABLE_ACTIONS:
            for direction in Direction:
                clips.append(AnimationClip(
                    action=action,
                    direction=direction,
                    row=row,
                    start_frame=0,
                    frame_count=SpriteConstants.FRAME_COUNTS[action.value],
                    frame_rate=action.default_fps,
                ))
                row += 1
        return cls(clips)

    def __len__(self) -> int:
        return len(self._clips)

    def __iter__(self) -> Iterator[AnimationClip]:
        return iter(self._clips.values())

    def __contains__(self, key: object) -> bool:
        return key in self._clips

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ClipTable):
            return NotImplemented
        return (
            self.frame_width == other.frame_width
            and self.frame_height == other.frame_height
            and self._clips == other._clips
        )

    def get(self, action: Action, direction: Direction) -> AnimationClip:
        """
        Look up a clip.

        Raises:
            MissingClipError: If no clip is configured for the pair
        """
        key = ClipKey(action, direction)
        clip = self._clips.get(key)
        if clip is None:
            raise MissingClipError(key)
        return clip

    def resolve(
        self,
        action: Action,
        direction: Direction,
        fallback: ClipKey = DEFAULT_CLIP_KEY
    ) -> AnimationClip:
        """
        Look up a clip, falling back to another key when it is missing.

        Raises:
            MissingClipError: If the fallback is missing as well
        """
        try:
            return self.get(action, direction)
        except MissingClipError as e:
            logger.warning("%s, falling back to %s", e, fallback)
            return self.get(fallback.action, fallback.direction)

    def clips_for_action(self, action: Action) -> List[AnimationClip]:
        """Get all clips of one action, in direction order."""
        return [
            self._clips[ClipKey(action, direction)]
            for direction in Direction
            if ClipKey(action, direction) in self._clips
        ]

    def update(self, action: Action, direction: Direction, **changes: Any) -> AnimationClip:
        """
        Change fields of a clip, adding the clip if it does not exist.

        Args:
            action: Clip action
            direction: Clip direction
            **changes: Field values by attribute or wire name

        Returns:
            The stored clip

        Raises:
            ConfigError: If a field name is unknown or a value is invalid
        """
        fields = {}
        for name, value in changes.items():
            if name not in _CLIP_FIELDS:
                raise ConfigError(f"Unknown clip field: {name}")
            try:
                fields[_CLIP_FIELDS[name]] = int(value)
            except (TypeError, ValueError):
                raise ConfigError(f"Clip field {name} must be an integer, got {value!r}")

        key = ClipKey(action, direction)
        existing = self._clips.get(key)
        if existing is not None:
            clip = replace(existing, **fields)
        else:
            clip = AnimationClip(action=action, direction=direction, **{"row": 0, **fields})

        self._clips[key] = clip
        return clip

    def remove(self, action: Action, direction: Direction) -> None:
        """Remove a clip if present."""
        self._clips.pop(ClipKey(action, direction), None)

    def validate(self) -> None:
        """
        Check table-wide invariants.

        Raises:
            ConfigError: If two clips share a sheet row
        """
        seen: Dict[int, ClipKey] = {}
        for clip in self._clips.values():
            if clip.row in seen:
                raise ConfigError(
                    f"Row {clip.row} is used by both {seen[clip.row]} and {clip.key}"
                )
            seen[clip.row] = clip.key

    def missing_playable(self) -> List[ClipKey]:
        """Get the idle, walk and run keys that have no clip."""
        return [
            ClipKey(action, direction)
            for action in PLAYABLE_ACTIONS
            for direction in Direction
            if ClipKey(action, direction) not in self._clips
        ]

    def playable(self) -> ClipTable:
        """Get a table holding only idle, walk and run clips."""
        return ClipTable(
            [clip for clip in self._clips.values() if clip.action in PLAYABLE_ACTIONS],
            self.frame_width,
            self.frame_height,
        )

    def copy(self) -> ClipTable:
        """Create an independent copy of this table."""
        return ClipTable(list(self._clips.values()), self.frame_width, self.frame_height)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON wire format."""
        return {
            "frameWidth": self.frame_width,
            "frameHeight": self.frame_height,
            "animations": [clip.to_dict() for clip in self._clips.values()],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> ClipTable:
        """
        Create from the JSON wire format.

        Raises:
            ConfigError: If the structure or any entry is invalid
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Clip table must be an object, got {type(data).__name__}")

        animations = data.get("animations", [])
        if not isinstance(animations, list):
            raise ConfigError("'animations' must be a list")

        try:
            frame_width = int(data.get("frameWidth", SpriteConstants.FRAME_WIDTH))
            frame_height = int(data.get("frameHeight", SpriteConstants.FRAME_HEIGHT))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid frame size: {e}")

        clips = [AnimationClip.from_dict(entry) for entry in animations]
        return cls(clips, frame_width, frame_height)

    def to_json(self) -> str:
        """Serialize to an indented JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, text: str) -> ClipTable:
        """
        Parse a JSON string.

        Raises:
            ConfigError: If the text is not valid JSON or not a valid table
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid clip table JSON: {e}")
        return cls.from_dict(data)
