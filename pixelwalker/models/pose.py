"""Per-frame pose offsets for the procedural character."""
from __future__ import annotations

import math
from dataclasses import dataclass

from pixelwalker.core.constants import SpriteConstants
from pixelwalker.core.exceptions import AnimationError
from pixelwalker.models.clip import Action, PLAYABLE_ACTIONS


@dataclass(frozen=True)
class LegPositions:
    """Horizontal and vertical leg offsets relative to the body center."""

    left_x: float
    right_x: float
    left_y: float
    right_y: float


@dataclass(frozen=True)
class Pose:
    """Everything that moves between two frames of one clip."""

    vertical_offset: int
    legs: LegPositions
    arm_swing: float


NEUTRAL_STANCE = LegPositions(-2, 2, 0, 0)

# (left_x, right_x, left_y, right_y) per walk frame
WALK_CYCLE: tuple[LegPositions, ...] = (
    LegPositions(-2, 2, 0, 0),    # neutral
    LegPositions(-3, 3, -1, 1),   # left foot forward
    LegPositions(-4, 4, 0, 0),    # full stride
    LegPositions(-2, 2, 0, 0),    # neutral
    LegPositions(-1, 1, 1, -1),   # right foot forward
    LegPositions(-4, 4, 0, 0),    # full stride
)

RUN_STRIDE_X = 1.3
RUN_STRIDE_Y = 1.5

# Vertical bob per action: (amplitude, frames that stay on the baseline)
_BOB = {
    Action.IDLE: (-1, frozenset({0, 2})),
    Action.WALK: (-1, frozenset({0, 3})),
    Action.RUN: (-2, frozenset({0, 3})),
}

_ARM_AMPLITUDE = {
    Action.IDLE: 0,
    Action.WALK: 2,
    Action.RUN: 3,
}


def _require_playable(action: Action) -> None:
    if action not in PLAYABLE_ACTIONS:
        raise AnimationError(f"No procedural pose for action {action.value!r}")


def frame_count(action: Action) -> int:
    """Get the number of generated frames for an action."""
    _require_playable(action)
    return SpriteConstants.FRAME_COUNTS[action.value]


def vertical_offset(action: Action, frame_index: int) -> int:
    """
    Get the vertical body displacement of a frame.

    Idle breathes up one pixel on frames 1 and 3, walk bobs one pixel and
    run two pixels on every frame but 0 and 3. The result is periodic in
    ``frame_count(action)``.
    """
    _require_playable(action)
    amplitude, baseline = _BOB[action]
    phase = frame_index % frame_count(action)
    return 0 if phase in baseline else amplitude


def leg_positions(action: Action, frame_index: int) -> LegPositions:
    """Get the leg offsets of a frame."""
    _require_playable(action)
    if action == Action.IDLE:
        return NEUTRAL_STANCE

    legs = WALK_CYCLE[frame_index % len(WALK_CYCLE)]
    if action == Action.RUN:
        return LegPositions(
            left_x=legs.left_x * RUN_STRIDE_X,
            right_x=legs.right_x * RUN_STRIDE_X,
            left_y=legs.left_y * RUN_STRIDE_Y,
            right_y=legs.right_y * RUN_STRIDE_Y,
        )
    return legs


def arm_swing(action: Action, frame_index: int) -> float:
    """Get the vertical swing of the visible arm in side views."""
    _require_playable(action)
    amplitude = _ARM_AMPLITUDE[action]
    if amplitude == 0:
        return 0.0
    return amplitude * math.sin(2 * math.pi * frame_index / frame_count(action))


def compute_pose(action: Action, frame_index: int) -> Pose:
    """Compute the full pose of one frame."""
    return Pose(
        vertical_offset=vertical_offset(action, frame_index),
        legs=leg_positions(action, frame_index),
        arm_swing=arm_swing(action, frame_index),
    )
