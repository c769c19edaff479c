"""Animation selection: movement input and previous state to the next clip."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pixelwalker.models.clip import Action, ClipKey, Direction


@dataclass(frozen=True)
class MovementInput:
    """Direction flags and run modifier sampled for one tick."""

    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False
    running: bool = False

    @property
    def any_direction(self) -> bool:
        """Check if at least one direction flag is set."""
        return self.left or self.right or self.up or self.down


@dataclass(frozen=True)
class CharacterState:
    """Current action and facing of one character."""

    action: Action = Action.IDLE
    direction: Direction = Direction.DOWN

    @property
    def is_moving(self) -> bool:
        """Check if the character is walking or running."""
        return self.action != Action.IDLE

    @property
    def clip_key(self) -> ClipKey:
        """Get the key of the clip for this state."""
        return ClipKey(self.action, self.direction)


@dataclass(frozen=True)
class Transition:
    """Result of one selection step."""

    state: CharacterState
    changed: bool

    @property
    def clip_key(self) -> ClipKey:
        """Get the clip the caller should be playing."""
        return self.state.clip_key


def resolve_direction(inputs: MovementInput) -> Optional[Direction]:
    """
    Pick one facing from possibly diagonal input.

    Priority is left, right, up, down; horizontal wins over vertical.

    Returns:
        The winning direction, or None when no flag is set
    """
    if inputs.left:
        return Direction.LEFT
    if inputs.right:
        return Direction.RIGHT
    if inputs.up:
        return Direction.UP
    if inputs.down:
        return Direction.DOWN
    return None


def resolve_action(inputs: MovementInput) -> Action:
    """Idle without direction input, otherwise run or walk."""
    if not inputs.any_direction:
        return Action.IDLE
    return Action.RUN if inputs.running else Action.WALK


def select_animation(state: CharacterState, inputs: MovementInput) -> Transition:
    """
    Compute the next animation state.

    Without direction input the character keeps facing the way it last
    faced. The transition reports a change only when the action or the
    direction differs, so callers restart playback on change only.

    Args:
        state: State after the previous tick
        inputs: Input of this tick

    Returns:
        Next state and whether it differs from ``state``
    """
    direction = resolve_direction(inputs) or state.direction
    action = resolve_action(inputs)

    if action == state.action and direction == state.direction:
        return Transition(state, changed=False)
    return Transition(CharacterState(action, direction), changed=True)
