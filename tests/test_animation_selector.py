"""
Tests for animation selection from movement input.
"""
import itertools

import pytest

from pixelwalker.models.animation_selector import (
    CharacterState, MovementInput, resolve_action, resolve_direction, select_animation
)
from pixelwalker.models.clip import Action, Direction

ALL_INPUTS = [
    MovementInput(left, right, up, down, running)
    for left, right, up, down, running in itertools.product([False, True], repeat=5)
]

ALL_STATES = [
    CharacterState(action, direction)
    for action in (Action.IDLE, Action.WALK, Action.RUN)
    for direction in Direction
]


class TestResolveDirection:
    """Tests for picking one facing from the flags."""

    def test_no_flags(self):
        """No direction input gives no direction."""
        assert resolve_direction(MovementInput(running=True)) is None

    def test_horizontal_beats_vertical(self):
        """Left wins over up and down."""
        inputs = MovementInput(left=True, up=True, down=True)
        assert resolve_direction(inputs) == Direction.LEFT

    def test_left_beats_right(self):
        """Left wins over right."""
        assert resolve_direction(MovementInput(left=True, right=True)) == Direction.LEFT

    def test_up_beats_down(self):
        """Up wins over down."""
        assert resolve_direction(MovementInput(up=True, down=True)) == Direction.UP


class TestResolveAction:
    """Tests for picking the action."""

    def test_idle_without_direction(self):
        """Run modifier alone keeps the character idle."""
        assert resolve_action(MovementInput(running=True)) == Action.IDLE

    def test_walk(self):
        """Direction without modifier walks."""
        assert resolve_action(MovementInput(down=True)) == Action.WALK

    def test_run(self):
        """Direction with modifier runs."""
        assert resolve_action(MovementInput(down=True, running=True)) == Action.RUN


class TestSelectAnimation:
    """Tests for full transitions."""

    def test_start_walking_right(self):
        """Idle down plus right input walks right."""
        transition = select_animation(CharacterState(), MovementInput(right=True))

        assert transition.changed
        assert transition.state == CharacterState(Action.WALK, Direction.RIGHT)
        assert transition.clip_key.name == "walk-right"

    def test_start_running_diagonally(self):
        """Left and up with run pressed runs left."""
        state = CharacterState(Action.WALK, Direction.RIGHT)
        transition = select_animation(state, MovementInput(left=True, up=True, running=True))

        assert transition.changed
        assert transition.clip_key.name == "run-left"

    def test_release_keeps_facing(self):
        """Releasing all keys idles in the last direction."""
        state = CharacterState(Action.RUN, Direction.LEFT)
        transition = select_animation(state, MovementInput())

        assert transition.changed
        assert transition.clip_key.name == "idle-left"

    def test_walk_to_run(self):
        """Walking right with run pressed runs right."""
        state = CharacterState(Action.WALK, Direction.RIGHT)
        transition = select_animation(state, MovementInput(right=True, running=True))

        assert transition.changed
        assert transition.state == CharacterState(Action.RUN, Direction.RIGHT)
        assert transition.clip_key.name == "run-right"

    def test_keep_running(self):
        """Same input while running signals no restart."""
        state = CharacterState(Action.RUN, Direction.RIGHT)
        transition = select_animation(state, MovementInput(right=True, running=True))

        assert not transition.changed
        assert transition.clip_key.name == "run-right"

    def test_stop_walking_left(self):
        """Releasing keys while walking left idles facing left."""
        state = CharacterState(Action.WALK, Direction.LEFT)
        transition = select_animation(state, MovementInput())

        assert transition.changed
        assert transition.state == CharacterState(Action.IDLE, Direction.LEFT)
        assert transition.clip_key.name == "idle-left"

    def test_idle_again_no_change(self):
        """Idle with no input stays put."""
        state = CharacterState(Action.IDLE, Direction.LEFT)
        transition = select_animation(state, MovementInput())

        assert not transition.changed
        assert transition.state is state

    def test_modifier_alone_no_change(self):
        """Holding run without direction stays idle."""
        state = CharacterState(Action.IDLE, Direction.UP)
        transition = select_animation(state, MovementInput(running=True))

        assert not transition.changed
        assert transition.clip_key.name == "idle-up"

    @pytest.mark.parametrize("state", ALL_STATES)
    def test_changed_flag_matches_state(self, state):
        """Changed is set exactly when action or direction differ."""
        for inputs in ALL_INPUTS:
            transition = select_animation(state, inputs)
            differs = (transition.state.action, transition.state.direction) != (state.action, state.direction)
            assert transition.changed == differs

    @pytest.mark.parametrize("state", ALL_STATES)
    def test_idempotent(self, state):
        """Feeding the same input twice reports no change the second time."""
        for inputs in ALL_INPUTS:
            first = select_animation(state, inputs)
            second = select_animation(first.state, inputs)
            assert not second.changed
            assert second.state == first.state

    @pytest.mark.parametrize("state", ALL_STATES)
    def test_no_direction_always_idle(self, state):
        """Without direction flags the result is idle in the prior facing."""
        for running in (False, True):
            transition = select_animation(state, MovementInput(running=running))
            assert transition.state == CharacterState(Action.IDLE, state.direction)


class TestCharacterState:
    """Tests for state helpers."""

    def test_default_state(self):
        """Characters start idle facing down."""
        assert CharacterState().clip_key.name == "idle-down"
        assert not CharacterState().is_moving

    def test_moving(self):
        """Walk and run count as moving."""
        assert CharacterState(Action.RUN, Direction.UP).is_moving
