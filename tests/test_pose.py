"""
Tests for per-frame pose offsets.
"""
import math

import pytest

from pixelwalker.core.exceptions import AnimationError
from pixelwalker.models.clip import Action
from pixelwalker.models.pose import (
    NEUTRAL_STANCE, WALK_CYCLE, arm_swing, compute_pose, frame_count,
    leg_positions, vertical_offset
)


class TestFrameCount:
    """Tests for frames per action."""

    def test_idle_has_four_frames(self):
        """Idle clips have four frames."""
        assert frame_count(Action.IDLE) == 4

    def test_walk_and_run_have_six_frames(self):
        """Walk and run clips have six frames."""
        assert frame_count(Action.WALK) == 6
        assert frame_count(Action.RUN) == 6

    def test_placeholder_action_rejected(self):
        """Editor-only actions have no procedural pose."""
        with pytest.raises(AnimationError):
            frame_count(Action.ATTACK)


class TestVerticalOffset:
    """Tests for the body bob."""

    def test_idle_breathing(self):
        """Idle rises one pixel on frames 1 and 3."""
        assert [vertical_offset(Action.IDLE, f) for f in range(4)] == [0, -1, 0, -1]

    def test_walk_bob(self):
        """Walk rises one pixel except on frames 0 and 3."""
        assert [vertical_offset(Action.WALK, f) for f in range(6)] == [0, -1, -1, 0, -1, -1]

    def test_run_bob(self):
        """Run rises two pixels except on frames 0 and 3."""
        assert [vertical_offset(Action.RUN, f) for f in range(6)] == [0, -2, -2, 0, -2, -2]

    @pytest.mark.parametrize("action", [Action.IDLE, Action.WALK, Action.RUN])
    def test_periodic(self, action):
        """Offsets repeat every frame_count frames."""
        period = frame_count(action)
        for f in range(-12, 40):
            assert vertical_offset(action, f) == vertical_offset(action, f % period)

    def test_neutral_first_frame(self):
        """Frame 0 of walk and run is the neutral pose."""
        assert vertical_offset(Action.WALK, 0) == 0
        assert vertical_offset(Action.RUN, 0) == 0


class TestLegPositions:
    """Tests for the leg cycle."""

    def test_idle_stance_constant(self):
        """Idle legs never move."""
        assert all(leg_positions(Action.IDLE, f) == NEUTRAL_STANCE for f in range(8))

    def test_walk_cycle(self):
        """Walk uses the six-entry cycle."""
        assert leg_positions(Action.WALK, 1) == WALK_CYCLE[1]
        assert leg_positions(Action.WALK, 1).left_y == -1
        assert leg_positions(Action.WALK, 4).right_y == -1

    def test_walk_cycle_wraps(self):
        """Cycle is indexed modulo six."""
        assert leg_positions(Action.WALK, 7) == leg_positions(Action.WALK, 1)

    def test_run_scales_walk(self):
        """Run stretches x by 1.3 and y by 1.5."""
        walk = leg_positions(Action.WALK, 1)
        run = leg_positions(Action.RUN, 1)

        assert run.left_x == pytest.approx(walk.left_x * 1.3)
        assert run.right_x == pytest.approx(walk.right_x * 1.3)
        assert run.left_y == pytest.approx(walk.left_y * 1.5)
        assert run.right_y == pytest.approx(walk.right_y * 1.5)


class TestArmSwing:
    """Tests for side-view arm swing."""

    def test_idle_arm_still(self):
        """Idle arms do not swing."""
        assert all(arm_swing(Action.IDLE, f) == 0 for f in range(4))

    def test_walk_amplitude(self):
        """Walk swings with amplitude 2."""
        assert arm_swing(Action.WALK, 0) == pytest.approx(0)
        assert arm_swing(Action.WALK, 1) == pytest.approx(2 * math.sin(2 * math.pi / 6))

    def test_run_amplitude(self):
        """Run swings with amplitude 3."""
        assert arm_swing(Action.RUN, 1) == pytest.approx(3 * math.sin(2 * math.pi / 6))
        assert max(abs(arm_swing(Action.RUN, f)) for f in range(6)) <= 3


class TestComputePose:
    """Tests for the combined pose."""

    def test_pose_combines_parts(self):
        """Pose bundles offset, legs and arm swing."""
        pose = compute_pose(Action.RUN, 2)

        assert pose.vertical_offset == -2
        assert pose.legs == leg_positions(Action.RUN, 2)
        assert pose.arm_swing == pytest.approx(arm_swing(Action.RUN, 2))
