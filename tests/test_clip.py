"""
Tests for clips and the clip table.
"""
import json
import logging

import pytest

from pixelwalker.core.exceptions import ConfigError, MissingClipError
from pixelwalker.models.clip import (
    Action, AnimationClip, ClipKey, ClipTable, DEFAULT_CLIP_KEY, Direction, PLAYABLE_ACTIONS
)


class TestClipKey:
    """Tests for clip names."""

    def test_name(self):
        """Names join action and direction with a dash."""
        assert ClipKey(Action.WALK, Direction.LEFT).name == "walk-left"
        assert str(ClipKey(Action.RUN, Direction.UP)) == "run-up"

    def test_parse(self):
        """Names parse back into keys."""
        assert ClipKey.parse("idle-right") == ClipKey(Action.IDLE, Direction.RIGHT)

    @pytest.mark.parametrize("name", ["walk", "fly-left", "walk-north", ""])
    def test_parse_invalid(self, name):
        """Unknown parts raise ConfigError."""
        with pytest.raises(ConfigError):
            ClipKey.parse(name)


class TestAnimationClip:
    """Tests for single clips."""

    def test_frame_indices(self):
        """Frames are numbered row by row."""
        clip = AnimationClip(Action.WALK, Direction.LEFT, row=5, frame_count=6)
        assert clip.frame_indices(6) == [30, 31, 32, 33, 34, 35]

    def test_frame_indices_with_offset(self):
        """Start frame shifts the run within the row."""
        clip = AnimationClip(Action.IDLE, Direction.DOWN, row=1, start_frame=2, frame_count=3)
        assert clip.frame_indices(8) == [10, 11, 12]

    @pytest.mark.parametrize("field,value", [
        ("row", -1), ("start_frame", -1), ("frame_count", 0), ("frame_rate", 0),
    ])
    def test_invalid_fields(self, field, value):
        """Negative positions and non-positive counts are rejected."""
        with pytest.raises(ConfigError):
            AnimationClip(Action.IDLE, Direction.DOWN, **{"row": 0, **{field: value}})

    def test_wire_format(self):
        """Clips serialize with camelCase keys."""
        clip = AnimationClip(Action.RUN, Direction.RIGHT, row=10, frame_count=6, frame_rate=12)
        assert clip.to_dict() == {
            "action": "run",
            "direction": "right",
            "row": 10,
            "startFrame": 0,
            "frameCount": 6,
            "frameRate": 12,
        }

    def test_from_dict_defaults(self):
        """Missing optional fields take new-clip defaults."""
        clip = AnimationClip.from_dict({"action": "jump", "direction": "up", "row": 3})
        assert (clip.start_frame, clip.frame_count, clip.frame_rate) == (0, 4, 8)

    @pytest.mark.parametrize("data", [
        {"direction": "up", "row": 0},
        {"action": "fly", "direction": "up", "row": 0},
        {"action": "walk", "direction": "up", "row": "x"},
    ])
    def test_from_dict_invalid(self, data):
        """Bad entries raise ConfigError."""
        with pytest.raises(ConfigError):
            AnimationClip.from_dict(data)


class TestDefaultTable:
    """Tests for the mapping of the generated sheet."""

    def test_covers_every_playable_pair(self, default_table):
        """Every action and direction has a clip."""
        assert len(default_table) == 12
        for action in PLAYABLE_ACTIONS:
            for direction in Direction:
                assert ClipKey(action, direction) in default_table

    def test_rows_unique(self, default_table):
        """Each clip owns one row, 0 through 11."""
        assert sorted(clip.row for clip in default_table) == list(range(12))
        default_table.validate()

    def test_row_layout(self, default_table):
        """Rows follow the sheet order."""
        assert default_table.get(Action.IDLE, Direction.DOWN).row == 0
        assert default_table.get(Action.WALK, Direction.LEFT).row == 5
        assert default_table.get(Action.RUN, Direction.UP).row == 11

    def test_frame_counts_and_rates(self, default_table):
        """Idle has 4 frames at 4 fps; walk and run have 6 at 8 and 12."""
        idle = default_table.get(Action.IDLE, Direction.LEFT)
        walk = default_table.get(Action.WALK, Direction.LEFT)
        run = default_table.get(Action.RUN, Direction.LEFT)

        assert (idle.frame_count, idle.frame_rate) == (4, 4)
        assert (walk.frame_count, walk.frame_rate) == (6, 8)
        assert (run.frame_count, run.frame_rate) == (6, 12)


class TestLookup:
    """Tests for clip lookup."""

    def test_missing_clip(self, default_table):
        """Unconfigured pairs raise MissingClipError."""
        with pytest.raises(MissingClipError) as exc_info:
            default_table.get(Action.CAST, Direction.DOWN)

        assert exc_info.value.key == ClipKey(Action.CAST, Direction.DOWN)
        assert "cast-down" in str(exc_info.value)

    def test_missing_clip_is_key_error(self, default_table):
        """Missing clips are catchable as KeyError."""
        with pytest.raises(KeyError):
            default_table.get(Action.HURT, Direction.UP)

    def test_resolve_falls_back(self, default_table, caplog):
        """Missing clips resolve to the fallback with a warning."""
        with caplog.at_level(logging.WARNING):
            clip = default_table.resolve(Action.DEATH, Direction.LEFT)

        assert clip.key == DEFAULT_CLIP_KEY
        assert "death-left" in caplog.text

    def test_resolve_without_fallback(self):
        """Missing fallback propagates."""
        with pytest.raises(MissingClipError):
            ClipTable().resolve(Action.WALK, Direction.UP)

    def test_clips_for_action(self, default_table):
        """Action clips come in direction order."""
        clips = default_table.clips_for_action(Action.WALK)
        assert [clip.direction for clip in clips] == list(Direction)


class TestEditing:
    """Tests for changing the table."""

    def test_update_existing(self, default_table):
        """Updating changes only the given fields."""
        clip = default_table.update(Action.WALK, Direction.UP, frameCount=4, frame_rate=10)

        assert clip.row == 7
        assert (clip.frame_count, clip.frame_rate) == (4, 10)
        assert default_table.get(Action.WALK, Direction.UP) == clip

    def test_update_adds_missing(self, default_table):
        """Updating a missing clip adds it with defaults."""
        clip = default_table.update(Action.ATTACK, Direction.RIGHT, row=12)

        assert len(default_table) == 13
        assert (clip.row, clip.start_frame, clip.frame_count, clip.frame_rate) == (12, 0, 4, 8)

    def test_update_unknown_field(self, default_table):
        """Unknown field names are rejected."""
        with pytest.raises(ConfigError):
            default_table.update(Action.IDLE, Direction.DOWN, speed=3)

    def test_update_invalid_value(self, default_table):
        """Invalid values leave the stored clip unchanged."""
        before = default_table.get(Action.IDLE, Direction.DOWN)
        with pytest.raises(ConfigError):
            default_table.update(Action.IDLE, Direction.DOWN, frame_count=0)
        assert default_table.get(Action.IDLE, Direction.DOWN) == before

    def test_update_non_integer_value(self, default_table):
        """Values that are not integers raise ConfigError."""
        with pytest.raises(ConfigError):
            default_table.update(Action.IDLE, Direction.DOWN, frame_rate="abc")
        with pytest.raises(ConfigError):
            default_table.update(Action.IDLE, Direction.DOWN, row=None)

    def test_remove(self, default_table):
        """Removed clips are no longer found."""
        default_table.remove(Action.RUN, Direction.DOWN)
        assert ClipKey(Action.RUN, Direction.DOWN) not in default_table
        default_table.remove(Action.RUN, Direction.DOWN)

    def test_duplicate_rows_rejected(self, default_table):
        """Two clips on one row fail validation."""
        default_table.update(Action.RUN, Direction.UP, row=0)
        with pytest.raises(ConfigError):
            default_table.validate()

    def test_missing_playable(self, default_table):
        """Missing idle, walk and run clips are listed."""
        assert default_table.missing_playable() == []

        default_table.remove(Action.WALK, Direction.LEFT)
        assert default_table.missing_playable() == [ClipKey(Action.WALK, Direction.LEFT)]

    def test_playable_subset(self, default_table):
        """Playable view drops editor placeholders."""
        default_table.update(Action.JUMP, Direction.DOWN, row=12)
        playable = default_table.playable()

        assert len(playable) == 12
        assert ClipKey(Action.JUMP, Direction.DOWN) not in playable

    def test_copy_is_independent(self, default_table):
        """Editing a copy leaves the original alone."""
        copy = default_table.copy()
        copy.update(Action.IDLE, Direction.DOWN, frame_rate=1)

        assert copy != default_table
        assert default_table.get(Action.IDLE, Direction.DOWN).frame_rate == 4

    def test_invalid_frame_size(self):
        """Frame size must be positive."""
        with pytest.raises(ConfigError):
            ClipTable(frame_width=0)


class TestSerialization:
    """Tests for the JSON format."""

    def test_json_round_trip(self, default_table):
        """Tables survive serialization unchanged."""
        default_table.update(Action.CAST, Direction.LEFT, row=14, startFrame=1)
        assert ClipTable.from_json(default_table.to_json()) == default_table

    def test_document_shape(self, default_table):
        """Documents hold frame size and a list of animations."""
        data = json.loads(default_table.to_json())

        assert data["frameWidth"] == 32
        assert data["frameHeight"] == 32
        assert len(data["animations"]) == 12
        assert data["animations"][0]["action"] == "idle"

    @pytest.mark.parametrize("text", [
        "not json",
        "[1, 2]",
        '{"animations": {}}',
        '{"frameWidth": "wide", "animations": []}',
        '{"animations": [{"action": "walk"}]}',
    ])
    def test_invalid_documents(self, text):
        """Malformed documents raise ConfigError."""
        with pytest.raises(ConfigError):
            ClipTable.from_json(text)
