"""
Tests for the persisted spritesheet configuration.
"""
import json

import pytest

from pixelwalker.core.exceptions import PersistenceError
from pixelwalker.models.clip import Action, ClipTable, Direction
from pixelwalker.models.sprite_config import KeyValueStore, SpriteConfigStore


@pytest.fixture
def store(tmp_path):
    return KeyValueStore(str(tmp_path / "store.json"))


class TestKeyValueStore:
    """Tests for the JSON-file key-value store."""

    def test_missing_file_is_empty(self, store):
        """Unwritten store returns nothing."""
        assert store.get("anything") is None

    def test_set_and_get(self, store):
        """Values persist across instances."""
        store.set("greeting", "hello")
        assert KeyValueStore(str(store.path)).get("greeting") == "hello"

    def test_remove(self, store):
        """Removed keys read back as missing."""
        store.set("a", "1")
        store.remove("a")
        store.remove("never-set")
        assert store.get("a") is None

    def test_non_string_value(self, store):
        """Values must be strings."""
        store.path.write_text(json.dumps({"a": 5}), encoding="utf-8")
        with pytest.raises(PersistenceError):
            store.get("a")

    def test_corrupted_file(self, store):
        """Unparseable files raise PersistenceError."""
        store.path.write_text("{broken", encoding="utf-8")
        with pytest.raises(PersistenceError):
            store.get("a")

    def test_non_object_file(self, store):
        """Files must hold a JSON object."""
        store.path.write_text("[]", encoding="utf-8")
        with pytest.raises(PersistenceError):
            store.set("a", "1")


class TestSpriteConfigStore:
    """Tests for clip table persistence."""

    def test_default_when_empty(self, store):
        """Nothing stored yields the default table."""
        config = SpriteConfigStore(store)

        assert config.table == ClipTable.default()
        assert not config.has_custom_spritesheet()

    def test_save_and_load(self, store):
        """Saved tables are loaded by a new instance."""
        config = SpriteConfigStore(store)
        config.table.update(Action.WALK, Direction.LEFT, frame_rate=10)
        assert config.save_table()

        reloaded = SpriteConfigStore(store)
        assert reloaded.table.get(Action.WALK, Direction.LEFT).frame_rate == 10
        assert reloaded.table == config.table

    def test_spritesheet_path(self, store):
        """Spritesheet location is remembered."""
        config = SpriteConfigStore(store)
        assert config.save_spritesheet_path("sheets/hero.png")

        reloaded = SpriteConfigStore(store)
        assert reloaded.spritesheet_path == "sheets/hero.png"
        assert reloaded.has_custom_spritesheet()

    def test_reset(self, store):
        """Reset restores defaults and clears both keys."""
        config = SpriteConfigStore(store)
        config.table.update(Action.IDLE, Direction.DOWN, frame_rate=1)
        config.save_table()
        config.save_spritesheet_path("hero.png")

        assert config.reset()
        assert config.table == ClipTable.default()
        assert config.spritesheet_path is None
        assert json.loads(store.path.read_text(encoding="utf-8")) == {}

    def test_export_import(self, store, tmp_path):
        """Exported JSON imports into another store."""
        source = SpriteConfigStore(store)
        source.table.update(Action.CAST, Direction.UP, row=12)

        target = SpriteConfigStore(KeyValueStore(str(tmp_path / "other.json")))
        assert target.import_json(source.export_json())
        assert target.table == source.table

    def test_import_invalid_keeps_table(self, store):
        """Bad imports are rejected and the current table stays."""
        config = SpriteConfigStore(store)
        before = config.table.copy()

        assert not config.import_json('{"animations": [{"row": 1}]}')
        assert not config.import_json("nope")
        assert config.table == before

    def test_corrupted_store_falls_back(self, store):
        """Unreadable storage loads the default table."""
        store.path.write_text("{broken", encoding="utf-8")
        config = SpriteConfigStore(store)

        assert config.table == ClipTable.default()
        assert config.spritesheet_path is None

    def test_save_failure_reported(self, store):
        """Storage errors are reported, not raised."""
        config = SpriteConfigStore(store)
        store.path.write_text("{broken", encoding="utf-8")

        assert not config.save_table()
        assert not config.save_spritesheet_path("hero.png")
        assert config.table == ClipTable.default()

    def test_invalid_stored_table(self, store):
        """A stored table that does not parse loads as default."""
        store.set("spritesheet_config", '{"animations": 5}')
        assert SpriteConfigStore(store).table == ClipTable.default()

    def test_non_string_stored_table(self, store):
        """A stored table that is not a string loads as default."""
        store.path.write_text(json.dumps({"spritesheet_config": {"frameWidth": 32}}), encoding="utf-8")

        with pytest.raises(PersistenceError):
            store.get("spritesheet_config")
        assert SpriteConfigStore(store).table == ClipTable.default()
