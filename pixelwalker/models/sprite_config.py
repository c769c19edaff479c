"""Persistent spritesheet configuration backed by a JSON key-value file."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from pixelwalker.core.constants import STORE_FILE, SPRITESHEET_CONFIG_KEY, SPRITESHEET_IMAGE_KEY
from pixelwalker.core.exceptions import ConfigError, PersistenceError
from pixelwalker.models.clip import ClipTable

logger = logging.getLogger(__name__)


class KeyValueStore:
    """String key-value store persisted as one JSON object on disk."""

    def __init__(self, path: Optional[str] = None) -> None:
        """Initialize store; nothing is read until first access."""
        self._path = Path(path or STORE_FILE)

    @property
    def path(self) -> Path:
        """Get the backing file path."""
        return self._path

    def get(self, key: str) -> Optional[str]:
        """
        Read a value.

        Raises:
            PersistenceError: If the backing file cannot be read or parsed, or
                the stored value is not a string
        """
        value = self._read().get(key)
        if value is not None and not isinstance(value, str):
            raise PersistenceError(
                f"{self._path}: value of {key!r} must be a string, got {type(value).__name__}"
            )
        return value

    def set(self, key: str, value: str) -> None:
        """
        Write a value.

        Raises:
            PersistenceError: If the backing file cannot be read or written
        """
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        """
        Delete a value if present.

        Raises:
            PersistenceError: If the backing file cannot be read or written
        """
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)

    def _read(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding='utf-8'))
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Failed to read {self._path}: {e}")
        if not isinstance(data, dict):
            raise PersistenceError(f"{self._path} does not hold a JSON object")
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        try:
            self._path.write_text(json.dumps(data, indent=2), encoding='utf-8')
        except (OSError, TypeError) as e:
            raise PersistenceError(f"Failed to write {self._path}: {e}")


class SpriteConfigStore:
    """
    Clip table and spritesheet location kept in a key-value store.

    Storage failures are logged and reported through return values; the
    in-memory table stays usable either way.
    """

    def __init__(self, store: Optional[KeyValueStore] = None) -> None:
        """Initialize and load the stored table, or the default one."""
        self._store = store or KeyValueStore()
        self._table = self.load_table()
        self._spritesheet_path = self._load_spritesheet_path()

    @property
    def table(self) -> ClipTable:
        """Get the current clip table."""
        return self._table

    @property
    def spritesheet_path(self) -> Optional[str]:
        """Get the stored spritesheet image path, if any."""
        return self._spritesheet_path

    def has_custom_spritesheet(self) -> bool:
        """Check if a spritesheet image has been stored."""
        return bool(self._spritesheet_path)

    def load_table(self) -> ClipTable:
        """
        Read the stored clip table.

        Returns:
            The stored table, or the default table if none is stored or
            the stored one cannot be read
        """
        try:
            raw = self._store.get(SPRITESHEET_CONFIG_KEY)
            if raw is None:
                return ClipTable.default()
            return ClipTable.from_json(raw)
        except (PersistenceError, ConfigError) as e:
            logger.error("Failed to load clip table: %s", e)
            return ClipTable.default()

    def save_table(self) -> bool:
        """Persist the current clip table."""
        try:
            self._store.set(SPRITESHEET_CONFIG_KEY, self._table.to_json())
        except PersistenceError as e:
            logger.error("Failed to save clip table: %s", e)
            return False
        logger.info("Clip table saved")
        return True

    def save_spritesheet_path(self, path: str) -> bool:
        """Remember which spritesheet image the table describes."""
        try:
            self._store.set(SPRITESHEET_IMAGE_KEY, str(path))
        except PersistenceError as e:
            logger.error("Failed to save spritesheet location: %s", e)
            return False
        self._spritesheet_path = str(path)
        return True

    def reset(self) -> bool:
        """Restore the default table and forget both stored values."""
        self._table = ClipTable.default()
        self._spritesheet_path = None
        try:
            self._store.remove(SPRITESHEET_CONFIG_KEY)
            self._store.remove(SPRITESHEET_IMAGE_KEY)
        except PersistenceError as e:
            logger.error("Failed to clear stored configuration: %s", e)
            return False
        return True

    def export_json(self) -> str:
        """Serialize the current table."""
        return self._table.to_json()

    def import_json(self, text: str) -> bool:
        """
        Replace the current table with a serialized one and persist it.

        Returns:
            False if the text is not a valid table; the current table is
            kept in that case
        """
        try:
            table = ClipTable.from_json(text)
        except ConfigError as e:
            logger.error("Failed to import clip table: %s", e)
            return False

        self._table = table
        return self.save_table()

    def _load_spritesheet_path(self) -> Optional[str]:
        try:
            return self._store.get(SPRITESHEET_IMAGE_KEY)
        except PersistenceError as e:
            logger.error("Failed to load spritesheet location: %s", e)
            return None
