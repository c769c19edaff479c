"""Custom exceptions for the Pixel Walker demo."""
from __future__ import annotations


class GameError(Exception):
    """Base exception for all game-related errors."""
    pass


class ResourceError(GameError):
    """Raised when a resource cannot be loaded or written."""
    pass


class SceneError(GameError):
    """Raised when there's an error with scene management."""
    pass


class ConfigError(GameError):
    """Raised when there's an error with configuration."""
    pass


class PersistenceError(GameError):
    """Raised when the key-value store cannot be read or written."""
    pass


class AnimationError(GameError):
    """Raised when there's an error with animations."""
    pass


class MissingClipError(AnimationError, KeyError):
    """Raised when a clip table has no entry for an action and direction."""

    def __init__(self, key: object) -> None:
        super().__init__(f"No clip configured for {key}")
        self.key = key

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class FrameIndexError(AnimationError, ValueError):
    """Raised when a frame index is outside a clip's frame range."""
    pass
