"""Core interfaces and abstract base classes."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Protocol
import pygame as pg


class FillTarget(Protocol):
    """Anything draw commands can be composited onto, e.g. a pygame Surface."""

    def fill(self, color, rect=None, special_flags: int = 0) -> pg.Rect:
        ...


class IScene(ABC):
    """One screen of the game driven by the frame loop."""

    @abstractmethod
    def handle_events(self) -> Optional[str]:
        """Drain the event queue; return the id of the next scene to leave this one."""

    @abstractmethod
    def update(self, delta_time: float) -> None:
        """Advance the simulation by delta_time seconds."""

    @abstractmethod
    def render(self) -> None:
        """Draw the current state to the screen."""


class IEntity(ABC):
    """Something with a position in the world."""

    @property
    @abstractmethod
    def position(self) -> pg.math.Vector2:
        """World position of the entity's center."""

    @property
    @abstractmethod
    def rect(self) -> pg.Rect:
        """Screen-space bounds of the current image."""

    @abstractmethod
    def update(self, delta_time: float) -> None:
        """Advance the entity by delta_time seconds."""


class IRenderer(ABC):
    """Draws a scene onto a surface."""

    @abstractmethod
    def update_screen_size(self, width: int, height: int) -> None:
        """React to a window resize."""


class IPlayback(ABC):
    """Time-driven playback of a frame sequence."""

    @abstractmethod
    def start(self) -> None:
        """Play from the first frame."""

    @abstractmethod
    def stop(self) -> None:
        """Freeze on the current frame."""

    @abstractmethod
    def update(self, delta_time: float) -> pg.Surface:
        """Advance by delta_time seconds and return the frame to show."""

    @property
    @abstractmethod
    def current_frame(self) -> pg.Surface:
        """Frame being shown."""
