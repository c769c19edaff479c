"""Base entity models for things that live on the ground plane."""
from __future__ import annotations

from abc import abstractmethod
from typing import Optional
import pygame as pg

from pixelwalker.core.interfaces import IEntity


class BaseEntity(pg.sprite.Sprite, IEntity):
    """
    Sprite anchored at its center.

    Setting the position or the image keeps ``rect`` centered on the
    position, so sprite groups draw it in the right place.
    """

    def __init__(self) -> None:
        super().__init__()
        self._position = pg.math.Vector2()
        self._velocity = pg.math.Vector2()
        self._image: Optional[pg.Surface] = None
        self._rect = pg.Rect(0, 0, 1, 1)

    @property
    def position(self) -> pg.math.Vector2:
        return self._position

    @position.setter
    def position(self, value) -> None:
        self._position = pg.math.Vector2(value)
        self._recenter()

    @property
    def velocity(self) -> pg.math.Vector2:
        """Get velocity in pixels per second."""
        return self._velocity

    @velocity.setter
    def velocity(self, value) -> None:
        self._velocity = pg.math.Vector2(value)

    @property
    def image(self) -> Optional[pg.Surface]:
        return self._image

    @image.setter
    def image(self, value: Optional[pg.Surface]) -> None:
        self._image = value
        size = value.get_size() if value is not None else (1, 1)
        self._rect = pg.Rect((0, 0), size)
        self._recenter()

    @property
    def rect(self) -> pg.Rect:
        return self._rect

    @abstractmethod
    def update(self, delta_time: float) -> None:
        """Advance the entity by delta_time seconds."""

    def _recenter(self) -> None:
        self._rect.center = (int(self._position.x), int(self._position.y))


class DynamicEntity(BaseEntity):
    """Entity that moves by its velocity, optionally kept inside an area."""

    def __init__(self, bounds: Optional[pg.Rect] = None) -> None:
        """
        Initialize dynamic entity.

        Args:
            bounds: Area the entity's center cannot leave
        """
        super().__init__()
        self._bounds = bounds

    @property
    def bounds(self) -> Optional[pg.Rect]:
        return self._bounds

    def update_physics(self, delta_time: float) -> None:
        """Move by velocity over delta_time seconds, clamped into bounds."""
        x, y = self._position + self._velocity * delta_time

        if self._bounds is not None:
            x = max(self._bounds.left, min(x, self._bounds.right))
            y = max(self._bounds.top, min(y, self._bounds.bottom))

        self.position = (x, y)
