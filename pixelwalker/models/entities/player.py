"""Player character model."""
from __future__ import annotations

import logging
from typing import Optional
import pygame as pg

from pixelwalker.models.entities.base_entity import DynamicEntity
from pixelwalker.models.animation import AnimationSet
from pixelwalker.models.animation_selector import (
    CharacterState, MovementInput, Transition, select_animation
)
from pixelwalker.models.clip import Action, DEFAULT_CLIP_KEY, Direction
from pixelwalker.core.exceptions import MissingClipError
from pixelwalker.core.constants import RUN_SPEED, WALK_SPEED

logger = logging.getLogger(__name__)


class Player(DynamicEntity):
    """Top-down player with 4-direction walk and run animations."""

    def __init__(
        self,
        x: float,
        y: float,
        animations: AnimationSet,
        bounds: Optional[pg.Rect] = None
    ) -> None:
        """
        Initialize player at given position.

        Args:
            x: Spawn x coordinate
            y: Spawn y coordinate
            animations: Clips cut from the player's spritesheet
            bounds: Area the player cannot leave
        """
        super().__init__(bounds)
        self.position = pg.math.Vector2(x, y)

        self._state = CharacterState()
        self._input = MovementInput()

        self._animations = animations
        self._animations.set_state(self._state.clip_key)
        self.image = self._animations.get_current_frame()

    @property
    def state(self) -> CharacterState:
        """Get current animation state."""
        return self._state

    @property
    def current_action(self) -> Action:
        return self._state.action

    @property
    def current_direction(self) -> Direction:
        return self._state.direction

    @property
    def is_moving(self) -> bool:
        return self._state.is_moving

    @property
    def last_input(self) -> MovementInput:
        """Get the input applied on the latest tick."""
        return self._input

    @property
    def animations(self) -> AnimationSet:
        return self._animations

    def handle_input(self, inputs: MovementInput) -> Transition:
        """
        Apply one tick of movement input.

        Sets the velocity and moves to the next animation state; playback
        restarts only when the clip changes.

        Returns:
            The selector's transition for this tick
        """
        self._input = inputs
        self.velocity = self._velocity_for(inputs)

        transition = select_animation(self._state, inputs)
        if transition.changed:
            self._state = transition.state
            try:
                self._animations.set_state(transition.clip_key)
            except MissingClipError as e:
                logger.warning("%s, playing %s instead", e, DEFAULT_CLIP_KEY)
                self._animations.set_state(DEFAULT_CLIP_KEY)
            else:
                logger.debug("Player switched to %s", transition.clip_key)
        return transition

    def update(self, delta_time: float) -> None:
        """Move and advance the playing clip."""
        self.update_physics(delta_time)
        self._animations.update(delta_time)
        self.image = self._animations.get_current_frame()

    @staticmethod
    def _velocity_for(inputs: MovementInput) -> pg.math.Vector2:
        """Velocity from input; left beats right, up beats down, diagonals are normalized."""
        speed = RUN_SPEED if inputs.running else WALK_SPEED
        velocity = pg.math.Vector2()

        if inputs.left:
            velocity.x = -1
        elif inputs.right:
            velocity.x = 1

        if inputs.up:
            velocity.y = -1
        elif inputs.down:
            velocity.y = 1

        if velocity.length_squared() > 0:
            velocity.scale_to_length(speed)
        return velocity
