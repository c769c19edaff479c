"""Entity models for game objects."""
from pixelwalker.models.entities.base_entity import BaseEntity, DynamicEntity
from pixelwalker.models.entities.player import Player
