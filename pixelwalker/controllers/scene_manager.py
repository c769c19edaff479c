"""Scene manager for coordinating scene transitions."""
from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from pixelwalker.controllers.base.scene import BaseScene
from pixelwalker.controllers.scenes.editor_scene import EditorScene
from pixelwalker.controllers.scenes.game_scene import GameScene
from pixelwalker.models.config import Config
from pixelwalker.models.sprite_config import SpriteConfigStore
from pixelwalker.core.exceptions import GameError, SceneError

logger = logging.getLogger(__name__)


class SceneManager:
    """Manages scene creation and transitions."""

    def __init__(self, config: Config, sprite_config: Optional[SpriteConfigStore] = None) -> None:
        """
        Initialize scene manager.

        Args:
            config: Game configuration
            sprite_config: Stored clip mapping, loaded from disk if omitted
        """
        self._config = config
        self._sprite_config = sprite_config or SpriteConfigStore()

        self._scene_factories: Dict[str, Callable[[], BaseScene]] = {
            "game": lambda: GameScene(self._config, table=self._sprite_config.table),
            "editor": lambda: EditorScene(self._config, self._sprite_config),
        }

    def run(self, first_scene: str = "game") -> None:
        """Run scenes until one requests exit."""
        current_scene_id: Optional[str] = first_scene

        while current_scene_id and current_scene_id != "exit":
            scene = self._create_scene(current_scene_id)
            logger.debug("Entering scene %s", current_scene_id)
            current_scene_id = scene.run()

        logger.info("Scene loop finished")

    def _create_scene(self, scene_id: str) -> BaseScene:
        """Create a new scene instance."""
        factory = self._scene_factories.get(scene_id)
        if factory is None:
            raise SceneError(f"Unknown scene: {scene_id}")

        try:
            return factory()
        except GameError:
            raise
        except Exception as e:
            raise SceneError(f"Failed to create scene {scene_id}: {e}")
