"""Pixel Walker - Main entry point."""
from __future__ import annotations

import logging
import sys
from pathlib import Path

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).parent))

import pygame as pg

from pixelwalker.models.config import Config
from pixelwalker.models.sprite_config import SpriteConfigStore
from pixelwalker.controllers.scene_manager import SceneManager
from pixelwalker.core.exceptions import GameError

logger = logging.getLogger("pixelwalker")


def main() -> None:
    """Main game entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = None

    try:
        pg.init()

        config = Config()
        config.create_display()

        sprite_config = SpriteConfigStore()
        scene_manager = SceneManager(config, sprite_config)
        scene_manager.run()

    except GameError as e:
        logger.error("Game error: %s", e)
        return

    except Exception:
        logger.exception("Unexpected error")
        return

    finally:
        if config is not None:
            try:
                config.save()
            except GameError as e:
                logger.error("%s", e)

        pg.quit()


if __name__ == "__main__":
    main()
