"""Scene controllers."""
from pixelwalker.controllers.scenes.game_scene import GameScene
from pixelwalker.controllers.scenes.editor_scene import EditorScene
