"""Renderer components."""
from pixelwalker.views.renderers.game_renderer import GameRenderer
from pixelwalker.views.renderers.editor_renderer import EditorRenderer
