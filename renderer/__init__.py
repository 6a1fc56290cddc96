"""
Renderer module for the Aseprite animation player
Handles destination math, software drawing and the Qt sprite adapter
"""

from .sprite_renderer import CanvasSurface, PlaybackOptions, SpriteRenderer, compute_destination
from .animated_sprite import AnimatedSprite

__all__ = [
    'AnimatedSprite',
    'CanvasSurface',
    'PlaybackOptions',
    'SpriteRenderer',
    'compute_destination',
]
