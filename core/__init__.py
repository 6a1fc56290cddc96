"""
Core module for the Aseprite animation player
Contains data structures, the JSON importer, playback logic and sprite sheet binding
"""

from .data_structures import (
    Rect,
    FrameData,
    AnimationData,
    AnimationDirection,
    AnimationSet,
    SheetInfo,
)
from .errors import (
    AnimationError,
    SchemaViolation,
    NoAnimations,
    UnknownAnimation,
    FrameOutOfRange,
    DuplicateAnimation,
    AnimationSetFrozen,
)
from .aseprite_json import decode_document
from .aseprite_importer import (
    ImportResult,
    ImportWarning,
    WarningKind,
    parse_aseprite_json,
)
from .animation_player import (
    AnimationPlayer,
    PlaybackEvent,
    PlaybackEventType,
    PlaybackTransition,
)
from .texture_atlas import TextureAtlas

__all__ = [
    'Rect',
    'FrameData',
    'AnimationData',
    'AnimationDirection',
    'AnimationSet',
    'SheetInfo',
    'AnimationError',
    'SchemaViolation',
    'NoAnimations',
    'UnknownAnimation',
    'FrameOutOfRange',
    'DuplicateAnimation',
    'AnimationSetFrozen',
    'decode_document',
    'ImportResult',
    'ImportWarning',
    'WarningKind',
    'parse_aseprite_json',
    'AnimationPlayer',
    'PlaybackEvent',
    'PlaybackEventType',
    'PlaybackTransition',
    'TextureAtlas',
]
