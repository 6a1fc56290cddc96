"""
Errors raised by the importer and the animation player
"""

from typing import Optional


class AnimationError(Exception):
    """Base class for all animation import and playback errors"""


class SchemaViolation(AnimationError):
    """A required field of the exported JSON is missing or malformed"""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}" if path else message)


class NoAnimations(AnimationError):
    """The import produced no usable animation"""


class UnknownAnimation(AnimationError, KeyError):
    """An animation name is not part of the bound animation set"""

    def __init__(self, name: Optional[str]):
        self.name = name
        super().__init__(f"Could not find animation '{name}'")

    def __str__(self) -> str:
        return self.args[0]


class FrameOutOfRange(AnimationError, IndexError):
    """A frame index is not valid for the current animation"""

    def __init__(self, index: int, count: int, animation: Optional[str] = None):
        self.index = index
        self.count = count
        self.animation = animation
        super().__init__(
            f"Frame index {index} is out of bounds for animation '{animation}' ({count} frames)"
        )


class DuplicateAnimation(AnimationError):
    """An animation with the same name already exists in the set"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Duplicate animation name '{name}'")


class AnimationSetFrozen(AnimationError):
    """The animation set is read-only"""
