"""
Data structures for the Aseprite animation player
Defines the frame, animation and animation set types shared by the importer and the player
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from .errors import AnimationSetFrozen, DuplicateAnimation, UnknownAnimation


@dataclass(frozen=True)
class Rect:
    """Axis aligned rectangle in pixel units"""
    x: float
    y: float
    w: float
    h: float

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @property
    def size(self) -> Tuple[float, float]:
        return (self.w, self.h)

    def contains_rect(self, other: "Rect") -> bool:
        """Return True if ``other`` lies fully inside this rectangle."""
        return (
            other.x >= self.x
            and other.y >= self.y
            and other.x + other.w <= self.x + self.w
            and other.y + other.h <= self.y + self.h
        )


class AnimationDirection(Enum):
    """Play directions supported by tagged animations"""
    FORWARD = "forward"
    REVERSE = "reverse"
    PING_PONG = "pingpong"
    PING_PONG_REVERSE = "pingpong_reverse"

    @classmethod
    def parse(cls, value: str) -> Optional["AnimationDirection"]:
        """
        Case-insensitive lookup of an exported direction label.

        Accepts the labels written by the exporter ("forward", "pingpong",
        "pingpong_reverse") as well as the enum names ("PingPongReverse").
        Returns None when nothing matches.
        """
        if not isinstance(value, str):
            return None
        key = value.strip().lower().replace("_", "").replace("-", "").replace(" ", "")
        return _DIRECTION_LOOKUP.get(key)

    @property
    def starts_forward(self) -> bool:
        return self in (AnimationDirection.FORWARD, AnimationDirection.PING_PONG)

    @property
    def is_ping_pong(self) -> bool:
        return self in (AnimationDirection.PING_PONG, AnimationDirection.PING_PONG_REVERSE)


_DIRECTION_LOOKUP = {
    "forward": AnimationDirection.FORWARD,
    "reverse": AnimationDirection.REVERSE,
    "pingpong": AnimationDirection.PING_PONG,
    "pingpongreverse": AnimationDirection.PING_PONG_REVERSE,
}


@dataclass(frozen=True)
class FrameData:
    """One visible frame of an animation"""
    region: Rect
    offset: Tuple[float, float] = (0.0, 0.0)
    duration: float = 0.0  # seconds
    name: Optional[str] = None
    source_size: Tuple[float, float] = (0.0, 0.0)

    def __post_init__(self):
        if self.region.w <= 0 or self.region.h <= 0:
            raise ValueError(f"Frame region must have a positive size, got {self.region.size}")
        if self.duration < 0:
            raise ValueError(f"Frame duration must be >= 0, got {self.duration}")


@dataclass
class AnimationData:
    """Ordered frames plus the play direction of a tagged animation"""
    frames: List[FrameData] = field(default_factory=list)
    frame_size: Tuple[float, float] = (0.0, 0.0)
    direction: AnimationDirection = AnimationDirection.FORWARD

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    @property
    def last_index(self) -> int:
        return len(self.frames) - 1

    @property
    def duration(self) -> float:
        """Length of one pass through the frames in seconds"""
        return sum(frame.duration for frame in self.frames)

    @property
    def start_frame(self) -> int:
        """Frame index playback starts from for this animation's direction."""
        if self.direction.starts_forward:
            return 0
        return max(0, len(self.frames) - 1)


@dataclass(frozen=True)
class SheetInfo:
    """Metadata block of an exported sprite sheet"""
    app: str
    version: str
    image: str
    size: Tuple[int, int]
    format: Optional[str] = None
    scale: float = 1.0


class AnimationSet:
    """
    Named collection of animations produced by one import.

    Names are unique. The importer freezes the set once it is built; after
    that it is only read, so any number of players may share it.
    """

    def __init__(self):
        self._animations: Dict[str, AnimationData] = {}
        self._frozen: bool = False

    def add_animation(self, name: str, animation: AnimationData):
        if self._frozen:
            raise AnimationSetFrozen(f"Cannot add '{name}' to a frozen animation set")
        if name in self._animations:
            raise DuplicateAnimation(name)
        self._animations[name] = animation

    def freeze(self) -> "AnimationSet":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def has_animation(self, name: Optional[str]) -> bool:
        return name is not None and name in self._animations

    def get(self, name: Optional[str]) -> Optional[AnimationData]:
        if name is None:
            return None
        return self._animations.get(name)

    @property
    def names(self) -> List[str]:
        return list(self._animations.keys())

    @property
    def animations(self) -> List[AnimationData]:
        return list(self._animations.values())

    def items(self):
        return self._animations.items()

    def __getitem__(self, name: str) -> AnimationData:
        try:
            return self._animations[name]
        except KeyError:
            raise UnknownAnimation(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._animations

    def __len__(self) -> int:
        return len(self._animations)

    def __iter__(self) -> Iterator[str]:
        return iter(self._animations)
