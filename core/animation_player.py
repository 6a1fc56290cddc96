"""
Animation Player
Handles frame playback for animations with per-frame durations
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from .data_structures import AnimationData, AnimationDirection, AnimationSet, FrameData
from .errors import FrameOutOfRange, UnknownAnimation

# Float slack when comparing accumulated time against a frame duration, so that
# many small ticks and one large tick of the same total land on the same frame.
DURATION_TOLERANCE = 1e-9

# Upper bound on frame steps per tick. Lag beyond it is dropped.
MAX_CATCH_UP_STEPS = 10000


class PlaybackEventType(Enum):
    FRAME_CHANGED = "frame_changed"
    ANIMATION_FINISHED = "animation_finished"


@dataclass(frozen=True)
class PlaybackEvent:
    type: PlaybackEventType
    animation: Optional[str]
    frame: int


@dataclass
class PlaybackTransition:
    """Result of an explicit playback command"""
    animation: Optional[str]
    previous_animation: Optional[str]
    previous_frame: int
    frame: int
    events: List[PlaybackEvent] = field(default_factory=list)

    @property
    def frame_changed(self) -> bool:
        return self.previous_animation != self.animation or self.previous_frame != self.frame


class AnimationPlayer:
    """Plays the animations of one AnimationSet, one frame at a time"""

    def __init__(self, animations: Optional[AnimationSet] = None):
        self.animations: Optional[AnimationSet] = None
        self.animation: Optional[str] = None
        self.frame: int = 0
        self.elapsed: float = 0.0
        self.playing: bool = False
        self.loop: bool = False
        self._speed_scale: float = 1.0
        # Internal play direction. Alternates for ping-pong animations,
        # fixed for forward/reverse ones.
        self.forward: bool = True
        self._listeners: List[Callable[[PlaybackEvent], None]] = []
        # Called once per draw without building event objects
        self.frame_drawn_callbacks: List[Callable[[], None]] = []

        if animations is not None:
            self.set_animation_set(animations)

    # ------------------------------------------------------------------ #
    # Configuration
    # ------------------------------------------------------------------ #
    @property
    def speed_scale(self) -> float:
        return self._speed_scale

    @speed_scale.setter
    def speed_scale(self, value: float):
        # NaN and infinity would stall the catch-up loop in tick
        self._speed_scale = value if math.isfinite(value) and value > 0 else 0.0

    def set_animation_set(self, animations: Optional[AnimationSet]):
        """
        Bind a new animation set

        The current animation is kept when the new set still has it, otherwise
        the first animation of the set is selected.
        """
        self.animations = animations
        if animations is None or len(animations) == 0:
            self.animation = None
            return
        if not animations.has_animation(self.animation):
            self.select_animation(animations.names[0])

    def add_listener(self, callback: Callable[[PlaybackEvent], None]):
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[PlaybackEvent], None]):
        if callback in self._listeners:
            self._listeners.remove(callback)

    # ------------------------------------------------------------------ #
    # Accessors
    # ------------------------------------------------------------------ #
    @property
    def current_animation(self) -> Optional[AnimationData]:
        if self.animations is None:
            return None
        return self.animations.get(self.animation)

    def total_frames(self) -> int:
        animation = self.current_animation
        return animation.frame_count if animation else 0

    def is_playing(self) -> bool:
        return self.playing

    def current_frame(self) -> int:
        return self.frame

    def current_frame_data(self) -> Optional[FrameData]:
        """
        Frame to draw for the current state.

        Falls back to the first frame if the stored index no longer fits the
        animation (e.g. the set was swapped for a shorter one). Returns None
        when there is nothing to draw.
        """
        animation = self.current_animation
        if animation is None or not animation.frames:
            return None
        index = self.frame if 0 <= self.frame < animation.frame_count else 0
        return animation.frames[index]

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #
    def select_animation(self, name: str) -> PlaybackTransition:
        """
        Make ``name`` the current animation and rewind it

        Args:
            name: Animation name in the bound set

        Returns:
            PlaybackTransition describing the frame change. FrameChanged is
            emitted when either the animation or the frame index differs from
            before, so switching between two animations that both start on
            index 0 still notifies listeners. Re-selecting the current
            animation on its start frame emits nothing.

        Raises:
            UnknownAnimation: ``name`` is not in the bound set
        """
        if self.animations is None or not self.animations.has_animation(name):
            raise UnknownAnimation(name)

        animation = self.animations[name]
        previous_name, previous = self.animation, self.frame
        self.animation = name
        self.elapsed = 0.0
        self.frame = animation.start_frame
        self.forward = animation.direction.starts_forward

        transition = PlaybackTransition(
            animation=name, previous_animation=previous_name, previous_frame=previous, frame=self.frame
        )
        if transition.frame_changed:
            self._emit(PlaybackEventType.FRAME_CHANGED, transition.events)
        return transition

    def play(self, name: Optional[str] = None) -> Optional[PlaybackTransition]:
        """
        Start playing. If a name is given that animation is selected (and
        rewound) first, otherwise the current animation resumes where it is.
        """
        transition = None
        if name is not None:
            transition = self.select_animation(name)
        self.playing = True
        return transition

    def stop(self):
        """Pause playback, keeping the current frame and elapsed time."""
        self.playing = False

    def set_frame(self, index: int) -> PlaybackTransition:
        """
        Jump to a frame of the current animation

        Raises:
            FrameOutOfRange: ``index`` is not a frame of the current animation
        """
        count = self.total_frames()
        if index < 0 or index >= count:
            raise FrameOutOfRange(index, count, self.animation)

        previous = self.frame
        self.frame = index
        self.elapsed = 0.0
        transition = PlaybackTransition(
            animation=self.animation, previous_animation=self.animation, previous_frame=previous, frame=index
        )
        if transition.frame_changed:
            self._emit(PlaybackEventType.FRAME_CHANGED, transition.events)
        return transition

    def notify_frame_drawn(self):
        for callback in list(self.frame_drawn_callbacks):
            callback()

    # ------------------------------------------------------------------ #
    # Timing
    # ------------------------------------------------------------------ #
    def tick(self, delta_time: float) -> List[PlaybackEvent]:
        """
        Advance playback

        Args:
            delta_time: Time elapsed since the last tick (in seconds). Negative
                and non-finite values count as 0.

        Returns:
            Events emitted during this tick, in order
        """
        events: List[PlaybackEvent] = []
        if not self.playing:
            return events
        animation = self.current_animation
        if animation is None or not animation.frames:
            return events

        if not math.isfinite(delta_time) or delta_time < 0:
            delta_time = 0.0
        self.elapsed += delta_time * self._speed_scale
        if not 0 <= self.frame < animation.frame_count:
            self.frame = 0

        # A cycle of zero-length frames never consumes time; allow one full
        # ping-pong cycle of them per tick and then wait for the next one.
        zero_limit = max(2, 2 * animation.frame_count)
        zero_steps = 0
        steps = 0

        # If we lagged we may need to skip several frames to catch up
        while self.playing:
            duration = animation.frames[self.frame].duration
            if self.elapsed + DURATION_TOLERANCE < duration:
                break
            self.elapsed = max(0.0, self.elapsed - duration)

            if duration <= 0.0:
                zero_steps += 1
            else:
                zero_steps = 0

            if self.forward:
                if self.frame < animation.last_index:
                    self.frame += 1
                    self._emit(PlaybackEventType.FRAME_CHANGED, events)
                else:
                    self._on_animation_finished(animation, events)
            else:
                if self.frame > 0:
                    self.frame -= 1
                    self._emit(PlaybackEventType.FRAME_CHANGED, events)
                else:
                    self._on_animation_finished(animation, events)

            if zero_steps >= zero_limit:
                break
            steps += 1
            if steps >= MAX_CATCH_UP_STEPS:
                self.elapsed = 0.0
                break

        return events

    def _on_animation_finished(self, animation: AnimationData, events: List[PlaybackEvent]):
        """Handle the last frame of a pass having been shown for its full duration."""
        if self.loop:
            last = animation.last_index
            previous = self.frame
            direction = animation.direction
            if direction == AnimationDirection.FORWARD:
                self.frame = 0
            elif direction == AnimationDirection.REVERSE:
                self.frame = max(0, last)
            else:
                # Ping-pong turns around on the neighbour of the end frame so
                # the end frame is not shown twice in a row
                self.forward = not self.forward
                self.frame = min(1, last) if self.forward else max(0, last - 1)
            if self.frame != previous:
                self._emit(PlaybackEventType.FRAME_CHANGED, events)
        else:
            self.playing = False

        self._emit(PlaybackEventType.ANIMATION_FINISHED, events)

    def _emit(self, event_type: PlaybackEventType, events: List[PlaybackEvent]):
        event = PlaybackEvent(type=event_type, animation=self.animation, frame=self.frame)
        events.append(event)
        for listener in list(self._listeners):
            listener(event)
