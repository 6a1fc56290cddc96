"""
Animated Sprite
Qt adapter that drives an AnimationPlayer from a timer and re-emits its events as signals
"""

import time
from typing import List, Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from core.animation_player import AnimationPlayer, PlaybackEvent, PlaybackEventType, PlaybackTransition
from core.data_structures import AnimationSet
from core.texture_atlas import TextureAtlas
from .sprite_renderer import DrawSurface, PlaybackOptions, SpriteRenderer


class AnimatedSprite(QObject):
    """
    Sprite node for sheets exported from Aseprite.

    Unlike a fixed-rate flipbook every frame keeps its own duration.
    """

    frame_changed = pyqtSignal(int)
    animation_finished = pyqtSignal(str)
    playback_state_changed = pyqtSignal(bool)

    def __init__(self, parent: Optional[QObject] = None, options: Optional[PlaybackOptions] = None):
        super().__init__(parent)
        self.player = AnimationPlayer()
        self.player.add_listener(self._forward_event)
        self.atlas: Optional[TextureAtlas] = None
        self.renderer = SpriteRenderer(options)
        self.last_update_time: Optional[float] = None
        # Upper bound for one timer step; None keeps the full delta so playback catches up after a stall
        self.max_frame_delta: Optional[float] = None
        self._timer: Optional[QTimer] = None
        self.clock = time.monotonic

    @property
    def options(self) -> PlaybackOptions:
        return self.renderer.options

    # ------------------------------------------------------------------ #
    # Configuration
    # ------------------------------------------------------------------ #
    def set_animation_set(self, animations: Optional[AnimationSet]):
        self.player.set_animation_set(animations)

    def set_atlas(self, atlas: Optional[TextureAtlas]):
        self.atlas = atlas

    def apply_settings(self, settings):
        """Take loop, speed and draw options from a SettingsManager."""
        self.player.loop = settings.get_loop()
        self.player.speed_scale = settings.get_speed_scale()
        self.renderer.options = settings.get_playback_options()

    def configuration_warning(self) -> str:
        """Describe what is missing before this sprite can draw ('' when ready)."""
        if self.atlas is None or self.atlas.image is None:
            return "A sprite sheet texture must be set."
        if self.player.animations is None:
            return "An animation set must be set."
        if not self.player.animation or not self.player.animations.has_animation(self.player.animation):
            return "Animation must be set to a named animation from the animation set."
        return ""

    # ------------------------------------------------------------------ #
    # Playback commands
    # ------------------------------------------------------------------ #
    def play(self, name: Optional[str] = None) -> Optional[PlaybackTransition]:
        was_playing = self.player.playing
        transition = self.player.play(name)
        self._notify_state(was_playing)
        return transition

    def stop(self):
        was_playing = self.player.playing
        self.player.stop()
        self._notify_state(was_playing)

    def set_frame(self, index: int) -> PlaybackTransition:
        return self.player.set_frame(index)

    def advance(self, delta_time: float) -> List[PlaybackEvent]:
        """Tick the player by ``delta_time`` seconds."""
        was_playing = self.player.playing
        events = self.player.tick(delta_time)
        self._notify_state(was_playing)
        return events

    # ------------------------------------------------------------------ #
    # Timer driven updates
    # ------------------------------------------------------------------ #
    def start_timer(self, interval_ms: int = 16):
        if self._timer is None:
            self._timer = QTimer(self)
            self._timer.timeout.connect(self.update_animation)
        self.last_update_time = None
        self._timer.start(interval_ms)

    def stop_timer(self):
        if self._timer is not None:
            self._timer.stop()

    def update_animation(self):
        """Update animation state with the wall time since the previous update"""
        current_time = self.clock()

        if self.last_update_time is not None:
            delta_time = current_time - self.last_update_time
            if self.max_frame_delta is not None:
                delta_time = min(delta_time, self.max_frame_delta)
        else:
            delta_time = 0.0

        self.last_update_time = current_time
        self.advance(delta_time)

    def draw(self, surface: DrawSurface) -> bool:
        if self.atlas is None:
            return False
        return self.renderer.draw(surface, self.atlas, self.player)

    def _forward_event(self, event: PlaybackEvent):
        if event.type == PlaybackEventType.FRAME_CHANGED:
            self.frame_changed.emit(event.frame)
        elif event.type == PlaybackEventType.ANIMATION_FINISHED:
            self.animation_finished.emit(event.animation or "")

    def _notify_state(self, was_playing: bool):
        if was_playing != self.player.playing:
            self.playback_state_changed.emit(self.player.playing)
