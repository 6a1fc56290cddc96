"""
Settings Manager
Handles playback preference persistence
"""

from typing import Optional

from PyQt6.QtCore import QSettings

from renderer.sprite_renderer import PlaybackOptions


def _to_bool(value, default: bool) -> bool:
    # INI backends hand booleans back as strings
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes', 'on')
    return bool(value)


class SettingsManager:
    """Manages application settings"""

    def __init__(self, path: Optional[str] = None):
        if path:
            self.settings = QSettings(path, QSettings.Format.IniFormat)
        else:
            self.settings = QSettings('AsepritePlayer', 'Settings')

    def get_loop(self) -> bool:
        """Whether new players loop by default"""
        return _to_bool(self.settings.value('playback/loop'), False)

    def set_loop(self, loop: bool):
        self.settings.setValue('playback/loop', bool(loop))

    def get_speed_scale(self) -> float:
        try:
            value = float(self.settings.value('playback/speed_scale', 1.0))
        except (TypeError, ValueError):
            return 1.0
        return max(0.0, value)

    def set_speed_scale(self, speed: float):
        self.settings.setValue('playback/speed_scale', max(0.0, float(speed)))

    def get_playback_options(self) -> PlaybackOptions:
        """Get saved draw options"""
        return PlaybackOptions(
            centered=_to_bool(self.settings.value('render/centered'), True),
            flip_h=_to_bool(self.settings.value('render/flip_h'), False),
            flip_v=_to_bool(self.settings.value('render/flip_v'), False),
        )

    def set_playback_options(self, options: PlaybackOptions):
        self.settings.setValue('render/centered', bool(options.centered))
        self.settings.setValue('render/flip_h', bool(options.flip_h))
        self.settings.setValue('render/flip_v', bool(options.flip_v))

    def get_last_file(self) -> str:
        """Get the last imported file"""
        return self.settings.value('last_file', '') or ''

    def set_last_file(self, filename: str):
        """Save the last imported file"""
        self.settings.setValue('last_file', filename)

    def sync(self):
        self.settings.sync()
