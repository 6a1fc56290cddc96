"""
Utils module for the Aseprite animation player
Contains file loading and settings persistence
"""

from .file_loader import load_aseprite_json, load_aseprite_json_strict, is_aseprite_export
from .settings import SettingsManager

__all__ = [
    'load_aseprite_json',
    'load_aseprite_json_strict',
    'is_aseprite_export',
    'SettingsManager',
]
