"""
Texture Atlas management
Binds an imported animation set to the sprite sheet image it was exported with
"""

import os
from typing import List, Optional, Tuple

from PIL import Image

from .data_structures import AnimationSet, Rect, SheetInfo


class TextureAtlas:
    """Sprite sheet image plus the declared sheet metadata"""

    def __init__(self, sheet: Optional[SheetInfo] = None):
        self.sheet: Optional[SheetInfo] = sheet
        self.image: Optional[Image.Image] = None
        self.image_path: str = ""
        self.image_width: int = 0
        self.image_height: int = 0
        # Size written by the exporter, may differ from the file on disk
        self.logical_width: int = sheet.size[0] if sheet else 0
        self.logical_height: int = sheet.size[1] if sheet else 0

    @classmethod
    def from_image(cls, image: Image.Image, sheet: Optional[SheetInfo] = None) -> "TextureAtlas":
        """Wrap an image the host has already loaded."""
        atlas = cls(sheet)
        atlas.image = image.convert("RGBA") if image.mode != "RGBA" else image
        atlas.image_width, atlas.image_height = atlas.image.size
        if not sheet:
            atlas.logical_width, atlas.logical_height = atlas.image.size
        return atlas

    def resolve_image_path(self, data_root: str, override: Optional[str] = None) -> str:
        """
        Work out where the sheet image lives

        Args:
            data_root: Directory of the exported JSON file
            override: Explicit image path, takes precedence over the metadata

        Returns:
            Absolute or data_root-relative image path ('' if unknown)
        """
        if override:
            return override
        if not self.sheet or not self.sheet.image:
            return ""
        return os.path.join(data_root, self.sheet.image)

    def load(self, data_root: str, override: Optional[str] = None) -> bool:
        """
        Load the sheet image

        Returns:
            True if successful, False otherwise
        """
        path = self.resolve_image_path(data_root, override)
        if not path or not os.path.exists(path):
            print(f"Error loading sprite sheet: '{path}' does not exist")
            return False
        try:
            with Image.open(path) as img:
                self.image = img.convert("RGBA")
        except (OSError, ValueError) as e:
            print(f"Error loading sprite sheet: {e}")
            return False

        self.image_path = path
        self.image_width, self.image_height = self.image.size
        if not self.logical_width or not self.logical_height:
            self.logical_width, self.logical_height = self.image_width, self.image_height
        if (self.image_width, self.image_height) != (self.logical_width, self.logical_height):
            print(f"Warning: sheet '{os.path.basename(path)}' is {self.image_width}x{self.image_height}, "
                  f"metadata declares {self.logical_width}x{self.logical_height}")
        return True

    @property
    def bounds(self) -> Rect:
        width = self.image_width or self.logical_width
        height = self.image_height or self.logical_height
        return Rect(0.0, 0.0, float(width), float(height))

    def region_fits(self, region: Rect) -> bool:
        return self.bounds.contains_rect(region)

    def find_out_of_bounds(self, animations: AnimationSet) -> List[Tuple[str, int]]:
        """
        List (animation, frame index) pairs whose region falls outside the sheet.
        """
        bounds = self.bounds
        if bounds.w <= 0 or bounds.h <= 0:
            return []
        misses = []
        for name, animation in animations.items():
            for index, frame in enumerate(animation.frames):
                if not bounds.contains_rect(frame.region):
                    misses.append((name, index))
        return misses
