"""
Sprite Renderer
Pure drawing logic for the current frame of an animation player
Separated from the Qt adapter for clarity and testability
"""

from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

import numpy as np
from PIL import Image

from core.animation_player import AnimationPlayer
from core.data_structures import FrameData, Rect
from core.texture_atlas import TextureAtlas


@dataclass
class PlaybackOptions:
    """Draw-time toggles of an animated sprite"""
    centered: bool = True
    flip_h: bool = False
    flip_v: bool = False
    offset: Tuple[float, float] = (0.0, 0.0)


class DrawSurface(Protocol):
    """What the renderer needs from the host's drawing target"""

    def draw_texture_rect_region(self, sheet: Image.Image, dest: Rect, region: Rect) -> None:
        ...


def compute_destination(
    frame: FrameData,
    frame_size: Tuple[float, float],
    options: Optional[PlaybackOptions] = None,
) -> Rect:
    """
    Work out where a frame lands relative to the sprite origin

    The destination's position is always the top-left corner of the covered
    area. A negative width/height marks that axis as mirrored; the covered
    area is still ``[x, x + abs(w)]``.

    Args:
        frame: Frame being drawn (region size and trim offset)
        frame_size: Untrimmed size shared by the frames of the animation
        options: Flip/centre/offset settings (defaults if None)

    Returns:
        Destination rectangle in sprite-local pixel units
    """
    options = options or PlaybackOptions()
    frame_w, frame_h = frame_size
    off_x, off_y = frame.offset
    region_w, region_h = frame.region.w, frame.region.h

    # Mirroring moves the trimmed rect to the other side of the untrimmed frame
    x = (frame_w - region_w) - off_x if options.flip_h else off_x
    y = (frame_h - region_h) - off_y if options.flip_v else off_y
    if options.centered:
        x -= frame_w / 2.0
        y -= frame_h / 2.0
    x += options.offset[0]
    y += options.offset[1]

    return Rect(
        x,
        y,
        -region_w if options.flip_h else region_w,
        -region_h if options.flip_v else region_h,
    )


class CanvasSurface:
    """
    Software draw target backed by a premultiplied RGBA buffer.

    Blending follows ONE / ONE_MINUS_SRC_ALPHA on premultiplied colour, the
    same equation the GL path uses.
    """

    def __init__(self, width: int, height: int, origin: Tuple[float, float] = (0.0, 0.0)):
        self.width = width
        self.height = height
        self.origin = origin
        self.buffer = np.zeros((height, width, 4), dtype=np.float32)

    def clear(self):
        self.buffer.fill(0.0)

    def draw_texture_rect_region(self, sheet: Image.Image, dest: Rect, region: Rect) -> None:
        left = int(round(region.x))
        top = int(round(region.y))
        piece = sheet.crop((left, top, left + int(round(region.w)), top + int(round(region.h))))
        piece = piece.convert("RGBA")

        out_w = int(round(abs(dest.w)))
        out_h = int(round(abs(dest.h)))
        if out_w == 0 or out_h == 0:
            return
        if piece.size != (out_w, out_h):
            piece = piece.resize((out_w, out_h), Image.Resampling.NEAREST)

        src = np.asarray(piece, dtype=np.float32) / 255.0
        src[:, :, 0:3] *= src[:, :, 3:4]
        if dest.w < 0:
            src = src[:, ::-1, :]
        if dest.h < 0:
            src = src[::-1, :, :]

        x0 = int(round(dest.x + self.origin[0]))
        y0 = int(round(dest.y + self.origin[1]))
        # Clip against the canvas
        cx0, cy0 = max(0, x0), max(0, y0)
        cx1, cy1 = min(self.width, x0 + out_w), min(self.height, y0 + out_h)
        if cx0 >= cx1 or cy0 >= cy1:
            return
        src = src[cy0 - y0:cy1 - y0, cx0 - x0:cx1 - x0]
        dst = self.buffer[cy0:cy1, cx0:cx1]
        dst *= 1.0 - src[:, :, 3:4]
        dst += src

    def to_image(self) -> Image.Image:
        """Un-premultiply and convert the buffer to an RGBA image."""
        data = self.buffer.copy()
        alpha = data[:, :, 3:4]
        np.divide(data[:, :, 0:3], alpha, out=data[:, :, 0:3], where=alpha > 0)
        data = np.clip(data * 255.0 + 0.5, 0, 255).astype(np.uint8)
        return Image.fromarray(data, "RGBA")


class SpriteRenderer:
    """Draws the current frame of an AnimationPlayer onto a surface"""

    def __init__(self, options: Optional[PlaybackOptions] = None):
        self.options = options or PlaybackOptions()

    def draw(self, surface: DrawSurface, atlas: TextureAtlas, player: AnimationPlayer) -> bool:
        """
        Draw the player's current frame

        Returns:
            True if something was drawn
        """
        animation = player.current_animation
        frame = player.current_frame_data()
        if animation is None or frame is None or atlas.image is None:
            return False

        dest = compute_destination(frame, animation.frame_size, self.options)
        surface.draw_texture_rect_region(atlas.image, dest, frame.region)
        player.notify_frame_drawn()
        return True

    def render_frame_image(self, atlas: TextureAtlas, player: AnimationPlayer) -> Optional[Image.Image]:
        """
        Render the current frame into an image the size of the untrimmed frame.
        """
        animation = player.current_animation
        if animation is None or not animation.frames:
            return None
        width = max(1, int(round(animation.frame_size[0])))
        height = max(1, int(round(animation.frame_size[1])))
        origin = (width / 2.0, height / 2.0) if self.options.centered else (0.0, 0.0)
        surface = CanvasSurface(width, height, origin)
        if not self.draw(surface, atlas, player):
            return None
        return surface.to_image()
