"""
Aseprite Animation Player
Command line entry point: imports an exported sprite sheet description and
optionally renders the frames each animation visits
"""

import argparse
import os
import re
import sys
from typing import List, Optional

from core.animation_player import AnimationPlayer, PlaybackEventType
from core.aseprite_importer import ImportResult
from core.texture_atlas import TextureAtlas
from renderer.sprite_renderer import PlaybackOptions, SpriteRenderer
from utils.file_loader import load_aseprite_json
from utils.settings import SettingsManager


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Import Aseprite JSON exports and preview their animations.")
    parser.add_argument("file", help="Exported .ase-json/.json file")
    parser.add_argument("--sheet", help="Sprite sheet image (defaults to meta.image next to the file)")
    parser.add_argument("--export-dir", help="Write one PNG per played frame into this directory")
    parser.add_argument("--animation", help="Only export this animation")
    parser.add_argument("--loop-count", type=int, default=1, help="Passes to play per animation when exporting")
    parser.add_argument("--settings", help="INI file with saved playback preferences")
    parser.add_argument("--quiet", action="store_true", help="Do not print per-tag warnings")
    return parser


def describe(result: ImportResult) -> List[str]:
    sheet = result.sheet
    lines = [f"{sheet.image} ({sheet.size[0]}x{sheet.size[1]}) exported by {sheet.app} {sheet.version}"]
    for name, animation in result.animations.items():
        lines.append(
            f"  {name}: {animation.frame_count} frames, {animation.direction.value}, "
            f"{animation.duration:.3f}s, frame size {int(animation.frame_size[0])}x{int(animation.frame_size[1])}"
        )
    if result.warnings:
        lines.append(f"  {len(result.warnings)} warning(s)")
    return lines


def export_animation(
    result: ImportResult,
    atlas: TextureAtlas,
    name: str,
    export_dir: str,
    loop_count: int = 1,
    options: Optional[PlaybackOptions] = None,
) -> List[str]:
    """
    Play one animation and save every frame it shows

    Returns:
        Paths of the written images, in play order
    """
    player = AnimationPlayer(result.animations)
    player.loop = loop_count > 1
    player.play(name)
    renderer = SpriteRenderer(options)

    safe_name = re.sub(r'[^A-Za-z0-9_.-]+', '_', name)
    written = []
    finished = 0
    max_steps = (player.total_frames() * 2 + 1) * max(1, loop_count)
    for step in range(max_steps):
        image = renderer.render_frame_image(atlas, player)
        if image is not None:
            path = os.path.join(export_dir, f"{safe_name}_{step:04d}.png")
            image.save(path)
            written.append(path)

        frame = player.current_frame_data()
        events = player.tick(frame.duration if frame else 0.0)
        finished += sum(1 for e in events if e.type == PlaybackEventType.ANIMATION_FINISHED)
        if not player.playing or finished >= loop_count:
            break
    return written


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    settings = SettingsManager(args.settings) if args.settings else None
    result = load_aseprite_json(args.file, verbose=not args.quiet)
    if result is None:
        return 1
    if settings:
        settings.set_last_file(os.path.abspath(args.file))
        settings.sync()

    for line in describe(result):
        print(line)

    if not args.export_dir:
        return 0

    if args.animation and not result.animations.has_animation(args.animation):
        print(f"Error: could not find animation '{args.animation}'. "
              f"Available: {', '.join(result.animations.names)}")
        return 1

    atlas = TextureAtlas(result.sheet)
    if not atlas.load(os.path.dirname(os.path.abspath(args.file)), args.sheet):
        return 1
    for name, index in atlas.find_out_of_bounds(result.animations):
        print(f"Warning: frame {index} of '{name}' lies outside the sprite sheet")

    os.makedirs(args.export_dir, exist_ok=True)
    options = settings.get_playback_options() if settings else PlaybackOptions()
    names = [args.animation] if args.animation else result.animations.names
    for name in names:
        written = export_animation(result, atlas, name, args.export_dir, max(1, args.loop_count), options)
        print(f"Exported {len(written)} frame(s) of '{name}' to {args.export_dir}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
