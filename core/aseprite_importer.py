"""
Aseprite importer
Turns a decoded Aseprite export into an AnimationSet, one animation per frame tag
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Union

from .aseprite_json import AseJsonData, FrameInfo, FrameTagInfo, decode_document
from .data_structures import (
    AnimationData,
    AnimationDirection,
    AnimationSet,
    FrameData,
    Rect,
    SheetInfo,
)
from .errors import NoAnimations

DEFAULT_ANIMATION_NAME = "default"


class WarningKind(Enum):
    INVALID_TAG_RANGE = "InvalidTagRange"
    UNRECOGNIZED_DIRECTION = "UnrecognizedDirection"
    DUPLICATE_ANIMATION = "DuplicateAnimation"
    INVALID_TAG_NAME = "InvalidTagName"


@dataclass(frozen=True)
class ImportWarning:
    """A non-fatal problem with a single frame tag"""
    kind: WarningKind
    tag: str
    message: str


@dataclass
class ImportResult:
    animations: AnimationSet
    sheet: SheetInfo
    warnings: List[ImportWarning] = field(default_factory=list)


def parse_aseprite_json(source: Union[str, bytes, Mapping[str, Any]], verbose: bool = True) -> ImportResult:
    """
    Parse an exported Aseprite sprite sheet description

    Args:
        source: JSON text (or an already parsed mapping) of the export
        verbose: Print each per-tag warning as it is found

    Returns:
        ImportResult with a frozen AnimationSet, the sheet metadata and any warnings

    Raises:
        SchemaViolation: The document is missing a required field
        NoAnimations: No frame tag produced a valid animation
    """
    data = decode_document(source)
    return build_animation_set(data, verbose=verbose)


def build_animation_set(data: AseJsonData, verbose: bool = True) -> ImportResult:
    """Validate the decoded document and build the runtime animation set."""
    animations = AnimationSet()
    warnings: List[ImportWarning] = []

    def warn(kind: WarningKind, tag: str, message: str):
        warnings.append(ImportWarning(kind=kind, tag=tag, message=message))
        if verbose:
            print(f"Warning: {message}")

    tags = list(data.meta.frame_tags)
    if not tags:
        # Without tags the whole sheet plays as one animation
        tags.append(FrameTagInfo(
            name=DEFAULT_ANIMATION_NAME,
            from_frame=0,
            to_frame=len(data.frames) - 1,
            direction=AnimationDirection.FORWARD.value,
        ))

    if data.frames:
        last_index = len(data.frames) - 1
        for tag in tags:
            if not (0 <= tag.from_frame <= tag.to_frame <= last_index):
                warn(
                    WarningKind.INVALID_TAG_RANGE, tag.name,
                    f"Invalid frame range ({tag.from_frame} -> {tag.to_frame}) given for "
                    f"animation '{tag.name}'. Ignoring."
                )
                continue

            name = sanitize_animation_name(tag.name)
            if not name:
                warn(
                    WarningKind.INVALID_TAG_NAME, tag.name,
                    f"Animation name '{tag.name}' is empty once commas are removed. Ignoring."
                )
                continue
            if animations.has_animation(name):
                warn(
                    WarningKind.DUPLICATE_ANIMATION, tag.name,
                    f"Duplicate animation name '{name}' (from tag '{tag.name}'). Ignoring."
                )
                continue

            direction = AnimationDirection.parse(tag.direction)
            if direction is None:
                warn(
                    WarningKind.UNRECOGNIZED_DIRECTION, tag.name,
                    f"Unrecognised animation direction '{tag.direction}' for animation "
                    f"'{tag.name}'. Defaulting to forward."
                )
                direction = AnimationDirection.FORWARD

            selected = data.frames[tag.from_frame:tag.to_frame + 1]
            first = data.frames[tag.from_frame]
            animations.add_animation(name, AnimationData(
                frames=[_frame_data(info) for info in selected],
                # Frames inside one tag share the untrimmed source size
                frame_size=(float(first.source_size.w), float(first.source_size.h)),
                direction=direction,
            ))

    if len(animations) == 0:
        raise NoAnimations("No valid animations found in the export")

    meta = data.meta
    sheet = SheetInfo(
        app=meta.app,
        version=meta.version,
        image=meta.image,
        size=(meta.size.w, meta.size.h),
        format=meta.format,
        scale=meta.scale,
    )
    return ImportResult(animations=animations.freeze(), sheet=sheet, warnings=warnings)


def sanitize_animation_name(name: str) -> str:
    """Strip commas, which cannot appear in a serialised list of animation names."""
    return name.replace(",", "")


def _frame_data(info: FrameInfo) -> FrameData:
    region = info.frame
    return FrameData(
        region=Rect(float(region.x), float(region.y), float(region.w), float(region.h)),
        offset=(float(info.sprite_source_size.x), float(info.sprite_source_size.y)),
        duration=info.duration / 1000.0,  # exporter writes milliseconds
        name=info.filename,
        source_size=(float(info.source_size.w), float(info.source_size.h)),
    )
