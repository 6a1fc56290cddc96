"""
Aseprite JSON schema
Strict decoding of an exported sprite sheet document into plain schema objects

Every field is required unless it is listed as optional below. A missing or
mistyped field fails the whole document with a SchemaViolation that names the
offending field path.
"""

import json
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .errors import SchemaViolation

_MISSING = object()


@dataclass
class SizeInfo:
    w: int
    h: int


@dataclass
class RectInfo:
    x: int
    y: int
    w: int
    h: int


@dataclass
class FrameInfo:
    """One entry of the ``frames`` collection"""
    frame: RectInfo
    rotated: bool
    trimmed: bool
    sprite_source_size: RectInfo
    source_size: SizeInfo
    duration: int  # milliseconds
    filename: Optional[str] = None


@dataclass
class FrameTagInfo:
    name: str
    from_frame: int
    to_frame: int
    direction: str


@dataclass
class MetaHeader:
    app: str
    version: str
    image: str
    size: SizeInfo
    format: Optional[str] = None
    scale: float = 1.0
    frame_tags: List[FrameTagInfo] = field(default_factory=list)


@dataclass
class AseJsonData:
    frames: List[FrameInfo]
    meta: MetaHeader


def decode_document(source: Union[str, bytes, Mapping[str, Any]]) -> AseJsonData:
    """
    Decode an exported document

    Args:
        source: Raw JSON text, or an already parsed mapping

    Returns:
        AseJsonData with the frames normalised to one ordered list

    Raises:
        SchemaViolation: The text is not JSON or a required field is missing/malformed
    """
    if isinstance(source, (str, bytes, bytearray)):
        try:
            document = json.loads(source)
        except ValueError as e:
            raise SchemaViolation("", f"Document is not valid JSON: {e}") from e
    else:
        document = source

    root = _expect_object(document, "")
    frames = [
        _decode_frame(body, path, key)
        for key, body, path in _frame_entries(_require(root, "frames", ""), "frames")
    ]
    meta = _decode_meta(_require(root, "meta", ""), "meta")
    return AseJsonData(frames=frames, meta=meta)


def _frame_entries(value: Any, path: str) -> List[Tuple[Optional[str], Any, str]]:
    """
    Flatten both frame encodings into (key, body, path) triples.

    The exporter writes frames either as an array (keys are None) or as an
    object keyed by frame name, in which case the object order is the frame order.
    """
    if isinstance(value, list):
        return [(None, body, f"{path}[{i}]") for i, body in enumerate(value)]
    if isinstance(value, dict):
        return [(key, body, f"{path}.{key}") for key, body in value.items()]
    raise SchemaViolation(path, f"expected an array or an object, got {_type_name(value)}")


def _decode_frame(value: Any, path: str, key: Optional[str]) -> FrameInfo:
    body = _expect_object(value, path)
    filename = _optional(body, "filename", path, _as_str)
    frame = _decode_rect(_require(body, "frame", path), _join(path, "frame"))
    if frame.w <= 0 or frame.h <= 0:
        raise SchemaViolation(_join(path, "frame"), f"size must be positive, got {frame.w}x{frame.h}")
    duration = _as_int(_require(body, "duration", path), _join(path, "duration"))
    if duration < 0:
        raise SchemaViolation(_join(path, "duration"), f"must be >= 0, got {duration}")
    return FrameInfo(
        frame=frame,
        rotated=_as_bool(_require(body, "rotated", path), _join(path, "rotated")),
        trimmed=_as_bool(_require(body, "trimmed", path), _join(path, "trimmed")),
        sprite_source_size=_decode_rect(
            _require(body, "spriteSourceSize", path), _join(path, "spriteSourceSize")
        ),
        source_size=_decode_size(_require(body, "sourceSize", path), _join(path, "sourceSize")),
        duration=duration,
        filename=filename if filename is not None else key,
    )


def _decode_meta(value: Any, path: str) -> MetaHeader:
    body = _expect_object(value, path)
    scale = _optional(body, "scale", path, _as_float)
    tags = _optional(body, "frameTags", path, _as_list)
    frame_tags = []
    for i, tag in enumerate(tags or []):
        frame_tags.append(_decode_tag(tag, f"{path}.frameTags[{i}]"))
    return MetaHeader(
        app=_as_str(_require(body, "app", path), _join(path, "app")),
        version=_as_str(_require(body, "version", path), _join(path, "version")),
        image=_as_str(_require(body, "image", path), _join(path, "image")),
        size=_decode_size(_require(body, "size", path), _join(path, "size")),
        format=_optional(body, "format", path, _as_str),
        scale=1.0 if scale is None else scale,
        frame_tags=frame_tags,
    )


def _decode_tag(value: Any, path: str) -> FrameTagInfo:
    body = _expect_object(value, path)
    return FrameTagInfo(
        name=_as_str(_require(body, "name", path), _join(path, "name")),
        from_frame=_as_int(_require(body, "from", path), _join(path, "from")),
        to_frame=_as_int(_require(body, "to", path), _join(path, "to")),
        direction=_as_str(_require(body, "direction", path), _join(path, "direction")),
    )


def _decode_size(value: Any, path: str) -> SizeInfo:
    body = _expect_object(value, path)
    return SizeInfo(
        w=_as_int(_require(body, "w", path), _join(path, "w")),
        h=_as_int(_require(body, "h", path), _join(path, "h")),
    )


def _decode_rect(value: Any, path: str) -> RectInfo:
    body = _expect_object(value, path)
    return RectInfo(
        x=_as_int(_require(body, "x", path), _join(path, "x")),
        y=_as_int(_require(body, "y", path), _join(path, "y")),
        w=_as_int(_require(body, "w", path), _join(path, "w")),
        h=_as_int(_require(body, "h", path), _join(path, "h")),
    )


# ---------------------------------------------------------------------- #
# Field helpers
# ---------------------------------------------------------------------- #
def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _require(body: Dict[str, Any], key: str, path: str) -> Any:
    value = body.get(key, _MISSING)
    if value is _MISSING:
        raise SchemaViolation(_join(path, key), "required field is missing")
    if value is None:
        raise SchemaViolation(_join(path, key), "required field is null")
    return value


def _optional(body: Dict[str, Any], key: str, path: str, convert):
    value = body.get(key)
    if value is None:
        return None
    return convert(value, _join(path, key))


def _expect_object(value: Any, path: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise SchemaViolation(path, f"expected an object, got {_type_name(value)}")
    return value


def _as_list(value: Any, path: str) -> List[Any]:
    if not isinstance(value, list):
        raise SchemaViolation(path, f"expected an array, got {_type_name(value)}")
    return value


def _as_str(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise SchemaViolation(path, f"expected a string, got {_type_name(value)}")
    return value


def _as_bool(value: Any, path: str) -> bool:
    if not isinstance(value, bool):
        raise SchemaViolation(path, f"expected a boolean, got {_type_name(value)}")
    return value


def _as_int(value: Any, path: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SchemaViolation(path, f"expected an integer, got {_type_name(value)}")
    if isinstance(value, float):
        if not value.is_integer():
            raise SchemaViolation(path, f"expected an integer, got {value}")
        value = int(value)
    return value


def _as_float(value: Any, path: str) -> float:
    # The exporter writes meta.scale as a string ("1", "0.5")
    if isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            raise SchemaViolation(path, f"expected a number, got string '{value}'") from None
    elif isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SchemaViolation(path, f"expected a number, got {_type_name(value)}")
    else:
        number = float(value)
    if not math.isfinite(number):
        raise SchemaViolation(path, f"expected a finite number, got {value}")
    return number
