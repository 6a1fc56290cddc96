"""
Tests for strict decoding of the exported JSON document
"""

import json
from pathlib import Path

import pytest

from conftest import make_document, tag
from core.aseprite_importer import parse_aseprite_json
from core.aseprite_json import decode_document
from core.data_structures import AnimationDirection
from core.errors import SchemaViolation

DATA_DIR = Path(__file__).parent / "data"


def test_array_frames_decode_in_order():
    data = decode_document(json.dumps(make_document(durations=(100, 200, 300))))

    assert [f.duration for f in data.frames] == [100, 200, 300]
    assert [f.frame.x for f in data.frames] == [0, 16, 32]
    assert data.frames[0].filename == "sprite 0.aseprite"
    assert data.meta.app == "https://www.aseprite.org/"
    assert data.meta.size.w == 48


def test_map_frames_follow_key_order_and_take_key_as_name():
    doc = make_document(durations=(100, 200, 300), as_map=True)
    data = decode_document(json.dumps(doc))

    assert [f.duration for f in data.frames] == [100, 200, 300]
    assert [f.filename for f in data.frames] == list(doc["frames"].keys())


def test_accepts_parsed_mapping():
    data = decode_document(make_document())
    assert len(data.frames) == 3


def test_optional_meta_fields_default():
    doc = make_document()
    del doc["meta"]["format"]
    del doc["meta"]["scale"]
    data = decode_document(doc)

    assert data.meta.format is None
    assert data.meta.scale == 1.0
    assert data.meta.frame_tags == []


def test_null_frame_tags_treated_as_absent():
    doc = make_document()
    doc["meta"]["frameTags"] = None
    assert decode_document(doc).meta.frame_tags == []


def test_frame_tags_decoded():
    doc = make_document(tags=[tag("walk", 0, 1, "pingpong")])
    tags = decode_document(doc).meta.frame_tags

    assert len(tags) == 1
    assert (tags[0].name, tags[0].from_frame, tags[0].to_frame, tags[0].direction) == ("walk", 0, 1, "pingpong")


@pytest.mark.parametrize("field", ["frame", "rotated", "trimmed", "spriteSourceSize", "sourceSize", "duration"])
def test_missing_frame_field_is_fatal(field):
    doc = make_document()
    del doc["frames"][1][field]

    with pytest.raises(SchemaViolation) as exc:
        decode_document(doc)
    assert exc.value.path == f"frames[1].{field}"


@pytest.mark.parametrize("field", ["app", "version", "image", "size"])
def test_missing_meta_field_is_fatal(field):
    doc = make_document()
    del doc["meta"][field]

    with pytest.raises(SchemaViolation) as exc:
        decode_document(doc)
    assert exc.value.path == f"meta.{field}"


def test_missing_tag_field_names_the_tag():
    doc = make_document(tags=[tag("walk", 0, 2)])
    del doc["meta"]["frameTags"][0]["direction"]

    with pytest.raises(SchemaViolation) as exc:
        decode_document(doc)
    assert exc.value.path == "meta.frameTags[0].direction"


def test_missing_nested_rect_field_in_map_form():
    doc = make_document(as_map=True)
    first = next(iter(doc["frames"]))
    del doc["frames"][first]["frame"]["w"]

    with pytest.raises(SchemaViolation) as exc:
        decode_document(doc)
    assert exc.value.path == f"frames.{first}.frame.w"


def test_missing_top_level_sections():
    with pytest.raises(SchemaViolation):
        decode_document({"meta": make_document()["meta"]})
    with pytest.raises(SchemaViolation):
        decode_document({"frames": []})


def test_frames_must_be_array_or_object():
    doc = make_document()
    doc["frames"] = "nope"
    with pytest.raises(SchemaViolation, match="array or an object"):
        decode_document(doc)


def test_wrong_types_rejected():
    doc = make_document()
    doc["frames"][0]["rotated"] = 0
    with pytest.raises(SchemaViolation, match="boolean"):
        decode_document(doc)

    doc = make_document()
    doc["frames"][0]["duration"] = True
    with pytest.raises(SchemaViolation, match="integer"):
        decode_document(doc)

    doc = make_document()
    doc["frames"][0]["duration"] = 12.5
    with pytest.raises(SchemaViolation, match="integer"):
        decode_document(doc)


def test_integral_floats_accepted():
    doc = make_document()
    doc["frames"][0]["duration"] = 100.0
    assert decode_document(doc).frames[0].duration == 100


def test_negative_duration_rejected():
    doc = make_document()
    doc["frames"][2]["duration"] = -1
    with pytest.raises(SchemaViolation) as exc:
        decode_document(doc)
    assert exc.value.path == "frames[2].duration"


def test_empty_region_rejected():
    doc = make_document()
    doc["frames"][0]["frame"]["w"] = 0
    with pytest.raises(SchemaViolation, match="positive"):
        decode_document(doc)


def test_invalid_json_text():
    with pytest.raises(SchemaViolation, match="not valid JSON"):
        decode_document("{ not json")


def test_null_required_field():
    doc = make_document()
    doc["meta"]["image"] = None
    with pytest.raises(SchemaViolation, match="null"):
        decode_document(doc)


@pytest.mark.parametrize("scale, expected", [("1", 1.0), ("0.5", 0.5), (2, 2.0), (1.5, 1.5)])
def test_scale_accepts_numbers_and_numeric_strings(scale, expected):
    doc = make_document()
    doc["meta"]["scale"] = scale
    assert decode_document(json.dumps(doc)).meta.scale == expected


@pytest.mark.parametrize("scale", ["big", "", True, "nan", "inf", [1]])
def test_scale_rejects_non_numbers(scale):
    doc = make_document()
    doc["meta"]["scale"] = scale
    with pytest.raises(SchemaViolation) as exc:
        decode_document(doc)
    assert exc.value.path == "meta.scale"


def test_cli_export_decodes():
    text = (DATA_DIR / "hero.json").read_text(encoding="utf-8")
    data = decode_document(text)

    assert [f.filename for f in data.frames] == [f"hero {i}.aseprite" for i in range(5)]
    assert [f.duration for f in data.frames] == [100, 100, 80, 80, 120]
    assert data.frames[3].trimmed
    assert (data.frames[3].sprite_source_size.x, data.frames[3].sprite_source_size.y) == (1, 1)
    assert data.meta.scale == 1.0
    assert data.meta.version == "1.3.7-x64"
    assert [t.direction for t in data.meta.frame_tags] == ["forward", "pingpong_reverse"]


def test_cli_export_imports():
    text = (DATA_DIR / "hero.json").read_text(encoding="utf-8")
    result = parse_aseprite_json(text, verbose=False)

    assert result.warnings == []
    assert result.animations.names == ["idle", "spin"]
    spin = result.animations["spin"]
    assert spin.direction is AnimationDirection.PING_PONG_REVERSE
    assert spin.start_frame == 2
    assert [f.duration for f in spin.frames] == pytest.approx([0.08, 0.08, 0.12])
    assert spin.frames[1].offset == (1.0, 1.0)
    assert result.sheet.scale == 1.0
