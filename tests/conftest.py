import json
import sys
from pathlib import Path

import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.data_structures import AnimationData, AnimationDirection, AnimationSet, FrameData, Rect


def frame_body(index, duration=100, width=16, height=16, name=None):
    """One exported frame laid out left to right on the sheet."""
    body = {
        "frame": {"x": index * width, "y": 0, "w": width, "h": height},
        "rotated": False,
        "trimmed": False,
        "spriteSourceSize": {"x": 0, "y": 0, "w": width, "h": height},
        "sourceSize": {"w": width, "h": height},
        "duration": duration,
    }
    if name is not None:
        body["filename"] = name
    return body


def make_document(durations=(100, 100, 100), tags=None, as_map=False, width=16, height=16):
    names = [f"sprite {i}.aseprite" for i in range(len(durations))]
    if as_map:
        frames = {
            name: frame_body(i, d, width, height)
            for i, (name, d) in enumerate(zip(names, durations))
        }
    else:
        frames = [
            frame_body(i, d, width, height, name)
            for i, (name, d) in enumerate(zip(names, durations))
        ]
    meta = {
        "app": "https://www.aseprite.org/",
        "version": "1.3.2",
        "image": "sprite.png",
        "format": "RGBA8888",
        "size": {"w": width * max(1, len(durations)), "h": height},
        "scale": "1",
    }
    if tags is not None:
        meta["frameTags"] = tags
    return {"frames": frames, "meta": meta}


def tag(name, start, end, direction="forward"):
    return {"name": name, "from": start, "to": end, "direction": direction}


@pytest.fixture
def document():
    return make_document(tags=[tag("walk", 0, 2)])


@pytest.fixture
def document_text(document):
    return json.dumps(document)


def build_set(**animations):
    """name=(durations, direction) -> frozen AnimationSet"""
    result = AnimationSet()
    for name, (durations, direction) in animations.items():
        frames = [
            FrameData(region=Rect(i * 8.0, 0.0, 8.0, 8.0), duration=d)
            for i, d in enumerate(durations)
        ]
        result.add_animation(name, AnimationData(frames=frames, frame_size=(8.0, 8.0), direction=direction))
    return result.freeze()


@pytest.fixture
def animation_set():
    return build_set(
        walk=([0.25, 0.25, 0.25, 0.25], AnimationDirection.FORWARD),
        back=([0.25, 0.25, 0.25], AnimationDirection.REVERSE),
        bounce=([0.25, 0.25, 0.25, 0.25], AnimationDirection.PING_PONG),
        bounce_back=([0.25, 0.25, 0.25, 0.25], AnimationDirection.PING_PONG_REVERSE),
    )


@pytest.fixture(scope="session")
def qt_core_app():
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance() or QCoreApplication([])
    yield app
