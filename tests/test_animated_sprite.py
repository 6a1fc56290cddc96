"""
Tests for the Qt sprite adapter
"""

import pytest
from PIL import Image

from conftest import build_set
from core.data_structures import AnimationDirection
from core.errors import UnknownAnimation
from core.texture_atlas import TextureAtlas
from renderer.animated_sprite import AnimatedSprite
from renderer.sprite_renderer import CanvasSurface


@pytest.fixture
def sprite(qt_core_app, animation_set):
    node = AnimatedSprite()
    node.set_animation_set(animation_set)
    node.set_atlas(TextureAtlas.from_image(Image.new("RGBA", (32, 8), (0, 255, 0, 255))))
    return node


def test_signals_follow_player_events(sprite):
    frames, finished, states = [], [], []
    sprite.frame_changed.connect(frames.append)
    sprite.animation_finished.connect(finished.append)
    sprite.playback_state_changed.connect(states.append)

    sprite.play("walk")
    sprite.advance(5.0)

    assert frames == [1, 2, 3]
    assert finished == ["walk"]
    assert states == [True, False]


def test_stop_emits_state_change_once(sprite):
    states = []
    sprite.playback_state_changed.connect(states.append)

    sprite.play("walk")
    sprite.play()
    sprite.stop()
    sprite.stop()

    assert states == [True, False]


def test_unknown_animation_raises_at_call_site(sprite):
    with pytest.raises(UnknownAnimation):
        sprite.play("missing")
    assert not sprite.player.is_playing()


def test_configuration_warning(qt_core_app, animation_set):
    node = AnimatedSprite()
    assert "sprite sheet" in node.configuration_warning()

    node.set_atlas(TextureAtlas.from_image(Image.new("RGBA", (8, 8))))
    assert "animation set" in node.configuration_warning()

    node.set_animation_set(animation_set)
    assert node.configuration_warning() == ""


def test_draw_calls_frame_drawn(sprite):
    drawn = []
    sprite.player.frame_drawn_callbacks.append(lambda: drawn.append(True))
    surface = CanvasSurface(8, 8, origin=(4.0, 4.0))

    assert sprite.draw(surface)
    assert drawn == [True]
    assert surface.to_image().getpixel((4, 4)) == (0, 255, 0, 255)


def test_update_animation_uses_wall_clock(sprite):
    clock = iter([10.0, 10.3])
    sprite.clock = lambda: next(clock)
    sprite.play("walk")

    sprite.update_animation()
    assert sprite.player.current_frame() == 0
    sprite.update_animation()
    assert sprite.player.current_frame() == 1


def test_update_animation_respects_max_delta(sprite):
    clock = iter([0.0, 5.0])
    sprite.clock = lambda: next(clock)
    sprite.max_frame_delta = 0.25
    sprite.play("walk")

    sprite.update_animation()
    sprite.update_animation()
    assert sprite.player.current_frame() == 1


def test_ping_pong_through_adapter(qt_core_app):
    node = AnimatedSprite()
    node.set_animation_set(build_set(bounce=([0.1, 0.1, 0.1], AnimationDirection.PING_PONG)))
    node.player.loop = True
    frames = []
    node.frame_changed.connect(frames.append)
    node.play("bounce")

    for _ in range(6):
        node.advance(0.1)

    assert frames == [1, 2, 1, 0, 1, 2]
