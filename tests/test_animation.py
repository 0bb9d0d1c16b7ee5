import math

import pytest

from photowall.controller.animation import AnimationEngine
from photowall.model.primitives import Vector3
from photowall.model.state import GalleryConfig, InputState
from photowall.model.tiles import Tile, TileAnimationParams


def _tile() -> Tile:
    return Tile(
        row=0,
        column=0,
        image_index=0,
        base_position=Vector3(-10.0, 5.0, 2.5),
        base_rotation=Vector3(0.1, 0.4, 0.0),
        animation=TileAnimationParams(
            parallax_factor=0.75,
            random_offset=Vector3(0.5, -0.25, 0.8),
            rotation_modifier=Vector3(0.05, -0.02, 0.08),
            phase_offset=1.2,
        ),
    )


def _engine(target_x: float, target_y: float) -> AnimationEngine:
    # Raw target equal to the smoothed one keeps smoothing at its fixed point
    state = InputState(mouse_x=target_x, mouse_y=target_y, target_x=target_x, target_y=target_y)
    return AnimationEngine(GalleryConfig(), state)


def test_smoothing_fixed_point():
    engine = _engine(0.3, -0.6)
    engine.smooth()
    assert (engine.input_state.target_x, engine.input_state.target_y) == (0.3, -0.6)


def test_smoothing_moves_fixed_fraction_per_call():
    engine = AnimationEngine(GalleryConfig(), InputState(mouse_x=1.0, mouse_y=-1.0))
    engine.smooth()
    assert engine.input_state.target_x == 0.05
    assert engine.input_state.target_y == -0.05
    engine.smooth()
    assert engine.input_state.target_x == pytest.approx(0.0975)


def test_look_at_stays_on_wall_surface():
    engine = _engine(0.5, 0.25)
    point = engine.look_at()
    assert point.x == 10.0
    assert point.y == -5.0
    assert point.z == 100.0 / 37.5


def test_idle_input_keeps_base_pose():
    engine = _engine(0.0, 0.0)
    tile = _tile()
    engine.update_tile(tile, time=3.7)
    assert tile.position == tile.base_position
    assert tile.rotation == tile.base_rotation


def test_tile_transform_is_reproducible():
    tx, ty, time = 0.4, -0.3, 2.0
    engine = _engine(tx, ty)
    tile = _tile()
    engine.update_tile(tile, time)

    distance = math.sqrt(tx * tx + ty * ty)
    oscillation = math.sin(time + 1.2) * distance * 0.1
    parallax_x = tx * 0.75 * 3 * 0.5
    parallax_y = ty * 0.75 * 3 * -0.25

    assert tile.position.x == -10.0 + parallax_x + oscillation * 0.5
    assert tile.position.y == 5.0 + parallax_y + oscillation * -0.25
    assert tile.position.z == 2.5 + oscillation * 0.8 * 0.75

    assert tile.rotation.x == 0.1 + ty * 0.05 * distance + oscillation * 0.05 * 0.2
    assert tile.rotation.y == 0.4 + tx * -0.02 * distance + oscillation * -0.02 * 0.2
    assert tile.rotation.z == 0.0 + tx * ty * 0.08 * 2 + oscillation * 0.08 * 0.3

    # Same inputs, same result
    first = (tile.position, tile.rotation)
    engine.update_tile(tile, time)
    assert (tile.position, tile.rotation) == first


def test_update_does_not_touch_base_pose():
    engine = _engine(0.9, 0.9)
    tile = _tile()
    engine.update_tile(tile, 1.0)
    assert tile.base_position == Vector3(-10.0, 5.0, 2.5)
    assert tile.base_rotation == Vector3(0.1, 0.4, 0.0)


def test_tick_smooths_then_updates_every_tile():
    engine = AnimationEngine(GalleryConfig(), InputState(mouse_x=1.0))
    tiles = [_tile(), _tile()]
    engine.set_tiles(tiles)

    look_at = engine.tick(0.5)

    assert engine.input_state.target_x == 0.05
    assert look_at.x == 0.05 * 20.0
    for tile in tiles:
        assert tile.position != tile.base_position


def test_look_at_range_is_read_live():
    engine = _engine(0.5, 0.0)
    engine.set_config(GalleryConfig(look_at_range=40.0))
    assert engine.look_at().x == 20.0
