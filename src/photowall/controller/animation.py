"""
Animation Engine
================
Advances the smoothed input once per frame and recomputes every tile transform
from its base pose, its random animation parameters and the elapsed time.

The smoothing is a fixed fraction per call, not scaled by the frame time: the
easing speed therefore follows the frame rate, and the timer driving `tick`
targets ~60 Hz.
"""
from __future__ import annotations

import math
from typing import Optional, Sequence

from photowall.model.curvature import surface_depth
from photowall.model.primitives import Vector3
from photowall.model.state import GalleryConfig, InputState, DEFAULT_CONFIG
from photowall.model.tiles import Tile

SMOOTHING = 0.05
PARALLAX_STRENGTH = 3
OSCILLATION_AMPLITUDE = 0.1
OSCILLATION_TILT_XY = 0.2
OSCILLATION_TILT_Z = 0.3
ROLL_COUPLING = 2


class AnimationEngine:
    """
    Owns the live tiles and the input state they react to.
    """

    def __init__(self, config: GalleryConfig = DEFAULT_CONFIG, input_state: Optional[InputState] = None) -> None:
        self.config = config
        self.input_state = input_state if input_state is not None else InputState()
        self.tiles: list[Tile] = []

    def set_config(self, config: GalleryConfig) -> None:
        self.config = config

    def set_tiles(self, tiles: Sequence[Tile]) -> None:
        """Replace the whole tile set."""
        self.tiles = list(tiles)

    def smooth(self) -> None:
        """Move the smoothed target a fixed fraction towards the raw target."""
        s = self.input_state
        s.target_x += (s.mouse_x - s.target_x) * SMOOTHING
        s.target_y += (s.mouse_y - s.target_y) * SMOOTHING

    def look_at(self) -> Vector3:
        """Camera target on the wall surface, driven by the smoothed input (y inverted)."""
        s = self.input_state
        x = s.target_x * self.config.look_at_range
        y = -s.target_y * self.config.look_at_range
        return Vector3(x, y, surface_depth(x, self.config))

    def update_tile(self, tile: Tile, time: float) -> None:
        """
        Rewrite the live position and rotation of one tile.

        Args:
            tile: The tile to update.
            time: Elapsed time in seconds.
        """
        tx = self.input_state.target_x
        ty = self.input_state.target_y
        base_position = tile.base_position
        base_rotation = tile.base_rotation
        a = tile.animation
        offset = a.random_offset
        modifier = a.rotation_modifier

        mouse_distance = math.sqrt(tx * tx + ty * ty)
        parallax_x = tx * a.parallax_factor * PARALLAX_STRENGTH * offset.x
        parallax_y = ty * a.parallax_factor * PARALLAX_STRENGTH * offset.y
        oscillation = math.sin(time + a.phase_offset) * mouse_distance * OSCILLATION_AMPLITUDE

        tile.position = Vector3(
            base_position.x + parallax_x + oscillation * offset.x,
            base_position.y + parallax_y + oscillation * offset.y,
            base_position.z + oscillation * offset.z * a.parallax_factor,
        )

        tile.rotation = Vector3(
            base_rotation.x
            + ty * modifier.x * mouse_distance
            + oscillation * modifier.x * OSCILLATION_TILT_XY,
            base_rotation.y
            + tx * modifier.y * mouse_distance
            + oscillation * modifier.y * OSCILLATION_TILT_XY,
            base_rotation.z
            + tx * ty * modifier.z * ROLL_COUPLING
            + oscillation * modifier.z * OSCILLATION_TILT_Z,
        )

    def tick(self, time: float) -> Vector3:
        """
        Advance one frame.

        Returns:
            The camera look-at point for this frame.
        """
        self.smooth()
        target = self.look_at()
        for tile in self.tiles:
            self.update_tile(tile, time)
        return target
