"""
Wall Curvature
==============
Maps a (row, column) grid cell onto the curved wall.

The wall bends horizontally along the parabola z = x^2 / (depth * curvature):
a larger curvature value flattens the wall, a larger depth widens its radius.
A second, signed-square bow along y (|n| * n) keeps the top and bottom of the
wall bending in opposite directions.

Tiles yaw to follow the tangent of the horizontal parabola, while the pitch is a
plain linear blend of the normalized row height.
"""
from __future__ import annotations

import math
from dataclasses import dataclass

from photowall.model.primitives import Vector3
from photowall.model.state import GalleryConfig

VERTICAL_BOW_SCALE = 5.0


@dataclass(frozen=True)
class Pose:
    """Base placement of a tile on the wall."""
    x: float
    y: float
    z: float
    rotation_x: float
    rotation_y: float

    @property
    def position(self) -> Vector3:
        return Vector3(self.x, self.y, self.z)

    @property
    def rotation(self) -> Vector3:
        return Vector3(self.rotation_x, self.rotation_y, 0.0)


def surface_depth(x: float, config: GalleryConfig) -> float:
    """Depth of the horizontal parabola at x."""
    return (x * x) / config.curvature_divisor


def orientation(x: float, y: float, config: GalleryConfig) -> tuple[float, float]:
    """
    Tile orientation at a wall point.

    Args:
        x: Horizontal position on the wall.
        y: Vertical position on the wall.
        config: Gallery parameters.

    Returns:
        (rotation_x, rotation_y) in radians.
    """
    a = 1 / config.curvature_divisor
    slope_y = -2 * a * x
    rotation_y = math.atan(slope_y)

    normalized_y = y / config.half_height
    rotation_x = normalized_y * config.vertical_curvature

    return rotation_x, rotation_y


def position_and_orientation(row: int, col: int, config: GalleryConfig) -> Pose:
    """Compute the base pose of the tile in the given grid cell."""
    x = (col - config.columns / 2) * config.spacing
    y = (row - config.rows / 2) * config.spacing

    z = surface_depth(x, config)

    normalized_y = y / config.half_height
    z += abs(normalized_y) * normalized_y * config.vertical_curvature * VERTICAL_BOW_SCALE

    y += config.elevation

    # Pitch is taken from the elevated y
    rotation_x, rotation_y = orientation(x, y, config)

    return Pose(x=x, y=y, z=z, rotation_x=rotation_x, rotation_y=rotation_y)
