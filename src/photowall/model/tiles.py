"""
Wall Tiles
Creates one tile per grid cell with its base pose and fixed random animation parameters.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from typing import Optional

import numpy as np

from photowall.model.assignment import AssignmentGrid
from photowall.model.curvature import position_and_orientation
from photowall.model.primitives import Vector3
from photowall.model.state import GalleryConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TileAnimationParams:
    """Per-tile randomness, generated once when the tile is created."""
    parallax_factor: float  # [0.5, 1.0]
    random_offset: Vector3  # each axis in [-1, 1]
    rotation_modifier: Vector3  # x, y in [-0.075, 0.075], z in [-0.1, 0.1]
    phase_offset: float  # [0, 2*pi)

    @classmethod
    def random(cls, rng: np.random.Generator) -> TileAnimationParams:
        """Draw a parameter set from the given generator (draw order is fixed)."""
        parallax_factor = rng.random() * 0.5 + 0.5
        random_offset = Vector3(
            rng.random() * 2 - 1,
            rng.random() * 2 - 1,
            rng.random() * 2 - 1,
        )
        rotation_modifier = Vector3(
            rng.random() * 0.15 - 0.075,
            rng.random() * 0.15 - 0.075,
            rng.random() * 0.2 - 0.1,
        )
        phase_offset = rng.random() * math.pi * 2
        return cls(
            parallax_factor=float(parallax_factor),
            random_offset=random_offset,
            rotation_modifier=rotation_modifier,
            phase_offset=float(phase_offset),
        )


@dataclass
class Tile:
    row: int
    column: int
    image_index: int
    base_position: Vector3
    base_rotation: Vector3
    animation: TileAnimationParams

    # Live transform, rewritten every frame
    position: Vector3 = field(init=False)
    rotation: Vector3 = field(init=False)

    def __post_init__(self) -> None:
        self.position = self.base_position.copy()
        self.rotation = self.base_rotation.copy()


def create_tile(row: int, col: int, image_index: int, config: GalleryConfig, rng: np.random.Generator) -> Tile:
    pose = position_and_orientation(row, col, config)
    return Tile(
        row=row,
        column=col,
        image_index=image_index,
        base_position=pose.position,
        base_rotation=pose.rotation,
        animation=TileAnimationParams.random(rng),
    )


def build_tiles(
    assignment: AssignmentGrid,
    config: GalleryConfig,
    rng: Optional[np.random.Generator] = None,
) -> list[Tile]:
    """
    Create the tiles of a wall in row-major order.

    Args:
        assignment: Image index per grid cell (rows x columns).
        config: Gallery parameters.
        rng: Source of the per-tile randomness. A fresh unseeded generator is used
            when omitted.

    Returns:
        List of rows * columns tiles.
    """
    if rng is None:
        rng = np.random.default_rng()

    tiles = [
        create_tile(row, col, assignment[row][col], config, rng)
        for row in range(config.rows)
        for col in range(config.columns)
    ]
    logger.debug(f"Created {len(tiles)} tiles.")
    return tiles
