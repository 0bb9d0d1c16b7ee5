"""
Gallery State (Data Model)
==========================
This module defines the configuration and the live input state of the wall.

Why is this file needed?
------------------------
1. Configuration: GalleryConfig is the parameter set a wall is built from.
   It is immutable; every change produces a new, validated instance and a
   rebuild of the tiles.
2. State Management: InputState holds the raw and smoothed pointer/gyro target
   in one place. The animation engine owns it and the input handlers write to it.

Classes:
    GalleryConfig: Frozen wall parameters.
    HeaderTransform: Decorative header tilt derived from the raw input.
    InputState: Raw target, smoothed target and drag session.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class ParameterRange:
    """Allowed interval of a tunable parameter (used by the tuning panel)."""
    minimum: float
    maximum: float
    step: float = 0.1


@dataclass(frozen=True)
class GalleryConfig:
    rows: int = 7
    columns: int = 7
    curvature: float = 5.0
    spacing: float = 10.0
    image_width: float = 7.0
    image_height: float = 4.5
    depth: float = 7.5
    elevation: float = 0.0
    look_at_range: float = 20.0
    vertical_curvature: float = 0.5

    def __post_init__(self) -> None:
        if self.rows < 1 or self.columns < 1:
            raise ValueError(f"Grid must have at least one row and one column, got {self.rows}x{self.columns}.")
        for name in ("curvature", "spacing", "image_width", "image_height", "depth"):
            if getattr(self, name) <= 0:
                raise ValueError(f"'{name}' must be positive, got {getattr(self, name)}.")
        for name in ("look_at_range", "vertical_curvature"):
            if getattr(self, name) < 0:
                raise ValueError(f"'{name}' must not be negative, got {getattr(self, name)}.")

    @property
    def total_cells(self) -> int:
        return self.rows * self.columns

    @property
    def curvature_divisor(self) -> float:
        """Denominator of the horizontal parabola z = x^2 / (depth * curvature)."""
        return self.depth * self.curvature

    @property
    def half_height(self) -> float:
        """Half of the wall height, used to normalize y to [-1, 1]."""
        return (self.rows * self.spacing) / 2

    @property
    def tile_size(self) -> float:
        # Tiles are square: the width is used for both edges
        return self.image_width

    def with_changes(self, **changes: Any) -> GalleryConfig:
        """Return a validated copy with the given fields replaced."""
        unknown = set(changes) - {f.name for f in fields(self)}
        if unknown:
            raise ValueError(f"Unknown gallery parameter(s): {', '.join(sorted(unknown))}.")
        return replace(self, **changes)

    def changed_fields(self, other: GalleryConfig) -> set[str]:
        return {f.name for f in fields(self) if getattr(self, f.name) != getattr(other, f.name)}

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


DEFAULT_CONFIG = GalleryConfig()

# Parameters that are read live by the animation and do not need new tiles
LIVE_PARAMETERS: frozenset[str] = frozenset({"look_at_range"})

PARAMETER_RANGES: Dict[str, ParameterRange] = {
    "rows": ParameterRange(1, 8, 1),
    "columns": ParameterRange(1, 10, 1),
    "image_width": ParameterRange(1.0, 10.0),
    "image_height": ParameterRange(1.0, 10.0),
    "spacing": ParameterRange(2.0, 10.0),
    "curvature": ParameterRange(0.1, 10.0),
    "vertical_curvature": ParameterRange(0.0, 2.0, 0.05),
    "depth": ParameterRange(5.0, 50.0, 0.5),
    "elevation": ParameterRange(-10.0, 10.0),
    "look_at_range": ParameterRange(5.0, 50.0, 0.5),
}


@dataclass
class HeaderTransform:
    """CSS-like tilt of the title overlay: rotations in degrees, translation in pixels."""
    rotation_x: float = 0.0
    rotation_y: float = 0.0
    translate_z: float = 0.0

    TILT_DEGREES = 30.0
    LIFT_PIXELS = 50.0

    def follow(self, mouse_x: float, mouse_y: float) -> None:
        self.rotation_x = -mouse_y * self.TILT_DEGREES
        self.rotation_y = mouse_x * self.TILT_DEGREES
        self.translate_z = abs(mouse_x * mouse_y) * self.LIFT_PIXELS


@dataclass
class InputState:
    """
    Raw and smoothed input target, both in [-1, 1] per axis.
    Pass this instance to the input handlers and the animation engine.
    """
    mouse_x: float = 0.0
    mouse_y: float = 0.0
    target_x: float = 0.0
    target_y: float = 0.0

    pointer_down: bool = False
    drag_start_client_x: float = 0.0
    drag_start_client_y: float = 0.0
    drag_start_target_x: float = 0.0
    drag_start_target_y: float = 0.0

    gyro_enabled: bool = False
    header: HeaderTransform = field(default_factory=HeaderTransform)

    def set_raw_target(self, x: float, y: float) -> None:
        self.mouse_x = x
        self.mouse_y = y
        self.header.follow(x, y)

