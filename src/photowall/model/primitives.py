"""
Geometric Primitives for the wall and the renderer.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING
import numpy as np
import math

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass
class Vector3:
    """
    A vector in 3D space. Used for positions, Euler rotations (radians)
    and per-axis animation parameters.
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector3:
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.x**2 + self.y**2 + self.z**2)

    def copy(self) -> Vector3:
        return Vector3(self.x, self.y, self.z)

    def as_tuple(self) -> tuple[float, float, float]:
        return self.x, self.y, self.z

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, self.z])


def rotation_x(angle: float) -> npt.NDArray[np.float64]:
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[1.0, 0.0, 0.0],
                     [0.0, c, -s],
                     [0.0, s, c]])


def rotation_y(angle: float) -> npt.NDArray[np.float64]:
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, 0.0, s],
                     [0.0, 1.0, 0.0],
                     [-s, 0.0, c]])


def rotation_z(angle: float) -> npt.NDArray[np.float64]:
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, -s, 0.0],
                     [s, c, 0.0],
                     [0.0, 0.0, 1.0]])


def euler_xyz_matrix(rotation: Vector3) -> npt.NDArray[np.float64]:
    """
    Rotation matrix for intrinsic X, then Y, then Z Euler angles (R = Rx @ Ry @ Rz).

    Args:
        rotation: Euler angles in radians.

    Returns:
        A (3, 3) rotation matrix.
    """
    return rotation_x(rotation.x) @ rotation_y(rotation.y) @ rotation_z(rotation.z)


def transform_matrix(position: Vector3, rotation: Vector3, scale: float = 1.0) -> npt.NDArray[np.float64]:
    """
    Compose a homogeneous (4, 4) transform: uniform scale, Euler XYZ rotation, then translation.
    """
    m = np.eye(4)
    m[:3, :3] = euler_xyz_matrix(rotation) * scale
    m[:3, 3] = position.to_array()
    return m
