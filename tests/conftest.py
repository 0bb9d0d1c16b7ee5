from __future__ import annotations

from typing import Any, Callable, Optional

import numpy as np
import pytest

from photowall.model.images import ImagePool, ImageRef
from photowall.model.primitives import Vector3
from photowall.model.tiles import Tile


class FakeBackend:
    """Records every call of the render backend contract."""

    def __init__(self) -> None:
        self.tiles: dict[int, tuple[Tile, float]] = {}
        self.removed: list[int] = []
        self.textures: dict[int, Any] = {}
        self.transforms: dict[int, tuple[Vector3, Vector3]] = {}
        self.look_at: Optional[Vector3] = None
        self.render_count = 0
        self._next_handle = 0

    def add_tile(self, tile: Tile, size: float) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self.tiles[handle] = (tile, size)
        return handle

    def remove_tile(self, handle: int) -> None:
        del self.tiles[handle]
        self.removed.append(handle)

    def set_tile_texture(self, handle: int, texture: Any) -> None:
        self.textures[handle] = texture

    def set_tile_transform(self, handle: int, position: Vector3, rotation: Vector3) -> None:
        self.transforms[handle] = (position, rotation)

    def set_look_at(self, point: Vector3) -> None:
        self.look_at = point

    def render(self) -> None:
        self.render_count += 1


class FakeLoader:
    """Keeps the callbacks so tests decide when a texture 'arrives'."""

    def __init__(self) -> None:
        self.requests: list[tuple[ImageRef, Callable[[Any], None]]] = []

    def load(self, image: ImageRef, on_loaded: Callable[[Any], None]) -> None:
        self.requests.append((image, on_loaded))


class FakeOrientationSource:
    def __init__(self, available: bool = True, requires_permission: bool = False) -> None:
        self.available = available
        self.requires_permission = requires_permission
        self.handlers: list[Callable] = []
        self.permission_callbacks: list[Callable[[bool], None]] = []

    def is_available(self) -> bool:
        return self.available

    def request_permission(self, on_result: Callable[[bool], None]) -> None:
        self.permission_callbacks.append(on_result)

    def subscribe(self, handler: Callable) -> None:
        self.handlers.append(handler)

    def emit(self, gamma, beta) -> None:
        for handler in self.handlers:
            handler(gamma, beta)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def loader() -> FakeLoader:
    return FakeLoader()


@pytest.fixture
def images() -> ImagePool:
    return ImagePool(ImageRef(f"img/{i}.jpg") for i in range(1, 13))


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)
