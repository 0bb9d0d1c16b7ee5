"""
Gallery Controller
==================
Glue between the wall model, the animation engine and the rendering backend.

Why is this file needed?
------------------------
1. Rebuild: It re-runs the image assignment and the curvature model and
   replaces every tile in the backend in one synchronous step.
2. Frame loop: It advances the animation engine and pushes the resulting
   transforms and camera target to the backend.
3. Decoupling: Backend and texture loader are protocols, so the whole
   controller runs without Qt or PyVista (see tests/).

Classes:
    RenderBackend: Scene/camera contract implemented by the view.
    AssetLoader: Asynchronous texture loading contract.
    GalleryController: The orchestrator.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional, Protocol

import numpy as np

from photowall.controller.animation import AnimationEngine
from photowall.controller.input import InputNormalizer, OrientationSource
from photowall.model.assignment import AssignmentGrid, assign
from photowall.model.images import ImagePool, ImageRef
from photowall.model.primitives import Vector3
from photowall.model.state import DEFAULT_CONFIG, LIVE_PARAMETERS, GalleryConfig, InputState
from photowall.model.tiles import Tile, build_tiles

logger = logging.getLogger(__name__)


class RenderBackend(Protocol):
    def add_tile(self, tile: Tile, size: float) -> Any: ...

    def remove_tile(self, handle: Any) -> None: ...

    def set_tile_texture(self, handle: Any, texture: Any) -> None: ...

    def set_tile_transform(self, handle: Any, position: Vector3, rotation: Vector3) -> None: ...

    def set_look_at(self, point: Vector3) -> None: ...

    def render(self) -> None: ...


class AssetLoader(Protocol):
    def load(self, image: ImageRef, on_loaded: Callable[[Any], None]) -> None: ...


class GalleryController:
    def __init__(
        self,
        backend: RenderBackend,
        loader: Optional[AssetLoader],
        images: ImagePool,
        config: GalleryConfig = DEFAULT_CONFIG,
        *,
        seed: Optional[int] = None,
        max_search_steps: Optional[int] = None,
        orientation_source: Optional[OrientationSource] = None,
    ) -> None:
        """
        Args:
            backend: Scene that displays the tiles.
            loader: Texture loader; tiles stay untextured when None.
            images: Image pool distributed over the grid.
            config: Initial gallery parameters.
            seed: Seed of the per-tile randomness (None = unseeded).
            max_search_steps: Optional budget for the assignment search.
            orientation_source: Tilt sensor for gyro input.
        """
        self.backend = backend
        self.loader = loader
        self.images = images
        self.config = config
        self.max_search_steps = max_search_steps
        self._rng = np.random.default_rng(seed)

        self.engine = AnimationEngine(config, InputState())
        self.input = InputNormalizer(self.engine.input_state, orientation_source=orientation_source)

        self.assignment: AssignmentGrid = []
        self._handles: list[Any] = []
        self._generation = 0

    @property
    def tiles(self) -> list[Tile]:
        return self.engine.tiles

    @property
    def input_state(self) -> InputState:
        return self.engine.input_state

    def rebuild(self, config: Optional[GalleryConfig] = None) -> None:
        """Discard all tiles and build the wall again from scratch."""
        if config is not None:
            self.config = config
            self.engine.set_config(config)

        for handle in self._handles:
            self.backend.remove_tile(handle)
        self._handles = []
        self._generation += 1

        cfg = self.config
        self.assignment = assign(cfg.rows, cfg.columns, len(self.images), max_steps=self.max_search_steps)
        tiles = build_tiles(self.assignment, cfg, self._rng)

        for tile in tiles:
            handle = self.backend.add_tile(tile, cfg.tile_size)
            self.backend.set_tile_transform(handle, tile.position, tile.rotation)
            self._handles.append(handle)
            self._request_texture(tile, handle)

        self.engine.set_tiles(tiles)
        logger.info(f"Gallery rebuilt: {cfg.rows}x{cfg.columns} tiles, {len(self.images)} images.")

    def _request_texture(self, tile: Tile, handle: Any) -> None:
        if self.loader is None or not self.images:
            return

        generation = self._generation

        def on_loaded(texture: Any) -> None:
            if generation != self._generation:
                # The tile was discarded by a later rebuild
                return
            self.backend.set_tile_texture(handle, texture)

        self.loader.load(self.images[tile.image_index], on_loaded)

    def update_config(self, **changes: Any) -> GalleryConfig:
        """
        Apply parameter changes. Anything but the live parameters rebuilds the wall.

        Raises:
            ValueError: If a value is invalid or a parameter is unknown.
        """
        new_config = self.config.with_changes(**changes)
        changed = new_config.changed_fields(self.config)
        if not changed:
            return self.config

        if changed <= LIVE_PARAMETERS:
            self.config = new_config
            self.engine.set_config(new_config)
            logger.debug(f"Live parameters updated: {', '.join(sorted(changed))}")
        else:
            self.rebuild(new_config)
        return self.config

    def frame(self, time: float) -> Vector3:
        """
        Advance the animation and render one frame.

        Args:
            time: Elapsed time in seconds.

        Returns:
            The camera look-at point used for this frame.
        """
        look_at = self.engine.tick(time)
        for tile, handle in zip(self.engine.tiles, self._handles):
            self.backend.set_tile_transform(handle, tile.position, tile.rotation)
        self.backend.set_look_at(look_at)
        self.backend.render()
        return look_at
