"""
3D Gallery Widget (PyVista Wrapper)
===================================
Rendering backend of the photo wall: one textured plane actor per tile, a
fixed perspective camera that only changes its look-at target, and the Qt
event filter feeding pointer/key/resize events to the input normalizer.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np
import pyvista as pv
from pyvistaqt import QtInteractor
from PySide6.QtCore import QEvent, QObject
from PySide6.QtGui import QCloseEvent, QInputDevice, QKeyEvent, QMouseEvent, QResizeEvent
from PySide6.QtWidgets import QWidget, QVBoxLayout

from photowall.controller.input import InputNormalizer, MOUSE_POINTER
from photowall.model.primitives import Vector3, transform_matrix
from photowall.model.state import HeaderTransform
from photowall.model.tiles import Tile

logger = logging.getLogger(__name__)

CAMERA_DISTANCE = 40.0
CAMERA_FOV_DEGREES = 25.0
CLIPPING_RANGE = (0.1, 1000.0)
BACKGROUND_COLOR = "black"
PLACEHOLDER_COLOR = "#202020"

HEADER_TEXT = "GALLERY"
HEADER_SCALE = 2.5
HEADER_DEPTH = 15.0
# CSS pixels of header lift to world units
HEADER_PIXEL_SIZE = 0.02


def _pointer_type(event: QMouseEvent) -> str:
    device = event.pointingDevice()
    if device is not None:
        device_type = device.type()
        if device_type == QInputDevice.DeviceType.TouchScreen:
            return "touch"
        if device_type == QInputDevice.DeviceType.Stylus:
            return "pen"
    return MOUSE_POINTER


class GalleryView(QWidget):
    def __init__(self, parent: Optional[QWidget] = None, header_text: Optional[str] = HEADER_TEXT) -> None:
        super().__init__(parent)

        self.layout_box: QVBoxLayout = QVBoxLayout(self)
        self.layout_box.setContentsMargins(0, 0, 0, 0)

        self.plotter: QtInteractor = QtInteractor(self)
        self.layout_box.addWidget(self.plotter)

        self._init_plotter()

        # --- Actors state ---
        self._header_actor: Optional[pv.Actor] = None
        if header_text:
            self._header_actor = self._create_header(header_text)
            self.apply_header(HeaderTransform())

        # --- Input ---
        self._input: Optional[InputNormalizer] = None
        self.plotter.setMouseTracking(True)
        self.plotter.installEventFilter(self)

    # ------------------------------------------------------------------------------
    # Render backend API
    # ------------------------------------------------------------------------------

    def add_tile(self, tile: Tile, size: float) -> pv.Actor:
        plane = pv.Plane(
            center=(0.0, 0.0, 0.0),
            direction=(0.0, 0.0, 1.0),
            i_size=size,
            j_size=size,
            i_resolution=1,
            j_resolution=1,
        )
        actor = self.plotter.add_mesh(
            plane,
            color=PLACEHOLDER_COLOR,
            lighting=False,
            show_scalar_bar=False,
            reset_camera=False,
            render=False,
            name=f"tile-{tile.row}-{tile.column}",
        )
        return actor

    def remove_tile(self, handle: pv.Actor) -> None:
        self.plotter.remove_actor(handle, render=False)

    def set_tile_texture(self, handle: pv.Actor, texture: pv.Texture) -> None:
        # White base colour so the texture is not tinted
        handle.prop.color = "white"
        handle.texture = texture

    def set_tile_transform(self, handle: pv.Actor, position: Vector3, rotation: Vector3) -> None:
        handle.user_matrix = transform_matrix(position, rotation)

    def set_look_at(self, point: Vector3) -> None:
        self.plotter.camera.focal_point = point.as_tuple()

    def render(self) -> None:
        self.plotter.render()

    # ------------------------------------------------------------------------------
    # Header overlay
    # ------------------------------------------------------------------------------

    def _create_header(self, text: str) -> pv.Actor:
        mesh = pv.Text3D(text, depth=0.2)
        mesh.translate(-np.asarray(mesh.center), inplace=True)
        actor = self.plotter.add_mesh(
            mesh,
            color="white",
            lighting=False,
            reset_camera=False,
            render=False,
            name="header",
        )
        return actor

    def apply_header(self, header: HeaderTransform) -> None:
        """Tilt the title like the input-driven CSS header (degrees, pixels)."""
        if self._header_actor is None:
            return
        position = Vector3(0.0, 0.0, HEADER_DEPTH + header.translate_z * HEADER_PIXEL_SIZE)
        rotation = Vector3(math.radians(header.rotation_x), math.radians(header.rotation_y), 0.0)
        self._header_actor.user_matrix = transform_matrix(position, rotation, scale=HEADER_SCALE)

    # ------------------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------------------

    def bind_input(self, normalizer: InputNormalizer) -> None:
        """Route Qt events of the render widget to the given normalizer."""
        self._input = normalizer
        normalizer.capture_pointer = lambda _pointer_id: self.plotter.grabMouse()
        normalizer.release_pointer = lambda _pointer_id: self.plotter.releaseMouse()
        normalizer.resize(self.plotter.width(), self.plotter.height())
        logger.debug(f"Input bound to a {self.plotter.width()}x{self.plotter.height()} viewport.")

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if self._input is None or watched is not self.plotter:
            return super().eventFilter(watched, event)

        etype = event.type()
        if etype == QEvent.Type.MouseButtonPress:
            pos = event.position()
            self._input.pointer_down(pos.x(), pos.y(), pointer_id=int(event.button().value))
            return True
        if etype == QEvent.Type.MouseMove:
            pos = event.position()
            self._input.pointer_move(pos.x(), pos.y(), _pointer_type(event))
            return True
        if etype == QEvent.Type.MouseButtonRelease:
            self._input.pointer_up()
            return True
        if etype == QEvent.Type.TouchCancel:
            self._input.pointer_cancel()
            return False
        if etype in (QEvent.Type.MouseButtonDblClick, QEvent.Type.Wheel):
            # The camera is driven by the animation only
            return True
        if etype == QEvent.Type.KeyPress:
            self._on_key(event)
            return True
        if etype == QEvent.Type.Resize:
            self._on_resize(event)
        return super().eventFilter(watched, event)

    def _on_key(self, event: QKeyEvent) -> None:
        self._input.key_press(event.text())

    def _on_resize(self, event: QResizeEvent) -> None:
        size = event.size()
        self._input.resize(size.width(), size.height())

    # ------------------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------------------

    def _init_plotter(self) -> None:
        self.plotter.set_background(BACKGROUND_COLOR)
        self.plotter.camera_position = [
            (0.0, 0.0, CAMERA_DISTANCE),
            (0.0, 0.0, 0.0),
            (0.0, 1.0, 0.0),
        ]
        self.plotter.camera.view_angle = CAMERA_FOV_DEGREES
        self.plotter.camera.clipping_range = CLIPPING_RANGE

    def closeEvent(self, event: QCloseEvent) -> None:
        self.plotter.close()
        event.accept()
