"""
Input Normalization
===================
Turns raw pointer, drag and device-orientation events into the normalized
target (each axis in [-1, 1]) stored in the shared InputState.

Modes:
    - Mouse hover: the target follows the pointer relative to the viewport centre.
    - Drag (mouse or touch): the target pans from where the drag started.
    - Gyro: once enabled, device tilt overrides pointer movement. Pressing and
      releasing the pointer still works, moves are ignored.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from photowall.model.state import InputState
from photowall.utils import clamp, normalize_to_half_extent

logger = logging.getLogger(__name__)

MOUSE_POINTER = "mouse"
GYRO_KEY = "g"
TILT_LIMIT_DEGREES = 45.0


class OrientationSource(Protocol):
    """Platform adapter delivering (gamma, beta) tilt readings in degrees."""
    requires_permission: bool

    def is_available(self) -> bool: ...

    def request_permission(self, on_result: Callable[[bool], None]) -> None: ...

    def subscribe(self, handler: Callable[[Optional[float], Optional[float]], None]) -> None: ...


class InputNormalizer:
    def __init__(
        self,
        state: InputState,
        width: float = 1.0,
        height: float = 1.0,
        *,
        orientation_source: Optional[OrientationSource] = None,
        capture_pointer: Optional[Callable[[Optional[int]], None]] = None,
        release_pointer: Optional[Callable[[Optional[int]], None]] = None,
    ) -> None:
        """
        Args:
            state: The input state to write to (owned by the animation engine).
            width: Viewport width in client pixels.
            height: Viewport height in client pixels.
            orientation_source: Tilt sensor used when gyro input is toggled on.
            capture_pointer: Optional platform hook grabbing the pointer on press.
            release_pointer: Optional platform hook releasing the grab.
        """
        self.state = state
        self.width = width
        self.height = height
        self.orientation_source = orientation_source
        self.capture_pointer = capture_pointer
        self.release_pointer = release_pointer
        self._pointer_id: Optional[int] = None

    # ------------------------------------------------------------------------------
    # Viewport
    # ------------------------------------------------------------------------------

    def resize(self, width: float, height: float) -> None:
        if width <= 0 or height <= 0:
            logger.debug(f"Ignoring degenerate viewport size {width}x{height}.")
            return
        self.width = width
        self.height = height

    # ------------------------------------------------------------------------------
    # Pointer
    # ------------------------------------------------------------------------------

    def pointer_down(self, client_x: float, client_y: float, pointer_id: Optional[int] = None) -> None:
        s = self.state
        s.pointer_down = True
        s.drag_start_client_x = client_x
        s.drag_start_client_y = client_y
        s.drag_start_target_x = s.target_x
        s.drag_start_target_y = s.target_y

        self._pointer_id = pointer_id
        if self.capture_pointer is not None:
            try:
                self.capture_pointer(pointer_id)
            except Exception as e:
                # Dragging keeps working through ordinary move events
                logger.debug(f"Pointer capture failed: {e}")

    def pointer_move(self, client_x: float, client_y: float, pointer_type: str = MOUSE_POINTER) -> bool:
        """
        Returns:
            True if the raw target was updated.
        """
        s = self.state
        if s.gyro_enabled:
            return False

        if pointer_type == MOUSE_POINTER and not s.pointer_down:
            x = normalize_to_half_extent(client_x - self.width / 2, self.width)
            y = normalize_to_half_extent(client_y - self.height / 2, self.height)
        elif s.pointer_down:
            delta_x = normalize_to_half_extent(client_x - s.drag_start_client_x, self.width)
            delta_y = normalize_to_half_extent(client_y - s.drag_start_client_y, self.height)
            x = clamp(s.drag_start_target_x + delta_x, -1.0, 1.0)
            y = clamp(s.drag_start_target_y + delta_y, -1.0, 1.0)
        else:
            return False

        s.set_raw_target(x, y)
        return True

    def pointer_up(self) -> None:
        self._end_drag()

    def pointer_cancel(self) -> None:
        self._end_drag()

    def _end_drag(self) -> None:
        self.state.pointer_down = False
        if self.release_pointer is not None:
            try:
                self.release_pointer(self._pointer_id)
            except Exception as e:
                logger.debug(f"Pointer release failed: {e}")
        self._pointer_id = None

    # ------------------------------------------------------------------------------
    # Device orientation
    # ------------------------------------------------------------------------------

    def orientation(self, gamma: Optional[float], beta: Optional[float]) -> bool:
        """
        Apply a tilt reading (degrees). Left-right tilt (gamma) drives x,
        front-back tilt (beta) drives y.
        """
        if not self.state.gyro_enabled:
            return False
        x = clamp(gamma or 0.0, -TILT_LIMIT_DEGREES, TILT_LIMIT_DEGREES) / TILT_LIMIT_DEGREES
        y = clamp(beta or 0.0, -TILT_LIMIT_DEGREES, TILT_LIMIT_DEGREES) / TILT_LIMIT_DEGREES
        self.state.set_raw_target(x, y)
        return True

    def enable_gyro(self, source: Optional[OrientationSource] = None) -> bool:
        """
        Switch to orientation input.

        Activation may complete later when the platform asks for permission.
        Unavailable sensors and denied permission leave the gyro off.

        Returns:
            False if no usable orientation source exists, True otherwise.
        """
        if self.state.gyro_enabled:
            return True

        source = source or self.orientation_source
        if source is None or not source.is_available():
            logger.debug("Orientation input is not available.")
            return False

        def attach() -> None:
            if self.state.gyro_enabled:
                return
            source.subscribe(self.orientation)
            self.state.gyro_enabled = True
            logger.info("Orientation input enabled.")

        if not source.requires_permission:
            attach()
            return True

        def on_result(granted: bool) -> None:
            if granted:
                attach()
            else:
                logger.debug("Orientation permission denied.")

        try:
            source.request_permission(on_result)
        except Exception as e:
            logger.debug(f"Orientation permission request failed: {e}")
        return True

    def key_press(self, key: str) -> None:
        if key and key.lower() == GYRO_KEY:
            self.enable_gyro()
