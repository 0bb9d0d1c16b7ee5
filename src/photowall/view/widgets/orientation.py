"""
Device Orientation Source
Adapts the Qt rotation sensor to the (gamma, beta) tilt readings the input normalizer expects.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import QObject
from PySide6.QtSensors import QRotationSensor

logger = logging.getLogger(__name__)

TiltHandler = Callable[[Optional[float], Optional[float]], None]


class QtOrientationSource(QObject):
    """
    Rotation sensor wrapper. Desktop machines usually have no backend, in which
    case `is_available()` is False and gyro input never turns on.
    """
    # Qt sensors need no runtime permission prompt
    requires_permission = False

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._sensor = QRotationSensor(self)
        self._handlers: list[TiltHandler] = []
        self._sensor.readingChanged.connect(self._on_reading)

    def is_available(self) -> bool:
        return self._sensor.connectToBackend()

    def request_permission(self, on_result: Callable[[bool], None]) -> None:
        on_result(True)

    def subscribe(self, handler: TiltHandler) -> None:
        self._handlers.append(handler)
        if not self._sensor.isActive() and not self._sensor.start():
            logger.warning("Rotation sensor could not be started.")

    def stop(self) -> None:
        self._sensor.stop()
        self._handlers.clear()

    def _on_reading(self) -> None:
        reading = self._sensor.reading()
        if reading is None:
            return
        # x: front-back tilt (beta), y: left-right tilt (gamma)
        gamma, beta = reading.y(), reading.x()
        for handler in self._handlers:
            handler(gamma, beta)
