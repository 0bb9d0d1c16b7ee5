"""
Background Workers (Threading)
==============================
This module contains the QThread based texture loader.

Why is this file needed?
------------------------
1. Responsiveness: Decoding a dozen photos on the main thread stalls the
   frame timer. The files are read in background threads instead.
2. Signals: Finished textures travel back to the GUI thread through Qt
   signals, so the tile callbacks always run on the main thread.

Classes:
    TextureLoadWorker: Reads one image file into a PyVista texture.
    QtAssetLoader: Caches textures per path and dispatches workers.
"""
from __future__ import annotations

import logging
from typing import Any, Callable

import pyvista as pv
from PySide6.QtCore import QObject, QThread, Signal

from photowall.model.images import ImageRef

logger = logging.getLogger(__name__)


class TextureLoadWorker(QThread):
    loaded = Signal(str, object)  # (path, pv.Texture)
    error_occurred = Signal(str, str)  # (path, message)

    def __init__(self, path: str, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.path = path

    def run(self) -> None:
        try:
            texture = pv.read_texture(self.path)
            texture.interpolate = True  # linear filtering
            self.loaded.emit(self.path, texture)
        except Exception as e:
            logger.error(f"Error loading texture '{self.path}': {e}")
            self.error_occurred.emit(self.path, str(e))


class QtAssetLoader(QObject):
    """
    Loads each image file once and hands the texture to every tile that asked for it.
    Tiles are placed immediately; textures show up when their worker finishes.
    """

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._cache: dict[str, Any] = {}
        self._pending: dict[str, list[Callable[[Any], None]]] = {}
        self._workers: dict[str, TextureLoadWorker] = {}

    def load(self, image: ImageRef, on_loaded: Callable[[Any], None]) -> None:
        path = image.path
        if path in self._cache:
            on_loaded(self._cache[path])
            return

        self._pending.setdefault(path, []).append(on_loaded)
        if path in self._workers:
            return

        logger.debug(f"Loading texture: {path}")
        worker = TextureLoadWorker(path, parent=self)
        worker.loaded.connect(self._on_loaded)
        worker.error_occurred.connect(self._on_error)
        worker.finished.connect(lambda p=path: self._on_finished(p))
        self._workers[path] = worker
        worker.start()

    def _on_loaded(self, path: str, texture: Any) -> None:
        self._cache[path] = texture
        for callback in self._pending.pop(path, []):
            callback(texture)

    def _on_error(self, path: str, message: str) -> None:
        # Tiles keep their plain material
        self._pending.pop(path, None)

    def _on_finished(self, path: str) -> None:
        worker = self._workers.pop(path, None)
        if worker is not None:
            worker.deleteLater()

    def shutdown(self) -> None:
        """Wait for running workers before the application exits."""
        for worker in list(self._workers.values()):
            worker.wait()
        self._workers.clear()
