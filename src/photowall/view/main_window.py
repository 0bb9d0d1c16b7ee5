"""
Main Window
Hosts the 3D gallery, the optional tuning dock and the frame timer.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Qt, QElapsedTimer, QTimer, Slot
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QMainWindow, QDockWidget

from photowall.config import FRAME_INTERVAL_MS
from photowall.controller.gallery import GalleryController
from photowall.controller.workers import QtAssetLoader
from photowall.view.widgets.gallery_view import GalleryView
from photowall.view.widgets.tuning_panel import TuningPanel

logger = logging.getLogger(__name__)

VISIBLE_APP_NAME = "Photo Wall"


class MainWindow(QMainWindow):
    def __init__(
        self,
        controller: GalleryController,
        view: GalleryView,
        loader: Optional[QtAssetLoader] = None,
        show_tuning: bool = False,
    ) -> None:
        super().__init__()
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1400, 900)

        self.controller = controller
        self.view = view
        self.loader = loader
        self.setCentralWidget(view)
        view.bind_input(controller.input)

        self.tuning_panel: Optional[TuningPanel] = None
        if show_tuning:
            self.tuning_panel = TuningPanel(controller.config, self)
            self.tuning_panel.parameters_changed.connect(self._on_parameters_changed)
            dock = QDockWidget(self.tr("Tuning"), self)
            dock.setWidget(self.tuning_panel)
            self.addDockWidget(Qt.DockWidgetArea.RightDockWidgetArea, dock)

        # One frame per timer tick; the frame must finish before the next input event is handled
        self._clock = QElapsedTimer()
        self._frame_timer = QTimer(self)
        self._frame_timer.setInterval(FRAME_INTERVAL_MS)
        self._frame_timer.timeout.connect(self._on_frame)

    def start(self) -> None:
        """Build the wall and start animating."""
        self.controller.rebuild()
        self._clock.start()
        self._frame_timer.start()

    @Slot()
    def _on_frame(self) -> None:
        time = self._clock.elapsed() * 0.001
        self.view.apply_header(self.controller.input_state.header)
        self.controller.frame(time)

    @Slot(dict)
    def _on_parameters_changed(self, params: dict) -> None:
        try:
            self.controller.update_config(**params)
        except ValueError as e:
            logger.warning(f"Rejected gallery parameters: {e}")
            self.statusBar().showMessage(str(e), 5000)
            self.tuning_panel.set_config(self.controller.config)

    def closeEvent(self, event: QCloseEvent) -> None:
        self._frame_timer.stop()
        if self.loader is not None:
            self.loader.shutdown()
        self.view.close()
        event.accept()
