from __future__ import annotations

from PySide6.QtCore import Signal, Slot
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QGroupBox, QLabel, QGridLayout,
    QSizePolicy, QDoubleSpinBox, QSpinBox, QAbstractSpinBox
)

from photowall.model.state import GalleryConfig, PARAMETER_RANGES

LABELS = {
    "rows": "Rows",
    "columns": "Columns",
    "image_width": "Image width",
    "image_height": "Image height",
    "spacing": "Spacing",
    "curvature": "Curvature",
    "vertical_curvature": "Vertical curvature",
    "depth": "Depth",
    "elevation": "Elevation",
    "look_at_range": "Look Range",
}

INTEGER_PARAMETERS = {"rows", "columns"}


class TuningPanel(QWidget):
    """
    Debug panel exposing the gallery parameters.

    Emits the full parameter set on every change; the controller decides
    whether the change needs a rebuild.
    """
    TITLE: str = "Gallery"

    parameters_changed = Signal(dict)

    def __init__(self, config: GalleryConfig, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        box = QGroupBox(self.tr(self.TITLE), self)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(box)
        layout.addStretch()
        self.grid = QGridLayout(box)
        self.grid.setVerticalSpacing(8)
        self._spins: dict[str, QAbstractSpinBox] = {}
        self._row = 0

        values = config.to_dict()
        for key, label in LABELS.items():
            spin = self._add_spin(key, label, default=values[key])
            spin.valueChanged.connect(self._relay_changed)

    # ---- utilities ----

    def _next_row(self) -> int:
        r = self._row
        self._row += 1
        return r

    def _add_spin(self, key: str, label: str, *, default: float) -> QAbstractSpinBox:
        limits = PARAMETER_RANGES[key]
        row = self._next_row()
        lab = QLabel(self.tr(label), self)
        self.grid.addWidget(lab, row, 0)
        if key in INTEGER_PARAMETERS:
            w = QSpinBox(self)
            w.setRange(int(limits.minimum), int(limits.maximum))
            w.setSingleStep(int(limits.step))
            w.setValue(int(default))
        else:
            w = QDoubleSpinBox(self)
            w.setRange(limits.minimum, limits.maximum)
            w.setSingleStep(limits.step)
            w.setDecimals(2)
            w.setValue(default)
        w.setKeyboardTracking(False)
        w.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
        self.grid.addWidget(w, row, 1)
        self._spins[key] = w
        return w

    def params(self) -> dict[str, float]:
        return {k: w.value() for k, w in self._spins.items()}

    def set_config(self, config: GalleryConfig) -> None:
        """Show the given values without emitting change signals."""
        values = config.to_dict()
        for key, w in self._spins.items():
            w.blockSignals(True)
            w.setValue(values[key])
            w.blockSignals(False)

    @Slot()
    def _relay_changed(self) -> None:
        self.parameters_changed.emit(self.params())
