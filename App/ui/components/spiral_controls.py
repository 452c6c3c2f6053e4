"""Spiral rendering controls component."""

from dataclasses import replace

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDoubleSpinBox,
    QFormLayout,
    QSpinBox,
    QWidget,
)

from models import SpiralParameters

RESOLUTIONS = [512, 1024, 2048, 3072, 4096]


class SpiralControlsWidget(QWidget):
    """Controls for the spiral parameters.

    This component provides UI controls for:
    - Turns and line spacing (spiral geometry)
    - Min/Max stroke width (tone range)
    - Gamma and invert (tone curve)
    - Circle crop and output resolution
    """

    # Emitted with the new SpiralParameters whenever a control changes
    parameters_changed = pyqtSignal(object)

    def __init__(self, params: SpiralParameters, parent=None):
        """Initialize spiral controls.

        Args:
            params: Initial parameters shown by the controls
            parent: Parent widget
        """
        super().__init__(parent)
        self.params = params
        self._setup_ui()
        self._connect_signals()

    @staticmethod
    def _double_spin(
        range_min: float,
        range_max: float,
        step: float,
        decimals: int,
        suffix: str = "",
        tooltip: str = "",
    ) -> QDoubleSpinBox:
        spin = QDoubleSpinBox()
        spin.setRange(range_min, range_max)
        spin.setDecimals(decimals)
        spin.setSingleStep(step)
        spin.setSuffix(suffix)
        spin.setToolTip(tooltip)
        return spin

    def _setup_ui(self):
        """Create and layout UI controls."""
        layout = QFormLayout()
        layout.setContentsMargins(0, 0, 0, 0)

        self.turns_spin = QSpinBox()
        self.turns_spin.setRange(0, 1000)
        self.turns_spin.setSingleStep(10)
        self.turns_spin.setToolTip(
            "Maximum number of revolutions (the canvas edge may stop it earlier)"
        )
        layout.addRow("Turns:", self.turns_spin)

        self.spacing_spin = self._double_spin(
            0.5, 20.0, 0.5, 1, " px", "Distance between neighbouring arms"
        )
        layout.addRow("Line Spacing:", self.spacing_spin)

        self.min_width_spin = self._double_spin(
            0.0, 10.0, 0.1, 1, " px", "Stroke width in bright areas"
        )
        layout.addRow("Min Width:", self.min_width_spin)

        self.max_width_spin = self._double_spin(
            0.1, 20.0, 0.1, 1, " px", "Stroke width in dark areas"
        )
        layout.addRow("Max Width:", self.max_width_spin)

        self.gamma_spin = self._double_spin(
            0.1, 5.0, 0.05, 2, "", "Tone curve exponent (higher = lighter mid-tones)"
        )
        layout.addRow("Gamma:", self.gamma_spin)

        self.resolution_combo = QComboBox()
        for size in RESOLUTIONS:
            self.resolution_combo.addItem(f"{size} x {size}", size)
        self.resolution_combo.setToolTip("Output image size")
        layout.addRow("Resolution:", self.resolution_combo)

        self.invert_check = QCheckBox("Invert (thick lines in bright areas)")
        layout.addRow(self.invert_check)

        self.crop_check = QCheckBox("Crop to circle")
        layout.addRow(self.crop_check)

        self.setLayout(layout)
        self.set_parameters(self.params)

    def _connect_signals(self):
        """Connect widget signals to parameter updates."""
        self.turns_spin.valueChanged.connect(lambda v: self._update("turns", v))
        self.spacing_spin.valueChanged.connect(
            lambda v: self._update("line_spacing", v)
        )
        self.min_width_spin.valueChanged.connect(
            lambda v: self._update("min_width", v)
        )
        self.max_width_spin.valueChanged.connect(
            lambda v: self._update("max_width", v)
        )
        self.gamma_spin.valueChanged.connect(lambda v: self._update("gamma", v))
        self.resolution_combo.currentIndexChanged.connect(
            lambda i: self._update("resolution", self.resolution_combo.itemData(i))
        )
        self.invert_check.toggled.connect(lambda v: self._update("invert", v))
        self.crop_check.toggled.connect(lambda v: self._update("crop_to_circle", v))

    def _update(self, attr: str, value):
        """Replace one parameter and emit the new parameter set.

        Args:
            attr: SpiralParameters attribute name
            value: New value
        """
        if getattr(self.params, attr) == value:
            return
        self.params = replace(self.params, **{attr: value})
        self.parameters_changed.emit(self.params)

    def set_parameters(self, params: SpiralParameters):
        """Show a parameter set without emitting change signals."""
        self.params = params
        widgets = (
            self.turns_spin,
            self.spacing_spin,
            self.min_width_spin,
            self.max_width_spin,
            self.gamma_spin,
            self.resolution_combo,
            self.invert_check,
            self.crop_check,
        )
        for widget in widgets:
            widget.blockSignals(True)

        self.turns_spin.setValue(params.turns)
        self.spacing_spin.setValue(params.line_spacing)
        self.min_width_spin.setValue(params.min_width)
        self.max_width_spin.setValue(params.max_width)
        self.gamma_spin.setValue(params.gamma)
        index = self.resolution_combo.findData(params.resolution)
        if index < 0:
            self.resolution_combo.addItem(
                f"{params.resolution} x {params.resolution}", params.resolution
            )
            index = self.resolution_combo.count() - 1
        self.resolution_combo.setCurrentIndex(index)
        self.invert_check.setChecked(params.invert)
        self.crop_check.setChecked(params.crop_to_circle)

        for widget in widgets:
            widget.blockSignals(False)

