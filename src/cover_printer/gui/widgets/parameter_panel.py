"""
Parameter panel: paper size, picture size, margin, spacing and whitespace policy.
"""
from typing import Optional

from PySide6.QtWidgets import (
    QGroupBox, QFormLayout, QComboBox, QDoubleSpinBox, QCheckBox
)
from PySide6.QtCore import Signal, Slot

from cover_printer.core.models import PAPER_SIZES, GridParameters, PaperSize

MAX_LENGTH_MM = 500.0


class ParameterPanel(QGroupBox):
    """
    Inputs for one sheet's layout.

    Signals:
        paperChanged(PaperSize): A different paper size was selected
        parametersChanged(GridParameters): Any numeric field or the
            whitespace checkbox changed
    """

    paperChanged = Signal(object)
    parametersChanged = Signal(object)

    def __init__(self, params: Optional[GridParameters] = None, paper_index: int = 0, parent=None):
        super().__init__("Layout", parent)
        params = params if params is not None else GridParameters()
        self._updating = False

        form = QFormLayout(self)

        self.paper_combo = QComboBox()
        for paper in PAPER_SIZES:
            self.paper_combo.addItem(paper.label)
        self.paper_combo.setCurrentIndex(paper_index if 0 <= paper_index < len(PAPER_SIZES) else 0)
        self.paper_combo.currentIndexChanged.connect(self._on_paper_changed)
        form.addRow("Paper", self.paper_combo)

        self.width_spin = self._make_spin(params.picture_width_mm)
        form.addRow("Picture width", self.width_spin)

        self.height_spin = self._make_spin(params.picture_height_mm)
        form.addRow("Picture height", self.height_spin)

        self.margin_spin = self._make_spin(params.margin_mm)
        form.addRow("Margin", self.margin_spin)

        self.spacing_spin = self._make_spin(params.spacing_mm)
        form.addRow("Spacing", self.spacing_spin)

        self.whitespace_check = QCheckBox("Allow whitespace")
        self.whitespace_check.setChecked(params.allow_whitespace)
        self.whitespace_check.setToolTip(
            "Fit whole images inside their placeholders instead of filling them"
        )
        self.whitespace_check.toggled.connect(self._emit_parameters)
        form.addRow("", self.whitespace_check)

    def _make_spin(self, value: float) -> QDoubleSpinBox:
        spin = QDoubleSpinBox()
        spin.setRange(0.0, MAX_LENGTH_MM)
        spin.setDecimals(1)
        spin.setSingleStep(0.5)
        spin.setSuffix(" mm")
        spin.setValue(value)
        spin.valueChanged.connect(self._emit_parameters)
        return spin

    def paper(self) -> PaperSize:
        return PAPER_SIZES[self.paper_combo.currentIndex()]

    def parameters(self) -> GridParameters:
        return GridParameters(
            picture_width_mm=self.width_spin.value(),
            picture_height_mm=self.height_spin.value(),
            margin_mm=self.margin_spin.value(),
            spacing_mm=self.spacing_spin.value(),
            allow_whitespace=self.whitespace_check.isChecked(),
        )

    def set_parameters(self, params: GridParameters) -> None:
        """Load values without emitting one signal per field."""
        self._updating = True
        try:
            self.width_spin.setValue(params.picture_width_mm)
            self.height_spin.setValue(params.picture_height_mm)
            self.margin_spin.setValue(params.margin_mm)
            self.spacing_spin.setValue(params.spacing_mm)
            self.whitespace_check.setChecked(params.allow_whitespace)
        finally:
            self._updating = False
        self._emit_parameters()

    @Slot(int)
    def _on_paper_changed(self, index: int):
        if 0 <= index < len(PAPER_SIZES):
            self.paperChanged.emit(PAPER_SIZES[index])

    @Slot()
    def _emit_parameters(self, *_):
        if self._updating:
            return
        self.parametersChanged.emit(self.parameters())
