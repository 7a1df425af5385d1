"""Settings dialog for input timing and startup behavior."""

from __future__ import annotations

from dataclasses import replace

from PySide6.QtWidgets import (
    QCheckBox,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from svg_dataurl_converter.config import AppConfig


class SettingsDialog(QDialog):
    """Modal dialog used to edit `AppConfig`."""

    def __init__(self, config: AppConfig, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setModal(True)

        self._working = replace(config)

        self._debounce = QSpinBox()
        self._debounce.setRange(0, 2000)
        self._debounce.setSuffix(" ms")
        self._debounce.setValue(int(self._working.debounce_ms))

        self._copied_feedback = QSpinBox()
        self._copied_feedback.setRange(250, 10_000)
        self._copied_feedback.setSingleStep(250)
        self._copied_feedback.setSuffix(" ms")
        self._copied_feedback.setValue(int(self._working.copied_feedback_ms))

        self._max_input = QSpinBox()
        self._max_input.setRange(10_000, 200_000_000)
        self._max_input.setSingleStep(1_000_000)
        self._max_input.setValue(int(self._working.max_input_chars))

        self._example = QCheckBox("Load the example data URL on start")
        self._example.setChecked(bool(self._working.load_example_on_start))

        form = QFormLayout()
        form.addRow("Debounce", self._debounce)
        form.addRow("“Copied” indicator", self._copied_feedback)
        form.addRow("Max input size (chars)", self._max_input)
        form.addRow("", self._example)

        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)

        root = QVBoxLayout()
        root.addLayout(form)
        root.addWidget(buttons)

        self.setLayout(root)
        self.resize(420, 200)

    def result_config(self) -> AppConfig:
        return self._working

    def accept(self) -> None:
        self._working.debounce_ms = int(self._debounce.value())
        self._working.copied_feedback_ms = int(self._copied_feedback.value())
        self._working.max_input_chars = int(self._max_input.value())
        self._working.load_example_on_start = bool(self._example.isChecked())
        super().accept()
