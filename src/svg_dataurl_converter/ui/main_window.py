"""Main application window: input, preview, converted markup and actions."""

from __future__ import annotations

from PySide6.QtCore import QByteArray, QSignalBlocker, Qt, Signal
from PySide6.QtGui import QFontDatabase
from PySide6.QtSvgWidgets import QSvgWidget
from PySide6.QtWidgets import (
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from svg_dataurl_converter.convert.decoder import ConversionResult, Success

_PREVIEW_PX = 128


class MainWindow(QMainWindow):
    """Single-page converter window.

    The window only renders state; decoding and debouncing live in `InputController`.
    """

    input_changed = Signal(str)
    copy_requested = Signal()
    download_requested = Signal()
    settings_requested = Signal()
    close_requested = Signal()

    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("SVG Data URL Converter")
        mono = QFontDatabase.systemFont(QFontDatabase.SystemFont.FixedFont)

        self._input = QPlainTextEdit()
        self._input.setFont(mono)
        self._input.setPlaceholderText("Paste your SVG data URL here…")
        self._input.textChanged.connect(self._on_text_changed)

        hint = QLabel("Conversion runs automatically after you stop typing.")
        hint.setAlignment(Qt.AlignmentFlag.AlignCenter)
        hint.setStyleSheet("color: #666;")

        self._settings_btn = QPushButton("Settings")
        self._settings_btn.clicked.connect(self.settings_requested)

        input_group = QGroupBox("Data URL")
        input_layout = QVBoxLayout()
        input_layout.addWidget(self._input)
        input_layout.addWidget(hint)
        input_group.setLayout(input_layout)

        self._error = QLabel("")
        self._error.setWordWrap(True)
        self._error.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        self._error.setStyleSheet("color: #a00; font-weight: bold;")
        self._error.hide()

        self._preview = QSvgWidget()
        self._preview.setFixedSize(_PREVIEW_PX, _PREVIEW_PX)
        self._preview.renderer().setAspectRatioMode(Qt.AspectRatioMode.KeepAspectRatio)
        preview_frame = QWidget()
        preview_frame.setStyleSheet("background: white;")
        preview_row = QHBoxLayout()
        preview_row.addStretch(1)
        preview_row.addWidget(self._preview)
        preview_row.addStretch(1)
        preview_frame.setLayout(preview_row)

        self._preview_group = QGroupBox("SVG Preview")
        preview_layout = QVBoxLayout()
        preview_layout.addWidget(preview_frame)
        self._preview_group.setLayout(preview_layout)

        self._output = QPlainTextEdit()
        self._output.setFont(mono)
        self._output.setReadOnly(True)
        self._output.setMaximumHeight(220)

        self._copy_btn = QPushButton("Copy")
        self._copy_btn.setToolTip("Copy to clipboard")
        self._copy_btn.clicked.connect(self.copy_requested)

        self._download_btn = QPushButton("Download SVG")
        self._download_btn.clicked.connect(self.download_requested)

        btn_row = QHBoxLayout()
        btn_row.addStretch(1)
        btn_row.addWidget(self._copy_btn)
        btn_row.addWidget(self._download_btn)
        btn_row.addStretch(1)

        self._output_group = QGroupBox("Converted SVG")
        output_layout = QVBoxLayout()
        output_layout.addWidget(self._output)
        output_layout.addLayout(btn_row)
        self._output_group.setLayout(output_layout)

        top_row = QHBoxLayout()
        top_row.addStretch(1)
        top_row.addWidget(self._settings_btn)

        root = QVBoxLayout()
        root.addLayout(top_row)
        root.addWidget(input_group)
        root.addWidget(self._error)
        root.addWidget(self._preview_group)
        root.addWidget(self._output_group)
        root.addStretch(1)

        w = QWidget()
        w.setLayout(root)
        self.setCentralWidget(w)

        self._set_markup_visible(False)
        self.resize(720, 640)

    def set_input_text(self, text: str) -> None:
        # Programmatic updates must not look like keystrokes.
        with QSignalBlocker(self._input):
            self._input.setPlainText(text)

    def show_result(self, result: ConversionResult) -> None:
        if isinstance(result, Success):
            self.set_error_text("")
            if result.markup:
                self._preview.load(QByteArray(result.markup.encode("utf-8")))
                self._output.setPlainText(result.markup)
                self._set_markup_visible(True)
                return
        else:
            self.set_error_text(result.reason)
        self._output.clear()
        self._preview.load(QByteArray())
        self._set_markup_visible(False)

    def markup_visible(self) -> bool:
        return not self._output_group.isHidden()

    def set_error_text(self, text: str) -> None:
        self._error.setText(text)
        self._error.setVisible(bool(text))

    def set_copied(self, copied: bool) -> None:
        self._copy_btn.setText("✓ Copied" if copied else "Copy")

    def set_status_text(self, text: str) -> None:
        self.statusBar().showMessage(text, 5000)

    def _set_markup_visible(self, visible: bool) -> None:
        self._preview_group.setVisible(visible)
        self._output_group.setVisible(visible)

    def _on_text_changed(self) -> None:
        self.input_changed.emit(self._input.toPlainText())

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self.close_requested.emit()
        event.accept()
