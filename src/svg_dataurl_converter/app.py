"""Qt application wiring."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import QObject
from PySide6.QtWidgets import QApplication, QFileDialog

from svg_dataurl_converter.clipboard.writer import ClipboardError, copy_text
from svg_dataurl_converter.config import AppConfig, get_config_path
from svg_dataurl_converter.convert.decoder import EXAMPLE_DATA_URL, ConversionResult, Success
from svg_dataurl_converter.export.saver import (
    SVG_MIME_TYPE,
    DownloadError,
    SvgSaver,
    build_download,
    default_download_path,
)
from svg_dataurl_converter.input.controller import InputController
from svg_dataurl_converter.ui.main_window import MainWindow
from svg_dataurl_converter.ui.settings_dialog import SettingsDialog


def _setup_logging() -> None:
    log_dir = get_config_path().parent
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / "app.log"

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        handlers=[
            logging.FileHandler(log_path, encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )


class AppController(QObject):
    """Owns the config, the input controller and the window, and connects them."""

    def __init__(self) -> None:
        super().__init__()
        self._log = logging.getLogger("svg_dataurl_converter")

        self._config = AppConfig.load()
        self._log.info(
            "config_loaded debounce=%sms copied_feedback=%sms example=%s max_input=%s",
            self._config.debounce_ms,
            self._config.copied_feedback_ms,
            bool(self._config.load_example_on_start),
            self._config.max_input_chars,
        )

        self._controller = InputController(self._config, parent=self)
        self._controller.add_listener(self._on_result)
        self._controller.copied_changed.connect(self._on_copied_changed)

        self._window = MainWindow()
        self._window.input_changed.connect(self._controller.on_input)
        self._window.copy_requested.connect(self._on_copy)
        self._window.download_requested.connect(self._on_download)
        self._window.settings_requested.connect(self._open_settings)
        self._window.close_requested.connect(self._on_close)

        self._saver = SvgSaver(parent=self)
        self._saver.saved.connect(self._on_saved)
        self._saver.error.connect(lambda msg: self._on_error(f"Download failed: {msg}"))

        self._window.show()

        if self._config.load_example_on_start:
            self._window.set_input_text(EXAMPLE_DATA_URL)
            self._controller.on_input(EXAMPLE_DATA_URL, delay_ms=int(self._config.initial_convert_delay_ms))

    def _on_result(self, result: ConversionResult) -> None:
        self._window.show_result(result)
        if isinstance(result, Success):
            self._window.set_status_text(f"Converted {len(result.markup)} chars")

    def _on_copied_changed(self, copied: bool) -> None:
        self._window.set_copied(copied)

    def _on_copy(self) -> None:
        self._controller.flush()
        markup = self._controller.markup
        if not markup:
            return
        try:
            copy_text(markup)
        except ClipboardError as e:
            self._on_error(f"Copy failed: {e}")
            return
        self._controller.mark_copied()

    def _on_download(self) -> None:
        self._controller.flush()
        try:
            download = build_download(self._controller.markup)
        except DownloadError as e:
            self._on_error(f"Download failed: {e}")
            return

        dlg = QFileDialog(self._window, "Save SVG")
        dlg.setAcceptMode(QFileDialog.AcceptMode.AcceptSave)
        dlg.setMimeTypeFilters([download.mime_type])
        dlg.setDefaultSuffix("svg")
        dlg.selectFile(str(default_download_path(self._config.last_save_dir)))
        if not dlg.exec():
            return
        selected = dlg.selectedFiles()
        if not selected:
            return
        out_path = Path(selected[0])

        self._config.last_save_dir = str(out_path.parent)
        self._config.save()
        self._log.info("download_started path=%s bytes=%d mime=%s", out_path, len(download.payload), SVG_MIME_TYPE)
        self._saver.save_async(download, out_path)

    def _on_saved(self, path: str) -> None:
        self._log.info("saved=%s", path)
        self._window.set_status_text(f"Saved: {path}")

    def _on_error(self, message: str) -> None:
        self._log.warning("error=%s", message)
        self._window.set_error_text(message)

    def _open_settings(self) -> None:
        self._log.info("settings_opened")
        dlg = SettingsDialog(self._config, parent=self._window)
        if not dlg.exec():
            self._log.info("settings_cancelled")
            return
        self._config = dlg.result_config()
        self._config.save()
        self._controller.set_config(self._config)
        self._log.info(
            "settings_applied debounce=%sms copied_feedback=%sms example=%s max_input=%s",
            self._config.debounce_ms,
            self._config.copied_feedback_ms,
            bool(self._config.load_example_on_start),
            self._config.max_input_chars,
        )

    def _on_close(self) -> None:
        self._controller.on_dispose()
        self._log.info("window_closed")


def run_app() -> None:
    _setup_logging()

    app = QApplication([])
    app.setApplicationName("SVG Data URL Converter")

    _ = AppController()
    raise SystemExit(app.exec())
