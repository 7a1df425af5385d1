"""Saving converted markup as an `.svg` file."""

from __future__ import annotations

import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal

DOWNLOAD_FILENAME: Final[str] = "converted-svg.svg"
SVG_MIME_TYPE: Final[str] = "image/svg+xml"


class DownloadError(RuntimeError):
    """Saving the converted markup failed."""


@dataclass(frozen=True)
class SvgDownload:
    filename: str
    mime_type: str
    payload: bytes


def build_download(markup: str | None) -> SvgDownload:
    """Payload bytes are exactly the UTF-8 encoding of `markup`."""
    if not markup:
        raise DownloadError("no converted SVG to download")
    return SvgDownload(filename=DOWNLOAD_FILENAME, mime_type=SVG_MIME_TYPE, payload=markup.encode("utf-8"))


def default_download_path(directory: str) -> Path:
    base = Path(directory).expanduser() if directory else Path.home()
    return base / DOWNLOAD_FILENAME


def atomic_write_bytes(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_name = f".{path.name}.tmp.{os.getpid()}.{time.time_ns()}"
    tmp_path = path.parent / tmp_name
    try:
        tmp_path.write_bytes(data)
        os.replace(tmp_path, path)
    finally:
        tmp_path.unlink(missing_ok=True)


class _SaveSignals(QObject):
    finished = Signal(str)  # path
    failed = Signal(str)


class _SaveWorker(QRunnable):
    def __init__(self, download: SvgDownload, out_path: Path) -> None:
        super().__init__()
        self._download = download
        self._out_path = out_path
        self.signals = _SaveSignals()

    def run(self) -> None:
        try:
            atomic_write_bytes(self._out_path, self._download.payload)
        except OSError as e:
            self.signals.failed.emit(str(e))
            return
        self.signals.finished.emit(str(self._out_path))


class SvgSaver(QObject):
    """Writes SVG downloads off the UI thread and reports the outcome."""

    saved = Signal(str)  # path
    error = Signal(str)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._pool = QThreadPool.globalInstance()

    def save_async(self, download: SvgDownload, out_path: Path) -> None:
        worker = _SaveWorker(download, out_path)
        # Receivers must be methods of this object; the worker is deleted after run().
        worker.signals.finished.connect(self._on_finished)
        worker.signals.failed.connect(self._on_failed)
        self._pool.start(worker)

    def _on_finished(self, path: str) -> None:
        self.saved.emit(path)

    def _on_failed(self, message: str) -> None:
        self.error.emit(message)
