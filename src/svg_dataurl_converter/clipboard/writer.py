"""Clipboard output for converted markup."""

from __future__ import annotations

import logging

from PySide6.QtGui import QClipboard, QGuiApplication

_log = logging.getLogger("svg_dataurl_converter.clipboard")


class ClipboardError(RuntimeError):
    """The system clipboard rejected the write."""


def copy_text(text: str, clipboard: QClipboard | None = None) -> None:
    """Put `text` on the clipboard, raising ClipboardError if it did not stick."""
    if not text:
        raise ClipboardError("nothing to copy")
    cb = clipboard if clipboard is not None else QGuiApplication.clipboard()
    if cb is None:
        raise ClipboardError("clipboard is not available")
    cb.setText(text, QClipboard.Mode.Clipboard)
    # Another process can own the clipboard and drop our write silently.
    if cb.text(QClipboard.Mode.Clipboard) != text:
        raise ClipboardError("clipboard did not accept the text")
    _log.info("clipboard_written chars=%d", len(text))
