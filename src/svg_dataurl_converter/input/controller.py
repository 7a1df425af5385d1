"""Debounced input handling.

The controller owns the current input text and one single-shot timer. Every keystroke
restarts the timer, so only the last input of a burst is ever decoded. `QTimer.start`
and `QTimer.stop` are synchronous: a restarted or stopped timer never delivers its
earlier timeout.
"""

from __future__ import annotations

import enum
import logging
from typing import Callable

from PySide6.QtCore import QObject, QTimer, Signal

from svg_dataurl_converter.config import AppConfig
from svg_dataurl_converter.convert.decoder import ConversionResult, Success, decode

ResultListener = Callable[[ConversionResult], None]


class ControllerState(enum.Enum):
    IDLE = "idle"
    PENDING = "pending"
    SETTLED = "settled"


class InputController(QObject):
    """Holds RawInput, the pending debounce timer and the latest ConversionResult."""

    published = Signal(object)  # ConversionResult
    copied_changed = Signal(bool)

    def __init__(self, config: AppConfig, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._log = logging.getLogger("svg_dataurl_converter.input")

        self._cfg = config

        self._debounce = QTimer(self)
        self._debounce.setSingleShot(True)
        self._debounce.timeout.connect(self._settle)

        self._copied_reset = QTimer(self)
        self._copied_reset.setSingleShot(True)
        self._copied_reset.timeout.connect(self._clear_copied)

        self._raw_input = ""
        self._result: ConversionResult | None = None
        self._copied = False
        self._disposed = False
        self._listeners: list[ResultListener] = []

    @property
    def raw_input(self) -> str:
        return self._raw_input

    @property
    def result(self) -> ConversionResult | None:
        return self._result

    @property
    def markup(self) -> str | None:
        if isinstance(self._result, Success):
            return self._result.markup
        return None

    @property
    def copied(self) -> bool:
        return self._copied

    @property
    def is_pending(self) -> bool:
        return self._debounce.isActive()

    @property
    def state(self) -> ControllerState:
        if self._debounce.isActive():
            return ControllerState.PENDING
        if self._result is None:
            return ControllerState.IDLE
        return ControllerState.SETTLED

    def set_config(self, config: AppConfig) -> None:
        self._cfg = config

    def add_listener(self, listener: ResultListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: ResultListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def on_input(self, text: str, *, delay_ms: int | None = None) -> None:
        """Record new input and (re)arm the debounce timer.

        `delay_ms` overrides the configured debounce for this one schedule.
        """
        if self._disposed:
            self._log.info("input_ignored reason=disposed")
            return
        self._raw_input = text
        self._clear_copied()
        interval = int(self._cfg.debounce_ms if delay_ms is None else delay_ms)
        self._debounce.start(max(0, interval))

    def flush(self) -> None:
        """Settle immediately if a debounce is pending."""
        if self._disposed or not self._debounce.isActive():
            return
        self._debounce.stop()
        self._settle()

    def on_dispose(self) -> None:
        self._disposed = True
        self._debounce.stop()
        self._copied_reset.stop()
        self._listeners.clear()

    def mark_copied(self) -> None:
        if self._disposed:
            return
        self._copied = True
        self.copied_changed.emit(True)
        self._copied_reset.start(max(0, int(self._cfg.copied_feedback_ms)))

    def _clear_copied(self) -> None:
        self._copied_reset.stop()
        if not self._copied:
            return
        self._copied = False
        self.copied_changed.emit(False)

    def _settle(self) -> None:
        if self._disposed:
            return
        result = decode(self._raw_input, max_chars=int(self._cfg.max_input_chars))
        self._result = result
        if isinstance(result, Success):
            self._log.info("converted chars_in=%d chars_out=%d", len(self._raw_input), len(result.markup))
        else:
            self._log.info("conversion_failed type=%s", result.error_type.__name__)
        self.published.emit(result)
        for listener in list(self._listeners):
            listener(result)
