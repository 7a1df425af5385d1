import pytest

from svg_dataurl_converter.clipboard.writer import ClipboardError, copy_text


class _FakeClipboard:
    def __init__(self, accepts: bool = True) -> None:
        self.accepts = accepts
        self.value = ""

    def setText(self, text, mode=None) -> None:
        if self.accepts:
            self.value = text

    def text(self, mode=None) -> str:
        return self.value


def test_copy_text_writes_markup() -> None:
    cb = _FakeClipboard()
    copy_text("<svg/>", clipboard=cb)
    assert cb.value == "<svg/>"


def test_copy_text_reports_rejected_write() -> None:
    with pytest.raises(ClipboardError):
        copy_text("<svg/>", clipboard=_FakeClipboard(accepts=False))


def test_copy_text_requires_content() -> None:
    with pytest.raises(ClipboardError):
        copy_text("", clipboard=_FakeClipboard())
