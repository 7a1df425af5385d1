from pathlib import Path

import pytest
from PySide6.QtCore import QCoreApplication, QThreadPool
from PySide6.QtTest import QTest

from svg_dataurl_converter.convert.decoder import Success, decode
from svg_dataurl_converter.export.saver import (
    DOWNLOAD_FILENAME,
    SVG_MIME_TYPE,
    DownloadError,
    SvgSaver,
    atomic_write_bytes,
    build_download,
    default_download_path,
)


def _wait_for(items: list, timeout_ms: int = 2000) -> None:
    QThreadPool.globalInstance().waitForDone(timeout_ms)
    waited = 0
    while not items and waited < timeout_ms:
        QTest.qWait(20)
        waited += 20


def test_download_payload_matches_markup() -> None:
    result = decode("data:image/svg+xml,%3Csvg%2F%3E")
    assert isinstance(result, Success)
    download = build_download(result.markup)
    assert download.payload == b"<svg/>"
    assert download.filename == "converted-svg.svg"
    assert download.mime_type == "image/svg+xml"


def test_download_payload_is_utf8() -> None:
    markup = "<svg><text>Grüße €</text></svg>"
    assert build_download(markup).payload == markup.encode("utf-8")


@pytest.mark.parametrize("markup", [None, ""])
def test_download_requires_markup(markup) -> None:
    with pytest.raises(DownloadError):
        build_download(markup)


def test_default_download_path(tmp_path: Path) -> None:
    assert default_download_path(str(tmp_path)) == tmp_path / DOWNLOAD_FILENAME
    assert default_download_path("").name == DOWNLOAD_FILENAME


def test_atomic_write_bytes(tmp_path: Path) -> None:
    out = tmp_path / "nested" / "x.svg"
    atomic_write_bytes(out, b"<svg/>")
    assert out.read_bytes() == b"<svg/>"
    assert [p.name for p in out.parent.iterdir()] == ["x.svg"]


def test_saver_writes_file(qapp: QCoreApplication, tmp_path: Path) -> None:
    saver = SvgSaver()
    saved: list = []
    errors: list = []
    saver.saved.connect(saved.append)
    saver.error.connect(errors.append)

    out = tmp_path / DOWNLOAD_FILENAME
    saver.save_async(build_download("<svg/>"), out)
    _wait_for(saved)

    assert errors == []
    assert saved == [str(out)]
    assert out.read_bytes() == b"<svg/>"


def test_saver_reports_errors(qapp: QCoreApplication, tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x", encoding="utf-8")

    saver = SvgSaver()
    saved: list = []
    errors: list = []
    saver.saved.connect(saved.append)
    saver.error.connect(errors.append)

    saver.save_async(build_download("<svg/>"), blocker / DOWNLOAD_FILENAME)
    _wait_for(errors)

    assert saved == []
    assert len(errors) == 1


def test_mime_type_constant() -> None:
    assert SVG_MIME_TYPE == "image/svg+xml"
