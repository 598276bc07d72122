from __future__ import annotations

from dms_api.common.downloads import build_content_disposition, media_type_for


def test_ascii_filename_is_quoted_attachment() -> None:
    assert build_content_disposition("report.pdf") == 'attachment; filename="report.pdf"'


def test_non_ascii_filename_gets_utf8_variant() -> None:
    header = build_content_disposition("résumé.pdf")
    assert header.startswith('attachment; filename="r_sum_.pdf"')
    assert "filename*=UTF-8''r%C3%A9sum%C3%A9.pdf" in header


def test_blank_filename_uses_default() -> None:
    assert build_content_disposition("   ") == 'attachment; filename="download"'


def test_media_type_guess_falls_back_to_octet_stream() -> None:
    assert media_type_for("report.pdf") == "application/pdf"
    assert media_type_for("archive.unknownext") == "application/octet-stream"
