"""Tests for waiverpdf.core.document -- end-to-end certificate generation."""

from __future__ import annotations

import io
import math
import re

import pikepdf
import pytest
from conftest import make_png

from waiverpdf.core.document import allocate_objects, build_legal_lines, generate_waiver_pdf
from waiverpdf.core.layout import DEFAULT_LAYOUT, LayoutConfig, wrap_lines
from waiverpdf.core.pdf import check_xref, verify_document
from waiverpdf.core.png import decode_png
from waiverpdf.waiver import DEFAULT_LEGAL_TEXT, LegalText


def _expected_pages(record, legal=DEFAULT_LEGAL_TEXT, layout=DEFAULT_LAYOUT):
    lines = wrap_lines(build_legal_lines(record, legal), layout.legal_max_chars)
    return 1 + math.ceil(len(lines) / layout.lines_per_page)


# ── Object allocation ────────────────────────────────────────────────


def test_allocate_objects_with_image():
    nums = allocate_objects(3, has_image=True)
    assert nums["catalog"] == 1
    assert nums["pages_root"] == 2
    assert nums["pages"] == [(3, 4), (5, 6), (7, 8)]
    assert (nums["font_regular"], nums["font_bold"]) == (9, 10)
    assert nums["image"] == 11


def test_allocate_objects_without_image():
    nums = allocate_objects(2, has_image=False)
    assert nums["pages"] == [(3, 4), (5, 6)]
    assert (nums["font_regular"], nums["font_bold"]) == (7, 8)
    assert nums["image"] is None


def test_legal_lines_heading(record):
    lines = build_legal_lines(record, LegalText(version="v", text="Linha 1\n\nLinha 2"))
    assert lines == [
        "TERMO COMPLETO",
        f"ID de envio: {record.id}",
        "",
        "Linha 1",
        "",
        "Linha 2",
    ]


# ── Generation ───────────────────────────────────────────────────────


def test_generate_with_signature(record, signature_png):
    pdf = generate_waiver_pdf(record, signature_png)

    assert pdf.startswith(b"%PDF-1.4\n")
    assert pdf.endswith(b"%%EOF\n")
    assert b"(Ana Silva) Tj" in pdf
    assert b"/XObject << /Sig" in pdf
    assert b"/Subtype /Image /Width 8 /Height 4" in pdf
    assert check_xref(pdf) == []

    count = int(re.search(rb"/Type /Pages /Kids \[[^\]]*\] /Count (\d+)", pdf).group(1))
    assert count == _expected_pages(record)


def test_generate_image_is_last_object(record, signature_png):
    pdf = generate_waiver_pdf(record, signature_png)
    size = int(re.search(rb"/Size (\d+)", pdf).group(1))
    image_obj = re.search(rb"(\d+) 0 obj\n<< /Type /XObject /Subtype /Image", pdf)
    assert int(image_obj.group(1)) == size - 1


@pytest.mark.parametrize("signature", [None, b"", b"not a png", b"\x89PNG\r\n\x1a\n"])
def test_generate_degrades_without_usable_signature(record, signature, caplog):
    with caplog.at_level("WARNING", logger="waiverpdf.core.document"):
        pdf = generate_waiver_pdf(record, signature)

    assert b"/XObject" not in pdf
    assert b"/Sig Do" not in pdf
    assert b"re S" in pdf
    assert b"(Ana Silva) Tj" in pdf
    assert check_xref(pdf) == []
    assert "not embedded" in caplog.text


def test_generate_unsupported_png_variant_degrades(record):
    interlaced = make_png(1, 1, [b"\x00\x00\x00"], interlace=1)
    pdf = generate_waiver_pdf(record, interlaced)
    assert b"/Subtype /Image" not in pdf


def test_generate_is_deterministic(record, signature_png):
    assert generate_waiver_pdf(record, signature_png) == generate_waiver_pdf(record, signature_png)


def test_generate_custom_legal_text_and_layout(record):
    legal = LegalText(version="v2", text="Texto curto.")
    pdf = generate_waiver_pdf(record, None, legal_text=legal)
    assert b"/Count 2" in pdf
    assert b"(Texto curto.) Tj" in pdf

    layout = LayoutConfig(legal_line_height=40)
    pdf = generate_waiver_pdf(record, None, layout=layout)
    count = int(re.search(rb"/Count (\d+)", pdf).group(1))
    assert count == _expected_pages(record, layout=layout)
    assert count > _expected_pages(record)


def test_generate_long_legal_text_paginates(record):
    text = "\n".join(f"Clausula {i}: " + "palavra " * 30 for i in range(60))
    legal = LegalText(version="long", text=text)
    pdf = generate_waiver_pdf(record, None, legal_text=legal)
    count = int(re.search(rb"/Count (\d+)", pdf).group(1))
    assert count == _expected_pages(record, legal)
    assert count > 3


# ── Independent parser ───────────────────────────────────────────────


def test_pikepdf_reads_generated_document(record, signature_png):
    pdf_bytes = generate_waiver_pdf(record, signature_png)
    with pikepdf.open(io.BytesIO(pdf_bytes)) as pdf:
        assert len(pdf.pages) == _expected_pages(record)
        first = pdf.pages[0]
        sig = first.Resources.XObject["/Sig"]
        assert int(sig.Width) == 8
        assert int(sig.Height) == 4
        assert sig.read_bytes() == decode_png(signature_png).pixels

        legal_page = pdf.pages[1].Contents.read_bytes()
        assert legal_page.startswith(b"BT\n/F1 10.50 Tf\n14 TL\n48 794 Td\n(TERMO COMPLETO) Tj")
        for page in pdf.pages[1:]:
            assert "/XObject" not in page.Resources


def test_verify_document_with_signature(record, signature_png):
    result = verify_document(generate_waiver_pdf(record, signature_png))
    assert result["valid"] is True
    assert result["xref_ok"] is True
    assert result["page_count"] == _expected_pages(record)
    assert result["has_signature_image"] is True


def test_verify_document_without_signature(record):
    result = verify_document(generate_waiver_pdf(record, None))
    assert result["valid"] is True
    assert result["has_signature_image"] is False


def test_verify_document_rejects_garbage():
    result = verify_document(b"%PDF-1.4\nthis is not really a pdf\n")
    assert result["valid"] is False
    assert result["xref_ok"] is False
