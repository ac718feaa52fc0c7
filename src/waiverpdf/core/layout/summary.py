"""
Summary (cover) page of the waiver certificate.

Layout, top to bottom on the left column:

  +-----------------------------------------------------------+
  |  BLIND WAKE CLUB                                          |
  |  Termo de Ciencia de Riscos e Responsabilidade            |
  |  submission metadata, hashes                              |
  |  Dados do participante ...                                |
  |  Consentimentos ...                                       |
  |                                                           |
  |  Assinatura capturada                                     |
  |  +----------------------+   Resumo de evidencias:         |
  |  |   [signature img]    |   - Chave da assinatura: ...    |
  |  +----------------------+   - Chave do PDF: ...           |
  |       Participant Name                                    |
  |          Documento gerado automaticamente ...             |
  +-----------------------------------------------------------+

The signature box sits at a fixed position near the bottom of the page;
the text stack flows down from the top margin.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from .config import DEFAULT_LAYOUT
from .stream import FontName, encode_ops, image_op, rect_stroke_op, text_op
from .text import centered_x, max_chars_for, wrap_line

if TYPE_CHECKING:
    from ...records import SubmissionRecord
    from .config import LayoutConfig

__all__ = [
    "SIGNATURE_IMAGE_NAME",
    "build_summary_content",
    "format_datetime",
    "format_flag",
]

_logger = logging.getLogger(__name__)

# ── Text ──────────────────────────────────────────────────────────────

ORGANIZATION_NAME = "BLIND WAKE CLUB"
DOCUMENT_TITLE = "Termo de Ciencia de Riscos e Responsabilidade"
FOOTER_TEXT = "Documento gerado automaticamente pelo Blind Wake Club."

# Resource name of the signature image XObject on the summary page
SIGNATURE_IMAGE_NAME = "Sig"

# ── Typography (size, leading) ────────────────────────────────────────

_TITLE = (17.0, 21.0)
_HEADING = (12.0, 16.0)
_BODY = (10.5, 14.0)
_EVIDENCE_HEADING = (11.0, 14.0)
_EVIDENCE_BODY = (10.0, 13.0)
_CAPTION_SIZE = 10.0
_FOOTER_SIZE = 9.0

# Wrapping never goes below this many characters per line
_MIN_WRAP_CHARS = 12

_TITLE_GAP = 4.0
_SECTION_GAP = 6.0

# ── Signature box geometry ───────────────────────────────────────────

_SIG_BOX_Y = 110.0
_SIG_BOX_WIDTH = 265.0
_SIG_BOX_HEIGHT = 112.0
_SIG_BOX_PADDING = 8.0
_SIG_LABEL_OFFSET = 16.0  # label baseline above the box
_SIG_CAPTION_OFFSET = 14.0  # name caption baseline below the box
_EVIDENCE_COLUMN_GAP = 20.0
_FOOTER_Y = 62.0


def format_datetime(value: str) -> str:
    """Render an ISO timestamp as ``dd/mm/YYYY, HH:MM:SS``; unparsable values pass through."""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return parsed.strftime("%d/%m/%Y, %H:%M:%S")


def format_flag(value: bool) -> str:
    return "sim" if value else "nao"


class _TextStack:
    """Left-column text cursor flowing down from the top margin."""

    def __init__(self, layout: LayoutConfig) -> None:
        self.layout = layout
        self.y = layout.page_height - layout.margin
        self.ops: list[str] = []

    def push(self, text: str, font: FontName, style: tuple[float, float]) -> None:
        size, leading = style
        max_chars = max_chars_for(
            self.layout.content_width, size, self.layout.char_width_factor, _MIN_WRAP_CHARS
        )
        for line in wrap_line(text, max_chars):
            self.ops.append(text_op(font, size, self.layout.margin, self.y, line))
            self.y -= leading

    def gap(self, amount: float) -> None:
        self.y -= amount


def _metadata_lines(record: SubmissionRecord) -> list[str]:
    return [
        f"ID do envio: {record.id}",
        f"Criado em: {format_datetime(record.created_at)}",
        f"Versao do termo: {record.waiver.version}",
        f"Aceite registrado em: {format_datetime(record.waiver.accepted_at)}",
        f"Hash do texto legal: {record.waiver.text_hash}",
        f"Hash de integridade: {record.tamper_hash}",
        f"SHA-256 da assinatura: {record.signature.sha256}",
    ]


def _participant_lines(record: SubmissionRecord) -> list[str]:
    p = record.payload
    return [
        f"Nome completo: {p.full_name}",
        f"Data de nascimento: {p.date_of_birth}",
        f"Email: {p.email}",
        f"Telefone: {p.phone}",
        f"Documento: {p.id_number}",
        f"Contato de emergencia: {p.emergency_contact_name}",
        f"Telefone emergencia: {p.emergency_contact_phone}",
        f"Parentesco emergencia: {p.emergency_contact_relationship}",
        f"Foto enviada: {format_flag(bool(p.photo_key))}",
    ]


def _consent_lines(record: SubmissionRecord) -> list[str]:
    p = record.payload
    return [
        f"Leitura e aceite do termo completo: {format_flag(p.consent_waiver_text)}",
        f"Responsabilidade civil: {format_flag(p.consent_liability)}",
        f"Consentimento medico: {format_flag(p.consent_medical)}",
        f"Privacidade e retencao: {format_flag(p.consent_privacy)}",
    ]


def _evidence_ops(record: SubmissionRecord, layout: LayoutConfig) -> list[str]:
    column_x = layout.margin + _SIG_BOX_WIDTH + _EVIDENCE_COLUMN_GAP
    column_w = layout.page_width - column_x - layout.margin
    y = _SIG_BOX_Y + _SIG_BOX_HEIGHT + 2
    lines = [
        "Resumo de evidencias:",
        f"- Chave da assinatura: {record.signature.key}",
        f"- Chave do PDF: {record.waiver_pdf_key or 'indisponivel'}",
        "- Texto legal completo nas paginas seguintes.",
    ]

    # Body size drives the column width for every line, heading included.
    max_chars = max_chars_for(column_w, _EVIDENCE_BODY[0], layout.char_width_factor, _MIN_WRAP_CHARS)

    ops: list[str] = []
    for index, line in enumerate(lines):
        font: FontName = "F2" if index == 0 else "F1"
        size, leading = _EVIDENCE_HEADING if index == 0 else _EVIDENCE_BODY
        for wrapped in wrap_line(line, max_chars):
            ops.append(text_op(font, size, column_x, y, wrapped))
            y -= leading
    return ops


def build_summary_content(
    record: SubmissionRecord,
    include_signature_image: bool,
    layout: LayoutConfig = DEFAULT_LAYOUT,
) -> bytes:
    """Build the content stream of the summary page.

    Args:
        record: Submission to describe.
        include_signature_image: Draw the ``/Sig`` XObject inside the
            signature box. The page's resources must then define it.
        layout: Page geometry.

    Returns:
        Content stream bytes.
    """
    stack = _TextStack(layout)
    stack.push(ORGANIZATION_NAME, "F2", _TITLE)
    stack.push(DOCUMENT_TITLE, "F2", _HEADING)
    stack.gap(_TITLE_GAP)

    for line in _metadata_lines(record):
        stack.push(line, "F1", _BODY)
    stack.gap(_SECTION_GAP)

    stack.push("Dados do participante", "F2", _HEADING)
    for line in _participant_lines(record):
        stack.push(line, "F1", _BODY)
    stack.gap(_SECTION_GAP)

    stack.push("Consentimentos", "F2", _HEADING)
    for line in _consent_lines(record):
        stack.push(line, "F1", _BODY)

    box_x = layout.margin
    box_top = _SIG_BOX_Y + _SIG_BOX_HEIGHT
    label_y = box_top + _SIG_LABEL_OFFSET
    if stack.y < label_y + _BODY[1]:
        _logger.warning(
            "Summary text for %s reaches y=%.1f and overlaps the signature box (top label "
            "at y=%.1f). Long field values are the usual cause.",
            record.id,
            stack.y,
            label_y,
        )

    ops = stack.ops
    ops.append(text_op("F2", _HEADING[0], box_x, label_y, "Assinatura capturada"))
    ops.append(rect_stroke_op(box_x, _SIG_BOX_Y, _SIG_BOX_WIDTH, _SIG_BOX_HEIGHT))

    if include_signature_image:
        ops.append(
            image_op(
                SIGNATURE_IMAGE_NAME,
                box_x + _SIG_BOX_PADDING,
                _SIG_BOX_Y + _SIG_BOX_PADDING,
                _SIG_BOX_WIDTH - 2 * _SIG_BOX_PADDING,
                _SIG_BOX_HEIGHT - 2 * _SIG_BOX_PADDING,
            )
        )

    name = record.payload.full_name
    caption_x = centered_x(
        name, _CAPTION_SIZE, left=box_x, width=_SIG_BOX_WIDTH, factor=layout.char_width_factor
    )
    ops.append(text_op("F1", _CAPTION_SIZE, caption_x, _SIG_BOX_Y - _SIG_CAPTION_OFFSET, name))

    ops.extend(_evidence_ops(record, layout))

    footer_x = centered_x(
        FOOTER_TEXT, _FOOTER_SIZE, width=layout.page_width, factor=layout.char_width_factor
    )
    ops.append(text_op("F1", _FOOTER_SIZE, footer_x, _FOOTER_Y, FOOTER_TEXT))

    return encode_ops(ops)
