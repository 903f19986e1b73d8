"""Minimal PDF writer that renders text lines centred on A4 pages."""

from __future__ import annotations

import os

PAGE_WIDTH = 595.0
PAGE_HEIGHT = 842.0
MARGIN = 10.0
TOP = 50.0
LINE_HEIGHT = 20.0
FONT_SIZE = 12.0
_MAX_LINE = 1023

# Helvetica advance widths (1/1000 em) for printable ASCII.
_ASCII_WIDTHS = (
    278, 278, 355, 556, 556, 889, 667, 191, 333, 333, 389, 584, 278, 333, 278, 278,
    556, 556, 556, 556, 556, 556, 556, 556, 556, 556, 278, 278, 584, 584, 584, 556,
    1015, 667, 667, 722, 722, 667, 611, 778, 722, 278, 500, 667, 556, 833, 722, 778,
    667, 778, 722, 667, 611, 722, 667, 944, 667, 667, 611, 278, 278, 278, 469, 556,
    333, 556, 556, 500, 556, 556, 278, 556, 556, 222, 222, 500, 222, 833, 556, 556,
    556, 556, 333, 500, 278, 556, 500, 722, 500, 500, 500, 334, 260, 334, 584,
)
_WIDTHS = {chr(32 + offset): width for offset, width in enumerate(_ASCII_WIDTHS)}
_WIDTHS.update({"í": 278, "Í": 278, "Ñ": 722, "Á": 667, "É": 667, "Ó": 778, "Ú": 722})
_DEFAULT_WIDTH = 556

Placement = tuple[float, float, str]


def text_width(text: str, font_size: float = FONT_SIZE) -> float:
    """Return the advance width of ``text`` in Helvetica at ``font_size``."""
    return sum(_WIDTHS.get(ch, _DEFAULT_WIDTH) for ch in text) * font_size / 1000.0


def layout_lines(
    text: str,
    page_width: float,
    page_height: float,
    x: float,
    y: float,
    line_height: float,
) -> tuple[list[list[Placement]], float]:
    """Place each line of ``text`` centred horizontally, breaking pages as needed.

    Returns the pages, each a list of ``(x, y, line)`` with ``y`` measured from
    the top of the page, and the vertical position after the last line.
    """
    *complete, last = text.split("\n")
    lines = [line[:_MAX_LINE] for line in complete]
    if last:
        lines.append(last)

    pages: list[list[Placement]] = [[]]
    for line in lines:
        if y + line_height > page_height:
            pages.append([])
            y = TOP
        pages[-1].append((x + (page_width - text_width(line)) / 2, y, line))
        y += line_height
    return pages, y


def _pdf_string(text: str) -> bytes:
    raw = text.encode("cp1252", errors="replace")
    return (
        raw.replace(b"\\", b"\\\\")
        .replace(b"(", b"\\(")
        .replace(b")", b"\\)")
        .replace(b"\r", b"\\r")
    )


def _content_stream(lines: list[Placement]) -> bytes:
    parts = [b"0 0 0 rg\n"]
    for x, y, line in lines:
        parts.append(
            b"BT /F1 %d Tf 1 0 0 1 %.2f %.2f Tm (%s) Tj ET\n"
            % (int(FONT_SIZE), x, PAGE_HEIGHT - y, _pdf_string(line))
        )
    return b"".join(parts)


def _build_document(pages: list[list[Placement]]) -> bytes:
    page_ids = [4 + 2 * index for index in range(len(pages))]
    kids = b" ".join(b"%d 0 R" % page_id for page_id in page_ids)
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [%s] /Count %d >>" % (kids, len(pages)),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica"
        b" /Encoding /WinAnsiEncoding >>",
    ]
    for page_id, lines in zip(page_ids, pages):
        objects.append(
            b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 %d %d]"
            b" /Resources << /Font << /F1 3 0 R >> >> /Contents %d 0 R >>"
            % (int(PAGE_WIDTH), int(PAGE_HEIGHT), page_id + 1)
        )
        stream = _content_stream(lines)
        objects.append(
            b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream"
        )

    out = bytearray(b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"
    xref_at = len(out)
    out += b"xref\n0 %d\n0000000000 65535 f \n" % (len(objects) + 1)
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    out += b"startxref\n%d\n%%%%EOF\n" % xref_at
    return bytes(out)


def generate_pdf(text: str, filename: str | os.PathLike[str]) -> None:
    """Write ``text`` to an A4 PDF file, one centred line per text line."""
    pages, _ = layout_lines(
        text,
        PAGE_WIDTH - 2 * MARGIN,
        PAGE_HEIGHT - MARGIN,
        MARGIN,
        TOP,
        LINE_HEIGHT,
    )
    with open(filename, "wb") as handle:
        handle.write(_build_document(pages))