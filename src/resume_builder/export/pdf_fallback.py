"""Fallback PDF renderer using fpdf2 (pure Python, no system deps)."""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path

from fpdf import FPDF

from resume_builder.export.extractor import build_resume_blocks
from resume_builder.models.blocks import ExportBlock, Heading, ListItem, Paragraph
from resume_builder.models.resume import ResumeData

logger = logging.getLogger(__name__)

# Unicode-capable font search paths (macOS, Linux, Windows)
_UNICODE_FONT_PATHS = [
    # macOS
    "/System/Library/Fonts/Supplemental/Arial Unicode.ttf",
    # Linux (apt install fonts-dejavu-core)
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    # Linux (apt install fonts-liberation)
    "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    # Windows
    "C:/Windows/Fonts/arial.ttf",
]

_BULLETS = ("•", "◦", "▪")


def _find_unicode_font() -> str | None:
    """Search for a TTF font that can draw bullets and accented names."""
    for path in _UNICODE_FONT_PATHS:
        if Path(path).exists():
            return path
    return None


def resume_to_pdf_fpdf2(resume: ResumeData) -> bytes:
    """Fallback PDF generation using fpdf2 when WeasyPrint is unavailable."""
    return blocks_to_pdf(build_resume_blocks(resume))


def blocks_to_pdf(blocks: list[ExportBlock]) -> bytes:
    pdf = FPDF()
    pdf.set_auto_page_break(auto=True, margin=20)
    pdf.add_page()

    font_name = "Helvetica"
    unicode_font = _find_unicode_font()
    if unicode_font:
        try:
            pdf.add_font("ResumeFont", "", unicode_font)
            font_name = "ResumeFont"
        except (OSError, RuntimeError):
            logger.debug("Failed to load font %s", unicode_font)

    pdf.set_font(font_name, size=10)
    bold_style = "B" if font_name == "Helvetica" else ""

    for block in blocks:
        if isinstance(block, Heading):
            _draw_heading(pdf, block, font_name, bold_style)
        elif isinstance(block, ListItem):
            bullet = _BULLETS[min(block.indent_level, len(_BULLETS) - 1)]
            if not pdf.is_ttf_font:
                bullet = "-"
            indent = "    " * (block.indent_level + 1)
            _write(pdf, 6, f"{indent}{bullet} {block.text}")
        elif isinstance(block, Paragraph):
            if block.bold:
                pdf.set_font(font_name, style=bold_style, size=10)
            _write(pdf, 6, block.text)
            if block.bold:
                pdf.set_font(font_name, size=10)

    buf = BytesIO()
    pdf.output(buf)
    return buf.getvalue()


def _draw_heading(pdf: FPDF, block: Heading, font_name: str, bold_style: str) -> None:
    if block.level == 1:
        pdf.set_font(font_name, style=bold_style, size=16)
        _write(pdf, 10, block.text)
        pdf.line(pdf.l_margin, pdf.get_y(), pdf.w - pdf.r_margin, pdf.get_y())
        pdf.ln(3)
    else:
        pdf.ln(3)
        pdf.set_font(font_name, style=bold_style, size=13)
        _write(pdf, 8, block.text)
        pdf.ln(1)
    pdf.set_font(font_name, size=10)


def _write(pdf: FPDF, height: float, text: str) -> None:
    pdf.multi_cell(0, height, _safe_text(text, pdf), new_x="LMARGIN", new_y="NEXT")


def _safe_text(text: str, pdf: FPDF) -> str:
    """Core fonts only cover latin-1; anything else is drawn as '?'."""
    if pdf.is_ttf_font:
        return text
    return text.encode("latin-1", errors="replace").decode("latin-1")
