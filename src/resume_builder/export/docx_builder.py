"""DOCX output generated from export blocks."""

from __future__ import annotations

import logging
from pathlib import Path

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt, RGBColor

from resume_builder.export.extractor import build_resume_blocks
from resume_builder.models.blocks import ExportBlock, Heading, ListItem, Paragraph
from resume_builder.models.resume import ResumeData

logger = logging.getLogger(__name__)

# Word's built-in bullet styles only go three levels deep
_BULLET_STYLES = ("List Bullet", "List Bullet 2", "List Bullet 3")


def generate_docx(
    resume: ResumeData,
    output_path: str | Path,
    font_name: str = "Calibri",
    font_size: int = 10,
) -> Path:
    """Write the resume to a .docx file and return its path."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    doc = Document()

    # Set default font
    style = doc.styles["Normal"]
    font = style.font
    font.name = font_name
    font.size = Pt(font_size)

    blocks = build_resume_blocks(resume)
    render_blocks(doc, blocks)

    doc.save(str(output_path))
    logger.debug("Wrote %d blocks to %s", len(blocks), output_path)
    return output_path


def render_blocks(doc: Document, blocks: list[ExportBlock]) -> None:
    for block in blocks:
        if isinstance(block, Heading):
            _render_heading(doc, block)
        elif isinstance(block, ListItem):
            level = min(block.indent_level, len(_BULLET_STYLES) - 1)
            p = doc.add_paragraph(style=_BULLET_STYLES[level])
            _add_lines(p, block.text)
        elif isinstance(block, Paragraph):
            p = doc.add_paragraph()
            _add_lines(p, block.text, bold=block.bold)


def _render_heading(doc: Document, block: Heading) -> None:
    if block.level == 1:
        heading = doc.add_heading(block.text, level=0)
        heading.alignment = WD_ALIGN_PARAGRAPH.CENTER
    else:
        heading = doc.add_heading(block.text, level=min(block.level, 9))
    for run in heading.runs:
        run.font.color.rgb = RGBColor(0x1A, 0x1A, 0x1A)


def _add_lines(paragraph, text: str, bold: bool = False) -> None:
    """Add text to a paragraph, turning newlines into line breaks."""
    for i, line in enumerate(text.split("\n")):
        run = paragraph.add_run(line)
        if bold:
            run.bold = True
        if i < text.count("\n"):
            run.add_break()
