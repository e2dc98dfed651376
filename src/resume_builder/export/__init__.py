"""DOCX, PDF and HTML export for resume-builder."""
from resume_builder.export.docx_builder import generate_docx
from resume_builder.export.extractor import (
    build_resume_blocks,
    extract_blocks,
    extract_plain_text,
    resume_filename,
    strip_html,
)
from resume_builder.export.pdf_renderer import render_html_preview, render_pdf

__all__ = [
    "build_resume_blocks",
    "extract_blocks",
    "extract_plain_text",
    "generate_docx",
    "render_html_preview",
    "render_pdf",
    "resume_filename",
    "strip_html",
]
