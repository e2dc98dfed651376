"""Resume rendering to themed HTML and PDF."""

from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader
from markupsafe import Markup

from resume_builder.config import AVAILABLE_THEMES
from resume_builder.export.pdf_fallback import resume_to_pdf_fpdf2
from resume_builder.models.resume import ResumeData
from resume_builder.richtext.canonical import canonicalize

logger = logging.getLogger(__name__)

CSS_THEMES_DIR = Path(__file__).parent / "css_themes"
BASE_TEMPLATE_DIR = Path(__file__).parent

THEME_COLORS = {
    "default": "#000000",
    "blue": "#3B82F6",
    "green": "#10B981",
    "purple": "#8B5CF6",
    "red": "#EF4444",
    "orange": "#F97316",
    "teal": "#14B8A6",
}


def render_pdf(
    resume: ResumeData,
    theme: str = "professional",
    color: str = "default",
) -> bytes:
    """Render the resume to PDF bytes, through WeasyPrint when it is installed."""
    if theme not in AVAILABLE_THEMES:
        theme = "professional"
    try:
        from weasyprint import HTML
    except (ImportError, OSError):
        logger.warning("WeasyPrint not available, using fpdf2 fallback")
        return resume_to_pdf_fpdf2(resume)

    html = _resume_to_styled_html(resume, theme, color)
    return HTML(string=html).write_pdf()


def render_html_preview(
    resume: ResumeData,
    theme: str = "professional",
    color: str = "default",
) -> str:
    """Render the resume to a themed HTML string (for preview)."""
    if theme not in AVAILABLE_THEMES:
        theme = "professional"
    return _resume_to_styled_html(resume, theme, color)


def _resume_to_styled_html(resume: ResumeData, theme: str, color: str) -> str:
    """Fill the page template; rich-text fields go in as canonical markup."""
    css_path = CSS_THEMES_DIR / f"{theme}.css"
    css = css_path.read_text(encoding="utf-8") if css_path.exists() else ""
    env = Environment(
        loader=FileSystemLoader(str(BASE_TEMPLATE_DIR)),
        autoescape=True,
    )
    template = env.get_template("base.html")

    info = resume.personal_info
    sections = [
        {
            "title": section.title,
            "entries": [
                {
                    "title": item.title,
                    "subtitle": item.subtitle,
                    "date": item.date,
                    "description": Markup(canonicalize(item.description)),
                }
                for item in section.items
            ],
        }
        for section in resume.sections
    ]
    return template.render(
        title=f"{info.full_name} - Resume" if info.full_name else "Resume",
        theme=theme,
        css=Markup(css),
        accent=THEME_COLORS.get(color, THEME_COLORS["default"]),
        info=info,
        summary=Markup(canonicalize(info.summary)),
        sections=sections,
    )
