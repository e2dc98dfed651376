"""The single path every rich-text value takes before it is stored."""

from __future__ import annotations

from resume_builder.richtext.empty import is_empty
from resume_builder.richtext.lists import normalize_lists
from resume_builder.richtext.sanitizer import sanitize


def canonicalize(html: str) -> str:
    """Repair lists, sanitize, and store semantically empty content as ""."""
    markup = sanitize(normalize_lists(html))
    return "" if is_empty(markup) else markup
