"""Rich-text fields: the stored HTML dialect and the editing surface."""

from resume_builder.richtext.canonical import canonicalize
from resume_builder.richtext.document import Document, Selection
from resume_builder.richtext.empty import is_empty
from resume_builder.richtext.ingest import append_skills, suggestion_to_markup
from resume_builder.richtext.lists import normalize_lists
from resume_builder.richtext.sanitizer import sanitize
from resume_builder.richtext.surface import (
    ClipboardData,
    EditableSurface,
    FormatCommandController,
    KeyEvent,
    UnsupportedCommandError,
)

__all__ = [
    "ClipboardData",
    "Document",
    "EditableSurface",
    "FormatCommandController",
    "KeyEvent",
    "Selection",
    "UnsupportedCommandError",
    "append_skills",
    "canonicalize",
    "is_empty",
    "normalize_lists",
    "sanitize",
    "suggestion_to_markup",
]
