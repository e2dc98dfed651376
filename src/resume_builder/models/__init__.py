"""Data models for the resume builder."""

from resume_builder.models.analysis import KeywordMatch
from resume_builder.models.blocks import ExportBlock, Heading, ListItem, Paragraph
from resume_builder.models.editor import EditorOptions, FormatState, SuggestionKind
from resume_builder.models.resume import (
    Link,
    PersonalInfo,
    ResumeData,
    ResumeItem,
    ResumeSection,
    default_resume,
)

__all__ = [
    "EditorOptions",
    "ExportBlock",
    "FormatState",
    "Heading",
    "KeywordMatch",
    "Link",
    "ListItem",
    "Paragraph",
    "PersonalInfo",
    "ResumeData",
    "ResumeItem",
    "ResumeSection",
    "SuggestionKind",
    "default_resume",
]
