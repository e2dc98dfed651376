"""Pydantic models for editable rich-text fields."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

SuggestionKind = Literal["summary", "description", "skills"]


class FormatState(BaseModel):
    """Which formats are active at the caret or across the selection."""

    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    list: bool = False
    link: bool = False


class EditorOptions(BaseModel):
    placeholder: str = ""
    character_limit: int = 600  # counter display only, never blocks input
    show_character_count: bool = False
    show_formatting: bool = True
    ai_suggestion_type: SuggestionKind | None = None
