"""Structured export blocks produced from canonical rich-text markup."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class Heading(BaseModel):
    kind: Literal["heading"] = "heading"
    text: str
    level: int = 1


class Paragraph(BaseModel):
    kind: Literal["paragraph"] = "paragraph"
    text: str
    bold: bool = False


class ListItem(BaseModel):
    kind: Literal["list_item"] = "list_item"
    text: str
    indent_level: int = 0


ExportBlock = Annotated[Union[Heading, Paragraph, ListItem], Field(discriminator="kind")]
