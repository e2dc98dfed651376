"""Turn canonical rich-text fields into export blocks and plain text."""

from __future__ import annotations

import logging
import re

from bs4.element import NavigableString, PreformattedString, Tag

from resume_builder.models.blocks import ExportBlock, Heading, ListItem, Paragraph
from resume_builder.models.resume import ResumeData
from resume_builder.richtext.dialect import BLOCK_TAGS, DANGEROUS_TAGS, LIST_TAGS, NBSP
from resume_builder.richtext.empty import is_empty
from resume_builder.richtext.sanitizer import parse_fragment

logger = logging.getLogger(__name__)

_LIST_MARKERS = ["ul", "ol", "li"]
_WS_RE = re.compile(r"\s+")
_LINE_ENDING_TAGS = BLOCK_TAGS | {"li"}

SUMMARY_HEADING = "Professional Summary"


def extract_blocks(html: str, preserve_lines: bool = False) -> list[ExportBlock]:
    """Convert one rich-text field into export blocks.

    Markup containing lists yields one ListItem per non-blank <li>, with
    indent_level following the list nesting; text outside the lists becomes
    paragraphs in document order. Markup without lists becomes a single
    Paragraph whose line breaks follow <br> and block boundaries, or one
    Paragraph per non-blank line when preserve_lines is set.
    """
    if not html or is_empty(html):
        return []

    soup = parse_fragment(html)
    if soup.find(_LIST_MARKERS) is None:
        text = _lines_text(soup)
        if not text:
            return []
        if preserve_lines:
            return [Paragraph(text=line) for line in text.split("\n") if line.strip()]
        return [Paragraph(text=text)]

    blocks: list[ExportBlock] = []
    _collect(list(soup.children), blocks)
    return blocks


def strip_html(html: str) -> str:
    """Plain text of a field with all markup removed and whitespace collapsed."""
    if not html:
        return ""
    return _WS_RE.sub(" ", _raw_text(parse_fragment(html))).strip()


def _raw_text(node) -> str:
    """Text of node with a newline after every block, item and <br>."""
    if isinstance(node, PreformattedString):
        return ""
    if isinstance(node, NavigableString):
        return _WS_RE.sub(" ", str(node).replace(NBSP, " "))
    if not isinstance(node, Tag) or node.name in DANGEROUS_TAGS:
        return ""
    if node.name == "br":
        return "\n"
    text = "".join(_raw_text(child) for child in node.children)
    if node.name in _LINE_ENDING_TAGS:
        text += "\n"
    return text


def _lines_text(node) -> str:
    lines = [line.strip() for line in _raw_text(node).split("\n")]
    return "\n".join(lines).strip("\n")


def _collect(nodes: list, blocks: list[ExportBlock]) -> None:
    buffer: list = []
    for node in nodes:
        if isinstance(node, Tag) and node.name in LIST_TAGS:
            _flush(buffer, blocks)
            _list_items(node, 0, blocks)
        elif isinstance(node, Tag) and node.name == "li":
            _flush(buffer, blocks)
            _list_item(node, 0, blocks)
        elif isinstance(node, Tag) and node.find(_LIST_MARKERS) is not None:
            _flush(buffer, blocks)
            _collect(list(node.children), blocks)
        else:
            buffer.append(node)
    _flush(buffer, blocks)


def _flush(buffer: list, blocks: list[ExportBlock]) -> None:
    if not buffer:
        return
    text = "".join(_raw_text(node) for node in buffer)
    for line in text.split("\n"):
        if line.strip():
            blocks.append(Paragraph(text=line.strip()))
    buffer.clear()


def _list_items(lst: Tag, depth: int, blocks: list[ExportBlock]) -> None:
    for child in lst.children:
        if isinstance(child, Tag) and child.name == "li":
            _list_item(child, depth, blocks)
        elif isinstance(child, Tag) and child.name in LIST_TAGS:
            _list_items(child, depth + 1, blocks)
        else:
            # Stray content directly under a list still reads as an item
            text = _WS_RE.sub(" ", _raw_text(child)).strip()
            if text:
                blocks.append(ListItem(text=text, indent_level=depth))


def _list_item(item: Tag, depth: int, blocks: list[ExportBlock]) -> None:
    nested: list[Tag] = []
    parts: list[str] = []
    for child in item.children:
        if isinstance(child, Tag) and child.name in LIST_TAGS:
            nested.append(child)
        else:
            parts.append(_raw_text(child))

    text = _WS_RE.sub(" ", "".join(parts)).strip()
    if text:
        blocks.append(ListItem(text=text, indent_level=depth))
    else:
        logger.debug("Dropping blank list item")

    for lst in nested:
        _list_items(lst, depth + 1, blocks)


def build_resume_blocks(resume: ResumeData) -> list[ExportBlock]:
    """Lay out a whole resume as an ordered block sequence."""
    info = resume.personal_info
    blocks: list[ExportBlock] = []

    if info.full_name:
        blocks.append(Heading(text=info.full_name, level=1))
    if info.title:
        blocks.append(Paragraph(text=info.title))

    contact = " • ".join(v for v in (info.email, info.phone, info.location) if v)
    if contact:
        blocks.append(Paragraph(text=contact))
    if info.links:
        blocks.append(
            Paragraph(text=" | ".join(f"{link.title}: {link.url}" for link in info.links))
        )

    summary = extract_blocks(info.summary)
    if summary:
        blocks.append(Heading(text=SUMMARY_HEADING, level=2))
        blocks.extend(summary)

    for section in resume.sections:
        blocks.append(Heading(text=section.title, level=2))
        for item in section.items:
            if item.title:
                blocks.append(Paragraph(text=item.title, bold=True))
            meta = " | ".join(v for v in (item.subtitle, item.date) if v)
            if meta:
                blocks.append(Paragraph(text=meta))
            blocks.extend(extract_blocks(item.description))

    return blocks


def extract_plain_text(resume: ResumeData) -> str:
    """Flatten a resume into the text corpus used for keyword analysis."""
    info = resume.personal_info
    lines = [info.full_name, info.title, strip_html(info.summary)]
    for section in resume.sections:
        lines.append(section.title)
        for item in section.items:
            lines.append(f"{item.title} - {item.subtitle}")
            lines.append(item.date)
            lines.append(strip_html(item.description))
    return "\n".join(lines)


def resume_filename(resume: ResumeData, ext: str) -> str:
    info = resume.personal_info
    return f"{info.first_name}_{info.last_name}_Resume.{ext.lstrip('.')}"
