"""Repair list markup so every list child is a list item."""

from __future__ import annotations

import logging

from bs4.element import NavigableString, PreformattedString, Tag

from resume_builder.richtext.dialect import LIST_TAGS, NBSP
from resume_builder.richtext.sanitizer import parse_fragment

logger = logging.getLogger(__name__)


def normalize_lists(html: str) -> str:
    """Wrap stray list children in <li> and give empty lists one item.

    Runs after every content-changing command and on raw input, since pasted
    or suggested markup can put text or inline elements straight under a
    <ul>/<ol>. Content is never dropped: wrapped children keep their text
    and formatting.
    """
    if not html:
        return ""

    soup = parse_fragment(html)
    for lst in soup.find_all(list(LIST_TAGS)):
        if not _has_content(lst):
            logger.debug("Filling empty <%s>", lst.name)
            lst.clear()
            item = soup.new_tag("li")
            item.string = NBSP
            lst.append(item)
            continue

        for child in list(lst.children):
            if isinstance(child, Tag):
                if child.name != "li":
                    logger.debug("Wrapping <%s> in <li>", child.name)
                    child.wrap(soup.new_tag("li"))
            elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
                if child.strip():
                    item = soup.new_tag("li")
                    item.string = str(child)
                    child.replace_with(item)

    return str(soup)


def _has_content(lst: Tag) -> bool:
    for child in lst.children:
        if isinstance(child, Tag):
            return True
        if isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            if child.strip():
                return True
    return False
