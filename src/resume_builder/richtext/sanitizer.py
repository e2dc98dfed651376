"""Reduce arbitrary markup to the rich-text dialect."""

from __future__ import annotations

import html
import logging
import warnings

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning, ParserRejectedMarkup
from bs4.element import NavigableString, PreformattedString, Tag

from resume_builder.richtext.dialect import (
    ALLOWED_ATTRS,
    ALLOWED_TAGS,
    DANGEROUS_TAGS,
    LINK_REL,
    LINK_TARGET,
    STRIKE_ALIASES,
)
from resume_builder.utils.url_validator import is_safe_href

logger = logging.getLogger(__name__)

_ASCII_SPACES = str.maketrans("", "", "\x20\x0a\x09\x0c\x0d")

# The parser keeps whitespace inside these as written
_WHITESPACE_TAGS = ["pre", "textarea"]


def parse_fragment(markup: str) -> BeautifulSoup:
    """Parse markup permissively into a detached tree.

    Input the parser refuses outright is kept as escaped text so callers
    always get a tree back.
    """
    with warnings.catch_warnings():
        # Short values such as "python.py" look like filenames to bs4
        warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
        try:
            return BeautifulSoup(markup or "", "html.parser")
        except ParserRejectedMarkup:
            logger.warning("Parser rejected markup, keeping it as text")
            return BeautifulSoup(html.escape(markup), "html.parser")


def sanitize(raw_html: str) -> str:
    """Return raw_html with unsafe markup removed and links normalized.

    Dangerous elements (script, iframe, object, embed, style) are dropped with
    their content, tags outside the dialect are unwrapped, attributes are
    reduced to the allowed set and every anchor opens in a new tab without an
    opener reference. Never raises; applying it twice changes nothing.
    """
    if not raw_html:
        return ""

    soup = parse_fragment(raw_html)

    for tag in soup.find_all(DANGEROUS_TAGS):
        if not tag.decomposed:
            logger.debug("Dropping <%s> element", tag.name)
            tag.decompose()

    # Comments, doctypes, CDATA and processing instructions, empty ones included
    for node in list(soup.descendants):
        if isinstance(node, PreformattedString):
            node.extract()

    for tag in soup.find_all(True):
        if tag.name in STRIKE_ALIASES:
            tag.name = "s"
        if tag.name not in ALLOWED_TAGS:
            logger.debug("Unwrapping <%s> outside the dialect", tag.name)
            tag.unwrap()
            continue
        _clean_attributes(tag)

    for link in soup.find_all("a"):
        link.attrs.pop("target", None)
        link.attrs.pop("rel", None)
        link["target"] = LINK_TARGET
        link["rel"] = LINK_REL

    _collapse_strings(soup)
    return str(soup)


def _collapse_strings(soup: BeautifulSoup) -> None:
    """Leave text nodes the way the parser would build them from the output.

    Removals leave neighbouring strings behind; the parser reads them back
    as one string, and shrinks a whitespace-only one to a single space or
    newline.
    """
    soup.smooth()
    strings = [node for node in soup.descendants if isinstance(node, NavigableString)]
    for node in strings:
        if isinstance(node, PreformattedString):
            continue
        if not node:
            node.extract()
            continue
        if node.translate(_ASCII_SPACES):
            continue
        collapsed = "\n" if "\n" in node else " "
        if node != collapsed and node.find_parent(_WHITESPACE_TAGS) is None:
            node.replace_with(collapsed)


def _clean_attributes(tag: Tag) -> None:
    for name in list(tag.attrs):
        if name.lower() not in ALLOWED_ATTRS:
            del tag.attrs[name]

    href = tag.attrs.get("href")
    if href is not None and (tag.name != "a" or not is_safe_href(str(href))):
        logger.debug("Dropping href %r", href)
        del tag.attrs["href"]
