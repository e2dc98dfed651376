"""Detect markup that carries no visible text."""

from __future__ import annotations

import re

_NBSP_RE = re.compile(r"&nbsp;|&#160;|&#xa0;|\xa0", re.IGNORECASE)
_BR_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_EMPTY_P_RE = re.compile(r"<p>\s*</p>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]*>")


def is_empty(html: str) -> bool:
    """Return True when html has no text once breaks and tags are removed.

    Placeholder visibility and the value stored on blur both follow this
    check, so "<p></p>", "<br>" and "&nbsp;" all count as empty.
    """
    if not html:
        return True

    cleaned = _NBSP_RE.sub(" ", html)
    cleaned = _BR_RE.sub("", cleaned)
    cleaned = _EMPTY_P_RE.sub("", cleaned)
    cleaned = _TAG_RE.sub("", cleaned)
    return cleaned.strip() == ""
