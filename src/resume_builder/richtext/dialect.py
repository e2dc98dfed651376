"""The constrained HTML dialect stored in rich-text fields."""

from __future__ import annotations

ALLOWED_TAGS = frozenset({
    "p", "div", "span", "br", "b", "strong", "i", "em", "u", "s", "ul", "ol", "li",
    "a", "h1", "h2", "h3", "h4", "h5", "h6", "blockquote", "pre", "code", "mark",
})

ALLOWED_ATTRS = frozenset({"href", "target", "rel", "class", "id", "style"})

# Removed together with everything inside them
DANGEROUS_TAGS = ("script", "iframe", "object", "embed", "style")

# Legacy strikethrough carriers rewritten to <s>
STRIKE_ALIASES = frozenset({"strike", "del"})

BLOCK_TAGS = frozenset({
    "p", "div", "h1", "h2", "h3", "h4", "h5", "h6", "blockquote", "pre",
})

LIST_TAGS = frozenset({"ul", "ol"})

LINK_TARGET = "_blank"
LINK_REL = "noopener noreferrer"

NBSP = "\xa0"
