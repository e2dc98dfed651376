"""Turn plain-text suggestions into markup for the editor."""

from __future__ import annotations

import html

BULLET = "•"


def suggestion_to_markup(text: str) -> str:
    """Convert a suggestion block to rich-text markup.

    Lines starting with a bullet become list items. When every line is
    bulleted they share one list; when only some are, each bulleted line gets
    its own one-item list and the rest become paragraphs, in order. Plain
    multi-line text becomes one paragraph per line, and a single line is
    returned as escaped inline text.
    """
    lines = [line.strip() for line in text.splitlines() if line.strip()]
    if not lines:
        return ""

    bulleted = [line.startswith(BULLET) for line in lines]

    if all(bulleted):
        items = "".join(f"<li>{_strip_bullet(line)}</li>" for line in lines)
        return f"<ul>{items}</ul>"

    if any(bulleted):
        parts = []
        for line, is_bullet in zip(lines, bulleted):
            if is_bullet:
                parts.append(f"<ul><li>{_strip_bullet(line)}</li></ul>")
            else:
                parts.append(f"<p>{html.escape(line)}</p>")
        return "".join(parts)

    if len(lines) > 1:
        return "".join(f"<p>{html.escape(line)}</p>" for line in lines)

    return html.escape(lines[0])


def _strip_bullet(line: str) -> str:
    return html.escape(line[len(BULLET):].strip())


def append_skills(existing: str, suggestion: str | list[str]) -> str:
    """Append a skills suggestion to a comma-separated skills value."""
    if isinstance(suggestion, (list, tuple)):
        suggestion = ", ".join(s.strip() for s in suggestion if s.strip())
    suggestion = suggestion.strip()
    existing = (existing or "").strip()
    if not existing:
        return suggestion
    if not suggestion:
        return existing
    return f"{existing}, {suggestion}"
