"""Link target validation for anchors inside rich-text fields.

Anchors reach the editor from user prompts, pasted suggestions and stored
documents, so an href is only kept when its scheme is one a resume reader can
safely follow.
"""

from __future__ import annotations

from urllib.parse import urlparse

SAFE_SCHEMES = {"http", "https", "mailto", "tel"}

# Characters browsers ignore inside a scheme ("java\tscript:" still runs)
_IGNORED_SCHEME_CHARS = {"\t", "\n", "\r", "\x00", " "}


def is_safe_href(href: str) -> bool:
    """Return True when href is relative or uses an allowed scheme."""
    cleaned = "".join(ch for ch in href if ch not in _IGNORED_SCHEME_CHARS).strip()
    if not cleaned:
        return False

    try:
        parsed = urlparse(cleaned)
    except ValueError:
        # e.g. an unbalanced "[" in the netloc
        return False
    if not parsed.scheme:
        # Relative path, fragment or query; "//host" keeps the page scheme
        return ":" not in cleaned.split("/", 1)[0]
    return parsed.scheme.lower() in SAFE_SCHEMES


def normalize_href(href: str) -> str:
    """Prefix bare hostnames typed into the link prompt with https://."""
    href = href.strip()
    if not href or "://" in href or href.startswith(("/", "#", "?", "mailto:", "tel:")):
        return href
    if "." in href.split("/", 1)[0] and ":" not in href.split("/", 1)[0]:
        return f"https://{href}"
    return href
