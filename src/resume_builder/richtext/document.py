"""Tree model behind an editable rich-text surface.

A document is a flat sequence of blocks. Each block is either a paragraph
(``<p>``, ``<div>``, a heading, or bare inline text when ``tag`` is None) or a
list item. List items remember their nesting ``level`` and the ``group`` of
the top-level list they belong to, so adjacent items of one group serialize
into a single ``<ul>``/``<ol>`` and separate lists stay separate.

Inline content is a list of runs: text with a set of marks and an optional
link target. ``<br>`` is stored as a newline inside a run.

Positions are character offsets into the document text, where blocks are
joined by one separator character. Every offset therefore lands in exactly
one block.
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field, replace

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

from resume_builder.richtext.dialect import (
    BLOCK_TAGS,
    DANGEROUS_TAGS,
    LINK_REL,
    LINK_TARGET,
    LIST_TAGS,
)
from resume_builder.richtext.sanitizer import parse_fragment

MARKS = ("bold", "italic", "underline", "strikethrough")

LINE_BREAK = "\n"
DEFAULT_BLOCK_TAG = "p"
HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})

_MARK_TAGS = {
    "b": "bold",
    "strong": "bold",
    "i": "italic",
    "em": "italic",
    "u": "underline",
    "s": "strikethrough",
    "strike": "strikethrough",
    "del": "strikethrough",
}
_MARK_OUTPUT = {"bold": "b", "italic": "i", "underline": "u", "strikethrough": "s"}


@dataclass(frozen=True)
class Run:
    text: str
    marks: frozenset[str] = frozenset()
    href: str | None = None

    def same_format(self, other: Run) -> bool:
        return self.marks == other.marks and self.href == other.href


@dataclass(frozen=True)
class Selection:
    start: int
    end: int | None = None

    def __post_init__(self) -> None:
        if self.end is None:
            object.__setattr__(self, "end", self.start)
        if self.end < self.start:
            start, end = self.end, self.start
            object.__setattr__(self, "start", start)
            object.__setattr__(self, "end", end)

    @property
    def collapsed(self) -> bool:
        return self.start == self.end


@dataclass
class Block:
    runs: list[Run] = field(default_factory=list)
    tag: str | None = None
    list_item: bool = False
    level: int = 0
    group: int = 0

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)

    @property
    def length(self) -> int:
        return sum(len(run.text) for run in self.runs)

    def copy(self, **changes) -> Block:
        changes.setdefault("runs", list(self.runs))
        return replace(self, **changes)

    def normalize(self) -> None:
        """Drop empty runs and merge neighbours that share formatting."""
        merged: list[Run] = []
        for run in self.runs:
            if not run.text:
                continue
            if merged and merged[-1].same_format(run):
                merged[-1] = replace(merged[-1], text=merged[-1].text + run.text)
            else:
                merged.append(run)
        self.runs = merged

    def run_at(self, offset: int) -> Run | None:
        """Return the run holding the character at offset."""
        cursor = 0
        for run in self.runs:
            if cursor <= offset < cursor + len(run.text):
                return run
            cursor += len(run.text)
        return None


def split_runs(runs: list[Run], offset: int) -> tuple[list[Run], list[Run]]:
    """Split runs at a character offset, cutting a run in two when needed."""
    before: list[Run] = []
    after: list[Run] = []
    cursor = 0
    for run in runs:
        end = cursor + len(run.text)
        if end <= offset:
            before.append(run)
        elif cursor >= offset:
            after.append(run)
        else:
            cut = offset - cursor
            before.append(replace(run, text=run.text[:cut]))
            after.append(replace(run, text=run.text[cut:]))
        cursor = end
    return before, after


@dataclass
class Document:
    blocks: list[Block] = field(default_factory=lambda: [Block()])

    @classmethod
    def from_html(cls, markup: str) -> Document:
        return cls(blocks=_TreeBuilder().build(parse_fragment(markup)))

    def to_html(self) -> str:
        parts: list[str] = []
        i = 0
        while i < len(self.blocks):
            block = self.blocks[i]
            if block.list_item:
                end = i
                while (
                    end < len(self.blocks)
                    and self.blocks[end].list_item
                    and self.blocks[end].group == block.group
                ):
                    end += 1
                parts.append(_render_list_group(self.blocks[i:end]))
                i = end
            else:
                parts.append(_render_block(block))
                i += 1
        return "".join(parts)

    def copy(self) -> Document:
        return Document(blocks=[block.copy() for block in self.blocks])

    @property
    def text(self) -> str:
        return "\n".join(block.text for block in self.blocks)

    @property
    def length(self) -> int:
        return sum(block.length for block in self.blocks) + len(self.blocks) - 1

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()

    def locate(self, pos: int) -> tuple[int, int]:
        """Map a document offset to (block index, offset inside the block)."""
        pos = max(0, min(pos, self.length))
        start = 0
        for index, block in enumerate(self.blocks):
            if pos <= start + block.length:
                return index, pos - start
            start += block.length + 1
        last = len(self.blocks) - 1
        return last, self.blocks[last].length

    def position(self, index: int, offset: int) -> int:
        return sum(block.length + 1 for block in self.blocks[:index]) + offset

    def block_ranges(self, start: int, end: int) -> list[tuple[int, int, int]]:
        """Return (index, local_start, local_end) for each block the range crosses."""
        ranges = []
        block_start = 0
        for index, block in enumerate(self.blocks):
            block_end = block_start + block.length
            if block_start <= end and start <= block_end:
                local_start = max(start, block_start) - block_start
                local_end = min(end, block_end) - block_start
                ranges.append((index, local_start, local_end))
            block_start = block_end + 1
        return ranges

    def touching(self, selection: Selection) -> list[int]:
        first, _ = self.locate(selection.start)
        last, _ = self.locate(selection.end)
        return list(range(first, last + 1))

    def next_group(self) -> int:
        return max((block.group for block in self.blocks), default=0) + 1

    def runs_in_range(self, start: int, end: int) -> list[Run]:
        pieces: list[Run] = []
        for index, local_start, local_end in self.block_ranges(start, end):
            _, rest = split_runs(self.blocks[index].runs, local_start)
            middle, _ = split_runs(rest, local_end - local_start)
            pieces.extend(middle)
        return pieces


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class _Container:
    """Where implicitly opened blocks go while walking the parse tree."""

    tag: str | None = None
    list_item: bool = False
    level: int = 0
    group: int = 0


class _TreeBuilder:
    def __init__(self) -> None:
        self.blocks: list[Block] = []
        self.current: Block | None = None
        self.groups = 0

    def build(self, soup: BeautifulSoup) -> list[Block]:
        self._walk_children(soup, frozenset(), None, _Container())
        self._close()
        return self.blocks or [Block()]

    def _open(self, container: _Container) -> None:
        self.current = Block(
            tag=container.tag,
            list_item=container.list_item,
            level=container.level,
            group=container.group,
        )

    def _close(self) -> None:
        block = self.current
        if block is None:
            return
        # A trailing <br> only keeps an empty line box open
        if block.text.endswith(LINE_BREAK):
            before, _ = split_runs(block.runs, block.length - 1)
            block.runs = before
        block.normalize()
        self.blocks.append(block)
        self.current = None

    def _append(self, run: Run, container: _Container) -> None:
        if self.current is None:
            self._open(container)
        self.current.runs.append(run)

    def _walk_children(self, node, marks, href, container) -> None:
        for child in list(node.children):
            self._walk(child, marks, href, container)

    def _walk(self, node, marks: frozenset[str], href: str | None, container: _Container) -> None:
        if isinstance(node, PreformattedString):
            return
        if isinstance(node, NavigableString):
            text = str(node).replace("\r\n", " ").replace("\n", " ").replace("\r", " ").replace("\t", " ")
            if self.current is None and not text.strip():
                return
            self._append(Run(text, marks, href), container)
            return
        if not isinstance(node, Tag):
            return

        name = node.name
        if name in DANGEROUS_TAGS:
            return
        if name == "br":
            self._append(Run(LINE_BREAK, marks, href), container)
        elif name in LIST_TAGS:
            self._walk_list(node, marks, href, container)
        elif name in BLOCK_TAGS:
            if container.list_item:
                # <li><p>a</p><p>b</p></li> keeps one item, one line per block
                if self.current is not None and self.current.text:
                    self.current.runs.append(Run(LINE_BREAK, marks, href))
                self._walk_children(node, marks, href, container)
                return
            self._close()
            inner = _Container(tag=name)
            self._open(inner)
            self._walk_children(node, marks, href, inner)
            self._close()
        elif name in _MARK_TAGS:
            self._walk_children(node, marks | {_MARK_TAGS[name]}, href, container)
        elif name == "a":
            self._walk_children(node, marks, node.get("href") or href, container)
        else:
            self._walk_children(node, marks, href, container)

    def _walk_list(self, node: Tag, marks, href, container: _Container) -> None:
        self._close()
        if container.list_item:
            level, group = container.level + 1, container.group
        else:
            self.groups += 1
            level, group = 0, self.groups

        item = _Container(tag=node.name, list_item=True, level=level, group=group)
        for child in list(node.children):
            if isinstance(child, PreformattedString):
                continue
            if isinstance(child, NavigableString) and not child.strip():
                continue
            self._open(item)
            if isinstance(child, Tag) and child.name == "li":
                self._walk_children(child, marks, href, item)
            else:
                self._walk(child, marks, href, item)
            self._close()


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def _escape_text(text: str) -> str:
    return html.escape(text, quote=False).replace(LINE_BREAK, "<br/>")


def _open_tag(tag: str, href: str | None) -> str:
    if tag == "a":
        return (
            f'<a href="{html.escape(href or "", quote=True)}" '
            f'target="{LINK_TARGET}" rel="{LINK_REL}">'
        )
    return f"<{tag}>"


def _wanted_tags(run: Run) -> list[tuple[str, str | None]]:
    wanted: list[tuple[str, str | None]] = []
    if run.href is not None:
        wanted.append(("a", run.href))
    for mark in MARKS:
        if mark in run.marks:
            wanted.append((_MARK_OUTPUT[mark], None))
    return wanted


def render_inline(runs: list[Run]) -> str:
    """Serialize runs, reusing open tags shared by neighbouring runs."""
    out: list[str] = []
    stack: list[tuple[str, str | None]] = []
    for run in runs:
        wanted = _wanted_tags(run)
        common = 0
        while common < min(len(stack), len(wanted)) and stack[common] == wanted[common]:
            common += 1
        for tag, _ in reversed(stack[common:]):
            out.append(f"</{tag}>")
        del stack[common:]
        for tag, href in wanted[common:]:
            out.append(_open_tag(tag, href))
            stack.append((tag, href))
        out.append(_escape_text(run.text))
    for tag, _ in reversed(stack):
        out.append(f"</{tag}>")
    return "".join(out)


def _block_inner(block: Block) -> str:
    text = block.text
    if not text:
        return "<br/>"
    inner = render_inline(block.runs)
    if text.endswith(LINE_BREAK):
        inner += "<br/>"
    return inner


def _render_block(block: Block) -> str:
    if block.tag is None:
        return _block_inner(block) if block.text else ""
    return f"<{block.tag}>{_block_inner(block)}</{block.tag}>"


def _render_list_group(items: list[Block]) -> str:
    base = min(item.level for item in items)
    tag = items[0].tag if items[0].level == base else "ul"
    rendered, _ = _render_list(items, 0, base, tag or "ul")
    return rendered


def _render_list(items: list[Block], i: int, level: int, tag: str) -> tuple[str, int]:
    parts = [f"<{tag}>"]
    while i < len(items) and items[i].level >= level:
        item = items[i]
        if item.level > level:
            # Nested items whose parent item is gone
            inner, i = _render_list(items, i, level + 1, _nested_tag(item, level))
            parts.append(f"<li>{inner}</li>")
            continue
        parts.append("<li>")
        parts.append(_block_inner(item))
        i += 1
        if i < len(items) and items[i].level > level:
            inner, i = _render_list(items, i, level + 1, _nested_tag(items[i], level))
            parts.append(inner)
        parts.append("</li>")
    parts.append(f"</{tag}>")
    return "".join(parts), i


def _nested_tag(item: Block, level: int) -> str:
    if item.level == level + 1 and item.tag in LIST_TAGS:
        return item.tag
    return "ul"
