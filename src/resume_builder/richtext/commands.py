"""Formatting commands as pure transforms over a Document and a selection.

Every function returns a new Document (and, where the caret moves, the new
caret offset); the input document is never mutated.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable

from resume_builder.models.editor import FormatState
from resume_builder.richtext.document import (
    DEFAULT_BLOCK_TAG,
    HEADING_TAGS,
    LINE_BREAK,
    MARKS,
    Block,
    Document,
    Run,
    Selection,
    split_runs,
)


def _map_range(doc: Document, start: int, end: int, fn: Callable[[Run], Run]) -> Document:
    doc = doc.copy()
    for index, local_start, local_end in doc.block_ranges(start, end):
        block = doc.blocks[index]
        before, rest = split_runs(block.runs, local_start)
        middle, after = split_runs(rest, local_end - local_start)
        block.runs = before + [fn(run) for run in middle] + after
        block.normalize()
    return doc


def _visible(runs: list[Run]) -> list[Run]:
    return [run for run in runs if run.text.strip(LINE_BREAK)]


def caret_format(block: Block, offset: int) -> Run | None:
    """Formatting new text at offset would pick up from its neighbours."""
    if offset > 0:
        return block.run_at(offset - 1)
    return block.run_at(0)


def toggle_mark(doc: Document, selection: Selection, mark: str) -> Document:
    """Add mark across the selection, or remove it if every character has it."""
    if mark not in MARKS:
        raise ValueError(f"Unknown mark: {mark}")
    if selection.collapsed:
        return doc
    pieces = _visible(doc.runs_in_range(selection.start, selection.end))
    active = bool(pieces) and all(mark in run.marks for run in pieces)
    if active:
        return _map_range(
            doc, selection.start, selection.end,
            lambda run: replace(run, marks=run.marks - {mark}),
        )
    return _map_range(
        doc, selection.start, selection.end,
        lambda run: replace(run, marks=run.marks | {mark}),
    )


def set_link(doc: Document, selection: Selection, href: str) -> Document:
    return _map_range(
        doc, selection.start, selection.end, lambda run: replace(run, href=href)
    )


def insert_text(
    doc: Document,
    pos: int,
    text: str,
    marks: frozenset[str] | None = None,
    href: str | None = None,
) -> tuple[Document, int]:
    """Insert text at pos; newlines become line breaks inside the block.

    Without explicit marks the new text continues the formatting before the
    caret. A link is only continued when the caret sits inside it.
    """
    text = text.replace("\r\n", LINE_BREAK).replace("\r", LINE_BREAK)
    if not text:
        return doc, pos

    doc = doc.copy()
    index, offset = doc.locate(pos)
    block = doc.blocks[index]

    if marks is None:
        neighbour = caret_format(block, offset)
        marks = neighbour.marks if neighbour else frozenset()
        if href is None and offset > 0:
            left, right = block.run_at(offset - 1), block.run_at(offset)
            if left and right and left.href and left.href == right.href:
                href = left.href

    before, after = split_runs(block.runs, offset)
    block.runs = before + [Run(text, frozenset(marks), href)] + after
    block.normalize()
    return doc, doc.position(index, offset) + len(text)


def delete_range(doc: Document, start: int, end: int) -> Document:
    """Remove [start, end); blocks the range crosses merge into the first one."""
    if start >= end:
        return doc
    doc = doc.copy()
    first_index, first_offset = doc.locate(start)
    last_index, last_offset = doc.locate(end)
    first = doc.blocks[first_index]
    head, _ = split_runs(first.runs, first_offset)
    _, tail = split_runs(doc.blocks[last_index].runs, last_offset)
    first.runs = head + tail
    first.normalize()
    del doc.blocks[first_index + 1:last_index + 1]
    return doc


def outdent_item(doc: Document, index: int) -> Document:
    """Move a list item one level out; at the top level it leaves the list."""
    doc = doc.copy()
    block = doc.blocks[index]
    if not block.list_item:
        return doc
    if block.level > 0:
        block.level -= 1
    else:
        block.list_item = False
        block.tag = DEFAULT_BLOCK_TAG
        block.group = 0
    return doc


def delete_backward(doc: Document, selection: Selection) -> tuple[Document, int]:
    if not selection.collapsed:
        return delete_range(doc, selection.start, selection.end), selection.start

    pos = selection.start
    index, offset = doc.locate(pos)
    if offset == 0:
        if doc.blocks[index].list_item:
            return outdent_item(doc, index), pos
        if index == 0:
            return doc, pos
    return delete_range(doc, pos - 1, pos), pos - 1


def split_block(doc: Document, pos: int) -> tuple[Document, int]:
    """Break the block at pos in two; the caret moves to the new block."""
    doc = doc.copy()
    index, offset = doc.locate(pos)
    block = doc.blocks[index]
    before, after = split_runs(block.runs, offset)
    block.runs = before
    new = block.copy(runs=after)
    if not block.list_item:
        if block.tag is None or (not new.text and block.tag in HEADING_TAGS):
            new.tag = DEFAULT_BLOCK_TAG
    block.normalize()
    new.normalize()
    doc.blocks.insert(index + 1, new)
    return doc, doc.position(index + 1, 0)


def insert_line_break(doc: Document, selection: Selection) -> tuple[Document, int]:
    if not selection.collapsed:
        doc = delete_range(doc, selection.start, selection.end)
    return insert_text(doc, selection.start, LINE_BREAK)


def toggle_bullet_list(doc: Document, selection: Selection) -> Document:
    """Turn the touched blocks into bullet items, or back into paragraphs."""
    doc = doc.copy()
    indices = doc.touching(selection)
    blocks = [doc.blocks[i] for i in indices]

    if all(block.list_item and block.tag == "ul" for block in blocks):
        for block in blocks:
            block.list_item = False
            block.tag = DEFAULT_BLOCK_TAG
            block.level = 0
            block.group = 0
        return doc

    previous = doc.blocks[indices[0] - 1] if indices[0] > 0 else None
    if previous is not None and _joinable(previous):
        group = previous.group
    else:
        group = doc.next_group()

    for block in blocks:
        if not block.list_item:
            block.level = 0
        block.list_item = True
        block.tag = "ul"
        block.group = group

    # Merge with a bullet list that directly follows
    following = indices[-1] + 1
    if following < len(doc.blocks) and _joinable(doc.blocks[following]):
        old_group = doc.blocks[following].group
        while (
            following < len(doc.blocks)
            and doc.blocks[following].list_item
            and doc.blocks[following].group == old_group
        ):
            doc.blocks[following].group = group
            following += 1
    return doc


def _joinable(block: Block) -> bool:
    return block.list_item and block.level == 0 and block.tag == "ul"


def insert_fragment(doc: Document, pos: int, fragment: Document) -> tuple[Document, int]:
    """Insert parsed markup at pos and return the caret after it.

    Inline fragments flow into the current block; block fragments split it and
    land between the two halves, dropping a half that ends up empty.
    """
    if fragment.is_blank:
        return doc, pos

    single = fragment.blocks[0]
    if len(fragment.blocks) == 1 and single.tag is None and not single.list_item:
        doc = doc.copy()
        index, offset = doc.locate(pos)
        block = doc.blocks[index]
        before, after = split_runs(block.runs, offset)
        block.runs = before + list(single.runs) + after
        block.normalize()
        return doc, doc.position(index, offset) + single.length

    doc = doc.copy()
    index, offset = doc.locate(pos)
    block = doc.blocks[index]
    before, after = split_runs(block.runs, offset)
    head = block.copy(runs=before)
    tail = block.copy(runs=after)
    if not tail.list_item and tail.tag is None:
        tail.tag = DEFAULT_BLOCK_TAG

    shift = doc.next_group()
    inserted = []
    for piece in fragment.blocks:
        piece = piece.copy()
        if piece.list_item:
            piece.group += shift
        elif piece.tag is None:
            piece.tag = DEFAULT_BLOCK_TAG
        inserted.append(piece)

    replacement = ([head] if head.text else []) + inserted + ([tail] if tail.text else [])
    doc.blocks[index:index + 1] = replacement
    last = index + (1 if head.text else 0) + len(inserted) - 1
    return doc, doc.position(last, inserted[-1].length)


def format_state(
    doc: Document,
    selection: Selection,
    pending: dict[str, bool] | None = None,
) -> FormatState:
    """Report which formats apply at the caret or across the whole selection."""
    indices = doc.touching(selection)
    in_list = all(
        doc.blocks[i].list_item and doc.blocks[i].tag == "ul" for i in indices
    )

    if selection.collapsed:
        index, offset = doc.locate(selection.start)
        run = caret_format(doc.blocks[index], offset)
        marks = set(run.marks) if run else set()
        for mark, on in (pending or {}).items():
            if on:
                marks.add(mark)
            else:
                marks.discard(mark)
        return FormatState(
            **{mark: mark in marks for mark in MARKS},
            list=in_list,
            link=bool(run and run.href),
        )

    pieces = _visible(doc.runs_in_range(selection.start, selection.end))
    return FormatState(
        **{
            mark: bool(pieces) and all(mark in run.marks for run in pieces)
            for mark in MARKS
        },
        list=in_list,
        link=bool(pieces) and all(run.href for run in pieces),
    )
