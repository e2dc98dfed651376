"""Tests for formatting commands over the document tree."""

from __future__ import annotations

import pytest

from resume_builder.richtext import commands
from resume_builder.richtext.document import Document, Selection


def doc_of(markup: str) -> Document:
    return Document.from_html(markup)


class TestToggleMark:
    def test_bold_range(self):
        doc = commands.toggle_mark(doc_of("hello world"), Selection(0, 5), "bold")
        assert doc.to_html() == "<b>hello</b> world"

    def test_toggle_twice_removes(self):
        doc = doc_of("hello world")
        once = commands.toggle_mark(doc, Selection(0, 5), "bold")
        twice = commands.toggle_mark(once, Selection(0, 5), "bold")
        assert twice.to_html() == "hello world"

    def test_partially_marked_range_gets_mark_everywhere(self):
        doc = commands.toggle_mark(doc_of("<b>hello</b> world"), Selection(0, 11), "bold")
        assert doc.to_html() == "<b>hello world</b>"

    def test_input_not_mutated(self):
        doc = doc_of("hello")
        commands.toggle_mark(doc, Selection(0, 5), "italic")
        assert doc.to_html() == "hello"

    def test_across_blocks(self):
        doc = commands.toggle_mark(doc_of("<p>ab</p><p>cd</p>"), Selection(1, 4), "underline")
        assert doc.to_html() == "<p>a<u>b</u></p><p><u>c</u>d</p>"

    def test_collapsed_selection_is_noop(self):
        doc = doc_of("abc")
        assert commands.toggle_mark(doc, Selection(1), "bold") is doc

    def test_unknown_mark(self):
        with pytest.raises(ValueError):
            commands.toggle_mark(doc_of("abc"), Selection(0, 1), "blink")


class TestInsertAndDelete:
    def test_typing_continues_formatting(self):
        doc, pos = commands.insert_text(doc_of("<b>ab</b>"), 2, "c")
        assert doc.to_html() == "<b>abc</b>"
        assert pos == 3

    def test_explicit_marks_override(self):
        doc, _ = commands.insert_text(doc_of("<b>ab</b>"), 1, "x", marks=frozenset())
        assert doc.to_html() == "<b>a</b>x<b>b</b>"

    def test_typing_after_link_does_not_extend_it(self):
        doc, _ = commands.insert_text(doc_of('<a href="https://a.com">ab</a>'), 2, "c")
        assert doc.to_html().endswith("</a>c")

    def test_delete_range_merges_blocks(self):
        doc = commands.delete_range(doc_of("<p>ab</p><p>cd</p>"), 1, 4)
        assert doc.to_html() == "<p>ad</p>"

    def test_backspace_at_block_start_merges(self):
        doc, pos = commands.delete_backward(doc_of("<p>ab</p><p>cd</p>"), Selection(3))
        assert doc.to_html() == "<p>abcd</p>"
        assert pos == 2

    def test_backspace_at_item_start_leaves_list(self):
        doc, pos = commands.delete_backward(doc_of("<ul><li>a</li></ul>"), Selection(0))
        assert doc.to_html() == "<p>a</p>"
        assert pos == 0

    def test_backspace_at_document_start_is_noop(self):
        doc, pos = commands.delete_backward(doc_of("<p>ab</p>"), Selection(0))
        assert doc.to_html() == "<p>ab</p>"
        assert pos == 0


class TestSplitBlock:
    def test_paragraph_split(self):
        doc, pos = commands.split_block(doc_of("<p>abcd</p>"), 2)
        assert doc.to_html() == "<p>ab</p><p>cd</p>"
        assert pos == 3

    def test_bare_text_split_starts_paragraph(self):
        doc, _ = commands.split_block(doc_of("abcd"), 2)
        assert doc.to_html() == "ab<p>cd</p>"

    def test_list_item_split(self):
        doc, pos = commands.split_block(doc_of("<ul><li>ab</li></ul>"), 1)
        assert doc.to_html() == "<ul><li>a</li><li>b</li></ul>"
        assert pos == 2

    def test_heading_end_continues_as_paragraph(self):
        doc, _ = commands.split_block(doc_of("<h2>Title</h2>"), 5)
        assert doc.to_html() == "<h2>Title</h2><p><br/></p>"

    def test_nested_empty_item_outdents_one_level(self):
        doc = doc_of("<ul><li>a<ul><li><br></li></ul></li></ul>")
        doc = commands.outdent_item(doc, 1)
        assert doc.to_html() == "<ul><li>a</li><li><br/></li></ul>"


class TestBulletList:
    def test_paragraphs_become_one_list(self):
        doc = commands.toggle_bullet_list(doc_of("<p>one</p><p>two</p>"), Selection(0, 5))
        assert doc.to_html() == "<ul><li>one</li><li>two</li></ul>"

    def test_toggle_back_to_paragraphs(self):
        doc = commands.toggle_bullet_list(
            doc_of("<ul><li>one</li><li>two</li></ul>"), Selection(0, 5)
        )
        assert doc.to_html() == "<p>one</p><p>two</p>"

    def test_empty_document_gets_empty_item(self):
        doc = commands.toggle_bullet_list(Document(), Selection(0))
        assert doc.to_html() == "<ul><li><br/></li></ul>"

    def test_joins_list_above(self):
        doc = commands.toggle_bullet_list(doc_of("<ul><li>a</li></ul><p>b</p>"), Selection(2))
        assert doc.to_html() == "<ul><li>a</li><li>b</li></ul>"

    def test_ordered_items_become_bullets(self):
        doc = commands.toggle_bullet_list(doc_of("<ol><li>a</li></ol>"), Selection(0))
        assert doc.to_html() == "<ul><li>a</li></ul>"


class TestInsertFragment:
    def test_block_fragment_after_text(self):
        doc, pos = commands.insert_fragment(
            doc_of("<p>Intro</p>"), 5, doc_of("<ul><li>x</li><li>y</li></ul>")
        )
        assert doc.to_html() == "<p>Intro</p><ul><li>x</li><li>y</li></ul>"
        assert pos == doc.length

    def test_inline_fragment_flows_into_block(self):
        doc, pos = commands.insert_fragment(doc_of("ab"), 1, doc_of("X"))
        assert doc.to_html() == "aXb"
        assert pos == 2

    def test_separate_lists_stay_separate(self):
        fragment = doc_of("<ul><li>a</li></ul><p>mid</p><ul><li>b</li></ul>")
        doc, _ = commands.insert_fragment(Document(), 0, fragment)
        assert doc.to_html() == "<ul><li>a</li></ul><p>mid</p><ul><li>b</li></ul>"

    def test_inserted_list_does_not_merge_with_existing(self):
        doc, _ = commands.insert_fragment(
            doc_of("<ul><li>old</li></ul>"), 3, doc_of("<ul><li>new</li></ul>")
        )
        assert doc.to_html() == "<ul><li>old</li></ul><ul><li>new</li></ul>"


class TestFormatState:
    def test_caret_inside_bold(self):
        state = commands.format_state(doc_of("<b>bold</b> plain"), Selection(2))
        assert state.bold is True
        assert state.italic is False

    def test_range_requires_every_character(self):
        doc = doc_of("<b>bold</b> plain")
        assert commands.format_state(doc, Selection(0, 4)).bold is True
        assert commands.format_state(doc, Selection(0, 6)).bold is False

    def test_link_and_list(self):
        doc = doc_of('<ul><li><a href="https://a.com">x</a></li></ul>')
        state = commands.format_state(doc, Selection(0, 1))
        assert state.link is True
        assert state.list is True

    def test_pending_marks_reported(self):
        state = commands.format_state(doc_of("abc"), Selection(3), {"italic": True})
        assert state.italic is True
