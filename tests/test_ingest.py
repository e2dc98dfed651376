"""Tests for suggestion ingestion."""

from __future__ import annotations

import pytest

from resume_builder.richtext.ingest import append_skills, suggestion_to_markup


class TestSuggestionToMarkup:
    def test_all_bulleted_lines_share_one_list(self):
        assert suggestion_to_markup("• A\n• B") == "<ul><li>A</li><li>B</li></ul>"

    def test_mixed_lines_keep_order(self):
        result = suggestion_to_markup("Led team\n• A\nDone")
        assert result == "<p>Led team</p><ul><li>A</li></ul><p>Done</p>"

    def test_consecutive_bullets_in_mixed_text_get_own_lists(self):
        result = suggestion_to_markup("Intro\n• A\n• B")
        assert result == "<p>Intro</p><ul><li>A</li></ul><ul><li>B</li></ul>"

    def test_plain_lines_become_paragraphs(self):
        assert suggestion_to_markup("a\n\nb") == "<p>a</p><p>b</p>"

    def test_single_line_is_inline(self):
        assert suggestion_to_markup("Hello & bye") == "Hello &amp; bye"

    def test_text_is_escaped_inside_items(self):
        assert suggestion_to_markup("• <b>x</b>\n• y") == (
            "<ul><li>&lt;b&gt;x&lt;/b&gt;</li><li>y</li></ul>"
        )

    @pytest.mark.parametrize("text", ["", "   ", "\n\n"])
    def test_blank(self, text):
        assert suggestion_to_markup(text) == ""


class TestAppendSkills:
    def test_empty_existing(self):
        assert append_skills("", "Python") == "Python"

    def test_appends_with_comma(self):
        assert append_skills("Python", "SQL") == "Python, SQL"

    def test_list_suggestion_joined(self):
        assert append_skills("Python", ["SQL", "Git"]) == "Python, SQL, Git"

    def test_blank_suggestion_keeps_existing(self):
        assert append_skills("Python", "  ") == "Python"
