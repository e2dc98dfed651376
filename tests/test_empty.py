"""Tests for empty-content detection."""

from __future__ import annotations

import pytest

from resume_builder.richtext.empty import is_empty


class TestIsEmpty:
    @pytest.mark.parametrize(
        "markup",
        ["", "<p></p>", "<br>", "<br/>", "<p> </p>", "&nbsp;", "<p>&nbsp;</p>", "<p><br></p>",
         "<ul><li><br></li></ul>", "\xa0", "<div>  </div>"],
    )
    def test_empty(self, markup):
        assert is_empty(markup) is True

    @pytest.mark.parametrize(
        "markup", ["x", "<p>a</p>", "<ul><li>item</li></ul>", "<b> b </b>", "&amp;"]
    )
    def test_not_empty(self, markup):
        assert is_empty(markup) is False
