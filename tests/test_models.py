"""Tests for the pydantic models."""

from __future__ import annotations

import pytest
from pydantic import TypeAdapter, ValidationError

from resume_builder.models import (
    EditorOptions,
    ExportBlock,
    FormatState,
    Heading,
    ListItem,
    PersonalInfo,
    ResumeData,
    default_resume,
)


class TestResumeModels:
    def test_camel_case_aliases(self):
        resume = ResumeData.model_validate({
            "personalInfo": {"firstName": "Ada", "lastName": "Lovelace"},
            "sections": [],
        })
        assert resume.personal_info.full_name == "Ada Lovelace"
        dumped = resume.model_dump(by_alias=True)
        assert dumped["personalInfo"]["firstName"] == "Ada"

    def test_populate_by_name(self):
        info = PersonalInfo(first_name="Ada")
        assert info.full_name == "Ada"

    def test_section_lookup(self, seed_resume):
        skills = seed_resume.section("skills")
        assert skills is not None
        assert [item.id for item in skills.items] == ["skill-1", "skill-2", "skill-3"]
        assert seed_resume.section("projects") is None

    def test_seed_document(self, seed_resume):
        info = seed_resume.personal_info
        assert info.full_name == "John Doe"
        assert [link.title for link in info.links] == ["LinkedIn", "GitHub"]
        assert [s.id for s in seed_resume.sections] == ["experience", "education", "skills"]

    def test_item_requires_id(self):
        with pytest.raises(ValidationError):
            ResumeData.model_validate({"personalInfo": {}, "sections": [{"title": "X"}]})


class TestExportBlocks:
    def test_discriminator(self):
        adapter = TypeAdapter(list[ExportBlock])
        blocks = adapter.validate_python([
            {"kind": "heading", "text": "Skills", "level": 2},
            {"kind": "list_item", "text": "x", "indent_level": 1},
        ])
        assert blocks == [Heading(text="Skills", level=2), ListItem(text="x", indent_level=1)]

    def test_unknown_kind(self):
        with pytest.raises(ValidationError):
            TypeAdapter(ExportBlock).validate_python({"kind": "table", "text": "x"})


class TestEditorModels:
    def test_format_state_defaults(self):
        state = FormatState()
        assert not any(state.model_dump().values())

    def test_options_defaults(self):
        options = EditorOptions()
        assert options.character_limit == 600
        assert options.show_formatting is True
        assert options.ai_suggestion_type is None

    def test_invalid_suggestion_kind(self):
        with pytest.raises(ValidationError):
            EditorOptions(ai_suggestion_type="hobbies")
