"""Tests for config value validation."""

import pytest

from resume_builder.config import EditorConfig, ExportConfig, load_config


class TestEditorConfigValidation:
    @pytest.mark.parametrize("limit", [0, -5, 10_001])
    def test_character_limit_out_of_range(self, limit):
        with pytest.raises(ValueError, match="character_limit"):
            EditorConfig(character_limit=limit)

    @pytest.mark.parametrize("limit", [1, 600, 10_000])
    def test_character_limit_in_range(self, limit):
        assert EditorConfig(character_limit=limit).character_limit == limit


class TestExportConfigValidation:
    def test_unknown_theme(self):
        with pytest.raises(ValueError, match="theme must be one of"):
            ExportConfig(theme="neon")

    @pytest.mark.parametrize("size", [5, 25])
    def test_font_size_out_of_range(self, size):
        with pytest.raises(ValueError, match="font_size"):
            ExportConfig(font_size=size)

    def test_invalid_value_in_file(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text("export:\n  theme: neon\n")
        with pytest.raises(ValueError):
            load_config(yaml_path)

    def test_unknown_key_in_file(self, tmp_path):
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text("editor:\n  colour: red\n")
        with pytest.raises(TypeError):
            load_config(yaml_path)
