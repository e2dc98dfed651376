"""Tests for the typer CLI."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from resume_builder.cli import app
from resume_builder.config import CONFIG_ENV_VAR

runner = CliRunner()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def resume_file(workdir):
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0
    return workdir / "resume.yaml"


class TestInit:
    def test_writes_seed(self, resume_file):
        assert "firstName: John" in resume_file.read_text(encoding="utf-8")

    def test_refuses_overwrite(self, resume_file):
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_force(self, resume_file):
        result = runner.invoke(app, ["init", "--force"])
        assert result.exit_code == 0


class TestSanitize:
    def test_argument(self, workdir):
        result = runner.invoke(app, ["sanitize", "<script>x</script><b onclick='y()'>hi</b>"])
        assert result.exit_code == 0
        assert result.output.strip() == "<b>hi</b>"

    def test_file(self, workdir):
        (workdir / "field.html").write_text("<p><br></p>", encoding="utf-8")
        result = runner.invoke(app, ["sanitize", "--file", "field.html"])
        assert result.exit_code == 0
        assert result.output.strip() == ""

    def test_over_character_limit_reported(self, workdir):
        (workdir / "config.yaml").write_text("editor:\n  character_limit: 5\n")
        result = runner.invoke(app, ["sanitize", "<p>too long</p>"])
        assert result.exit_code == 0
        assert "8/5 characters (over the limit)" in result.output

    def test_character_count_shown_when_configured(self, workdir):
        (workdir / "config.yaml").write_text("editor:\n  show_character_count: true\n")
        result = runner.invoke(app, ["sanitize", "<b>hi</b>"])
        assert "2/600 characters" in result.output

    def test_nothing_given(self, workdir):
        assert runner.invoke(app, ["sanitize"]).exit_code == 1


class TestBlocks:
    def test_resume(self, resume_file):
        result = runner.invoke(app, ["blocks", str(resume_file)])
        assert result.exit_code == 0
        assert "Export blocks" in result.output
        assert "heading" in result.output

    def test_markup_file(self, workdir):
        (workdir / "field.html").write_text("<ul><li>One</li></ul>", encoding="utf-8")
        result = runner.invoke(app, ["blocks", "field.html", "--markup"])
        assert result.exit_code == 0
        assert "One" in result.output

    def test_missing_file(self, workdir):
        result = runner.invoke(app, ["blocks", "nope.yaml"])
        assert result.exit_code == 1
        assert "not found" in result.output


class TestSuggest:
    def test_skills(self, workdir):
        result = runner.invoke(app, ["suggest", "skills", "-j", "Data Scientist"])
        assert result.exit_code == 0
        assert "Data Scientist #1" in result.output
        assert "Python, R, SQL" in result.output

    def test_invalid_kind(self, workdir):
        result = runner.invoke(app, ["suggest", "hobbies"])
        assert result.exit_code == 1
        assert "Invalid suggestion type" in result.output


class TestExport:
    def test_docx(self, resume_file, workdir):
        result = runner.invoke(app, ["export", str(resume_file), "-o", "out"])
        assert result.exit_code == 0
        assert (workdir / "out" / "John_Doe_Resume.docx").exists()

    def test_html(self, resume_file, workdir):
        result = runner.invoke(
            app, ["export", str(resume_file), "-f", "html", "-o", "out", "-t", "modern"]
        )
        assert result.exit_code == 0
        html = (workdir / "out" / "John_Doe_Resume.html").read_text(encoding="utf-8")
        assert 'class="theme-modern"' in html

    def test_unknown_format(self, resume_file):
        result = runner.invoke(app, ["export", str(resume_file), "-f", "rtf"])
        assert result.exit_code == 1

    def test_default_output_dir_from_config(self, resume_file, workdir):
        (workdir / "config.yaml").write_text("export:\n  output_dir: ./exports\n")
        result = runner.invoke(app, ["export", str(resume_file)])
        assert result.exit_code == 0
        assert (workdir / "exports" / "John_Doe_Resume.docx").exists()


class TestPreview:
    def test_writes_html_without_browser(self, resume_file):
        with patch("resume_builder.cli.webbrowser.open") as mock_open:
            result = runner.invoke(app, ["preview", str(resume_file), "--no-open"])
        assert result.exit_code == 0
        assert resume_file.with_suffix(".html").exists()
        mock_open.assert_not_called()

    def test_opens_browser(self, resume_file):
        with patch("resume_builder.cli.webbrowser.open") as mock_open:
            result = runner.invoke(app, ["preview", str(resume_file), "--color", "teal"])
        assert result.exit_code == 0
        mock_open.assert_called_once()
        assert "#14B8A6" in resume_file.with_suffix(".html").read_text(encoding="utf-8")


class TestKeywords:
    def test_match_rate(self, resume_file, workdir):
        (workdir / "jd.txt").write_text("Python Kubernetes microservices", encoding="utf-8")
        result = runner.invoke(app, ["keywords", str(resume_file), "--jd", "jd.txt"])
        assert result.exit_code == 0
        assert "Match rate: 67%" in result.output

    def test_missing_jd(self, resume_file):
        result = runner.invoke(app, ["keywords", str(resume_file), "--jd", "nope.txt"])
        assert result.exit_code == 1
