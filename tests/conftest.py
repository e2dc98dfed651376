"""Shared test fixtures."""

from __future__ import annotations

import pytest

from resume_builder.models.resume import (
    PersonalInfo,
    ResumeData,
    ResumeItem,
    ResumeSection,
    default_resume,
)
from resume_builder.richtext.surface import EditableSurface, FormatCommandController


@pytest.fixture
def sample_resume() -> ResumeData:
    return ResumeData(
        personal_info=PersonalInfo(
            first_name="Jane",
            last_name="Smith",
            title="Data Scientist",
            email="jane@example.com",
            phone="555-0100",
            location="Austin, TX",
            summary="<p>Analyst with <b>7 years</b> of experience in Python &amp; SQL.</p>",
        ),
        sections=[
            ResumeSection(
                id="experience",
                title="Work Experience",
                items=[
                    ResumeItem(
                        id="exp-1",
                        title="Senior Data Scientist",
                        subtitle="Acme Corp",
                        date="2021 - Present",
                        description=(
                            "<ul><li>Built forecasting models in <i>Python</i></li>"
                            "<li>Led a team of four analysts</li></ul>"
                        ),
                    ),
                ],
            ),
            ResumeSection(
                id="skills",
                title="Skills",
                items=[ResumeItem(id="skill-1", title="Languages", subtitle="Python, SQL, R")],
            ),
        ],
    )


@pytest.fixture
def seed_resume() -> ResumeData:
    return default_resume()


@pytest.fixture
def surface() -> EditableSurface:
    return EditableSurface()


@pytest.fixture
def prompt_answers():
    """A scripted prompt: answers are popped in order, asked questions recorded."""

    class ScriptedPrompt:
        def __init__(self):
            self.answers: list[str | None] = []
            self.asked: list[tuple[str, str]] = []

        def __call__(self, message: str, default: str) -> str | None:
            self.asked.append((message, default))
            return self.answers.pop(0) if self.answers else None

    return ScriptedPrompt()


@pytest.fixture
def controller(surface, prompt_answers) -> FormatCommandController:
    return FormatCommandController(surface, prompt=prompt_answers)
