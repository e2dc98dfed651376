"""Canned writing suggestions keyed by job title."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel

from resume_builder.models.editor import SuggestionKind

logger = logging.getLogger(__name__)

SUGGESTIONS_PATH = Path(__file__).parent.parent / "data" / "suggestions.yaml"

DEFAULT_JOB_TITLE = "Software Engineer"


class SuggestionError(ValueError):
    """Raised for a suggestion kind the source does not serve."""


class SuggestionTable(BaseModel):
    summary: dict[str, list[str]]
    description: dict[str, list[str]]
    skills: dict[str, list[list[str]]]


@lru_cache(maxsize=None)
def load_suggestion_table(path: Path = SUGGESTIONS_PATH) -> SuggestionTable:
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return SuggestionTable(**data)


class SuggestionClient:
    """Serves suggestions from the static table; no model is called."""

    def __init__(
        self,
        table: SuggestionTable | None = None,
        default_job_title: str = DEFAULT_JOB_TITLE,
    ):
        self.table = table or load_suggestion_table()
        if default_job_title not in self.job_titles:
            logger.warning(
                "Default job title %r has no suggestions, using %r",
                default_job_title, DEFAULT_JOB_TITLE,
            )
            default_job_title = DEFAULT_JOB_TITLE
        self.default_job_title = default_job_title

    @property
    def job_titles(self) -> list[str]:
        return list(self.table.summary)

    def resolve_job_title(self, job_title: str | None) -> str:
        if job_title in self.job_titles:
            return job_title
        logger.debug("No suggestions for %r, falling back to %s", job_title, self.default_job_title)
        return self.default_job_title

    def fetch(self, kind: SuggestionKind | str, job_title: str | None = None) -> list[str]:
        """Return the suggestions for kind; skills sets come back comma-joined."""
        title = self.resolve_job_title(job_title)
        if kind == "summary":
            return list(self.table.summary[title])
        if kind == "description":
            return list(self.table.description[title])
        if kind == "skills":
            return [", ".join(skills) for skills in self.table.skills[title]]
        raise SuggestionError(f"Invalid suggestion type: {kind!r}")
