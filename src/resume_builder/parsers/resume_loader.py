"""Load and save resume documents as YAML or JSON."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import yaml

from resume_builder.models.resume import ResumeData
from resume_builder.richtext.canonical import canonicalize

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = (".yaml", ".yml")


def load_resume(file_path: str | Path) -> ResumeData:
    """Read a resume file; rich-text fields are brought into canonical form."""
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Resume not found: {path}")

    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in _YAML_SUFFIXES:
        data = yaml.safe_load(text) or {}
    elif path.suffix.lower() == ".json":
        data = json.loads(text)
    else:
        raise ValueError(f"Unsupported file format: {path.suffix}")

    return canonicalize_resume(ResumeData.model_validate(data))


def canonicalize_resume(resume: ResumeData) -> ResumeData:
    """Return a copy whose summary and descriptions are canonical markup."""
    resume = resume.model_copy(deep=True)
    info = resume.personal_info
    info.summary = canonicalize(info.summary)
    for section in resume.sections:
        for item in section.items:
            item.description = canonicalize(item.description)
    return resume


def save_resume(resume: ResumeData, file_path: str | Path) -> Path:
    """Write the resume with its camelCase field names."""
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = resume.model_dump(by_alias=True)
    if path.suffix.lower() in _YAML_SUFFIXES:
        path.write_text(
            yaml.safe_dump(data, allow_unicode=True, sort_keys=False), encoding="utf-8"
        )
    elif path.suffix.lower() == ".json":
        path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    else:
        raise ValueError(f"Unsupported file format: {path.suffix}")
    logger.debug("Saved resume to %s", path)
    return path
