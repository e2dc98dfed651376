"""Application configuration loaded from config.yaml."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from resume_builder.models.editor import EditorOptions

AVAILABLE_THEMES = ("professional", "modern", "minimalist")

CONFIG_ENV_VAR = "RESUME_BUILDER_CONFIG"


@dataclass(frozen=True)
class EditorConfig:
    placeholder: str = ""
    character_limit: int = 600
    show_character_count: bool = False
    show_formatting: bool = True

    def __post_init__(self) -> None:
        if not 1 <= self.character_limit <= 10_000:
            raise ValueError(
                f"character_limit must be between 1 and 10000, got {self.character_limit}"
            )

    def to_options(self) -> EditorOptions:
        """Surface options for fields created from this config."""
        return EditorOptions(
            placeholder=self.placeholder,
            character_limit=self.character_limit,
            show_character_count=self.show_character_count,
            show_formatting=self.show_formatting,
        )


@dataclass(frozen=True)
class ExportConfig:
    theme: str = "professional"
    font_name: str = "Calibri"
    font_size: int = 10
    output_dir: str = "./output"

    def __post_init__(self) -> None:
        if self.theme not in AVAILABLE_THEMES:
            raise ValueError(
                f"theme must be one of {', '.join(AVAILABLE_THEMES)}, got {self.theme!r}"
            )
        if not 6 <= self.font_size <= 24:
            raise ValueError(f"font_size must be between 6 and 24, got {self.font_size}")

    @property
    def resolved_output_dir(self) -> Path:
        return Path(self.output_dir).expanduser()


@dataclass(frozen=True)
class SuggestionConfig:
    default_job_title: str = "Software Engineer"


@dataclass(frozen=True)
class AppConfig:
    editor: EditorConfig = field(default_factory=EditorConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    suggestions: SuggestionConfig = field(default_factory=SuggestionConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        candidates = [Path(env_path)] if env_path else []
        candidates.append(Path.cwd() / "config.yaml")
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}

    return AppConfig(
        editor=EditorConfig(**raw.get("editor", {})),
        export=ExportConfig(**raw.get("export", {})),
        suggestions=SuggestionConfig(**raw.get("suggestions", {})),
    )
