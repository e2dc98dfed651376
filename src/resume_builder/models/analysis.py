"""Pydantic models for keyword analysis output."""

from __future__ import annotations

from pydantic import BaseModel


class KeywordMatch(BaseModel):
    matched_keywords: list[str]
    missing_keywords: list[str]
    score: int  # 0-100, share of top keywords found in the resume
