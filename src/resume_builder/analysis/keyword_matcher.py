"""Compare a job description's frequent terms against the resume text."""

from __future__ import annotations

import logging
import math
import re
from collections import Counter

from resume_builder.export.extractor import extract_plain_text
from resume_builder.models.analysis import KeywordMatch
from resume_builder.models.resume import ResumeData

logger = logging.getLogger(__name__)

MAX_KEYWORDS = 20
MIN_KEYWORD_LENGTH = 4

STOP_WORDS = frozenset({
    "a", "an", "the", "and", "or", "but", "for", "nor", "on", "at", "to", "from", "by",
    "with", "in", "out", "over", "under", "again", "further", "then", "once", "here", "there",
    "when", "where", "why", "how", "all", "any", "both", "each", "few", "more", "most", "other",
    "some", "such", "no", "not", "only", "own", "same", "so", "than", "too", "very",
    "can", "will", "just", "should", "now", "if", "of", "as", "is", "are", "was", "were", "be",
    "been", "being", "have", "has", "had", "do", "does", "did", "doing", "would", "could",
    "must", "shall", "may", "might", "that", "this", "these", "those", "we", "you", "they", "i",
    "he", "she", "it", "who", "whom", "whose", "which", "what", "whatever", "whoever", "whomever",
    # Words every posting uses
    "job", "description", "company", "position", "role", "candidate", "applicant", "application",
    "resume", "apply", "please", "thank", "opportunity", "about", "us", "our",
})

_PUNCT_RE = re.compile(r"[^\w\s]")


def top_keywords(job_description: str, limit: int = MAX_KEYWORDS) -> list[str]:
    """Most frequent non-stop-words of the posting, ties kept in first-seen order."""
    words = _PUNCT_RE.sub(" ", job_description.lower()).split()
    counts = Counter(
        w for w in words if len(w) >= MIN_KEYWORD_LENGTH and w not in STOP_WORDS
    )
    return [word for word, _ in counts.most_common(limit)]


def match_keywords(resume: ResumeData, job_description: str) -> KeywordMatch:
    keywords = top_keywords(job_description)
    corpus = extract_plain_text(resume).lower()

    matched = [k for k in keywords if k in corpus]
    missing = [k for k in keywords if k not in corpus]
    score = math.floor(len(matched) * 100 / len(keywords) + 0.5) if keywords else 0

    logger.debug("Matched %d of %d keywords", len(matched), len(keywords))
    return KeywordMatch(matched_keywords=matched, missing_keywords=missing, score=score)
