#!/usr/bin/env python3
"""
Education Scoring - Required vs. highest held degree (0-15).
"""

from typing import Optional, Sequence, Tuple
import re

from core.scorer.models import EDUCATION_MAX, EducationEntry

DEGREE_LEVELS = {
    "none": 0,
    "bachelors": 1,
    "masters": 2,
    "phd": 3,
}

# Checked from highest to lowest level; first hit wins.
_DEGREE_PATTERNS: Tuple[Tuple[str, re.Pattern], ...] = (
    ("phd", re.compile(r"\bph\.?\s?d\b|\bdoctorate\b|\bdoctoral\b", re.IGNORECASE)),
    ("masters", re.compile(r"\bmaster(?:'s|s)?\s+(?:degree|of)\b|\bmaster's\b|\bmasters\b|\bm\.?sc\b|\bmba\b", re.IGNORECASE)),
    ("bachelors", re.compile(r"\bbachelor(?:'s|s)?\b|\bb\.?sc\b|\bb\.?a\.?\b|\bb\.?s\.?\b|\bundergraduate degree\b", re.IGNORECASE)),
)

ONE_LEVEL_BELOW_SCORE = 10
FURTHER_BELOW_SCORE = 5


def classify_degree(text: Optional[str]) -> str:
    """Map free text to one of: none, bachelors, masters, phd."""
    if not text:
        return "none"
    for level, pattern in _DEGREE_PATTERNS:
        if pattern.search(text):
            return level
    return "none"


def extract_required_degree(description: Optional[str]) -> str:
    """Highest degree level mentioned in a job description."""
    return classify_degree(description)


def highest_degree(education: Sequence[EducationEntry]) -> str:
    best = "none"
    for entry in education:
        level = classify_degree(entry.degree)
        if DEGREE_LEVELS[level] > DEGREE_LEVELS[best]:
            best = level
    return best


def calculate_education_score(required_degree: str, user_degree: str) -> int:
    required = DEGREE_LEVELS.get(required_degree, 0)
    held = DEGREE_LEVELS.get(user_degree, 0)

    if required == 0 or held >= required:
        return EDUCATION_MAX
    if held == required - 1:
        return ONE_LEVEL_BELOW_SCORE
    return FURTHER_BELOW_SCORE
