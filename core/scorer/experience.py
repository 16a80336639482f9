#!/usr/bin/env python3
"""
Experience Scoring - Required vs. total and relevant years of experience (0-30).

Required years come from the job description; total and relevant years
come from the user's experience entries. An entry is relevant when any of
its skills_used overlaps the job's required skills.
"""

from datetime import date
from typing import Iterable, Optional, Sequence, Set
import logging
import re

from core.scorer.models import EXPERIENCE_MAX, ExperienceEntry
from core.scorer.skills import normalize_all
from core.utils import round_half_up

logger = logging.getLogger(__name__)

# Scale used when both total and relevant experience fall short.
SHORTFALL_SCALE = 25
PARTIAL_SENIORITY_SCORE = 20

_REQUIRED_YEARS_PATTERNS = (
    re.compile(r"(\d+)\+?\s*(?:years?|yrs?)\s*(?:of)?\s*(?:experience|exp)\b", re.IGNORECASE),
    re.compile(r"(\d+)\s*-\s*\d+\s*(?:years?|yrs?)\b", re.IGNORECASE),
    re.compile(r"minimum\s*(?:of)?\s*(\d+)\s*(?:years?|yrs?)\b", re.IGNORECASE),
)


def extract_required_years(description: Optional[str]) -> int:
    """
    Extract the minimum years of experience a job description asks for.

    "5+ years of experience" -> 5, "3-5 years" -> 3, "minimum of 4 years" -> 4.
    Returns 0 when nothing is mentioned.
    """
    if not description:
        return 0
    for pattern in _REQUIRED_YEARS_PATTERNS:
        match = pattern.search(description)
        if match:
            return int(match.group(1))
    return 0


def _months_between(start: date, end: date) -> int:
    months = (end.year - start.year) * 12 + (end.month - start.month)
    return max(0, months)


def _entry_months(entry: ExperienceEntry, as_of: date) -> int:
    end = entry.end_date or as_of
    return _months_between(entry.start_date, end)


def calculate_total_years(experience: Sequence[ExperienceEntry], as_of: date) -> float:
    """Sum of whole months across all entries, in years."""
    return sum(_entry_months(e, as_of) for e in experience) / 12


def calculate_relevant_years(
    experience: Sequence[ExperienceEntry],
    required_skills: Iterable[str],
    as_of: date
) -> float:
    """Years from entries whose skills_used overlaps the required skills."""
    required_keys: Set[str] = normalize_all(required_skills)
    if not required_keys:
        return 0.0
    months = 0
    for entry in experience:
        if normalize_all(entry.skills_used) & required_keys:
            months += _entry_months(entry, as_of)
    return months / 12


def calculate_experience_score(
    required_years: float,
    total_years: float,
    relevant_years: float
) -> int:
    """
    Score experience on a 0-30 scale.

    - nothing required: 30
    - relevant >= required: 30 (no bonus beyond the cap)
    - total >= required but relevant short: 20
    - otherwise round(25 * relevant / required), floored at 0
    """
    if required_years <= 0:
        return EXPERIENCE_MAX
    if relevant_years >= required_years:
        return EXPERIENCE_MAX
    if total_years >= required_years:
        return PARTIAL_SENIORITY_SCORE
    return max(0, round_half_up(SHORTFALL_SCALE * relevant_years / max(required_years, 1)))
