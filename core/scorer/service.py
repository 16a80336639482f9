#!/usr/bin/env python3
"""
Base Scorer - Deterministic 4-factor match score (0-100).

Combines:
- Skills (0-40): vocabulary skills in the description vs. user skills
- Experience (0-30): required vs. total and relevant years
- Education (0-15): required vs. highest held degree
- Other (0-15): location, job type and salary alignment

No external dependencies and no randomness: the same job, profile and
as_of date always produce the same ScoreBreakdown.
"""

from datetime import date
from typing import List, Optional, Sequence, Tuple
import logging

from core.scorer.models import SKILLS_MAX, JobDetails, ScoreBreakdown, UserProfile
from core.scorer import education, experience, other_fit, skills
from core.utils import round_half_up

logger = logging.getLogger(__name__)


def calculate_skills_score(
    required_skills: List[str],
    user_skills: Sequence[str]
) -> Tuple[int, List[str], List[str]]:
    """
    Score skill coverage on a 0-40 scale.

    An empty required set earns the full 40 points.

    Returns: (score, matching, missing)
    """
    if not required_skills:
        return SKILLS_MAX, [], []
    matching, missing = skills.match_skills(required_skills, user_skills)
    score = round_half_up(SKILLS_MAX * len(matching) / len(required_skills))
    return score, matching, missing


def compute_base_score(
    job: JobDetails,
    profile: UserProfile,
    as_of: Optional[date] = None
) -> ScoreBreakdown:
    """Calculate the deterministic base score for a job/profile pair.

    Args:
        job: Job posting details
        profile: User profile snapshot
        as_of: Date used as the end of open-ended experience entries.
            Defaults to today; pass it explicitly for reproducible results.

    Returns:
        ScoreBreakdown with component scores and the facts behind them
    """
    as_of = as_of or date.today()

    required_skills = skills.extract_required_skills(job.description)
    skills_score, matching, missing = calculate_skills_score(required_skills, profile.skills)

    required_years = experience.extract_required_years(job.description)
    total_years = experience.calculate_total_years(profile.experience, as_of)
    relevant_years = experience.calculate_relevant_years(profile.experience, required_skills, as_of)
    experience_score = experience.calculate_experience_score(required_years, total_years, relevant_years)

    required_degree = education.extract_required_degree(job.description)
    user_degree = education.highest_degree(profile.education)
    education_score = education.calculate_education_score(required_degree, user_degree)

    other_score, other_details = other_fit.calculate_other_score(job, profile)

    total = skills_score + experience_score + education_score + other_score

    logger.debug(
        f"Base score {total}: skills={skills_score} ({len(matching)}/{len(required_skills)}), "
        f"experience={experience_score} (req={required_years}, total={total_years:.1f}, "
        f"relevant={relevant_years:.1f}), education={education_score} "
        f"({user_degree} vs {required_degree}), other={other_score} {other_details}"
    )

    return ScoreBreakdown(
        skills_score=skills_score,
        experience_score=experience_score,
        education_score=education_score,
        other_score=other_score,
        total=total,
        matching_skills=tuple(matching),
        missing_skills=tuple(missing),
        required_years=required_years,
        total_years=round(total_years, 2),
        relevant_years=round(relevant_years, 2),
        required_degree=required_degree,
        user_highest_degree=user_degree,
    )
