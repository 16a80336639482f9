#!/usr/bin/env python3
"""
Other-Fit Scoring - Location, job type and salary alignment (0-15).

Each factor contributes up to 5 points. When either side of a comparison is
missing the factor contributes a neutral 3 points instead of penalizing.
"""

from typing import Optional, Sequence, Tuple

from core.scorer.models import OTHER_MAX, JobDetails, SalaryRange, UserProfile

MATCH_POINTS = 5
NEUTRAL_POINTS = 3
NEAR_SALARY_POINTS = 3
LOW_SALARY_POINTS = 1
NEAR_SALARY_RATIO = 0.8


def location_points(job_location: Optional[str], preferred_locations: Sequence[str]) -> int:
    if not job_location or not job_location.strip():
        return NEUTRAL_POINTS
    location = job_location.lower()
    if "remote" in location:
        return MATCH_POINTS
    preferences = [p.lower() for p in preferred_locations if p.strip()]
    if not preferences:
        return NEUTRAL_POINTS
    return MATCH_POINTS if any(p in location for p in preferences) else 0


def job_type_points(job_type: Optional[str], preferred_job_types: Sequence[str]) -> int:
    if not job_type or not job_type.strip():
        return NEUTRAL_POINTS
    preferences = {t.strip().lower() for t in preferred_job_types if t.strip()}
    if not preferences:
        return NEUTRAL_POINTS
    return MATCH_POINTS if job_type.strip().lower() in preferences else 0


def _currencies_compatible(job: SalaryRange, expected: SalaryRange) -> bool:
    if not job.currency or not expected.currency:
        return True
    return job.currency.strip().upper() == expected.currency.strip().upper()


def salary_points(
    salary_range: Optional[SalaryRange],
    salary_expectation: Optional[SalaryRange]
) -> int:
    if (
        salary_range is None or salary_expectation is None
        or not salary_range.min or not salary_expectation.min
        or not _currencies_compatible(salary_range, salary_expectation)
    ):
        return NEUTRAL_POINTS
    if salary_range.min >= salary_expectation.min:
        return MATCH_POINTS
    if salary_range.min >= salary_expectation.min * NEAR_SALARY_RATIO:
        return NEAR_SALARY_POINTS
    return LOW_SALARY_POINTS


def calculate_other_score(job: JobDetails, profile: UserProfile) -> Tuple[int, dict]:
    """
    Score location, job type and salary alignment.

    Returns: (score, per-factor points)
    """
    details = {
        "location": location_points(job.location, profile.preferred_locations),
        "job_type": job_type_points(job.job_type, profile.preferred_job_types),
        "salary": salary_points(job.salary_range, profile.salary_expectation),
    }
    return min(OTHER_MAX, sum(details.values())), details
