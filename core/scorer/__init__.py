#!/usr/bin/env python3
"""
Scoring Module - Deterministic base match scoring.

Public API:
- compute_base_score: 4-factor base score for a job/profile pair
- normalize: canonical skill token used for all skill comparisons

The module is split into focused, single-responsibility files:

- models.py: Input snapshots and result data structures
- skills.py: Skill normalization and required-skill extraction
- experience.py: Required/total/relevant years and experience score
- education.py: Degree levels and education score
- other_fit.py: Location, job type and salary alignment
- service.py: compute_base_score orchestration
"""

from core.scorer.models import (
    EducationEntry,
    ExperienceEntry,
    JobDetails,
    MatchAnalysis,
    SalaryRange,
    ScoreBreakdown,
    UserProfile,
)
from core.scorer.service import compute_base_score
from core.scorer.skills import normalize

__all__ = [
    'compute_base_score',
    'normalize',
    'EducationEntry',
    'ExperienceEntry',
    'JobDetails',
    'MatchAnalysis',
    'SalaryRange',
    'ScoreBreakdown',
    'UserProfile',
]
