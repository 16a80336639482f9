#!/usr/bin/env python3
"""
Scoring Models - Data structures for match scoring inputs and results.

Inputs (JobDetails, UserProfile and their parts) are immutable snapshots
built once per scoring call. ScoreBreakdown is the deterministic base score;
MatchAnalysis is the final, adjusted result handed to the data store.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, Optional, Tuple

from dateutil import parser as date_parser

SKILLS_MAX = 40
EXPERIENCE_MAX = 30
EDUCATION_MAX = 15
OTHER_MAX = 15
SCORE_MAX = 100


def parse_date(value: Any) -> Optional[date]:
    """Accept date/datetime objects or loosely formatted date strings.

    Raises:
        ValueError: the value is not recognisable as a date
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date_parser.parse(str(value)).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Unrecognised date: {value!r}") from e


def _str_tuple(values: Optional[Iterable[Any]]) -> Tuple[str, ...]:
    if not values:
        return ()
    return tuple(str(v).strip() for v in values if v is not None and str(v).strip())


def _opt_number(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


@dataclass(frozen=True)
class SalaryRange:
    min: Optional[float] = None
    max: Optional[float] = None
    currency: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["SalaryRange"]:
        if not data:
            return None
        return cls(
            min=_opt_number(data.get("min")),
            max=_opt_number(data.get("max")),
            currency=data.get("currency") or None,
        )


@dataclass(frozen=True)
class JobDetails:
    description: str
    location: Optional[str] = None
    job_type: Optional[str] = None
    salary_range: Optional[SalaryRange] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JobDetails":
        return cls(
            description=data.get("description") or "",
            location=data.get("location") or None,
            job_type=data.get("job_type") or None,
            salary_range=SalaryRange.from_dict(data.get("salary_range")),
        )


@dataclass(frozen=True)
class ExperienceEntry:
    company: str
    position: str
    start_date: date
    end_date: Optional[date] = None
    is_current: bool = False
    skills_used: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ExperienceEntry":
        start_date = parse_date(data.get("start_date"))
        if start_date is None:
            raise ValueError(
                f"Experience entry '{data.get('position') or '?'}' at "
                f"'{data.get('company') or '?'}' is missing start_date"
            )
        return cls(
            company=data.get("company") or "",
            position=data.get("position") or "",
            start_date=start_date,
            end_date=parse_date(data.get("end_date")),
            is_current=bool(data.get("is_current", False)),
            skills_used=_str_tuple(data.get("skills_used")),
        )


@dataclass(frozen=True)
class EducationEntry:
    institution: str
    degree: str
    field_of_study: Optional[str] = None
    end_date: Optional[date] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EducationEntry":
        return cls(
            institution=data.get("institution") or "",
            degree=data.get("degree") or "",
            field_of_study=data.get("field_of_study") or None,
            end_date=parse_date(data.get("end_date")),
        )


@dataclass(frozen=True)
class UserProfile:
    skills: Tuple[str, ...] = ()
    experience: Tuple[ExperienceEntry, ...] = ()
    education: Tuple[EducationEntry, ...] = ()
    preferred_locations: Tuple[str, ...] = ()
    preferred_job_types: Tuple[str, ...] = ()
    salary_expectation: Optional[SalaryRange] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserProfile":
        return cls(
            skills=_str_tuple(data.get("skills")),
            experience=tuple(ExperienceEntry.from_dict(e) for e in data.get("experience") or []),
            education=tuple(EducationEntry.from_dict(e) for e in data.get("education") or []),
            preferred_locations=_str_tuple(data.get("preferred_locations")),
            preferred_job_types=_str_tuple(data.get("preferred_job_types")),
            salary_expectation=SalaryRange.from_dict(data.get("salary_expectation")),
        )


@dataclass(frozen=True)
class ScoreBreakdown:
    """Deterministic 4-factor base score plus the facts it was derived from."""
    skills_score: int
    experience_score: int
    education_score: int
    other_score: int
    total: int

    matching_skills: Tuple[str, ...] = ()
    missing_skills: Tuple[str, ...] = ()
    required_years: int = 0
    total_years: float = 0.0
    relevant_years: float = 0.0
    required_degree: str = "none"
    user_highest_degree: str = "none"

    def __post_init__(self):
        bounds = (
            ("skills_score", self.skills_score, SKILLS_MAX),
            ("experience_score", self.experience_score, EXPERIENCE_MAX),
            ("education_score", self.education_score, EDUCATION_MAX),
            ("other_score", self.other_score, OTHER_MAX),
            ("total", self.total, SCORE_MAX),
        )
        for name, value, upper in bounds:
            if not 0 <= value <= upper:
                raise ValueError(f"{name}={value} outside [0, {upper}]")
        components = self.skills_score + self.experience_score + self.education_score + self.other_score
        if self.total != components:
            raise ValueError(f"total={self.total} does not equal component sum {components}")

    def components(self) -> Dict[str, int]:
        return {
            "skills_score": self.skills_score,
            "experience_score": self.experience_score,
            "education_score": self.education_score,
            "other_score": self.other_score,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.components(),
            "total": self.total,
            "matching_skills": list(self.matching_skills),
            "missing_skills": list(self.missing_skills),
            "required_years": self.required_years,
            "total_years": round(self.total_years, 2),
            "relevant_years": round(self.relevant_years, 2),
            "required_degree": self.required_degree,
            "user_highest_degree": self.user_highest_degree,
        }


@dataclass(frozen=True)
class MatchAnalysis:
    """Final analysis of one application. Re-analysis creates a new instance."""
    base_score: int
    adjusted_score: int
    adjustment: int
    reasoning: str
    breakdown: ScoreBreakdown
    matching_skills: Tuple[str, ...] = ()
    missing_skills: Tuple[str, ...] = ()
    strengths: Tuple[str, ...] = ()
    concerns: Tuple[str, ...] = ()
    recommendations: Tuple[str, ...] = ()
    analyzed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable document stored alongside the application."""
        return {
            "base_score": self.base_score,
            "adjusted_score": self.adjusted_score,
            "adjustment": self.adjustment,
            "reasoning": self.reasoning,
            "matching_skills": list(self.matching_skills),
            "missing_skills": list(self.missing_skills),
            "strengths": list(self.strengths),
            "concerns": list(self.concerns),
            "recommendations": list(self.recommendations),
            "breakdown": self.breakdown.components(),
            "analyzed_at": self.analyzed_at.isoformat(),
        }
